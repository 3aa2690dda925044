"""
Reconciliation of an imported entry set with the local journal.

Two-phase: ``prepare_import`` stages the imported entries and reports the
counts the user needs to choose a policy; ``commit_import`` applies the
chosen policy. The service never prompts on its own.
"""
from typing import List, Optional, Sequence, Union

from app.core.exceptions import ValidationError
from app.core.logging_config import log_info
from app.models.enums import ImportPolicy
from app.models.mood_entry import MoodEntry
from app.schemas.dto import DecodedBackup, ImportPreview, ImportResultSummary, MoodEntryDTO
from app.services.journal_store import JournalStore


class ReconciliationService:
    """Merge or overwrite the journal with an imported entry set."""

    def __init__(self, store: JournalStore):
        self.store = store
        self._staged: Optional[List[MoodEntryDTO]] = None
        self._images_restored = 0
        self._images_dropped = 0
        self._warnings: List[str] = []

    @property
    def has_pending_import(self) -> bool:
        return self._staged is not None

    def prepare_import(
        self, imported: Union[DecodedBackup, Sequence[MoodEntryDTO]]
    ) -> ImportPreview:
        """Stage an imported entry set and return counts for the confirmation prompt."""
        if isinstance(imported, DecodedBackup):
            entries = list(imported.entries)
            self._images_restored = imported.images_restored
            self._images_dropped = imported.images_dropped
            self._warnings = list(imported.warnings)
        else:
            entries = list(imported)
            self._images_restored = 0
            self._images_dropped = 0
            self._warnings = []
        self._staged = entries

        local_keys = {entry.date for entry in self.store.list()}
        imported_keys = {entry.date for entry in entries}
        return ImportPreview(
            local_count=len(local_keys),
            imported_count=len(entries),
            new_count=len(imported_keys - local_keys),
            conflict_count=len(imported_keys & local_keys),
        )

    def commit_import(self, policy: Union[ImportPolicy, str, None]) -> ImportResultSummary:
        """
        Apply the chosen policy to the staged entries.

        Raises:
            ValidationError: If no import is staged or the policy is missing/unknown
            StorageWriteError: If the store fails mid-way (the journal may be partially written)
        """
        if self._staged is None:
            raise ValidationError("No import prepared; call prepare_import first")
        resolved_policy = self._resolve_policy(policy)

        staged = self._staged
        self._staged = None
        if resolved_policy == ImportPolicy.OVERWRITE:
            summary = self._overwrite(staged)
        else:
            summary = self._merge(staged)

        summary.images_restored = self._images_restored
        summary.images_dropped = self._images_dropped
        summary.warnings = self._warnings
        summary.total_after = len(self.store.list())
        log_info(
            f"Import committed ({resolved_policy.value}): {summary.entries_written} written, "
            f"{summary.entries_skipped} skipped",
            policy=resolved_policy.value,
            entries_written=summary.entries_written,
            entries_skipped=summary.entries_skipped,
            total_after=summary.total_after,
        )
        return summary

    @staticmethod
    def _resolve_policy(policy: Union[ImportPolicy, str, None]) -> ImportPolicy:
        if policy is None:
            raise ValidationError("An explicit import policy (overwrite or merge) is required")
        if isinstance(policy, ImportPolicy):
            return policy
        try:
            return ImportPolicy(str(policy).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown import policy: {policy!r}") from exc

    @staticmethod
    def _to_model(entry: MoodEntryDTO) -> MoodEntry:
        return MoodEntry(
            date=entry.date,
            mood=entry.mood,
            note=entry.note,
            images=list(entry.images),
            timestamp=entry.timestamp,
        )

    def _overwrite(self, staged: List[MoodEntryDTO]) -> ImportResultSummary:
        # Build every row before the destructive clear
        rows = [self._to_model(entry) for entry in staged]
        local_count = len(self.store.list())

        self.store.clear()
        for row in rows:
            self.store.put(row)

        return ImportResultSummary(
            policy=ImportPolicy.OVERWRITE,
            local_count_before=local_count,
            entries_written=len(rows),
        )

    def _merge(self, staged: List[MoodEntryDTO]) -> ImportResultSummary:
        local_keys = {entry.date for entry in self.store.list()}
        written = 0
        skipped = 0
        # Local always wins on a date collision
        for entry in staged:
            if entry.date in local_keys:
                skipped += 1
                continue
            self.store.put(self._to_model(entry))
            written += 1

        return ImportResultSummary(
            policy=ImportPolicy.MERGE,
            local_count_before=len(local_keys),
            entries_written=written,
            entries_skipped=skipped,
        )
