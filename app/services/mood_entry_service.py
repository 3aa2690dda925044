"""
Mood entry service: the save path, history and drafts.
"""
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.config import settings
from app.core.exceptions import (
    DraftNotFoundError,
    EntryNotFoundError,
    StorageWriteError,
    ValidationError,
)
from app.core.logging_config import log_error, log_info
from app.core.time_utils import parse_iso_timestamp, to_iso_timestamp, today_key, utc_now
from app.models.enums import MoodType
from app.models.mood_entry import MoodDraft, MoodEntry
from app.schemas.mood_entry import MoodDraftUpdate, MoodEntryCreate
from app.services.journal_store import JournalStore, SqlJournalStore


def _timestamp_sort_key(entry: MoodEntry) -> datetime:
    try:
        return parse_iso_timestamp(entry.timestamp)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)


class MoodEntryService:
    """Service class for mood entry operations."""

    def __init__(self, session: Session, store: Optional[JournalStore] = None):
        self.session = session
        self.store = store or SqlJournalStore(session)

    def _validate_content(self, note: Optional[str], images: List[str]) -> None:
        if note is not None and len(note) > settings.max_note_length:
            raise ValidationError(
                f"Note is too long ({len(note)} characters, max {settings.max_note_length})"
            )
        if len(images) > settings.max_images_per_entry:
            raise ValidationError(
                f"Too many images ({len(images)}, max {settings.max_images_per_entry} per day)"
            )

    def save_entry(self, payload: MoodEntryCreate) -> MoodEntry:
        """Create or replace the entry for a day and clear its draft."""
        self._validate_content(payload.note, payload.images)

        timestamp = payload.timestamp
        if timestamp:
            try:
                parse_iso_timestamp(timestamp)
            except ValueError as exc:
                raise ValidationError(f"Invalid timestamp: {timestamp}") from exc
        else:
            timestamp = to_iso_timestamp()

        entry = MoodEntry(
            date=payload.date or today_key(),
            mood=payload.mood.value,
            note=payload.note,
            images=list(payload.images),
            timestamp=timestamp,
        )
        saved = self.store.put(entry)
        self.clear_draft(entry.date)
        log_info("Saved mood entry", date=entry.date, mood=entry.mood, image_count=len(entry.images))
        return saved

    def get_entry(self, date: str) -> MoodEntry:
        entry = self.store.get(date)
        if entry is None:
            raise EntryNotFoundError(f"No entry for {date}")
        return entry

    def get_history(self, mood: Optional[MoodType] = None) -> List[MoodEntry]:
        """All entries, newest first by timestamp."""
        entries = self.store.list()
        if mood is not None:
            entries = [entry for entry in entries if entry.mood == mood.value]
        return sorted(entries, key=_timestamp_sort_key, reverse=True)

    def delete_entry(self, date: str) -> None:
        self.store.delete(date)
        log_info("Deleted mood entry", date=date)

    def get_mood_counts(self) -> Dict[str, int]:
        counts = Counter(entry.mood for entry in self.store.list())
        return dict(counts)

    # ------------------------------------------------------------------
    # Drafts
    # ------------------------------------------------------------------

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc)
            raise StorageWriteError(f"Failed to save draft: {exc}") from exc

    def save_draft(self, date: str, payload: MoodDraftUpdate) -> MoodDraft:
        self._validate_content(payload.note, payload.images)
        draft = self.session.get(MoodDraft, date)
        if draft is None:
            draft = MoodDraft(date=date)
        draft.mood = payload.mood.value if payload.mood else None
        draft.note = payload.note
        draft.images = list(payload.images)
        draft.updated_at = utc_now()
        self.session.add(draft)
        self._commit()
        self.session.refresh(draft)
        return draft

    def get_draft(self, date: str) -> MoodDraft:
        draft = self.session.get(MoodDraft, date)
        if draft is None:
            raise DraftNotFoundError(f"No draft for {date}")
        return draft

    def clear_draft(self, date: str) -> None:
        draft = self.session.get(MoodDraft, date)
        if draft is None:
            return
        self.session.delete(draft)
        self._commit()
