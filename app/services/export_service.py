"""
Export service for creating mood journal backups.

Handles the business logic for serializing the journal into a flat JSON
document or a ZIP archive with the images extracted as files.
"""
import json
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.logging_config import log_info, log_warning
from app.core.time_utils import ensure_utc, to_iso_timestamp, utc_now
from app.models.enums import BackupFormat
from app.models.mood_entry import MoodEntry
from app.schemas.dto import BackupManifestDTO, MoodEntryDTO
from app.services.journal_store import JournalStore
from app.utils.import_export import MediaHandler, ZipHandler, validate_export_data
from app.utils.import_export.constants import ExportConfig

MEDIA_TYPES = {
    BackupFormat.JSON: "application/json",
    BackupFormat.ZIP: "application/zip",
}


@dataclass
class ExportResult:
    """A finished backup, ready to hand to a file-save collaborator."""
    filename: str
    content: bytes
    media_type: str
    entry_count: int
    image_count: int = 0


def app_slug(app_name: str) -> str:
    """``Mood Journal`` -> ``mood_journal``."""
    slug = re.sub(r"[^0-9a-z]+", "_", app_name.lower()).strip("_")
    return slug or "moodjournal"


def build_backup_filename(
    backup_format: BackupFormat,
    when: Optional[datetime] = None,
    app_name: Optional[str] = None,
) -> str:
    """``<app>_backup_<YYYY-MM-DD>.<ext>``"""
    day = ensure_utc(when or utc_now()).strftime("%Y-%m-%d")
    return f"{app_slug(app_name or settings.app_name)}_backup_{day}.{backup_format.value}"


class ExportService:
    """Service for creating backups."""

    def __init__(self, store: JournalStore):
        """
        Initialize export service.

        Args:
            store: Journal store to read entries from
        """
        self.store = store
        self.zip_handler = ZipHandler()
        self.media_handler = MediaHandler()

    def build_manifest(self, entries: Optional[Sequence[MoodEntry]] = None) -> BackupManifestDTO:
        """
        Build the backup manifest with entries verbatim (images left inline).

        Entries are ordered by timestamp so backups are stable across runs.
        """
        if entries is None:
            entries = self.store.list()
        entry_dtos = [
            MoodEntryDTO(
                date=entry.date,
                mood=entry.mood,
                note=entry.note,
                images=list(entry.images or []),
                timestamp=entry.timestamp,
            )
            for entry in sorted(entries, key=lambda e: (e.timestamp, e.date))
        ]
        return BackupManifestDTO(
            version=ExportConfig.EXPORT_VERSION,
            export_date=to_iso_timestamp(),
            app_name=settings.app_name,
            data_type=ExportConfig.DATA_TYPE,
            total_entries=len(entry_dtos),
            data=entry_dtos,
        )

    @staticmethod
    def serialize_manifest(manifest: BackupManifestDTO) -> str:
        document = manifest.to_document()
        validation = validate_export_data(document)
        if not validation.valid:
            raise ValueError(f"Export validation failed: {validation.errors}")
        return json.dumps(document, indent=ExportConfig.JSON_INDENT, ensure_ascii=False)

    def export_json(self, manifest: Optional[BackupManifestDTO] = None) -> bytes:
        """Self-contained JSON backup; inline images stay embedded."""
        manifest = manifest or self.build_manifest()
        content = self.serialize_manifest(manifest).encode("utf-8")
        log_info(
            f"Created JSON backup ({len(content)} bytes)",
            entry_count=manifest.total_entries,
            file_size=len(content),
        )
        return content

    def export_zip(self, manifest: Optional[BackupManifestDTO] = None) -> bytes:
        """ZIP backup: manifest, README and every inline image as a file."""
        manifest = manifest or self.build_manifest()
        archive_manifest, images = self._extract_images(manifest)

        content = self.zip_handler.create_backup_zip(
            data_text=self.serialize_manifest(archive_manifest),
            readme_text=self._build_readme(archive_manifest, len(images)),
            images=images,
            data_filename=ExportConfig.DATA_FILENAME,
        )
        log_info(
            f"Created ZIP backup ({len(content)} bytes)",
            entry_count=manifest.total_entries,
            media_count=len(images),
            file_size=len(content),
        )
        return content

    def create_export(self, backup_format: BackupFormat) -> ExportResult:
        """
        Create a backup of the whole journal.

        Raises:
            ValidationError: If there is nothing to back up
        """
        manifest = self.build_manifest()
        if not manifest.data:
            raise ValidationError("No entries to back up")

        if backup_format == BackupFormat.ZIP:
            content = self.export_zip(manifest)
        else:
            content = self.export_json(manifest)

        return ExportResult(
            filename=build_backup_filename(backup_format),
            content=content,
            media_type=MEDIA_TYPES[backup_format],
            entry_count=manifest.total_entries,
            image_count=sum(len(entry.images) for entry in manifest.data),
        )

    def _extract_images(
        self, manifest: BackupManifestDTO
    ) -> tuple[BackupManifestDTO, Dict[str, bytes]]:
        """
        Decode inline images and rewrite references to archive paths.

        Returns a copy of the manifest; the input is left unchanged.
        """
        images: Dict[str, bytes] = {}
        rewritten: List[MoodEntryDTO] = []

        for entry in manifest.data:
            refs: List[str] = []
            for index, ref in enumerate(entry.images):
                parsed = self.media_handler.parse_data_url(ref)
                if parsed is None:
                    refs.append(ref)
                    continue
                mime_type, content = parsed
                path = self.media_handler.archive_image_path(entry.date, index, mime_type)
                if path in images:
                    # Only reachable when two date keys sanitize identically
                    log_warning(f"Duplicate archive path {path}, renaming", date=entry.date)
                    stem, _, ext = path.rpartition(".")
                    suffix = 1
                    while f"{stem}_{suffix}.{ext}" in images:
                        suffix += 1
                    path = f"{stem}_{suffix}.{ext}"
                images[path] = content
                refs.append(path)
            rewritten.append(entry.model_copy(update={"images": refs}))

        return manifest.model_copy(update={"data": rewritten}), images

    @staticmethod
    def _build_readme(manifest: BackupManifestDTO, image_count: int) -> str:
        return (
            f"{manifest.app_name} Backup\n"
            f"Created: {manifest.export_date}\n"
            f"Total entries: {manifest.total_entries}\n"
            f"Images: {image_count}\n"
            f"\n"
            f"This archive contains {ExportConfig.DATA_FILENAME} and an "
            f"{ExportConfig.IMAGES_DIR}/ folder with the photos attached to your entries.\n"
            f"To restore it, use \"Import Data\" in the app or run:\n"
            f"    moodjournal-admin import <this file>\n"
        )
