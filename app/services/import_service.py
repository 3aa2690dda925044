"""
Import service for decoding mood journal backups.

Turns raw backup bytes (JSON or ZIP) into a fully validated entry set with
every image reference resolved back to inline data. Nothing is written to
the journal here; see ReconciliationService for that.
"""
from pathlib import PurePosixPath
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exceptions import BackupFormatError
from app.core.logging_config import log_info, log_warning
from app.models.enums import BackupFormat
from app.schemas.dto import BackupManifestDTO, DecodedBackup
from app.utils.import_export import (
    MediaHandler,
    ZipHandler,
    parse_backup_document,
    validate_import_data,
)
from app.utils.import_export.constants import JSON_MIME_TYPES, ZIP_MIME_TYPES, ExportConfig


class ImportService:
    """Service for decoding backups."""

    def __init__(
        self,
        max_file_size_mb: Optional[int] = None,
        stream_threshold_mb: Optional[int] = None,
    ):
        self.max_file_size_mb = max_file_size_mb or settings.import_export_max_file_size_mb
        self.stream_threshold_mb = stream_threshold_mb or settings.import_stream_threshold_mb
        self.zip_handler = ZipHandler()
        self.media_handler = MediaHandler()

    def detect_format(
        self,
        raw: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> BackupFormat:
        """Pick the format from the file extension, then the MIME type, then the bytes."""
        if filename:
            suffix = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
            if suffix == ".zip":
                return BackupFormat.ZIP
            if suffix == ".json":
                return BackupFormat.JSON

        if content_type:
            mime = content_type.split(";", 1)[0].strip().lower()
            if mime in ZIP_MIME_TYPES:
                return BackupFormat.ZIP
            if mime in JSON_MIME_TYPES:
                return BackupFormat.JSON

        return BackupFormat.ZIP if self.zip_handler.is_zip(raw) else BackupFormat.JSON

    def decode_backup(
        self,
        raw: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> DecodedBackup:
        """
        Decode a backup file.

        Args:
            raw: File contents
            filename: Original file name (used for format detection)
            content_type: MIME type reported by the picker/upload

        Returns:
            DecodedBackup with every archive image turned back into a data URL

        Raises:
            BackupFormatError: If the document structure is invalid
            BackupDecodeError: If the file cannot be decoded
        """
        if not raw:
            raise BackupFormatError("Backup file is empty")
        if len(raw) > self.max_file_size_mb * 1024 * 1024:
            raise BackupFormatError(
                f"Backup file too large ({len(raw)} bytes, limit {self.max_file_size_mb} MB)"
            )

        backup_format = self.detect_format(raw, filename, content_type)
        images: Dict[str, bytes] = {}
        if backup_format == BackupFormat.ZIP:
            contents = self.zip_handler.read_backup_zip(
                raw,
                data_filename=ExportConfig.DATA_FILENAME,
                max_size_mb=self.max_file_size_mb,
            )
            document = parse_backup_document(contents.data_bytes, self.stream_threshold_mb)
            images = contents.images
        else:
            document = parse_backup_document(raw, self.stream_threshold_mb)

        validation = validate_import_data(document)
        if not validation.valid:
            raise BackupFormatError(f"Invalid backup format: {'; '.join(validation.errors[:5])}")

        try:
            manifest = BackupManifestDTO.model_validate(document)
        except PydanticValidationError as e:
            raise BackupFormatError(f"Invalid backup format: {e}") from e

        decoded = DecodedBackup(
            manifest=manifest,
            source_format=backup_format.value,
            warnings=list(validation.warnings),
        )
        if backup_format == BackupFormat.ZIP:
            self._restore_archive_images(decoded, images)

        for warning in decoded.warnings:
            log_warning(warning, source_format=decoded.source_format)
        log_info(
            f"Decoded {backup_format.value} backup with {len(manifest.data)} entries",
            entry_count=len(manifest.data),
            images_restored=decoded.images_restored,
            images_dropped=decoded.images_dropped,
        )
        return decoded

    def _restore_archive_images(self, decoded: DecodedBackup, images: Dict[str, bytes]) -> None:
        """
        Rewrite archive-relative image paths to inline data URLs.

        A reference without a matching member is dropped from its entry; the
        rest of the entry is kept.
        """
        for index, entry in enumerate(decoded.manifest.data):
            resolved: List[str] = []
            for ref in entry.images:
                if not self.media_handler.is_archive_reference(ref):
                    resolved.append(ref)
                    continue

                member = self._find_member(ref, images)
                if member is None:
                    decoded.images_dropped += 1
                    decoded.warnings.append(f"Image {ref} for {entry.date} not found in archive; skipped")
                    continue

                mime_type = self.media_handler.mime_for_path(member)
                resolved.append(self.media_handler.build_data_url(mime_type, images[member]))
                decoded.images_restored += 1

            decoded.manifest.data[index] = entry.model_copy(update={"images": resolved})

    @staticmethod
    def _find_member(ref: str, images: Dict[str, bytes]) -> Optional[str]:
        normalized = ref.replace("\\", "/").lstrip("/")
        if normalized.startswith("./"):
            normalized = normalized[2:]
        candidates = (
            normalized,
            f"{ExportConfig.IMAGES_DIR}/{PurePosixPath(normalized).name}",
        )
        for candidate in candidates:
            if candidate in images:
                return candidate
        return None
