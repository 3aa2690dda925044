"""
ZIP archive handling for backups.

Archives are built and read fully in memory: backups are bounded by
``import_export_max_file_size_mb`` and are handed to/from the caller as
raw bytes.
"""
import io
import zipfile
import zlib
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from app.core.exceptions import BackupDecodeError, BackupFormatError
from app.utils.import_export.constants import ZIP_EMPTY_MAGIC, ZIP_MAGIC, ExportConfig


@dataclass
class BackupArchiveContents:
    """Members read from a backup ZIP."""
    data_bytes: bytes
    images: Dict[str, bytes] = field(default_factory=dict)


class ZipHandler:
    """Build and read backup ZIP archives."""

    @staticmethod
    def is_zip(raw: bytes) -> bool:
        return raw[:4] in (ZIP_MAGIC, ZIP_EMPTY_MAGIC)

    def create_backup_zip(
        self,
        data_text: str,
        readme_text: str,
        images: Mapping[str, bytes],
        data_filename: str = ExportConfig.DATA_FILENAME,
    ) -> bytes:
        """
        Create a backup archive.

        Args:
            data_text: Serialized manifest
            readme_text: Human-readable notice
            images: Mapping of archive path -> binary

        Returns:
            The archive as bytes
        """
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(data_filename, data_text.encode("utf-8"))
            archive.writestr(ExportConfig.README_FILENAME, readme_text.encode("utf-8"))
            for path, content in images.items():
                # Images are already compressed formats
                archive.writestr(path, content, compress_type=zipfile.ZIP_STORED)
        return buffer.getvalue()

    def read_backup_zip(
        self,
        raw: bytes,
        data_filename: str = ExportConfig.DATA_FILENAME,
        max_size_mb: Optional[int] = None,
    ) -> BackupArchiveContents:
        """
        Read the manifest and image members of a backup archive.

        Raises:
            BackupFormatError: If the manifest member is missing or the archive is too large
            BackupDecodeError: If the archive or a member is corrupt
        """
        try:
            with zipfile.ZipFile(io.BytesIO(raw)) as archive:
                infos = archive.infolist()

                if max_size_mb is not None:
                    total_size = sum(info.file_size for info in infos)
                    if total_size > max_size_mb * 1024 * 1024:
                        raise BackupFormatError(
                            f"Backup archive too large: {total_size} bytes uncompressed "
                            f"(limit {max_size_mb} MB)"
                        )

                names = {info.filename for info in infos}
                if data_filename not in names:
                    raise BackupFormatError(f"{data_filename} not found in backup archive")

                data_bytes = archive.read(data_filename)

                image_prefix = f"{ExportConfig.IMAGES_DIR}/"
                images = {
                    info.filename: archive.read(info.filename)
                    for info in infos
                    if info.filename.startswith(image_prefix) and not info.is_dir()
                }
        except (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as exc:
            raise BackupDecodeError(f"Corrupt ZIP archive: {exc}") from exc
        except zipfile.LargeZipFile as exc:
            raise BackupFormatError(f"Unsupported ZIP archive: {exc}") from exc

        return BackupArchiveContents(data_bytes=data_bytes, images=images)
