"""
Import/Export utility modules.
"""
from .json_streamer import parse_backup_document
from .media_handler import MediaHandler
from .validators import ValidationResult, validate_export_data, validate_import_data
from .zip_handler import BackupArchiveContents, ZipHandler

__all__ = [
    "BackupArchiveContents",
    "MediaHandler",
    "parse_backup_document",
    "validate_export_data",
    "validate_import_data",
    "ValidationResult",
    "ZipHandler",
]
