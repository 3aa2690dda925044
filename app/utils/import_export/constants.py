"""
Constants describing the backup archive format.
"""


class ExportConfig:
    """Backup format constants shared by export and import."""

    EXPORT_VERSION = "2.0"
    # Oldest format: cloud-drive backups without dataType/totalEntries
    LEGACY_VERSION = "1.0"

    DATA_FILENAME = "mood_data.json"
    README_FILENAME = "README.txt"
    IMAGES_DIR = "images"

    DATA_TYPE = "mood_entries"
    DEFAULT_APP_NAME = "Mood Journal"
    JSON_INDENT = 2


ZIP_MAGIC = b"PK\x03\x04"
ZIP_EMPTY_MAGIC = b"PK\x05\x06"

JSON_MIME_TYPES = frozenset({"application/json", "text/json", "text/plain"})
ZIP_MIME_TYPES = frozenset({
    "application/zip",
    "application/x-zip",
    "application/x-zip-compressed",
    "multipart/x-zip",
})
