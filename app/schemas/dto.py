"""
Data Transfer Objects (DTOs) for backup import/export.

These DTOs represent the on-disk backup format. Keys are camelCase on the
wire (``exportDate``, ``totalEntries``) so backups written by earlier app
versions load unchanged.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import ImportPolicy
from app.utils.import_export.constants import ExportConfig

# ============================================================================
# Backup format DTOs
# ============================================================================

class MoodEntryDTO(BaseModel):
    """
    One journal record inside a backup.

    Maps to: MoodEntry model (app/models/mood_entry.py)
    """
    model_config = ConfigDict(extra="ignore")

    date: str = Field(..., min_length=1, description="Per-day key, e.g. 'Mon Jan 06 2025'")
    mood: str = Field(..., min_length=1, description="Mood identifier")
    note: Optional[str] = Field(None, description="Free-form note")
    images: List[str] = Field(
        default_factory=list,
        description="Inline data URLs, archive-relative paths (ZIP manifests only) or pass-through URLs",
    )
    timestamp: str = Field(..., min_length=1, description="Creation/last-save instant, ISO-8601")

    @field_validator("images", mode="before")
    @classmethod
    def normalize_images(cls, v: Any) -> Any:
        """Tolerate a null image list; references are otherwise kept verbatim."""
        if v is None:
            return []
        return v


class BackupManifestDTO(BaseModel):
    """
    Root object of both the JSON backup and the ZIP ``mood_data.json`` member.

    ``totalEntries`` is informational only; ``data`` is authoritative.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: str = Field(ExportConfig.EXPORT_VERSION, description="Backup format version")
    export_date: Optional[str] = Field(None, alias="exportDate", description="When the backup was created (ISO-8601)")
    app_name: str = Field(ExportConfig.DEFAULT_APP_NAME, alias="appName")
    data_type: str = Field(ExportConfig.DATA_TYPE, alias="dataType")
    total_entries: int = Field(0, alias="totalEntries", ge=0)
    data: List[MoodEntryDTO] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Serialize with wire (camelCase) keys, omitting absent notes."""
        document = self.model_dump(by_alias=True, exclude={"data"})
        document["data"] = [entry.model_dump(exclude_none=True) for entry in self.data]
        return document


# ============================================================================
# Import/Export result DTOs
# ============================================================================

class DecodedBackup(BaseModel):
    """
    Fully parsed, reference-resolved backup ready for reconciliation.
    """
    manifest: BackupManifestDTO
    source_format: str = Field(..., description="json or zip")
    images_restored: int = Field(0, description="Archive images turned back into inline data")
    images_dropped: int = Field(0, description="Image references without a matching archive member")
    warnings: List[str] = Field(default_factory=list)

    @property
    def entries(self) -> List[MoodEntryDTO]:
        return self.manifest.data


class ImportPreview(BaseModel):
    """
    Counts shown to the user before they choose overwrite or merge.
    """
    local_count: int = Field(..., description="Entries currently in the journal")
    imported_count: int = Field(..., description="Entries in the backup")
    new_count: int = Field(..., description="Imported entries whose date is not present locally")
    conflict_count: int = Field(..., description="Imported entries whose date already exists locally")


class ImportResultSummary(BaseModel):
    """
    Summary of a committed import.
    """
    policy: ImportPolicy
    local_count_before: int = Field(0, description="Entries before the import")
    entries_written: int = Field(0, description="Entries put into the store")
    entries_skipped: int = Field(0, description="Imported entries skipped because the date exists locally")
    total_after: int = Field(0, description="Entries after the import")
    images_restored: int = Field(0)
    images_dropped: int = Field(0)
    warnings: List[str] = Field(default_factory=list)
    reload_required: bool = Field(True, description="Cached views of the journal are stale")
