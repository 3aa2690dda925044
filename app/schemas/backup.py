"""
Backup endpoint schemas.
"""
from pydantic import BaseModel, Field

from app.models.enums import ImportPolicy
from app.schemas.dto import ImportPreview


class ImportPreviewResponse(ImportPreview):
    """Preview plus the token used to commit the pending import."""
    token: str = Field(..., description="Pending import token")
    source_format: str
    images_dropped: int = 0
    expires_in: int = Field(..., description="Seconds until the pending import expires")


class ImportCommitRequest(BaseModel):
    policy: ImportPolicy = Field(..., description="overwrite or merge; there is no default")
