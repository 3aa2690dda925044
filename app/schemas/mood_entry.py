"""
Mood entry and draft request/response schemas.
"""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import MoodType


class MoodEntryBase(BaseModel):
    mood: MoodType
    note: Optional[str] = None
    images: List[str] = Field(default_factory=list)

    @field_validator("images")
    @classmethod
    def strip_blank_images(cls, v: List[str]) -> List[str]:
        return [ref for ref in v if ref.strip()]


class MoodEntryCreate(MoodEntryBase):
    """Save request. ``date`` defaults to today, ``timestamp`` to now."""
    date: Optional[str] = Field(None, description="Per-day key, e.g. 'Mon Jan 06 2025'")
    timestamp: Optional[str] = None

    @field_validator("note")
    @classmethod
    def strip_empty_note(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class MoodEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    mood: str
    note: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    timestamp: str


class MoodCountsResponse(BaseModel):
    total: int
    counts: Dict[str, int]


class MoodDraftUpdate(BaseModel):
    mood: Optional[MoodType] = None
    note: Optional[str] = None
    images: List[str] = Field(default_factory=list)

    @field_validator("images")
    @classmethod
    def strip_blank_images(cls, v: List[str]) -> List[str]:
        return [ref for ref in v if ref.strip()]


class MoodDraftResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: str
    mood: Optional[str] = None
    note: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    updated_at: datetime
