"""
Mood journal models.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column, DateTime, Text
from sqlmodel import Field, SQLModel

from app.core.time_utils import utc_now


class MoodEntry(SQLModel, table=True):
    """
    One journal record per calendar day.

    ``date`` is the natural key: writes for an existing date replace the row.
    """
    __tablename__ = "mood_entry"

    date: str = Field(primary_key=True, max_length=64)
    mood: str = Field(..., max_length=50, index=True)
    note: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    # ISO-8601 text, kept verbatim so backups round-trip exactly
    timestamp: str = Field(..., max_length=64, index=True)

    def to_dict(self) -> dict:
        data = {"date": self.date, "mood": self.mood}
        if self.note is not None:
            data["note"] = self.note
        data["images"] = list(self.images or [])
        data["timestamp"] = self.timestamp
        return data


class MoodDraft(SQLModel, table=True):
    """
    Unsaved work-in-progress for a day. Cleared when the entry is saved.
    """
    __tablename__ = "mood_draft"

    date: str = Field(primary_key=True, max_length=64)
    mood: Optional[str] = Field(default=None, max_length=50)
    note: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
