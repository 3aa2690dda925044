"""
Factories for sessions, entries and hand-built backup archives.
"""
from __future__ import annotations

import base64
import io
import json
import zipfile
from typing import Any

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app import models  # noqa: F401  (registers tables)
from app.models.mood_entry import MoodEntry

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01fake-png"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01fake-jpeg\xff\xd9"


def setup_session() -> Session:
    """Create an in-memory SQLite session for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return Session(engine)


def data_url(content: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def make_entry(
    date: str,
    mood: str = "good",
    note: str | None = None,
    images: list[str] | None = None,
    timestamp: str = "2025-01-06T10:00:00.000Z",
) -> MoodEntry:
    return MoodEntry(date=date, mood=mood, note=note, images=images or [], timestamp=timestamp)


def make_zip(members: dict[str, Any]) -> bytes:
    """Build a ZIP in memory; dict/list values are written as JSON."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, value in members.items():
            if isinstance(value, (dict, list)):
                value = json.dumps(value)
            if isinstance(value, str):
                value = value.encode("utf-8")
            archive.writestr(name, value)
    return buffer.getvalue()
