"""
Local Journal Store: durable per-day storage of mood entries.

Every consumer receives a :class:`JournalStore` (injected) instead of
reaching for a global, so tests can substitute their own implementation.
"""
from typing import List, Optional, Protocol, runtime_checkable

from sqlalchemy import delete as sa_delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.exceptions import StorageWriteError
from app.core.logging_config import log_error
from app.models.mood_entry import MoodEntry


@runtime_checkable
class JournalStore(Protocol):
    """Keyed storage of MoodEntry records; the key is ``entry.date``."""

    def put(self, entry: MoodEntry) -> MoodEntry:
        """Insert or replace the entry for ``entry.date``."""
        ...

    def get(self, date: str) -> Optional[MoodEntry]:
        """Entry for ``date`` or None."""
        ...

    def list(self) -> List[MoodEntry]:
        """All entries, in no particular order."""
        ...

    def delete(self, date: str) -> None:
        """Remove the entry for ``date``; no-op if absent."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...


class SqlJournalStore:
    """JournalStore backed by the SQL database. Each call commits on its own."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self, operation: str, **context) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc, operation=operation, **context)
            raise StorageWriteError(f"Failed to {operation} journal entry: {exc}") from exc

    def put(self, entry: MoodEntry) -> MoodEntry:
        row = MoodEntry(
            date=entry.date,
            mood=entry.mood,
            note=entry.note,
            images=list(entry.images or []),
            timestamp=entry.timestamp,
        )
        try:
            merged = self.session.merge(row)
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc, operation="put", date=entry.date)
            raise StorageWriteError(f"Failed to save journal entry: {exc}") from exc
        self._commit("save", date=entry.date)
        return merged

    def get(self, date: str) -> Optional[MoodEntry]:
        return self.session.get(MoodEntry, date)

    def list(self) -> List[MoodEntry]:
        return list(self.session.exec(select(MoodEntry)).all())

    def delete(self, date: str) -> None:
        entry = self.session.get(MoodEntry, date)
        if entry is None:
            return
        self.session.delete(entry)
        self._commit("delete", date=date)

    def clear(self) -> None:
        try:
            self.session.execute(sa_delete(MoodEntry))
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc, operation="clear")
            raise StorageWriteError(f"Failed to clear journal: {exc}") from exc
        self._commit("clear")
