"""
Shared FastAPI dependencies.
"""
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from app.core.database import get_session
from app.services.journal_store import JournalStore, SqlJournalStore


def get_journal_store(session: Annotated[Session, Depends(get_session)]) -> JournalStore:
    return SqlJournalStore(session)
