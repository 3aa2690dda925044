"""
Shared pytest fixtures.

Environment overrides must be in place before anything under ``app`` is
imported, since settings are read at import time.
"""
import os

os.environ.setdefault("MOODJOURNAL_DATABASE_URL", "sqlite://")
os.environ.setdefault("MOODJOURNAL_ENVIRONMENT", "testing")
os.environ.setdefault("MOODJOURNAL_APP_NAME", "Mood Journal")

import pytest  # noqa: E402

from app.services.journal_store import SqlJournalStore  # noqa: E402
from tests.lib import setup_session  # noqa: E402


@pytest.fixture
def session():
    session = setup_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(session):
    return SqlJournalStore(session)
