"""
Unit tests for MoodEntryService: saving, history and drafts.
"""
from datetime import date

import pytest

from app.core.config import settings
from app.core.exceptions import DraftNotFoundError, EntryNotFoundError, ValidationError
from app.core.time_utils import format_entry_date, parse_iso_timestamp, today_key
from app.models.enums import MoodType
from app.schemas.mood_entry import MoodDraftUpdate, MoodEntryCreate
from app.services.mood_entry_service import MoodEntryService
from tests.lib import PNG_BYTES, data_url


@pytest.fixture
def service(session, store):
    return MoodEntryService(session, store)


def test_save_defaults_to_today_and_now(service):
    entry = service.save_entry(MoodEntryCreate(mood=MoodType.GREAT))

    assert entry.date == today_key()
    assert entry.timestamp.endswith("Z")
    parse_iso_timestamp(entry.timestamp)


def test_save_replaces_existing_day(service):
    service.save_entry(MoodEntryCreate(mood=MoodType.GOOD, date="Mon Jan 06 2025"))
    service.save_entry(MoodEntryCreate(mood=MoodType.ANGRY, date="Mon Jan 06 2025", note="worse"))

    entry = service.get_entry("Mon Jan 06 2025")
    assert entry.mood == "angry"
    assert entry.note == "worse"
    assert len(service.get_history()) == 1


def test_save_rejects_too_many_images(service):
    images = [data_url(PNG_BYTES)] * (settings.max_images_per_entry + 1)
    with pytest.raises(ValidationError, match="Too many images"):
        service.save_entry(MoodEntryCreate(mood=MoodType.CALM, images=images))


def test_save_rejects_bad_timestamp(service):
    with pytest.raises(ValidationError):
        service.save_entry(MoodEntryCreate(mood=MoodType.CALM, timestamp="yesterday"))


def test_history_is_newest_first(service):
    service.save_entry(MoodEntryCreate(mood=MoodType.SAD, date="Mon Jan 06 2025", timestamp="2025-01-06T09:00:00.000Z"))
    service.save_entry(MoodEntryCreate(mood=MoodType.GOOD, date="Wed Jan 08 2025", timestamp="2025-01-08T09:00:00.000Z"))
    service.save_entry(MoodEntryCreate(mood=MoodType.GOOD, date="Tue Jan 07 2025", timestamp="2025-01-07T09:00:00.000Z"))

    assert [e.date for e in service.get_history()] == [
        "Wed Jan 08 2025",
        "Tue Jan 07 2025",
        "Mon Jan 06 2025",
    ]
    assert [e.date for e in service.get_history(MoodType.SAD)] == ["Mon Jan 06 2025"]
    assert service.get_mood_counts() == {"sad": 1, "good": 2}


def test_get_missing_entry(service):
    with pytest.raises(EntryNotFoundError):
        service.get_entry("Mon Jan 06 2025")


def test_delete_entry(service):
    service.save_entry(MoodEntryCreate(mood=MoodType.GOOD, date="Mon Jan 06 2025"))
    service.delete_entry("Mon Jan 06 2025")
    assert service.get_history() == []


def test_draft_lifecycle(service):
    draft = service.save_draft("Mon Jan 06 2025", MoodDraftUpdate(note="half written"))
    assert draft.mood is None
    assert service.get_draft("Mon Jan 06 2025").note == "half written"

    service.save_draft("Mon Jan 06 2025", MoodDraftUpdate(mood=MoodType.EXCITED, note="done"))
    assert service.get_draft("Mon Jan 06 2025").mood == "excited"

    service.save_entry(MoodEntryCreate(mood=MoodType.EXCITED, date="Mon Jan 06 2025", note="done"))
    with pytest.raises(DraftNotFoundError):
        service.get_draft("Mon Jan 06 2025")


def test_entry_date_format():
    assert format_entry_date(date(2025, 1, 6)) == "Mon Jan 06 2025"


def test_save_drops_blank_image_references(service):
    entry = service.save_entry(MoodEntryCreate(
        mood=MoodType.GOOD,
        date="Mon Jan 06 2025",
        images=["", data_url(PNG_BYTES), "   "],
    ))
    assert entry.images == [data_url(PNG_BYTES)]

    draft = service.save_draft("Tue Jan 07 2025", MoodDraftUpdate(images=[" ", data_url(PNG_BYTES)]))
    assert draft.images == [data_url(PNG_BYTES)]
