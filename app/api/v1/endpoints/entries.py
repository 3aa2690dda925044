"""
Mood entry endpoints.
"""
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.api.dependencies import get_journal_store
from app.core.database import get_session
from app.models.enums import MoodType
from app.schemas.mood_entry import MoodCountsResponse, MoodEntryCreate, MoodEntryResponse
from app.services.journal_store import JournalStore
from app.services.mood_entry_service import MoodEntryService

router = APIRouter(prefix="/entries", tags=["entries"])


def get_entry_service(
    session: Annotated[Session, Depends(get_session)],
    store: Annotated[JournalStore, Depends(get_journal_store)],
) -> MoodEntryService:
    return MoodEntryService(session, store)


@router.get("/", response_model=List[MoodEntryResponse])
def get_history(
    service: Annotated[MoodEntryService, Depends(get_entry_service)],
    mood: Optional[MoodType] = Query(None),
):
    """All entries, newest first."""
    return service.get_history(mood)


@router.post("/", response_model=MoodEntryResponse, status_code=status.HTTP_201_CREATED)
def save_entry(
    payload: MoodEntryCreate,
    service: Annotated[MoodEntryService, Depends(get_entry_service)],
):
    """Save the entry for a day, replacing any existing one."""
    return service.save_entry(payload)


@router.get("/stats/moods", response_model=MoodCountsResponse)
def get_mood_counts(service: Annotated[MoodEntryService, Depends(get_entry_service)]):
    counts = service.get_mood_counts()
    return MoodCountsResponse(total=sum(counts.values()), counts=counts)


@router.get("/{date}", response_model=MoodEntryResponse)
def get_entry(date: str, service: Annotated[MoodEntryService, Depends(get_entry_service)]):
    return service.get_entry(date)


@router.put("/{date}", response_model=MoodEntryResponse)
def replace_entry(
    date: str,
    payload: MoodEntryCreate,
    service: Annotated[MoodEntryService, Depends(get_entry_service)],
):
    return service.save_entry(payload.model_copy(update={"date": date}))


@router.delete("/{date}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(date: str, service: Annotated[MoodEntryService, Depends(get_entry_service)]):
    service.delete_entry(date)
