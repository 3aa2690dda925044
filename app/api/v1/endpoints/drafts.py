"""
Draft endpoints.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.endpoints.entries import get_entry_service
from app.schemas.mood_entry import MoodDraftResponse, MoodDraftUpdate
from app.services.mood_entry_service import MoodEntryService

router = APIRouter(prefix="/drafts", tags=["drafts"])


@router.get("/{date}", response_model=MoodDraftResponse)
def get_draft(date: str, service: Annotated[MoodEntryService, Depends(get_entry_service)]):
    return service.get_draft(date)


@router.put("/{date}", response_model=MoodDraftResponse)
def save_draft(
    date: str,
    payload: MoodDraftUpdate,
    service: Annotated[MoodEntryService, Depends(get_entry_service)],
):
    return service.save_draft(date, payload)


@router.delete("/{date}", status_code=status.HTTP_204_NO_CONTENT)
def clear_draft(date: str, service: Annotated[MoodEntryService, Depends(get_entry_service)]):
    service.clear_draft(date)
