"""Diary endpoints"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.models.diary import DiaryEntry, DiaryEntryCreate, DiarySuggestion
from app.runtime import MeditationRuntime, get_runtime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/diary", tags=["diary"])

DIARY_MEDITATION_TYPE = "Diário"


class DiaryListResponse(BaseModel):
    entries: List[DiaryEntry]
    count: int


@router.get("", response_model=DiaryListResponse)
async def list_entries(runtime: MeditationRuntime = Depends(get_runtime)):
    """List diary entries, newest first"""
    entries = runtime.diary.find_all()
    return {
        "entries": entries,
        "count": len(entries)
    }


@router.post("", response_model=DiaryEntry, status_code=201)
async def create_entry(
    request: DiaryEntryCreate,
    runtime: MeditationRuntime = Depends(get_runtime)
):
    """Add a diary entry (blank text is rejected with 422)"""
    entry = runtime.diary.create(request)
    logger.info(f"Diary entry {entry.id} created")
    return entry


@router.post("/suggestion", response_model=DiarySuggestion)
async def suggest_entry(runtime: MeditationRuntime = Depends(get_runtime)):
    """Suggest a reflection prompt to start an entry; nothing is stored"""
    reflection = await runtime.reflection_service.reflect(DIARY_MEDITATION_TYPE, 0)
    return {"text": reflection.text}
