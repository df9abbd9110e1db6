import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.models.reflection_note import ReflectionNote
from app.runtime import MeditationRuntime, get_runtime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])

SAMPLE_MEDITATION_TYPE = "Prática de atenção"
SAMPLE_MINUTES = 10
SAMPLE_TITLE = "Reflexão exemplo"


class NoteListResponse(BaseModel):
    notes: List[ReflectionNote]
    count: int


@router.get("", response_model=NoteListResponse)
async def list_notes(runtime: MeditationRuntime = Depends(get_runtime)):
    """List reflection notes, newest first"""
    notes = runtime.notes.find_all()
    return {
        "notes": notes,
        "count": len(notes)
    }


@router.post("/sample", response_model=ReflectionNote, status_code=201)
async def create_sample_note(runtime: MeditationRuntime = Depends(get_runtime)):
    """Generate an example reflection outside of a session and store it"""
    try:
        reflection = await runtime.reflection_service.reflect(
            SAMPLE_MEDITATION_TYPE,
            SAMPLE_MINUTES,
            default_title=SAMPLE_TITLE,
        )
        return runtime.notes.prepend(reflection.to_note())

    except Exception as e:
        logger.error(f"Failed to create sample reflection: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create sample reflection: {str(e)}")
