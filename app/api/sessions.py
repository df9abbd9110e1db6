from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from app.models.session import SessionRecord, SessionStats
from app.runtime import MeditationRuntime, get_runtime

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


class SessionListResponse(BaseModel):
    sessions: List[SessionRecord]
    count: int


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    runtime: MeditationRuntime = Depends(get_runtime)
):
    """List recorded sessions, newest first"""
    sessions = runtime.sessions.find_all(limit=limit, offset=offset)
    return {
        "sessions": sessions,
        "count": len(sessions)
    }


@router.get("/stats", response_model=SessionStats)
async def get_session_stats(runtime: MeditationRuntime = Depends(get_runtime)):
    """Session count, total minutes and number of days with practice"""
    return runtime.sessions.stats()
