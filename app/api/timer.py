"""Meditation timer endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.models.session import SessionRecord
from app.runtime import MeditationRuntime, get_runtime
from app.services.session import DEFAULT_SESSION_MINUTES, FinalizerState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timer", tags=["timer"])


class StartTimerRequest(BaseModel):
    minutes: float = Field(default=DEFAULT_SESSION_MINUTES, gt=0, le=24 * 60)
    meditation_type: Optional[str] = None


class SelectMeditationRequest(BaseModel):
    meditation_type: str = Field(min_length=1)


class TimerStatusResponse(BaseModel):
    seconds_left: int
    running: bool
    finalizer_state: FinalizerState
    meditation_type: str
    initial_seconds: int


class StopTimerResponse(BaseModel):
    session: Optional[SessionRecord] = None


def _status(runtime: MeditationRuntime) -> TimerStatusResponse:
    snapshot = runtime.timer.snapshot()
    return TimerStatusResponse(
        seconds_left=snapshot.seconds_left,
        running=snapshot.running,
        finalizer_state=runtime.finalizer.state,
        meditation_type=runtime.view.selected_meditation,
        initial_seconds=runtime.finalizer.initial_duration,
    )


@router.get("", response_model=TimerStatusResponse)
async def get_timer(runtime: MeditationRuntime = Depends(get_runtime)):
    """Current countdown state"""
    return _status(runtime)


@router.post("/start", response_model=TimerStatusResponse)
async def start_timer(
    request: StartTimerRequest,
    runtime: MeditationRuntime = Depends(get_runtime)
):
    """
    Start a meditation session.

    Starting while a session is running leaves it untouched; the returned
    state shows the session that is already in progress.
    """
    if request.meditation_type and not runtime.timer.running:
        runtime.view.selected_meditation = request.meditation_type

    runtime.view.request_start(request.minutes)
    return _status(runtime)


@router.post("/stop", response_model=StopTimerResponse)
async def stop_timer(runtime: MeditationRuntime = Depends(get_runtime)):
    """
    End the session early.

    Returns:
        The recorded session, or null when nothing was recorded
        (no elapsed time, or a finalization already in progress)
    """
    try:
        session = runtime.view.request_stop()
        return {"session": session}

    except Exception as e:
        logger.error(f"Failed to stop timer: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to stop timer: {str(e)}")


@router.put("/meditation", response_model=TimerStatusResponse)
async def select_meditation(
    request: SelectMeditationRequest,
    runtime: MeditationRuntime = Depends(get_runtime)
):
    """Choose the meditation type recorded on the next finalized session"""
    runtime.view.selected_meditation = request.meditation_type
    return _status(runtime)
