"""Session Finalizer - turns a stopped countdown into a session and a reflection"""
import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Set

from app.infra.storage.repositories.notes import ReflectionNoteRepository
from app.infra.storage.repositories.sessions import SessionRepository
from app.models.session import SessionRecord
from app.services.reflection.reflection_service import ReflectionService
from app.services.timer.countdown_timer import CountdownTimer, Scheduler
from app.utils.id_generator import generate_id
from app.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

# Keeps the finalizer busy long enough to absorb finalize calls fired
# synchronously by the state change it is itself processing
FINALIZE_COOLDOWN_SECONDS = 0.05


class FinalizerState(str, Enum):
    """Finalizer state"""
    IDLE = "idle"
    FINALIZING = "finalizing"


class LivenessHandle:
    """Owned by a view; revoked when the view is torn down"""

    def __init__(self):
        self._alive = True

    @property
    def is_alive(self) -> bool:
        return self._alive

    def revoke(self) -> None:
        self._alive = False


class SessionFinalizer:
    """
    At-most-once finalization of the countdown.

    States:
        IDLE: ready to finalize
        FINALIZING: a finalization ran recently; further calls are ignored
            until the cooldown returns the finalizer to IDLE
    """

    def __init__(
        self,
        timer: CountdownTimer,
        scheduler: Scheduler,
        session_repo: SessionRepository,
        note_repo: ReflectionNoteRepository,
        reflection_service: ReflectionService,
        min_elapsed_seconds: int = 0
    ):
        self._timer = timer
        self._scheduler = scheduler
        self._sessions = session_repo
        self._notes = note_repo
        self._reflection_service = reflection_service
        self._min_elapsed_seconds = min_elapsed_seconds

        self._state = FinalizerState.IDLE
        self._initial_duration = 0
        self._pending: Set[asyncio.Task] = set()

    @property
    def state(self) -> FinalizerState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state == FinalizerState.IDLE

    @property
    def initial_duration(self) -> int:
        """Seconds requested by the most recent start"""
        return self._initial_duration

    def record_start(self, seconds: int) -> None:
        self._initial_duration = seconds

    def finalize(
        self,
        end_session: bool,
        *,
        meditation_type: str,
        liveness: LivenessHandle
    ) -> Optional[SessionRecord]:
        """
        Stop the countdown and, when asked, record the session.

        Args:
            end_session: True records a session and requests a reflection;
                False only stops (pauses) the countdown
            meditation_type: Meditation variant stored on the session
            liveness: Handle of the requesting view; late reflections are
                discarded once it is revoked

        Returns:
            The SessionRecord written, or None (nothing elapsed, guard hit,
            or end_session False). Never raises.
        """
        if self._state == FinalizerState.FINALIZING:
            logger.warning("Already finalizing, ignoring duplicate finalize call")
            return None

        self._state = FinalizerState.FINALIZING
        record: Optional[SessionRecord] = None

        try:
            snapshot = self._timer.snapshot()
            elapsed = max(0, self._initial_duration - snapshot.seconds_left)

            # Stopping an idle timer would only fire redundant notifications
            if snapshot.running:
                self._timer.stop(end_session)

            if end_session:
                # One recorded start yields at most one session
                self._initial_duration = 0
                record = self._record_session(elapsed, meditation_type, liveness)

        except Exception as e:
            logger.error(f"Error finalizing session: {e}")

        finally:
            self._scheduler.call_later(FINALIZE_COOLDOWN_SECONDS, self._return_to_idle)

        return record

    async def wait_pending(self) -> None:
        """Wait for every in-flight reflection to be attached or discarded"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _record_session(
        self,
        elapsed: int,
        meditation_type: str,
        liveness: LivenessHandle
    ) -> Optional[SessionRecord]:
        if elapsed <= 0:
            return None

        if elapsed < self._min_elapsed_seconds:
            logger.info(f"Session of {elapsed}sec is below the {self._min_elapsed_seconds}sec minimum, not recorded")
            return None

        minutes = max(1, round_half_up(elapsed / 60))
        record = SessionRecord(
            id=generate_id("sess-"),
            date=datetime.now(timezone.utc),
            minutes=minutes,
            type=meditation_type,
        )
        self._sessions.prepend(record)
        logger.info(f"Session recorded: {minutes}min of {meditation_type} ({elapsed}sec elapsed)")

        self._launch_reflection(meditation_type, minutes, liveness)

        return record

    def _launch_reflection(
        self,
        meditation_type: str,
        minutes: int,
        liveness: LivenessHandle
    ) -> None:
        """
        Attach the reflection in the background on the running loop.

        Without a running loop (a scheduler that is not an asyncio loop) the
        local reflection is attached right away.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, attaching a local reflection")
            self._attach_local_reflection(meditation_type, minutes, liveness)
            return

        task = loop.create_task(self._attach_reflection(meditation_type, minutes, liveness))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _attach_local_reflection(
        self,
        meditation_type: str,
        minutes: int,
        liveness: LivenessHandle
    ) -> None:
        if not liveness.is_alive:
            return
        fallback = self._reflection_service.local_reflection(meditation_type, minutes)
        self._notes.prepend(fallback.to_note())

    async def _attach_reflection(
        self,
        meditation_type: str,
        minutes: int,
        liveness: LivenessHandle
    ) -> None:
        try:
            reflection = await self._reflection_service.reflect(meditation_type, minutes)

            if not liveness.is_alive:
                logger.warning("View torn down before the reflection arrived, discarding it")
                return

            note = self._notes.prepend(reflection.to_note())
            logger.info(f"Reflection note {note.id} attached ({reflection.source})")

        except Exception as e:
            logger.error(f"Error attaching reflection for {meditation_type}: {e}")
            self._attach_local_reflection(meditation_type, minutes, liveness)

    def _return_to_idle(self) -> None:
        self._state = FinalizerState.IDLE
