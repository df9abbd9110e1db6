"""Timer View Binding - trigger surface between a view and the countdown"""
import logging
from typing import Optional

from app.models.session import SessionRecord
from app.services.timer.countdown_timer import CountdownTimer
from app.services.timer.models.countdown_state import CountdownSnapshot
from app.utils.rounding import round_half_up
from .session_finalizer import LivenessHandle, SessionFinalizer

logger = logging.getLogger(__name__)

DEFAULT_SESSION_MINUTES = 20
DEFAULT_MEDITATION_TYPE = "Anapana - Respiração"


class TimerViewBinding:
    """
    Starts sessions, stops them on request and finalizes them once when
    the countdown expires on its own.
    """

    def __init__(
        self,
        timer: CountdownTimer,
        finalizer: SessionFinalizer,
        meditation_type: str = DEFAULT_MEDITATION_TYPE
    ):
        self._timer = timer
        self._finalizer = finalizer
        self._meditation_type = meditation_type
        self._liveness = LivenessHandle()
        self._unsubscribe = timer.subscribe(self._on_countdown_changed)

    @property
    def selected_meditation(self) -> str:
        return self._meditation_type

    @selected_meditation.setter
    def selected_meditation(self, meditation_type: str) -> None:
        self._meditation_type = meditation_type

    @property
    def liveness(self) -> LivenessHandle:
        return self._liveness

    @property
    def is_alive(self) -> bool:
        return self._liveness.is_alive

    def request_start(self, minutes: float = DEFAULT_SESSION_MINUTES) -> CountdownSnapshot:
        """
        Start a session of the given length.

        The requested duration becomes the reference for elapsed time only
        when the countdown actually starts; a start while running changes
        nothing.
        """
        seconds = max(1, round_half_up(minutes * 60))

        if self._timer.running:
            logger.info("Start requested while a session is running, ignoring")
        else:
            self._finalizer.record_start(seconds)
            self._timer.start(seconds)

        return self._timer.snapshot()

    def request_stop(self) -> Optional[SessionRecord]:
        """End the session early"""
        return self._finalize()

    def close(self) -> None:
        """Tear the view down; late reflections for it are discarded"""
        if not self._liveness.is_alive:
            return
        self._liveness.revoke()
        self._unsubscribe()

    def _on_countdown_changed(self, snapshot: CountdownSnapshot) -> None:
        # The idle check keeps every notification during a finalization
        # from starting another one
        if snapshot.is_expired and self._finalizer.is_idle:
            self._finalize()

    def _finalize(self) -> Optional[SessionRecord]:
        return self._finalizer.finalize(
            True,
            meditation_type=self._meditation_type,
            liveness=self._liveness,
        )
