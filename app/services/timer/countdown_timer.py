"""Countdown Timer - single source of truth for the running meditation"""
import logging
from typing import Any, Callable, List, Optional, Protocol

from app.utils.rounding import round_half_up
from .models.countdown_state import CountdownSnapshot

logger = logging.getLogger(__name__)

TICK_INTERVAL_SECONDS = 1.0

CountdownListener = Callable[[CountdownSnapshot], None]


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback later (asyncio loops qualify)"""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable: ...


class CountdownTimer:
    """
    Countdown state machine.

    State:
        seconds_left: seconds remaining (never negative)
        running: True while exactly one tick is scheduled

    Zero is terminal: the tick that would reach zero sets running to False
    and does not reschedule. Listeners are notified synchronously after
    every state change.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._seconds_left = 0
        self._running = False
        self._tick_handle: Optional[Cancellable] = None
        self._listeners: List[CountdownListener] = []

    @property
    def seconds_left(self) -> int:
        return self._seconds_left

    @property
    def running(self) -> bool:
        return self._running

    def snapshot(self) -> CountdownSnapshot:
        """Read both fields at once"""
        return CountdownSnapshot(seconds_left=self._seconds_left, running=self._running)

    def subscribe(self, listener: CountdownListener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self, seconds: float) -> None:
        """
        Start counting down from seconds (clamped to at least 1).
        Does nothing while already running.
        """
        if self._running:
            logger.debug("Countdown already running, ignoring start")
            return

        self._cancel_tick()
        self._seconds_left = max(1, round_half_up(seconds))
        self._running = True
        self._schedule_tick()

        logger.info(f"Countdown started: {self._seconds_left}sec")
        self._notify()

    def stop(self, finalize: bool = False) -> None:
        """
        Cancel the tick.

        Args:
            finalize: True resets to zero; False pauses and keeps seconds_left
        """
        self._cancel_tick()
        if finalize:
            self._seconds_left = 0
        self._running = False

        logger.info(f"Countdown stopped (finalize={finalize}, seconds_left={self._seconds_left})")
        self._notify()

    def _schedule_tick(self) -> None:
        self._tick_handle = self._scheduler.call_later(TICK_INTERVAL_SECONDS, self._tick)

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _tick(self) -> None:
        self._tick_handle = None
        if not self._running:
            return

        if self._seconds_left <= 1:
            self._seconds_left = 0
            self._running = False
            logger.info("Countdown reached zero")
        else:
            self._seconds_left -= 1
            # Scheduled before notifying so a listener's stop() cancels it
            self._schedule_tick()

        self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Countdown listener error: {e}")
