"""Session finalization pipeline"""
from .session_finalizer import (
    FINALIZE_COOLDOWN_SECONDS,
    FinalizerState,
    LivenessHandle,
    SessionFinalizer,
)
from .timer_view_binding import DEFAULT_MEDITATION_TYPE, DEFAULT_SESSION_MINUTES, TimerViewBinding

__all__ = [
    "FINALIZE_COOLDOWN_SECONDS",
    "FinalizerState",
    "LivenessHandle",
    "SessionFinalizer",
    "TimerViewBinding",
    "DEFAULT_MEDITATION_TYPE",
    "DEFAULT_SESSION_MINUTES",
]
