"""Meditation countdown"""
from .countdown_timer import CountdownTimer, Scheduler, TICK_INTERVAL_SECONDS
from .models.countdown_state import CountdownSnapshot

__all__ = ["CountdownTimer", "CountdownSnapshot", "Scheduler", "TICK_INTERVAL_SECONDS"]
