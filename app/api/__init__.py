# API module exports
from app.api import audio, diary, health, notes, sessions, settings, timer
from app.api.base import api_router

__all__ = ["audio", "diary", "health", "notes", "sessions", "settings", "timer", "api_router"]
