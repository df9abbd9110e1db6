"""Key-value backed repositories"""
from .base import BaseListRepository
from .diary import DiaryRepository
from .notes import ReflectionNoteRepository
from .sessions import MAX_SESSIONS, SessionRepository
from .settings import SettingsRepository

__all__ = [
    "BaseListRepository",
    "DiaryRepository",
    "ReflectionNoteRepository",
    "SessionRepository",
    "SettingsRepository",
    "MAX_SESSIONS",
]
