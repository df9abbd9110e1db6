"""Domain models for the application"""
from .session import SessionRecord, SessionStats
from .reflection_note import ReflectionNote
from .diary import DiaryEntry, DiaryEntryCreate, DiarySuggestion
from .settings import UserSettings, UserSettingsUpdate, UserSettingsView
from .audio import GuidedTrack

__all__ = [
    'SessionRecord', 'SessionStats',
    'ReflectionNote',
    'DiaryEntry', 'DiaryEntryCreate', 'DiarySuggestion',
    'UserSettings', 'UserSettingsUpdate', 'UserSettingsView',
    'GuidedTrack',
]
