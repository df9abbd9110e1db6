"""Reflection notes repository"""
from app.infra.storage.key_value_store import KeyValueStore
from app.models.reflection_note import ReflectionNote

from .base import BaseListRepository

NOTES_KEY = "notes"


class ReflectionNoteRepository(BaseListRepository[ReflectionNote]):
    """Repository for reflection notes (newest first, unbounded)"""

    def __init__(self, store: KeyValueStore):
        super().__init__(store, NOTES_KEY, ReflectionNote)
