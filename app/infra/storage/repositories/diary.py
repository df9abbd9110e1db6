"""Diary repository"""
from datetime import datetime, timezone

from app.infra.storage.key_value_store import KeyValueStore
from app.models.diary import DiaryEntry, DiaryEntryCreate
from app.utils.id_generator import generate_id

from .base import BaseListRepository

DIARY_KEY = "diary"


class DiaryRepository(BaseListRepository[DiaryEntry]):
    """Repository for journal entries"""

    def __init__(self, store: KeyValueStore):
        super().__init__(store, DIARY_KEY, DiaryEntry)

    def create(self, data: DiaryEntryCreate) -> DiaryEntry:
        """Create a new entry at the front of the diary"""
        entry = DiaryEntry(
            id=generate_id("diary-"),
            date=datetime.now(timezone.utc),
            text=data.text,
        )
        return self.prepend(entry)
