"""Sessions repository"""
from app.infra.storage.key_value_store import KeyValueStore
from app.models.session import SessionRecord, SessionStats

from .base import BaseListRepository

SESSIONS_KEY = "sessions"
MAX_SESSIONS = 200


class SessionRepository(BaseListRepository[SessionRecord]):
    """Repository for finished sessions (newest first, 200 most recent)"""

    def __init__(self, store: KeyValueStore):
        super().__init__(store, SESSIONS_KEY, SessionRecord, max_items=MAX_SESSIONS)

    def total_minutes(self) -> int:
        """Sum of minutes across stored sessions"""
        return sum(session.minutes for session in self.find_all())

    def days_logged(self) -> int:
        """Number of distinct calendar days with at least one session"""
        return len({session.date.date() for session in self.find_all()})

    def stats(self) -> SessionStats:
        return SessionStats(
            count=self.count(),
            total_minutes=self.total_minutes(),
            days_logged=self.days_logged(),
        )
