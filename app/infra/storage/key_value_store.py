"""JSON key-value store backed by SQLAlchemy"""
import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.db.models.key_value import KeyValueEntry

logger = logging.getLogger(__name__)

_MISSING = object()


class KeyValueStore:
    """
    String-keyed store of JSON-serialized values.

    Writes go through an in-memory cache first, then to the database.
    Persistence is best-effort: a failed write is logged and the cached
    value stays visible to readers for the lifetime of the process.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._cache: Dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for key, or default when missing or unreadable"""
        if key in self._cache:
            return self._cache[key]

        value = self._load(key)
        if value is _MISSING:
            return default

        self._cache[key] = value
        return value

    def set(self, key: str, value: Any) -> None:
        """Store value under key (must be JSON-serializable)"""
        payload = json.dumps(value, ensure_ascii=False)
        self._cache[key] = json.loads(payload)

        try:
            with self._session_factory() as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=payload))
                else:
                    entry.value = payload
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to persist key '{key}': {e}")

    def delete(self, key: str) -> None:
        """Remove key if present"""
        self._cache.pop(key, None)

        try:
            with self._session_factory() as session:
                session.execute(delete(KeyValueEntry).where(KeyValueEntry.key == key))
                session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete key '{key}': {e}")

    def clear(self) -> None:
        """Remove every key"""
        self._cache.clear()

        try:
            with self._session_factory() as session:
                session.execute(delete(KeyValueEntry))
                session.commit()
            logger.info("Key-value store cleared")
        except SQLAlchemyError as e:
            logger.error(f"Failed to clear key-value store: {e}")

    def _load(self, key: str) -> Any:
        try:
            with self._session_factory() as session:
                entry: Optional[KeyValueEntry] = session.get(KeyValueEntry, key)
                if entry is None:
                    return _MISSING
                raw = entry.value
        except SQLAlchemyError as e:
            logger.error(f"Failed to read key '{key}': {e}")
            return _MISSING

        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored value for '{key}' is not valid JSON, ignoring: {e}")
            return _MISSING
