"""Base repository for list-valued keys"""
import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.infra.storage.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


class BaseListRepository(Generic[T]):
    """
    Base repository for an ordered list stored under one key.
    Items are kept newest first; the list is optionally capped.
    Hides the key-value layout from the rest of the application.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        model_class: Type[T],
        max_items: Optional[int] = None
    ):
        self._store = store
        self._key = key
        self._model_class = model_class
        self._max_items = max_items

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert stored dict to domain model"""
        return self._model_class(**data)

    def _to_models(self, data: Any) -> List[T]:
        """Convert stored list to domain models, dropping duplicates and invalid items"""
        if not isinstance(data, list):
            if data is not None:
                logger.warning(f"Stored '{self._key}' is not a list, ignoring it")
            return []

        items: List[T] = []
        seen_ids = set()
        for raw in data:
            if not isinstance(raw, dict):
                continue
            try:
                item = self._to_model(raw)
            except ValidationError as e:
                logger.warning(f"Skipping invalid '{self._key}' entry: {e}")
                continue

            item_id = getattr(item, "id", None)
            if item_id in seen_ids:
                continue
            seen_ids.add(item_id)
            items.append(item)
        return items

    def _save(self, items: List[T]) -> None:
        self._store.set(self._key, [item.model_dump(mode='json') for item in items])

    def find_all(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """Find all items, newest first, with optional pagination"""
        items = self._to_models(self._store.get(self._key))

        if offset:
            items = items[offset:]

        if limit:
            items = items[:limit]

        return items

    def find_by_id(self, id: str) -> Optional[T]:
        """Find a single item by ID"""
        for item in self.find_all():
            if getattr(item, "id", None) == id:
                return item
        return None

    def prepend(self, item: T) -> T:
        """Insert item at the front, evicting the oldest beyond the cap"""
        items = [item] + self.find_all()

        if self._max_items is not None and len(items) > self._max_items:
            evicted = len(items) - self._max_items
            items = items[:self._max_items]
            logger.debug(f"Evicted {evicted} oldest '{self._key}' entries")

        self._save(items)
        return item

    def delete(self, id: str) -> bool:
        """Delete an item by ID"""
        items = self.find_all()
        remaining = [item for item in items if getattr(item, "id", None) != id]

        if len(remaining) == len(items):
            return False

        self._save(remaining)
        return True

    def count(self) -> int:
        """Count stored items"""
        return len(self.find_all())

    def clear(self) -> None:
        """Remove all items"""
        self._store.delete(self._key)
