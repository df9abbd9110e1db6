import random
from typing import Any, Callable, List, Tuple

import pytest

from app.db.session import create_db_engine, create_session_factory
from app.infra.storage.key_value_store import KeyValueStore
from app.infra.storage.repositories import (
    DiaryRepository,
    ReflectionNoteRepository,
    SessionRepository,
    SettingsRepository,
)
from app.services.reflection import ReflectionService
from app.services.reflection.models import ReflectionApiConfig
from app.services.session import SessionFinalizer, TimerViewBinding
from app.services.timer import CountdownTimer


class FakeHandle:
    def __init__(self, when: float, callback: Callable[..., Any], args: Tuple[Any, ...]):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock with the call_later surface of an asyncio loop"""

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: List[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback, args)
        self._handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self._handles if not h.cancelled and h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._handles.remove(handle)
            self.now = max(self.now, handle.when)
            handle.callback(*handle.args)
        self.now = target
        self._handles = [h for h in self._handles if not h.cancelled]

    def tick(self, count: int = 1) -> None:
        for _ in range(count):
            self.advance(1.0)

    def pending(self) -> List[FakeHandle]:
        return [h for h in self._handles if not h.cancelled]

    def pending_ticks(self) -> int:
        return sum(1 for h in self.pending() if getattr(h.callback, "__name__", "") == "_tick")


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> KeyValueStore:
    return KeyValueStore(create_session_factory(engine))


@pytest.fixture
def session_repo(store) -> SessionRepository:
    return SessionRepository(store)


@pytest.fixture
def note_repo(store) -> ReflectionNoteRepository:
    return ReflectionNoteRepository(store)


@pytest.fixture
def diary_repo(store) -> DiaryRepository:
    return DiaryRepository(store)


@pytest.fixture
def settings_repo(store) -> SettingsRepository:
    return SettingsRepository(store)


@pytest.fixture
def offline_reflection() -> ReflectionService:
    return ReflectionService(lambda: ReflectionApiConfig(), rng=random.Random(7))


@pytest.fixture
def timer(scheduler) -> CountdownTimer:
    return CountdownTimer(scheduler)


@pytest.fixture
def finalizer(timer, scheduler, session_repo, note_repo, offline_reflection) -> SessionFinalizer:
    return SessionFinalizer(timer, scheduler, session_repo, note_repo, offline_reflection)


@pytest.fixture
def binding(timer, finalizer):
    view = TimerViewBinding(timer, finalizer)
    yield view
    view.close()
