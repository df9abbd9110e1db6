"""Meditation runtime - owns the countdown and the finalization pipeline"""
import logging
from typing import Optional

import httpx
from fastapi import Request
from sqlalchemy.engine import Engine

from app import config
from app.db.session import create_session_factory
from app.infra.storage.key_value_store import KeyValueStore
from app.infra.storage.repositories import (
    DiaryRepository,
    ReflectionNoteRepository,
    SessionRepository,
    SettingsRepository,
)
from app.services.audio_proxy import AudioProxyService
from app.services.reflection import ReflectionService
from app.services.session import SessionFinalizer, TimerViewBinding
from app.services.timer import CountdownTimer, Scheduler

logger = logging.getLogger(__name__)


class MeditationRuntime:
    """
    Explicitly owned container for the single countdown of the process
    and everything that reads or writes it.
    """

    def __init__(
        self,
        engine: Engine,
        scheduler: Scheduler,
        reflection_transport: Optional[httpx.AsyncBaseTransport] = None,
        min_session_seconds: Optional[int] = None
    ):
        self.engine = engine
        self.scheduler = scheduler
        self.store = KeyValueStore(create_session_factory(engine))

        self.sessions = SessionRepository(self.store)
        self.notes = ReflectionNoteRepository(self.store)
        self.diary = DiaryRepository(self.store)
        self.settings = SettingsRepository(self.store)

        self.reflection_service = ReflectionService(
            self.settings.reflection_api_config,
            transport=reflection_transport,
        )

        self.timer = CountdownTimer(scheduler)
        self.finalizer = SessionFinalizer(
            self.timer,
            scheduler,
            self.sessions,
            self.notes,
            self.reflection_service,
            min_elapsed_seconds=(
                config.MIN_SESSION_SECONDS if min_session_seconds is None else min_session_seconds
            ),
        )

        # The HTTP API acts as one long-lived view over the countdown
        self.view = TimerViewBinding(self.timer, self.finalizer)

    def open_view(self, meditation_type: Optional[str] = None) -> TimerViewBinding:
        """Attach an additional view to the shared countdown"""
        if meditation_type:
            return TimerViewBinding(self.timer, self.finalizer, meditation_type)
        return TimerViewBinding(self.timer, self.finalizer)

    def reset(self) -> None:
        """Stop any running countdown and wipe all stored data"""
        if self.timer.running:
            # Zero elapsed time, so the expiry observed by the view records nothing
            self.finalizer.record_start(0)
            self.timer.stop(True)
        self.store.clear()
        logger.info("Runtime reset: countdown stopped and storage cleared")

    def close(self) -> None:
        """Tear down the API view; in-flight reflections are discarded"""
        self.view.close()
        if self.timer.running:
            self.timer.stop(False)
        logger.info("Meditation runtime closed")


def get_runtime(request: Request) -> MeditationRuntime:
    """Dependency function for FastAPI routes"""
    return request.app.state.runtime


def get_audio_proxy(request: Request) -> AudioProxyService:
    """Dependency function for the audio relay route"""
    return request.app.state.audio_proxy


def build_audio_proxy(transport: Optional[httpx.AsyncBaseTransport] = None) -> AudioProxyService:
    return AudioProxyService(
        token=config.PROXY_TOKEN,
        allowed_origin=config.ALLOWED_ORIGIN,
        transport=transport,
    )
