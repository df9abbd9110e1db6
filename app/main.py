import logging

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

import asyncio  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from typing import Optional  # noqa: E402

import httpx  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from app.api.base import api_router  # noqa: E402
from app.db.session import create_db_engine  # noqa: E402
from app.runtime import MeditationRuntime, build_audio_proxy  # noqa: E402

logger = logging.getLogger(__name__)


def create_app(
    database_url: Optional[str] = None,
    reflection_transport: Optional[httpx.AsyncBaseTransport] = None,
    proxy_transport: Optional[httpx.AsyncBaseTransport] = None,
    min_session_seconds: Optional[int] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        database_url: Storage URL (defaults to DATABASE_URL)
        reflection_transport: httpx transport for the reflection API
        proxy_transport: httpx transport for upstream audio hosts
        min_session_seconds: Override for MIN_SESSION_SECONDS
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # The countdown ticks on the loop serving requests
        engine = create_db_engine(database_url)
        runtime = MeditationRuntime(
            engine,
            asyncio.get_running_loop(),
            reflection_transport=reflection_transport,
            min_session_seconds=min_session_seconds,
        )
        app.state.runtime = runtime
        logger.info("Meditation runtime started")
        try:
            yield
        finally:
            runtime.close()
            engine.dispose()

    app = FastAPI(
        title="Meditation Backend API",
        description="Meditation timer, session history, reflections and guided audio relay",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.audio_proxy = build_audio_proxy(proxy_transport)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Specify your frontend URL in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include all API routes
    app.include_router(api_router)

    @app.get("/")
    def read_root():
        return {
            "message": "Meditation Backend API",
            "docs": "/docs",
            "version": "1.0.0"
        }

    return app


app = create_app()
