"""Database session configuration"""

import logging
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import DATABASE_URL
from app.db.base import Base

logger = logging.getLogger(__name__)

# In-memory SQLite only survives while its single connection is kept open
_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create a SQLAlchemy engine for the local key-value store.

    Args:
        database_url: SQLAlchemy URL (defaults to DATABASE_URL from config)

    Returns:
        Engine with the schema created
    """
    url = database_url or DATABASE_URL
    kwargs = {}

    if url.startswith("sqlite"):
        # The event loop and the test client may run on different threads
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _MEMORY_URLS:
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, echo=False, **kwargs)

    Base.metadata.create_all(engine)
    logger.info(f"Storage engine ready: {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the given engine"""
    return sessionmaker(
        bind=engine,
        class_=Session,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def ping(engine: Engine) -> bool:
    """Return True when the database answers a trivial query"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database ping failed: {e}")
        return False
