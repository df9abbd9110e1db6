"""SQLAlchemy ORM model for the kv_store table"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from app.db.base import Base


class KeyValueEntry(Base):
    """
    One persisted key with its JSON-serialized value.
    Backs the sessions, notes, diary and settings entries.
    """
    __tablename__ = "kv_store"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key='{self.key}')>"
