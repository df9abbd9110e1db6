"""SQLAlchemy ORM models"""

from app.db.models.key_value import KeyValueEntry

__all__ = ["KeyValueEntry"]
