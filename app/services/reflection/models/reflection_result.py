"""Reflection result models"""
from datetime import datetime, timezone
from typing import Literal, Union

from pydantic import BaseModel, Field

from app.models.reflection_note import ReflectionNote
from app.utils.id_generator import generate_id


class ReflectionApiConfig(BaseModel):
    """Where and how to reach the remote reflection API"""
    enabled: bool = False
    url: str = ""
    api_key: str = ""

    @property
    def is_configured(self) -> bool:
        return self.enabled and bool(self.url.strip())


class _ReflectionBase(BaseModel):
    title: str
    text: str = Field(min_length=1)
    minutes: int = Field(ge=0)
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_note(self) -> ReflectionNote:
        """Build a persistable note with a fresh id"""
        return ReflectionNote(
            id=generate_id("ai-"),
            title=self.title,
            minutes=self.minutes,
            text=self.text,
            date=self.date,
        )


class RemoteReflection(_ReflectionBase):
    """Reflection produced by the remote API"""
    source: Literal["remote"] = "remote"


class LocalReflection(_ReflectionBase):
    """Reflection produced by the local fallback generator"""
    source: Literal["local"] = "local"


ReflectionResult = Union[RemoteReflection, LocalReflection]
