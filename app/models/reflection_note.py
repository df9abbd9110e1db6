"""Reflection note domain model"""
from datetime import datetime
from pydantic import BaseModel, Field


class ReflectionNote(BaseModel):
    """Post-session reflection attached after a session is finalized"""
    id: str
    title: str
    minutes: int = Field(ge=0)  # 0 for diary suggestions
    text: str = Field(min_length=1)
    date: datetime

    class Config:
        frozen = True
