"""Meditation session domain model"""
from datetime import datetime
from pydantic import BaseModel, Field


class SessionRecord(BaseModel):
    """A finished meditation session, newest first in the session list"""
    id: str
    date: datetime
    minutes: int = Field(gt=0)
    type: str

    class Config:
        frozen = True


class SessionStats(BaseModel):
    """Aggregates shown on the dashboard"""
    count: int
    total_minutes: int
    days_logged: int
