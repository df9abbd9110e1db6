"""Diary entry domain model"""
from datetime import datetime
from pydantic import BaseModel, field_validator


class DiaryEntryCreate(BaseModel):
    """Diary entry creation model"""
    text: str

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("text must not be empty")
        return value


class DiaryEntry(BaseModel):
    """Complete diary entry"""
    id: str
    date: datetime
    text: str


class DiarySuggestion(BaseModel):
    """Suggested reflection text for a new diary entry"""
    text: str
