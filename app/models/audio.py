"""Guided audio track model"""
from pydantic import BaseModel


class GuidedTrack(BaseModel):
    """A guided meditation track offered by the player"""
    id: str
    title: str
    src: str
