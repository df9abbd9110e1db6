"""Countdown state models"""
from pydantic import BaseModel, Field


class CountdownSnapshot(BaseModel):
    """Immutable copy of the countdown state at one instant"""
    seconds_left: int = Field(ge=0)
    running: bool

    class Config:
        frozen = True

    @property
    def is_expired(self) -> bool:
        """Zero seconds left and nothing ticking"""
        return self.seconds_left == 0 and not self.running
