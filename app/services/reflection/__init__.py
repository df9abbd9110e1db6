"""Post-session reflection generation"""
from .reflection_service import ReflectionService
from .fallback_content import get_fallback_reflection

__all__ = ["ReflectionService", "get_fallback_reflection"]
