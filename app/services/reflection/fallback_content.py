"""Fallback content for when the reflection API is unavailable"""
import random
from typing import Optional

from .models.reflection_result import LocalReflection

REFLECTION_PROMPTS = [
    "Você percebeu alguma resistência hoje?",
    "Onde a atenção se dispersou?",
    "Qual sensação no corpo chamou mais atenção?",
    "Houve raiva, apego ou aversão — como respondeu?",
]


def reflection_title(meditation_type: str) -> str:
    return f"Reflexão pós-sessão — {meditation_type}"


def get_fallback_reflection(
    meditation_type: str,
    minutes: int,
    rng: Optional[random.Random] = None
) -> LocalReflection:
    """
    Return a locally generated reflection.
    The prompt is picked uniformly at random; the shape is always the same.
    """
    pick = (rng or random).choice(REFLECTION_PROMPTS)
    return LocalReflection(
        title=reflection_title(meditation_type),
        minutes=minutes,
        text=f"{pick} (sessão de {minutes} min). Tente observar com curiosidade e sem julgamento.",
    )
