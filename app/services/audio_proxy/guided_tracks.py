"""Guided meditation track catalog"""
from typing import List

from app.models.audio import GuidedTrack

GUIDED_TRACKS: List[GuidedTrack] = [
    GuidedTrack(id="anapana-1", title="Anapana - Foco na Respiração (10m)", src="/audios/anapana.mp3"),
    GuidedTrack(id="scan-1", title="Scan Corporal - Vipassana (20m)", src="/audios/vipassana.mp3"),
    GuidedTrack(id="metta-1", title="Metta Bhavana - Amor e Bondade (15m)", src="/audios/metabavana.mp3"),
]
