"""Guided audio endpoints and relay"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from app.models.audio import GuidedTrack
from app.runtime import get_audio_proxy
from app.services.audio_proxy import AudioProxyError, AudioProxyService
from app.services.audio_proxy.guided_tracks import GUIDED_TRACKS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["audio"])


@router.get("/api/audio/tracks", response_model=List[GuidedTrack])
async def list_tracks():
    """Guided meditation tracks available to the player"""
    return GUIDED_TRACKS


@router.get("/proxy")
async def proxy_audio(
    url: Optional[str] = Query(None, description="Upstream audio URL"),
    t: Optional[str] = Query(None, description="Access token, when the relay requires one"),
    range_header: Optional[str] = Header(None, alias="range"),
    proxy: AudioProxyService = Depends(get_audio_proxy)
):
    """
    Relay an audio file from an allowed host.

    Raises:
        401: Token required and missing or wrong
        400: url missing
        403: Host (or a redirect target) not on the allow-list
        502: Upstream unreachable or returned an error status
    """
    try:
        target = proxy.validate(url, t)
        upstream = await proxy.open(target, range_header)

    except AudioProxyError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail, headers=proxy.cors_headers())
    except Exception as e:
        logger.error(f"Audio proxy error: {e}")
        raise HTTPException(status_code=500, detail="proxy error", headers=proxy.cors_headers())

    return StreamingResponse(
        upstream.iter_body(),
        status_code=upstream.status_code,
        headers=proxy.success_headers(upstream),
        background=BackgroundTask(upstream.aclose),
    )
