"""Reflection Service - remote reflection API with local fallback"""
import logging
import random
from typing import Callable, Optional

import httpx

from .fallback_content import get_fallback_reflection, reflection_title
from .models.reflection_result import (
    LocalReflection,
    ReflectionApiConfig,
    ReflectionResult,
    RemoteReflection,
)

logger = logging.getLogger(__name__)


class ReflectionService:
    """Produces post-session reflections, preferring the remote API"""

    def __init__(
        self,
        config_provider: Callable[[], ReflectionApiConfig],
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Args:
            config_provider: Returns the current API configuration on every call,
                so settings changes apply without a restart
            transport: Optional httpx transport (tests inject a MockTransport)
            rng: Random source for the fallback prompt choice
        """
        self._config_provider = config_provider
        self._transport = transport
        self._rng = rng

    async def reflect(
        self,
        meditation_type: str,
        minutes: int,
        default_title: Optional[str] = None
    ) -> ReflectionResult:
        """
        Get a reflection for a finished session.

        Args:
            meditation_type: Meditation variant label
            minutes: Session length in minutes
            default_title: Title used when the remote response has none

        Returns:
            RemoteReflection when the API answered with usable content,
            LocalReflection otherwise. Never raises.
        """
        try:
            remote = await self.request_remote(meditation_type, minutes, default_title)
        except Exception as e:
            logger.error(f"Unexpected error requesting reflection for {meditation_type}: {e}")
            remote = None

        if remote is not None:
            return remote

        return self.local_reflection(meditation_type, minutes)

    def local_reflection(self, meditation_type: str, minutes: int) -> LocalReflection:
        return get_fallback_reflection(meditation_type, minutes, self._rng)

    async def request_remote(
        self,
        meditation_type: str,
        minutes: int,
        default_title: Optional[str] = None
    ) -> Optional[RemoteReflection]:
        """
        Call the remote API once.

        Returns:
            RemoteReflection, or None when the API is not configured or the
            call failed in any expected way (network, status, body shape)
        """
        api_config = self._config_provider()
        if not api_config.is_configured:
            return None

        headers = {"Content-Type": "application/json"}
        if api_config.api_key:
            headers["Authorization"] = f"Bearer {api_config.api_key}"

        payload = {"meditationType": meditation_type, "minutes": minutes}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(api_config.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Reflection API network error: {e}")
            return None

        if not response.is_success:
            logger.error(f"Reflection API returned {response.status_code}: {response.text[:500]}")
            return None

        fields = self._parse_body(response)
        if fields is None:
            logger.warning("Reflection API response had no usable text")
            return None

        text, title = fields
        return RemoteReflection(
            title=title or default_title or reflection_title(meditation_type),
            minutes=minutes,
            text=text,
        )

    @staticmethod
    def _parse_body(response: httpx.Response) -> Optional[tuple]:
        """Extract (text, title) from a JSON or plain-text body"""
        content_type = response.headers.get("content-type", "")

        if "application/json" in content_type:
            try:
                data = response.json()
            except ValueError as e:
                logger.warning(f"Reflection API JSON parse failed, using raw text: {e}")
            else:
                if not isinstance(data, dict):
                    return None
                text = data.get("text")
                if not isinstance(text, str) or not text.strip():
                    return None
                title = data.get("title")
                if not isinstance(title, str) or not title.strip():
                    title = None
                return text, title

        text = response.text.strip()
        return (text, None) if text else None
