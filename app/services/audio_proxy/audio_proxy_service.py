"""
Audio Proxy Service

Relays guided-audio files from a small set of trusted hosts so the player
can seek (Range requests) without cross-origin or redirect problems.
"""

import logging
from typing import AsyncIterator, Dict, Optional
from urllib.parse import urlsplit

import httpx

logger = logging.getLogger(__name__)

ALLOWED_HOSTS = [
    "drive.google.com",
    "docs.google.com",
    "drive.usercontent.google.com",  # Google's content host after redirect
    "raw.githubusercontent.com",
]

MAX_REDIRECTS = 5
PROXY_USER_AGENT = "meditation-audio-proxy/1.0"
CACHE_CONTROL = "public, max-age=300"

FORWARDED_RESPONSE_HEADERS = (
    "content-type",
    "content-length",
    "content-encoding",
    "accept-ranges",
    "content-range",
)


class AudioProxyError(Exception):
    """Request rejected before or while reaching upstream"""

    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


def is_allowed_host(url: str) -> bool:
    """True for http(s) URLs whose host is an allowed host or one of its subdomains"""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False

    if parts.scheme not in ("http", "https"):
        return False

    host = (parts.hostname or "").lower()
    return any(host == allowed or host.endswith("." + allowed) for allowed in ALLOWED_HOSTS)


class UpstreamAudio:
    """An open upstream response; must be closed once streamed"""

    def __init__(self, client: httpx.AsyncClient, response: httpx.Response):
        self._client = client
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def forwarded_headers(self) -> Dict[str, str]:
        headers = {}
        for name in FORWARDED_RESPONSE_HEADERS:
            value = self.response.headers.get(name)
            if value:
                headers[name] = value
        return headers

    async def iter_body(self) -> AsyncIterator[bytes]:
        """Upstream bytes exactly as received (no content decoding)"""
        async for chunk in self.response.aiter_raw():
            yield chunk

    async def aclose(self) -> None:
        await self.response.aclose()
        await self._client.aclose()


class AudioProxyService:
    """Validates relay requests and opens upstream streams"""

    def __init__(
        self,
        token: Optional[str] = None,
        allowed_origin: str = "*",
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._token = token
        self._allowed_origin = allowed_origin
        self._transport = transport

    @property
    def requires_token(self) -> bool:
        return bool(self._token)

    def cors_headers(self) -> Dict[str, str]:
        return {"Access-Control-Allow-Origin": self._allowed_origin}

    def success_headers(self, upstream: UpstreamAudio) -> Dict[str, str]:
        return {
            **upstream.forwarded_headers(),
            **self.cors_headers(),
            "Cache-Control": CACHE_CONTROL,
        }

    def validate(self, url: Optional[str], token: Optional[str]) -> str:
        """
        Check token, presence of url and host allow-list, in that order.

        Returns:
            The url to fetch

        Raises:
            AudioProxyError: 401, 400 or 403
        """
        if self.requires_token and token != self._token:
            raise AudioProxyError(401, "unauthorized")

        if not url:
            raise AudioProxyError(400, "missing url")

        if not is_allowed_host(url):
            logger.warning(f"Rejected audio proxy request for host outside allow-list: {url}")
            raise AudioProxyError(403, "host not allowed")

        return url

    async def open(self, url: str, range_header: Optional[str] = None) -> UpstreamAudio:
        """
        Fetch url, following redirects that stay on allowed hosts.

        Raises:
            AudioProxyError: 403 on a redirect to a disallowed host,
                502 on transport failure or a non-success upstream status
        """
        headers = {"User-Agent": PROXY_USER_AGENT}
        if range_header:
            headers["Range"] = range_header

        client = httpx.AsyncClient(transport=self._transport, follow_redirects=False)
        try:
            request = client.build_request("GET", url, headers=headers)
            response = await client.send(request, stream=True)

            redirects = 0
            while response.is_redirect:
                next_request = response.next_request
                await response.aclose()

                if next_request is None or redirects >= MAX_REDIRECTS:
                    raise AudioProxyError(502, "too many redirects")
                if not is_allowed_host(str(next_request.url)):
                    logger.warning(f"Upstream redirected outside allow-list: {next_request.url}")
                    raise AudioProxyError(403, "host not allowed")

                redirects += 1
                response = await client.send(next_request, stream=True)

            if not response.is_success:
                logger.error(f"Upstream fetch failed: {response.status_code} {url}")
                await response.aclose()
                raise AudioProxyError(502, f"upstream {response.status_code}")

        except AudioProxyError:
            await client.aclose()
            raise
        except httpx.HTTPError as e:
            logger.error(f"Upstream fetch error for {url}: {e}")
            await client.aclose()
            raise AudioProxyError(502, "upstream fetch failed")

        return UpstreamAudio(client, response)
