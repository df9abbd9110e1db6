import gzip

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.audio_proxy import AudioProxyService, is_allowed_host

AUDIO_URL = "https://raw.githubusercontent.com/example/audio/main/anapana.mp3"


class AudioStream(httpx.AsyncByteStream):
    """Unread upstream body, as a real network response would arrive"""

    def __init__(self, data: bytes):
        self._data = data

    async def __aiter__(self):
        yield self._data


class RecordingUpstream:
    def __init__(self, responder=None):
        self.requests = []
        self._responder = responder or self._audio

    @staticmethod
    def _audio(request):
        return httpx.Response(
            206,
            stream=AudioStream(b"0123456789"),
            headers={
                "content-type": "audio/mpeg",
                "content-length": "10",
                "accept-ranges": "bytes",
                "content-range": "bytes 0-9/100",
                "x-upstream-secret": "not forwarded",
            },
        )

    def __call__(self, request):
        self.requests.append(request)
        return self._responder(request)


def _client(upstream, proxy=None):
    app = create_app(database_url="sqlite://", proxy_transport=httpx.MockTransport(upstream))
    if proxy is not None:
        app.state.audio_proxy = proxy
    return TestClient(app)


@pytest.mark.parametrize("url, allowed", [
    ("https://drive.google.com/uc?id=1", True),
    ("https://drive.usercontent.google.com/download?id=1", True),
    ("https://raw.githubusercontent.com/a/b/c.mp3", True),
    ("https://evil.example.com/drive.google.com", False),
    ("https://drive.google.com.evil.example.com/x", False),
    ("ftp://drive.google.com/x", False),
    ("not a url", False),
])
def test_is_allowed_host(url, allowed):
    assert is_allowed_host(url) is allowed


def test_disallowed_host_is_rejected_without_fetch():
    upstream = RecordingUpstream()

    with _client(upstream) as client:
        response = client.get("/proxy", params={"url": "https://evil.example.com/track.mp3"})

    assert response.status_code == 403
    assert response.headers["access-control-allow-origin"] == "*"
    assert upstream.requests == []


def test_missing_url_is_rejected():
    upstream = RecordingUpstream()

    with _client(upstream) as client:
        response = client.get("/proxy")

    assert response.status_code == 400
    assert upstream.requests == []


def test_token_required_when_configured():
    upstream = RecordingUpstream()
    proxy = AudioProxyService(token="s3cret", transport=httpx.MockTransport(upstream))

    with _client(upstream, proxy) as client:
        missing = client.get("/proxy", params={"url": AUDIO_URL})
        wrong = client.get("/proxy", params={"url": AUDIO_URL, "t": "nope"})
        ok = client.get("/proxy", params={"url": AUDIO_URL, "t": "s3cret"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert ok.status_code == 206
    assert len(upstream.requests) == 1


def test_streams_body_and_forwards_range_headers():
    upstream = RecordingUpstream()

    with _client(upstream) as client:
        response = client.get("/proxy", params={"url": AUDIO_URL}, headers={"Range": "bytes=0-9"})

    assert response.status_code == 206
    assert response.content == b"0123456789"
    assert response.headers["content-type"] == "audio/mpeg"
    assert response.headers["content-range"] == "bytes 0-9/100"
    assert response.headers["accept-ranges"] == "bytes"
    assert response.headers["cache-control"] == "public, max-age=300"
    assert "x-upstream-secret" not in response.headers

    [request] = upstream.requests
    assert request.headers["range"] == "bytes=0-9"
    assert request.headers["user-agent"].startswith("meditation-audio-proxy")


def test_encoded_body_keeps_its_content_encoding():
    compressed = gzip.compress(b"audio-bytes")

    def respond(request):
        return httpx.Response(
            200,
            stream=AudioStream(compressed),
            headers={
                "content-type": "audio/mpeg",
                "content-encoding": "gzip",
                "content-length": str(len(compressed)),
            },
        )

    with _client(RecordingUpstream(respond)) as client:
        response = client.get("/proxy", params={"url": AUDIO_URL})

    assert response.status_code == 200
    assert response.headers["content-encoding"] == "gzip"
    assert response.content == b"audio-bytes"


def test_upstream_error_status_is_502():
    upstream = RecordingUpstream(lambda request: httpx.Response(404, text="gone"))

    with _client(upstream) as client:
        response = client.get("/proxy", params={"url": AUDIO_URL})

    assert response.status_code == 502
    assert response.json()["detail"] == "upstream 404"


def test_upstream_unreachable_is_502():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    with _client(RecordingUpstream(refuse)) as client:
        response = client.get("/proxy", params={"url": AUDIO_URL})

    assert response.status_code == 502


def test_follows_redirect_to_allowed_host():
    def respond(request):
        if request.url.host == "drive.google.com":
            return httpx.Response(302, headers={"location": "https://drive.usercontent.google.com/file.mp3"})
        return httpx.Response(200, stream=AudioStream(b"audio"), headers={"content-type": "audio/mpeg"})

    upstream = RecordingUpstream(respond)
    with _client(upstream) as client:
        response = client.get("/proxy", params={"url": "https://drive.google.com/uc?id=1"})

    assert response.status_code == 200
    assert response.content == b"audio"
    assert [r.url.host for r in upstream.requests] == ["drive.google.com", "drive.usercontent.google.com"]


def test_redirect_to_disallowed_host_is_rejected():
    def respond(request):
        return httpx.Response(302, headers={"location": "https://evil.example.com/file.mp3"})

    upstream = RecordingUpstream(respond)
    with _client(upstream) as client:
        response = client.get("/proxy", params={"url": "https://drive.google.com/uc?id=1"})

    assert response.status_code == 403
    assert [r.url.host for r in upstream.requests] == ["drive.google.com"]
