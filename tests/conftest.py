"""
Pytest configuration and fixtures for Sendly SDK tests.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx
import pytest

from sendly import SendlyClient

BASE_URL = "https://api.sendly.test/api/v1"


@dataclass
class _MockEntry:
    method: str
    url: str
    response: Optional[httpx.Response] = None
    exception: Optional[Exception] = None


@dataclass
class _RecordedRequest:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None
    timeout: Optional[httpx.Timeout] = None

    def json(self) -> Any:
        return json.loads(self.content) if self.content else None


class _LocalHTTPXMock:
    """Minimal pytest-httpx-style mock that also records outgoing requests."""

    def __init__(self) -> None:
        self._entries: list[_MockEntry] = []
        self.requests: list[_RecordedRequest] = []

    def add_response(
        self,
        *,
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        if content is None and json is not None:
            content = json_dumps_bytes(json)
            response_headers = {"content-type": "application/json"}
            if headers:
                response_headers.update(headers)
        else:
            response_headers = headers or {}

        request = httpx.Request(method.upper(), url)
        response = httpx.Response(
            status_code=status_code,
            headers=response_headers,
            content=content or b"",
            request=request,
        )
        self._entries.append(
            _MockEntry(method=method.upper(), url=url, response=response)
        )

    def add_exception(
        self,
        exception: Exception,
        *,
        url: str,
        method: str = "GET",
    ) -> None:
        self._entries.append(
            _MockEntry(method=method.upper(), url=url, exception=exception)
        )

    def _pop_match(self, method: str, url: str) -> _MockEntry:
        normalized_method = method.upper()
        normalized_url = _normalize_url(url)
        for idx, entry in enumerate(self._entries):
            if entry.method == normalized_method and _normalize_url(entry.url) == normalized_url:
                return self._entries.pop(idx)
        raise AssertionError(
            f"No mocked response for {normalized_method} {url}. "
            f"Available: {[f'{e.method} {e.url}' for e in self._entries]}"
        )

    @property
    def last_request(self) -> _RecordedRequest:
        assert self.requests, "No requests were made"
        return self.requests[-1]


def json_dumps_bytes(payload: Any) -> bytes:
    return json.dumps(payload, default=str).encode("utf-8")


def _normalize_url(url: str) -> str:
    parts = urlsplit(url)
    normalized_query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)), doseq=True)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, normalized_query, parts.fragment))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep SENDLY_* variables and stray .env files out of the tests."""
    for name in ("SENDLY_API_KEY", "SENDLY_BASE_URL", "SENDLY_TIMEOUT", "SENDLY_MAX_RETRIES"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def httpx_mock(monkeypatch):
    """`httpx_mock` fixture patching the synchronous httpx client."""
    mock = _LocalHTTPXMock()

    def _sync_request(self, method, url, content=None, headers=None, timeout=None, **kwargs):
        mock.requests.append(
            _RecordedRequest(
                method=method.upper(),
                url=str(url),
                headers=dict(headers or {}),
                content=content,
                timeout=timeout,
            )
        )
        match = mock._pop_match(method, str(url))
        if match.exception is not None:
            raise match.exception
        assert match.response is not None
        return match.response

    monkeypatch.setattr(httpx.Client, "request", _sync_request)
    return mock


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    """Record backoff sleeps instead of waiting."""
    recorded: list[float] = []
    monkeypatch.setattr("sendly.client.time.sleep", recorded.append)
    return recorded


@pytest.fixture
def api_key() -> str:
    """Test API key."""
    return "sk_test_v1_abc123xyz"


@pytest.fixture
def base_url() -> str:
    """Test base URL."""
    return BASE_URL


@pytest.fixture
def client(api_key: str, base_url: str, sleeps) -> SendlyClient:
    """Create a test client."""
    client = SendlyClient(api_key=api_key, base_url=base_url)
    yield client
    client.close()


# Mock response data
MOCK_RESPONSES = {
    "message": {
        "id": "msg_abc123",
        "to": "+15551234567",
        "from": "+15550001111",
        "text": "Hello from Sendly",
        "status": "queued",
        "segments": 1,
        "creditsUsed": 1,
        "isSandbox": True,
        "senderType": "sandbox",
        "createdAt": "2025-01-20T00:00:00Z",
    },
    "webhook": {
        "id": "whk_abc123",
        "url": "https://example.com/webhooks/sendly",
        "events": ["message.delivered", "message.failed"],
        "is_active": True,
        "failure_count": 0,
        "circuit_state": "closed",
        "api_version": "2024-01",
        "created_at": "2025-01-20T00:00:00Z",
        "updated_at": "2025-01-20T00:00:00Z",
    },
    "delivery": {
        "id": "del_xyz789",
        "webhook_id": "whk_abc123",
        "event_id": "evt_123",
        "event_type": "message.delivered",
        "attempt_number": 1,
        "max_attempts": 6,
        "status": "failed",
        "response_status_code": 500,
        "created_at": "2025-01-20T00:00:00Z",
    },
    "verification": {
        "id": "ver_abc123",
        "status": "pending",
        "phone": "+15551234567",
        "deliveryStatus": "sent",
        "attempts": 0,
        "maxAttempts": 3,
        "channel": "sms",
        "expiresAt": "2025-01-20T00:10:00Z",
        "createdAt": "2025-01-20T00:00:00Z",
        "sandbox": True,
    },
}


@pytest.fixture
def mock_responses() -> dict:
    """Return mock response data."""
    return MOCK_RESPONSES
