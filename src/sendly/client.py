"""
Sendly Python SDK client.

Example usage:
    ```python
    from sendly import SendlyClient

    with SendlyClient(api_key="sk_live_v1_xxx") as client:
        message = client.messages.send(to="+15551234567", text="Hello!")
        print(message.id, message.status)
    ```

Every API call goes through :meth:`SendlyClient._request`, which owns
request construction, response classification and the retry policy:

- ``RateLimitError`` carrying a ``retry_after`` is retried after sleeping
  exactly that many seconds. Without ``retry_after`` it is raised at once.
- ``ServerError`` is retried with exponential backoff: 2s, 4s, 8s, ...
- Every other error is raised immediately.

Both retryable kinds draw from the same per-call budget of ``max_retries``.
There is no overall deadline: a large server-directed ``retry_after`` can
block well beyond ``timeout``, so callers that need one must enforce it.
"""
from __future__ import annotations

import json
import re
import time
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional
from urllib.parse import urlencode

import httpx

from .config import CONNECT_TIMEOUT, load_settings
from .logging import get_logger, mask_api_key, mask_headers, mask_text
from .models.errors import (
    AuthenticationError,
    ErrorKind,
    NetworkError,
    SendlyError,
    TimeoutError,
    ValidationError,
    classify,
)
from .resources.account import AccountResource
from .resources.messages import MessagesResource
from .resources.verify import VerifyResource
from .resources.webhooks import WebhooksResource

logger = get_logger(__name__)

VERSION = "1.0.0"
USER_AGENT = f"sendly-python/{VERSION}"

HttpMethod = Literal["GET", "POST", "PATCH", "DELETE"]
SUPPORTED_METHODS = frozenset({"GET", "POST", "PATCH", "DELETE"})
BODYLESS_METHODS = frozenset({"GET", "DELETE"})

_API_KEY_PATTERN = re.compile(r"sk_(test|live)_v1_[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class Credential:
    """A validated Sendly API key.

    Attributes:
        api_key: The full key
        environment: ``"test"`` or ``"live"``
    """

    api_key: str = field(repr=False)
    environment: str

    @classmethod
    def parse(cls, api_key: Optional[str]) -> "Credential":
        """Validate an API key.

        Raises:
            AuthenticationError: If the key is missing or malformed
        """
        if not api_key:
            raise AuthenticationError("API key is required")
        match = _API_KEY_PATTERN.fullmatch(api_key) if isinstance(api_key, str) else None
        if match is None:
            raise AuthenticationError(
                "Invalid API key format. Expected sk_test_v1_xxx or sk_live_v1_xxx"
            )
        return cls(api_key=api_key, environment=match.group(1))

    @property
    def is_test(self) -> bool:
        return self.environment == "test"

    @property
    def masked(self) -> str:
        return mask_api_key(self.api_key)


class SendlyClient:
    """
    Sendly API client.

    Provides access to all Sendly API resources:
    - messages: Send, schedule and batch SMS messages
    - webhooks: Manage webhook endpoints
    - account: Account details, credits and API keys
    - verify: Phone number verification

    Arguments left as ``None`` fall back to ``SENDLY_*`` environment
    variables (see :class:`sendly.config.SendlySettings`).

    Args:
        api_key: Your API key (``sk_test_v1_...`` or ``sk_live_v1_...``)
        base_url: Sendly API base URL
        timeout: Read timeout in seconds (default: 30); connecting is
            always limited to 10 seconds
        max_retries: Maximum number of retries per call (default: 3)
        http_client: Optional preconfigured ``httpx.Client``; the caller
            keeps ownership of it

    Raises:
        AuthenticationError: If the API key is missing or malformed
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        settings = load_settings()

        self._credential = Credential.parse(api_key if api_key is not None else settings.api_key)
        self._base_url = (base_url if base_url is not None else settings.base_url).rstrip("/")
        self._timeout = float(timeout if timeout is not None else settings.timeout)
        self._max_retries = max_retries if max_retries is not None else settings.max_retries

        if self._timeout <= 0:
            raise ValueError("timeout must be positive")
        if self._max_retries < 0:
            raise ValueError("max_retries must be >= 0")

        self._client = http_client
        self._owns_client = http_client is None

        # Initialize resources
        self.messages = MessagesResource(self)
        self.webhooks = WebhooksResource(self)
        self.account = AccountResource(self)
        self.verify = VerifyResource(self)

    @property
    def api_key(self) -> str:
        return self._credential.api_key

    @property
    def environment(self) -> str:
        """``"test"`` or ``"live"``, taken from the API key."""
        return self._credential.environment

    @property
    def is_test_mode(self) -> bool:
        return self._credential.is_test

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def __repr__(self) -> str:
        return f"SendlyClient(base_url={self._base_url!r}, api_key={self._credential.masked!r})"

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client()
            self._owns_client = True
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._credential.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    def _build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Join base URL and path and append URL-encoded query parameters.

        Parameters keep their insertion order; ``None`` values are dropped.
        """
        url = f"{self._base_url}{path}"
        if not params:
            return url

        pairs: list[tuple[str, str]] = []
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, (dict, list, tuple, set)):
                raise ValidationError(f"Query parameter '{key}' must be a scalar value")
            if isinstance(value, bool):
                value = "true" if value else "false"
            pairs.append((str(key), str(value)))

        if not pairs:
            return url
        return f"{url}?{urlencode(pairs)}"

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        text = response.text
        if not text or not text.strip():
            return {}
        try:
            return json.loads(text)
        except ValueError:
            # plain-text bodies become the error message
            return {"message": text}

    def _send(self, method: str, url: str, content: Optional[bytes]) -> Any:
        """Perform a single attempt and classify its outcome."""
        client = self._get_client()
        headers = self._headers()
        logger.debug("Request headers: %s", mask_headers(headers))
        try:
            response = client.request(
                method,
                url,
                content=content,
                headers=headers,
                timeout=httpx.Timeout(self._timeout, connect=CONNECT_TIMEOUT),
            )
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Request timed out after {self._timeout:g} seconds") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Connection failed: {mask_text(str(e))}") from e

        body = self._parse_body(response)
        if 200 <= response.status_code < 300:
            return body
        raise classify(response.status_code, body)

    def _backoff_delay(self, error: SendlyError, attempt: int) -> Optional[float]:
        """Seconds to wait before retrying, or None when the error is final.

        Args:
            error: The error raised by the failed attempt
            attempt: Retries already performed for this call
        """
        if attempt >= self._max_retries:
            return None
        if error.kind is ErrorKind.RATE_LIMIT:
            return getattr(error, "retry_after", None)
        if error.kind is ErrorKind.SERVER:
            return float(2 ** (attempt + 1))
        return None

    def _request(
        self,
        method: HttpMethod,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> Any:
        """Make an HTTP request with retry logic.

        Args:
            method: HTTP method
            path: API path relative to the base URL, starting with ``/``
            params: Query parameters (scalar values only)
            body: JSON-serializable request body; ignored for GET and DELETE

        Returns:
            Parsed JSON response (object or array)

        Raises:
            SendlyError: The classified failure of the last attempt
        """
        method = method.upper()  # type: ignore[assignment]
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        url = self._build_url(path, params)
        content = None
        if body is not None and method not in BODYLESS_METHODS:
            content = json.dumps(body).encode("utf-8")

        attempt = 0
        while True:
            logger.debug("%s %s (retry %d/%d)", method, url, attempt, self._max_retries)
            try:
                return self._send(method, url, content)
            except SendlyError as error:
                delay = self._backoff_delay(error, attempt)
                if delay is None:
                    raise
                attempt += 1
                logger.warning(
                    "%s %s failed with %s; retry %d/%d in %.2fs",
                    method,
                    path,
                    error.code,
                    attempt,
                    self._max_retries,
                    delay,
                )
                time.sleep(delay)

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Make a GET request."""
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Optional[Any] = None) -> Any:
        """Make a POST request."""
        return self._request("POST", path, body=body)

    def patch(self, path: str, body: Optional[Any] = None) -> Any:
        """Make a PATCH request."""
        return self._request("PATCH", path, body=body)

    def delete(self, path: str) -> Any:
        """Make a DELETE request."""
        return self._request("DELETE", path)

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if not self._owns_client or self._client is None:
            return
        if not self._client.is_closed:
            self._client.close()
        self._client = None

    def __enter__(self) -> "SendlyClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
