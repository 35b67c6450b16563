"""
Webhook signature verification and event parsing.

Sendly signs every webhook delivery with the endpoint's secret and sends the
result in the ``X-Sendly-Signature`` header as ``sha256=<hex digest>``. The
digest is computed over the raw request body, so verify the bytes exactly as
received, before any JSON decoding.

Example:
    ```python
    from sendly.webhooks import SIGNATURE_HEADER, parse_event
    from sendly import WebhookSignatureError

    @app.post("/webhooks/sendly")
    async def handle(request: Request):
        payload = await request.body()
        try:
            event = parse_event(payload, request.headers.get(SIGNATURE_HEADER), secret)
        except WebhookSignatureError:
            return Response(status_code=401)

        if event.type == "message.delivered":
            print(f"Delivered: {event.data.message_id}")
        return Response(status_code=200)
    ```
"""
from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .logging import get_logger
from .models.errors import WebhookSignatureError
from .models.webhook import WebhookEvent

logger = get_logger(__name__)

SIGNATURE_HEADER = "X-Sendly-Signature"
SIGNATURE_PREFIX = "sha256="
REQUIRED_EVENT_FIELDS = ("id", "type", "data", "created_at")

Payload = Union[bytes, bytearray, str]


def _as_bytes(value: Payload) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def generate_signature(payload: Payload, secret: str) -> str:
    """
    Compute the signature Sendly would send for a payload.

    Useful for signing test payloads.

    Args:
        payload: Raw request body
        secret: Webhook signing secret

    Returns:
        Signature string in the form ``sha256=<hex>``
    """
    digest = hmac.new(_as_bytes(secret), _as_bytes(payload), hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(
    payload: Optional[Payload],
    signature: Optional[str],
    secret: Optional[str],
) -> bool:
    """
    Verify a webhook signature.

    Never raises: missing or empty inputs simply fail verification.

    Args:
        payload: Raw request body, as bytes or as a str that is UTF-8 encoded
        signature: Value of the ``X-Sendly-Signature`` header
        secret: Webhook signing secret from the dashboard

    Returns:
        True if the signature matches
    """
    if not payload or not isinstance(payload, (bytes, bytearray, str)):
        return False
    if not signature or not isinstance(signature, str):
        return False
    if not secret or not isinstance(secret, str):
        return False

    try:
        expected = generate_signature(payload, secret)
        received = signature.encode("utf-8")
    except UnicodeEncodeError:
        return False

    # compare_digest checks length first, then scans every byte
    return hmac.compare_digest(expected.encode("utf-8"), received)


def _has_required_fields(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    if any(data.get(field) is None for field in REQUIRED_EVENT_FIELDS):
        return False
    return isinstance(data["data"], dict)


def parse_event(
    payload: Optional[Payload],
    signature: Optional[str],
    secret: Optional[str],
) -> WebhookEvent:
    """
    Verify and parse a webhook event.

    The signature is checked before the payload is decoded, so structural
    errors are only reported for authentic payloads.

    Args:
        payload: Raw request body
        signature: Value of the ``X-Sendly-Signature`` header
        secret: Webhook signing secret

    Returns:
        The validated event

    Raises:
        WebhookSignatureError: If the signature is invalid or the payload is
            not a well-formed event
    """
    if not verify_signature(payload, signature, secret):
        logger.warning("Rejected webhook with invalid signature")
        raise WebhookSignatureError("Invalid webhook signature")

    try:
        data = json.loads(_as_bytes(payload))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise WebhookSignatureError(f"Failed to parse webhook payload: {e}") from e

    if not _has_required_fields(data):
        raise WebhookSignatureError("Invalid event structure")

    try:
        event = WebhookEvent.model_validate(data)
    except PydanticValidationError as e:
        raise WebhookSignatureError("Invalid event structure") from e

    logger.debug("Parsed webhook event %s (%s)", event.id, event.type)
    return event
