"""
Logging helpers for the Sendly SDK.

The SDK logs through the standard library under the ``sendly`` logger
hierarchy and installs only a NullHandler; applications decide where records go.
Credentials are masked before they reach a log record.

Usage:
    from sendly.logging import get_logger, mask_api_key

    logger = get_logger(__name__)
    logger.debug("Using key %s", mask_api_key(api_key))
"""
from __future__ import annotations

import logging
import re
from typing import Mapping, Optional

MASK_PATTERN = "***"

SENSITIVE_HEADERS = frozenset({"authorization", "x-sendly-signature", "cookie"})

_INLINE_PATTERNS = (
    (re.compile(r"\b(sk_(?:test|live)_v1_)[A-Za-z0-9_-]+"), r"\1***"),
    (re.compile(r"(Bearer\s+)[A-Za-z0-9._-]+", re.IGNORECASE), r"\1***"),
    (re.compile(r"(sha256=)[0-9a-f]+", re.IGNORECASE), r"\1***"),
)

logging.getLogger("sendly").addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``sendly`` hierarchy."""
    if name != "sendly" and not name.startswith("sendly."):
        name = f"sendly.{name}"
    return logging.getLogger(name)


def mask_api_key(api_key: Optional[str], show_chars: int = 4) -> str:
    """Mask an API key, keeping its environment prefix and last characters.

    Args:
        api_key: The key to mask
        show_chars: Number of trailing characters to keep

    Returns:
        Masked key such as ``sk_test_v1_...c123``
    """
    if not api_key:
        return MASK_PATTERN
    match = re.match(r"^(sk_(?:test|live)_v1_)(.*)$", api_key)
    if match is None:
        return MASK_PATTERN
    prefix, suffix = match.groups()
    if len(suffix) <= show_chars * 2:
        return f"{prefix}{MASK_PATTERN}"
    return f"{prefix}...{suffix[-show_chars:]}"


def mask_text(text: str) -> str:
    """Mask credentials and signatures that appear inline in text."""
    for pattern, replacement in _INLINE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of HTTP headers with sensitive values masked."""
    return {
        key: MASK_PATTERN if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }
