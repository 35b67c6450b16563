"""
Resources for the Sendly SDK.

Each resource is attached to :class:`sendly.SendlyClient` as an attribute.
"""
from .base import BaseResource
from .messages import MessagesResource
from .webhooks import WebhooksResource
from .account import AccountResource
from .verify import VerifyResource

__all__ = [
    "BaseResource",
    "MessagesResource",
    "WebhooksResource",
    "AccountResource",
    "VerifyResource",
]
