"""
Sendly Python SDK

Send SMS, manage webhooks and verify phone numbers with the Sendly API.
"""

from .client import VERSION, SendlyClient
from .config import SendlySettings, load_settings
from .models.errors import (
    APIError,
    AuthenticationError,
    ErrorKind,
    InsufficientCreditsError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SendlyError,
    ServerError,
    TimeoutError,
    ValidationError,
    WebhookSignatureError,
)
from .models.message import Message, MessageList, MessageStatus
from .models.webhook import (
    Webhook,
    WebhookCreatedResponse,
    WebhookDelivery,
    WebhookEvent,
    WebhookEventType,
    WebhookMessageData,
)
from .models.account import Account, ApiKey, Credits, CreditTransaction
from .models.verification import (
    CheckVerificationResponse,
    SendVerificationResponse,
    Verification,
)
from .webhooks import SIGNATURE_HEADER, generate_signature, parse_event, verify_signature

__version__ = VERSION

__all__ = [
    # Client
    "SendlyClient",
    "SendlySettings",
    "load_settings",
    # Errors
    "ErrorKind",
    "SendlyError",
    "APIError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TimeoutError",
    "ValidationError",
    "WebhookSignatureError",
    # Message models
    "Message",
    "MessageList",
    "MessageStatus",
    # Webhook models
    "Webhook",
    "WebhookCreatedResponse",
    "WebhookDelivery",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookMessageData",
    # Account models
    "Account",
    "ApiKey",
    "Credits",
    "CreditTransaction",
    # Verification models
    "CheckVerificationResponse",
    "SendVerificationResponse",
    "Verification",
    # Webhook verification
    "SIGNATURE_HEADER",
    "generate_signature",
    "parse_event",
    "verify_signature",
]
