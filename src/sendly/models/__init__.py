"""Sendly SDK Models."""
from .base import SendlyModel
from .message import Message, MessageList, MessageStatus, SenderType, SendMessageRequest
from .webhook import (
    Webhook,
    WebhookCreatedResponse,
    WebhookDelivery,
    WebhookEvent,
    WebhookEventType,
    WebhookMessageData,
    WebhookSecretRotation,
    WebhookTestResult,
    CreateWebhookRequest,
    UpdateWebhookRequest,
)
from .account import Account, ApiKey, Credits, CreditTransaction, CreditTransactionType
from .verification import (
    CheckVerificationResponse,
    SendVerificationResponse,
    Verification,
    VerificationChannel,
    VerificationStatus,
)
from .errors import (
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
    classify,
)

__all__ = [
    "SendlyModel",
    "Message",
    "MessageList",
    "MessageStatus",
    "SenderType",
    "SendMessageRequest",
    "Webhook",
    "WebhookCreatedResponse",
    "WebhookDelivery",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookMessageData",
    "WebhookSecretRotation",
    "WebhookTestResult",
    "CreateWebhookRequest",
    "UpdateWebhookRequest",
    "Account",
    "ApiKey",
    "Credits",
    "CreditTransaction",
    "CreditTransactionType",
    "CheckVerificationResponse",
    "SendVerificationResponse",
    "Verification",
    "VerificationChannel",
    "VerificationStatus",
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
    "classify",
]
