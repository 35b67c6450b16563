"""Webhook models for Sendly SDK."""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from .base import SendlyModel, Timestamp

DEFAULT_API_VERSION = "2024-01-01"


class WebhookEventType(str, Enum):
    """Webhook event types."""

    MESSAGE_QUEUED = "message.queued"
    MESSAGE_SENT = "message.sent"
    MESSAGE_DELIVERED = "message.delivered"
    MESSAGE_FAILED = "message.failed"
    MESSAGE_UNDELIVERED = "message.undelivered"


class WebhookMessageData(SendlyModel):
    """Message payload carried by a delivery-status event."""

    model_config = ConfigDict(frozen=True)

    message_id: Optional[str] = None
    status: Optional[str] = None
    to: Optional[str] = None
    from_: str = Field(default="", alias="from")
    error: Optional[str] = None
    error_code: Optional[str] = None
    delivered_at: Optional[str] = None
    failed_at: Optional[str] = None
    segments: int = 1
    credits_used: Union[int, float] = 0

    @field_validator("from_", mode="before")
    @classmethod
    def _default_sender(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("segments", mode="before")
    @classmethod
    def _default_segments(cls, value: Any) -> Any:
        return 1 if value is None else value

    @field_validator("credits_used", mode="before")
    @classmethod
    def _default_credits(cls, value: Any) -> Any:
        return 0 if value is None else value

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class WebhookEvent(SendlyModel):
    """A verified webhook event envelope."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    data: WebhookMessageData
    created_at: str
    api_version: str = DEFAULT_API_VERSION

    @field_validator("api_version", mode="before")
    @classmethod
    def _default_api_version(cls, value: Any) -> Any:
        return DEFAULT_API_VERSION if value is None else value

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Webhook(SendlyModel):
    """A configured webhook endpoint."""

    webhook_id: str = Field(alias="id")
    url: str
    events: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    is_active: bool = Field(default=False, validation_alias=AliasChoices("is_active", "isActive"))
    failure_count: int = Field(default=0, validation_alias=AliasChoices("failure_count", "failureCount"))
    last_failure_at: Timestamp = Field(
        default=None, validation_alias=AliasChoices("last_failure_at", "lastFailureAt")
    )
    circuit_state: str = Field(
        default="closed", validation_alias=AliasChoices("circuit_state", "circuitState")
    )
    circuit_opened_at: Timestamp = Field(
        default=None, validation_alias=AliasChoices("circuit_opened_at", "circuitOpenedAt")
    )
    api_version: str = Field(default="2024-01", validation_alias=AliasChoices("api_version", "apiVersion"))
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: Timestamp = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))
    updated_at: Timestamp = Field(default=None, validation_alias=AliasChoices("updated_at", "updatedAt"))
    total_deliveries: int = Field(
        default=0, validation_alias=AliasChoices("total_deliveries", "totalDeliveries")
    )
    successful_deliveries: int = Field(
        default=0, validation_alias=AliasChoices("successful_deliveries", "successfulDeliveries")
    )
    success_rate: float = Field(default=0, validation_alias=AliasChoices("success_rate", "successRate"))
    last_delivery_at: Timestamp = Field(
        default=None, validation_alias=AliasChoices("last_delivery_at", "lastDeliveryAt")
    )

    @property
    def circuit_open(self) -> bool:
        return self.circuit_state == "open"


class WebhookCreatedResponse(Webhook):
    """A webhook as returned on creation, including its signing secret."""

    secret: Optional[str] = None


class WebhookDelivery(SendlyModel):
    """A webhook delivery attempt."""

    delivery_id: str = Field(alias="id")
    webhook_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("webhook_id", "webhookId"))
    event_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("event_id", "eventId"))
    event_type: Optional[str] = Field(default=None, validation_alias=AliasChoices("event_type", "eventType"))
    attempt_number: int = Field(default=1, validation_alias=AliasChoices("attempt_number", "attemptNumber"))
    max_attempts: int = Field(default=6, validation_alias=AliasChoices("max_attempts", "maxAttempts"))
    status: Optional[str] = None
    response_status_code: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("response_status_code", "responseStatusCode")
    )
    response_time_ms: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("response_time_ms", "responseTimeMs")
    )
    error_message: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("error_message", "errorMessage")
    )
    error_code: Optional[str] = Field(default=None, validation_alias=AliasChoices("error_code", "errorCode"))
    next_retry_at: Timestamp = Field(default=None, validation_alias=AliasChoices("next_retry_at", "nextRetryAt"))
    created_at: Timestamp = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))
    delivered_at: Timestamp = Field(default=None, validation_alias=AliasChoices("delivered_at", "deliveredAt"))

    @property
    def delivered(self) -> bool:
        return self.status == "delivered"

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class WebhookTestResult(SendlyModel):
    """Result of sending a test event to a webhook."""

    success: bool = False
    status_code: Optional[int] = Field(default=None, validation_alias=AliasChoices("status_code", "statusCode"))
    response_time_ms: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("response_time_ms", "responseTimeMs")
    )
    error: Optional[str] = None


class WebhookSecretRotation(SendlyModel):
    """Result of rotating a webhook signing secret."""

    webhook: Webhook
    new_secret: str = Field(validation_alias=AliasChoices("new_secret", "newSecret"))
    old_secret_expires_at: Timestamp = Field(
        default=None, validation_alias=AliasChoices("old_secret_expires_at", "oldSecretExpiresAt")
    )
    message: Optional[str] = None


class CreateWebhookRequest(SendlyModel):
    """Request to create a webhook endpoint."""

    url: str
    events: list[str]
    description: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class UpdateWebhookRequest(SendlyModel):
    """Request to update a webhook endpoint."""

    url: Optional[str] = None
    events: Optional[list[str]] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    metadata: Optional[dict[str, Any]] = None
