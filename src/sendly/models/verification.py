"""Phone verification models for Sendly SDK."""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, Field

from .base import SendlyModel, Timestamp


class VerificationStatus(str, Enum):
    """Verification status."""

    PENDING = "pending"
    VERIFIED = "verified"
    EXPIRED = "expired"
    FAILED = "failed"


class VerificationChannel(str, Enum):
    """Channel a verification code is delivered over."""

    SMS = "sms"
    WHATSAPP = "whatsapp"
    EMAIL = "email"


class Verification(SendlyModel):
    """A phone verification."""

    id: str
    status: str
    phone: str
    delivery_status: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("delivery_status", "deliveryStatus")
    )
    attempts: int = 0
    max_attempts: int = Field(default=3, validation_alias=AliasChoices("max_attempts", "maxAttempts"))
    channel: str = VerificationChannel.SMS.value
    expires_at: Timestamp = Field(default=None, validation_alias=AliasChoices("expires_at", "expiresAt"))
    verified_at: Timestamp = Field(default=None, validation_alias=AliasChoices("verified_at", "verifiedAt"))
    created_at: Timestamp = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))
    sandbox: bool = False
    app_name: Optional[str] = Field(default=None, validation_alias=AliasChoices("app_name", "appName"))
    template_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("template_id", "templateId"))
    profile_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("profile_id", "profileId"))
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_verified(self) -> bool:
        return self.status == VerificationStatus.VERIFIED.value


class SendVerificationResponse(SendlyModel):
    """Response from starting or resending a verification.

    ``code`` is only populated for sandbox verifications.
    """

    verification: Verification
    code: Optional[str] = None


class CheckVerificationResponse(SendlyModel):
    """Response from checking a verification code."""

    valid: bool
    status: Optional[str] = None
    verification: Optional[Verification] = None
