"""Account, credit and API key models for Sendly SDK."""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field

from .base import SendlyModel, Timestamp


class CreditTransactionType(str, Enum):
    """Credit transaction types."""

    PURCHASE = "purchase"
    USAGE = "usage"
    REFUND = "refund"
    ADJUSTMENT = "adjustment"
    BONUS = "bonus"


class Account(SendlyModel):
    """Account information."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    created_at: Timestamp = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))


class Credits(SendlyModel):
    """Credit balance."""

    balance: float = 0
    reserved_balance: float = Field(
        default=0, validation_alias=AliasChoices("reserved_balance", "reservedBalance")
    )
    available_balance: float = Field(
        default=0, validation_alias=AliasChoices("available_balance", "availableBalance")
    )


class CreditTransaction(SendlyModel):
    """A single credit ledger movement."""

    id: str
    type: str
    amount: float = 0
    balance_after: float = Field(default=0, validation_alias=AliasChoices("balance_after", "balanceAfter"))
    description: Optional[str] = None
    message_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("message_id", "messageId"))
    created_at: Timestamp = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))

    @property
    def is_credit(self) -> bool:
        return self.amount > 0

    @property
    def is_debit(self) -> bool:
        return self.amount < 0


class ApiKey(SendlyModel):
    """An API key belonging to the account (never the secret itself)."""

    id: str
    name: Optional[str] = None
    type: Optional[str] = None
    prefix: Optional[str] = None
    last_four: Optional[str] = Field(default=None, validation_alias=AliasChoices("last_four", "lastFour"))
    permissions: list[str] = Field(default_factory=list)
    created_at: Timestamp = Field(default=None, validation_alias=AliasChoices("created_at", "createdAt"))
    last_used_at: Timestamp = Field(default=None, validation_alias=AliasChoices("last_used_at", "lastUsedAt"))
    expires_at: Timestamp = Field(default=None, validation_alias=AliasChoices("expires_at", "expiresAt"))
    is_revoked: bool = Field(default=False, validation_alias=AliasChoices("is_revoked", "isRevoked"))

    @property
    def is_test(self) -> bool:
        return self.type == "test"

    @property
    def is_live(self) -> bool:
        return self.type == "live"
