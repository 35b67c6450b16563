"""Message models for Sendly SDK."""
from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import Field, model_validator

from .base import SendlyModel, Timestamp


class MessageStatus(str, Enum):
    """Message delivery status."""

    QUEUED = "queued"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"


class SenderType(str, Enum):
    """How a message was sent."""

    NUMBER_POOL = "number_pool"
    ALPHANUMERIC = "alphanumeric"
    SANDBOX = "sandbox"


class Message(SendlyModel):
    """An SMS message."""

    id: str
    to: str
    from_: Optional[str] = Field(default=None, alias="from")
    text: Optional[str] = None
    status: str
    direction: str = "outbound"
    error: Optional[str] = None
    segments: int = 1
    credits_used: int = Field(default=0, alias="creditsUsed")
    is_sandbox: bool = Field(default=False, alias="isSandbox")
    sender_type: Optional[str] = Field(default=None, alias="senderType")
    telnyx_message_id: Optional[str] = Field(default=None, alias="telnyxMessageId")
    warning: Optional[str] = None
    sender_note: Optional[str] = Field(default=None, alias="senderNote")
    created_at: Timestamp = Field(default=None, alias="createdAt")
    delivered_at: Timestamp = Field(default=None, alias="deliveredAt")

    @property
    def is_delivered(self) -> bool:
        return self.status == MessageStatus.DELIVERED.value

    @property
    def is_failed(self) -> bool:
        return self.status == MessageStatus.FAILED.value

    @property
    def is_pending(self) -> bool:
        return self.status in ("queued", "sending", "sent")


class MessageList(SendlyModel):
    """A page of messages.

    ``total`` comes from the response ``count`` and falls back to the page
    length; ``has_more`` is derived from ``offset``, page length and total.
    """

    data: list[Message] = Field(default_factory=list)
    total: int = Field(default=0, alias="count")
    limit: int = 20
    offset: int = 0

    @model_validator(mode="before")
    @classmethod
    def _fill_total(cls, values: Any) -> Any:
        if isinstance(values, dict):
            values = dict(values)
            if values.get("data") is None:
                values["data"] = []
            if values.get("count") is None and values.get("total") is None:
                values["count"] = len(values["data"])
            for key, default in (("limit", 20), ("offset", 0)):
                if values.get(key) is None:
                    values[key] = default
        return values

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.data) < self.total

    def __iter__(self) -> Iterator[Message]:  # type: ignore[override]
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, index: int) -> Message:
        return self.data[index]

    @property
    def is_empty(self) -> bool:
        return not self.data

    @property
    def first(self) -> Optional[Message]:
        return self.data[0] if self.data else None

    @property
    def last(self) -> Optional[Message]:
        return self.data[-1] if self.data else None


class SendMessageRequest(SendlyModel):
    """Request to send a message."""

    to: str
    text: str
    from_: Optional[str] = Field(default=None, alias="from")

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
