"""Base model for Sendly SDK."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _lenient_datetime(value: Any) -> Any:
    """Drop timestamps the API sends in a shape we cannot parse."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


Timestamp = Annotated[Optional[datetime], BeforeValidator(_lenient_datetime)]


class SendlyModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SendlyModel":
        """Create model from dictionary."""
        return cls.model_validate(data)
