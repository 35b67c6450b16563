"""
Webhooks resource for Sendly SDK.

Manage the endpoints Sendly delivers message events to. Verifying and
parsing inbound deliveries lives in :mod:`sendly.webhooks`.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..models.errors import ValidationError
from ..models.webhook import (
    CreateWebhookRequest,
    UpdateWebhookRequest,
    Webhook,
    WebhookCreatedResponse,
    WebhookDelivery,
    WebhookSecretRotation,
    WebhookTestResult,
)
from .base import BaseResource

WEBHOOK_ID_PREFIX = "whk_"
DELIVERY_ID_PREFIX = "del_"


def _require_https(url: Optional[str]) -> None:
    if not isinstance(url, str) or not url.startswith("https://"):
        raise ValidationError("Webhook URL must be HTTPS")


class WebhooksResource(BaseResource):
    """Resource for webhook endpoint management.

    Example:
        ```python
        webhook = client.webhooks.create(
            url="https://example.com/webhooks/sendly",
            events=["message.delivered", "message.failed"],
        )
        print(webhook.secret)  # only returned on creation
        ```
    """

    @staticmethod
    def _webhook_path(webhook_id: Optional[str]) -> str:
        if not isinstance(webhook_id, str) or not webhook_id.startswith(WEBHOOK_ID_PREFIX):
            raise ValidationError("Invalid webhook ID format")
        return f"/webhooks/{quote(webhook_id, safe='')}"

    def create(
        self,
        url: str,
        events: List[str],
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> WebhookCreatedResponse:
        """
        Create a webhook endpoint.

        Args:
            url: HTTPS endpoint URL
            events: Event types to subscribe to
            description: Optional description
            metadata: Custom metadata

        Returns:
            The created webhook including its signing secret

        Raises:
            ValidationError: If the URL is not HTTPS or no events are given
        """
        _require_https(url)
        if not events:
            raise ValidationError("At least one event type is required")

        request = CreateWebhookRequest(
            url=url,
            events=list(events),
            description=description,
            metadata=metadata,
        )
        response = self._post("/webhooks", request.to_dict())
        return WebhookCreatedResponse.model_validate(response)

    def list(self) -> List[Webhook]:
        """List all webhook endpoints."""
        response = self._get("/webhooks")
        return [Webhook.model_validate(item) for item in response or []]

    def get(self, webhook_id: str) -> Webhook:
        """
        Get a webhook by ID.

        Args:
            webhook_id: Webhook ID (``whk_...``)
        """
        response = self._get(self._webhook_path(webhook_id))
        return Webhook.model_validate(response)

    def update(
        self,
        webhook_id: str,
        url: Optional[str] = None,
        events: Optional[List[str]] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Webhook:
        """
        Update a webhook configuration.

        Only the arguments that are not None are sent.

        Args:
            webhook_id: Webhook ID
            url: New HTTPS URL
            events: New event subscriptions
            description: New description
            is_active: Enable or disable the webhook
            metadata: Custom metadata

        Returns:
            The updated webhook
        """
        path = self._webhook_path(webhook_id)
        if url is not None:
            _require_https(url)

        request = UpdateWebhookRequest(
            url=url,
            events=events,
            description=description,
            is_active=is_active,
            metadata=metadata,
        )
        response = self._patch(path, request.to_dict())
        return Webhook.model_validate(response)

    def delete(self, webhook_id: str) -> None:
        """Delete a webhook."""
        self._delete(self._webhook_path(webhook_id))

    def test(self, webhook_id: str) -> WebhookTestResult:
        """Send a test event to a webhook endpoint."""
        response = self._post(f"{self._webhook_path(webhook_id)}/test")
        return WebhookTestResult.model_validate(response)

    def rotate_secret(self, webhook_id: str) -> WebhookSecretRotation:
        """
        Rotate a webhook's signing secret.

        The previous secret stays valid until ``old_secret_expires_at``.
        """
        response = self._post(f"{self._webhook_path(webhook_id)}/rotate-secret")
        return WebhookSecretRotation.model_validate(response)

    def deliveries(self, webhook_id: str) -> List[WebhookDelivery]:
        """Get the delivery history of a webhook."""
        response = self._get(f"{self._webhook_path(webhook_id)}/deliveries")
        return [WebhookDelivery.model_validate(item) for item in response or []]

    def retry_delivery(self, webhook_id: str, delivery_id: str) -> None:
        """
        Retry a failed delivery.

        Args:
            webhook_id: Webhook ID (``whk_...``)
            delivery_id: Delivery ID (``del_...``)
        """
        path = self._webhook_path(webhook_id)
        if not isinstance(delivery_id, str) or not delivery_id.startswith(DELIVERY_ID_PREFIX):
            raise ValidationError("Invalid delivery ID format")
        self._post(f"{path}/deliveries/{quote(delivery_id, safe='')}/retry")

    def event_types(self) -> List[str]:
        """List the event types a webhook can subscribe to."""
        response = self._get("/webhooks/event-types")
        events = response.get("events") if isinstance(response, dict) else None
        return [event["type"] for event in events or []]
