"""
Messages resource for Sendly SDK.

Send, list, schedule and batch SMS messages.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Iterator, List, Optional, Sequence

from ..models.errors import ValidationError
from ..models.message import Message, MessageList, SendMessageRequest
from .base import BaseResource

MAX_TEXT_LENGTH = 1600
MAX_PAGE_SIZE = 100

_E164_PATTERN = re.compile(r"\+[1-9]\d{1,14}")


def validate_phone(phone: Any) -> None:
    """Raise ValidationError unless ``phone`` is an E.164 number."""
    if isinstance(phone, str) and _E164_PATTERN.fullmatch(phone):
        return
    raise ValidationError("Invalid phone number format. Use E.164 format (e.g., +15551234567)")


def validate_text(text: Any) -> None:
    """Raise ValidationError unless ``text`` is a non-empty message body."""
    if not text or not isinstance(text, str):
        raise ValidationError("Message text is required")
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError(f"Message text exceeds maximum length ({MAX_TEXT_LENGTH} characters)")


class MessagesResource(BaseResource):
    """Resource for message operations.

    Example:
        ```python
        with SendlyClient(api_key="sk_test_v1_...") as client:
            message = client.messages.send(to="+15551234567", text="Hello!")

            for message in client.messages.iterate(status="delivered"):
                print(message.id)
        ```
    """

    def send(self, to: str, text: str, from_: Optional[str] = None) -> Message:
        """
        Send an SMS message.

        Args:
            to: Recipient phone number in E.164 format
            text: Message content (max 1600 characters)
            from_: Optional sender ID or phone number

        Returns:
            The sent message

        Raises:
            ValidationError: If parameters are invalid
            InsufficientCreditsError: If the account has no credits
            RateLimitError: If the rate limit is exceeded
        """
        validate_phone(to)
        validate_text(text)

        request = SendMessageRequest(to=to, text=text, from_=from_ or None)
        response = self._post("/messages", request.to_dict())
        return Message.model_validate(response)

    def list(
        self,
        limit: int = 20,
        offset: int = 0,
        status: Optional[str] = None,
        to: Optional[str] = None,
    ) -> MessageList:
        """
        List messages.

        Args:
            limit: Maximum messages to return (capped at 100)
            offset: Number of messages to skip
            status: Filter by status
            to: Filter by recipient

        Returns:
            A page of messages
        """
        params = self._page_params(limit, offset, MAX_PAGE_SIZE, status=status, to=to)
        response = self._get("/messages", params=params)
        return MessageList.model_validate(response)

    def get(self, message_id: str) -> Message:
        """
        Get a message by ID.

        Raises:
            NotFoundError: If the message does not exist
        """
        encoded_id = self._path_id(message_id, "Message ID")
        response = self._get(f"/messages/{encoded_id}")
        return Message.model_validate(response)

    def iterate(
        self,
        status: Optional[str] = None,
        to: Optional[str] = None,
        batch_size: int = MAX_PAGE_SIZE,
    ) -> Iterator[Message]:
        """
        Iterate over all messages, fetching pages as needed.

        Args:
            status: Filter by status
            to: Filter by recipient
            batch_size: Messages requested per page

        Yields:
            Each message across all pages
        """
        offset = 0
        while True:
            page = self.list(limit=batch_size, offset=offset, status=status, to=to)
            yield from page

            if not page.has_more or page.is_empty:
                break
            offset += batch_size

    def schedule(
        self,
        to: str,
        text: str,
        scheduled_at: str,
        from_: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Schedule an SMS message for future delivery.

        Args:
            to: Recipient phone number in E.164 format
            text: Message content (max 1600 characters)
            scheduled_at: ISO 8601 datetime for when to send
            from_: Optional sender ID or phone number

        Returns:
            The scheduled message
        """
        validate_phone(to)
        validate_text(text)
        if not scheduled_at:
            raise ValidationError("scheduled_at is required")

        body: Dict[str, Any] = {"to": to, "text": text, "scheduledAt": scheduled_at}
        if from_:
            body["from"] = from_

        return self._post("/messages/schedule", body)

    def list_scheduled(
        self,
        limit: int = 20,
        offset: int = 0,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List scheduled messages.

        Args:
            limit: Maximum messages to return (capped at 100)
            offset: Number of messages to skip
            status: Filter by status (scheduled, sent, cancelled, failed)
        """
        params = self._page_params(limit, offset, MAX_PAGE_SIZE, status=status)
        return self._get("/messages/scheduled", params=params)

    def get_scheduled(self, scheduled_id: str) -> Dict[str, Any]:
        """Get a scheduled message by ID."""
        encoded_id = self._path_id(scheduled_id, "Scheduled message ID")
        return self._get(f"/messages/scheduled/{encoded_id}")

    def cancel_scheduled(self, scheduled_id: str) -> Dict[str, Any]:
        """
        Cancel a scheduled message.

        Returns:
            The cancelled message with refund details
        """
        encoded_id = self._path_id(scheduled_id, "Scheduled message ID")
        return self._delete(f"/messages/scheduled/{encoded_id}")

    def send_batch(
        self,
        messages: Sequence[Dict[str, str]],
        from_: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send multiple SMS messages in one batch.

        Every entry is validated before the request is made.

        Args:
            messages: Entries with ``to`` and ``text`` keys
            from_: Optional sender ID applied to all messages

        Returns:
            Batch response with batch ID and status
        """
        if not messages:
            raise ValidationError("Messages array is required")

        entries: List[Dict[str, str]] = []
        for index, message in enumerate(messages):
            to = message.get("to")
            text = message.get("text")
            if not to:
                raise ValidationError(f"Message at index {index} missing 'to'")
            if not text:
                raise ValidationError(f"Message at index {index} missing 'text'")
            validate_phone(to)
            validate_text(text)
            entries.append(dict(message))

        body: Dict[str, Any] = {"messages": entries}
        if from_:
            body["from"] = from_

        return self._post("/messages/batch", body)

    def get_batch(self, batch_id: str) -> Dict[str, Any]:
        """Get batch status by ID."""
        encoded_id = self._path_id(batch_id, "Batch ID")
        return self._get(f"/messages/batch/{encoded_id}")

    def list_batches(
        self,
        limit: int = 20,
        offset: int = 0,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List batches.

        Args:
            limit: Maximum batches to return (capped at 100)
            offset: Number of batches to skip
            status: Filter by status (processing, completed, failed)
        """
        params = self._page_params(limit, offset, MAX_PAGE_SIZE, status=status)
        return self._get("/messages/batches", params=params)
