"""
Verify resource for Sendly SDK.

One-time-code phone verification. In test mode the code is returned in the
send response so flows can be exercised without a handset.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..models.errors import ValidationError
from ..models.verification import (
    CheckVerificationResponse,
    SendVerificationResponse,
    Verification,
)
from .base import BaseResource
from .messages import validate_phone


class VerifyResource(BaseResource):
    """Resource for phone verification.

    Example:
        ```python
        started = client.verify.send(phone="+15551234567", app_name="Acme")
        result = client.verify.check(started.verification.id, code="123456")
        if result.valid:
            print("Phone verified")
        ```
    """

    def send(
        self,
        phone: str,
        channel: Optional[str] = None,
        code_length: Optional[int] = None,
        expires_in: Optional[int] = None,
        max_attempts: Optional[int] = None,
        template_id: Optional[str] = None,
        profile_id: Optional[str] = None,
        app_name: Optional[str] = None,
        locale: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SendVerificationResponse:
        """
        Start a verification by sending a code.

        Args:
            phone: Phone number in E.164 format
            channel: Delivery channel (sms, whatsapp, email)
            code_length: Number of digits in the code
            expires_in: Seconds until the code expires
            max_attempts: Allowed check attempts
            template_id: Message template to use
            profile_id: Verify profile to use
            app_name: Application name shown in the message
            locale: Message locale
            metadata: Custom metadata

        Returns:
            The verification, plus the code in sandbox mode
        """
        validate_phone(phone)

        body: Dict[str, Any] = {"phone": phone}
        optional = {
            "channel": channel,
            "codeLength": code_length,
            "expiresIn": expires_in,
            "maxAttempts": max_attempts,
            "templateId": template_id,
            "profileId": profile_id,
            "appName": app_name,
            "locale": locale,
            "metadata": metadata,
        }
        body.update({key: value for key, value in optional.items() if value is not None})

        response = self._post("/verify", body)
        return SendVerificationResponse.model_validate(response)

    def resend(self, verification_id: str) -> SendVerificationResponse:
        """Resend the code for a pending verification."""
        encoded_id = self._path_id(verification_id, "Verification ID")
        response = self._post(f"/verify/{encoded_id}/resend")
        return SendVerificationResponse.model_validate(response)

    def check(self, verification_id: str, code: str) -> CheckVerificationResponse:
        """
        Check a code entered by the user.

        Returns:
            ``valid`` is True when the code matched
        """
        encoded_id = self._path_id(verification_id, "Verification ID")
        if not code:
            raise ValidationError("Verification code is required")
        response = self._post(f"/verify/{encoded_id}/check", {"code": code})
        return CheckVerificationResponse.model_validate(response)

    def get(self, verification_id: str) -> Verification:
        """Get a verification by ID."""
        encoded_id = self._path_id(verification_id, "Verification ID")
        response = self._get(f"/verify/{encoded_id}")
        return Verification.model_validate(response)

    def list(
        self,
        limit: Optional[int] = None,
        status: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List verifications.

        Returns:
            ``{"verifications": [...], "pagination": {...}}``
        """
        params = {"limit": limit, "status": status, "phone": phone}
        response = self._get("/verify", params=params) or {}
        verifications: List[Verification] = [
            Verification.model_validate(item) for item in response.get("verifications") or []
        ]
        return {"verifications": verifications, "pagination": response.get("pagination")}
