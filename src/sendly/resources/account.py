"""Account resource for Sendly SDK."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..models.account import Account, ApiKey, Credits, CreditTransaction
from .base import BaseResource


class AccountResource(BaseResource):
    """Resource for account information, credits and API keys.

    Example:
        ```python
        credits = client.account.credits()
        print(f"Available: {credits.available_balance} credits")
        ```
    """

    def get(self) -> Account:
        """Get account information."""
        response = self._get("/account")
        return Account.model_validate(response)

    def credits(self) -> Credits:
        """Get the credit balance."""
        response = self._get("/credits")
        return Credits.model_validate(response)

    def transactions(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[CreditTransaction]:
        """
        Get credit transaction history.

        Args:
            limit: Maximum number of transactions to return
            offset: Number of transactions to skip

        Returns:
            Transactions, most recent first
        """
        params = {"limit": limit, "offset": offset}
        response = self._get("/credits/transactions", params=params)
        return [CreditTransaction.model_validate(item) for item in response or []]

    def api_keys(self) -> List[ApiKey]:
        """List API keys for the account."""
        response = self._get("/keys")
        return [ApiKey.model_validate(item) for item in response or []]

    def api_key(self, key_id: str) -> ApiKey:
        """Get an API key by ID."""
        encoded_id = self._path_id(key_id, "API key ID")
        response = self._get(f"/keys/{encoded_id}")
        return ApiKey.model_validate(response)

    def api_key_usage(self, key_id: str) -> Dict[str, Any]:
        """Get usage statistics for an API key."""
        encoded_id = self._path_id(key_id, "API key ID")
        return self._get(f"/keys/{encoded_id}/usage")
