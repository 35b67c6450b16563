"""
Base resource class for Sendly SDK.

Resources translate method calls into requests on the owning client and
perform input validation before anything reaches the network.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional
from urllib.parse import quote

from ..models.errors import ValidationError

if TYPE_CHECKING:
    from ..client import SendlyClient


class BaseResource:
    """Base class for API resources.

    Attributes:
        _client: The client instance
    """

    def __init__(self, client: "SendlyClient") -> None:
        """Initialize the resource.

        Args:
            client: The client instance
        """
        self._client = client

    def _get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Make a GET request.

        Args:
            path: API endpoint path
            params: Query parameters

        Returns:
            Parsed response body
        """
        return self._client._request("GET", path, params=params)

    def _post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Make a POST request.

        Args:
            path: API endpoint path
            data: Request body

        Returns:
            Parsed response body
        """
        return self._client._request("POST", path, body=data)

    def _patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """Make a PATCH request.

        Args:
            path: API endpoint path
            data: Request body

        Returns:
            Parsed response body
        """
        return self._client._request("PATCH", path, body=data)

    def _delete(self, path: str) -> Any:
        """Make a DELETE request.

        Args:
            path: API endpoint path

        Returns:
            Parsed response body
        """
        return self._client._request("DELETE", path)

    @staticmethod
    def _path_id(value: Optional[str], label: str) -> str:
        """Validate an identifier and encode it for use as a path segment."""
        if not value or not isinstance(value, str):
            raise ValidationError(f"{label} is required")
        return quote(value, safe="")

    @staticmethod
    def _page_params(limit: int, offset: int, max_limit: int = 100, **filters: Any) -> Dict[str, Any]:
        params: Dict[str, Any] = {"limit": min(limit, max_limit), "offset": offset}
        params.update({key: value for key, value in filters.items() if value is not None})
        return params


__all__ = ["BaseResource"]
