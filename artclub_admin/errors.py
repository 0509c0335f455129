# artclub_admin/errors.py
"""Exception hierarchy shared by the API client, services and controllers."""

from __future__ import annotations

from typing import Any, Optional


class AdminError(Exception):
    """Base class for all admin console errors."""
    pass


class NetworkError(AdminError):
    """The request never produced an HTTP response."""
    pass


class ApiError(AdminError):
    """The server answered with an error status."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def detail(self) -> Optional[str]:
        """The DRF-style `detail` / `message` field when the server sent one."""
        if isinstance(self.payload, dict):
            return self.payload.get("detail") or self.payload.get("message")
        return None


class AuthenticationError(ApiError):
    """401/403 from the API; the configured token is missing or rejected."""
    pass


class ParseError(AdminError):
    """Response body could not be decoded into the expected shape."""
    pass


class ValidationError(AdminError):
    """Client-side validation failed; no request was issued."""
    pass


class ConfigError(AdminError):
    """Invalid resource or application configuration."""
    pass
