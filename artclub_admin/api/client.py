# artclub_admin/api/client.py
"""
Thin async wrapper around the club's REST API.

One attempt per call: retries are a user decision (the "Refresh" key), so
nothing here loops or sleeps.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from curl_cffi import requests

from ..errors import ApiError, AuthenticationError, NetworkError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


def _join(base_url: str, path: str) -> str:
    """Join `path` onto `base_url` without dropping the base's own path segment."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


class ApiClient:
    """Authenticated JSON client bound to one API base URL."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        impersonate: Optional[str] = None,
        session: Optional[requests.AsyncSession] = None,
    ) -> None:
        self.base_url = base_url
        self.token = token or None
        self.timeout = timeout
        self.impersonate = impersonate
        self._session = session

    # ------------------------------------------------------------------ #
    # session
    # ------------------------------------------------------------------ #

    @property
    def session(self) -> requests.AsyncSession:
        if self._session is None:
            self._session = requests.AsyncSession()
        return self._session

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Token {self.token}"
        return headers

    # ------------------------------------------------------------------ #
    # verbs
    # ------------------------------------------------------------------ #

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, payload)

    async def patch(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PATCH", path, payload)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue a single request and decode the JSON body.

        Returns:
            Decoded JSON, or None for empty bodies (204 No Content).

        Raises:
            NetworkError: The request did not produce a response.
            AuthenticationError: 401/403.
            ApiError: Any other status >= 400.
            ParseError: The body is not valid JSON.
        """
        url = _join(self.base_url, path)
        kwargs: Dict[str, Any] = {
            "headers": self._headers(),
            "timeout": self.timeout,
        }
        if self.impersonate:
            kwargs["impersonate"] = self.impersonate
        if payload is not None:
            kwargs["json"] = payload

        logger.debug(f"{method} {url}")
        try:
            response = await self.session.request(method, url, **kwargs)
        except requests.RequestsError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise NetworkError(f"{method} {url} failed: {e}") from e

        status = response.status_code
        if status >= 400:
            body = self._decode(response, strict=False)
            message = f"{method} {url} returned {status}"
            logger.warning(message)
            if status in (401, 403):
                raise AuthenticationError(status, message, body)
            raise ApiError(status, message, body)

        if status == 204 or not response.content:
            return None
        return self._decode(response, strict=True)

    @staticmethod
    def _decode(response: Any, *, strict: bool) -> Any:
        try:
            return json.loads(response.content)
        except (ValueError, TypeError) as e:
            if strict:
                raise ParseError(f"Invalid JSON from {response.url}: {e}") from e
            return None
