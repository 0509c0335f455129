# artclub_admin/core/fetcher.py
"""Issue list requests and drop responses that were overtaken by newer ones."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from ..errors import AdminError
from ..models.pagination import Page
from .query_composer import ComposedQuery

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class FetchResult(Generic[T]):
    token: int
    page: Optional[Page[T]] = None
    error: Optional[AdminError] = None
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.page is not None and not self.stale


class FetchOrchestrator(Generic[T]):
    """
    Single-attempt page fetcher with a sequence-token guard.

    Every request takes the next token from `begin`, so `loading` is true
    before the first await. When a response resolves, it is applied only
    if its token is still the latest one issued; an older response is
    marked stale and must be ignored by the caller. `loading` stays true
    until the latest request has resolved.
    """

    def __init__(self, fetch_page: Callable[[ComposedQuery], Awaitable[Page[T]]]) -> None:
        self._fetch_page = fetch_page
        self._latest = 0
        self._resolved = 0

    @property
    def loading(self) -> bool:
        return self._resolved < self._latest

    @property
    def latest_token(self) -> int:
        return self._latest

    def begin(self) -> int:
        """Reserve the token for a request about to be issued."""
        self._latest += 1
        return self._latest

    async def fetch(self, query: ComposedQuery) -> FetchResult[T]:
        return await self.complete(self.begin(), query)

    async def complete(self, token: int, query: ComposedQuery) -> FetchResult[T]:
        logger.debug(f"fetch #{token}: {query.query_string}")

        try:
            page = await self._fetch_page(query)
        except AdminError as e:
            return self._settle(token, error=e)
        except asyncio.CancelledError:
            if token == self._latest:
                self._resolved = token
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in fetch #{token}")
            return self._settle(token, error=AdminError(f"Unexpected error: {e}"))

        return self._settle(token, page=page)

    def _settle(
        self,
        token: int,
        *,
        page: Optional[Page[T]] = None,
        error: Optional[AdminError] = None,
    ) -> FetchResult[T]:
        if token != self._latest:
            logger.info(f"Discarding stale response #{token} (latest is #{self._latest})")
            return FetchResult(token=token, page=page, error=error, stale=True)

        self._resolved = token
        if error is not None:
            logger.warning(f"fetch #{token} failed: {error}")
        return FetchResult(token=token, page=page, error=error)
