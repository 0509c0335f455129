# artclub_admin/core/debounce.py
"""Trailing-edge debouncer bound to the running asyncio loop."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Generic, Optional, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DELAY_MS = 500


class Debouncer(Generic[T]):
    """
    Propagate only the last value of a burst, `delay_ms` after it settles.

    Every `push` cancels the pending timer and starts a new one. `cancel`
    drops a pending timer without emitting. Coroutine callbacks are run as
    tasks on the loop.
    """

    def __init__(
        self,
        callback: Callable[[T], Any],
        delay_ms: int = DEFAULT_DELAY_MS,
        *,
        initial: Optional[T] = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.callback = callback
        self.delay_ms = delay_ms
        self._value: Optional[T] = initial
        self._pending_value: Optional[T] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def value(self) -> Optional[T]:
        """The last value that was propagated."""
        return self._value

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        """Record a new value and restart the quiet-period timer."""
        if self._handle is not None:
            self._handle.cancel()
        self._pending_value = value
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay_ms / 1000, self._fire)

    def cancel(self) -> None:
        """Teardown: drop any pending timer without emitting."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Debouncer cancelled with a pending value")

    def _fire(self) -> None:
        self._handle = None
        self._value = self._pending_value
        result = self.callback(self._value)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for callback tasks started by earlier propagations."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
