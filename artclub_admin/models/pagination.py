"""Generic page-of-results container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from artclub_admin.errors import ParseError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """A single page of items plus the server's navigation flags."""

    items: Sequence[T] = field(default_factory=tuple)
    total_count: int = 0     # total items in the whole filtered result set
    has_next: bool = False   # server sent a non-null `next` link
    has_prev: bool = False   # server sent a non-null `previous` link

    def __post_init__(self) -> None:
        if self.total_count < 0:
            raise ValueError("total_count must be >= 0")
        if len(self.items) > self.total_count:
            raise ValueError("a page cannot hold more items than total_count")

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # ------------- decoding -------------
    @classmethod
    def from_envelope(
        cls,
        envelope: Mapping[str, Any],
        decode: Callable[[Mapping[str, Any]], T],
    ) -> "Page[T]":
        """
        Decode a `{count, next, previous, results}` envelope.

        The navigation flags are taken verbatim from `next` / `previous`.
        A missing or short `count` is raised to the number of results so the
        page invariant holds even against a sloppy server.
        """
        if not isinstance(envelope, Mapping):
            raise ParseError(f"Expected a pagination envelope, got {type(envelope).__name__}")

        results = envelope.get("results") or []
        if not isinstance(results, list):
            raise ParseError("Pagination envelope 'results' is not a list")

        try:
            items = tuple(decode(row) for row in results)
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(f"Could not decode row: {e}") from e

        try:
            count = int(envelope.get("count") or 0)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Invalid 'count' in envelope: {envelope.get('count')!r}") from e

        return cls(
            items=items,
            total_count=max(count, len(items)),
            has_next=envelope.get("next") is not None,
            has_prev=envelope.get("previous") is not None,
        )
