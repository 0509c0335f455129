# artclub_admin/core/sorting.py
"""Client-side ordering of the currently loaded page."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from ..models.query import SortSpec

T = TypeVar("T")


def attribute_getter(key: str) -> Callable[[Any], Any]:
    """Read `key` from a model attribute or a mapping entry."""
    def get(item: Any) -> Any:
        if isinstance(item, dict):
            return item.get(key)
        return getattr(item, key, None)
    return get


def compare_values(a: Any, b: Any) -> int:
    """Natural ordering; missing or mutually incomparable values are equal."""
    if a is None or b is None:
        return 0
    try:
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        return 0
    return 0


def sort_items(
    items: Sequence[T],
    spec: Optional[SortSpec],
    getter: Optional[Callable[[T], Any]] = None,
) -> List[T]:
    """
    Stable sort of `items` by `spec`.

    Descending order negates the comparison rather than reversing the
    result, so rows with equal keys keep their server order either way.
    """
    if spec is None:
        return list(items)

    get = getter or attribute_getter(spec.key)
    sign = -1 if spec.descending else 1

    def cmp(x: T, y: T) -> int:
        return sign * compare_values(get(x), get(y))

    return sorted(items, key=cmp_to_key(cmp))
