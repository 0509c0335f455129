"""Result of a fan-out mutation over a set of row ids."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Hashable


@dataclass(frozen=True, slots=True)
class BulkOutcome:
    attempted: int = 0
    succeeded: int = 0
    failed_ids: FrozenSet[Hashable] = field(default_factory=frozenset)
    errors: Dict[Hashable, Exception] = field(default_factory=dict, compare=False, repr=False)

    @property
    def failed(self) -> int:
        return len(self.failed_ids)

    @property
    def is_noop(self) -> bool:
        """Nothing was attempted (empty selection)."""
        return self.attempted == 0

    @property
    def all_succeeded(self) -> bool:
        return self.attempted > 0 and not self.failed_ids

    @property
    def is_partial(self) -> bool:
        return self.succeeded > 0 and bool(self.failed_ids)

    @property
    def all_failed(self) -> bool:
        return self.attempted > 0 and self.succeeded == 0
