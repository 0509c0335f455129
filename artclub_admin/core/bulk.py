# artclub_admin/core/bulk.py
"""Fan a row action out over many ids and report every outcome."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable

from ..models.bulk import BulkOutcome

logger = logging.getLogger(__name__)


class BulkActionExecutor:
    """
    Launch one request per id concurrently, wait for all of them to settle,
    then count successes and failures individually.

    A failure of one request never hides the successes of the others; the
    caller still refetches afterwards because the server is authoritative.
    """

    async def run(
        self,
        action: Callable[[Hashable], Awaitable[Any]],
        ids: Iterable[Hashable],
    ) -> BulkOutcome:
        targets = list(dict.fromkeys(ids))  # de-duplicate, keep order
        if not targets:
            logger.warning("Bulk action invoked with an empty selection; nothing sent")
            return BulkOutcome()

        logger.info(f"Running bulk action over {len(targets)} id(s)")
        results = await asyncio.gather(
            *(action(row_id) for row_id in targets),
            return_exceptions=True,
        )

        errors: Dict[Hashable, Exception] = {}
        for row_id, result in zip(targets, results):
            if isinstance(result, asyncio.CancelledError):
                errors[row_id] = result
            elif isinstance(result, Exception):
                errors[row_id] = result
                logger.warning(f"Bulk item {row_id!r} failed: {result}")
            elif isinstance(result, BaseException):
                raise result

        outcome = BulkOutcome(
            attempted=len(targets),
            succeeded=len(targets) - len(errors),
            failed_ids=frozenset(errors),
            errors=errors,
        )
        logger.info(
            f"Bulk action finished: {outcome.succeeded}/{outcome.attempted} succeeded"
        )
        return outcome
