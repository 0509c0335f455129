import asyncio
import unittest
from unittest.mock import AsyncMock

from ..core.bulk import BulkActionExecutor
from ..errors import ApiError


class TestBulkActionExecutor(unittest.IsolatedAsyncioTestCase):
    async def test_partial_failure_reports_each_outcome(self):
        error = ApiError(500, "server error")

        async def approve(row_id):
            if row_id == 2:
                raise error
            return {"id": row_id}

        outcome = await BulkActionExecutor().run(approve, [1, 2, 3])

        self.assertEqual(outcome.attempted, 3)
        self.assertEqual(outcome.succeeded, 2)
        self.assertEqual(outcome.failed_ids, frozenset({2}))
        self.assertIs(outcome.errors[2], error)
        self.assertTrue(outcome.is_partial)
        self.assertFalse(outcome.all_succeeded)

    async def test_every_request_runs_even_after_a_failure(self):
        action = AsyncMock(side_effect=[ApiError(400, "bad"), None, None])
        outcome = await BulkActionExecutor().run(action, ["a", "b", "c"])
        self.assertEqual(action.await_count, 3)
        self.assertEqual(outcome.succeeded, 2)

    async def test_requests_run_concurrently(self):
        started = []
        gate = asyncio.Event()

        async def slow(row_id):
            started.append(row_id)
            await gate.wait()

        task = asyncio.ensure_future(BulkActionExecutor().run(slow, [1, 2, 3]))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        self.assertEqual(sorted(started), [1, 2, 3])

        gate.set()
        outcome = await task
        self.assertTrue(outcome.all_succeeded)

    async def test_empty_selection_sends_nothing(self):
        action = AsyncMock()
        outcome = await BulkActionExecutor().run(action, [])
        action.assert_not_awaited()
        self.assertTrue(outcome.is_noop)

    async def test_duplicate_ids_are_sent_once(self):
        action = AsyncMock()
        outcome = await BulkActionExecutor().run(action, [5, 5, 6])
        self.assertEqual(action.await_count, 2)
        self.assertEqual(outcome.attempted, 2)

    async def test_all_failed(self):
        action = AsyncMock(side_effect=ApiError(403, "nope"))
        outcome = await BulkActionExecutor().run(action, [1, 2])
        self.assertTrue(outcome.all_failed)
        self.assertEqual(outcome.failed, 2)


if __name__ == "__main__":
    unittest.main()
