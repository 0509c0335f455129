import asyncio
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, Mock

from ..core.controller import ListState, ResourceListController
from ..errors import ApiError, NetworkError
from ..models.artwork import Artwork
from ..models.drafts import MemberAssignment, ProjectDraft
from ..models.pagination import Page
from ..models.query import ASC, DESC, SortSpec
from ..resources import ARTWORKS, EVENTS, PROJECTS


def artworks(*ids, status="pending"):
    return tuple(
        Artwork(id=i, title=f"Piece {i}", artist_name=f"Artist {i}", approval_status=status)
        for i in ids
    )


def page(*ids, total=None, has_next=False, has_prev=False):
    items = artworks(*ids)
    return Page(items=items, total_count=total or len(items), has_next=has_next, has_prev=has_prev)


class ControllerTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.service = Mock()
        self.service.page = AsyncMock(return_value=page(1, 2, 3, total=45, has_next=True))
        self.service.perform = AsyncMock(return_value=None)
        self.service.stats = AsyncMock(return_value={"total_artworks": 45})
        self.notify = Mock()
        self.on_change = Mock()
        self.controller = ResourceListController(
            ARTWORKS, self.service, notify=self.notify, on_change=self.on_change
        )

    def last_query_string(self):
        return self.service.page.await_args.args[0].query_string

    def last_notice(self):
        return self.notify.call_args.args


class TestFetching(ControllerTestCase):
    async def test_initial_state_is_empty_until_fetched(self):
        self.assertEqual(self.controller.state, ListState.EMPTY)

        await self.controller.refresh()

        self.assertEqual(self.controller.state, ListState.POPULATED)
        self.assertEqual(self.controller.total_count, 45)
        self.assertEqual(self.last_query_string(), "page=1")
        self.on_change.assert_called()

    async def test_loading_state_while_first_fetch_is_outstanding(self):
        gate = asyncio.Event()

        async def slow(query):
            await gate.wait()
            return page(1)

        self.service.page = AsyncMock(side_effect=slow)
        self.controller = ResourceListController(ARTWORKS, self.service)

        task = asyncio.ensure_future(self.controller.refresh())
        await asyncio.sleep(0)
        self.assertEqual(self.controller.state, ListState.LOADING)
        self.assertFalse(self.controller.sort_by("title"))

        gate.set()
        await task
        self.assertEqual(self.controller.state, ListState.POPULATED)

    async def test_redraws_during_fetch_see_loading(self):
        gate = asyncio.Event()

        async def slow(query):
            await gate.wait()
            return page(1, 2, total=45, has_next=True)

        self.service.page.side_effect = slow
        seen = []
        controller = ResourceListController(
            ARTWORKS,
            self.service,
            on_change=lambda: seen.append((controller.state, controller.has_next, controller.has_prev)),
        )

        task = asyncio.ensure_future(controller.refresh())
        await asyncio.sleep(0)
        self.assertEqual(seen, [(ListState.LOADING, False, False)])
        gate.set()
        await task
        self.assertEqual(seen[-1], (ListState.POPULATED, True, False))

        gate.clear()
        task = asyncio.ensure_future(controller.next_page())
        await asyncio.sleep(0)
        # the old rows stay up but paging is disabled until the move lands
        self.assertEqual(seen[-1], (ListState.POPULATED, False, False))
        gate.set()
        await task
        self.assertEqual(controller.navigator.page, 2)

    async def test_error_without_data_is_error_state(self):
        self.service.page.side_effect = NetworkError("connection refused")

        await self.controller.refresh()

        self.assertEqual(self.controller.state, ListState.ERROR)
        message, severity = self.last_notice()
        self.assertEqual(severity, "error")
        self.assertIn("connection refused", message)

    async def test_error_keeps_previous_page(self):
        await self.controller.refresh()
        self.service.page.side_effect = ApiError(500, "boom", {"detail": "Server exploded"})

        await self.controller.next_page()

        self.assertEqual(self.controller.state, ListState.POPULATED)
        self.assertEqual(self.controller.navigator.page, 1)
        self.assertEqual(self.controller.query.page, 1)
        self.assertIn("Server exploded", self.last_notice()[0])

    async def test_empty_result(self):
        self.service.page.return_value = Page()
        await self.controller.refresh()
        self.assertEqual(self.controller.state, ListState.EMPTY)

    async def test_stale_response_is_ignored(self):
        gate = asyncio.Event()

        async def fetch(query):
            if query.query.search == "a":
                await gate.wait()
                return page(99)
            return page(7)

        self.service.page.side_effect = fetch

        first = asyncio.ensure_future(self.controller.set_search("a"))
        await asyncio.sleep(0)
        await self.controller.set_search("art")
        gate.set()
        await first

        self.assertEqual([a.id for a in self.controller.items], [7])
        self.assertEqual(self.controller.query.search, "art")

    async def test_stats(self):
        stats = await self.controller.load_stats()
        self.assertEqual(stats, {"total_artworks": 45})

    async def test_stats_failure_is_reported(self):
        self.service.stats.side_effect = NetworkError("down")
        await self.controller.load_stats()
        self.assertEqual(self.last_notice()[1], "error")


class TestQueryCommands(ControllerTestCase):
    async def test_filter_change_resets_page(self):
        self.service.page.return_value = page(1, 2, total=60, has_next=True, has_prev=True)
        await self.controller.refresh()
        await self.controller.next_page()
        await self.controller.next_page()
        self.assertEqual(self.controller.navigator.page, 3)

        await self.controller.set_filter("approval_status", "pending")

        self.assertEqual(self.last_query_string(), "page=1&approval_status=pending")
        self.assertEqual(self.controller.navigator.page, 1)

    async def test_failed_filter_change_does_not_keep_old_page_number(self):
        self.service.page.return_value = page(1, 2, total=60, has_next=True, has_prev=True)
        await self.controller.refresh()
        await self.controller.next_page()
        await self.controller.next_page()
        self.service.page.side_effect = NetworkError("connection reset")

        await self.controller.set_filter("approval_status", "pending")

        self.assertEqual(self.last_query_string(), "page=1&approval_status=pending")
        self.assertEqual(self.controller.navigator.page, 1)
        self.assertFalse(self.controller.has_next)
        fetches = self.service.page.await_count
        await self.controller.next_page()
        self.assertEqual(self.service.page.await_count, fetches)

        self.service.page.side_effect = None
        await self.controller.refresh()
        self.assertEqual(self.last_query_string(), "page=1&approval_status=pending")
        await self.controller.next_page()
        self.assertEqual(self.last_query_string(), "page=2&approval_status=pending")

    async def test_unknown_filter_is_reported_without_fetching(self):
        await self.controller.set_filter("colour", "red")
        self.service.page.assert_not_awaited()
        self.assertEqual(self.last_notice()[1], "error")

    async def test_unchanged_search_does_not_refetch(self):
        await self.controller.set_search("art")
        await self.controller.set_search("art")
        self.assertEqual(self.service.page.await_count, 1)

    async def test_clear_filters(self):
        await self.controller.set_search("art")
        await self.controller.set_filter("category", "Painting")

        await self.controller.clear_filters()

        self.assertEqual(self.last_query_string(), "page=1")
        self.assertEqual(self.controller.query.search, "")

    async def test_clear_filters_when_nothing_set_is_a_noop(self):
        result = await self.controller.clear_filters()
        self.assertIsNone(result)
        self.service.page.assert_not_awaited()

    async def test_dynamic_filter_options_come_from_loaded_rows(self):
        self.service.page.return_value = Page(
            items=(
                Artwork(id=1, title="a", category="Sculpture"),
                Artwork(id=2, title="b", category="Painting"),
                Artwork(id=3, title="c", category="Painting"),
            ),
            total_count=3,
        )
        await self.controller.refresh()
        self.assertEqual(
            self.controller.filter_options("category"),
            (("Painting", "Painting"), ("Sculpture", "Sculpture")),
        )


class TestSorting(ControllerTestCase):
    async def test_header_clicks_sort_locally(self):
        self.service.page.return_value = Page(
            items=(
                Artwork(id=1, title="x", artist_name="Mira", category="Digital"),
                Artwork(id=2, title="y", artist_name="Abe", category="Sculpture"),
                Artwork(id=3, title="z", artist_name="Zoe", category="Painting"),
            ),
            total_count=3,
        )
        await self.controller.refresh()
        fetches = self.service.page.await_count

        self.controller.sort_by_header("Artist")
        self.assertEqual(self.controller.query.sort, SortSpec("artist_name", ASC))
        self.assertEqual([a.id for a in self.controller.items], [2, 1, 3])

        self.controller.sort_by_header("Artist")
        self.assertEqual(self.controller.query.sort, SortSpec("artist_name", DESC))
        self.assertEqual([a.id for a in self.controller.items], [3, 1, 2])

        self.controller.sort_by_header("Category")
        self.assertEqual(self.controller.query.sort, SortSpec("category", ASC))
        self.assertEqual([a.id for a in self.controller.items], [1, 3, 2])

        self.assertEqual(self.service.page.await_count, fetches)

    async def test_non_sortable_header(self):
        await self.controller.refresh()
        self.assertFalse(self.controller.sort_by_header("Status"))

    async def test_default_sort_applies_to_new_pages(self):
        controller = ResourceListController(EVENTS, self.service)
        self.assertEqual(controller.query.sort, SortSpec("date", DESC))


class TestPagination(ControllerTestCase):
    async def test_next_and_prev_follow_server_flags(self):
        await self.controller.refresh()
        self.assertTrue(self.controller.has_next)
        self.assertFalse(self.controller.has_prev)

        await self.controller.prev_page()
        self.assertEqual(self.service.page.await_count, 1)

        self.service.page.return_value = page(4, 5, total=45, has_prev=True)
        await self.controller.next_page()
        self.assertEqual(self.last_query_string(), "page=2")
        self.assertFalse(self.controller.has_next)

    async def test_new_page_prunes_selection(self):
        await self.controller.refresh()
        self.controller.toggle(1)
        self.service.page.return_value = page(4, 5, total=45, has_prev=True)

        await self.controller.next_page()

        self.assertEqual(self.controller.selected_ids, [])


class TestBulkActions(ControllerTestCase):
    async def asyncSetUp(self):
        await self.controller.refresh()

    async def test_partial_failure_is_reported_as_warning(self):
        async def perform(action, row_id, row=None, feedback=None):
            if row_id == 2:
                raise ApiError(500, "server error")

        self.service.perform.side_effect = perform
        self.controller.select_all()

        outcome = await self.controller.run_action("approve")

        self.assertEqual(outcome.failed_ids, frozenset({2}))
        self.assertEqual(outcome.succeeded, 2)
        message, severity = self.notify.call_args_list[0].args
        self.assertEqual(severity, "warning")
        self.assertIn("1 failed", message)
        # failed rows stay selected for a retry
        self.assertEqual(self.controller.selected_ids, [2])

    async def test_success_refetches_and_clears_selection(self):
        self.controller.toggle(1)
        self.controller.toggle(3)
        fetches = self.service.page.await_count

        outcome = await self.controller.run_action("approve")

        self.assertTrue(outcome.all_succeeded)
        self.assertEqual(self.service.perform.await_count, 2)
        self.assertEqual(self.service.page.await_count, fetches + 1)
        self.service.stats.assert_awaited()
        self.assertEqual(self.controller.selected_ids, [])
        self.assertEqual(self.notify.call_args_list[0].args[1], "information")

    async def test_empty_selection_is_a_warning_noop(self):
        outcome = await self.controller.run_action("approve")
        self.assertTrue(outcome.is_noop)
        self.service.perform.assert_not_awaited()
        self.assertEqual(self.last_notice()[1], "warning")

    async def test_reject_without_feedback_sends_nothing(self):
        self.controller.toggle(1)
        outcome = await self.controller.run_action("reject", feedback="  ")
        self.assertIsNone(outcome)
        self.service.perform.assert_not_awaited()
        self.assertEqual(self.last_notice()[1], "error")

    async def test_reject_with_feedback(self):
        await self.controller.run_row_action("reject", 3, feedback="Too blurry")
        args = self.service.perform.await_args.args
        self.assertEqual(args[0].name, "reject")
        self.assertEqual(args[1], 3)
        self.assertEqual(args[3], "Too blurry")

    async def test_single_row_failure(self):
        self.service.perform.side_effect = ApiError(404, "gone", {"detail": "Not found."})
        outcome = await self.controller.run_row_action("delete", 1)
        self.assertTrue(outcome.all_failed)
        message, severity = self.notify.call_args_list[0].args
        self.assertEqual(severity, "error")
        self.assertIn("Not found.", message)

    async def test_single_row_action_refuses_several_ids(self):
        outcome = await self.controller.run_action("unapprove", [1, 2])
        self.assertIsNone(outcome)
        self.service.perform.assert_not_awaited()
        self.assertEqual(self.last_notice()[1], "error")

    async def test_rows_already_in_target_state_are_skipped(self):
        self.service.page.return_value = Page(
            items=(
                Artwork(id=1, title="a", approval_status="approved"),
                Artwork(id=2, title="b", approval_status="pending"),
            ),
            total_count=2,
        )
        await self.controller.refresh()
        self.controller.select_all()

        outcome = await self.controller.run_action("approve")

        self.assertEqual(outcome.attempted, 1)
        self.assertEqual(self.service.perform.await_count, 1)
        self.assertEqual(self.service.perform.await_args.args[1], 2)

    async def test_nothing_eligible_is_a_warning_noop(self):
        outcome = await self.controller.run_row_action("unapprove", 1)
        self.assertTrue(outcome.is_noop)
        self.service.perform.assert_not_awaited()
        self.assertEqual(self.last_notice()[1], "warning")

    async def test_unknown_action(self):
        self.assertIsNone(await self.controller.run_action("publish", [1]))
        self.service.perform.assert_not_awaited()


class TestSaving(ControllerTestCase):
    def setUp(self):
        super().setUp()
        self.service.page = AsyncMock(return_value=Page())
        self.service.create = AsyncMock(return_value={"id": 10})
        self.service.update = AsyncMock(return_value={"id": 4})
        self.controller = ResourceListController(
            PROJECTS, self.service, notify=self.notify, on_change=self.on_change
        )

    async def test_create_then_refetch(self):
        draft = ProjectDraft(title="Mural", description="Wall", start_date="2025-03-01")

        self.assertTrue(await self.controller.save(draft))

        self.assertEqual(self.service.create.await_args.args[0]["title"], "Mural")
        self.service.page.assert_awaited()
        self.service.stats.assert_awaited()
        self.assertEqual(self.last_notice(), ("Project created successfully", "information"))

    async def test_assign_members_patches_only_members(self):
        ok = await self.controller.save(
            MemberAssignment((3, 5)), 4, success="Members assigned successfully"
        )

        self.assertTrue(ok)
        self.service.update.assert_awaited_once_with(4, {"members": [3, 5]})
        self.assertEqual(self.last_notice()[0], "Members assigned successfully")

    async def test_invalid_draft_sends_nothing(self):
        ok = await self.controller.save(ProjectDraft(title="Mural"), 4)

        self.assertFalse(ok)
        self.service.update.assert_not_awaited()
        self.service.page.assert_not_awaited()
        self.assertEqual(self.last_notice()[1], "error")

    async def test_server_rejection_is_reported(self):
        self.service.update.side_effect = ApiError(404, "gone", {"detail": "Not found."})
        draft = ProjectDraft(title="Mural", description="Wall", start_date="2025-03-01")

        self.assertFalse(await self.controller.save(draft, 4))

        message, severity = self.last_notice()
        self.assertEqual(severity, "error")
        self.assertIn("Failed to update project: Not found.", message)


class TestExport(ControllerTestCase):
    async def test_export_writes_display_order(self):
        await self.controller.refresh()
        self.controller.sort_by("title")
        self.controller.sort_by("title")

        with tempfile.TemporaryDirectory() as tmp:
            self.controller.export_dir = tmp
            path = self.controller.export()

            self.assertIsNotNone(path)
            lines = Path(path).read_text(encoding="utf-8").splitlines()
            self.assertEqual(len(lines), 4)
            self.assertTrue(lines[1].startswith('"3"'))
        self.assertEqual(self.last_notice()[1], "information")

    async def test_export_with_nothing_loaded(self):
        self.assertIsNone(self.controller.export())
        self.assertEqual(self.last_notice()[1], "warning")

    async def test_export_failure_is_reported(self):
        await self.controller.refresh()
        with tempfile.NamedTemporaryFile() as blocker:
            # a regular file where the directory should be
            self.controller.export_dir = Path(blocker.name) / "sub"
            self.assertIsNone(self.controller.export())
        self.assertEqual(self.last_notice()[1], "error")


if __name__ == "__main__":
    unittest.main()
