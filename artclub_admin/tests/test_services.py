import unittest
from unittest.mock import AsyncMock, Mock

from ..core.query_composer import QueryComposer
from ..errors import ParseError, ValidationError
from ..models.notification import Notification
from ..models.query import ListQuery
from ..resources import ARTWORKS, EVENTS, MEMBERS, NOTIFICATIONS, PROJECTS
from ..services.notification_service import NotificationService
from ..services.resource_service import ResourceService


class TestResourceService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = Mock()
        self.client.get = AsyncMock()
        self.client.post = AsyncMock()
        self.client.patch = AsyncMock()
        self.client.delete = AsyncMock()

    async def test_page_decodes_envelope(self):
        self.client.get.return_value = {
            "count": 2,
            "next": None,
            "previous": "http://api/artwork/?page=1",
            "results": [
                {"id": 1, "title": "Dusk", "approval_status": "approved"},
                {"id": 2, "title": "Bloom"},
            ],
        }
        service = ResourceService(self.client, ARTWORKS)
        composed = QueryComposer(ARTWORKS.filters).compose(
            ListQuery(page=2, filters=(("approval_status", "approved"),))
        )

        result = await service.page(composed)

        self.client.get.assert_awaited_once_with("artwork/?page=2&approval_status=approved")
        self.assertEqual([a.title for a in result.items], ["Dusk", "Bloom"])
        self.assertTrue(result.items[0].is_approved)
        self.assertFalse(result.has_next)
        self.assertTrue(result.has_prev)

    async def test_page_rejects_bad_envelope(self):
        self.client.get.return_value = ["not", "an", "envelope"]
        service = ResourceService(self.client, ARTWORKS)
        with self.assertRaises(ParseError):
            await service.page(QueryComposer(()).compose(ListQuery()))

    async def test_stats(self):
        self.client.get.return_value = {"pending": 4}
        self.assertEqual(await ResourceService(self.client, ARTWORKS).stats(), {"pending": 4})
        self.client.get.assert_awaited_once_with("artworks/stats/")

        self.assertEqual(await ResourceService(self.client, MEMBERS).stats(), {})

    async def test_approve_is_a_patch(self):
        service = ResourceService(self.client, ARTWORKS)
        await service.perform(ARTWORKS.action("approve"), 7)
        self.client.patch.assert_awaited_once_with("artwork/7/approve/", None)

    async def test_reject_sends_feedback(self):
        service = ResourceService(self.client, ARTWORKS)
        await service.perform(ARTWORKS.action("reject"), 7, feedback=" Too dark ")
        self.client.patch.assert_awaited_once_with("artwork/7/reject/", {"feedback": "Too dark"})

    async def test_reject_without_feedback_sends_nothing(self):
        service = ResourceService(self.client, ARTWORKS)
        with self.assertRaises(ValidationError):
            await service.perform(ARTWORKS.action("reject"), 7, feedback="")
        self.client.patch.assert_not_awaited()

    async def test_delete_member_uses_pk_path(self):
        service = ResourceService(self.client, MEMBERS)
        await service.perform(MEMBERS.action("delete"), 12)
        self.client.delete.assert_awaited_once_with("users/12/")

    async def test_project_complete_is_a_post(self):
        service = ResourceService(self.client, PROJECTS)
        await service.perform(PROJECTS.action("complete"), 4)
        self.client.post.assert_awaited_once_with("projects/4/complete/", None)

    async def test_notification_resend_posts_original_payload(self):
        row = Notification(
            id=9, message="Gallery night!", notification_type="event_update",
            target_role="member", priority="high",
        )
        service = ResourceService(self.client, NOTIFICATIONS)
        await service.perform(NOTIFICATIONS.action("resend"), 9, row)
        self.client.post.assert_awaited_once_with(
            "notifications/send_bulk/",
            {
                "role": "member",
                "message": "Gallery night!",
                "notification_type": "event_update",
                "priority": "high",
            },
        )

    async def test_mark_read(self):
        service = ResourceService(self.client, NOTIFICATIONS)
        await service.perform(NOTIFICATIONS.action("read"), 9, Mock())
        self.client.patch.assert_awaited_once_with("notifications/9/", {"is_read": True})

    async def test_create_posts_to_collection(self):
        service = ResourceService(self.client, EVENTS)
        await service.create({"title": "Sketch night"})
        self.client.post.assert_awaited_once_with("events/", {"title": "Sketch night"})

    async def test_update_patches_row(self):
        service = ResourceService(self.client, PROJECTS)
        await service.update(4, {"members": [1, 2]})
        self.client.patch.assert_awaited_once_with("projects/4/", {"members": [1, 2]})

    async def test_all_rows_follows_pages(self):
        self.client.get.side_effect = [
            {"count": 3, "next": "http://api/users/?page=2", "previous": None,
             "results": [{"pk": 1, "email": "a@club.org"}, {"pk": 2, "email": "b@club.org"}]},
            {"count": 3, "next": None, "previous": "http://api/users/?page=1",
             "results": [{"pk": 3, "email": "c@club.org"}]},
        ]
        service = ResourceService(self.client, MEMBERS)

        members = await service.all_rows()

        self.assertEqual([m.pk for m in members], [1, 2, 3])
        self.assertEqual(
            [c.args[0] for c in self.client.get.await_args_list],
            ["users/?page=1", "users/?page=2"],
        )


class TestNotificationService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = Mock()
        self.client.post = AsyncMock(return_value={"sent": 12})
        self.service = NotificationService(self.client)

    async def test_send(self):
        result = await self.service.send(
            role="manager", message=" Meeting at 6 ", notification_type="event_update", priority="low"
        )
        self.assertEqual(result, {"sent": 12})
        self.client.post.assert_awaited_once_with(
            "notifications/send_bulk/",
            {
                "role": "manager",
                "message": "Meeting at 6",
                "notification_type": "event_update",
                "priority": "low",
            },
        )

    async def test_blank_message_is_rejected(self):
        with self.assertRaises(ValidationError):
            await self.service.send(role="member", message="  ", notification_type="event_update")
        self.client.post.assert_not_awaited()

    async def test_unknown_priority_is_rejected(self):
        with self.assertRaises(ValidationError):
            await self.service.send(
                role="member", message="hi", notification_type="event_update", priority="urgent"
            )


if __name__ == "__main__":
    unittest.main()
