import unittest

from ..errors import ConfigError, ValidationError
from ..models.artwork import Artwork
from ..models.member import Member
from ..resources import (
    ARTWORKS,
    MEMBERS,
    NOTIFICATIONS,
    RESOURCES,
    UNAPPROVE_FEEDBACK,
    FilterSpec,
    ResourceConfig,
    get_resource,
)


class TestResourceConfigs(unittest.TestCase):
    def test_all_five_resources_are_registered(self):
        self.assertEqual(
            set(RESOURCES), {"members", "artworks", "events", "projects", "notifications"}
        )
        for config in RESOURCES.values():
            self.assertTrue(config.csv_columns)
            self.assertTrue(config.columns)

    def test_forms_offered_per_resource(self):
        creatable = {name for name, c in RESOURCES.items() if c.creatable}
        editable = {name for name, c in RESOURCES.items() if c.editable}
        self.assertEqual(creatable, {"events", "projects"})
        self.assertEqual(editable, {"projects"})

    def test_single_row_actions_are_not_bulk(self):
        self.assertFalse(ARTWORKS.action("unapprove").bulk)
        self.assertFalse(NOTIFICATIONS.action("resend").bulk)
        self.assertTrue(ARTWORKS.action("approve").bulk)

    def test_unknown_resource(self):
        with self.assertRaises(ConfigError):
            get_resource("sponsors")

    def test_duplicate_filters_rejected(self):
        with self.assertRaises(ConfigError):
            ResourceConfig(
                name="x", title="X", path="x/", decode=dict,
                filters=(FilterSpec("a", "a", "A"), FilterSpec("a", "b", "B")),
            )

    def test_row_id_uses_configured_field(self):
        self.assertEqual(MEMBERS.row_id(Member(pk=8, email="a@b.c")), 8)

    def test_feedback_validation(self):
        with self.assertRaises(ValidationError):
            ARTWORKS.action("reject").validate(None)
        ARTWORKS.action("approve").validate(None)

    def test_unapprove_uses_fixed_feedback(self):
        action = ARTWORKS.action("unapprove")
        body = action.body(Artwork(id=1, title="t", approval_status="approved"))
        self.assertEqual(body, {"feedback": UNAPPROVE_FEEDBACK})
        self.assertFalse(action.bulk)

    def test_actions_offered_per_row(self):
        approved = Artwork(id=1, title="t", approval_status="approved")
        names = [a.name for a in ARTWORKS.actions if a.available_for(approved)]
        self.assertEqual(names, ["reject", "unapprove", "delete"])

        inactive = Member(pk=1, email="a@b.c", is_active=False)
        names = [a.name for a in MEMBERS.actions if a.available_for(inactive)]
        self.assertEqual(names, ["activate", "delete"])

    def test_action_urls(self):
        self.assertEqual(ARTWORKS.action("approve").url(ARTWORKS.path, 5), "artwork/5/approve/")
        self.assertEqual(
            NOTIFICATIONS.action("resend").url(NOTIFICATIONS.path, 5), "notifications/send_bulk/"
        )

    def test_sort_keys_by_header(self):
        self.assertEqual(ARTWORKS.sort_key_for("Artist"), "artist_name")
        self.assertEqual(ARTWORKS.sort_key_for("Category"), "category")
        self.assertIsNone(ARTWORKS.sort_key_for("Nope"))


if __name__ == "__main__":
    unittest.main()
