import unittest

from ..core.navigator import PaginationNavigator
from ..models.pagination import Page


class TestPaginationNavigator(unittest.TestCase):
    def setUp(self):
        self.nav = PaginationNavigator()

    def test_fresh_navigator_cannot_move(self):
        self.assertFalse(self.nav.can_next())
        self.assertFalse(self.nav.can_prev())
        self.assertEqual(self.nav.label(), "Page 1")

    def test_moves_follow_server_flags(self):
        self.nav.update(2, Page(items=(1,), total_count=30, has_next=True, has_prev=True))
        self.assertTrue(self.nav.can_next())
        self.assertTrue(self.nav.can_prev())

        self.nav.update(3, Page(items=(1,), total_count=30, has_next=False, has_prev=True))
        self.assertFalse(self.nav.can_next())
        self.assertFalse(self.nav.can_go_to(4))

    def test_no_moves_while_loading(self):
        self.nav.update(2, Page(items=(1,), total_count=30, has_next=True, has_prev=True))
        self.assertFalse(self.nav.can_next(loading=True))
        self.assertFalse(self.nav.can_prev(loading=True))

    def test_rejects_current_and_non_positive_pages(self):
        self.nav.update(1, Page(items=(1,), total_count=30, has_next=True))
        self.assertFalse(self.nav.can_go_to(1))
        self.assertFalse(self.nav.can_go_to(0))

    def test_reset(self):
        self.nav.update(4, Page(items=(1,), total_count=90, has_next=True, has_prev=True))
        self.nav.reset()
        self.assertEqual(self.nav.page, 1)
        self.assertFalse(self.nav.has_prev)


if __name__ == "__main__":
    unittest.main()
