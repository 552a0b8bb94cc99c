import unittest

from focuskit.announcer import Announcer
from focuskit.error_contract import is_actionable_message
from focuskit.history import FocusHistory
from focuskit.landmarks import SkipNavigation
from focuskit.synthetic import SyntheticNode, SyntheticSurface, VirtualClock


class TestSkipNavigation(unittest.TestCase):
    def setUp(self):
        self.surface = SyntheticSurface()
        self.clock = VirtualClock()
        self.nav = SyntheticNode("nav", node_id="navigation", tab_index=-1)
        self.main = SyntheticNode("main", node_id="main-content", tab_index=-1)
        self.search = SyntheticNode("input", name="search")
        self.surface.root.append(self.nav, self.main, self.search)

        history = FocusHistory(self.surface)
        self.skip = SkipNavigation(self.surface, history, Announcer(self.surface, self.clock))
        self.skip.add_landmark(
            "main-content",
            lambda: self.surface.get_element_by_id("main-content"),
            label="main content",
            shortcut="1",
        )
        self.skip.add_landmark(
            "navigation",
            lambda: self.surface.get_element_by_id("navigation"),
            label="navigation",
            shortcut="2",
        )

    def test_skip_to_focuses_and_announces(self):
        self.assertTrue(self.skip.skip_to("main-content"))
        self.assertIs(self.surface.active_element(), self.main)

        self.clock.advance(100)
        self.assertEqual([n.text for n in self.surface.live_regions()], ["Skipped to main content"])

    def test_alt_shortcuts_after_activate(self):
        self.skip.activate()
        self.surface.focus(self.search)

        event = self.surface.press("2", alt=True)
        self.assertTrue(event.default_prevented)
        self.assertIs(self.surface.active_element(), self.nav)

        self.surface.press("1", alt=True)
        self.assertIs(self.surface.active_element(), self.main)
        self.skip.deactivate()

    def test_plain_digits_are_ignored(self):
        self.skip.activate()
        self.surface.focus(self.search)
        event = self.surface.press("1")
        self.assertFalse(event.default_prevented)
        self.assertIs(self.surface.active_element(), self.search)
        self.skip.deactivate()

    def test_shortcuts_stop_after_deactivate(self):
        self.skip.activate()
        self.skip.deactivate()
        self.surface.focus(self.search)
        self.surface.press("1", alt=True)
        self.assertIs(self.surface.active_element(), self.search)

    def test_missing_target_returns_false(self):
        self.surface.root.remove(self.main)
        self.assertFalse(self.skip.skip_to("main-content"))
        self.assertEqual(self.surface.live_regions(), [])

    def test_unknown_and_blank_ids(self):
        with self.assertRaises(KeyError) as unknown:
            self.skip.skip_to("footer")
        with self.assertRaises(ValueError) as blank:
            self.skip.add_landmark("  ", lambda: None)

        self.assertTrue(is_actionable_message(unknown.exception.args[0]), unknown.exception.args[0])
        self.assertIn("footer", unknown.exception.args[0])
        self.assertTrue(is_actionable_message(str(blank.exception)), str(blank.exception))

    def test_duplicate_shortcut_is_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            self.skip.add_landmark("footer", lambda: None, shortcut="1")
        self.assertTrue(is_actionable_message(str(ctx.exception)), str(ctx.exception))
        self.assertIn("main-content", str(ctx.exception))

    def test_landmark_order(self):
        self.assertEqual(self.skip.landmark_ids(), ("main-content", "navigation"))


if __name__ == "__main__":
    unittest.main()
