import unittest

from focuskit.modality import KeyboardModalityTracker, ModalityState
from focuskit.synthetic import SyntheticNode, SyntheticSurface


class TestKeyboardModalityTracker(unittest.TestCase):
    def setUp(self):
        self.surface = SyntheticSurface()
        self.surface.root.append(SyntheticNode("button"), SyntheticNode("button"))
        self.tracker = KeyboardModalityTracker(self.surface)

    def test_subscribe_delivers_current_state_immediately(self):
        seen: list[ModalityState] = []
        unsubscribe = self.tracker.subscribe(seen.append)
        self.assertEqual(seen, [ModalityState(keyboard_navigation=False)])
        unsubscribe()

    def test_tab_press_flags_keyboard_navigation_once(self):
        seen: list[bool] = []
        self.tracker.subscribe(lambda state: seen.append(state.keyboard_navigation))
        self.tracker.activate()

        self.surface.press("a")
        self.surface.press("Tab")
        self.surface.press("Tab")

        self.assertEqual(seen, [False, True])
        self.assertTrue(self.tracker.state.keyboard_navigation)
        self.tracker.deactivate()

    def test_unsubscribed_listener_is_not_called(self):
        seen: list[ModalityState] = []
        unsubscribe = self.tracker.subscribe(seen.append)
        unsubscribe()
        seen.clear()

        self.tracker.activate()
        self.surface.press("Tab")
        self.assertEqual(seen, [])
        self.tracker.deactivate()

    def test_reset_returns_to_pointer_modality(self):
        self.tracker.activate()
        self.surface.press("Tab")
        self.tracker.reset()
        self.assertFalse(self.tracker.state.keyboard_navigation)
        self.tracker.deactivate()

    def test_activate_is_idempotent(self):
        self.tracker.activate()
        self.tracker.activate()
        self.assertEqual(self.surface.listener_count(), 1)
        self.tracker.deactivate()
        self.assertFalse(self.tracker.active)
        self.assertEqual(self.surface.listener_count(), 0)


if __name__ == "__main__":
    unittest.main()
