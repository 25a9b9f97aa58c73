import tempfile
import unittest
from pathlib import Path
from snapsnap.control.action_dispatcher import MockActionDispatcher, ActionDispatcher, translate_keys
from snapsnap.control.controller import SnapController
from snapsnap.core.types import GestureEvent
from snapsnap.settings import SettingsStore

class TestSnapController(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.settings = SettingsStore(Path(self.tmp.name) / "settings.json")
        self.actions = MockActionDispatcher()
        self.pilot = SnapController(self.settings, self.actions)

    def tearDown(self):
        self.tmp.cleanup()

    def test_routes_events_to_hotkeys(self):
        self.settings.set_snap_hotkey(["⌘", "Space"])
        self.settings.set_middle_finger_hotkey(["⌘", "Q"])
        self.pilot.handle([GestureEvent.SNAP, GestureEvent.MIDDLE_FINGER_HELD])
        self.assertEqual(self.actions.sent, [("⌘", "Space"), ("⌘", "Q")])

    def test_missing_hotkey_is_ignored(self):
        self.pilot.handle([GestureEvent.SNAP])
        self.assertEqual(self.actions.sent, [])

    def test_none_is_ignored(self):
        self.pilot.handle(None)
        self.assertEqual(self.actions.sent, [])

    def test_dev_mode_blocks_dispatch(self):
        self.settings.set_snap_hotkey(["A"])
        self.pilot.toggle_dev_mode()
        self.pilot.handle([GestureEvent.SNAP])
        self.assertEqual(self.actions.sent, [])

class TestKeyTranslation(unittest.TestCase):
    def test_translate(self):
        mods, keys = translate_keys(["⌘", "⇧", "4"])
        self.assertEqual(mods, ["command", "shift"])
        self.assertEqual(keys, ["4"])

    def test_named_and_unknown(self):
        mods, keys = translate_keys(["⌃", "Space", "Q", "F13"])
        self.assertEqual(mods, ["ctrl"])
        self.assertEqual(keys, ["space", "q"])

    def test_factory_mock_off_macos(self):
        self.assertIsInstance(ActionDispatcher("Linux"), MockActionDispatcher)

if __name__ == '__main__':
    unittest.main()
