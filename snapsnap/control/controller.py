"""
SnapSnap Controller.
Routes confirmed gesture events to the hotkeys the user recorded.
"""

import logging
from typing import Iterable, Optional

from snapsnap.control.action_dispatcher import ActionDispatcher
from snapsnap.core.interfaces import IOsActionDispatcher
from snapsnap.core.types import GestureEvent
from snapsnap.settings import SettingsStore

logger = logging.getLogger(__name__)

class SnapController:
    """
    Attributes:
        dev_mode (bool): Detections are logged but no keys are pressed.
    """
    def __init__(self, settings: SettingsStore, actions: Optional[IOsActionDispatcher] = None):
        self.settings = settings
        self.actions = actions if actions is not None else ActionDispatcher()
        self.dev_mode = False

    def toggle_dev_mode(self):
        self.dev_mode = not self.dev_mode
        logger.info(f"🔧 Dev Mode {'ON - Hotkeys disabled' if self.dev_mode else 'OFF - Hotkeys re-enabled'}")

    def _keys_for(self, event: GestureEvent):
        if event == GestureEvent.SNAP:
            return self.settings.settings.snap_hotkey
        return self.settings.settings.middle_finger_hotkey

    def handle(self, events: Optional[Iterable[GestureEvent]]):
        for event in events or ():
            name = "snap" if event == GestureEvent.SNAP else "middle finger"

            if self.dev_mode:
                logger.info(f"🔧 {name.capitalize()} detected but hotkey blocked (dev mode)")
                continue

            keys = self._keys_for(event)
            if not keys:
                logger.info(f"No saved {name} hotkey to simulate")
                continue

            logger.info(f"Simulating {name} hotkey: {SettingsStore.hotkey_string(keys)}")
            self.actions.send_hotkey(keys)
