"""
SnapSnap Action Dispatcher (The Actuator).
=========================================

Decouples "a snap happened" from "press Cmd+Shift+4".

Hotkeys are stored the way the settings recorder captures them: a list of
symbols such as ["⌘", "⇧", "4"] or ["⌃", "Space"]. This module translates that
list into pyautogui key names and replays it as one chord.

Features:
- **Platform Aware:** pyautogui backend on macOS, Mock everywhere else (CI safe).
- **Modifier Chords:** modifiers are held down while each key is tapped.
"""

import logging
import platform
from typing import List, Optional, Sequence, Tuple

from snapsnap.core.interfaces import IOsActionDispatcher

logger = logging.getLogger(__name__)

# Recorder symbol -> pyautogui key name
MODIFIER_KEYS = {
    "⌘": "command",
    "⌃": "ctrl",
    "⌥": "option",
    "⇧": "shift",
    "fn": "fn",
}

NAMED_KEYS = {
    "Space": "space",
    "Tab": "tab",
    "Enter": "enter",
    "Escape": "esc",
    "Delete": "backspace",
}

def translate_keys(keys: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Splits a recorded hotkey into (modifiers, keys) in pyautogui naming.
    Unknown symbols are dropped with a warning.
    """
    modifiers, presses = [], []
    for key in keys:
        if key in MODIFIER_KEYS:
            modifiers.append(MODIFIER_KEYS[key])
        elif key in NAMED_KEYS:
            presses.append(NAMED_KEYS[key])
        elif len(key) == 1 and key.isalnum():
            presses.append(key.lower())
        else:
            logger.warning(f"⚠️ Unsupported hotkey symbol skipped: {key!r}")
    return modifiers, presses

# =============================================================================
# MACOS BACKEND (Production)
# =============================================================================
class MacActionDispatcher(IOsActionDispatcher):
    """
    Concrete implementation using pyautogui (Quartz events under the hood).
    Requires the Accessibility permission for the running terminal/app.
    """
    def __init__(self):
        import pyautogui
        self._gui = pyautogui
        self._gui.FAILSAFE = False
        self._gui.PAUSE = 0

    def send_hotkey(self, keys: Sequence[str]) -> None:
        modifiers, presses = translate_keys(keys)
        if not modifiers and not presses:
            return

        for mod in modifiers:
            self._gui.keyDown(mod)
        try:
            for key in presses:
                self._gui.press(key)
        finally:
            for mod in reversed(modifiers):
                self._gui.keyUp(mod)

# =============================================================================
# MOCK BACKEND (Testing / Non-macOS)
# =============================================================================
class MockActionDispatcher(IOsActionDispatcher):
    """
    Silent implementation for Unit Tests or other platforms.
    Records chords instead of executing them.
    """
    def __init__(self):
        self.sent: List[Tuple[str, ...]] = []

    def send_hotkey(self, keys: Sequence[str]) -> None:
        self.sent.append(tuple(keys))
        logger.info(f"[MOCK] Hotkey {' + '.join(keys)}")

def ActionDispatcher(system: Optional[str] = None) -> IOsActionDispatcher:
    """Factory method to return the correct Dispatcher for the current OS."""
    current_os = system or platform.system()
    if current_os == "Darwin":
        return MacActionDispatcher()
    logger.warning(f"⚠️ OS '{current_os}' detected. Using MOCK Action Dispatcher.")
    return MockActionDispatcher()
