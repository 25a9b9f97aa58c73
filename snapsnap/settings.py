"""
SnapSnap User Settings.
======================

Persists what the user chose in the settings window: the two hotkeys, the
processing frame rate and the middle finger hold duration.

Stored as JSON in `data/settings.json`. A missing or unreadable file falls back
to defaults. Nothing here is checked at tick time; `validate()` only produces
advisory warnings for the settings screen.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, MutableMapping, Optional, Sequence

from snapsnap.config import CONFIG, PATHS, validate_config

logger = logging.getLogger(__name__)

NO_KEYS = "No keys selected"

@dataclass
class Settings:
    snap_hotkey: List[str] = field(default_factory=list)
    middle_finger_hotkey: List[str] = field(default_factory=list)
    processing_fps: int = 15
    middle_finger_hold_duration: float = 1.0

class SettingsStore:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or PATHS["SETTINGS_FILE"])
        self.settings = Settings()

    # --- PERSISTENCE ---
    def load(self) -> Settings:
        if not self.path.exists():
            self.settings = Settings()
            return self.settings

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Failed to read settings {self.path}: {e}. Using defaults.")
            self.settings = Settings()
            return self.settings

        defaults = Settings()
        self.settings = Settings(
            snap_hotkey=list(raw.get("snap_hotkey", defaults.snap_hotkey)),
            middle_finger_hotkey=list(raw.get("middle_finger_hotkey", defaults.middle_finger_hotkey)),
            processing_fps=int(raw.get("processing_fps", defaults.processing_fps)),
            middle_finger_hold_duration=float(
                raw.get("middle_finger_hold_duration", defaults.middle_finger_hold_duration)),
        )
        logger.info(f"📊 Settings loaded: Processing {self.settings.processing_fps}fps, "
                    f"Middle finger hold {self.settings.middle_finger_hold_duration}s")
        return self.settings

    def save(self):
        os.makedirs(self.path.parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(asdict(self.settings), f, indent=4, ensure_ascii=False)

    # --- HOTKEYS ---
    def set_snap_hotkey(self, keys: Sequence[str]):
        self.settings.snap_hotkey = list(keys)
        logger.info(f"📝 Snap hotkey changed to: {self.settings.snap_hotkey}")

    def set_middle_finger_hotkey(self, keys: Sequence[str]):
        self.settings.middle_finger_hotkey = list(keys)
        logger.info(f"📝 Middle finger hotkey changed to: {self.settings.middle_finger_hotkey}")

    def clear_snap_hotkey(self):
        self.settings.snap_hotkey = []

    def clear_middle_finger_hotkey(self):
        self.settings.middle_finger_hotkey = []

    def clear_all_hotkeys(self):
        self.clear_snap_hotkey()
        self.clear_middle_finger_hotkey()

    @staticmethod
    def hotkey_string(keys: Sequence[str]) -> str:
        return " + ".join(keys) if keys else NO_KEYS

    # --- LIVE CONFIG ---
    def apply_to(self, config: MutableMapping = CONFIG) -> MutableMapping:
        """Pushes the user tunables into the live config the pipeline reads each tick."""
        config["PROCESSING_FPS"] = self.settings.processing_fps
        config["MIDDLE_FINGER_HOLD_DURATION"] = self.settings.middle_finger_hold_duration
        return config

    def validate(self) -> List[str]:
        issues = []
        if not self.settings.snap_hotkey and not self.settings.middle_finger_hotkey:
            issues.append("No hotkeys configured")
        issues.extend(validate_config({
            "PROCESSING_FPS": self.settings.processing_fps,
            "MIDDLE_FINGER_HOLD_DURATION": self.settings.middle_finger_hold_duration,
            "HISTORY_SIZE": CONFIG["HISTORY_SIZE"],
        }))
        return issues
