"""SnapSnap Hold Confirmer (Middle Finger Timer)."""
import logging
import math
from typing import Mapping, Optional

from snapsnap.config import CONFIG

logger = logging.getLogger(__name__)

class HoldConfirmer:
    """
    Fires once a held pose has been seen continuously for MIDDLE_FINGER_HOLD_DURATION.
    Any interruption resets the timer. A satisfied hold blocked by the cooldown
    keeps its start time and fires on the first tick after the cooldown clears.
    """
    def __init__(self, config: Mapping = CONFIG):
        self.config = config
        self.start_time: Optional[float] = None
        self.last_fired = -math.inf

    def observe(self, is_held: bool, now: float) -> bool:
        if not is_held:
            self.start_time = None
            return False

        if self.start_time is None:
            self.start_time = now
            logger.debug("🖕 Middle finger detected - starting hold timer")
            return False

        held_for = now - self.start_time
        if held_for >= self.config["MIDDLE_FINGER_HOLD_DURATION"] and \
                (now - self.last_fired) > self.config["MIDDLE_FINGER_COOLDOWN"]:
            logger.info(f"🖕 Middle finger held for {held_for:.2f}s - confirmed")
            self.last_fired = now
            self.start_time = None
            return True

        return False

    def reset(self):
        self.start_time = None
