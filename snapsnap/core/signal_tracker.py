"""
SnapSnap Signal Tracker (The Snap Detector).
===========================================

Turns a stream of thumb/middle fingertip distances into a one-shot "snap" trigger.

During a snap the thumb-to-middle distance jumps open fast and briefly. A snap
only fires when three independent gates agree:
1. **Rapid increase:** the window slope beats VELOCITY_THRESHOLD and the newest
   sample beats the oldest by DISTANCE_CHANGE_THRESHOLD.
2. **Acceleration:** the newest slope beats the previous one by
   VELOCITY_ACCELERATION_THRESHOLD.
3. **Floor:** the opened distance beats MIN_NORMALIZED_DISTANCE.

Distances are divided by the wrist-to-middle-tip length so the thresholds do not
care how far the hand is from the camera.
"""

import logging
import math
from collections import deque
from typing import Mapping, Optional

from snapsnap.config import CONFIG
from snapsnap.core.types import JointPoint

logger = logging.getLogger(__name__)

class SignalTracker:
    """
    Attributes:
        distance_history (deque): Normalized distances, oldest first.
        velocity_history (deque): Window slopes, oldest first.
        last_snap_time (float): Timestamp of the last confirmed snap.
    """
    VELOCITY_HISTORY_SIZE = 4
    MIN_VELOCITY_SAMPLES = 3

    def __init__(self, config: Mapping = CONFIG):
        self.config = config
        # No maxlen: HISTORY_SIZE is read live and may change between ticks
        self.distance_history = deque()
        self.velocity_history = deque(maxlen=self.VELOCITY_HISTORY_SIZE)
        self.last_snap_time = -math.inf
        self.last_distance: Optional[float] = None

    @staticmethod
    def distance(a: JointPoint, b: JointPoint) -> float:
        return math.hypot(a.x - b.x, a.y - b.y)

    def joints_valid(self, *joints: Optional[JointPoint]) -> bool:
        min_conf = self.config["MIN_JOINT_CONFIDENCE"]
        return all(j is not None and j.confidence > min_conf for j in joints)

    def normalized_distance(self, thumb: JointPoint, middle_tip: JointPoint, wrist: JointPoint) -> float:
        raw = self.distance(thumb, middle_tip)
        scale = self.distance(wrist, middle_tip)
        return raw / scale if scale > 0 else raw

    def observe(self, thumb: Optional[JointPoint], middle_tip: Optional[JointPoint],
                wrist: Optional[JointPoint], now: float) -> bool:
        """
        Feeds one tick of landmarks. Returns True exactly when a snap is confirmed.
        Low-confidence joints make this a no-op: the history is left untouched.
        """
        if not self.joints_valid(thumb, middle_tip, wrist):
            return False

        history_size = self.config["HISTORY_SIZE"]

        # 1. SAMPLE (Scale invariant distance)
        current = self.normalized_distance(thumb, middle_tip, wrist)
        self.last_distance = current
        self.distance_history.append(current)
        while len(self.distance_history) > history_size:
            self.distance_history.popleft()

        if len(self.distance_history) < history_size:
            return False

        # 2. SLOPE (Average over the whole window, rejects single-frame jitter)
        oldest = self.distance_history[0]
        newest = self.distance_history[-1]
        velocity = (newest - oldest) / history_size

        self.velocity_history.append(velocity)
        if len(self.velocity_history) < self.MIN_VELOCITY_SAMPLES:
            return False

        # 3. GATES
        rapid_increase = (velocity > self.config["VELOCITY_THRESHOLD"] and
                          newest > oldest * self.config["DISTANCE_CHANGE_THRESHOLD"])
        accelerating = (len(self.velocity_history) >= 2 and
                        self.velocity_history[-1] >
                        self.velocity_history[-2] * self.config["VELOCITY_ACCELERATION_THRESHOLD"])
        above_floor = newest > self.config["MIN_NORMALIZED_DISTANCE"]

        if not (rapid_increase and accelerating and above_floor):
            return False

        # 4. COOLDOWN
        if (now - self.last_snap_time) <= self.config["SNAP_COOLDOWN"]:
            return False

        self.last_snap_time = now
        logger.info(f"🔥 SNAP DETECTED! Normalized Distance: {newest:.4f}, Velocity: {velocity:.4f}")
        return True

    def reset(self):
        """Drops the rolling windows. The cooldown clock survives."""
        self.distance_history.clear()
        self.velocity_history.clear()
        self.last_distance = None
