"""
SnapSnap Gesture Pipeline (The Referee).
=======================================

One tick per accepted camera frame:

    frame -> landmarks -> (classification, distance tracking) -> events

1. **Rate gate:** frames closer together than 1 / PROCESSING_FPS are dropped
   without touching any state.
2. **Classification:** the primary hand is encoded and classified. Anything below
   CONFIDENCE_THRESHOLD counts as `Incorrect`.
3. **Hold confirmation:** only the MiddleFinger label feeds the hold timer; every
   other label clears it.
4. **Snap tracking:** runs on every tick with a hand, whatever the label says.
   The classifier decides what is *shown*, the distance signal decides what *fires*.

All tracker state lives in this object and is only touched from the thread that
calls `tick`.
"""

import logging
import math
import time
from typing import Any, List, Mapping, Optional

from snapsnap.config import CONFIG, frame_process_interval
from snapsnap.core.hold_confirmer import HoldConfirmer
from snapsnap.core.interfaces import IGestureClassifier, ILandmarkProvider
from snapsnap.core.signal_tracker import SignalTracker
from snapsnap.core.state_manager import StateManager
from snapsnap.core.types import (DetectionState, DisplaySnapshot, Gesture,
                                 GestureClassification, GestureEvent, HandLandmarks)
from snapsnap.hand_utils import encode_pose

logger = logging.getLogger(__name__)

class GesturePipeline:
    """
    Attributes:
        enabled (bool): Run/Pause switch. Pausing keeps every history intact.
        signal_tracker (SignalTracker): Snap detector.
        hold_confirmer (HoldConfirmer): Middle finger hold timer.
        state (StateManager): Display state for the UI layer.
    """
    def __init__(self, landmark_provider: ILandmarkProvider, classifier: IGestureClassifier,
                 config: Mapping = CONFIG):
        self.landmark_provider = landmark_provider
        self.classifier = classifier
        self.config = config

        self.signal_tracker = SignalTracker(config)
        self.hold_confirmer = HoldConfirmer(config)
        self.state = StateManager()

        self.enabled = True
        self.last_processed = -math.inf

    def snapshot(self) -> DisplaySnapshot:
        return self.state.snapshot()

    def _classify(self, hand: HandLandmarks) -> GestureClassification:
        try:
            result = self.classifier.classify(encode_pose(hand, self.config["ENCODE_JOINT_MIN_CONFIDENCE"]))
        except Exception as e:
            logger.error(f"❌ Classifier failed: {e}")
            return GestureClassification.failed()
        if result is None:
            return GestureClassification.failed()

        if result.confidence < self.config["CONFIDENCE_THRESHOLD"]:
            return GestureClassification(Gesture.INCORRECT, result.confidence, result.timestamp)
        return result

    def tick(self, frame: Any, now: Optional[float] = None) -> Optional[List[GestureEvent]]:
        """
        Processes one camera frame.

        Returns:
            The events confirmed on this tick (snap and hold are independent, so
            both can fire together), or None.
        """
        if not self.enabled:
            return None

        now = time.monotonic() if now is None else now

        # 1. RATE GATE
        if (now - self.last_processed) < frame_process_interval(self.config):
            return None
        self.last_processed = now

        # 2. PERCEPTION (Primary hand only)
        try:
            hand = next(iter(self.landmark_provider.detect(frame)), None)
        except Exception as e:
            logger.error(f"❌ Hand pose detection failed: {e}")
            hand = None
        if hand is None:
            self.state.set_error()
            return None

        # 3. COGNITION
        result = self._classify(hand)
        self.state.update_gesture(result.gesture, result.confidence)

        events = []

        # 4. HOLD CONFIRMATION
        if result.gesture == Gesture.MIDDLE_FINGER:
            if self.hold_confirmer.observe(True, now):
                events.append(GestureEvent.MIDDLE_FINGER_HELD)
        else:
            self.hold_confirmer.reset()

        # 5. SNAP TRACKING (Label independent)
        thumb, middle, wrist = hand.thumb_tip, hand.middle_tip, hand.wrist
        if self.signal_tracker.observe(thumb, middle, wrist, now):
            events.append(GestureEvent.SNAP)

        if self.signal_tracker.joints_valid(thumb, middle, wrist):
            self.state.update_fingers(thumb, middle, self.signal_tracker.last_distance)
        else:
            self.state.show_finger_points = False

        return events or None

    def mark_model_missing(self):
        """Pins the display to the model failure state until a tick says otherwise."""
        self.state.set_error(DetectionState.MODEL_LOAD_FAILED)
