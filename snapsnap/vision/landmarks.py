"""
SnapSnap Landmark Provider (MediaPipe Hands).
"""
from typing import Any, Iterator, Mapping

import cv2
import mediapipe as mp

from snapsnap.config import CONFIG
from snapsnap.core.interfaces import ILandmarkProvider
from snapsnap.core.types import HandLandmarks
from snapsnap.hand_utils import from_mediapipe

class MediaPipeLandmarkProvider(ILandmarkProvider):
    def __init__(self, config: Mapping = CONFIG):
        self.hands = mp.solutions.hands.Hands(
            max_num_hands=config["MAX_NUM_HANDS"],
            min_detection_confidence=config["MIN_DETECTION_CONFIDENCE"],
            min_tracking_confidence=config["MIN_TRACKING_CONFIDENCE"],
            model_complexity=1,
        )

    def detect(self, frame: Any) -> Iterator[HandLandmarks]:
        # MediaPipe requires RGB; OpenCV uses BGR
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.hands.process(rgb)
        if not results.multi_hand_landmarks:
            return

        handedness = results.multi_handedness or []
        for i, hand in enumerate(results.multi_hand_landmarks):
            score = handedness[i].classification[0].score if i < len(handedness) else 1.0
            yield from_mediapipe(hand, confidence=score)

    def close(self):
        self.hands.close()
