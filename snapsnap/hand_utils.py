"""
SnapSnap Landmark Processing Utilities.
======================================

Handles the conversion of hand data into the classifier's input tensor.

The snap model was trained on 21 joints laid out as a (1, 3, 21) tensor:
row 0 = x, row 1 = y, row 2 = joint confidence. Coordinates use a bottom-left
origin, so MediaPipe's top-left Y is flipped on the way in.
"""

import numpy as np
from typing import Any, Optional

from snapsnap.config import CONFIG
from snapsnap.core.types import HandLandmarks, Joint, JointPoint

JOINT_ORDER = list(Joint)
NUM_JOINTS = len(JOINT_ORDER)

def encode_pose(hand: HandLandmarks, min_confidence: Optional[float] = None, flip_y: bool = True) -> np.ndarray:
    """
    Transforms a HandLandmarks snapshot into the (1, 3, 21) float32 model input.

    Steps:
    1. Walk the joints in model order.
    2. Zero out joints that are missing or at/below `min_confidence`.
    3. Flip Y into the bottom-left origin (optional).
    """
    if min_confidence is None:
        min_confidence = CONFIG["ENCODE_JOINT_MIN_CONFIDENCE"]

    encoded = np.zeros((1, 3, NUM_JOINTS), dtype=np.float32)
    for idx, joint in enumerate(JOINT_ORDER):
        point = hand.get(joint)
        if point is None or point.confidence <= min_confidence:
            continue
        encoded[0, 0, idx] = point.x
        encoded[0, 1, idx] = 1.0 - point.y if flip_y else point.y
        encoded[0, 2, idx] = point.confidence

    return encoded

def from_mediapipe(hand_landmarks: Any, confidence: float = 1.0) -> HandLandmarks:
    """
    Converts a MediaPipe NormalizedLandmarkList into HandLandmarks.
    MediaPipe Hands reports no per-joint score, so every joint gets `confidence`
    (the handedness score of the detection).
    """
    lms = hand_landmarks.landmark if hasattr(hand_landmarks, "landmark") else hand_landmarks
    joints = {}
    for joint in JOINT_ORDER:
        lm = lms[joint.value]
        joints[joint] = JointPoint(float(lm.x), float(lm.y), float(confidence))
    return HandLandmarks(joints)
