"""
SnapSnap Types.
Central definition of Data Contracts to prevent circular imports.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional
import time

# --- LANDMARK TYPES ---
@dataclass(frozen=True)
class JointPoint:
    """One normalized joint position ([0,1] image space, top-left origin)."""
    x: float
    y: float
    confidence: float = 1.0

class Joint(Enum):
    """The 21 hand joints in model input order (same indices as MediaPipe Hands)."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    LITTLE_MCP = 17
    LITTLE_PIP = 18
    LITTLE_DIP = 19
    LITTLE_TIP = 20

@dataclass(frozen=True)
class HandLandmarks:
    """
    Per-frame snapshot of one hand. Joints that were not detected are absent.
    Ephemeral: built by the landmark provider, consumed within the same tick.
    """
    joints: Dict[Joint, JointPoint] = field(default_factory=dict)

    def get(self, joint: Joint) -> Optional[JointPoint]:
        return self.joints.get(joint)

    @property
    def thumb_tip(self) -> Optional[JointPoint]:
        return self.joints.get(Joint.THUMB_TIP)

    @property
    def middle_tip(self) -> Optional[JointPoint]:
        return self.joints.get(Joint.MIDDLE_TIP)

    @property
    def wrist(self) -> Optional[JointPoint]:
        return self.joints.get(Joint.WRIST)

# --- GESTURE TYPES ---
class Gesture(Enum):
    SNAP_READY = "SnapReady"
    MIDDLE_FINGER = "MiddleFinger"
    INCORRECT = "Incorrect"

    @property
    def display_name(self) -> str:
        return {
            Gesture.SNAP_READY: "Snap Ready",
            Gesture.MIDDLE_FINGER: "Middle Finger",
            Gesture.INCORRECT: "Incorrect",
        }[self]

    @classmethod
    def from_label(cls, raw_label: str) -> "Gesture":
        """Anything the model emits that we do not know is treated as no gesture."""
        if not raw_label or not isinstance(raw_label, str):
            return cls.INCORRECT
        clean = raw_label.strip()
        for member in cls:
            if member.value == clean:
                return member
        return cls.INCORRECT

@dataclass(frozen=True)
class GestureClassification:
    gesture: Gesture
    confidence: float
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def failed(cls) -> "GestureClassification":
        """Fail-closed result used whenever inference cannot produce an answer."""
        return cls(Gesture.INCORRECT, 0.0)

# --- PIPELINE TYPES ---
class DetectionState(Enum):
    INITIALIZING = "Initializing..."
    LOOKING_FOR_GESTURE = "Looking for Gesture"
    SNAP_READY = "Snap Ready - Tracking Distance"
    MIDDLE_FINGER_DETECTED = "Middle Finger Detected"
    ERROR = "No Hand Detected"
    MODEL_LOAD_FAILED = "Model Load Failed"

class GestureEvent(Enum):
    SNAP = auto()
    MIDDLE_FINGER_HELD = auto()

@dataclass(frozen=True)
class DisplaySnapshot:
    """Read-only view for the UI layer, refreshed once per processed tick."""
    state: DetectionState = DetectionState.INITIALIZING
    distance: float = 0.0
    confidence: float = 0.0
    thumb_position: Optional[JointPoint] = None
    middle_position: Optional[JointPoint] = None
    show_finger_points: bool = False
