"""
SnapSnap State Management.
Holds what the UI is allowed to see. Only the pipeline writes here.
"""
from typing import Optional

from snapsnap.core.types import DetectionState, DisplaySnapshot, Gesture, JointPoint

class StateManager:
    def __init__(self):
        # --- DETECTION STATE ---
        self.state = DetectionState.INITIALIZING
        self.prev_gesture = Gesture.INCORRECT
        self.curr_gesture = Gesture.INCORRECT

        # --- OVERLAY DATA ---
        self.confidence = 0.0
        self.distance = 0.0
        self.thumb_position: Optional[JointPoint] = None
        self.middle_position: Optional[JointPoint] = None
        self.show_finger_points = False

    def update_gesture(self, gesture: Gesture, confidence: float):
        """Updates history and maps the label onto the displayed state."""
        self.prev_gesture = self.curr_gesture
        self.curr_gesture = gesture
        self.confidence = confidence

        if gesture == Gesture.SNAP_READY:
            self.state = DetectionState.SNAP_READY
        elif gesture == Gesture.MIDDLE_FINGER:
            self.state = DetectionState.MIDDLE_FINGER_DETECTED
        else:
            self.state = DetectionState.LOOKING_FOR_GESTURE
            self.reset_finger_points()

    def update_fingers(self, thumb: JointPoint, middle: JointPoint, distance: float):
        self.thumb_position = thumb
        self.middle_position = middle
        self.distance = distance
        self.show_finger_points = True

    def reset_finger_points(self):
        self.distance = 0.0
        self.show_finger_points = False

    def set_error(self, state: DetectionState = DetectionState.ERROR):
        self.state = state
        self.confidence = 0.0
        self.reset_finger_points()

    def snapshot(self) -> DisplaySnapshot:
        return DisplaySnapshot(
            state=self.state,
            distance=self.distance,
            confidence=self.confidence,
            thumb_position=self.thumb_position,
            middle_position=self.middle_position,
            show_finger_points=self.show_finger_points,
        )
