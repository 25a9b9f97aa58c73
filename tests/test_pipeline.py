import unittest
from unittest import mock
from snapsnap.config import CONFIG
from snapsnap.core.interfaces import IGestureClassifier, ILandmarkProvider
from snapsnap.core.types import (DetectionState, Gesture, GestureClassification,
                                 GestureEvent, HandLandmarks, Joint, JointPoint)
from snapsnap.pipeline import GesturePipeline

def make_hand(distance, conf=0.9):
    """Hand scale 1.0 (wrist -> middle tip), thumb `distance` away from the middle tip."""
    return HandLandmarks({
        Joint.WRIST: JointPoint(0.0, 0.0, conf),
        Joint.MIDDLE_TIP: JointPoint(0.0, 1.0, conf),
        Joint.THUMB_TIP: JointPoint(distance, 1.0, conf),
    })

# The "frame" handed to the pipeline is the hand itself (or None for an empty frame)
class MockLandmarkProvider(ILandmarkProvider):
    def __init__(self):
        self.calls = 0

    def detect(self, frame):
        self.calls += 1
        if frame is not None:
            yield frame

class MockClassifier(IGestureClassifier):
    def __init__(self, gesture=Gesture.INCORRECT, confidence=0.99):
        self.result = GestureClassification(gesture, confidence)
        self.error = None

    def classify(self, encoded_pose):
        if self.error:
            raise self.error
        return self.result

class BrokenLandmarkProvider(ILandmarkProvider):
    def detect(self, frame):
        raise RuntimeError("hand pose request failed")

class TestGesturePipeline(unittest.TestCase):
    def setUp(self):
        self.config = dict(CONFIG)
        self.config["PROCESSING_FPS"] = 10      # 0.1s rate gate
        self.config["MIDDLE_FINGER_HOLD_DURATION"] = 1.0
        self.config["MIDDLE_FINGER_COOLDOWN"] = 2.0
        self.provider = MockLandmarkProvider()
        self.classifier = MockClassifier()
        self.pipeline = GesturePipeline(self.provider, self.classifier, self.config)

    def test_initial_state(self):
        self.assertEqual(self.pipeline.snapshot().state, DetectionState.INITIALIZING)

    def test_rate_gate_skips_everything(self):
        """A frame inside the interval touches nothing, not even the display."""
        self.pipeline.tick(make_hand(0.1), now=0.0)
        before = self.pipeline.snapshot()
        history = list(self.pipeline.signal_tracker.distance_history)

        self.assertIsNone(self.pipeline.tick(None, now=0.05))

        self.assertEqual(self.provider.calls, 1)
        self.assertEqual(self.pipeline.snapshot(), before)
        self.assertEqual(list(self.pipeline.signal_tracker.distance_history), history)

    def test_no_hand_sets_error(self):
        self.assertIsNone(self.pipeline.tick(None, now=0.0))
        self.assertEqual(self.pipeline.snapshot().state, DetectionState.ERROR)

    def test_low_confidence_forces_incorrect(self):
        """A confident-looking MiddleFinger below threshold is just no gesture."""
        self.classifier.result = GestureClassification(Gesture.MIDDLE_FINGER, 0.5)
        self.pipeline.tick(make_hand(0.1), now=0.0)

        snap = self.pipeline.snapshot()
        self.assertEqual(snap.state, DetectionState.LOOKING_FOR_GESTURE)
        self.assertAlmostEqual(snap.confidence, 0.5)
        self.assertIsNone(self.pipeline.hold_confirmer.start_time)

    def test_classifier_failure_degrades(self):
        """An exploding classifier is treated as Incorrect; tracking still runs."""
        self.classifier.error = RuntimeError("boom")
        self.assertIsNone(self.pipeline.tick(make_hand(0.1), now=0.0))
        self.assertEqual(self.pipeline.snapshot().state, DetectionState.LOOKING_FOR_GESTURE)
        self.assertEqual(len(self.pipeline.signal_tracker.distance_history), 1)

    def test_detection_failure_reads_as_no_hand(self):
        """A crashing pose detector must not take the loop down."""
        self.pipeline.tick(make_hand(0.1), now=0.0)
        self.pipeline.landmark_provider = BrokenLandmarkProvider()

        self.assertIsNone(self.pipeline.tick(object(), now=0.2))
        self.assertEqual(self.pipeline.snapshot().state, DetectionState.ERROR)
        self.assertEqual(len(self.pipeline.signal_tracker.distance_history), 1)

    def test_classifier_without_result_degrades(self):
        self.classifier.result = None
        self.assertIsNone(self.pipeline.tick(make_hand(0.1), now=0.0))

        snap = self.pipeline.snapshot()
        self.assertEqual(snap.state, DetectionState.LOOKING_FOR_GESTURE)
        self.assertAlmostEqual(snap.confidence, 0.0)
        self.assertEqual(len(self.pipeline.signal_tracker.distance_history), 1)

    def test_default_clock_is_monotonic(self):
        with mock.patch("snapsnap.pipeline.time.monotonic", return_value=100.0), \
                mock.patch("snapsnap.pipeline.time.time", return_value=0.0):
            self.pipeline.tick(make_hand(0.1))
        self.assertEqual(self.pipeline.last_processed, 100.0)

    def test_middle_finger_hold_event(self):
        self.classifier.result = GestureClassification(Gesture.MIDDLE_FINGER, 0.99)
        self.assertIsNone(self.pipeline.tick(make_hand(0.1), now=0.0))
        self.assertEqual(self.pipeline.snapshot().state, DetectionState.MIDDLE_FINGER_DETECTED)
        self.assertIsNone(self.pipeline.tick(make_hand(0.1), now=0.5))
        self.assertEqual(self.pipeline.tick(make_hand(0.1), now=1.0), [GestureEvent.MIDDLE_FINGER_HELD])

    def test_snap_ready_clears_hold(self):
        self.classifier.result = GestureClassification(Gesture.MIDDLE_FINGER, 0.99)
        self.pipeline.tick(make_hand(0.1), now=0.0)
        self.classifier.result = GestureClassification(Gesture.SNAP_READY, 0.99)
        self.pipeline.tick(make_hand(0.1), now=0.5)

        self.assertEqual(self.pipeline.snapshot().state, DetectionState.SNAP_READY)
        self.assertIsNone(self.pipeline.hold_confirmer.start_time)

    def test_snap_tracked_whatever_the_label(self):
        """Distance tracking ignores the displayed label."""
        events = None
        t = 0.0
        for d in [0.1] * 10 + [0.5]:
            events = self.pipeline.tick(make_hand(d), now=t)
            t += 0.2
        self.assertEqual(events, [GestureEvent.SNAP])
        self.assertEqual(self.pipeline.snapshot().state, DetectionState.LOOKING_FOR_GESTURE)

    def test_snap_and_hold_same_tick(self):
        """Both streams are independent and can fire together."""
        self.config["HISTORY_SIZE"] = 3
        self.classifier.result = GestureClassification(Gesture.MIDDLE_FINGER, 0.99)
        ticks = [(0.0, 0.1), (0.25, 0.1), (0.5, 0.1), (0.75, 0.1), (1.0, 0.5)]
        events = [self.pipeline.tick(make_hand(d), now=t) for t, d in ticks]

        self.assertEqual(events[:-1], [None] * 4)
        self.assertCountEqual(events[-1], [GestureEvent.MIDDLE_FINGER_HELD, GestureEvent.SNAP])

    def test_disabled_preserves_history(self):
        for i in range(3):
            self.pipeline.tick(make_hand(0.1), now=i * 0.2)
        self.pipeline.enabled = False

        self.assertIsNone(self.pipeline.tick(make_hand(0.1), now=1.0))
        self.assertEqual(self.provider.calls, 3)

        self.pipeline.enabled = True
        self.pipeline.tick(make_hand(0.1), now=1.2)
        self.assertEqual(len(self.pipeline.signal_tracker.distance_history), 4)

    def test_display_tracks_fingers(self):
        self.classifier.result = GestureClassification(Gesture.SNAP_READY, 0.99)
        self.pipeline.tick(make_hand(0.25), now=0.0)

        snap = self.pipeline.snapshot()
        self.assertTrue(snap.show_finger_points)
        self.assertAlmostEqual(snap.distance, 0.25)
        self.assertEqual(snap.thumb_position, JointPoint(0.25, 1.0, 0.9))

    def test_weak_joints_hide_fingers(self):
        self.pipeline.tick(make_hand(0.25, conf=0.2), now=0.0)
        self.assertFalse(self.pipeline.snapshot().show_finger_points)
        self.assertEqual(len(self.pipeline.signal_tracker.distance_history), 0)

    def test_processing_fps_read_live(self):
        self.pipeline.tick(make_hand(0.1), now=0.0)
        self.config["PROCESSING_FPS"] = 20
        self.pipeline.tick(make_hand(0.1), now=0.06)
        self.assertEqual(self.provider.calls, 2)

if __name__ == '__main__':
    unittest.main()
