"""
SnapSnap - Main Entry Point.
===========================

This module serves as the bootloader for the SnapSnap system.
It wires the layers together:
1. Perception (OpenCV camera thread + MediaPipe Hands).
2. Cognition (ONNX snap classifier).
3. The Gesture Pipeline (snap tracker + hold confirmer).
4. Control (hotkey dispatch).

Usage:
    $ python -m snapsnap.main [--camera N] [--dev] [--paused]

Press Ctrl+C to exit.
"""
import argparse
import logging
import time

from snapsnap.config import CONFIG, init_environment
from snapsnap.control.controller import SnapController
from snapsnap.gesture_engine import SnapClassifierBrain
from snapsnap.pipeline import GesturePipeline
from snapsnap.settings import SettingsStore
from snapsnap.vision.camera import ThreadedCamera
from snapsnap.vision.landmarks import MediaPipeLandmarkProvider

logger = logging.getLogger("snapsnap")

parser = argparse.ArgumentParser(description="SnapSnap - snap your fingers, press a hotkey.")
parser.add_argument("--camera", help="OpenCV camera index.", type=int, default=CONFIG["CAMERA_INDEX"])
parser.add_argument("--dev", help="Dev mode: detect but never press keys.", action="store_true", default=False)
parser.add_argument("--paused", help="Start with detection paused.", action="store_true", default=False)
parser.add_argument("--debug", help="Verbose logging.", action="store_true", default=False)

def main(argv=None):
    """
    Main Event Loop.
    """
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 1. Boot Sequence
    init_environment()
    print("🚀 SNAPSNAP: ONLINE")
    print("   -> Press 'Ctrl+C' to Exit")

    settings = SettingsStore()
    settings.load()
    settings.apply_to(CONFIG)
    for issue in settings.validate():
        logger.warning(f"⚠️ {issue}")

    # 2. Initialize Subsystems
    brain = SnapClassifierBrain(CONFIG)
    pipeline = GesturePipeline(MediaPipeLandmarkProvider(CONFIG), brain, CONFIG)
    if not brain.is_loaded:
        pipeline.mark_model_missing()
    pipeline.enabled = not args.paused

    pilot = SnapController(settings)
    if args.dev:
        pilot.toggle_dev_mode()

    cam = ThreadedCamera(args.camera, fps=CONFIG["CAMERA_FPS"])

    last_state = None
    last_seq = 0
    try:
        while cam.running:
            frame, last_seq = cam.read_since(last_seq)
            if frame is None:
                time.sleep(0.005)
                continue

            events = pipeline.tick(frame)
            pilot.handle(events)

            snap = pipeline.snapshot()
            if snap.state != last_state:
                logger.debug(f"State: {snap.state.value} ({snap.confidence:.2f})")
                last_state = snap.state

            # Yield to the camera thread
            time.sleep(0.005)
    except KeyboardInterrupt:
        pass
    finally:
        # Graceful Shutdown
        cam.release()
        print("🔴 SNAPSNAP OFFLINE")

if __name__ == "__main__":
    main()
