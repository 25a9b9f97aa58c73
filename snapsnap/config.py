"""
SnapSnap Configuration Management.
==================================

This module defines the parameter space for the SnapSnap gesture pipeline.
The parameters are organized into the same "Layer Cake" model the runtime uses:
capture -> classifier -> snap physics -> hold timing.

! WARNING !
Changing `GESTURE_LABELS` requires retraining the ONNX model.
Changing the Snap Physics layer changes how eager the snap trigger is immediately.

The pipeline never caches these values. It reads the mapping it was given on
every tick, so editing `CONFIG` (or the copy you passed in) is live.
"""

from pathlib import Path
from typing import List, Mapping
import os

# --- SYSTEM PATHS ---
FILE_PATH = Path(__file__).resolve()
PROJECT_ROOT = FILE_PATH.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

PATHS = {
    "DATA_DIR": DATA_DIR,
    "MODELS_DIR": PROJECT_ROOT / "models",
    "SETTINGS_FILE": DATA_DIR / "settings.json",
}

# --- LABEL DEFINITIONS (CRITICAL) ---
# Fallback output order of the classifier when `label_map.pkl` is missing.
# Must match the class order the model was exported with.
GESTURE_LABELS = [
    "Incorrect",        # Null state
    "MiddleFinger",     # Held pose -> hold confirmer
    "SnapReady",        # Pinch pose before the snap
]

# --- MASTER CONFIGURATION ---
CONFIG = {
    # =========================================================
    # LAYER 1: CAPTURE
    # =========================================================
    "CAMERA_INDEX": 0,              # OpenCV device ID
    "CAMERA_FPS": 15,               # Requested hardware frame rate
    "PROCESSING_FPS": 15,           # Frames per second actually processed (rate gate)

    # =========================================================
    # LAYER 2: CLASSIFIER
    # =========================================================
    "MODEL_NAME": "snap_model",     # models/<name>.onnx
    "CONFIDENCE_THRESHOLD": 0.95,   # Below this the label is forced to Incorrect
    "MIN_JOINT_CONFIDENCE": 0.3,    # Thumb/middle/wrist must all beat this to track distance
    "ENCODE_JOINT_MIN_CONFIDENCE": 0.1, # Joints at or below this are zeroed in the model input
    "MAX_NUM_HANDS": 1,
    "MIN_DETECTION_CONFIDENCE": 0.5,
    "MIN_TRACKING_CONFIDENCE": 0.5,

    # =========================================================
    # LAYER 3: SNAP PHYSICS (Signal Tracker)
    # =========================================================
    "HISTORY_SIZE": 8,                      # Distance samples in the velocity window
    "VELOCITY_THRESHOLD": 0.02,             # Min window slope (normalized units / sample)
    "DISTANCE_CHANGE_THRESHOLD": 1.25,      # Newest must exceed oldest by this ratio
    "VELOCITY_ACCELERATION_THRESHOLD": 1.3, # Newest slope vs previous slope ratio
    "MIN_NORMALIZED_DISTANCE": 0.15,        # Absolute floor for the opened distance
    "SNAP_COOLDOWN": 0.8,                   # Seconds between two snaps

    # =========================================================
    # LAYER 4: HOLD TIMING (Hold Confirmer)
    # =========================================================
    "MIDDLE_FINGER_HOLD_DURATION": 1.0,     # Seconds the pose must be held
    "MIDDLE_FINGER_COOLDOWN": 2.0,          # Seconds between two confirmations
}

# Advisory bounds, checked only when settings are saved.
FPS_RANGE = (5, 30)
HOLD_DURATION_RANGE = (0.1, 5.0)


def frame_process_interval(config: Mapping = CONFIG) -> float:
    """Seconds between two processed frames, derived from PROCESSING_FPS."""
    fps = config["PROCESSING_FPS"]
    if fps <= 0:
        return 0.0
    return 1.0 / float(fps)


def validate_config(config: Mapping = CONFIG) -> List[str]:
    """
    Returns human readable warnings for out-of-range values.
    Never raises: the pipeline trusts whatever it is given.
    """
    issues = []

    fps = config.get("PROCESSING_FPS", 0)
    if fps < FPS_RANGE[0] or fps > FPS_RANGE[1]:
        issues.append(f"Processing FPS should be between {FPS_RANGE[0]}-{FPS_RANGE[1]}")

    hold = config.get("MIDDLE_FINGER_HOLD_DURATION", 0.0)
    if hold < HOLD_DURATION_RANGE[0] or hold > HOLD_DURATION_RANGE[1]:
        issues.append(
            f"Hold duration should be between {HOLD_DURATION_RANGE[0]}-{HOLD_DURATION_RANGE[1]} seconds"
        )

    if config.get("HISTORY_SIZE", 0) < 2:
        issues.append("History size should be at least 2 samples")

    return issues


def init_environment():
    """
    Creates necessary directories safely at runtime.
    """
    os.makedirs(PATHS["DATA_DIR"], exist_ok=True)
    os.makedirs(PATHS["MODELS_DIR"], exist_ok=True)
