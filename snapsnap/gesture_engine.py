"""
SnapSnap Cognition Engine (The Brain).
=====================================

This module maps the encoded hand skeleton to one of three semantic labels:
SnapReady, MiddleFinger or Incorrect.

The classifier is a small ONNX model run on CPU. It fails closed: if the model
is missing or inference throws, the answer is `Incorrect` with zero confidence,
which the pipeline treats exactly like a low-confidence guess.
"""

import onnxruntime as ort
import numpy as np
import joblib
import os
from pathlib import Path
import logging
from typing import Dict, Mapping, Optional

from snapsnap.config import CONFIG, GESTURE_LABELS, PATHS
from snapsnap.core.interfaces import IGestureClassifier
from snapsnap.core.types import Gesture, GestureClassification

logger = logging.getLogger(__name__)

class SnapClassifierBrain(IGestureClassifier):
    """
    The Inference Engine.

    Attributes:
        session (ort.InferenceSession): The ONNX runtime session (None when unavailable).
        label_map (dict): Int -> String mapping for gesture classes.
    """
    def __init__(self, config: Mapping = CONFIG, models_dir=None):
        self.config = config
        self.models_dir = Path(models_dir or PATHS["MODELS_DIR"])
        self.session: Optional[ort.InferenceSession] = None
        self.label_map: Dict[int, str] = {}
        self._load_resources()

    @property
    def is_loaded(self) -> bool:
        return self.session is not None

    def _load_resources(self):
        """Loads the ONNX model and Label Map from disk."""
        # 1. Load the Label Map
        label_map_path = str(self.models_dir / "label_map.pkl")

        if not os.path.exists(label_map_path):
            logger.warning(f"⚠️ Label Map missing: {label_map_path}. Using default label order.")
            self.label_map = {i: label for i, label in enumerate(GESTURE_LABELS)}
        else:
            logger.info(f"📂 LOADING LABEL MAP: {label_map_path}")
            self.label_map = joblib.load(label_map_path)

        # 2. Load the Model
        model_path = str(self.models_dir / f"{self.config['MODEL_NAME']}.onnx")
        if not os.path.exists(model_path):
            logger.error(f"❌ ONNX Model not found at: {model_path}")
            return

        logger.info(f"🧠 LOADING ONNX MODEL: {model_path}")
        try:
            self.session = ort.InferenceSession(model_path, providers=['CPUExecutionProvider'])
        except Exception as e:
            logger.error(f"❌ Failed to load model: {e}")
            self.session = None
            return
        self.input_name = self.session.get_inputs()[0].name
        self.output_name = self.session.get_outputs()[0].name

    def decode(self, scores: np.ndarray) -> GestureClassification:
        """Argmax over the class scores -> typed classification."""
        scores = np.asarray(scores, dtype=np.float64).reshape(-1)
        if scores.size == 0:
            return GestureClassification.failed()

        best_idx = int(np.argmax(scores))
        conf = float(scores[best_idx])
        raw_label = self.label_map.get(best_idx, "Incorrect")
        return GestureClassification(Gesture.from_label(raw_label), conf)

    def classify(self, encoded_pose: np.ndarray) -> GestureClassification:
        """
        Pipeline: Infer -> Decode.

        Args:
            encoded_pose: (1, 3, 21) float32 tensor from hand_utils.encode_pose.

        Returns:
            GestureClassification (fails closed on any error).
        """
        if self.session is None:
            return GestureClassification.failed()

        try:
            input_data = np.asarray(encoded_pose, dtype=np.float32)
            pred_scores = self.session.run([self.output_name], {self.input_name: input_data})[0][0]
        except Exception as e:
            logger.error(f"❌ Model prediction failed: {e}")
            return GestureClassification.failed()

        return self.decode(pred_scores)
