"""
SnapSnap Core Interfaces.
Defines the abstract contracts for the collaborators around the pipeline.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, Sequence

import numpy as np

from snapsnap.core.types import GestureClassification, HandLandmarks

class ILandmarkProvider(ABC):
    """
    Hand pose detector. Yields zero or more hands for a single frame.
    The iterator is tied to that frame and is not restartable.
    """
    @abstractmethod
    def detect(self, frame: Any) -> Iterator[HandLandmarks]: pass

class IGestureClassifier(ABC):
    """
    Pose classifier over a (1, 3, 21) float32 tensor.
    Implementations fail closed: on any internal error they return
    GestureClassification.failed() instead of raising.
    """
    @abstractmethod
    def classify(self, encoded_pose: np.ndarray) -> GestureClassification: pass

class IOsActionDispatcher(ABC):
    """
    Abstract Protocol for OS Input Injection.
    """
    @abstractmethod
    def send_hotkey(self, keys: Sequence[str]) -> None: pass
