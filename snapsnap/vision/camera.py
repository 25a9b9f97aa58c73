"""
SnapSnap Camera Reader.

The camera thread is the only producer of frames. Every frame it grabs gets a
sequence number, and consumers ask for "anything newer than N". A consumer that
polls faster than the camera delivers gets nothing back instead of the same
frame twice, so one physical frame is never fed into the distance history more
than once.
"""
import logging
import platform
import threading
from typing import Optional, Tuple

import cv2
import numpy as np

from snapsnap.config import CONFIG

logger = logging.getLogger(__name__)

def _default_backend() -> int:
    # AVFoundation is the native capture stack on macOS
    if platform.system() == "Darwin":
        return cv2.CAP_AVFOUNDATION
    return cv2.CAP_ANY

class ThreadedCamera:
    """
    Attributes:
        seq (int): Number of frames delivered so far (0 = none yet).
        running (bool): False once the device stops delivering or is released.
    """
    def __init__(self, src: int = 0, fps: Optional[int] = None, backend: Optional[int] = None):
        self.cap = cv2.VideoCapture(src, _default_backend() if backend is None else backend)
        if not self.cap.isOpened():
            raise RuntimeError(f"❌ Camera {src} could not be opened")

        self.cap.set(cv2.CAP_PROP_FPS, fps or CONFIG.get("CAMERA_FPS", 15))

        self.lock = threading.Lock()
        self.frame: Optional[np.ndarray] = None
        self.seq = 0
        self.running = True

        self.thread = threading.Thread(target=self._reader, daemon=True)
        self.thread.start()
        logger.info("📷 Camera session started")

    def _reader(self):
        """Background thread: publishes each grabbed frame under a new sequence number."""
        while self.running:
            ret, frame = self.cap.read()
            if not ret:
                logger.warning("⚠️ Camera stopped delivering frames")
                self.running = False
                break
            with self.lock:
                self.frame = frame
                self.seq += 1

    def read_since(self, last_seq: int) -> Tuple[Optional[np.ndarray], int]:
        """
        Returns (frame, seq) for the newest frame if it is newer than `last_seq`,
        else (None, last_seq). Non-blocking. Frames skipped in between are dropped.
        """
        with self.lock:
            if self.frame is None or self.seq == last_seq:
                return None, last_seq
            return self.frame.copy(), self.seq

    def release(self):
        """Safely stops the thread and releases hardware."""
        self.running = False
        self.cap.release()
        logger.info("📷 Camera session stopped")
