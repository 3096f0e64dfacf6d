"""
Step 1: Frame Capture
Captures camera frames from a webcam or a video file for skeleton tracking.
"""

import time
from abc import ABC, abstractmethod
from typing import Generator, Optional, Tuple

import cv2
import numpy as np


class FrameCapture(ABC):
    """Abstract base class for frame capture."""

    frame_number: int = 0

    @abstractmethod
    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        """Read a single frame."""
        pass

    @abstractmethod
    def release(self) -> None:
        """Release resources."""
        pass

    @abstractmethod
    def is_opened(self) -> bool:
        """Check if capture is opened."""
        pass

    @abstractmethod
    def timestamp(self) -> float:
        """Timestamp of the last frame read, in seconds."""
        pass

    def frames(self) -> Generator[Tuple[int, np.ndarray], None, None]:
        """Generator that yields (frame_number, frame)."""
        while self.is_opened():
            ret, frame = self.read()
            if not ret:
                break
            yield self.frame_number, frame
        self.release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()


class WebcamCapture(FrameCapture):
    """Capture frames from webcam."""

    def __init__(self, camera_id: int = 0, width: int = 640, height: int = 480):
        self.camera_id = camera_id
        self.width = width
        self.height = height
        self.cap = cv2.VideoCapture(camera_id)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        self.frame_number = 0
        self._start = time.time()
        self._last = 0.0

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        ret, frame = self.cap.read()
        if ret:
            self.frame_number += 1
            self._last = time.time() - self._start
        return ret, frame

    def release(self) -> None:
        self.cap.release()

    def is_opened(self) -> bool:
        return self.cap.isOpened()

    def timestamp(self) -> float:
        return self._last


class VideoCapture(FrameCapture):
    """Capture frames from video file."""

    def __init__(self, video_path: str):
        self.video_path = video_path
        self.cap = cv2.VideoCapture(video_path)
        if not self.cap.isOpened():
            raise RuntimeError(f"Cannot open video {video_path}")
        self.total_frames = int(self.cap.get(cv2.CAP_PROP_FRAME_COUNT))
        self.fps = self.cap.get(cv2.CAP_PROP_FPS) or 30.0
        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.frame_number = 0

    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        ret, frame = self.cap.read()
        if ret:
            self.frame_number += 1
        return ret, frame

    def release(self) -> None:
        self.cap.release()

    def is_opened(self) -> bool:
        return self.cap.isOpened()

    def timestamp(self) -> float:
        return self.frame_number / self.fps
