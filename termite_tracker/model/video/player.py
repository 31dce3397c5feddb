from dataclasses import dataclass
from typing import Optional
import math

import cv2
import numpy as np


@dataclass
class VideoMetadata:
    frame_count: int
    fps: float

    @property
    def length_sec(self) -> float:
        return self.frame_count / self.fps if self.fps > 0 else 0.0


class VideoPlayer:
    """OpenCV capture exposed as a looping, seconds based timeline source."""

    def __init__(self) -> None:
        self._capture: Optional[cv2.VideoCapture] = None
        self._metadata = VideoMetadata(frame_count=0, fps=30.0)
        self.current_frame_index: int = 0
        self.current_frame: Optional[np.ndarray] = None

    def load(self, path: str) -> VideoMetadata:
        self.release()
        capture = cv2.VideoCapture(path)
        if not capture.isOpened():
            raise ValueError("Failed to open video.")

        frame_count = int(capture.get(cv2.CAP_PROP_FRAME_COUNT) or 0)
        fps = float(capture.get(cv2.CAP_PROP_FPS) or 30.0)
        fps = fps if fps > 0 else 30.0

        self._capture = capture
        self._metadata = VideoMetadata(frame_count=frame_count, fps=fps)
        self.current_frame_index = 0
        self.current_frame = None
        return self._metadata

    # ------------------------------------------------------------------
    # Timeline source
    # ------------------------------------------------------------------
    @property
    def position_sec(self) -> float:
        return self.current_frame_index / self._metadata.fps

    @property
    def length_sec(self) -> float:
        return self._metadata.length_sec

    def seek_sec(self, seconds: float) -> None:
        # First frame at or after the requested time keeps floor(pos / bucket) on the bucket.
        self.seek(int(math.ceil(seconds * self._metadata.fps - 1e-6)))

    def advance_frame(self) -> None:
        if self.current_frame_index >= self._metadata.frame_count - 1:
            self.seek(0)
            return
        self.read_next()

    # ------------------------------------------------------------------
    # Frame access
    # ------------------------------------------------------------------
    def read_first_frame(self) -> Optional[np.ndarray]:
        return self.seek(0)

    def read_next(self) -> Optional[np.ndarray]:
        if not self._capture:
            return None
        success, frame = self._capture.read()
        if not success or frame is None:
            return self.seek(0)
        self.current_frame_index += 1
        self.current_frame = frame
        return frame

    def seek(self, frame_index: int) -> Optional[np.ndarray]:
        if not self._capture:
            return None
        frame_index = max(0, min(frame_index, self._metadata.frame_count - 1))
        self._capture.set(cv2.CAP_PROP_POS_FRAMES, frame_index)
        success, frame = self._capture.read()
        if not success:
            return None
        self.current_frame_index = frame_index
        self.current_frame = frame
        return frame

    def release(self) -> None:
        if self._capture:
            self._capture.release()
        self._capture = None
        self.current_frame = None
        self.current_frame_index = 0
        self._metadata = VideoMetadata(frame_count=0, fps=30.0)
