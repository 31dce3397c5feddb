from typing import List

import pytest

from termite_tracker.model.entities import MarkerState


class FakeSource:
    """In-memory timeline source stepping at a fixed frame rate and looping at the end."""

    def __init__(self, length_sec: float = 10.0, fps: float = 10.0) -> None:
        self.fps = fps
        self.frame_count = int(round(length_sec * fps))
        self.frame_index = 0
        self.seeks: List[float] = []

    @property
    def position_sec(self) -> float:
        return self.frame_index / self.fps

    @property
    def length_sec(self) -> float:
        return self.frame_count / self.fps

    def seek_sec(self, seconds: float) -> None:
        self.seeks.append(seconds)
        self.frame_index = max(0, min(self.frame_count - 1, int(round(seconds * self.fps))))

    def advance_frame(self) -> None:
        if self.frame_index >= self.frame_count - 1:
            self.frame_index = 0
        else:
            self.frame_index += 1


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_state(marker_id: int = 1, position=(100, 100), orientation: float = 0.0, caste: int = 0, color=(255, 0, 0)):
    return MarkerState(marker_id=marker_id, caste=caste, position=position, orientation=orientation, color=color)
