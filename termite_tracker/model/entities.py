from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Point2D = Tuple[int, int]
ColorRGB = Tuple[int, int, int]


@dataclass
class MarkerState:
    marker_id: int
    caste: int
    position: Point2D
    orientation: float
    color: ColorRGB


@dataclass
class MarkerTemplate:
    caste: int
    color: ColorRGB


@dataclass
class FrameEntry:
    marker_id: int
    position: Point2D
    orientation: float


class DragResult(Enum):
    IDLE = "idle"
    HEAD_GRABBED = "head_grabbed"
    BODY_GRABBED = "body_grabbed"
    RELEASED = "released"


class FrameStatus(Enum):
    ANNOTATED = "annotated"
    NOT_ANNOTATED = "not_annotated"


class SeekResult(Enum):
    SUCCESS = "success"
    OUT_OF_RANGE = "out_of_range"


class TimelineEvent(Enum):
    NONE = "none"
    TIMESTAMP_CHANGED = "timestamp_changed"
    POSITION_CHANGED = "position_changed"
    OUT_OF_RANGE = "out_of_range"


class NavigationRequest(Enum):
    PREVIOUS = "previous"
    NEXT = "next"
    COPY_PREVIOUS = "copy_previous"
