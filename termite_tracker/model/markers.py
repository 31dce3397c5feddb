from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple
import logging
import math
import time

from .entities import ColorRGB, DragResult, MarkerState, Point2D
from .settings import MarkerSettings


@dataclass
class PointerInput:
    """Pointer and keyboard state sampled once per tick, in canvas pixels."""

    position: Point2D = (0, 0)
    delta: Point2D = (0, 0)
    pressed: bool = False
    released: bool = False
    rotate_left: bool = False
    rotate_right: bool = False


def clamp(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(max_value, value))


def _inside_ellipse(point: Tuple[float, float], center: Tuple[float, float], radius: float) -> bool:
    if radius <= 0:
        return False
    dx = (point[0] - center[0]) / radius
    dy = (point[1] - center[1]) / radius
    return dx * dx + dy * dy <= 1.0


class Marker:
    """A draggable head/body pair for one termite at the current timestamp."""

    def __init__(
        self,
        state: MarkerState,
        viewport: Tuple[int, int],
        geometry: Optional[MarkerSettings] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.geometry = geometry or MarkerSettings()
        self.viewport = viewport
        self._clock = clock

        self.marker_id: int = 0
        self.caste: int = 0
        self.head: Point2D = (0, 0)
        self.body: Tuple[float, float] = (0.0, 0.0)
        self.orientation: float = 0.0
        self.color: ColorRGB = (255, 255, 255)

        self.head_grabbed: bool = False
        self.body_grabbed: bool = False
        self.last_update_time: float = 0.0

        self.apply_state(state)

    # ------------------------------------------------------------------
    # State snapshot
    # ------------------------------------------------------------------
    def state(self) -> MarkerState:
        return MarkerState(
            marker_id=self.marker_id,
            caste=self.caste,
            position=self.head,
            orientation=self.orientation,
            color=self.color,
        )

    def apply_state(self, state: MarkerState) -> None:
        self.marker_id = int(state.marker_id)
        self.caste = int(state.caste)
        self.head = (int(state.position[0]), int(state.position[1]))
        self.orientation = float(state.orientation)
        self.color = (int(state.color[0]), int(state.color[1]), int(state.color[2]))
        self.head_grabbed = False
        self.body_grabbed = False
        self._place_body()

    def set_color(self, color: ColorRGB) -> None:
        self.color = (int(color[0]), int(color[1]), int(color[2]))

    @property
    def is_grabbed(self) -> bool:
        return self.head_grabbed or self.body_grabbed

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------
    def hits_head(self, point: Tuple[float, float]) -> bool:
        return _inside_ellipse(point, self.head, self.geometry.head_radius)

    def hits_body(self, point: Tuple[float, float]) -> bool:
        return _inside_ellipse(point, self.body, self.geometry.body_radius)

    def contains(self, point: Tuple[float, float]) -> bool:
        return self.hits_head(point) or self.hits_body(point)

    # ------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------
    def update(self, pointer: PointerInput) -> DragResult:
        if pointer.pressed:
            result = self.try_begin_drag(pointer.position)
            if result is not DragResult.IDLE:
                return result
        return self.update_drag(
            pointer.delta,
            pointer.position,
            rotate_left=pointer.rotate_left,
            rotate_right=pointer.rotate_right,
            released=pointer.released,
        )

    def try_begin_drag(self, point: Tuple[float, float]) -> DragResult:
        if self.hits_head(point):
            self.head_grabbed = True
            self.last_update_time = self._clock()
            self._log.debug("Marker[%s]: head grabbed at %s", self.marker_id, point)
            return DragResult.HEAD_GRABBED
        if self.hits_body(point):
            self.body_grabbed = True
            self.last_update_time = self._clock()
            self._log.debug("Marker[%s]: body grabbed at %s", self.marker_id, point)
            return DragResult.BODY_GRABBED
        return DragResult.IDLE

    def update_drag(
        self,
        delta: Point2D,
        cursor: Point2D,
        *,
        rotate_left: bool = False,
        rotate_right: bool = False,
        released: bool = False,
    ) -> DragResult:
        if not self.is_grabbed:
            return DragResult.IDLE

        if released:
            self.head_grabbed = False
            self.body_grabbed = False
            self._log.debug(
                "Marker[%s]: released head=%s rot=%.3f", self.marker_id, self.head, self.orientation
            )
            return DragResult.RELEASED

        if self.head_grabbed:
            width, height = self.viewport
            x = clamp(int(round(self.head[0] + delta[0])), 0, int(width))
            y = clamp(int(round(self.head[1] + delta[1])), 0, int(height))
            self.head = (x, y)
            if rotate_left:
                self.orientation += self.geometry.rotation_step
            elif rotate_right:
                self.orientation -= self.geometry.rotation_step
            self._place_body()
            return DragResult.HEAD_GRABBED

        self.orientation = math.atan2(self.head[1] - cursor[1], self.head[0] - cursor[0]) + math.pi
        self._place_body()
        return DragResult.BODY_GRABBED

    def _place_body(self) -> None:
        length = self.geometry.body_length
        self.body = (
            self.head[0] + length * math.cos(self.orientation),
            self.head[1] + length * math.sin(self.orientation),
        )
