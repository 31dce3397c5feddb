from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from ..model.app_model import TermiteTrackerModel
from ..model.draw_order import opacity_for_rank, resolve_draw_order
from ..model.entities import ColorRGB, DragResult, NavigationRequest, SeekResult, TimelineEvent
from ..model.markers import Marker, PointerInput
from ..model.settings import AppSettings
from ..model.timeline import TimelineController


class PointerTracker:
    """Accumulates mouse events between ticks into one ``PointerInput``."""

    def __init__(self) -> None:
        self.position: Tuple[int, int] = (0, 0)
        self._tick_origin: Tuple[int, int] = (0, 0)
        self._pressed = False
        self._released = False

    def press(self, position: Tuple[int, int]) -> None:
        self.position = position
        self._tick_origin = position
        self._pressed = True
        # A new press supersedes a release still waiting from the previous click.
        self._released = False

    def move(self, position: Tuple[int, int]) -> None:
        self.position = position

    def release(self, position: Tuple[int, int]) -> None:
        self.position = position
        self._released = True

    def take(self, rotate_left: bool = False, rotate_right: bool = False) -> PointerInput:
        pressed = self._pressed
        # A click shorter than one tick releases on the following tick.
        released = self._released and not pressed
        pointer = PointerInput(
            position=self.position,
            delta=(self.position[0] - self._tick_origin[0], self.position[1] - self._tick_origin[1]),
            pressed=pressed,
            released=released,
            rotate_left=rotate_left,
            rotate_right=rotate_right,
        )
        self._pressed = False
        if released:
            self._released = False
        self._tick_origin = self.position
        return pointer


@dataclass
class TickInput:
    """Everything the view collected since the previous tick."""

    pointer: PointerInput = field(default_factory=PointerInput)
    toggle_play: bool = False
    navigation: Optional[NavigationRequest] = None
    scrub_to: Optional[float] = None
    nudge: int = 0


@dataclass
class TickReport:
    draw_order: List[int]
    drag_result: DragResult = DragResult.IDLE
    timeline_event: TimelineEvent = TimelineEvent.NONE
    loaded_timestamp: Optional[int] = None
    saved_timestamp: Optional[int] = None


class AnnotationController:
    """Runs one annotation tick: navigation, playback, marker input, saving."""

    def __init__(self, model: TermiteTrackerModel) -> None:
        self._model = model
        self._log = logging.getLogger(__name__)
        self.draw_order: List[int] = []

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------
    @property
    def model(self) -> TermiteTrackerModel:
        return self._model

    @property
    def settings(self) -> AppSettings:
        return self._model.settings

    @property
    def timeline(self) -> TimelineController:
        return self._model.timeline

    @property
    def markers(self) -> List[Marker]:
        return self._model.markers

    @property
    def current_timestamp(self) -> int:
        return self.timeline.current_timestamp()

    def annotated_timestamps(self) -> List[int]:
        return self._model.store.annotated_timestamps()

    def ranked_markers(self) -> List[Tuple[Marker, int]]:
        """Markers paired with their opacity, in priority order."""
        marker_settings = self.settings.markers
        return [
            (
                self.markers[index],
                opacity_for_rank(rank, marker_settings.active_alpha, marker_settings.inactive_alpha),
            )
            for rank, index in enumerate(self.draw_order)
            if index < len(self.markers)
        ]

    # ------------------------------------------------------------------
    # Session start
    # ------------------------------------------------------------------
    def load_initial_frame(self) -> bool:
        timestamp = self.current_timestamp
        if self._model.store.has_frame(timestamp):
            self._model.load_frame(timestamp)
            self.draw_order = resolve_draw_order(self.markers)
            return True
        self._log.warning("Controller: no saved markers at timestamp %s", timestamp)
        self.draw_order = []
        return False

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def tick(self, tick_input: TickInput) -> TickReport:
        self.draw_order = resolve_draw_order(self.markers)
        report = TickReport(draw_order=self.draw_order)

        if tick_input.navigation is not None:
            self._navigate(tick_input.navigation, report)

        if tick_input.scrub_to is not None:
            event = self.timeline.scrub(tick_input.scrub_to)
        elif tick_input.nudge:
            event = self.timeline.nudge(tick_input.nudge)
        else:
            event = self.timeline.tick()
        if event is TimelineEvent.TIMESTAMP_CHANGED:
            self.timeline.snap_to_bucket()
            self._sync_timestamp(report)
        if report.timeline_event is TimelineEvent.NONE:
            report.timeline_event = event

        # Navigation may have replaced the marker collection.
        self.draw_order = resolve_draw_order(self.markers)
        for index in self.draw_order:
            result = self.markers[index].update(tick_input.pointer)
            if result is DragResult.IDLE:
                continue
            report.drag_result = result
            if result is DragResult.RELEASED:
                timestamp = self.current_timestamp
                self._model.save_frame(timestamp)
                report.saved_timestamp = timestamp
            else:
                self.timeline.set_playing(False)
            break

        if tick_input.toggle_play:
            self.timeline.toggle_play()

        self.draw_order = resolve_draw_order(self.markers)
        report.draw_order = self.draw_order
        return report

    def _navigate(self, request: NavigationRequest, report: TickReport) -> None:
        if request is NavigationRequest.COPY_PREVIOUS:
            previous = self.current_timestamp - 1
            if previous >= 0 and self._model.store.has_frame(previous):
                self._model.load_frame(previous)
                report.loaded_timestamp = previous
                self._log.debug("Controller: copied markers from timestamp %s", previous)
            return

        direction = -1 if request is NavigationRequest.PREVIOUS else 1
        before = self.current_timestamp
        result = self.timeline.step_timestamp(direction)
        if result is SeekResult.SUCCESS and self.current_timestamp != before:
            report.timeline_event = TimelineEvent.TIMESTAMP_CHANGED
            self._sync_timestamp(report)
        else:
            # The source clamps seeks past its last frame onto the current bucket.
            report.timeline_event = TimelineEvent.OUT_OF_RANGE

    def _sync_timestamp(self, report: TickReport) -> None:
        timestamp = self.current_timestamp
        if self._model.store.has_frame(timestamp):
            self._model.load_frame(timestamp)
            report.loaded_timestamp = timestamp
        else:
            self._model.save_frame(timestamp)
            report.saved_timestamp = timestamp

    # ------------------------------------------------------------------
    # Direct edits
    # ------------------------------------------------------------------
    def active_marker(self) -> Optional[Marker]:
        if not self.draw_order or not self.markers:
            return None
        return self.markers[self.draw_order[0]]

    def set_active_marker_color(self, color: ColorRGB) -> bool:
        marker = self.active_marker()
        if marker is None:
            return False
        marker.set_color(color)
        self._log.debug("Controller: marker %s color -> %s", marker.marker_id, color)
        return True

    def is_hovering(self, point: Tuple[float, float]) -> bool:
        return any(marker.contains(point) for marker in self.markers)
