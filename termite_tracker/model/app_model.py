from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple
import logging
import time

from .entities import MarkerState
from .frame_store import FrameStore
from .markers import Marker
from .settings import AppSettings, SettingsManager, get_settings_path
from .timeline import TimelineController, TimelineSource
from .video import VideoPlayer


class TermiteTrackerModel:
    """Owns the annotation session: settings, document, timeline and markers."""

    def __init__(
        self,
        settings: AppSettings,
        store: FrameStore,
        source: TimelineSource,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.settings = settings
        self.store = store
        self.source = source
        self.timeline = TimelineController(
            source,
            bucket_sec=settings.videos.time_stamp_range,
            delta_sec=settings.videos.delta_sec,
        )
        self.markers: List[Marker] = []
        self._clock = clock

    @classmethod
    def from_root(cls, root_path: Path) -> "TermiteTrackerModel":
        """Build a session from ``settings.json`` under *root_path*.

        Raises ``DocumentParseError`` for a malformed annotation document and
        ``ValueError`` when the video cannot be opened.
        """
        settings_manager = SettingsManager(get_settings_path(root_path))
        settings = settings_manager.settings
        store = FrameStore.open(settings_manager.resolve(settings.data.locations_path))
        player = VideoPlayer()
        player.load(str(settings_manager.resolve(settings.data.video_path)))
        player.read_first_frame()
        return cls(settings, store, player)

    @property
    def viewport(self) -> Tuple[int, int]:
        return (self.settings.videos.size_width, self.settings.videos.size_height)

    @property
    def video_player(self) -> Optional[VideoPlayer]:
        return self.source if isinstance(self.source, VideoPlayer) else None

    def marker_states(self) -> List[MarkerState]:
        return [marker.state() for marker in self.markers]

    def replace_markers(self, states: Iterable[MarkerState]) -> None:
        self.markers = [
            Marker(state, self.viewport, geometry=self.settings.markers, clock=self._clock)
            for state in states
        ]
        self._log.debug("Model: %s markers loaded", len(self.markers))

    def load_frame(self, timestamp: int) -> None:
        self.replace_markers(self.store.load(timestamp))

    def save_frame(self, timestamp: int) -> None:
        self.store.save(timestamp, self.marker_states())
