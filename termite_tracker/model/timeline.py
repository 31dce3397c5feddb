from __future__ import annotations

from typing import Protocol
import logging
import math

from .entities import SeekResult, TimelineEvent

# Guards floor(position / bucket) against values such as 0.3 / 0.1 == 2.9999...
_BUCKET_EPSILON = 1e-9


class TimelineSource(Protocol):
    @property
    def position_sec(self) -> float: ...

    @property
    def length_sec(self) -> float: ...

    def seek_sec(self, seconds: float) -> None: ...

    def advance_frame(self) -> None: ...


class TimelineController:
    """Maps a seekable video position onto discrete annotation timestamps."""

    def __init__(self, source: TimelineSource, bucket_sec: float = 1.0, delta_sec: float = 0.1) -> None:
        if bucket_sec <= 0:
            raise ValueError("bucket_sec must be positive")
        self._log = logging.getLogger(__name__)
        self.source = source
        self.bucket_sec = float(bucket_sec)
        self.delta_sec = float(delta_sec)
        self._playing = False

    # ------------------------------------------------------------------
    # Position
    # ------------------------------------------------------------------
    @property
    def position_sec(self) -> float:
        return self.source.position_sec

    @property
    def length_sec(self) -> float:
        return self.source.length_sec

    def timestamp_for(self, seconds: float) -> int:
        return int(math.floor(seconds / self.bucket_sec + _BUCKET_EPSILON))

    def current_timestamp(self) -> int:
        return self.timestamp_for(self.source.position_sec)

    def set_timestamp(self, index: int) -> SeekResult:
        seconds = index * self.bucket_sec
        if not self._in_range(seconds):
            self._log.debug("Timeline: timestamp %s out of range (%.3fs)", index, seconds)
            return SeekResult.OUT_OF_RANGE
        self.source.seek_sec(seconds)
        return SeekResult.SUCCESS

    def step_timestamp(self, direction: int) -> SeekResult:
        return self.set_timestamp(self.current_timestamp() + (1 if direction > 0 else -1))

    def snap_to_bucket(self) -> SeekResult:
        return self.set_timestamp(self.current_timestamp())

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    @property
    def is_playing(self) -> bool:
        return self._playing

    def set_playing(self, playing: bool) -> None:
        self._playing = bool(playing)

    def toggle_play(self) -> bool:
        self._playing = not self._playing
        self._log.debug("Timeline: playing=%s", self._playing)
        return self._playing

    def tick(self) -> TimelineEvent:
        if not self._playing:
            return TimelineEvent.NONE
        old_timestamp = self.current_timestamp()
        self.source.advance_frame()
        if self.current_timestamp() != old_timestamp:
            self._playing = False
            self._log.debug(
                "Timeline: playback crossed timestamp %s -> %s", old_timestamp, self.current_timestamp()
            )
            return TimelineEvent.TIMESTAMP_CHANGED
        return TimelineEvent.NONE

    def scrub(self, seconds: float) -> TimelineEvent:
        if not self._in_range(seconds):
            return TimelineEvent.OUT_OF_RANGE
        self._playing = False
        old_timestamp = self.current_timestamp()
        self.source.seek_sec(seconds)
        if self.current_timestamp() != old_timestamp:
            return TimelineEvent.TIMESTAMP_CHANGED
        return TimelineEvent.POSITION_CHANGED

    def nudge(self, direction: int) -> TimelineEvent:
        step = self.delta_sec if direction > 0 else -self.delta_sec
        return self.scrub(self.source.position_sec + step)

    def _in_range(self, seconds: float) -> bool:
        return 0.0 <= seconds <= self.source.length_sec
