import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict


SETTINGS_FILENAME = "settings.json"

_log = logging.getLogger(__name__)


@dataclass
class WindowSettings:
    size_width: int = 1280
    size_height: int = 720


@dataclass
class VideoSettings:
    size_width: int = 640
    size_height: int = 480
    fps: int = 30
    time_stamp_range: float = 1.0
    delta_sec: float = 0.1


@dataclass
class MarkerSettings:
    head_radius: int = 7
    body_radius: int = 5
    body_length: int = 40
    rotation_step: float = 0.02
    active_alpha: int = 150
    inactive_alpha: int = 80


@dataclass
class DataSettings:
    video_path: str = "termite_video.mp4"
    locations_path: str = "locations.json"


@dataclass
class AppSettings:
    windows: WindowSettings = field(default_factory=WindowSettings)
    videos: VideoSettings = field(default_factory=VideoSettings)
    markers: MarkerSettings = field(default_factory=MarkerSettings)
    data: DataSettings = field(default_factory=DataSettings)


class SettingsManager:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.settings = AppSettings()
        self.load()

    def load(self) -> None:
        if not self.path.exists():
            _log.debug("Settings: %s not found, using defaults", self.path)
            return
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as exc:
            _log.warning("Settings: unable to read %s (%s), using defaults", self.path, exc)
            return
        self.settings = self._from_dict(data)

    def save(self) -> None:
        self.path.write_text(json.dumps(self._to_dict(), indent=2))

    def resolve(self, relative: str) -> Path:
        """Resolve a data path against the directory holding the settings file."""
        path = Path(relative)
        if not path.is_absolute():
            path = self.path.parent / path
        return path

    def _to_dict(self) -> Dict:
        return asdict(self.settings)

    def _from_dict(self, data: Dict) -> AppSettings:
        def merge(default_cls, section):
            instance = default_cls()
            if isinstance(section, dict):
                for key, value in section.items():
                    if hasattr(instance, key):
                        setattr(instance, key, value)
            return instance

        settings = AppSettings()
        if not isinstance(data, dict):
            return settings
        if "windows" in data:
            settings.windows = merge(WindowSettings, data["windows"])
        if "videos" in data:
            settings.videos = merge(VideoSettings, data["videos"])
        if "markers" in data:
            settings.markers = merge(MarkerSettings, data["markers"])
        if "data" in data:
            settings.data = merge(DataSettings, data["data"])
        return settings


def get_settings_path(root: Path) -> Path:
    return root / SETTINGS_FILENAME
