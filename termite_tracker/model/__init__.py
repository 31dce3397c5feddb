"""Model layer containing the application's core logic and data structures."""

from .app_model import TermiteTrackerModel
from .draw_order import opacity_for_rank, resolve_draw_order
from .entities import (
    ColorRGB,
    DragResult,
    FrameEntry,
    FrameStatus,
    MarkerState,
    MarkerTemplate,
    NavigationRequest,
    Point2D,
    SeekResult,
    TimelineEvent,
)
from .frame_store import (
    Document,
    DocumentParseError,
    FrameNotFoundError,
    FrameStore,
    FrameStoreError,
    MissingTemplateError,
)
from .markers import Marker, PointerInput
from .settings import (
    AppSettings,
    DataSettings,
    MarkerSettings,
    SettingsManager,
    VideoSettings,
    WindowSettings,
    get_settings_path,
)
from .timeline import TimelineController, TimelineSource
from .video import VideoPlayer

__all__ = [
    "AppSettings",
    "ColorRGB",
    "DataSettings",
    "Document",
    "DocumentParseError",
    "DragResult",
    "FrameEntry",
    "FrameNotFoundError",
    "FrameStatus",
    "FrameStore",
    "FrameStoreError",
    "Marker",
    "MarkerSettings",
    "MarkerState",
    "MarkerTemplate",
    "MissingTemplateError",
    "NavigationRequest",
    "Point2D",
    "PointerInput",
    "SeekResult",
    "SettingsManager",
    "TermiteTrackerModel",
    "TimelineController",
    "TimelineEvent",
    "TimelineSource",
    "VideoPlayer",
    "VideoSettings",
    "WindowSettings",
    "get_settings_path",
    "opacity_for_rank",
    "resolve_draw_order",
]
