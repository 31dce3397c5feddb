from typing import TYPE_CHECKING, Optional, Set
import logging

import cv2
import numpy as np
from PyQt5 import QtCore, QtGui, QtWidgets

from ..controller.app_controller import TickInput
from ..model.entities import NavigationRequest
from .marker_painter import render_marker
from .timeline import TimelineBar
from .video_widget import AnnotationCanvas

if TYPE_CHECKING:  # pragma: no cover - for static analysis only
    from ..controller import AnnotationController


class TermiteTrackerWindow(QtWidgets.QMainWindow):
    def __init__(self, controller: "AnnotationController") -> None:
        super().__init__()
        self.controller = controller
        self._log = logging.getLogger(__name__)

        window_settings = self.controller.settings.windows
        self.setWindowTitle("Termite Tracker")
        self.resize(window_settings.size_width, window_settings.size_height)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)

        self._held_keys: Set[int] = set()
        self._pending_toggle_play: bool = False
        self._pending_navigation: Optional[NavigationRequest] = None
        self._pending_scrub: Optional[float] = None
        self._pending_nudge: int = 0

        self._build_ui()
        self._setup_connections()

        fps = max(1, int(self.controller.settings.videos.fps))
        self.tick_timer = QtCore.QTimer(self)
        self.tick_timer.setTimerType(QtCore.Qt.PreciseTimer)
        self.tick_timer.timeout.connect(self._on_tick)
        self.tick_timer.start(int(round(1000 / fps)))

        self.timeline_bar.set_length(self.controller.timeline.length_sec)
        self.timeline_bar.set_bucket(self.controller.timeline.bucket_sec)
        self._refresh()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        central = QtWidgets.QWidget(self)
        central.setStyleSheet(
            """
            QWidget {
                background-color: #0b0b0b;
                color: #f0f0f0;
                font-size: 13px;
            }
            QLabel {
                color: #f0f0f0;
            }
            """
        )
        self.setCentralWidget(central)

        main_layout = QtWidgets.QVBoxLayout(central)
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(12)

        content_layout = QtWidgets.QHBoxLayout()
        content_layout.setSpacing(12)
        self.canvas = AnnotationCanvas()
        content_layout.addWidget(self.canvas, stretch=1)
        content_layout.addWidget(self._build_sidebar())
        main_layout.addLayout(content_layout, stretch=1)

        bar_layout = QtWidgets.QHBoxLayout()
        bar_layout.setSpacing(12)
        self.play_toggle = self._build_primary_button("▶")
        self.play_toggle.setFixedWidth(48)
        bar_layout.addWidget(self.play_toggle)
        self.timeline_bar = TimelineBar()
        bar_layout.addWidget(self.timeline_bar, stretch=1)
        self.position_label = QtWidgets.QLabel("0.00000/0.00000")
        self.position_label.setStyleSheet("color: #bbbbbb; font-size: 12px;")
        bar_layout.addWidget(self.position_label)
        main_layout.addLayout(bar_layout)

    def _build_sidebar(self) -> QtWidgets.QFrame:
        sidebar = QtWidgets.QFrame()
        sidebar.setFixedWidth(220)
        sidebar.setStyleSheet(
            """
            QFrame {
                background-color: #121212;
                border: 1px solid #1f1f1f;
                border-radius: 12px;
            }
            """
        )
        layout = QtWidgets.QVBoxLayout(sidebar)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        self.timestamp_label = QtWidgets.QLabel("Timestamp 0")
        self.timestamp_label.setStyleSheet("font-size: 15px; font-weight: 500; border: none;")
        layout.addWidget(self.timestamp_label)

        self.status_label = QtWidgets.QLabel("")
        self.status_label.setStyleSheet("color: #9a9a9a; font-size: 12px; border: none;")
        layout.addWidget(self.status_label)

        step_row = QtWidgets.QHBoxLayout()
        self.previous_button = self._build_primary_button("◀")
        self.next_button = self._build_primary_button("▶")
        step_row.addWidget(self.previous_button)
        step_row.addWidget(self.next_button)
        layout.addLayout(step_row)

        self.copy_button = self._build_primary_button("◀ Copy previous")
        layout.addWidget(self.copy_button)

        self.color_button = self._build_primary_button("Marker color…")
        layout.addWidget(self.color_button)

        hint = QtWidgets.QLabel("Space: play/pause\nA / D: rotate while dragging head\n← / →: nudge")
        hint.setStyleSheet("color: #777777; font-size: 11px; border: none;")
        layout.addWidget(hint)
        layout.addStretch(1)
        return sidebar

    def _build_primary_button(self, text: str) -> QtWidgets.QPushButton:
        button = QtWidgets.QPushButton(text)
        button.setCursor(QtCore.Qt.PointingHandCursor)
        button.setFocusPolicy(QtCore.Qt.NoFocus)
        button.setStyleSheet(
            """
            QPushButton {
                background-color: #1f1f1f;
                color: #f8f8f8;
                border-radius: 10px;
                padding: 6px 12px;
                font-weight: 500;
                border: 1px solid #2f2f2f;
            }
            QPushButton:hover {
                background-color: #2b2b2b;
            }
            """
        )
        return button

    def _setup_connections(self) -> None:
        self.play_toggle.clicked.connect(self._request_toggle_play)
        self.previous_button.clicked.connect(lambda: self._request_navigation(NavigationRequest.PREVIOUS))
        self.next_button.clicked.connect(lambda: self._request_navigation(NavigationRequest.NEXT))
        self.copy_button.clicked.connect(lambda: self._request_navigation(NavigationRequest.COPY_PREVIOUS))
        self.color_button.clicked.connect(self._pick_marker_color)
        self.timeline_bar.seekRequested.connect(self._request_scrub)

    # ------------------------------------------------------------------
    # Requests collected between ticks
    # ------------------------------------------------------------------
    def _request_toggle_play(self) -> None:
        self._pending_toggle_play = True

    def _request_navigation(self, request: NavigationRequest) -> None:
        self._pending_navigation = request

    def _request_scrub(self, seconds: float) -> None:
        self._pending_scrub = seconds

    def _pick_marker_color(self) -> None:
        marker = self.controller.active_marker()
        if marker is None:
            return
        color = QtWidgets.QColorDialog.getColor(QtGui.QColor(*marker.color), self, "Marker Color")
        if color.isValid():
            self.controller.set_active_marker_color((color.red(), color.green(), color.blue()))
            self._refresh()

    def _take_tick_input(self) -> TickInput:
        pointer = self.canvas.pointer.take(
            rotate_left=QtCore.Qt.Key_A in self._held_keys,
            rotate_right=QtCore.Qt.Key_D in self._held_keys,
        )
        tick_input = TickInput(
            pointer=pointer,
            toggle_play=self._pending_toggle_play,
            navigation=self._pending_navigation,
            scrub_to=self._pending_scrub,
            nudge=self._pending_nudge,
        )
        self._pending_toggle_play = False
        self._pending_navigation = None
        self._pending_scrub = None
        self._pending_nudge = 0
        return tick_input

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def _on_tick(self) -> None:
        report = self.controller.tick(self._take_tick_input())
        if report.saved_timestamp is not None:
            self.status_label.setText(f"Saved timestamp {report.saved_timestamp}")
        elif report.loaded_timestamp is not None:
            self.status_label.setText(f"Loaded timestamp {report.loaded_timestamp}")
        self._refresh()

    def _refresh(self) -> None:
        timeline = self.controller.timeline
        self._render_current_frame()
        self.timeline_bar.set_position(timeline.position_sec)
        self.timeline_bar.set_annotated(self.controller.annotated_timestamps())
        self.position_label.setText(f"{timeline.position_sec:.5f}/{timeline.length_sec:.5f}")
        self.timestamp_label.setText(f"Timestamp {timeline.current_timestamp()}")
        self.play_toggle.setText("⏸" if timeline.is_playing else "▶")
        self.canvas.set_hand_cursor(self.controller.is_hovering(self.canvas.pointer.position))

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------
    def _frame_pixmap(self) -> QtGui.QPixmap:
        width, height = self.controller.model.viewport
        player = self.controller.model.video_player
        frame_bgr = player.current_frame if player is not None else None
        if frame_bgr is None:
            pixmap = QtGui.QPixmap(width, height)
            pixmap.fill(QtGui.QColor("#ffffff"))
            return pixmap

        resized = cv2.resize(frame_bgr, (width, height), interpolation=cv2.INTER_AREA)
        rgb_frame = np.ascontiguousarray(cv2.cvtColor(resized, cv2.COLOR_BGR2RGB))
        image = QtGui.QImage(rgb_frame.data, width, height, 3 * width, QtGui.QImage.Format_RGB888)
        return QtGui.QPixmap.fromImage(image)

    def _render_current_frame(self) -> None:
        pixmap = self._frame_pixmap()
        painter = QtGui.QPainter(pixmap)
        painter.setRenderHint(QtGui.QPainter.Antialiasing)
        # Lowest priority first so the active marker ends up on top.
        for marker, opacity in reversed(self.controller.ranked_markers()):
            render_marker(painter, marker, opacity)
        painter.end()
        self.canvas.set_frame(pixmap)

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------
    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:
        if event.isAutoRepeat():
            event.accept()
            return
        key = event.key()
        if key == QtCore.Qt.Key_Space:
            self._pending_toggle_play = True
        elif key == QtCore.Qt.Key_Left:
            self._pending_nudge = -1
        elif key == QtCore.Qt.Key_Right:
            self._pending_nudge = 1
        elif key in (QtCore.Qt.Key_A, QtCore.Qt.Key_D):
            self._held_keys.add(key)
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def keyReleaseEvent(self, event: QtGui.QKeyEvent) -> None:
        if not event.isAutoRepeat():
            self._held_keys.discard(event.key())
        super().keyReleaseEvent(event)

    def focusOutEvent(self, event: QtGui.QFocusEvent) -> None:
        self._held_keys.clear()
        super().focusOutEvent(event)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self.tick_timer.stop()
        player = self.controller.model.video_player
        if player is not None:
            player.release()
        super().closeEvent(event)
