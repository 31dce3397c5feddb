from typing import Iterable, List, Optional

from PyQt5 import QtCore, QtGui, QtWidgets


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


class TimelineBar(QtWidgets.QWidget):
    """Scrub bar showing the playhead and which timestamps already hold markers."""

    seekRequested = QtCore.pyqtSignal(float)

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setMinimumHeight(36)
        self.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Fixed)
        self.setFocusPolicy(QtCore.Qt.NoFocus)

        self.length_sec: float = 0.0
        self.position_sec: float = 0.0
        self.bucket_sec: float = 1.0
        self.annotated: List[int] = []

        self._dragging: bool = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_length(self, seconds: float) -> None:
        seconds = max(0.0, float(seconds))
        if self.length_sec != seconds:
            self.length_sec = seconds
            self.update()

    def set_position(self, seconds: float) -> None:
        seconds = clamp(float(seconds), 0.0, self.length_sec)
        if self.position_sec != seconds:
            self.position_sec = seconds
            self.update()

    def set_bucket(self, seconds: float) -> None:
        if seconds > 0 and self.bucket_sec != seconds:
            self.bucket_sec = float(seconds)
            self.update()

    def set_annotated(self, timestamps: Iterable[int]) -> None:
        annotated = sorted({int(timestamp) for timestamp in timestamps})
        if self.annotated != annotated:
            self.annotated = annotated
            self.update()

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing)

        rect = self.rect()
        painter.fillRect(rect, QtGui.QColor("#161616"))

        content = self._content_rect()
        painter.setBrush(QtGui.QColor("#2e2e2e"))
        painter.setPen(QtGui.QColor("#000000"))
        painter.drawRoundedRect(content, 8, 8)

        if self.length_sec <= 0:
            return

        painter.save()
        painter.setPen(QtCore.Qt.NoPen)
        painter.setBrush(QtGui.QColor(50, 255, 138, 110))
        for timestamp in self.annotated:
            start = timestamp * self.bucket_sec
            if start > self.length_sec:
                continue
            end = min(self.length_sec, start + self.bucket_sec)
            left = self._x_for_seconds(content, start)
            right = self._x_for_seconds(content, end)
            painter.drawRect(QtCore.QRectF(left, content.top(), max(1.0, right - left), content.height()))
        painter.restore()

        x = self._x_for_seconds(content, self.position_sec)
        painter.setPen(QtGui.QPen(QtGui.QColor("#ffffff"), 2))
        painter.drawLine(QtCore.QPointF(x, content.top()), QtCore.QPointF(x, content.bottom()))

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        if event.button() == QtCore.Qt.LeftButton:
            self._dragging = True
            self._seek_at(event.pos())
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:
        if self._dragging:
            self._seek_at(event.pos())
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:
        if event.button() == QtCore.Qt.LeftButton and self._dragging:
            self._dragging = False
            self._seek_at(event.pos())
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def leaveEvent(self, event: QtCore.QEvent) -> None:
        if not QtWidgets.QApplication.mouseButtons() & QtCore.Qt.LeftButton:
            self._dragging = False
        super().leaveEvent(event)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _content_rect(self) -> QtCore.QRectF:
        return QtCore.QRectF(self.rect().adjusted(12, 10, -12, -10))

    def _x_for_seconds(self, content: QtCore.QRectF, seconds: float) -> float:
        if self.length_sec <= 0:
            return content.left()
        return content.left() + (seconds / self.length_sec) * content.width()

    def _seek_at(self, pos: QtCore.QPoint) -> None:
        if self.length_sec <= 0:
            return
        content = self._content_rect()
        if content.width() <= 0:
            return
        clamped_x = clamp(pos.x(), content.left(), content.right())
        percent = (clamped_x - content.left()) / content.width()
        self.seekRequested.emit(clamp(percent * self.length_sec, 0.0, self.length_sec))
