from typing import Optional, Tuple

from PyQt5 import QtCore, QtGui, QtWidgets

from ..controller.app_controller import PointerTracker


class AnnotationCanvas(QtWidgets.QWidget):
    """Shows the annotated frame scaled to fit and reports pointer input in frame pixels."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(QtCore.Qt.WA_OpaquePaintEvent, True)
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.NoFocus)
        self._pixmap: Optional[QtGui.QPixmap] = None
        self._fit_scale: float = 1.0
        self.pointer = PointerTracker()
        self.setCursor(QtCore.Qt.ArrowCursor)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def set_frame(self, pixmap: QtGui.QPixmap) -> None:
        self._pixmap = pixmap
        self._update_fit_scale()
        self.update()

    def set_hand_cursor(self, hand: bool) -> None:
        self.setCursor(QtCore.Qt.PointingHandCursor if hand else QtCore.Qt.ArrowCursor)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), QtGui.QColor("#ffffff"))
        if not self._pixmap:
            return

        scaled_size = self._scaled_size()
        scaled_pixmap = self._pixmap.scaled(
            scaled_size.toSize(), QtCore.Qt.KeepAspectRatio, QtCore.Qt.SmoothTransformation
        )
        left, top = self._content_origin(scaled_pixmap.size())
        painter.drawPixmap(QtCore.QPointF(left, top), scaled_pixmap)

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:
        super().resizeEvent(event)
        self._update_fit_scale()

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        if event.button() == QtCore.Qt.LeftButton:
            self.pointer.press(self._map_to_frame(event.pos()))
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:
        self.pointer.move(self._map_to_frame(event.pos()))
        event.accept()

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:
        if event.button() == QtCore.Qt.LeftButton:
            self.pointer.release(self._map_to_frame(event.pos()))
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    # ------------------------------------------------------------------
    # Geometry helpers
    # ------------------------------------------------------------------
    def _scaled_size(self) -> QtCore.QSizeF:
        if not self._pixmap:
            return QtCore.QSizeF(0.0, 0.0)
        return QtCore.QSizeF(self._pixmap.width() * self._fit_scale, self._pixmap.height() * self._fit_scale)

    def _content_origin(self, scaled_size: QtCore.QSize) -> Tuple[float, float]:
        left = (self.width() - scaled_size.width()) / 2
        top = (self.height() - scaled_size.height()) / 2
        return left, top

    def _map_to_frame(self, pos: QtCore.QPoint) -> Tuple[int, int]:
        # Points outside the frame are kept; markers clamp them.
        if not self._pixmap:
            return pos.x(), pos.y()
        left, top = self._content_origin(self._scaled_size().toSize())
        return int(round((pos.x() - left) / self._fit_scale)), int(round((pos.y() - top) / self._fit_scale))

    def _update_fit_scale(self) -> None:
        if not self._pixmap or self.width() == 0 or self.height() == 0:
            return
        scale_w = self.width() / self._pixmap.width()
        scale_h = self.height() / self._pixmap.height()
        new_fit = min(scale_w, scale_h)
        if new_fit <= 0:
            new_fit = 1.0
        if abs(new_fit - self._fit_scale) > 1e-6:
            self._fit_scale = new_fit
            self.update()
