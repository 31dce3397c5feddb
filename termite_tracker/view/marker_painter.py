import math

from PyQt5 import QtCore, QtGui

from ..model.markers import Marker

STAR_COLOR = QtGui.QColor("#ffff00")
STAR_OUTER_RADIUS = 10.0
STAR_INNER_RADIUS = 4.0


def star_polygon(center: QtCore.QPointF, points: int = 5) -> QtGui.QPolygonF:
    polygon = QtGui.QPolygonF()
    for index in range(points * 2):
        radius = STAR_OUTER_RADIUS if index % 2 == 0 else STAR_INNER_RADIUS
        angle = -math.pi / 2 + index * math.pi / points
        polygon.append(
            QtCore.QPointF(center.x() + radius * math.cos(angle), center.y() + radius * math.sin(angle))
        )
    return polygon


def render_marker(painter: QtGui.QPainter, marker: Marker, opacity: int) -> None:
    color = QtGui.QColor(*marker.color)
    color.setAlpha(opacity)
    head = QtCore.QPointF(*marker.head)
    body = QtCore.QPointF(*marker.body)
    head_radius = marker.geometry.head_radius
    body_radius = marker.geometry.body_radius

    painter.save()
    connector = QtGui.QPen(color, 3)
    connector.setStyle(QtCore.Qt.DotLine)
    connector.setCapStyle(QtCore.Qt.SquareCap)
    painter.setPen(connector)
    painter.drawLine(head, body)

    painter.setPen(QtCore.Qt.NoPen)
    painter.setBrush(QtGui.QBrush(color))
    painter.drawEllipse(head, head_radius, head_radius)
    painter.drawEllipse(body, body_radius, body_radius)

    if marker.caste == 1:
        painter.setBrush(QtGui.QBrush(STAR_COLOR))
        painter.drawPolygon(star_polygon(head))
    painter.restore()
