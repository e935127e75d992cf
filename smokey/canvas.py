# =====================================================================
# Drawing context
# =====================================================================
# Sketch-style drawing calls (push/pop, fill/stroke, shapes built from
# vertices, ellipses) mapped onto a QPainter. Figures and smokes only
# ever talk to this interface, never to QPainter directly.
# =====================================================================

from typing import List, Optional

from PyQt5 import QtCore, QtGui


class QtCanvas:
    """Wrap a QPainter with the small set of calls the sketch needs.

    Args:
        painter (QPainter): Active painter; the caller owns begin()/end()
    """

    def __init__(self, painter: QtGui.QPainter):
        self.painter = painter
        self._shape: Optional[List[QtCore.QPointF]] = None

    # ----- style scoping -----
    def push(self):
        self.painter.save()

    def pop(self):
        self.painter.restore()

    def fill(self, color):
        self.painter.setBrush(QtGui.QBrush(QtGui.QColor(color)))

    def no_fill(self):
        self.painter.setBrush(QtCore.Qt.NoBrush)

    def stroke(self, color, weight: float = 1.0):
        pen = QtGui.QPen(QtGui.QColor(color))
        pen.setWidthF(weight)
        pen.setCapStyle(QtCore.Qt.RoundCap)
        pen.setJoinStyle(QtCore.Qt.RoundJoin)
        self.painter.setPen(pen)

    def no_stroke(self):
        self.painter.setPen(QtCore.Qt.NoPen)

    # ----- shapes -----
    def begin_shape(self):
        self._shape = []

    def vertex(self, x: float, y: float):
        if self._shape is None:
            raise RuntimeError("vertex() called outside begin_shape()/end_shape()")
        self._shape.append(QtCore.QPointF(x, y))

    def end_shape(self):
        """Draw the collected vertices as one open polyline."""
        if self._shape is None:
            raise RuntimeError("end_shape() called without begin_shape()")
        points, self._shape = self._shape, None
        if len(points) >= 2:
            self.painter.drawPolyline(QtGui.QPolygonF(points))

    def ellipse(self, x: float, y: float, diameter: float):
        radius = diameter / 2.0
        self.painter.drawEllipse(QtCore.QPointF(x, y), radius, radius)
