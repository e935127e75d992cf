# Small 2D vector helpers on top of QPointF.
#
# QPointF already supports +, - and scalar *, so only the polar
# construction and the length operations live here.

import math

from PyQt5 import QtCore


def from_angle(angle: float, length: float = 1.0) -> QtCore.QPointF:
    """Build a vector pointing along `angle` (radians) with the given length.

    Args:
        angle (float): Direction in radians, 0 = +x, pi/2 = +y (screen down)
        length (float): Vector length

    Returns:
        QtCore.QPointF: (length * cos(angle), length * sin(angle))
    """
    return QtCore.QPointF(length * math.cos(angle), length * math.sin(angle))


def magnitude(v: QtCore.QPointF) -> float:
    return math.hypot(v.x(), v.y())


def with_magnitude(v: QtCore.QPointF, length: float) -> QtCore.QPointF:
    """Return a copy of `v` scaled to `length`. A zero vector stays zero."""
    mag = magnitude(v)
    if mag == 0.0:
        return QtCore.QPointF(0.0, 0.0)
    return v * (length / mag)
