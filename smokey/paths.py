# =====================================================================
# Paths and figures
# =====================================================================
# A path is an origin (position + heading) followed by turn-then-advance
# segments. Everything that needs to follow a path (drawing it, finding
# a branch point, placing particles) goes through Path.walk().
# =====================================================================

from dataclasses import dataclass, field
from itertools import islice
from typing import Iterator, List, NamedTuple

from PyQt5 import QtCore

from .vectors import from_angle


@dataclass
class PathSegment:
    """A single step of a path: turn by `angle` (radians), then advance `distance`."""
    angle: float
    distance: float

    def copy(self) -> "PathSegment":
        return PathSegment(self.angle, self.distance)


class Step(NamedTuple):
    """One segment as seen while walking a path."""
    segment: PathSegment
    heading: float           # heading after applying segment.angle
    start: QtCore.QPointF    # position before the segment
    end: QtCore.QPointF      # position after the segment
    vector: QtCore.QPointF   # end - start


class Location(NamedTuple):
    offset: QtCore.QPointF
    heading: float


@dataclass
class Path:
    """Origin plus an ordered list of segments.

    The origin point is treated as externally owned: copy() shares the same
    QPointF object with the new path, so moving the source's origin in place
    moves the copy too. Segments are always copied.
    """
    origin_position: QtCore.QPointF = field(default_factory=lambda: QtCore.QPointF(0.0, 0.0))
    origin_heading: float = 0.0
    segments: List[PathSegment] = field(default_factory=list)

    def add_segment(self, segment: PathSegment):
        self.segments.append(segment)

    def copy(self) -> "Path":
        path = type(self)(self.origin_position, self.origin_heading)
        for segment in self.segments:
            path.add_segment(segment.copy())
        return path

    def walk(self) -> Iterator[Step]:
        """Yield a Step per segment, accumulating heading and position."""
        position = QtCore.QPointF(self.origin_position)
        heading = self.origin_heading
        for segment in self.segments:
            heading += segment.angle
            vector = from_angle(heading, segment.distance)
            end = position + vector
            yield Step(segment, heading, position, end, vector)
            position = end

    @property
    def total_length(self) -> float:
        return sum(segment.distance for segment in self.segments)

    @property
    def end_position(self) -> QtCore.QPointF:
        position = QtCore.QPointF(self.origin_position)
        for step in self.walk():
            position = step.end
        return position


class Figure(Path):
    """A path that can draw itself as one continuous polyline."""

    def draw(self, canvas):
        canvas.begin_shape()
        canvas.vertex(self.origin_position.x(), self.origin_position.y())
        for step in self.walk():
            canvas.vertex(step.end.x(), step.end.y())
        canvas.end_shape()


def walk_to_segment(figure: Path, branch_index: int) -> Location:
    """Replay `figure` up to (not including) the segment at `branch_index`.

    Args:
        figure (Path): Path to replay from its origin
        branch_index (int): Index of the segment where the walk stops;
            indices past the end replay the whole path

    Returns:
        Location: position and accumulated heading at that segment boundary
    """
    position = QtCore.QPointF(figure.origin_position)
    heading = figure.origin_heading
    for step in islice(figure.walk(), max(0, branch_index)):
        position = step.end
        heading = step.heading
    return Location(position, heading)
