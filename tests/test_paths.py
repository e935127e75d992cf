import math

import pytest
from PyQt5 import QtCore

from smokey.noise import RandomSource
from smokey.paths import Figure, Path, PathSegment, walk_to_segment
from smokey.vectors import from_angle


def random_figure(seed, count=25):
    source = RandomSource(seed)
    figure = Figure(QtCore.QPointF(source.random(-50, 50), source.random(-50, 50)),
                    source.random(-math.pi, math.pi))
    for _ in range(count):
        figure.add_segment(PathSegment(source.random(-1.0, 1.0), source.random(0.0, 10.0)))
    return figure


def test_segment_copy_is_equal_but_independent():
    segment = PathSegment(0.25, 4.0)
    clone = segment.copy()
    assert clone == segment
    assert clone is not segment


def test_copy_shares_origin_and_copies_segments():
    path = Path(QtCore.QPointF(1.0, 2.0), 0.5)
    path.add_segment(PathSegment(0.1, 3.0))
    clone = path.copy()

    assert clone.origin_position is path.origin_position
    assert clone.origin_heading == 0.5
    assert clone.segments == path.segments
    assert clone.segments[0] is not path.segments[0]


def test_copy_independence():
    path = Path()
    path.add_segment(PathSegment(0.0, 1.0))
    clone = path.copy()

    clone.add_segment(PathSegment(0.0, 2.0))
    assert len(path.segments) == 1

    path.add_segment(PathSegment(0.0, 3.0))
    path.add_segment(PathSegment(0.0, 4.0))
    assert len(clone.segments) == 2


def test_copy_of_figure_is_a_figure():
    assert isinstance(Figure().copy(), Figure)


def test_walk_accumulates_heading_and_position(square_figure):
    steps = list(square_figure.walk())
    assert len(steps) == 4
    assert steps[1].heading == pytest.approx(math.pi / 2)
    assert steps[1].start.x() == pytest.approx(15.0)
    assert steps[1].end.y() == pytest.approx(15.0)
    assert square_figure.end_position.x() == pytest.approx(5.0)
    assert square_figure.end_position.y() == pytest.approx(5.0)
    assert square_figure.total_length == pytest.approx(40.0)


def test_walk_does_not_move_origin(square_figure):
    list(square_figure.walk())
    assert square_figure.origin_position == QtCore.QPointF(5.0, 5.0)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_walk_to_segment_matches_partial_sums(seed):
    figure = random_figure(seed)
    for branch_index in range(len(figure.segments)):
        location = walk_to_segment(figure, branch_index)

        heading = figure.origin_heading
        x, y = figure.origin_position.x(), figure.origin_position.y()
        for segment in figure.segments[:branch_index]:
            heading += segment.angle
            v = from_angle(heading, segment.distance)
            x += v.x()
            y += v.y()

        assert location.heading == pytest.approx(heading)
        assert location.offset.x() == pytest.approx(x)
        assert location.offset.y() == pytest.approx(y)


def test_walk_to_segment_ignores_segments_at_and_after_branch():
    figure = random_figure(9)
    before = walk_to_segment(figure, 10)
    figure.segments[10] = PathSegment(2.0, 99.0)
    figure.segments.append(PathSegment(-1.0, 50.0))
    after = walk_to_segment(figure, 10)
    assert after.heading == before.heading
    assert after.offset == before.offset


def test_walk_to_segment_zero_returns_origin_copy(square_figure):
    location = walk_to_segment(square_figure, 0)
    assert location.offset == square_figure.origin_position
    assert location.offset is not square_figure.origin_position
    assert location.heading == square_figure.origin_heading


def test_figure_draw_emits_one_polyline(square_figure, canvas):
    square_figure.draw(canvas)
    assert len(canvas.shapes) == 1
    vertices = canvas.shapes[0]
    assert len(vertices) == 5
    assert vertices[0] == (5.0, 5.0)
    assert vertices[2][0] == pytest.approx(15.0)
    assert vertices[2][1] == pytest.approx(15.0)
