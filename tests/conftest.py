import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import math

import pytest
from PyQt5 import QtCore

from smokey.paths import Figure, PathSegment


class StubSource:
    """Deterministic stand-in for RandomSource.

    random(n) gives n / 2, random(a, b) gives the midpoint, and the noise
    field is flat at `noise_value`, so smoke paths come out straight.
    """

    def __init__(self, noise_value=0.5):
        self.noise_value = noise_value

    def random(self, low=1.0, high=None):
        if high is None:
            low, high = 0.0, low
        return (low + high) / 2.0

    def noise(self, x):
        return self.noise_value


class RecordingCanvas:
    """Canvas that remembers every call instead of painting."""

    def __init__(self):
        self.calls = []
        self.shapes = []
        self._shape = None

    def push(self):
        self.calls.append(("push",))

    def pop(self):
        self.calls.append(("pop",))

    def fill(self, color):
        self.calls.append(("fill", color.alpha()))

    def no_fill(self):
        self.calls.append(("no_fill",))

    def stroke(self, color, weight=1.0):
        self.calls.append(("stroke", weight))

    def no_stroke(self):
        self.calls.append(("no_stroke",))

    def begin_shape(self):
        self._shape = []

    def vertex(self, x, y):
        self._shape.append((x, y))

    def end_shape(self):
        self.shapes.append(self._shape)
        self._shape = None

    def ellipse(self, x, y, diameter):
        self.calls.append(("ellipse", x, y, diameter))

    @property
    def ellipses(self):
        return [c for c in self.calls if c[0] == "ellipse"]


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def stub_source():
    return StubSource()


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def square_figure():
    """A square of ten-unit sides, turning by +90 degrees at each corner."""
    figure = Figure(QtCore.QPointF(5.0, 5.0), 0.0)
    figure.add_segment(PathSegment(0.0, 10.0))
    for _ in range(3):
        figure.add_segment(PathSegment(math.pi / 2, 10.0))
    return figure
