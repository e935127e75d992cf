# =====================================================================
# Smoke branches and their particles
# =====================================================================
# A Smoke leaves a parent figure at a segment boundary, grows its own
# meandering path from coherent noise and carries a handful of
# particles along it. Each frame:
#
#   smoke.update(now_ms)   # advance, prune, sort, place particles
#   smoke.draw(canvas)     # render the particles
#
# Particle distance is recomputed from elapsed time every update, never
# integrated frame by frame.
# =====================================================================

import logging
import math
import time
from enum import IntEnum
from typing import Callable, List, Optional

from PyQt5 import QtCore, QtGui

from .noise import RandomSource
from .paths import Figure, PathSegment, walk_to_segment
from .vectors import from_angle, magnitude, with_magnitude

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Tuning constants
# ---------------------------------------------------------------------
DEFAULT_MIN_LENGTH = 50       # segments per generated smoke path (inclusive)
DEFAULT_MAX_LENGTH = 100      # (exclusive)
SEED_PARTICLES     = 2        # particles spawned per smoke

SEGMENT_DISTANCE   = 2.0      # length of every smoke segment
NOISE_STEP         = 0.004    # noise cursor advance per segment
MAX_TURN           = (math.pi / 2) / 10  # full turn range per segment
NOISE_RANGE        = 2000000  # random noise start offsets are drawn from [0, NOISE_RANGE)

SPEED_MIN          = 100.0    # particle speed, units per second
SPEED_MAX          = 150.0
MAX_GAP            = 20.0     # max wobble radius around the path
FADE_RATE          = 300.0    # alpha units per second
ALPHA_MAX          = 255.0
WOBBLE_RATE        = 2.0      # noise coordinate advance per second
PARTICLE_DIAMETER  = 3.0
PARTICLE_COLOR     = "#FFFF00"


class InvalidArgument(ValueError):
    """Raised when a Smoke is constructed from unusable parameters."""


class AlphaDirection(IntEnum):
    FADING_OUT = -1
    STEADY = 0
    FADING_IN = 1


def millis() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class SmokeParticle:
    """A dot drifting along a smoke path with its own fade lifecycle.

    Args:
        creation_time (float): Clock reading (ms) when the particle was born
        distance_offset (float): Arc-length head start along the path
        source (RandomSource): Random/noise source for speed, gap and wobble
    """

    def __init__(self, creation_time: float, distance_offset: float = 0.0, *,
                 source: RandomSource):
        self.source = source
        self.speed = source.random(SPEED_MIN, SPEED_MAX)
        self.distance_offset = distance_offset
        self.distance = distance_offset
        self.creation_time = creation_time
        self.last_time = creation_time
        self.position = QtCore.QPointF(0.0, 0.0)
        self.xoff_angle_start = source.random(NOISE_RANGE)
        self.xoff_angle = self.xoff_angle_start
        self.gap = source.random(MAX_GAP)
        self.alpha = ALPHA_MAX
        self.alpha_direction = AlphaDirection.STEADY
        self.is_alive = True
        self.fade_in()

    def update(self, time: float):
        elapsed = (time - self.creation_time) / 1000.0
        delta = (time - self.last_time) / 1000.0
        self.last_time = time

        self.distance = self.distance_offset + self.speed * elapsed
        self.xoff_angle = self.xoff_angle_start + elapsed * WOBBLE_RATE

        if delta <= 0:
            return

        if self.alpha_direction == AlphaDirection.FADING_IN:
            self.alpha += FADE_RATE * delta
            if self.alpha >= ALPHA_MAX:
                self.alpha = ALPHA_MAX
                self.alpha_direction = AlphaDirection.STEADY
        elif self.alpha_direction == AlphaDirection.FADING_OUT:
            self.alpha -= FADE_RATE * delta
            if self.alpha <= 0:
                self.alpha = 0.0
                self.alpha_direction = AlphaDirection.STEADY
                self.is_alive = False

    def draw(self, canvas):
        wobble = from_angle(self.source.noise(self.xoff_angle) * 2 * math.pi, self.gap)
        center = self.position + wobble
        canvas.ellipse(center.x(), center.y(), PARTICLE_DIAMETER)

    def fade_in(self):
        if not self.is_alive:
            return
        self.alpha = 0.0
        self.alpha_direction = AlphaDirection.FADING_IN

    def fade_out(self):
        if not self.is_alive:
            return
        self.alpha = ALPHA_MAX
        self.alpha_direction = AlphaDirection.FADING_OUT


class Smoke:
    """A randomized branch growing off `figure`, with particles drifting along it.

    Args:
        figure (Figure): Parent figure to branch from
        branch_index (int): Segment boundary to branch at; random when None
        min_length (int): Minimum number of generated segments (inclusive)
        max_length (int): Maximum number of generated segments (exclusive)
        source (RandomSource): Random/noise source; a fresh one when None
        clock (callable): Millisecond clock; monotonic when None
        color: Particle color (anything QColor accepts)
        seed_particles (int): Number of particles spawned at construction

    Raises:
        InvalidArgument: empty parent figure, branch index out of range,
            negative lengths or max_length < min_length
    """

    def __init__(self, figure: Figure, branch_index: Optional[int] = None,
                 min_length: int = DEFAULT_MIN_LENGTH,
                 max_length: int = DEFAULT_MAX_LENGTH, *,
                 source: Optional[RandomSource] = None,
                 clock: Optional[Callable[[], float]] = None,
                 color=PARTICLE_COLOR,
                 seed_particles: int = SEED_PARTICLES):
        segment_count = len(figure.segments)
        if segment_count == 0:
            raise InvalidArgument("cannot branch smoke off a figure with no segments")
        if branch_index is not None and not 0 <= branch_index < segment_count:
            raise InvalidArgument(
                f"branch_index {branch_index} outside [0, {segment_count})")
        if min_length < 0 or max_length < 0:
            raise InvalidArgument(
                f"smoke length bounds must be non-negative, got {min_length}..{max_length}")
        if max_length < min_length:
            raise InvalidArgument(
                f"max_length {max_length} is smaller than min_length {min_length}")

        self.source = source if source is not None else RandomSource()
        self.clock = clock if clock is not None else millis
        self.color = QtGui.QColor(color)

        if branch_index is None:
            branch_index = math.floor(self.source.random(segment_count))
        self.branch_index = branch_index

        location = walk_to_segment(figure, branch_index)
        self.figure = Figure(location.offset, location.heading)

        length = math.floor(self.source.random(min_length, max_length))
        self.create_smoke_path(length)
        self.prepare_particles(seed_particles)
        logger.debug(f"Smoke branched at segment {branch_index} with {length} segments "
                     f"and {len(self.particles)} particles")

    # ----- path -----
    @property
    def origin_position(self) -> QtCore.QPointF:
        return self.figure.origin_position

    @property
    def origin_heading(self) -> float:
        return self.figure.origin_heading

    @property
    def segments(self) -> List[PathSegment]:
        return self.figure.segments

    @property
    def total_length(self) -> float:
        return self.figure.total_length

    @property
    def is_finished(self) -> bool:
        return not self.particles

    def create_smoke_path(self, length: int):
        xoff = self.source.random(NOISE_RANGE)
        for _ in range(length):
            angle = (self.source.noise(xoff) - 0.5) * MAX_TURN
            self.figure.add_segment(PathSegment(angle, SEGMENT_DISTANCE))
            xoff += NOISE_STEP

    # ----- particles -----
    def prepare_particles(self, count: int = SEED_PARTICLES):
        self.particles: List[SmokeParticle] = []
        now = self.clock()
        for _ in range(count):
            self.spawn_particle(now)

    def spawn_particle(self, now: float):
        distance_offset = self.source.random(len(self.particles) * 2)
        self.particles.append(SmokeParticle(now, distance_offset, source=self.source))

    def update(self, time: Optional[float] = None):
        if time is None:
            time = self.clock()
        survivors = []
        for particle in self.particles:
            particle.update(time)
            if particle.is_alive:
                survivors.append(particle)
            else:
                logger.debug(f"Smoke particle died at distance {particle.distance:.1f}")
        survivors.sort(key=lambda p: p.distance)
        self.particles = survivors
        self.calculate_particle_positions()

    def calculate_particle_positions(self):
        """Place every particle at its arc-length distance along the path.

        Particles must be sorted by distance. The path is walked once while a
        cursor steps through the particles, so each particle only costs the
        gap to its predecessor. Particles past the end of the path are pinned
        to the final vertex and start fading out.
        """
        if not self.particles:
            return

        index = 0
        remaining = self.particles[0].distance
        position = QtCore.QPointF(self.origin_position)
        for step in self.figure.walk():
            while step.segment.distance >= remaining:
                self.particles[index].position = step.start + with_magnitude(step.vector, remaining)
                index += 1
                if index >= len(self.particles):
                    return
                remaining += self.particles[index].distance - self.particles[index - 1].distance
            position = step.end
            remaining -= magnitude(step.vector)

        for particle in self.particles[index:]:
            particle.position = QtCore.QPointF(position)
            if particle.alpha_direction != AlphaDirection.FADING_OUT:
                particle.fade_out()

    def draw(self, canvas):
        canvas.push()
        canvas.no_stroke()
        color = QtGui.QColor(self.color)
        for particle in self.particles:
            color.setAlpha(int(round(particle.alpha)))
            canvas.fill(color)
            particle.draw(canvas)
        canvas.pop()
