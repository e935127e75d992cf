import math

import pytest
from PyQt5 import QtCore

from smokey.noise import RandomSource
from smokey.smoke import ALPHA_MAX, AlphaDirection, SmokeParticle


@pytest.fixture
def particle(stub_source):
    return SmokeParticle(1000.0, 1.0, source=stub_source)


def test_new_particle_fades_in(particle):
    assert particle.alpha == 0.0
    assert particle.alpha_direction == AlphaDirection.FADING_IN
    assert particle.is_alive
    assert particle.speed == 125.0
    assert particle.gap == 10.0


def test_distance_recomputed_from_elapsed_time(particle):
    particle.update(1000.0)
    assert particle.distance == pytest.approx(1.0)
    particle.update(1500.0)
    assert particle.distance == pytest.approx(1.0 + 62.5)
    # going back to an earlier timestamp gives the earlier distance again
    particle.update(1200.0)
    assert particle.distance == pytest.approx(1.0 + 25.0)


def test_distance_is_monotonic_in_time():
    particle = SmokeParticle(0.0, 0.5, source=RandomSource(4))
    last = -1.0
    for t in range(0, 5000, 37):
        particle.update(float(t))
        assert particle.distance >= last
        last = particle.distance


def test_fade_in_progresses_then_goes_steady(particle):
    particle.update(1100.0)
    assert particle.alpha == pytest.approx(30.0)
    assert particle.alpha_direction == AlphaDirection.FADING_IN

    particle.update(2100.0)
    assert particle.alpha == ALPHA_MAX
    assert particle.alpha_direction == AlphaDirection.STEADY

    particle.update(3000.0)
    assert particle.alpha == ALPHA_MAX


def test_duplicate_timestamp_leaves_alpha_alone(particle):
    particle.update(1100.0)
    alpha = particle.alpha
    particle.update(1100.0)
    assert particle.alpha == alpha


@pytest.mark.parametrize("delta_ms", [1.0, 16.0, 850.0, 1e9])
def test_alpha_stays_in_bounds(particle, delta_ms):
    t = 1000.0
    for _ in range(3):
        t += delta_ms
        particle.update(t)
        assert 0.0 <= particle.alpha <= ALPHA_MAX
    particle.fade_out()
    for _ in range(3):
        t += delta_ms
        particle.update(t)
        assert 0.0 <= particle.alpha <= ALPHA_MAX


def test_fade_out_is_terminal(particle):
    particle.fade_out()
    assert particle.alpha == ALPHA_MAX
    assert particle.alpha_direction == AlphaDirection.FADING_OUT

    particle.update(1500.0)
    assert particle.alpha == pytest.approx(ALPHA_MAX - 150.0)
    assert particle.is_alive

    particle.update(5000.0)
    assert particle.alpha == 0.0
    assert particle.alpha_direction == AlphaDirection.STEADY
    assert not particle.is_alive

    particle.fade_in()
    particle.fade_out()
    particle.update(6000.0)
    assert not particle.is_alive
    assert particle.alpha == 0.0
    assert particle.alpha_direction == AlphaDirection.STEADY


def test_wobble_phase_advances_with_time(particle):
    start = particle.xoff_angle_start
    particle.update(1500.0)
    assert particle.xoff_angle == pytest.approx(start + 1.0)


def test_draw_offsets_dot_by_gap(particle, canvas):
    particle.position = QtCore.QPointF(10.0, 10.0)
    particle.draw(canvas)
    # flat noise at 0.5 points the wobble at pi
    (_, x, y, diameter), = canvas.ellipses
    assert x == pytest.approx(10.0 - particle.gap)
    assert y == pytest.approx(10.0 + particle.gap * math.sin(math.pi))
    assert diameter == 3.0
