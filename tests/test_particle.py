import numpy as np
import pytest

from constants import DEFAULT_PARTICLE_RADIUS_RANGE, DEFAULT_PARTICLE_SPEED
from particle import Particle, ParticleStyle


def test_defaults_fill_unset_fields():
    p = Particle((1, 2), rng=np.random.default_rng(0))

    low, high = DEFAULT_PARTICLE_RADIUS_RANGE
    assert low <= p.radius <= high
    assert p.speed == DEFAULT_PARTICLE_SPEED
    assert p.style == ParticleStyle(fill_color="black", stroke_color=None, stroke_width=0)


def test_direction_components_are_drawn_per_axis():
    rng = np.random.default_rng(42)
    for _ in range(200):
        p = Particle((0, 0), radius=1, rng=rng)
        assert p.direction.shape == (2,)
        assert np.all(p.direction >= -1.0) and np.all(p.direction <= 1.0)


def test_advance_is_linear():
    p = Particle((100.0, 50.0), radius=2, speed=0.75, rng=np.random.default_rng(3))
    start = p.position.copy()

    for _ in range(40):
        p.advance()

    assert p.position == pytest.approx(start + 40 * 0.75 * p.direction)


def test_advance_speed_override():
    p = Particle((0.0, 0.0), radius=2, speed=1.0, rng=np.random.default_rng(3))
    p.advance(3.0)
    assert p.position == pytest.approx(3.0 * p.direction)


def test_advance_has_no_bounds():
    p = Particle((0.0, 0.0), radius=2, speed=1e6, rng=np.random.default_rng(5))
    p.direction[:] = (-1.0, -1.0)
    p.advance()
    assert p.x == -1e6 and p.y == -1e6


def test_position_is_copied_from_input():
    source = [5.0, 5.0]
    p = Particle(source, radius=2, rng=np.random.default_rng(1))
    p.advance()
    assert source == [5.0, 5.0]


def test_radius_and_style_are_read_only():
    p = Particle((0, 0), radius=4, rng=np.random.default_rng(1))
    with pytest.raises(AttributeError):
        p.radius = 9
    with pytest.raises(AttributeError):
        p.style = ParticleStyle(fill_color="red")
