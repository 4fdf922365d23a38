# particle.py
"""
A single drifting particle.

This module defines the Particle entity: a circle with a fixed radius and
style that travels along a straight line picked once at construction.
"""
import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence

from constants import DEFAULT_PARTICLE_COLOR, DEFAULT_PARTICLE_RADIUS_RANGE, DEFAULT_PARTICLE_SPEED

# --- Data Contracts ---
#
# class ParticleStyle (frozen):
#   - fill_color: str | tuple, any value pygame.Color accepts.
#   - stroke_color: Optional color. No outline is drawn when None.
#   - stroke_width: int >= 0. No outline is drawn when 0.
#
# class Particle:
#   - __init__(self, position, radius=None, style=None, speed=None, rng=None):
#     - Inputs:
#       - position: 2D point, copied into a float64 array of shape (2,).
#       - radius: Optional float. Drawn from DEFAULT_PARTICLE_RADIUS_RANGE when None.
#       - style: Optional ParticleStyle. Black fill, no stroke when None.
#       - speed: Optional float. DEFAULT_PARTICLE_SPEED when None.
#       - rng: Optional np.random.Generator used for every random draw.
#     - Side Effects: Draws direction components independently from U(-1, 1).
#       The direction is not normalized.
#     - Invariants: radius and style never change after construction.
#
#   - advance(self, speed=None) -> None:
#     - Side Effects: position += direction * (speed if given else self.speed).
#       No bounds checking.


@dataclass(frozen=True)
class ParticleStyle:
    fill_color: object = DEFAULT_PARTICLE_COLOR
    stroke_color: Optional[object] = None
    stroke_width: int = 0


class Particle:
    """
    A circle moving in a fixed direction at a fixed speed.
    """
    def __init__(
        self,
        position: Sequence[float],
        radius: Optional[float] = None,
        style: Optional[ParticleStyle] = None,
        speed: Optional[float] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        rng = rng if rng is not None else np.random.default_rng()

        self.position = np.array(position, dtype=np.float64)
        self._radius = float(radius) if radius is not None else float(rng.uniform(*DEFAULT_PARTICLE_RADIUS_RANGE))
        self._style = style if style is not None else ParticleStyle()
        self.speed = float(speed) if speed is not None else DEFAULT_PARTICLE_SPEED

        # Each axis is sampled on its own, so headings are biased toward the diagonals.
        self.direction = rng.uniform(-1.0, 1.0, size=2)

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def style(self) -> ParticleStyle:
        return self._style

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    def advance(self, speed: Optional[float] = None) -> None:
        """Moves the particle one step along its direction."""
        self.position += self.direction * (self.speed if speed is None else speed)

    def __repr__(self) -> str:
        return (
            f"Particle(position=({self.x:.2f}, {self.y:.2f}), "
            f"radius={self._radius:.2f}, speed={self.speed:.2f})"
        )
