# settings.py
"""
Engine configuration.

EngineConfig enumerates every tunable of the particle engine together with
its default. It is built once (usually from the `simulation_parameters`
section of `config.json`), validated, and never modified afterwards.
"""
import logging
import numbers
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from errors import ConfigurationError

INTERACTION_MODES = ("neutral", "attraction", "repulsion")
INTEGER_FIELDS = ("particle_count", "stroke_width", "log_throttle_frames")
NUMERIC_FIELDS = (
    "min_radius", "max_radius", "min_speed", "max_speed",
    "min_distance", "full_opacity_distance", "mouse_min_proximity",
)

# --- Data Contracts ---
#
# class EngineConfig (frozen dataclass):
#   - from_dict(params: Dict[str, Any]) -> EngineConfig:
#     - Inputs: the "simulation_parameters" dictionary. Missing keys take
#       their defaults, unknown keys are logged and ignored.
#     - Outputs: a validated EngineConfig.
#     - Raises: ConfigurationError.
#
#   - validate(self) -> None:
#     - Raises ConfigurationError on the first inconsistent value, after
#       logging it at CRITICAL level.
#     - Invariants after success: 0 < min_radius <= max_radius,
#       0 < min_speed <= max_speed, 0 <= full_opacity_distance < min_distance.


@dataclass(frozen=True)
class EngineConfig:
    particle_count: int = 10
    min_radius: float = 2.0
    max_radius: float = 5.0
    min_speed: float = 0.5
    max_speed: float = 1.0
    # Connector trigger distance, also the margin past the viewport edge
    # a particle may travel before it is removed.
    min_distance: float = 200.0
    full_opacity_distance: float = 150.0
    mouse_min_proximity: float = 100.0
    initial_mode: str = "neutral"
    show_pointer: bool = False
    particle_color: Any = "black"
    stroke_color: Optional[Any] = None
    stroke_width: int = 0
    seed: Optional[int] = None
    log_throttle_frames: int = 300

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "EngineConfig":
        """Builds a validated configuration from a plain dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            logging.warning(f"Ignoring unknown simulation parameters: {', '.join(unknown)}")

        config = cls(**{key: value for key, value in params.items() if key in known})
        config.validate()
        return config

    def validate(self) -> None:
        self._check_types()
        if self.particle_count < 0:
            self._fail(f"particle_count must be >= 0, got {self.particle_count}.")
        if self.min_radius <= 0 or self.max_radius <= 0:
            self._fail(f"Radii must be positive, got min={self.min_radius}, max={self.max_radius}.")
        if self.min_radius > self.max_radius:
            self._fail(f"min_radius ({self.min_radius}) exceeds max_radius ({self.max_radius}).")
        if self.min_speed <= 0 or self.max_speed <= 0:
            self._fail(f"Speeds must be positive, got min={self.min_speed}, max={self.max_speed}.")
        if self.min_speed > self.max_speed:
            self._fail(f"min_speed ({self.min_speed}) exceeds max_speed ({self.max_speed}).")
        if self.min_distance <= 0:
            self._fail(f"min_distance must be positive, got {self.min_distance}.")
        if self.full_opacity_distance < 0 or self.full_opacity_distance >= self.min_distance:
            self._fail(
                f"full_opacity_distance ({self.full_opacity_distance}) must be >= 0 and "
                f"smaller than min_distance ({self.min_distance}), otherwise connector "
                f"opacities fall outside [0, 1]."
            )
        if self.mouse_min_proximity < 0:
            self._fail(f"mouse_min_proximity must be >= 0, got {self.mouse_min_proximity}.")
        if self.initial_mode not in INTERACTION_MODES:
            self._fail(f"initial_mode must be one of {INTERACTION_MODES}, got {self.initial_mode!r}.")
        if self.stroke_width < 0:
            self._fail(f"stroke_width must be >= 0, got {self.stroke_width}.")
        if self.log_throttle_frames <= 0:
            self._fail(f"log_throttle_frames must be positive, got {self.log_throttle_frames}.")

    def _check_types(self) -> None:
        # bool is an int subclass but never a meaningful count or distance.
        for name in INTEGER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                self._fail(f"{name} must be an integer, got {value!r}.")
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                self._fail(f"{name} must be a number, got {value!r}.")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral)):
            self._fail(f"seed must be an integer or null, got {self.seed!r}.")

    @staticmethod
    def _fail(message: str) -> None:
        msg = f"Configuration error: {message}"
        logging.critical(msg)
        raise ConfigurationError(msg)
