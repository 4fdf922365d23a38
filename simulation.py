# simulation.py
"""
Handles the core particle simulation and the per-frame drawing sequence.

This module defines the SimulationEngine, which owns the particle collection
and the pointer/keyboard-driven interaction state. Each frame it moves and
draws every particle, removes and respawns particles that drift past the
extended viewport, reacts to the pointer, and draws connectors between
nearby particles. Drawing, frame scheduling and input delivery are supplied
by collaborators (see the protocols below) so the engine never touches a
rendering API directly.
"""
import logging
import math
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

from constants import (
    DEFAULT_WINDOW_SIZE, OVERLAY_FONT_FAMILY, OVERLAY_FONT_SIZE, OVERLAY_LINE_SPACING,
    OVERLAY_X, PAUSE_KEY, POINTER_EDGE_MARGIN, POINTER_MARKER_COLOR,
    POINTER_MARKER_RADIUS, POINTER_STEP, VIEWPORT_HEIGHT_OFFSET
)
from errors import SurfaceError
from frame_clock import FrameClock
from geometry import angle_radians, connector_opacity, distance, find_connections
from particle import Particle, ParticleStyle
from settings import EngineConfig

# --- Data Contracts ---
#
# class SimulationEngine:
#   - __init__(self, surface, config=None, viewport=None, scheduler=None,
#              events=None, rng=None, clock=None):
#     - Inputs:
#       - surface: DrawingSurface. Required.
#       - config: EngineConfig. Defaults are used when None.
#       - viewport: Callable returning the host (width, height).
#       - scheduler: FrameScheduler, required only by start().
#       - events: EventSource, optional.
#       - rng: np.random.Generator. Seeded from config.seed when None.
#       - clock: FrameClock.
#     - Side Effects: Sizes the surface and creates config.particle_count
#       particles at random positions.
#     - Raises: SurfaceError if surface is None, ConfigurationError.
#
#   - run_frame(self, now: float, viewport_size: Tuple[int, int]) -> FrameReport:
#     - Side Effects: Issues every drawing call for one frame. Moves, removes
#       and respawns particles.
#     - Invariants: The particle count after the frame equals the count
#       before it (every removal is replaced within the same frame).
#
#   - start(self) / stop(self):
#     - start subscribes one handler per EventKind and schedules the first
#       frame. Every frame re-arms itself while running.
#     - stop cancels the pending frame and removes every subscription.


class InteractionMode(Enum):
    NEUTRAL = "neutral"
    ATTRACTION = "attraction"
    REPULSION = "repulsion"


class EventKind(Enum):
    POINTER_MOVE = "pointer_move"          # handler(x, y)
    PRIMARY_CLICK = "primary_click"        # handler()
    SECONDARY_CLICK = "secondary_click"    # handler() -> True when the default was suppressed
    TOUCH_START = "touch_start"            # handler()
    TOUCH_END = "touch_end"                # handler()
    WHEEL = "wheel"                        # handler(dx, dy, dz)
    KEY_RELEASE = "key_release"            # handler(key)


class DrawingSurface(Protocol):
    def resize(self, width: int, height: int) -> None: ...

    def clear(self) -> None: ...

    def draw_circle(self, position: Tuple[float, float], radius: float, fill_color: Any = None,
                    stroke_color: Any = None, stroke_width: int = 0) -> None: ...

    def draw_line(self, a: Tuple[float, float], b: Tuple[float, float], opacity: float) -> None: ...

    def draw_text(self, text: str, position: Tuple[float, float], font_size: int = OVERLAY_FONT_SIZE,
                  font_family: str = OVERLAY_FONT_FAMILY) -> None: ...


class FrameScheduler(Protocol):
    def schedule_next_frame(self, callback: Callable[[float], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class EventSource(Protocol):
    def subscribe(self, kind: EventKind, handler: Callable[..., Any]) -> Any: ...

    def unsubscribe(self, token: Any) -> None: ...


@dataclass
class InteractionState:
    """
    Pointer and keyboard derived state shared by the event handlers and the
    frame loop. Every mutation goes through one of the methods below.
    """
    pointer: Tuple[float, float] = (0.0, 0.0)
    mode: InteractionMode = InteractionMode.NEUTRAL
    paused: bool = False
    target_particle_count: int = 0

    @property
    def attraction(self) -> bool:
        return self.mode is InteractionMode.ATTRACTION

    @property
    def repulsion(self) -> bool:
        return self.mode is InteractionMode.REPULSION

    def move_pointer(self, x: float, y: float) -> None:
        self.pointer = (float(x), float(y))

    def toggle_attraction(self) -> None:
        self.mode = InteractionMode.NEUTRAL if self.attraction else InteractionMode.ATTRACTION

    def toggle_repulsion(self) -> None:
        self.mode = InteractionMode.NEUTRAL if self.repulsion else InteractionMode.REPULSION

    def set_attraction(self, active: bool) -> None:
        if active:
            self.mode = InteractionMode.ATTRACTION
        elif self.attraction:
            self.mode = InteractionMode.NEUTRAL

    def toggle_pause(self) -> None:
        self.paused = not self.paused


@dataclass(frozen=True)
class FrameReport:
    frame: int
    removed: int
    connectors: int
    fps: float


def _point(values: Sequence[float]) -> Tuple[float, float]:
    return (float(values[0]), float(values[1]))


class SimulationEngine:
    """
    Owns the particles and interaction state, and draws one frame at a time.
    """
    def __init__(
        self,
        surface: DrawingSurface,
        config: Optional[EngineConfig] = None,
        viewport: Optional[Callable[[], Tuple[int, int]]] = None,
        scheduler: Optional[FrameScheduler] = None,
        events: Optional[EventSource] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[FrameClock] = None,
    ):
        if surface is None:
            msg = "SimulationEngine requires a drawing surface."
            logging.critical(msg)
            raise SurfaceError(msg)

        self.surface = surface
        self.config = config if config is not None else EngineConfig()
        self.config.validate()

        self.viewport = viewport if viewport is not None else (lambda: DEFAULT_WINDOW_SIZE)
        self.scheduler = scheduler
        self.events = events
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.clock = clock if clock is not None else FrameClock()

        self.state = InteractionState(
            mode=InteractionMode(self.config.initial_mode),
            target_particle_count=self.config.particle_count,
        )
        self.style = ParticleStyle(
            fill_color=self.config.particle_color,
            stroke_color=self.config.stroke_color,
            stroke_width=self.config.stroke_width,
        )

        self.width = 0
        self.height = 0
        self.frame_number = 0
        self.running = False
        self._pending_frame: Any = None
        self._subscriptions: List[Any] = []

        self._resize_surface(self.viewport())
        self.particles: List[Particle] = [self.create_particle() for _ in range(self.config.particle_count)]

        logging.info(
            f"SimulationEngine initialized with {len(self.particles)} particles "
            f"on a {self.width}x{self.height} surface (mode: {self.state.mode.value})."
        )

    # --- Lifecycle ---

    @property
    def subscriptions(self) -> Tuple[Any, ...]:
        """Tokens of the event subscriptions currently held by the engine."""
        return tuple(self._subscriptions)

    @property
    def pending_frame(self) -> Any:
        return self._pending_frame

    def start(self) -> None:
        """Subscribes to input events and schedules the first frame."""
        if self.running:
            return
        if self.scheduler is None:
            raise RuntimeError("SimulationEngine.start() requires a frame scheduler.")

        self.running = True
        if self.events is not None:
            handlers = {
                EventKind.POINTER_MOVE: self.on_pointer_move,
                EventKind.PRIMARY_CLICK: self.on_primary_click,
                EventKind.SECONDARY_CLICK: self.on_secondary_click,
                EventKind.TOUCH_START: self.on_touch_start,
                EventKind.TOUCH_END: self.on_touch_end,
                EventKind.WHEEL: self.on_wheel,
                EventKind.KEY_RELEASE: self.on_key_release,
            }
            for kind, handler in handlers.items():
                self._subscriptions.append(self.events.subscribe(kind, handler))

        self._pending_frame = self.scheduler.schedule_next_frame(self._on_frame)
        logging.info("Simulation started.")

    def stop(self) -> None:
        """Stops re-arming frames and releases every event subscription."""
        self.running = False
        if self._pending_frame is not None and self.scheduler is not None:
            self.scheduler.cancel(self._pending_frame)
        self._pending_frame = None

        while self._subscriptions:
            self.events.unsubscribe(self._subscriptions.pop())
        logging.info(f"Simulation stopped after {self.frame_number} frames.")

    def _on_frame(self, now: float) -> None:
        self._pending_frame = None
        if not self.running:
            return
        self.run_frame(now, self.viewport())
        # A handler invoked during the frame may have stopped the engine.
        if self.running:
            self._pending_frame = self.scheduler.schedule_next_frame(self._on_frame)

    # --- Particle factory ---

    def create_particle(self, from_center: bool = False) -> Particle:
        """
        Creates a particle with a random speed and radius from the configured
        ranges, placed uniformly over the surface or at its center.
        """
        if from_center:
            x, y = self.width / 2, self.height / 2
        else:
            x = self.rng.uniform(0, self.width)
            y = self.rng.uniform(0, self.height)
        speed = self.rng.uniform(self.config.min_speed, self.config.max_speed)
        # Half-way values round up.
        radius = math.floor(self.rng.uniform(self.config.min_radius, self.config.max_radius) + 0.5)
        return Particle((x, y), radius=radius, style=self.style, speed=speed, rng=self.rng)

    # --- Frame ---

    def run_frame(self, now: float, viewport_size: Tuple[int, int]) -> FrameReport:
        """
        Draws one complete frame and advances the simulation by one step.
        """
        self._resize_surface(viewport_size)
        self.surface.clear()

        removed = self._animate_particles()
        connectors = self._draw_connections()
        if self.config.show_pointer:
            self.surface.draw_circle(self.state.pointer, POINTER_MARKER_RADIUS, fill_color=POINTER_MARKER_COLOR)

        fps = self.clock.tick(now)
        self._draw_overlay(fps)

        self.frame_number += 1
        if self.frame_number % self.config.log_throttle_frames == 0:
            logging.debug(
                f"Frame {self.frame_number} | Particles: {len(self.particles)} | "
                f"Removed: {removed} | Connectors: {connectors} | FPS: {fps:.1f}"
            )
        return FrameReport(frame=self.frame_number, removed=removed, connectors=connectors, fps=fps)

    def _resize_surface(self, viewport_size: Tuple[int, int]) -> None:
        width, height = viewport_size
        self.width = max(int(width), 0)
        self.height = max(int(height) - VIEWPORT_HEIGHT_OFFSET, 0)
        self.surface.resize(self.width, self.height)

    def _animate_particles(self) -> int:
        """Draws, moves and recycles particles. Returns the number removed."""
        to_remove = []
        for index, particle in enumerate(self.particles):
            self._draw_particle(particle)
            if self.is_outside(particle):
                to_remove.append(index)
            else:
                self._apply_pointer(particle)

        self._remove_particles(to_remove)
        for _ in to_remove:
            self.particles.append(self.create_particle())
        return len(to_remove)

    def _draw_particle(self, particle: Particle) -> None:
        style = particle.style
        self.surface.draw_circle(
            _point(particle.position),
            particle.radius,
            fill_color=style.fill_color,
            stroke_color=style.stroke_color,
            stroke_width=style.stroke_width,
        )

    def is_outside(self, particle: Particle) -> bool:
        """True once the whole circle lies past the surface extended by min_distance."""
        margin = self.config.min_distance
        x, y = particle.position
        r = particle.radius
        return (
            x - r > self.width + margin
            or x + r < -margin
            or y - r > self.height + margin
            or y + r < -margin
        )

    def pointer_in_bounds(self) -> bool:
        px, py = self.state.pointer
        return (
            POINTER_EDGE_MARGIN < px < self.width - POINTER_EDGE_MARGIN
            and POINTER_EDGE_MARGIN < py < self.height - POINTER_EDGE_MARGIN
        )

    def _apply_pointer(self, particle: Particle) -> None:
        pointer = self.state.pointer
        mode = self.state.mode
        paused = self.state.paused
        dist = distance(particle.position, pointer)
        proximity = self.config.mouse_min_proximity

        if (mode is not InteractionMode.NEUTRAL and not paused
                and dist < proximity and self.pointer_in_bounds()):
            angle = angle_radians(particle.position, pointer)
            if mode is InteractionMode.REPULSION:
                angle += math.pi
            particle.position[0] += POINTER_STEP * math.cos(angle)
            particle.position[1] += POINTER_STEP * math.sin(angle)

        if mode is InteractionMode.NEUTRAL:
            self.surface.draw_line(_point(particle.position), pointer, self.opacity(dist))

        # Inside the proximity radius the pointer displacement replaces normal motion.
        if not paused and (dist > proximity + POINTER_STEP or mode is InteractionMode.NEUTRAL):
            particle.advance()

    def _remove_particles(self, indexes: List[int]) -> None:
        # Descending order keeps the remaining indexes valid.
        for index in sorted(indexes, reverse=True):
            del self.particles[index]

    def _draw_connections(self) -> int:
        """Draws a connector for every pair closer than min_distance."""
        if len(self.particles) < 2:
            return 0
        positions = np.array([p.position for p in self.particles], dtype=np.float64)
        first, second, distances = find_connections(positions, self.config.min_distance)
        for i, j, dist in zip(first, second, distances):
            self.surface.draw_line(_point(positions[i]), _point(positions[j]), self.opacity(dist))
        return len(first)

    def opacity(self, dist: float) -> float:
        return connector_opacity(float(dist), self.config.full_opacity_distance, self.config.min_distance)

    def _draw_overlay(self, fps: float) -> None:
        px, py = self.state.pointer
        lines = (
            f"FPS: {fps:.0f}",
            f"Mouse: {px:.0f}, {py:.0f}",
            f"Particles: {len(self.particles)}",
        )
        for row, text in enumerate(lines):
            self.surface.draw_text(text, (OVERLAY_X, row * OVERLAY_LINE_SPACING))

    # --- Input handlers ---

    def on_pointer_move(self, x: float, y: float) -> None:
        self.state.move_pointer(x, y)

    def on_primary_click(self) -> None:
        self.state.toggle_attraction()
        logging.info(f"Interaction mode changed to {self.state.mode.value}.")

    def on_secondary_click(self) -> bool:
        """Toggles repulsion. Returns True so the caller suppresses any context menu."""
        self.state.toggle_repulsion()
        logging.info(f"Interaction mode changed to {self.state.mode.value}.")
        return True

    def on_touch_start(self) -> None:
        self.state.set_attraction(True)

    def on_touch_end(self) -> None:
        self.state.set_attraction(False)

    def on_wheel(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> None:
        """
        Scrolling up, left or forward (negative deltas) drops one particle,
        anything else adds one. Applied immediately, outside the frame loop.
        """
        if dx < 0 or dy < 0 or dz < 0:
            if self.state.target_particle_count == 0:
                return
            self.state.target_particle_count -= 1
            if self.particles:
                self.particles.pop()
        else:
            self.state.target_particle_count += 1
            self.particles.append(self.create_particle())
        logging.info(f"Target particle count set to {self.state.target_particle_count}.")

    def on_key_release(self, key: str) -> None:
        if key == PAUSE_KEY:
            self.state.toggle_pause()
            logging.info("Simulation paused." if self.state.paused else "Simulation resumed.")
