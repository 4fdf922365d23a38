# visualization.py
"""
Pygame adapters for the particle engine.

The engine only talks to a drawing surface, a frame scheduler and an event
source. This module provides all three on top of Pygame: a window-backed
surface, a Clock-driven frame loop, and a translator from Pygame events to
the engine's EventKind callbacks.
"""
import logging
import pygame
from typing import Any, Callable, Dict, Optional, Tuple

from constants import (
    BACKGROUND_COLOR, DEFAULT_WINDOW_SIZE, FPS, LINE_COLOR, OVERLAY_FONT_FAMILY,
    OVERLAY_FONT_SIZE, TEXT_COLOR, WINDOW_CAPTION
)
from errors import SurfaceError
from frame_clock import milliseconds
from simulation import EventKind

# --- Data Contracts ---
#
# class PygameSurface:
#   - __init__(self, window_size, fullscreen=False, ...):
#     - Side Effects: Initializes Pygame and opens a resizable window.
#     - Raises: SurfaceError if the display cannot be created.
#   - resize/clear/draw_circle/draw_line/draw_text: the engine's DrawingSurface
#     contract. Drawing goes to an off-screen canvas.
#   - present(self) -> None: Copies the canvas to the window and flips.
#
# class PygameFrameScheduler:
#   - schedule_next_frame(callback) -> int handle. Only one frame is pending
#     at a time; scheduling again replaces it.
#   - cancel(handle) -> None.
#   - run(self, events, surface=None, max_frames=0) -> int:
#     - Runs pending frames until none is left, the window is closed, Escape
#       is pressed, or max_frames (when > 0) frames have run.
#     - Outputs: number of frames run.
#
# class PygameEventSource:
#   - subscribe(kind, handler) -> token, unsubscribe(token).
#   - dispatch(event) -> bool: False once a quit was requested.
#   - Wheel deltas follow the browser convention: negative means up/left.


class PygameSurface:
    """
    Drawing surface backed by a Pygame window.
    """
    def __init__(
        self,
        window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE,
        fullscreen: bool = False,
        caption: str = WINDOW_CAPTION,
        background_color=BACKGROUND_COLOR,
        line_color=LINE_COLOR,
        text_color=TEXT_COLOR,
    ):
        pygame.init()
        pygame.font.init()

        try:
            if fullscreen:
                display_info = pygame.display.Info()
                window_size = (display_info.current_w, display_info.current_h)
                self.screen = pygame.display.set_mode(window_size, pygame.FULLSCREEN)
            else:
                self.screen = pygame.display.set_mode(window_size, pygame.RESIZABLE)
        except pygame.error as e:
            msg = f"Could not create a {window_size[0]}x{window_size[1]} display: {e}"
            logging.critical(msg)
            raise SurfaceError(msg) from e

        pygame.display.set_caption(caption)

        self.background_color = pygame.Color(background_color)
        self.line_color = pygame.Color(line_color)
        self.text_color = pygame.Color(text_color)
        self.canvas = pygame.Surface(self.screen.get_size())
        self.fonts: Dict[Tuple[str, int], pygame.font.Font] = {}

        logging.info(f"PygameSurface initialized ({window_size[0]}x{window_size[1]}).")

    def viewport_size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def resize(self, width: int, height: int) -> None:
        if self.canvas.get_size() != (width, height):
            self.canvas = pygame.Surface((width, height))
            logging.debug(f"Canvas resized to {width}x{height}.")

    def clear(self) -> None:
        self.canvas.fill(self.background_color)

    def draw_circle(self, position, radius, fill_color=None, stroke_color=None, stroke_width=0) -> None:
        if fill_color is not None:
            pygame.draw.circle(self.canvas, fill_color, position, radius)
        if stroke_color is not None and stroke_width:
            pygame.draw.circle(self.canvas, stroke_color, position, radius, int(stroke_width))

    def draw_line(self, a, b, opacity: float) -> None:
        # Negative opacities are legal input and simply draw nothing.
        alpha = min(max(opacity, 0.0), 1.0)
        if alpha == 0.0:
            return
        color = self.background_color.lerp(self.line_color, alpha)
        pygame.draw.aaline(self.canvas, color, a, b)

    def draw_text(self, text: str, position, font_size: int = OVERLAY_FONT_SIZE,
                  font_family: str = OVERLAY_FONT_FAMILY) -> None:
        text_surf = self._font(font_family, font_size).render(text, True, self.text_color)
        self.canvas.blit(text_surf, position)

    def _font(self, family: str, size: int) -> pygame.font.Font:
        key = (family, size)
        if key not in self.fonts:
            try:
                self.fonts[key] = pygame.font.SysFont(family, size)
            except pygame.error:
                logging.warning(f"Font '{family}' not found, falling back to the default font.")
                self.fonts[key] = pygame.font.Font(None, size)
        return self.fonts[key]

    def present(self) -> None:
        self.screen.fill(self.background_color)
        self.screen.blit(self.canvas, (0, 0))
        pygame.display.flip()

    def close(self) -> None:
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()


class PygameEventSource:
    """
    Translates Pygame events into engine callbacks.
    """
    def __init__(self, viewport: Optional[Callable[[], Tuple[int, int]]] = None):
        self.viewport = viewport if viewport is not None else (lambda: DEFAULT_WINDOW_SIZE)
        self._handlers: Dict[EventKind, Dict[Any, Callable[..., Any]]] = {kind: {} for kind in EventKind}
        self._next_token = 0
        self.quit_requested = False

    def subscribe(self, kind: EventKind, handler: Callable[..., Any]) -> Tuple[EventKind, int]:
        self._next_token += 1
        token = (kind, self._next_token)
        self._handlers[kind][token] = handler
        return token

    def unsubscribe(self, token: Tuple[EventKind, int]) -> None:
        kind, _ = token
        self._handlers[kind].pop(token, None)

    def subscription_count(self) -> int:
        return sum(len(handlers) for handlers in self._handlers.values())

    def emit(self, kind: EventKind, *args) -> list:
        return [handler(*args) for handler in list(self._handlers[kind].values())]

    def poll(self) -> bool:
        """Dispatches every queued Pygame event. Returns False once a quit was requested."""
        for event in pygame.event.get():
            self.dispatch(event)
        return not self.quit_requested

    def dispatch(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.QUIT:
            logging.info("Quit event received.")
            self.quit_requested = True
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            logging.info("ESC key pressed.")
            self.quit_requested = True
        elif event.type == pygame.KEYUP:
            self.emit(EventKind.KEY_RELEASE, pygame.key.name(event.key))
        elif event.type == pygame.MOUSEMOTION:
            if not getattr(event, "touch", False):
                self.emit(EventKind.POINTER_MOVE, *event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and not getattr(event, "touch", False):
            # Synthetic clicks from touches are skipped, fingers are handled below.
            if event.button == 1:
                self.emit(EventKind.PRIMARY_CLICK)
            elif event.button == 3:
                self.emit(EventKind.SECONDARY_CLICK)
        elif event.type == pygame.MOUSEWHEEL:
            dx, dy = self._wheel_deltas(event)
            if dx or dy:
                self.emit(EventKind.WHEEL, dx, dy, 0)
        elif event.type in (pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP):
            width, height = self.viewport()
            self.emit(EventKind.POINTER_MOVE, event.x * width, event.y * height)
            if event.type == pygame.FINGERDOWN:
                self.emit(EventKind.TOUCH_START)
            elif event.type == pygame.FINGERUP:
                self.emit(EventKind.TOUCH_END)
        return not self.quit_requested

    @staticmethod
    def _wheel_deltas(event: pygame.event.Event) -> Tuple[float, float]:
        """
        Wheel deltas in the browser convention (negative is up/left).

        High-resolution devices may leave the integer x/y at 0 and only fill
        precise_x/precise_y, so those are preferred when present.
        """
        x = getattr(event, "precise_x", event.x)
        y = getattr(event, "precise_y", event.y)
        if getattr(event, "flipped", False):
            x, y = -x, -y
        # Pygame reports y > 0 for scrolling up.
        return x, -y


class PygameFrameScheduler:
    """
    Runs one pending frame callback per display frame, capped by a Pygame Clock.
    """
    def __init__(self, fps_cap: int = FPS, time_source: Callable[[], float] = milliseconds):
        self.fps_cap = fps_cap
        self.time_source = time_source
        self.clock = pygame.time.Clock()
        self._pending: Optional[Tuple[int, Callable[[float], None]]] = None
        self._next_handle = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def schedule_next_frame(self, callback: Callable[[float], None]) -> int:
        self._next_handle += 1
        self._pending = (self._next_handle, callback)
        return self._next_handle

    def cancel(self, handle: int) -> None:
        if self._pending is not None and self._pending[0] == handle:
            self._pending = None

    def run(self, events: PygameEventSource, surface: Optional[PygameSurface] = None, max_frames: int = 0) -> int:
        frames = 0
        while self._pending is not None:
            if not events.poll():
                break
            # An event handler may have cancelled the frame.
            if self._pending is None:
                break

            _, callback = self._pending
            self._pending = None
            callback(self.time_source())
            if surface is not None:
                surface.present()

            frames += 1
            if max_frames and frames >= max_frames:
                logging.info(f"Reached max_frames ({max_frames}). Stopping frame loop.")
                break
            self.clock.tick(self.fps_cap)
        return frames
