"""Shared fakes for the engine's collaborators."""
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from frame_clock import FrameClock
from settings import EngineConfig
from simulation import SimulationEngine


class RecordingSurface:
    """Drawing surface that records every call instead of drawing."""

    def __init__(self):
        self.resizes = []
        self.clears = 0
        self.circles = []
        self.lines = []
        self.texts = []

    def resize(self, width, height):
        self.resizes.append((width, height))

    def clear(self):
        self.clears += 1

    def draw_circle(self, position, radius, fill_color=None, stroke_color=None, stroke_width=0):
        self.circles.append((tuple(position), radius, fill_color, stroke_color, stroke_width))

    def draw_line(self, a, b, opacity):
        self.lines.append((tuple(a), tuple(b), opacity))

    def draw_text(self, text, position, font_size=12, font_family="sans-serif"):
        self.texts.append((text, tuple(position)))

    def reset(self):
        self.circles.clear()
        self.lines.clear()
        self.texts.clear()


class ManualScheduler:
    """Frame scheduler whose frames only run when the test asks."""

    def __init__(self):
        self.pending = {}
        self._next = 0

    def schedule_next_frame(self, callback):
        self._next += 1
        self.pending[self._next] = callback
        return self._next

    def cancel(self, handle):
        self.pending.pop(handle, None)

    def run_next(self, now):
        handle = min(self.pending)
        callback = self.pending.pop(handle)
        callback(now)


class MemoryEventSource:
    def __init__(self):
        self.handlers = {}
        self._next = 0

    def subscribe(self, kind, handler):
        self._next += 1
        self.handlers[self._next] = (kind, handler)
        return self._next

    def unsubscribe(self, token):
        del self.handlers[token]

    def emit(self, kind, *args):
        return [handler(*args) for k, handler in list(self.handlers.values()) if k is kind]


VIEWPORT = (800, 606)  # surface becomes 800x600


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def events():
    return MemoryEventSource()


@pytest.fixture
def make_engine(surface):
    def factory(viewport=VIEWPORT, **overrides):
        return SimulationEngine(
            surface,
            config=EngineConfig(**overrides),
            viewport=lambda: viewport,
            rng=np.random.default_rng(1234),
            clock=FrameClock(start=0.0),
        )
    return factory
