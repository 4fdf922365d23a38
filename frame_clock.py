# frame_clock.py
"""
Instantaneous frame-rate measurement.
"""
import time
from typing import Callable, Optional


def milliseconds() -> float:
    """High-resolution monotonic timestamp in milliseconds."""
    return time.perf_counter() * 1000.0


class FrameClock:
    """
    Derives frames per second from the gap between successive frame timestamps.

    The reference timestamp is seeded at construction, so the first tick
    already yields a finite value.
    """
    def __init__(self, start: Optional[float] = None, time_source: Callable[[], float] = milliseconds):
        self.last_timestamp = float(start) if start is not None else float(time_source())
        self.fps = 0.0

    def tick(self, now: float) -> float:
        """
        Records a frame at `now` (milliseconds) and returns the instantaneous FPS.

        A timestamp that does not move forward leaves the reference untouched
        and returns the last measured value.
        """
        elapsed = now - self.last_timestamp
        if elapsed <= 0:
            return self.fps
        self.fps = 1000.0 / elapsed
        self.last_timestamp = float(now)
        return self.fps
