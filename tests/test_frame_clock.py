import math

from frame_clock import FrameClock


def test_first_tick_uses_construction_reference():
    clock = FrameClock(start=1000.0)
    assert clock.tick(1020.0) == 50.0


def test_reference_moves_forward_each_tick():
    clock = FrameClock(start=0.0)
    clock.tick(10.0)
    assert clock.tick(26.0) == 62.5
    assert clock.last_timestamp == 26.0


def test_first_tick_is_finite_with_default_time_source():
    clock = FrameClock(time_source=lambda: 500.0)
    assert math.isfinite(clock.tick(516.0))


def test_repeated_timestamp_keeps_last_value():
    clock = FrameClock(start=0.0)
    assert clock.tick(0.0) == 0.0
    clock.tick(20.0)
    assert clock.tick(20.0) == 50.0
    assert clock.last_timestamp == 20.0
