import random

import pytest

from savorycircle.modules.wheel.picker import (
    LEFT,
    NONE,
    RIGHT,
    SwipeTracker,
    decide_swipe,
    spin,
)


def test_spin_lands_on_selected_segment():
    index, rotation = spin(4, random.Random(7))
    assert 0 <= index < 4
    full_turns, remainder = divmod(rotation, 360)
    assert 5 <= full_turns <= 9
    assert remainder == pytest.approx(index * 90)


def test_spin_rejects_empty_wheel():
    with pytest.raises(ValueError):
        spin(0)


def test_long_drag_right_keeps():
    decision, offset, _ = decide_swipe([(0, 0), (60, 500), (150, 1000)])
    assert decision == RIGHT
    assert offset == 150


def test_long_drag_left_skips():
    decision, offset, _ = decide_swipe([(300, 0), (250, 400), (180, 800)])
    assert decision == LEFT
    assert offset == -120


def test_fast_flick_below_distance_threshold_still_counts():
    decision, offset, velocity = decide_swipe([(0, 0), (40, 20), (80, 40)])
    assert abs(offset) < 100
    assert velocity > 0.5
    assert decision == RIGHT


def test_slow_short_drag_is_ignored():
    decision, _, _ = decide_swipe([(0, 0), (20, 500), (40, 1000)])
    assert decision == NONE


def test_no_samples():
    assert decide_swipe([]) == (NONE, 0.0, 0.0)


def test_velocity_is_smoothed():
    tracker = SwipeTracker()
    tracker.press(0, 0)
    tracker.move(10, 10)
    assert tracker.velocity == pytest.approx(0.8)
    tracker.move(10, 20)
    assert tracker.velocity == pytest.approx(0.16)


def test_release_without_press_and_reset_after_release():
    tracker = SwipeTracker()
    assert tracker.release() == NONE
    tracker.press(0, 0)
    tracker.move(200, 100)
    assert tracker.release() == RIGHT
    assert not tracker.dragging
    assert tracker.offset == 0.0
