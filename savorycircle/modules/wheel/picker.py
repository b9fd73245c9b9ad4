"""Wheel spin and swipe-card decisions for the random meal picker."""

import random
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

SWIPE_THRESHOLD_PX = 100.0
SWIPE_VELOCITY_PX_PER_MS = 0.5
VELOCITY_SMOOTHING = 0.8
MIN_SPINS = 5
MAX_SPINS = 9

RIGHT = "right"
LEFT = "left"
NONE = "none"


def spin(count: int, rng: Optional[random.Random] = None) -> Tuple[int, float]:
    """Pick a wheel segment; returns (index, final rotation in degrees)."""
    if count <= 0:
        raise ValueError("cannot spin an empty wheel")
    rng = rng or random.Random()
    base_rotation = rng.randint(MIN_SPINS, MAX_SPINS) * 360
    index = rng.randrange(count)
    return index, base_rotation + index * (360 / count)


@dataclass
class SwipeTracker:
    """Tracks one drag gesture; mouse and touch events feed the same methods.

    Velocity is exponentially smoothed so a single jittery sample does not
    flip the decision.
    """
    threshold: float = SWIPE_THRESHOLD_PX
    velocity_threshold: float = SWIPE_VELOCITY_PX_PER_MS
    smoothing: float = VELOCITY_SMOOTHING
    start_x: Optional[float] = None
    last_x: float = 0.0
    last_t: float = 0.0
    velocity: float = 0.0

    @property
    def dragging(self) -> bool:
        return self.start_x is not None

    @property
    def offset(self) -> float:
        return 0.0 if self.start_x is None else self.last_x - self.start_x

    def press(self, x: float, t: float) -> None:
        self.start_x = x
        self.last_x = x
        self.last_t = t
        self.velocity = 0.0

    def move(self, x: float, t: float) -> None:
        if not self.dragging:
            return
        dt = t - self.last_t
        if dt > 0:
            instant = (x - self.last_x) / dt
            self.velocity = self.smoothing * instant + (1 - self.smoothing) * self.velocity
        self.last_x = x
        self.last_t = t

    def release(self) -> str:
        if not self.dragging:
            return NONE
        offset, velocity = self.offset, self.velocity
        self.start_x = None
        if abs(offset) > self.threshold or abs(velocity) > self.velocity_threshold:
            direction = offset if offset else velocity
            return RIGHT if direction > 0 else LEFT
        return NONE


def decide_swipe(samples: Sequence[Tuple[float, float]], tracker: Optional[SwipeTracker] = None) -> Tuple[str, float, float]:
    """Replay (x, t_ms) pointer samples; returns (decision, offset, velocity)."""
    tracker = tracker or SwipeTracker()
    points: Iterable[Tuple[float, float]] = iter(samples)
    first = next(points, None)
    if first is None:
        return NONE, 0.0, 0.0
    tracker.press(*first)
    for x, t in points:
        tracker.move(x, t)
    offset, velocity = tracker.offset, tracker.velocity
    return tracker.release(), offset, velocity
