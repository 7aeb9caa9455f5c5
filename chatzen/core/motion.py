# SPDX-License-Identifier: MIT
"""
Prey-like wandering point used by the laser pointer.

The simulation state is a plain mutable dataclass owned by the caller and
advanced by `step`, one call per rendered frame. There is no fixed timestep:
every call integrates exactly one velocity sample.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

# ===================== tuned constants =====================
PROXIMITY_THRESHOLD = 20.0   # closer than this -> pick a new target
TARGET_PADDING      = 50.0   # targets stay this far from every edge
FAR_DISTANCE        = 100.0  # beyond this the dot accelerates
FAR_SPEED_FACTOR    = 1.5
NEAR_SPEED_FACTOR   = 0.8
JITTER_AMPLITUDE    = 1.0    # hand tremor, uniform in [-a, +a] per axis
DEFAULT_RADIUS      = 15.0


@dataclass(frozen=True)
class MotionTuning:
    proximity_threshold: float = PROXIMITY_THRESHOLD
    target_padding: float = TARGET_PADDING
    far_distance: float = FAR_DISTANCE
    far_speed_factor: float = FAR_SPEED_FACTOR
    near_speed_factor: float = NEAR_SPEED_FACTOR
    jitter: float = JITTER_AMPLITUDE


DEFAULT_TUNING = MotionTuning()


@dataclass
class MotionState:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0
    radius: float = DEFAULT_RADIUS

    def distance_to_target(self) -> float:
        return math.hypot(self.target_x - self.x, self.target_y - self.y)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def clamp(value: float, low: float, high: float) -> float:
    if high < low:
        return (low + high) / 2.0
    return max(low, min(high, value))


def _padded_uniform(extent: float, padding: float, rng: np.random.Generator) -> float:
    low = padding
    high = extent - padding
    if high <= low:
        return extent / 2.0
    return float(rng.uniform(low, high))


def pick_target(
    state: MotionState,
    width: float,
    height: float,
    rng: np.random.Generator,
    tuning: MotionTuning = DEFAULT_TUNING,
) -> None:
    state.target_x = _padded_uniform(width, tuning.target_padding, rng)
    state.target_y = _padded_uniform(height, tuning.target_padding, rng)


def reset(
    state: MotionState,
    width: float,
    height: float,
    rng: np.random.Generator,
    tuning: MotionTuning = DEFAULT_TUNING,
) -> None:
    """Centre the dot in a freshly sized area and give it somewhere to go."""
    state.x = width / 2.0
    state.y = height / 2.0
    state.vx = 0.0
    state.vy = 0.0
    pick_target(state, width, height, rng, tuning)


def step(
    state: MotionState,
    width: float,
    height: float,
    speed: float,
    rng: np.random.Generator,
    tuning: MotionTuning = DEFAULT_TUNING,
) -> MotionState:
    """Advance the dot by one frame and return the same (mutated) state."""
    dx = state.target_x - state.x
    dy = state.target_y - state.y
    distance = math.hypot(dx, dy)

    # The heading below still uses the old delta, so a fresh target only
    # steers the dot from the next frame on.
    if distance < tuning.proximity_threshold:
        pick_target(state, width, height, rng, tuning)

    factor = tuning.far_speed_factor if distance > tuning.far_distance else tuning.near_speed_factor
    move_speed = speed * factor

    angle = math.atan2(dy, dx)
    jitter_x, jitter_y = rng.uniform(-tuning.jitter, tuning.jitter, size=2)
    state.vx = math.cos(angle) * move_speed + float(jitter_x)
    state.vy = math.sin(angle) * move_speed + float(jitter_y)

    state.x += state.vx
    state.y += state.vy

    state.x = clamp(state.x, state.radius, width - state.radius)
    state.y = clamp(state.y, state.radius, height - state.radius)
    return state
