from __future__ import annotations

import math

import pytest

from chatzen.core.motion import (
    MotionState,
    MotionTuning,
    clamp,
    make_rng,
    pick_target,
    reset,
    step,
)

STILL = MotionTuning(jitter=0.0)


def test_position_stays_inside_400x300_area() -> None:
    rng = make_rng(7)
    state = MotionState(radius=15.0)
    reset(state, 400.0, 300.0, rng)

    for _ in range(5000):
        step(state, 400.0, 300.0, 15.0, rng)
        assert 15.0 <= state.x <= 385.0
        assert 15.0 <= state.y <= 285.0


def test_clamp_is_hard_not_reflective() -> None:
    rng = make_rng(1)
    state = MotionState(x=20.0, y=150.0, target_x=-500.0, target_y=150.0, radius=15.0)

    step(state, 400.0, 300.0, 15.0, rng, STILL)

    assert state.x == 15.0
    assert state.vx < 0


def test_new_target_when_within_proximity() -> None:
    rng = make_rng(3)
    state = MotionState(x=200.0, y=150.0, target_x=205.0, target_y=150.0)

    step(state, 400.0, 300.0, 5.0, rng)

    assert (state.target_x, state.target_y) != (205.0, 150.0)
    assert 50.0 <= state.target_x <= 350.0
    assert 50.0 <= state.target_y <= 250.0


def test_target_kept_while_far() -> None:
    rng = make_rng(3)
    state = MotionState(x=100.0, y=100.0, target_x=300.0, target_y=200.0)

    step(state, 400.0, 300.0, 5.0, rng)

    assert (state.target_x, state.target_y) == (300.0, 200.0)


def test_accelerates_when_far_from_target() -> None:
    rng = make_rng(0)
    state = MotionState(x=50.0, y=150.0, target_x=350.0, target_y=150.0)

    step(state, 400.0, 300.0, 4.0, rng, STILL)

    assert state.vx == pytest.approx(6.0)
    assert state.vy == pytest.approx(0.0)
    assert state.x == pytest.approx(56.0)


def test_slows_down_near_target() -> None:
    rng = make_rng(0)
    state = MotionState(x=200.0, y=100.0, target_x=200.0, target_y=160.0)

    step(state, 400.0, 300.0, 5.0, rng, STILL)

    assert state.vx == pytest.approx(0.0, abs=1e-9)
    assert state.vy == pytest.approx(4.0)


def test_jitter_stays_within_one_unit() -> None:
    rng = make_rng(11)
    for _ in range(200):
        state = MotionState(x=50.0, y=150.0, target_x=350.0, target_y=150.0)
        step(state, 400.0, 300.0, 5.0, rng)
        assert 7.5 - 1.0 <= state.vx <= 7.5 + 1.0
        assert -1.0 <= state.vy <= 1.0


def test_reset_centres_and_picks_padded_target() -> None:
    rng = make_rng(5)
    state = MotionState(x=1.0, y=2.0, vx=3.0, vy=4.0)

    reset(state, 800.0, 600.0, rng)

    assert (state.x, state.y) == (400.0, 300.0)
    assert (state.vx, state.vy) == (0.0, 0.0)
    assert 50.0 <= state.target_x <= 750.0
    assert 50.0 <= state.target_y <= 550.0


def test_area_smaller_than_padding_targets_centre() -> None:
    rng = make_rng(5)
    state = MotionState()

    pick_target(state, 80.0, 600.0, rng)

    assert state.target_x == 40.0
    assert 50.0 <= state.target_y <= 550.0


def test_area_smaller_than_dot_pins_to_centre() -> None:
    rng = make_rng(2)
    state = MotionState(x=5.0, y=5.0, target_x=100.0, target_y=100.0, radius=15.0)

    step(state, 20.0, 20.0, 5.0, rng)

    assert (state.x, state.y) == (10.0, 10.0)


def test_clamp_helper() -> None:
    assert clamp(-3.0, 0.0, 10.0) == 0.0
    assert clamp(13.0, 0.0, 10.0) == 10.0
    assert clamp(4.0, 0.0, 10.0) == 4.0
    assert clamp(4.0, 10.0, 0.0) == 5.0


def test_distance_to_target() -> None:
    state = MotionState(x=0.0, y=0.0, target_x=3.0, target_y=4.0)
    assert math.isclose(state.distance_to_target(), 5.0)
