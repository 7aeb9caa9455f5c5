from __future__ import annotations

import pytest

from chatzen.core.config import PointerConfig
from chatzen.core.motion import make_rng
from chatzen.core.renderer import (
    BACKGROUND,
    CORE_COLOR,
    GLOW_STOPS,
    PointerRenderer,
    interpolate_stops,
)
from chatzen.core.scheduling import ManualFrameScheduler


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def renderer(scheduler, surface) -> PointerRenderer:
    pointer = PointerRenderer(scheduler, PointerConfig(), rng=make_rng(42))
    pointer.attach(surface)
    return pointer


def test_attach_centres_the_dot(renderer) -> None:
    assert (renderer.state.x, renderer.state.y) == (200.0, 150.0)
    assert not renderer.running


def test_start_keeps_exactly_one_frame_pending(renderer, scheduler) -> None:
    renderer.start()
    renderer.start()
    assert scheduler.pending_count == 1

    scheduler.run_pending()
    assert renderer.frames_drawn == 1
    assert scheduler.pending_count == 1


def test_frame_draws_background_glow_then_core(renderer, scheduler, surface) -> None:
    renderer.start()
    scheduler.run_pending()

    kinds = [call[0] for call in surface.calls]
    assert kinds == ["clear", "gradient", "circle"]
    assert surface.calls[0][1] == BACKGROUND

    _, gx, gy, glow_radius, stops = surface.calls[1]
    _, cx, cy, core_radius, color = surface.calls[2]
    assert (gx, gy) == (cx, cy) == (renderer.state.x, renderer.state.y)
    assert glow_radius == pytest.approx(30.0)
    assert core_radius == pytest.approx(4.5)
    assert stops == GLOW_STOPS
    assert color == CORE_COLOR


def test_nothing_drawn_after_stop(renderer, scheduler, surface) -> None:
    renderer.start()
    scheduler.run_pending()
    drawn = len(surface.calls)

    renderer.stop()
    assert scheduler.pending_count == 0
    assert scheduler.run_pending() == 0
    assert len(surface.calls) == drawn
    assert renderer.frames_drawn == 1


def test_stale_tick_after_stop_is_ignored(renderer, scheduler, surface) -> None:
    renderer.start()
    renderer.stop()
    renderer.tick()
    assert surface.calls == []
    assert scheduler.pending_count == 0


def test_missing_surface_skips_frame_but_keeps_running(scheduler) -> None:
    pointer = PointerRenderer(scheduler, rng=make_rng(0))
    pointer.start()

    scheduler.run_pending()

    assert pointer.frames_drawn == 0
    assert pointer.running
    assert scheduler.pending_count == 1


def test_toggle_reports_running_state(renderer) -> None:
    assert renderer.toggle() is True
    assert renderer.toggle() is False


def test_frame_listener_receives_state(renderer, scheduler) -> None:
    seen = []
    renderer.add_frame_listener(seen.append)
    renderer.start()
    scheduler.run_pending()
    scheduler.run_pending()
    assert seen == [renderer.state, renderer.state]


def test_dot_stays_inside_surface(renderer, scheduler) -> None:
    renderer.set_speed(15)
    renderer.start()
    for _ in range(500):
        scheduler.run_pending()
        assert 15.0 <= renderer.state.x <= 385.0
        assert 15.0 <= renderer.state.y <= 285.0


def test_resize_recentres(renderer) -> None:
    renderer.state.x = 12.0
    renderer.resize(1000.0, 500.0)
    assert (renderer.state.x, renderer.state.y) == (500.0, 250.0)


def test_speed_is_clamped_to_slider_range(renderer) -> None:
    assert renderer.speed == 5
    renderer.set_speed(99)
    assert renderer.speed == 15
    renderer.set_speed(-4)
    assert renderer.speed == 1


def test_paint_redraws_without_moving(renderer, surface) -> None:
    before = (renderer.state.x, renderer.state.y)
    renderer.paint()
    assert (renderer.state.x, renderer.state.y) == before
    assert [call[0] for call in surface.calls] == ["clear", "gradient", "circle"]


def test_interpolate_stops() -> None:
    assert interpolate_stops(GLOW_STOPS, 0.0) == (255, 0, 0, 1.0)
    assert interpolate_stops(GLOW_STOPS, 1.0) == (255, 0, 0, 0.0)
    r, g, b, a = interpolate_stops(GLOW_STOPS, 0.25)
    assert (r, g, b) == (255, 0, 0)
    assert a == pytest.approx(0.65)
    assert interpolate_stops(GLOW_STOPS, 2.0) == (255, 0, 0, 0.0)
