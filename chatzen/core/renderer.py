from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from .config import PointerConfig
from .motion import MotionState, make_rng, reset, step

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int, float]
GradientStops = Sequence[Tuple[float, Color]]

BACKGROUND: Color = (0, 0, 0, 1.0)
GLOW_STOPS: Tuple[Tuple[float, Color], ...] = (
    (0.0, (255, 0, 0, 1.0)),
    (0.5, (255, 0, 0, 0.3)),
    (1.0, (255, 0, 0, 0.0)),
)
CORE_COLOR: Color = (255, 204, 204, 1.0)
GLOW_SCALE = 2.0
CORE_SCALE = 0.3


class DrawingSurface(Protocol):
    """Pixel area the laser dot is painted on."""

    @property
    def width(self) -> float:
        ...

    @property
    def height(self) -> float:
        ...

    def clear(self, color: Color) -> None:
        ...

    def fill_radial_gradient_circle(self, x: float, y: float, radius: float, stops: GradientStops) -> None:
        ...

    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        ...


class FrameScheduler(Protocol):
    """Host primitive for "call me on the next frame" and its cancellation."""

    def request_frame(self, callback: Callable[[], None]) -> Any:
        ...

    def cancel_frame(self, handle: Any) -> None:
        ...


def interpolate_stops(stops: GradientStops, t: float) -> Color:
    """Colour of a gradient at offset `t` in [0, 1]."""
    t = max(0.0, min(1.0, t))
    previous_offset, previous_color = stops[0]
    if t <= previous_offset:
        return previous_color
    for offset, color in stops[1:]:
        if t <= offset:
            span = offset - previous_offset
            k = 0.0 if span <= 0 else (t - previous_offset) / span
            r = round(previous_color[0] + (color[0] - previous_color[0]) * k)
            g = round(previous_color[1] + (color[1] - previous_color[1]) * k)
            b = round(previous_color[2] + (color[2] - previous_color[2]) * k)
            a = previous_color[3] + (color[3] - previous_color[3]) * k
            return int(r), int(g), int(b), a
        previous_offset, previous_color = offset, color
    return previous_color


class PointerRenderer:
    """
    Drives the laser dot: owns the frame loop, advances the motion state and
    paints the glow + core glyph on whatever surface is attached.

    Exactly one frame callback is pending while running; `stop` cancels it, so
    nothing is drawn after the renderer has been stopped.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        config: Optional[PointerConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._config = config or PointerConfig()
        self._scheduler = scheduler
        self._rng = rng if rng is not None else make_rng(self._config.seed)
        self._tuning = self._config.tuning()
        self.state = MotionState(radius=self._config.radius)
        self._surface: Optional[DrawingSurface] = None
        self._speed = self._config.clamp_speed(self._config.default_speed)
        self._running = False
        self._pending: Any = None
        self._frame_listeners: List[Callable[[MotionState], None]] = []
        self.frames_drawn = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def surface(self) -> Optional[DrawingSurface]:
        return self._surface

    def set_speed(self, speed: float) -> None:
        self._speed = self._config.clamp_speed(speed)

    def add_frame_listener(self, listener: Callable[[MotionState], None]) -> None:
        self._frame_listeners.append(listener)

    def attach(self, surface: DrawingSurface) -> None:
        self._surface = surface
        self.resize(surface.width, surface.height)

    def detach(self) -> None:
        self._surface = None

    def resize(self, width: float, height: float) -> None:
        reset(self.state, width, height, self._rng, self._tuning)
        logger.debug("Laser area resized to %.0fx%.0f", width, height)

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule()
        logger.info("Laser started (speed %.1f)", self._speed)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._pending is not None:
            self._scheduler.cancel_frame(self._pending)
            self._pending = None
        logger.info("Laser stopped")

    def toggle(self) -> bool:
        if self._running:
            self.stop()
        else:
            self.start()
        return self._running

    def tick(self) -> None:
        self._pending = None
        if not self._running:
            return
        surface = self._surface
        if surface is not None:
            surface.clear(BACKGROUND)
            step(self.state, surface.width, surface.height, self._speed, self._rng, self._tuning)
            self._draw_glyph(surface)
            self.frames_drawn += 1
            for listener in self._frame_listeners:
                listener(self.state)
        self._schedule()

    def paint(self) -> None:
        """Redraw the current frame without advancing the simulation."""
        surface = self._surface
        if surface is None:
            return
        surface.clear(BACKGROUND)
        self._draw_glyph(surface)

    def _draw_glyph(self, surface: DrawingSurface) -> None:
        x, y, r = self.state.x, self.state.y, self.state.radius
        surface.fill_radial_gradient_circle(x, y, r * GLOW_SCALE, GLOW_STOPS)
        surface.fill_circle(x, y, r * CORE_SCALE, CORE_COLOR)

    def _schedule(self) -> None:
        if self._running and self._pending is None:
            self._pending = self._scheduler.request_frame(self.tick)
