from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import pytest

from chatzen.core.errors import AudioPlaybackError


class RecordingSurface:
    """Drawing surface that remembers every primitive it was asked to draw."""

    def __init__(self, width: float = 400.0, height: float = 300.0) -> None:
        self._width = width
        self._height = height
        self.calls: List[Tuple] = []

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    def clear(self, color) -> None:
        self.calls.append(("clear", color))

    def fill_radial_gradient_circle(self, x, y, radius, stops) -> None:
        self.calls.append(("gradient", x, y, radius, tuple(stops)))

    def fill_circle(self, x, y, radius, color) -> None:
        self.calls.append(("circle", x, y, radius, color))


@dataclass
class FakeStream:
    src: str
    loop: bool
    volume: float
    on_error: Callable[[str], None]
    fail_on_play: bool = False
    playing: bool = False
    paused: int = 0

    def play(self) -> None:
        if self.fail_on_play:
            raise AudioPlaybackError("denied by host")
        self.playing = True

    def pause(self) -> None:
        self.playing = False
        self.paused += 1


@dataclass
class FakeAudioHost:
    failing_sources: List[str] = field(default_factory=list)
    streams: List[FakeStream] = field(default_factory=list)

    def open(self, src, *, loop, volume, on_error) -> FakeStream:
        stream = FakeStream(src, loop, volume, on_error, fail_on_play=src in self.failing_sources)
        self.streams.append(stream)
        return stream

    @property
    def last(self) -> Optional[FakeStream]:
        return self.streams[-1] if self.streams else None


class ScriptedClient:
    """Wisdom client answering from a fixed reply, or raising a fixed error."""

    def __init__(self, reply: str = "Dors, petit chat.", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def audio_host() -> FakeAudioHost:
    return FakeAudioHost()


@pytest.fixture
def client() -> ScriptedClient:
    return ScriptedClient()
