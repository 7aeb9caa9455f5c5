from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from .config import SoundConfig
from .errors import AudioPlaybackError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SoundTrack:
    id: str
    title: str
    icon: str
    src: str


SOUND_CATALOG: Tuple[SoundTrack, ...] = (
    SoundTrack(
        id="purr",
        title="Ronronnement",
        icon="cat",
        src="https://cdn.pixabay.com/download/audio/2022/10/30/audio_7c25e2f1b6.mp3?filename=cat-purring-122659.mp3",
    ),
    SoundTrack(
        id="rain",
        title="Pluie Douce",
        icon="rain",
        src="https://cdn.pixabay.com/download/audio/2022/02/18/audio_74d8984e4e.mp3?filename=light-rain-ambient-114354.mp3",
    ),
    SoundTrack(
        id="birds",
        title="Oiseaux",
        icon="bird",
        src="https://cdn.pixabay.com/download/audio/2021/08/09/audio_75329f54cc.mp3?filename=birds-in-forest-19937.mp3",
    ),
    SoundTrack(
        id="forest",
        title="Forêt Calme",
        icon="wind",
        src="https://cdn.pixabay.com/download/audio/2022/05/27/audio_1808fbf07a.mp3?filename=forest-wind-and-birds-6881.mp3",
    ),
)

ICON_GLYPHS: Dict[str, str] = {
    "cat": "🐈",
    "rain": "🌧",
    "bird": "🐦",
    "wind": "🍃",
}
DEFAULT_GLYPH = "🎵"


def icon_glyph(icon: str) -> str:
    return ICON_GLYPHS.get(icon, DEFAULT_GLYPH)


class AudioStream(Protocol):
    volume: float

    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...


class AudioHost(Protocol):
    """Platform audio: opens looping streams that may fail now or later."""

    def open(
        self,
        src: str,
        *,
        loop: bool,
        volume: float,
        on_error: Callable[[str], None],
    ) -> AudioStream:
        ...


def clamp_volume(volume: float) -> float:
    return max(0.0, min(1.0, float(volume)))


class SoundBoard:
    """
    One looping ambient track at a time plus a master volume.

    Selecting the playing track stops it; selecting another one replaces it.
    A stream that fails to start is logged and never recorded as playing.
    """

    def __init__(
        self,
        host: AudioHost,
        catalog: Sequence[SoundTrack] = SOUND_CATALOG,
        config: Optional[SoundConfig] = None,
    ) -> None:
        self._host = host
        self._tracks: Dict[str, SoundTrack] = {track.id: track for track in catalog}
        self._order: List[str] = [track.id for track in catalog]
        self._volume = clamp_volume((config or SoundConfig()).default_volume)
        self._playing: Optional[str] = None
        self._stream: Optional[AudioStream] = None
        self._generation = 0
        self._listeners: List[Callable[[], None]] = []

    @property
    def tracks(self) -> Tuple[SoundTrack, ...]:
        return tuple(self._tracks[track_id] for track_id in self._order)

    @property
    def playing(self) -> Optional[str]:
        return self._playing

    @property
    def volume(self) -> float:
        return self._volume

    def track(self, track_id: str) -> SoundTrack:
        return self._tracks[track_id]

    def is_playing(self, track_id: str) -> bool:
        return self._playing == track_id

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def toggle(self, track_id: str) -> Optional[str]:
        track = self._tracks[track_id]
        if self._playing == track.id:
            self._release_stream()
            self._playing = None
            logger.info("Stopped '%s'", track.id)
            self._notify()
            return None

        self._release_stream()
        self._playing = None
        self._generation += 1
        generation = self._generation
        stream = self._host.open(
            track.src,
            loop=True,
            volume=self._volume,
            on_error=lambda message: self._on_stream_error(generation, track.id, message),
        )
        self._stream = stream
        self._playing = track.id
        try:
            stream.play()
        except AudioPlaybackError as exc:
            logger.error("Audio play failed for '%s': %s", track.id, exc)
            self._stream = None
            self._playing = None
        else:
            logger.info("Playing '%s' at volume %.2f", track.id, self._volume)
        self._notify()
        return self._playing

    def set_volume(self, volume: float) -> None:
        self._volume = clamp_volume(volume)
        if self._stream is not None:
            self._stream.volume = self._volume
        self._notify()

    def mute(self) -> None:
        self.set_volume(0.0)

    def stop(self) -> None:
        if self._playing is None and self._stream is None:
            return
        self._release_stream()
        self._playing = None
        self._notify()

    def _release_stream(self) -> None:
        if self._stream is not None:
            self._stream.pause()
            self._stream = None

    def _on_stream_error(self, generation: int, track_id: str, message: str) -> None:
        if generation != self._generation or self._playing != track_id:
            logger.warning("Ignoring late audio error for '%s': %s", track_id, message)
            return
        logger.error("Audio play failed for '%s': %s", track_id, message)
        self._release_stream()
        self._playing = None
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()
