from __future__ import annotations

import html
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from PIL import Image

from chatzen.core.chat import ChatSession
from chatzen.core.config import AppConfig
from chatzen.core.modes import AppMode, ShellState
from chatzen.core.pillow_surface import PillowSurface
from chatzen.core.renderer import PointerRenderer
from chatzen.core.sage_backend import WisdomClient
from chatzen.core.scheduling import ManualFrameScheduler
from chatzen.core.sounds import SoundBoard

logger = logging.getLogger(__name__)

CANVAS_SIZE = (720, 480)
AUDIO_ERROR_ELEMENT_ID = "chatzen-audio-error"
# Inline onerror handler: posts "<src>|<message>" into the hidden error box.
AUDIO_ERROR_JS = (
    "const box=document.querySelector('#" + AUDIO_ERROR_ELEMENT_ID + " textarea, #" + AUDIO_ERROR_ELEMENT_ID + " input');"
    "if(box){box.value=this.getAttribute('src')+'|media error '+(this.error?this.error.code:'');"
    "box.dispatchEvent(new Event('input',{bubbles:true}));}"
)


@dataclass
class BrowserAudioStream:
    src: str
    loop: bool
    volume: float
    on_error: Callable[[str], None]
    playing: bool = False

    def play(self) -> None:
        self.playing = True

    def pause(self) -> None:
        self.playing = False


class BrowserAudioHost:
    """
    Keeps the desired playback state; the page renders it as an <audio> element.

    Media errors come back from the page through `report_error`. A browser that
    merely refuses autoplay raises no media error, so that case stays unseen.
    """

    def __init__(self) -> None:
        self.current: Optional[BrowserAudioStream] = None

    def open(self, src: str, *, loop: bool, volume: float, on_error: Callable[[str], None]) -> BrowserAudioStream:
        self.current = BrowserAudioStream(src=src, loop=loop, volume=volume, on_error=on_error)
        return self.current

    def report_error(self, src: str, message: str) -> bool:
        stream = self.current
        if stream is None or not stream.playing or stream.src != src:
            logger.warning("Ignoring audio error for inactive source %s: %s", src, message)
            return False
        stream.on_error(message)
        return True


class GradioChatZenController:
    """UI-agnostic controller tailored for Gradio callbacks, one per browser session."""

    def __init__(
        self,
        client: WisdomClient,
        config: Optional[AppConfig] = None,
        canvas_size: tuple[int, int] = CANVAS_SIZE,
    ) -> None:
        self._config = config or AppConfig()
        self._client = client
        self._lock = threading.Lock()
        self.shell = ShellState()
        self._scheduler = ManualFrameScheduler()
        self._surface = PillowSurface(*canvas_size)
        self.pointer = PointerRenderer(self._scheduler, self._config.pointer)
        self.pointer.attach(self._surface)
        self._audio = BrowserAudioHost()
        self.board = SoundBoard(self._audio, config=self._config.sounds)
        self.session = ChatSession(client, self._config.sage)

    @property
    def config(self) -> AppConfig:
        return self._config

    # ----- shell -----
    def select_mode(self, mode: AppMode) -> bool:
        with self._lock:
            previous = self.shell.mode
            changed = self.shell.select(AppMode(mode))
            if changed:
                self._teardown(previous)
            return changed

    def _teardown(self, mode: AppMode) -> None:
        if mode == AppMode.LASER:
            self.pointer.stop()
            self.pointer.resize(self._surface.width, self._surface.height)
            self._surface.clear((0, 0, 0, 1.0))
        elif mode == AppMode.SOUNDS:
            self.board.stop()
        elif mode == AppMode.ZEN_SAGE:
            self.session = ChatSession(self._client, self._config.sage)

    # ----- laser -----
    def toggle_laser(self) -> bool:
        with self._lock:
            return self.pointer.toggle()

    def set_speed(self, speed: float) -> None:
        with self._lock:
            self.pointer.set_speed(speed)

    def frame(self) -> Image.Image:
        """Run the pending frame, if any, and return the canvas."""
        with self._lock:
            self._scheduler.run_pending()
            return self._surface.to_image()

    # ----- sounds -----
    def toggle_sound(self, track_id: str) -> Optional[str]:
        with self._lock:
            return self.board.toggle(track_id)

    def set_volume(self, volume: float) -> None:
        with self._lock:
            self.board.set_volume(volume)

    def audio_html(self) -> str:
        with self._lock:
            stream = self._audio.current
            if self.board.playing is None or stream is None or not stream.playing:
                return ""
            loop = " loop" if stream.loop else ""
            return (
                f'<audio class="chatzen-audio" src="{html.escape(stream.src)}" autoplay{loop} '
                f'onplay="this.volume={self.board.volume:.2f}" onerror="{AUDIO_ERROR_JS}"></audio>'
            )

    def report_audio_error(self, payload: str) -> bool:
        """Handle "<src>|<message>" posted by the page when an <audio> element fails."""
        src, _, message = (payload or "").partition("|")
        if not src:
            return False
        with self._lock:
            return self._audio.report_error(src, message or "media error")

    def sound_status(self) -> str:
        with self._lock:
            playing = self.board.playing
            volume = int(round(self.board.volume * 100))
            if playing is None:
                return f"Silence. Volume {volume}%"
            return f"{self.board.track(playing).title}. Volume {volume}%"

    # ----- sage -----
    def ask(self, text: str) -> Tuple[List[Dict[str, str]], str]:
        """Send `text` to the sage; returns the transcript and what the input box should keep."""
        with self._lock:
            session = self.session
            prompt = session.begin(text)
        if prompt is None:
            return self.chat_messages(), text
        try:
            reply = session.client.ask(prompt)
        except Exception as exc:
            with self._lock:
                session.fail(exc)
        else:
            with self._lock:
                session.complete(reply)
        return self.chat_messages(), ""

    def chat_messages(self) -> List[Dict[str, str]]:
        with self._lock:
            return [{"role": message.role.value, "content": message.text} for message in self.session.messages]

    def show_suggestions(self) -> bool:
        with self._lock:
            return self.session.show_suggestions
