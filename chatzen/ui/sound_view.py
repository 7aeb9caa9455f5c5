from __future__ import annotations

from typing import Callable, Dict, Optional

from PySide6.QtCore import QObject, QUrl, Qt
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QSlider,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from chatzen.core.config import SoundConfig
from chatzen.core.errors import AudioPlaybackError
from chatzen.core.sounds import SoundBoard, icon_glyph
from chatzen.ui.widgets import SignalBlocker, title_label


class QtAudioStream:
    """A looping QMediaPlayer with its own audio output."""

    def __init__(
        self,
        src: str,
        *,
        loop: bool,
        volume: float,
        on_error: Callable[[str], None],
        parent: Optional[QObject] = None,
    ) -> None:
        self._output = QAudioOutput(parent)
        self._output.setVolume(volume)
        self._player = QMediaPlayer(parent)
        self._player.setAudioOutput(self._output)
        self._player.setSource(QUrl(src))
        if loop:
            self._player.setLoops(QMediaPlayer.Loops.Infinite)
        self._player.errorOccurred.connect(
            lambda error, message: on_error(message or str(error))
        )

    @property
    def volume(self) -> float:
        return float(self._output.volume())

    @volume.setter
    def volume(self, value: float) -> None:
        self._output.setVolume(value)

    def play(self) -> None:
        if not self._player.isAvailable():
            raise AudioPlaybackError("no multimedia backend available")
        self._player.play()

    def pause(self) -> None:
        self._player.pause()
        self._player.deleteLater()
        self._output.deleteLater()


class QtAudioHost:
    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent

    def open(self, src: str, *, loop: bool, volume: float, on_error: Callable[[str], None]) -> QtAudioStream:
        return QtAudioStream(src, loop=loop, volume=volume, on_error=on_error, parent=self._parent)


class SoundBoardPanel(QWidget):
    """Track tiles plus the master volume row."""

    def __init__(self, config: SoundConfig | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.board = SoundBoard(QtAudioHost(self), config=config)
        self._buttons: Dict[str, QToolButton] = {}
        self._build_ui()
        self.board.add_listener(self._refresh)
        self._refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title_label("Ambiance Sonore"))

        grid = QGridLayout()
        grid.setSpacing(24)
        for index, track in enumerate(self.board.tracks):
            button = QToolButton()
            button.setObjectName("soundTile")
            button.setCheckable(True)
            button.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextOnly)
            button.setFixedSize(128, 128)
            button.clicked.connect(lambda _checked=False, track_id=track.id: self.board.toggle(track_id))
            self._buttons[track.id] = button
            grid.addWidget(button, index // 4, index % 4)
        layout.addLayout(grid)

        volume_row = QFrame()
        volume_row.setObjectName("volumeRow")
        row = QHBoxLayout(volume_row)
        self.mute_button = QToolButton()
        self.mute_button.clicked.connect(self.board.mute)
        row.addWidget(self.mute_button)
        self.volume_slider = QSlider(Qt.Orientation.Horizontal)
        self.volume_slider.setRange(0, 100)
        self.volume_slider.valueChanged.connect(lambda value: self.board.set_volume(value / 100.0))
        row.addWidget(self.volume_slider, stretch=1)
        self.volume_label = QLabel()
        self.volume_label.setMinimumWidth(40)
        self.volume_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        row.addWidget(self.volume_label)
        layout.addWidget(volume_row)

    def _refresh(self) -> None:
        for track in self.board.tracks:
            button = self._buttons[track.id]
            playing = self.board.is_playing(track.id)
            with SignalBlocker(button):
                button.setChecked(playing)
            suffix = "\n• • •" if playing else ""
            button.setText(f"{icon_glyph(track.icon)}\n{track.title}{suffix}")
        percent = int(round(self.board.volume * 100))
        with SignalBlocker(self.volume_slider):
            self.volume_slider.setValue(percent)
        self.volume_label.setText(f"{percent}%")
        self.mute_button.setText("🔇" if self.board.volume == 0 else "🔊")

    def shutdown(self) -> None:
        self.board.stop()
