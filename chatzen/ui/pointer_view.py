from __future__ import annotations

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QBrush, QColor, QImage, QPainter, QRadialGradient
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from chatzen.core.config import PointerConfig
from chatzen.core.controller import QtFrameScheduler
from chatzen.core.renderer import Color, GradientStops, PointerRenderer
from chatzen.ui.widgets import SignalBlocker


def to_qcolor(color: Color) -> QColor:
    r, g, b, a = color
    return QColor(int(r), int(g), int(b), max(0, min(255, int(round(a * 255)))))


class QImageSurface:
    """Drawing surface painting into an off-screen QImage."""

    def __init__(self, width: int = 1, height: int = 1) -> None:
        self._image = self._new_image(width, height)

    @staticmethod
    def _new_image(width: int, height: int) -> QImage:
        image = QImage(max(1, int(width)), max(1, int(height)), QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(QColor(0, 0, 0))
        return image

    @property
    def width(self) -> float:
        return float(self._image.width())

    @property
    def height(self) -> float:
        return float(self._image.height())

    @property
    def image(self) -> QImage:
        return self._image

    def resize(self, width: int, height: int) -> None:
        self._image = self._new_image(width, height)

    def clear(self, color: Color) -> None:
        self._image.fill(to_qcolor(color))

    def fill_radial_gradient_circle(self, x: float, y: float, radius: float, stops: GradientStops) -> None:
        center = QPointF(x, y)
        gradient = QRadialGradient(center, radius)
        for offset, color in stops:
            gradient.setColorAt(offset, to_qcolor(color))
        self._fill_ellipse(center, radius, QBrush(gradient))

    def fill_circle(self, x: float, y: float, radius: float, color: Color) -> None:
        self._fill_ellipse(QPointF(x, y), radius, QBrush(to_qcolor(color)))

    def _fill_ellipse(self, center: QPointF, radius: float, brush: QBrush) -> None:
        painter = QPainter(self._image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(brush)
        painter.drawEllipse(center, radius, radius)
        painter.end()


class PointerCanvas(QWidget):
    """Blits the renderer's surface and reports size changes to it."""

    def __init__(self, renderer: PointerRenderer, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._renderer = renderer
        self._surface = QImageSurface(self.width(), self.height())
        self.setCursor(Qt.CursorShape.BlankCursor)
        self.setMinimumSize(320, 240)
        self._renderer.attach(self._surface)
        self._renderer.add_frame_listener(lambda _state: self.update())

    @property
    def surface(self) -> QImageSurface:
        return self._surface

    def resizeEvent(self, event) -> None:  # noqa: N802
        size = event.size()
        self._surface.resize(size.width(), size.height())
        self._renderer.resize(self._surface.width, self._surface.height)
        super().resizeEvent(event)

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.drawImage(0, 0, self._surface.image)
        painter.end()


class LaserPointerPanel(QWidget):
    """The red dot, its play/pause control and speed slider."""

    def __init__(self, config: PointerConfig | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._config = config or PointerConfig()
        self._scheduler = QtFrameScheduler(self._config.frame_interval_ms, self)
        self.renderer = PointerRenderer(self._scheduler, self._config)
        self._build_ui()
        self._sync_controls()

    def _build_ui(self) -> None:
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.canvas = PointerCanvas(self.renderer)
        layout.addWidget(self.canvas, 0, 0)

        controls = QFrame()
        controls.setObjectName("laserControls")
        row = QHBoxLayout(controls)
        self.play_button = QPushButton()
        self.play_button.setCheckable(True)
        self.play_button.toggled.connect(self._on_play_toggled)
        row.addWidget(self.play_button)
        row.addWidget(QLabel("⚙"))
        self.speed_slider = QSlider(Qt.Orientation.Horizontal)
        self.speed_slider.setRange(int(self._config.min_speed), int(self._config.max_speed))
        self.speed_slider.setValue(int(self.renderer.speed))
        self.speed_slider.setFixedWidth(120)
        self.speed_slider.valueChanged.connect(self.renderer.set_speed)
        row.addWidget(self.speed_slider)
        layout.addWidget(controls, 0, 0, Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignRight)

        self.hint = QFrame()
        self.hint.setObjectName("laserHint")
        hint_layout = QVBoxLayout(self.hint)
        title = QLabel("Mode Chasse Laser")
        title.setObjectName("laserHintTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hint_layout.addWidget(title)
        subtitle = QLabel("Appuyez sur Play pour activer le point rouge.")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hint_layout.addWidget(subtitle)
        self.hint.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        layout.addWidget(self.hint, 0, 0, Qt.AlignmentFlag.AlignCenter)

    def _on_play_toggled(self, checked: bool) -> None:
        if checked:
            self.renderer.start()
        else:
            self.renderer.stop()
        self._sync_controls()

    def _sync_controls(self) -> None:
        running = self.renderer.running
        with SignalBlocker(self.play_button):
            self.play_button.setChecked(running)
        self.play_button.setText("⏸" if running else "▶")
        self.play_button.setProperty("running", running)
        self.hint.setVisible(not running)

    def shutdown(self) -> None:
        self.renderer.stop()
        self.renderer.detach()
