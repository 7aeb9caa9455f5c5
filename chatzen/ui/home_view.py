from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from chatzen.core.modes import AppMode
from chatzen.ui.widgets import title_label


class HomePanel(QWidget):
    mode_requested = Signal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        logo = title_label("🐈", point_size=72)
        logo.setObjectName("homeLogo")
        layout.addWidget(logo)
        layout.addWidget(title_label("CHAT ZEN", point_size=36))
        tagline = QLabel("L'expérience ultime de relaxation pour votre félin.")
        tagline.setObjectName("homeTagline")
        tagline.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(tagline)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        laser = QPushButton("Jouer (Laser)")
        laser.setObjectName("homeLaser")
        laser.clicked.connect(lambda: self.mode_requested.emit(AppMode.LASER))
        buttons.addWidget(laser)
        sounds = QPushButton("Relaxer (Sons)")
        sounds.setObjectName("homeSounds")
        sounds.clicked.connect(lambda: self.mode_requested.emit(AppMode.SOUNDS))
        buttons.addWidget(sounds)
        buttons.addStretch(1)
        layout.addLayout(buttons)
