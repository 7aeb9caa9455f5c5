from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QMainWindow,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from chatzen.core.config import AppConfig
from chatzen.core.modes import DOCK_ITEMS, AppMode, ShellState
from chatzen.core.sage_backend import WisdomClient
from chatzen.ui.home_view import HomePanel
from chatzen.ui.pointer_view import LaserPointerPanel
from chatzen.ui.sage_view import ZenSagePanel
from chatzen.ui.sound_view import SoundBoardPanel

logger = logging.getLogger(__name__)

PanelFactory = Callable[[], QWidget]

STYLE_SHEET = """
QMainWindow, QWidget { background: #111; color: #e5e7eb; }
QFrame#dock { background: rgba(255, 255, 255, 26); border: 1px solid rgba(255, 255, 255, 51); border-radius: 16px; }
QToolButton#dockItem { font-size: 22px; min-width: 48px; min-height: 48px; border-radius: 12px; background: rgba(55, 65, 81, 128); }
QFrame#dockSeparator { background: rgba(255, 255, 255, 51); min-width: 1px; max-width: 1px; }
QFrame#laserControls, QFrame#laserHint, QFrame#volumeRow { background: rgba(0, 0, 0, 128); border-radius: 16px; }
QLabel#laserHintTitle { font-size: 20px; font-weight: bold; }
QToolButton#soundTile { border: 1px solid rgba(255, 255, 255, 26); border-radius: 16px; color: #9ca3af; }
QToolButton#soundTile:checked { border-color: #60a5fa; color: #60a5fa; background: rgba(59, 130, 246, 51); }
QFrame#sageWindow { background: #2a2a2a; border-radius: 12px; }
QLabel#sageOnline { color: #4ade80; font-size: 11px; }
QPushButton#suggestion { border-radius: 10px; padding: 4px 10px; color: #9ca3af; }
QPushButton#homeLaser { border: 1px solid #ef4444; padding: 10px 20px; }
QPushButton#homeSounds { border: 1px solid #3b82f6; padding: 10px 20px; }
"""


class DockBar(QFrame):
    """Bottom navigation: one button per mode, the active one highlighted."""

    mode_selected = Signal(object)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("dock")
        self._buttons: Dict[AppMode, QToolButton] = {}
        self._group = QButtonGroup(self)
        self._group.setExclusive(True)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 10, 16, 10)
        layout.setSpacing(16)
        for item in DOCK_ITEMS:
            button = QToolButton()
            button.setObjectName("dockItem")
            button.setText(item.icon)
            button.setToolTip(item.label)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, mode=item.mode: self.mode_selected.emit(mode))
            self._group.addButton(button)
            self._buttons[item.mode] = button
            layout.addWidget(button)
            if item.separator_after:
                separator = QFrame()
                separator.setObjectName("dockSeparator")
                separator.setFixedHeight(40)
                layout.addWidget(separator)

    def set_active(self, mode: AppMode) -> None:
        for item in DOCK_ITEMS:
            button = self._buttons[item.mode]
            active = item.mode == mode
            button.setChecked(active)
            button.setStyleSheet(f"background: {item.color};" if active else "")


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: AppConfig,
        wisdom_client: WisdomClient,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self.wisdom_client = wisdom_client
        self.shell = ShellState()
        self._panel: Optional[QWidget] = None
        self._factories: Dict[AppMode, PanelFactory] = {
            AppMode.HOME: self._make_home,
            AppMode.LASER: lambda: LaserPointerPanel(self.config.pointer),
            AppMode.SOUNDS: lambda: SoundBoardPanel(self.config.sounds),
            AppMode.ZEN_SAGE: lambda: ZenSagePanel(self.wisdom_client, self.config.sage),
        }
        self.setWindowTitle("Chat Zen")
        self.resize(1100, 760)
        self.setStyleSheet(STYLE_SHEET)

        self._build_menu()
        self._build_ui()
        self.shell.add_listener(self._show_mode)
        self._show_mode(self.shell.mode)

    @property
    def panel(self) -> Optional[QWidget]:
        return self._panel

    def _build_menu(self) -> None:
        file_menu = self.menuBar().addMenu("Fichier(&F)")
        exit_action = file_menu.addAction("Quitter(&Q)")
        exit_action.triggered.connect(self.close)

        apps_menu = self.menuBar().addMenu("Apps(&A)")
        for index, item in enumerate(DOCK_ITEMS, start=1):
            action = QAction(item.label, self)
            action.setShortcut(QKeySequence(f"Ctrl+{index}"))
            action.triggered.connect(lambda _checked=False, mode=item.mode: self.shell.select(mode))
            apps_menu.addAction(action)

    def _build_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 12)

        self._content = QWidget()
        self._content_layout = QVBoxLayout(self._content)
        self._content_layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._content, stretch=1)

        self.dock = DockBar()
        self.dock.mode_selected.connect(self.shell.select)
        layout.addWidget(self.dock, alignment=Qt.AlignmentFlag.AlignHCenter)
        self.setCentralWidget(central)

    def _make_home(self) -> QWidget:
        panel = HomePanel()
        panel.mode_requested.connect(self.shell.select)
        return panel

    def _teardown_panel(self) -> None:
        panel = self._panel
        if panel is None:
            return
        shutdown = getattr(panel, "shutdown", None)
        if shutdown is not None:
            shutdown()
        self._content_layout.removeWidget(panel)
        panel.deleteLater()
        self._panel = None

    def _show_mode(self, mode: AppMode) -> None:
        self._teardown_panel()
        self._panel = self._factories[mode]()
        self._content_layout.addWidget(self._panel)
        self.dock.set_active(mode)
        label = next(item.label for item in DOCK_ITEMS if item.mode == mode)
        self.statusBar().showMessage(label, 3000)

    def closeEvent(self, event) -> None:  # noqa: N802
        self._teardown_panel()
        super().closeEvent(event)
