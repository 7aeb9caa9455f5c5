from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Tuple

logger = logging.getLogger(__name__)


class AppMode(str, enum.Enum):
    HOME = "HOME"
    LASER = "LASER"
    SOUNDS = "SOUNDS"
    ZEN_SAGE = "ZEN_SAGE"


@dataclass(frozen=True)
class DockItem:
    mode: AppMode
    label: str
    icon: str
    color: str
    separator_after: bool = False


DOCK_ITEMS: Tuple[DockItem, ...] = (
    DockItem(AppMode.HOME, "Accueil", "🐈", "#6b7280", separator_after=True),
    DockItem(AppMode.LASER, "Laser", "⌖", "#ef4444"),
    DockItem(AppMode.SOUNDS, "Sons", "♫", "#3b82f6"),
    DockItem(AppMode.ZEN_SAGE, "Sage", "💬", "#f59e0b"),
)


class ShellState:
    """The single active mode of the application shell."""

    def __init__(self, mode: AppMode = AppMode.HOME) -> None:
        self._mode = mode
        self._listeners: List[Callable[[AppMode], None]] = []

    @property
    def mode(self) -> AppMode:
        return self._mode

    def add_listener(self, listener: Callable[[AppMode], None]) -> None:
        self._listeners.append(listener)

    def select(self, mode: AppMode) -> bool:
        mode = AppMode(mode)
        if mode == self._mode:
            return False
        logger.info("Switching mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode
        for listener in self._listeners:
            listener(mode)
        return True

    def dock_entries(self) -> Iterator[Tuple[DockItem, bool]]:
        for item in DOCK_ITEMS:
            yield item, item.mode == self._mode
