# SPDX-License-Identifier: MIT
"""
Core services, domain models, and extension points for the Chat Zen apps.

Everything here except `controller` is free of Qt so it can back both the
desktop window and the web front-end.
"""

from .config import (
    AppConfig,
    PointerConfig,
    SageConfig,
    SoundConfig,
    load_config,
)  # noqa: F401
from .chat import ChatMessage, ChatSession, Role  # noqa: F401
from .errors import AudioPlaybackError, ChatZenError, ConfigError, SageError  # noqa: F401
from .modes import AppMode, DOCK_ITEMS, DockItem, ShellState  # noqa: F401
from .motion import MotionState  # noqa: F401
from .renderer import PointerRenderer  # noqa: F401
from .sage_backend import (
    GeminiWisdomClient,
    StubWisdomClient,
    WisdomClient,
    build_wisdom_client,
)  # noqa: F401
from .scheduling import ManualFrameScheduler  # noqa: F401
from .sounds import SOUND_CATALOG, SoundBoard, SoundTrack  # noqa: F401
