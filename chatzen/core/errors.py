from __future__ import annotations


class ChatZenError(Exception):
    """Base exception for this project."""


class ConfigError(ChatZenError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class AudioPlaybackError(ChatZenError):
    """Raised by an audio host when a stream cannot start."""


class SageError(ChatZenError):
    """Raised when the language model call fails."""
