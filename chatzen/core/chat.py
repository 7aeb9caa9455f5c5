from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .config import SageConfig
from .sage_backend import WisdomClient

logger = logging.getLogger(__name__)

SUGGESTIONS: Tuple[str, ...] = (
    "Comment mieux dormir ?",
    "Pourquoi les humains sont bizarres ?",
    "Le secret du bonheur ?",
    "J'ai vu un oiseau...",
)
SUGGESTION_LIMIT = 3


class Role(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    text: str


class ChatSession:
    """
    Append-only transcript with the sage.

    `submit` runs the whole exchange synchronously. Front-ends that must not
    block split it into `begin` (on the UI side), the collaborator call (on a
    worker) and `complete`/`fail` (back on the UI side).
    """

    def __init__(self, client: WisdomClient, config: Optional[SageConfig] = None, *, greet: bool = True) -> None:
        self._client = client
        self._config = config or SageConfig()
        self._messages: List[ChatMessage] = []
        self._loading = False
        self.input_text = ""
        self._listeners: List[Callable[[], None]] = []
        if greet and self._config.greeting:
            self._messages.append(ChatMessage(Role.ASSISTANT, self._config.greeting))

    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def client(self) -> WisdomClient:
        return self._client

    @property
    def can_submit(self) -> bool:
        return bool(self.input_text.strip()) and not self._loading

    @property
    def show_suggestions(self) -> bool:
        return len(self._messages) < SUGGESTION_LIMIT

    @property
    def suggestions(self) -> Tuple[str, ...]:
        return SUGGESTIONS

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def choose_suggestion(self, suggestion: str) -> None:
        self.input_text = suggestion
        self._notify()

    def begin(self, text: Optional[str] = None) -> Optional[str]:
        """Record the user's message and return the prompt, or None if there is nothing to send."""
        prompt = self.input_text if text is None else text
        if not prompt.strip() or self._loading:
            return None
        self._messages.append(ChatMessage(Role.USER, prompt))
        self.input_text = ""
        self._loading = True
        self._notify()
        return prompt

    def complete(self, reply: str) -> None:
        self._messages.append(ChatMessage(Role.ASSISTANT, reply))
        self._loading = False
        self._notify()

    def fail(self, error: BaseException) -> None:
        logger.error("Sage did not answer: %s", error)
        self._messages.append(ChatMessage(Role.ASSISTANT, self._config.fallback_reply))
        self._loading = False
        self._notify()

    def submit(self, text: Optional[str] = None) -> Optional[ChatMessage]:
        prompt = self.begin(text)
        if prompt is None:
            return None
        try:
            reply = self._client.ask(prompt)
        except Exception as exc:
            self.fail(exc)
        else:
            self.complete(reply)
        return self._messages[-1]

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()
