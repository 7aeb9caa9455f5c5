from __future__ import annotations

import logging
import os
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from google import genai
from google.genai import types

from .config import SageConfig
from .errors import ConfigError, SageError
from .motion import make_rng

logger = logging.getLogger(__name__)


@runtime_checkable
class WisdomClient(Protocol):
    """Interface the chat session uses to obtain a reply for a prompt."""

    def ask(self, prompt: str) -> str:
        ...


STUB_PROVERBS = (
    "Le rayon de soleil ne se presse jamais, et pourtant il trouve toujours ta couverture.",
    "Qui dort sur le radiateur n'a pas besoin de réponses.",
    "Chasse l'ombre du point rouge, puis oublie-la. Voilà la sagesse.",
    "Une sieste de plus n'a jamais fâché personne, surtout pas toi.",
    "L'oiseau derrière la vitre t'apprend la patience, pas la faim.",
)


class StubWisdomClient:
    """
    Offline stand-in for the hosted model. Picks a canned proverb so the chat
    panel can be exercised without network access or an API key.
    """

    def __init__(self, proverbs: Sequence[str] = STUB_PROVERBS, seed: Optional[int] = None) -> None:
        self._proverbs = tuple(proverbs)
        self._rng = make_rng(seed)

    def ask(self, prompt: str) -> str:
        return self._proverbs[int(self._rng.integers(len(self._proverbs)))]


def resolve_api_key(config: SageConfig) -> str:
    for name in config.api_key_env:
        value = os.environ.get(name)
        if value:
            return value
    raise ConfigError(f"no API key found in environment ({', '.join(config.api_key_env)})")


class GeminiWisdomClient:
    """
    Asks a Gemini model through the google-genai SDK, with the sage persona as
    system instruction and thinking disabled for low latency.
    """

    def __init__(self, config: Optional[SageConfig] = None, *, client: Any = None) -> None:
        self._config = config or SageConfig()
        if client is None:
            client = genai.Client(api_key=resolve_api_key(self._config))
        self._client = client

    def _generation_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self._config.system_instruction,
            thinking_config=types.ThinkingConfig(thinking_budget=self._config.thinking_budget),
        )

    def ask(self, prompt: str) -> str:
        try:
            response = self._client.models.generate_content(
                model=self._config.model,
                contents=prompt,
                config=self._generation_config(),
            )
        except Exception as exc:
            logger.exception("Error fetching cat wisdom")
            raise SageError(str(exc)) from exc
        text = getattr(response, "text", None)
        return text or self._config.empty_reply


def build_wisdom_client(backend: str, config: Optional[SageConfig] = None) -> WisdomClient:
    if backend == "stub":
        return StubWisdomClient()
    if backend == "gemini":
        return GeminiWisdomClient(config)
    raise ConfigError(f"unknown sage backend: {backend}")
