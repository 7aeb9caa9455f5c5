from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import ConfigError
from .motion import (
    DEFAULT_RADIUS,
    FAR_DISTANCE,
    FAR_SPEED_FACTOR,
    JITTER_AMPLITUDE,
    NEAR_SPEED_FACTOR,
    PROXIMITY_THRESHOLD,
    TARGET_PADDING,
    MotionTuning,
)

SAGE_SYSTEM_INSTRUCTION = (
    "Tu es un vieux chat sage, philosophe et très détendu. Tu parles doucement, "
    "avec des métaphores félines (siestes, rayons de soleil, chasse imaginaire). "
    "Ton but est de relaxer l'utilisateur (qui est un chat ou son propriétaire). "
    "Réponds en français, de manière poétique et brève."
)


@dataclass
class PointerConfig:
    radius: float = DEFAULT_RADIUS
    proximity_threshold: float = PROXIMITY_THRESHOLD
    target_padding: float = TARGET_PADDING
    far_distance: float = FAR_DISTANCE
    far_speed_factor: float = FAR_SPEED_FACTOR
    near_speed_factor: float = NEAR_SPEED_FACTOR
    jitter: float = JITTER_AMPLITUDE
    default_speed: float = 5.0
    min_speed: float = 1.0
    max_speed: float = 15.0
    frame_interval_ms: int = 16
    seed: Optional[int] = None

    def clamp_speed(self, speed: float) -> float:
        return max(self.min_speed, min(self.max_speed, float(speed)))

    def tuning(self) -> MotionTuning:
        return MotionTuning(
            proximity_threshold=self.proximity_threshold,
            target_padding=self.target_padding,
            far_distance=self.far_distance,
            far_speed_factor=self.far_speed_factor,
            near_speed_factor=self.near_speed_factor,
            jitter=self.jitter,
        )


@dataclass
class SoundConfig:
    default_volume: float = 0.5


@dataclass
class SageConfig:
    model: str = "gemini-2.5-flash"
    system_instruction: str = SAGE_SYSTEM_INSTRUCTION
    thinking_budget: int = 0
    greeting: str = (
        "Bienvenue dans mon dojo, petit félin. Que cherches-tu ? "
        "Une sieste parfaite, ou la paix de l'esprit ?"
    )
    fallback_reply: str = "Le cosmos est trouble... Je ne peux répondre pour l'instant."
    empty_reply: str = "Ronronnement... (Le sage médite)"
    api_key_env: List[str] = field(default_factory=lambda: ["GEMINI_API_KEY", "API_KEY"])


@dataclass
class AppConfig:
    pointer: PointerConfig = field(default_factory=PointerConfig)
    sounds: SoundConfig = field(default_factory=SoundConfig)
    sage: SageConfig = field(default_factory=SageConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def update_from_mapping(self, data: Dict[str, Any]) -> None:
        """Merge settings from a nested mapping into the config."""
        for section_name, section_values in data.items():
            section = getattr(self, section_name, None)
            if section is None:
                continue
            if not isinstance(section_values, dict):
                continue
            for key, value in section_values.items():
                if hasattr(section, key):
                    setattr(section, key, value)

    def iter_sections(self) -> Iterable[Tuple[str, Any]]:
        yield "pointer", self.pointer
        yield "sounds", self.sounds
        yield "sage", self.sage


def load_config(path: Path) -> AppConfig:
    """Read a JSON file of section overrides on top of the defaults."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"cannot read config: {exc}", path=str(path)) from exc
    if not isinstance(data, dict):
        raise ConfigError("config JSON must be an object at the top level", path=str(path))
    config = AppConfig()
    config.update_from_mapping(data)
    return config


DEFAULT_CONFIG = AppConfig()
