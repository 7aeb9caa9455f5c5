from __future__ import annotations

import argparse
import json

import pytest

from chatzen.cli import add_common_arguments, build_config
from chatzen.core.config import AppConfig, load_config
from chatzen.core.errors import ConfigError


def test_defaults_match_tuned_constants() -> None:
    config = AppConfig()
    assert config.pointer.radius == 15.0
    assert config.pointer.proximity_threshold == 20.0
    assert config.pointer.target_padding == 50.0
    assert (config.pointer.min_speed, config.pointer.default_speed, config.pointer.max_speed) == (1.0, 5.0, 15.0)
    assert config.sounds.default_volume == 0.5
    assert config.sage.api_key_env == ["GEMINI_API_KEY", "API_KEY"]


def test_load_config_overrides_sections(tmp_path) -> None:
    path = tmp_path / "chatzen.json"
    path.write_text(
        json.dumps({"pointer": {"default_speed": 9, "seed": 4}, "sounds": {"default_volume": 0.2}}),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.pointer.default_speed == 9
    assert config.pointer.seed == 4
    assert config.sounds.default_volume == 0.2
    assert config.sage.model == "gemini-2.5-flash"


def test_unknown_keys_are_ignored() -> None:
    config = AppConfig()
    config.update_from_mapping({"pointer": {"colour": "blue"}, "bogus": {"x": 1}, "sage": "not a dict"})
    assert not hasattr(config.pointer, "colour")
    assert config.to_dict() == AppConfig().to_dict()


def test_missing_file_raises_config_error(tmp_path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path / "absent.json")
    assert excinfo.value.path.endswith("absent.json")


def test_invalid_json_raises_config_error(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{pointer:", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_top_level_must_be_object(tmp_path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError, match="object"):
        load_config(path)


def test_cli_speed_is_clamped() -> None:
    parser = argparse.ArgumentParser()
    add_common_arguments(parser)
    args = parser.parse_args(["--speed", "40", "--sage-backend", "stub"])

    config = build_config(args)

    assert config.pointer.default_speed == 15.0
    assert args.sage_backend == "stub"


def test_iter_sections() -> None:
    assert [name for name, _ in AppConfig().iter_sections()] == ["pointer", "sounds", "sage"]
