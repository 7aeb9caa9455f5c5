from __future__ import annotations

import logging

import pytest

from chatzen.logging_config import resolve_level, setup_logging


def test_setup_logging_writes_to_file(tmp_path) -> None:
    log_file = tmp_path / "chatzen.log"
    setup_logging(level="DEBUG", log_file=str(log_file))

    logging.getLogger("chatzen.core.sounds").info("Playing 'rain'")
    for handler in logging.getLogger("chatzen").handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized at DEBUG" in text
    assert "chatzen.core.sounds - INFO - Playing 'rain'" in text


def test_setup_logging_does_not_stack_handlers() -> None:
    setup_logging()
    setup_logging()
    assert len(logging.getLogger("chatzen").handlers) == 1


def test_http_client_noise_is_quietened() -> None:
    setup_logging("INFO")
    assert logging.getLogger("httpx").level == logging.WARNING


def test_level_names_from_cli() -> None:
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    with pytest.raises(ValueError):
        resolve_level("loud")
