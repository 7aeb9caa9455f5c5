from __future__ import annotations

import argparse
from pathlib import Path

from chatzen.core.config import AppConfig, load_config


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by the desktop and the web front-ends."""
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a JSON file overriding pointer/sounds/sage settings",
    )
    parser.add_argument(
        "--sage-backend",
        choices=("gemini", "stub"),
        default="gemini",
        help="Language model backend for the sage (default: gemini)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        help="Initial laser speed (1-15)",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file",
    )


def build_config(args: argparse.Namespace) -> AppConfig:
    config = load_config(Path(args.config).expanduser()) if args.config else AppConfig()
    if args.speed is not None:
        config.pointer.default_speed = config.pointer.clamp_speed(args.speed)
    return config
