from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from PySide6.QtWidgets import QApplication

from chatzen.cli import add_common_arguments, build_config
from chatzen.core import ConfigError, build_wisdom_client
from chatzen.core.controller import wait_for_sage_workers
from chatzen.logging_config import setup_logging
from chatzen.ui import MainWindow

logger = logging.getLogger(__name__)


def create_application(argv: Sequence[str]) -> QApplication:
    app = QApplication(list(argv))
    app.setApplicationName("Chat Zen")
    return app


def parse_args(argv: Sequence[str]) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(description="Chat Zen desktop")
    add_common_arguments(parser)
    return parser.parse_known_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(argv if argv is not None else sys.argv)
    args, qt_args = parse_args(argv[1:])
    qt_argv = [argv[0], *qt_args]
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        config = build_config(args)
        client = build_wisdom_client(args.sage_backend, config.sage)
    except ConfigError as exc:
        logger.error("Cannot start: %s", exc)
        return 2

    app = create_application(qt_argv)
    window = MainWindow(config, client)
    window.show()
    status = app.exec()
    wait_for_sage_workers()
    return status


if __name__ == "__main__":
    sys.exit(main())
