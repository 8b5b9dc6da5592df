from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from todo_journal.config import Settings

DEFAULT_CONSOLE_LEVEL = logging.WARNING


def setup_logging(settings: Settings) -> None:
    """Log to a rotating file plus stderr.

    A bad log directory or level name degrades to console-only logging at the
    default level so commands still run.
    """
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    problems: list[str] = []
    handlers: list[logging.Handler] = []

    log_file = settings.log_dir / "todo_journal.log"
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    except OSError as exc:
        problems.append(f"cannot write log file {log_file}: {exc}")
    else:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    try:
        console_handler.setLevel(settings.log_level.upper())
    except ValueError:
        problems.append(f"unknown log level {settings.log_level!r}")
        console_handler.setLevel(DEFAULT_CONSOLE_LEVEL)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    logging.basicConfig(
        level=logging.DEBUG,
        handlers=handlers,
    )
    for problem in problems:
        logging.getLogger(__name__).warning("Logging degraded: %s", problem)
