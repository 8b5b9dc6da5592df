from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_JOURNAL_NAME = ".todo-journal.json"


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    base = Path.cwd()

    env_path = base / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    env_specific = base / f".env.{env_name}"
    if env_specific.exists():
        load_dotenv(env_specific, override=True)


@dataclass(frozen=True)
class Settings:
    journal_file: Path
    log_level: str = "WARNING"
    log_dir: Path = Path.home() / ".todo-journal" / "logs"


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return Path(raw).expanduser()


def load_settings() -> Settings:
    load_env()
    home = Path.home()
    return Settings(
        journal_file=_env_path("TODO_JOURNAL_FILE", home / DEFAULT_JOURNAL_NAME),
        log_level=os.getenv("LOG_LEVEL", "WARNING").strip() or "WARNING",
        log_dir=_env_path("LOG_DIR", home / ".todo-journal" / "logs"),
    )
