from __future__ import annotations

from todo_journal.config import load_settings
from todo_journal.infra.logging import setup_logging
from todo_journal.ui.cli import app


def main() -> None:
    setup_logging(load_settings())
    app()


if __name__ == "__main__":
    main()
