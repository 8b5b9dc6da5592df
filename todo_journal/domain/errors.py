from __future__ import annotations

from pathlib import Path


class JournalError(Exception):
    """Base class for every failure reported to the user."""

    exit_code = 1


class InvalidInput(JournalError):
    exit_code = 2


class CorruptJournal(JournalError):
    exit_code = 3

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Journal file {path} is corrupt: {reason}")
        self.path = path


class PositionOutOfRange(JournalError):
    exit_code = 4

    def __init__(self, position: int, length: int) -> None:
        if length:
            detail = f"choose a position between 1 and {length}"
        else:
            detail = "the journal is empty"
        super().__init__(f"No task at position {position}: {detail}")
        self.position = position
        self.length = length


class IOFailure(JournalError):
    exit_code = 5

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot access journal file {path}: {reason}")
        self.path = path
