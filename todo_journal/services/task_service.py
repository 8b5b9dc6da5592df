from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Optional, Protocol

from todo_journal.domain.entities import TaskEntity
from todo_journal.domain.enums import SortOrder
from todo_journal.domain.errors import InvalidInput, PositionOutOfRange
from todo_journal.infra.repository import DATE_FORMAT, DATE_PATTERN

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    def load(self) -> list[TaskEntity]: ...

    def save(self, tasks: list[TaskEntity]) -> None: ...


def parse_due_date(raw: str | None) -> Optional[date]:
    if raw is None:
        return None
    value = raw.strip()
    if not DATE_PATTERN.match(value):
        raise InvalidInput(f"Invalid due date {raw!r}. Use YYYY-MM-DD format.")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidInput(f"Invalid due date {raw!r}: {exc}") from exc


def validate_text(text: str) -> str:
    if not text or not text.strip():
        raise InvalidInput("Task text must not be empty.")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidInput("Task text contains characters that cannot be stored as UTF-8.") from exc
    return text


def add_task(
    tasks: list[TaskEntity],
    text: str,
    due_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> list[TaskEntity]:
    task = TaskEntity(
        text=validate_text(text),
        created_at=now or datetime.now(timezone.utc),
        due_date=due_date,
    )
    return [*tasks, task]


def _ordered_indices(tasks: list[TaskEntity], order: SortOrder) -> list[int]:
    # sorted() is stable, so equal timestamps keep insertion order either way.
    return sorted(
        range(len(tasks)),
        key=lambda index: tasks[index].created_at,
        reverse=order == SortOrder.DESC,
    )


def remove_task(
    tasks: list[TaskEntity],
    position: int,
    order: SortOrder = SortOrder.ASC,
) -> list[TaskEntity]:
    """Drop the task shown at 1-based ``position`` when listed in ``order``.

    Positions are not stable identifiers: they are only meaningful against the
    listing the user last saw, and every later position shifts down by one.
    """
    target = _resolve_position(tasks, position, order)
    return [task for index, task in enumerate(tasks) if index != target]


def _resolve_position(tasks: list[TaskEntity], position: int, order: SortOrder) -> int:
    if position < 1 or position > len(tasks):
        raise PositionOutOfRange(position, len(tasks))
    return _ordered_indices(tasks, order)[position - 1]


def list_tasks(tasks: list[TaskEntity], order: SortOrder = SortOrder.ASC) -> list[TaskEntity]:
    return [tasks[index] for index in _ordered_indices(tasks, order)]


def search_tasks(tasks: list[TaskEntity], keyword: str) -> list[TaskEntity]:
    needle = keyword.casefold()
    return [task for task in tasks if needle in task.text.casefold()]


class TaskService:
    def __init__(self, repo: TaskRepository) -> None:
        self._repo = repo

    def add(self, text: str, due_date: str | None = None) -> TaskEntity:
        validate_text(text)
        parsed_due = parse_due_date(due_date)
        tasks = add_task(self._repo.load(), text, parsed_due)
        self._repo.save(tasks)
        logger.info("Added task %r (due %s)", text, parsed_due)
        return tasks[-1]

    def complete(self, position: int, order: SortOrder = SortOrder.ASC) -> TaskEntity:
        tasks = self._repo.load()
        removed = tasks[_resolve_position(tasks, position, order)]
        self._repo.save(remove_task(tasks, position, order))
        logger.info("Completed task at position %d: %r", position, removed.text)
        return removed

    def list_tasks(self, order: SortOrder = SortOrder.ASC) -> list[TaskEntity]:
        return list_tasks(self._repo.load(), order)

    def search_tasks(self, keyword: str) -> list[TaskEntity]:
        return search_tasks(self._repo.load(), keyword)
