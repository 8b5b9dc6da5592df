"""Commands accepted by the CLI and the code that runs them.

Each command is its own dataclass; ``dispatch`` matches on the union so a new
command type fails type checking until it is handled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union, assert_never

from todo_journal.domain.entities import TaskEntity
from todo_journal.domain.enums import SortOrder
from todo_journal.services.task_service import TaskService


@dataclass(frozen=True)
class AddCommand:
    text: str
    due_date: Optional[str] = None


@dataclass(frozen=True)
class DoneCommand:
    position: int


@dataclass(frozen=True)
class ListCommand:
    order: SortOrder = SortOrder.ASC


@dataclass(frozen=True)
class SearchCommand:
    keyword: str


Command = Union[AddCommand, DoneCommand, ListCommand, SearchCommand]


@dataclass(frozen=True)
class CommandResult:
    message: str | None = None
    tasks: list[TaskEntity] = field(default_factory=list)
    numbered: bool = True


def dispatch(service: TaskService, command: Command) -> CommandResult:
    match command:
        case AddCommand(text=text, due_date=due_date):
            task = service.add(text, due_date)
            return CommandResult(message=f"Added task: {task.text}")
        case DoneCommand(position=position):
            task = service.complete(position)
            return CommandResult(message=f"Completed task {position}: {task.text}")
        case ListCommand(order=order):
            tasks = service.list_tasks(order)
            if not tasks:
                return CommandResult(message="Task list is empty!")
            return CommandResult(tasks=tasks)
        case SearchCommand(keyword=keyword):
            tasks = service.search_tasks(keyword)
            if not tasks:
                return CommandResult(message=f"No tasks found with the keyword '{keyword}'")
            return CommandResult(tasks=tasks, numbered=False)
        case _:
            assert_never(command)
