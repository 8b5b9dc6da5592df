from __future__ import annotations

from todo_journal.domain.entities import TaskEntity

HEADER = f"{'ID':<5} {'Task':<50} {'Created At':<20} {'Due Date':<10}"


def format_task(task: TaskEntity) -> str:
    created = task.created_at.astimezone().strftime("%Y-%m-%d %H:%M")
    due = task.due_date.strftime("%Y-%m-%d") if task.due_date else ""
    return f"{task.text:<50} {created:<20} {due:<10}".rstrip()


def format_table(tasks: list[TaskEntity], numbered: bool = True) -> str:
    lines = [HEADER]
    for position, task in enumerate(tasks, start=1):
        label = f"{position}:" if numbered else ""
        lines.append(f"{label:<5} {format_task(task)}")
    return "\n".join(lines)
