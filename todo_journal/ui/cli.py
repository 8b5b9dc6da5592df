"""Command-line surface for the journal."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from todo_journal.config import load_settings
from todo_journal.domain.enums import SortOrder
from todo_journal.domain.errors import JournalError
from todo_journal.infra.repository import JournalRepository
from todo_journal.services.task_service import TaskService
from todo_journal.ui.commands import AddCommand, Command, DoneCommand, ListCommand, SearchCommand, dispatch
from todo_journal.ui.formatting import format_table

logger = logging.getLogger(__name__)

app = typer.Typer(help="A command line to-do journal.", no_args_is_help=True)


@app.callback()
def main_callback(
    ctx: typer.Context,
    journal_file: Optional[Path] = typer.Option(
        None,
        "--journal-file",
        "-j",
        metavar="FILE",
        help="Use a different journal file.",
    ),
) -> None:
    if journal_file is None:
        journal_file = load_settings().journal_file
    ctx.obj = TaskService(JournalRepository(journal_file))


def _run(ctx: typer.Context, command: Command) -> None:
    service: TaskService = ctx.obj
    try:
        result = dispatch(service, command)
    except JournalError as exc:
        logger.info("%s failed: %s", type(command).__name__, exc)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code) from exc

    if result.message:
        typer.echo(result.message)
    if result.tasks:
        typer.echo(format_table(result.tasks, numbered=result.numbered))


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    task: str = typer.Argument(..., help="The task description text."),
    due_date: Optional[str] = typer.Option(None, "--due-date", "-d", help="Due date as YYYY-MM-DD."),
) -> None:
    """Write a task to the journal file."""
    _run(ctx, AddCommand(text=task, due_date=due_date))


# Negative positions must reach the range check instead of being parsed as options.
@app.command("done", context_settings={"ignore_unknown_options": True})
def done_cmd(
    ctx: typer.Context,
    position: int = typer.Argument(..., help="Position of the task as shown by `list`."),
) -> None:
    """Remove a task from the journal file by position."""
    _run(ctx, DoneCommand(position=position))


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    order: SortOrder = typer.Option(SortOrder.ASC, "--order", "-o", help="Sort by creation time."),
) -> None:
    """List all tasks in the journal file."""
    _run(ctx, ListCommand(order=order))


@app.command("search")
def search_cmd(
    ctx: typer.Context,
    keyword: str = typer.Argument(..., help="The keyword to search for."),
) -> None:
    """Search tasks by keyword."""
    _run(ctx, SearchCommand(keyword=keyword))
