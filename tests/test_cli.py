from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from todo_journal.ui.cli import app

runner = CliRunner()


@pytest.fixture()
def journal(tmp_path: Path) -> Path:
    return tmp_path / "journal.json"


def _invoke(journal: Path, *args: str):
    return runner.invoke(app, ["--journal-file", str(journal), *args])


def _listed_texts(output: str) -> list[str]:
    rows = output.splitlines()[1:]
    return [row[6:56].rstrip() for row in rows]


def test_list_on_first_run(journal: Path) -> None:
    result = _invoke(journal, "list")

    assert result.exit_code == 0
    assert "Task list is empty!" in result.output
    assert not journal.exists()


def test_add_then_list(journal: Path) -> None:
    assert _invoke(journal, "add", "write report").exit_code == 0

    result = _invoke(journal, "list", "--order", "asc")

    assert result.exit_code == 0
    assert _listed_texts(result.output) == ["write report"]


def test_done_removes_second_task(journal: Path) -> None:
    for text in ("a", "b", "c"):
        assert _invoke(journal, "add", text).exit_code == 0

    done = _invoke(journal, "done", "2")
    result = _invoke(journal, "list")

    assert done.exit_code == 0
    assert "b" in done.output
    assert _listed_texts(result.output) == ["a", "c"]


def test_list_descending(journal: Path) -> None:
    for text in ("first", "second"):
        _invoke(journal, "add", text)

    result = _invoke(journal, "list", "-o", "desc")

    assert _listed_texts(result.output) == ["second", "first"]


def test_search_matches_any_case(journal: Path) -> None:
    _invoke(journal, "add", "Pay rent")
    _invoke(journal, "add", "walk dog")

    for keyword in ("rent", "RENT"):
        result = _invoke(journal, "search", keyword)
        assert result.exit_code == 0
        assert "Pay rent" in result.output
        assert "walk dog" not in result.output


def test_search_without_match(journal: Path) -> None:
    _invoke(journal, "add", "Pay rent")

    result = _invoke(journal, "search", "taxes")

    assert result.exit_code == 0
    assert "No tasks found with the keyword 'taxes'" in result.output


def test_reading_commands_leave_file_untouched(journal: Path) -> None:
    _invoke(journal, "add", "Pay rent", "--due-date", "2026-11-01")
    before = journal.read_bytes()

    _invoke(journal, "list", "--order", "desc")
    _invoke(journal, "search", "rent")

    assert journal.read_bytes() == before


def test_due_date_is_shown(journal: Path) -> None:
    _invoke(journal, "add", "Pay rent", "-d", "2026-11-01")

    result = _invoke(journal, "list")

    assert "2026-11-01" in result.output


def test_invalid_due_date_exit_code(journal: Path) -> None:
    result = _invoke(journal, "add", "task", "--due-date", "next week")

    assert result.exit_code == 2
    assert "Error:" in result.output
    assert not journal.exists()


def test_empty_text_exit_code(journal: Path) -> None:
    result = _invoke(journal, "add", "")

    assert result.exit_code == 2
    assert not journal.exists()


def test_done_out_of_range_exit_code(journal: Path) -> None:
    _invoke(journal, "add", "only")
    before = journal.read_bytes()

    result = _invoke(journal, "done", "5")

    assert result.exit_code == 4
    assert journal.read_bytes() == before


def test_done_on_empty_journal(journal: Path) -> None:
    result = _invoke(journal, "done", "0")

    assert result.exit_code == 4


def test_corrupt_journal_exit_code(journal: Path) -> None:
    journal.write_text("{broken", encoding="utf-8")

    result = _invoke(journal, "add", "task")

    assert result.exit_code == 3
    assert str(journal) in result.output
    assert journal.read_text(encoding="utf-8") == "{broken"


def test_default_journal_comes_from_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    journal = tmp_path / "from-env.json"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TODO_JOURNAL_FILE", str(journal))

    result = runner.invoke(app, ["add", "configured"])

    assert result.exit_code == 0
    assert journal.exists()


def test_unreadable_journal_exit_code(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "list")

    assert result.exit_code == 5
    assert str(tmp_path) in result.output


def test_done_negative_position_is_out_of_range(journal: Path) -> None:
    _invoke(journal, "add", "only")

    result = _invoke(journal, "done", "-1")

    assert result.exit_code == 4
    assert "No task at position -1" in result.output


def test_add_undecodable_text_exit_code(journal: Path) -> None:
    result = _invoke(journal, "add", "caf\udce9")

    assert result.exit_code == 2
    assert "Error:" in result.output
    assert not journal.exists()
