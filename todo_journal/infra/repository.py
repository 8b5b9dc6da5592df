from __future__ import annotations

import json
import logging
import os
import re
import shutil
import tempfile
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Optional

from todo_journal.domain.entities import TaskEntity
from todo_journal.domain.errors import CorruptJournal, IOFailure

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class _RecordError(ValueError):
    pass


def _parse_timestamp(raw: Any) -> datetime:
    # Older journals store Unix seconds instead of ISO strings.
    if isinstance(raw, bool):
        raise _RecordError(f"invalid created_at {raw!r}")
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise _RecordError(f"invalid created_at {raw!r}") from exc
    if isinstance(raw, str):
        try:
            value = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise _RecordError(f"invalid created_at {raw!r}") from exc
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
    raise _RecordError(f"invalid created_at {raw!r}")


def _parse_due_date(raw: Any) -> Optional[date]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise _RecordError(f"invalid due_date {raw!r}")
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError) as exc:
            raise _RecordError(f"invalid due_date {raw!r}") from exc
    if isinstance(raw, str) and DATE_PATTERN.match(raw):
        try:
            return datetime.strptime(raw, DATE_FORMAT).date()
        except ValueError as exc:
            raise _RecordError(f"invalid due_date {raw!r}") from exc
    raise _RecordError(f"invalid due_date {raw!r}")


def _to_entity(record: Any) -> TaskEntity:
    if not isinstance(record, dict):
        raise _RecordError("task record is not an object")
    text = record.get("text")
    if not isinstance(text, str) or not text.strip():
        raise _RecordError("task record has no text")
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        # JSON escapes can smuggle in lone surrogates.
        raise _RecordError("task text is not valid unicode") from exc
    if "created_at" not in record:
        raise _RecordError("task record has no created_at")
    return TaskEntity(
        text=text,
        created_at=_parse_timestamp(record["created_at"]),
        due_date=_parse_due_date(record.get("due_date")),
    )


def _to_record(task: TaskEntity) -> dict[str, Any]:
    return {
        "text": task.text,
        "created_at": task.created_at.isoformat(),
        "due_date": task.due_date.strftime(DATE_FORMAT) if task.due_date else None,
    }


def decode_journal(content: str, path: Path) -> list[TaskEntity]:
    if not content.strip():
        return []
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise CorruptJournal(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(payload, list):
        raise CorruptJournal(path, "expected a list of tasks")

    tasks = []
    for index, record in enumerate(payload, start=1):
        try:
            tasks.append(_to_entity(record))
        except _RecordError as exc:
            raise CorruptJournal(path, f"record {index}: {exc}") from exc
    return tasks


def encode_journal(tasks: list[TaskEntity]) -> str:
    return json.dumps([_to_record(task) for task in tasks], indent=2, ensure_ascii=False) + "\n"


def load_journal(path: Path) -> list[TaskEntity]:
    """Read the whole journal; a file that does not exist yet is an empty journal."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
    except FileNotFoundError:
        logger.debug("Journal %s does not exist yet", path)
        return []
    except UnicodeDecodeError as exc:
        raise CorruptJournal(path, "file is not valid UTF-8") from exc
    except OSError as exc:
        raise IOFailure(path, exc.strerror or str(exc)) from exc

    tasks = decode_journal(content, path)
    logger.debug("Loaded %d task(s) from %s", len(tasks), path)
    return tasks


def save_journal(tasks: list[TaskEntity], path: Path) -> None:
    """Overwrite the journal with ``tasks``.

    The new content is written to a sibling temporary file and renamed over the
    journal, so an interrupted write leaves the previous journal intact. A
    symlinked journal is written through to its target, keeping the link and
    the target's permissions.
    """
    path = Path(path)
    target = path.resolve()
    content = encode_journal(tasks)
    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if target.exists():
            shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as exc:
        raise IOFailure(path, exc.strerror or str(exc)) from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.warning("Could not remove temporary file %s", tmp_name)
    logger.info("Saved %d task(s) to %s", len(tasks), path)


class JournalRepository:
    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[TaskEntity]:
        return load_journal(self._path)

    def save(self, tasks: list[TaskEntity]) -> None:
        save_journal(tasks, self._path)
