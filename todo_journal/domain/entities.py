from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class TaskEntity:
    text: str
    created_at: datetime
    due_date: Optional[date] = None
