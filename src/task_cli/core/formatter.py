# src/task_cli/core/formatter.py

"""
Plain-text rendering of the task list.

Columns: right-aligned id, status label, local update time, description.
The description is the last column and is never padded or wrapped.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from ..tasks.task_models import Task, status_label

ID_WIDTH = 3
STATUS_WIDTH = 12
UPDATED_WIDTH = 20
TIME_FORMAT = "%Y-%m-%d %H:%M"


def format_local_time(ts: datetime) -> str:
    return ts.astimezone().strftime(TIME_FORMAT)


def _row(task_id: str, status: str, updated: str, description: str) -> str:
    return (
        f"{task_id:>{ID_WIDTH}}  {status:<{STATUS_WIDTH}} {updated:<{UPDATED_WIDTH}} {description}"
    ).rstrip()


def format_task_table(tasks: Iterable[Task]) -> list[str]:
    """Return the header line followed by one line per task, in the given order."""
    lines = [_row("ID", "Status", "Updated", "Description")]
    for t in tasks:
        lines.append(
            _row(str(t.id), status_label(t.status), format_local_time(t.updated_at), t.description)
        )
    return lines
