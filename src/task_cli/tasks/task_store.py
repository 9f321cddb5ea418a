# src/task_cli/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
import re
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from .task_models import Task, TaskStatus

logger = logging.getLogger(__name__)

# Other serializers emit up to 7 fractional digits; datetime keeps 6.
_LONG_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


class TaskFormatError(ValueError):
    """Raised when the backing file is not a JSON array of task objects."""


class TaskStore:
    """
    JSON file task store.

    The whole collection is the unit of persistence:
    - load() reads every task into memory
    - save() rewrites the file with the full list

    Read failures never propagate: a missing, empty or unparsable file
    loads as an empty list (the unparsable case is logged as a warning).
    """

    def __init__(self, path: str | Path = "Tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    @staticmethod
    def _parse_ts(raw: Any, field: str) -> datetime:
        if not isinstance(raw, str) or not raw.strip():
            raise TaskFormatError(f"{field} must be an ISO-8601 string")
        text = _LONG_FRACTION_RE.sub(r"\1", raw.strip())
        try:
            ts = datetime.fromisoformat(text)
            local = ts.astimezone()
        except (ValueError, OverflowError, OSError) as e:
            # Values at the edge of the datetime range cannot be shown in local time.
            raise TaskFormatError(f"invalid {field}: {raw!r}") from e
        if ts.tzinfo is None:
            # Offset-less timestamps are local wall-clock time.
            return local
        return ts

    def _item_to_task(self, item: Any) -> Task:
        if not isinstance(item, dict):
            raise TaskFormatError("task entry must be an object")

        raw_id = item.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int | float):
            raise TaskFormatError(f"invalid id: {raw_id!r}")
        if isinstance(raw_id, float) and not raw_id.is_integer():
            raise TaskFormatError(f"invalid id: {raw_id!r}")

        description = item.get("description", "")
        if not isinstance(description, str):
            raise TaskFormatError("description must be a string")

        try:
            status = TaskStatus.from_json(item.get("taskStatus", TaskStatus.TODO.value))
        except ValueError as e:
            raise TaskFormatError(str(e)) from e

        return Task(
            id=int(raw_id),
            description=description,
            status=status,
            created_at=self._parse_ts(item.get("createdAt"), "createdAt"),
            updated_at=self._parse_ts(item.get("updatedAt"), "updatedAt"),
        )

    @staticmethod
    def _task_to_item(task: Task) -> dict[str, Any]:
        return {
            "id": task.id,
            "description": task.description,
            "taskStatus": task.status.value,
            "createdAt": task.created_at.isoformat(),
            "updatedAt": task.updated_at.isoformat(),
        }

    def _decode(self, text: str) -> list[Task]:
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            # ValueError also covers oversized number literals.
            raise TaskFormatError(f"not valid JSON: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise TaskFormatError("root must be a JSON array")
        return [self._item_to_task(item) for item in data]

    # ---- public API ----

    def load(self) -> list[Task]:
        if not self._path.exists():
            logger.debug("Task file %s does not exist; starting empty.", self._path)
            return []

        try:
            text = self._path.read_text("utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read task file %s (%s); treating as empty.", self._path, e)
            return []

        if not text.strip():
            return []

        try:
            tasks = self._decode(text)
        except TaskFormatError as e:
            logger.warning("Task file %s is unparsable (%s); treating as empty.", self._path, e)
            return []

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        items = [self._task_to_item(t) for t in tasks]
        payload = json.dumps(items, ensure_ascii=False, indent=2)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(payload, "utf-8")
        os.replace(tmp, self._path)
        logger.debug("Saved %d tasks to %s", len(items), self._path)

    @staticmethod
    def next_id(tasks: Iterable[Task]) -> int:
        return max((t.id for t in tasks), default=0) + 1

    @staticmethod
    def find(tasks: Iterable[Task], task_id: int) -> Task | None:
        for t in tasks:
            if t.id == task_id:
                return t
        return None
