# src/task_cli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Values are the persisted spellings (the `taskStatus` field in Tasks.json).
    Display text lives in STATUS_LABELS, never derived from the value.
    """

    TODO = "todo"
    IN_PROGRESS = "inProgress"
    DONE = "done"

    @classmethod
    def from_json(cls, raw: object) -> TaskStatus:
        """
        Decode a stored status.

        Accepts the camelCase names case-insensitively and the integer
        ordinals 0/1/2. Anything else raises ValueError.
        """
        if isinstance(raw, bool):
            raise ValueError(f"invalid task status: {raw!r}")
        if isinstance(raw, int):
            members = list(cls)
            if 0 <= raw < len(members):
                return members[raw]
            raise ValueError(f"invalid task status ordinal: {raw}")
        if isinstance(raw, str):
            key = raw.strip().lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        raise ValueError(f"invalid task status: {raw!r}")


STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "todo",
    TaskStatus.IN_PROGRESS: "in-progress",
    TaskStatus.DONE: "done",
}

STATUS_FILTERS: dict[str, TaskStatus] = {
    "todo": TaskStatus.TODO,
    "in-progress": TaskStatus.IN_PROGRESS,
    "inprogress": TaskStatus.IN_PROGRESS,
    "done": TaskStatus.DONE,
}


def status_label(status: TaskStatus) -> str:
    return STATUS_LABELS[status]


def parse_status_filter(token: str) -> TaskStatus | None:
    """Resolve a `list` filter token; None when the token is not recognized."""
    key = token.strip().lower().replace("_", "-")
    return STATUS_FILTERS.get(key)


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    def touch(self, now: datetime) -> None:
        self.updated_at = now
