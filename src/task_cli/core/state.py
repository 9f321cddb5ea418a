# src/task_cli/core/state.py

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TextIO

from ..tasks.task_store import TaskStore


def _now_local() -> datetime:
    return datetime.now().astimezone()


@dataclass
class AppState:
    # Settings are kept on the state so handlers can read app_name / paths.
    settings: object
    task_store: TaskStore

    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)
    clock: Callable[[], datetime] = _now_local

    @property
    def app_name(self) -> str:
        return str(getattr(self.settings, "app_name", "task-cli"))

    def print(self, text: str = "") -> None:
        print(text, file=self.out)

    def print_err(self, text: str = "") -> None:
        print(text, file=self.err)
