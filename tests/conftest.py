# tests/conftest.py

from __future__ import annotations

import io
import json
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from task_cli.cli.commands import registry
from task_cli.core.state import AppState
from task_cli.tasks.task_store import TaskStore

from .fakes import CliResult, FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than the real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="task-cli",
        log_level="WARNING",
        log_file=None,
        tasks_path=tmp_path / "Tasks.json",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_path)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, clock: FakeClock) -> AppState:
    """AppState with a real TaskStore on tmp_path and in-memory console streams."""
    return AppState(
        settings=settings,
        task_store=store,
        out=io.StringIO(),
        err=io.StringIO(),
        clock=clock,
    )


@pytest.fixture()
def run(state: AppState) -> Callable[..., CliResult]:
    """Run one command line through the registry; output is captured per call."""

    def _run(*tokens: str) -> CliResult:
        state.out = io.StringIO()
        state.err = io.StringIO()
        code = registry.run(state, list(tokens))
        return CliResult(code=code, out=state.out.getvalue(), err=state.err.getvalue())

    return _run


@pytest.fixture()
def seed(settings: SimpleNamespace) -> Callable[..., Path]:
    """
    Write raw task objects to the task file, the way another writer would.

    Missing timestamps are filled in so each entry is a complete record.
    """

    def _seed(*items: dict[str, Any]) -> Path:
        path: Path = settings.tasks_path
        full = []
        for item in items:
            entry = {
                "description": "",
                "taskStatus": "todo",
                "createdAt": "2024-01-01T08:00:00+00:00",
                "updatedAt": "2024-01-01T08:00:00+00:00",
            }
            entry.update(item)
            full.append(entry)
        path.write_text(json.dumps(full, indent=2), "utf-8")
        return path

    return _seed
