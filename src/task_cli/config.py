# src/task_cli/config.py

"""Settings loaded from environment variables (+ optional .env).

One Settings object is built per process in main() and passed down
explicitly; nothing reads configuration at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_CLI"

DEFAULT_TASKS_FILE = "Tasks.json"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None or v.strip() == "" else v.strip()


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


def _env_optional_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file: Path | None

    # ---- Storage ----
    tasks_path: Path

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            app_name=_env(_k("APP_NAME"), "task-cli"),
            log_level=_env(_k("LOG_LEVEL"), "WARNING").upper(),
            log_file=_env_optional_path(_k("LOG_FILE")),
            tasks_path=_env_path(_k("TASKS_PATH"), Path(DEFAULT_TASKS_FILE)),
        )


def get_settings() -> Settings:
    """Load a local .env (never overriding real env vars) and build Settings."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings.from_env()
