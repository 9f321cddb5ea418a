# src/task_cli/cli/main.py

"""
CLI entrypoint.

Loads settings, initializes logging, builds AppState and runs exactly one
command from the argument vector. The return value is the process exit code.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()

    console_level = getattr(logging, str(settings.log_level).upper(), logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING
    setup_logging(console_level=console_level, log_file=settings.log_file)

    tokens = list(sys.argv[1:] if argv is None else argv)
    logger.debug("Starting %s args=%s", settings.app_name, tokens)

    state = create_initial_state(settings=settings)
    code = registry.run(state, tokens)

    logger.debug("Finished with exit code %s", code)
    return code


def run() -> None:
    """Console-script entry: exit the process with main()'s code."""
    sys.exit(main())


if __name__ == "__main__":
    run()
