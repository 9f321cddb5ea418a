# src/task_cli/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..core.formatter import format_task_table
from ..core.state import AppState
from ..tasks.task_models import STATUS_LABELS, Task, TaskStatus, parse_status_filter
from ..tasks.task_store import TaskStore

CommandHandler = Callable[[AppState, list[str]], int]

logger = logging.getLogger(__name__)

# Task ids: ASCII digits with an optional sign.
_ID_RE = re.compile(r"[+-]?[0-9]+")


class CommandError(Exception):
    """
    A command rejected its input.

    `message` goes to stderr as-is; when `usage_for` names a command its
    usage line follows. Nothing has been written to the task file.
    """

    def __init__(self, message: str = "", *, usage_for: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.usage_for = usage_for


class UsageError(CommandError):
    """Malformed or missing arguments for `command`."""

    def __init__(self, command: str) -> None:
        super().__init__("", usage_for=command)


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    usage: str
    help_text: str

    @property
    def synopsis(self) -> str:
        return f"{self.name} {self.usage}".rstrip()


class CommandRegistry:
    """Routes an argv-style token list to a registered handler and returns the exit code."""

    def __init__(self) -> None:
        self._handlers: dict[str, Command] = {}
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        usage: str,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        command = Command(name=key, handler=handler, usage=usage, help_text=help_text)
        self._commands[key] = command
        self._handlers[key] = command
        for alias in aliases:
            self._handlers[alias.lower()] = command

    def usage_line(self, state: AppState, name: str) -> str:
        command = self._commands[name]
        return f"Usage: {state.app_name} {command.synopsis}"

    def build_usage(self, state: AppState) -> str:
        width = max((len(c.synopsis) for c in self._commands.values()), default=0)
        lines = ["Usage:"]
        for command in self._commands.values():
            lines.append(f"  {state.app_name} {command.synopsis:<{width}}  {command.help_text}")
        lines.append("")
        lines.append("Notes:")
        lines.append(f"  • Tasks are stored in {state.task_store.path}")
        lines.append("  • Status values: " + " | ".join(STATUS_LABELS.values()))
        return "\n".join(lines)

    def run(self, state: AppState, tokens: list[str]) -> int:
        """
        Execute one command line (without the program name).

        Returns 0 on success, 1 on unknown commands, usage/validation
        errors and unexpected failures.
        """
        try:
            if not tokens:
                state.print(self.build_usage(state))
                return 0

            name = tokens[0].lower()
            command = self._handlers.get(name)
            if command is None:
                logger.debug("Unknown command %r", tokens[0])
                state.print_err(f"Unknown command: {name}\n")
                state.print(self.build_usage(state))
                return 1

            try:
                return command.handler(state, tokens[1:])
            except CommandError as e:
                logger.debug("Command %s rejected input: %s", command.name, e.message or "usage")
                if e.message:
                    state.print_err(e.message)
                if e.usage_for:
                    state.print_err(self.usage_line(state, e.usage_for))
                return 1

        except Exception as e:
            logger.debug("Command crashed.", exc_info=True)
            state.print_err(f"Error: {e}")
            return 1


registry = CommandRegistry()


# ---- argument helpers ----


def _parse_id(args: list[str], command: str) -> int:
    if not args:
        raise UsageError(command)
    raw = args[0].strip()
    if not _ID_RE.fullmatch(raw):
        raise UsageError(command)
    return int(raw)


def _join_text(args: list[str]) -> str:
    return " ".join(args).strip()


def _require_task(tasks: list[Task], task_id: int) -> Task:
    task = TaskStore.find(tasks, task_id)
    if task is None:
        raise CommandError(f"Task with ID {task_id} not found.")
    return task


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> int:
    state.print(registry.build_usage(state))
    return 0


def cmd_add(state: AppState, args: list[str]) -> int:
    if not args:
        raise UsageError("add")

    description = _join_text(args)
    if not description:
        raise CommandError("Description cannot be empty.")

    tasks = state.task_store.load()
    now = state.clock()
    task = Task(
        id=TaskStore.next_id(tasks),
        description=description,
        status=TaskStatus.TODO,
        created_at=now,
        updated_at=now,
    )
    tasks.append(task)
    state.task_store.save(tasks)

    logger.info("Task added id=%s", task.id)
    state.print(f"Task added successfully (ID: {task.id})")
    return 0


def cmd_update(state: AppState, args: list[str]) -> int:
    if len(args) < 2:
        raise UsageError("update")
    task_id = _parse_id(args, "update")

    description = _join_text(args[1:])
    if not description:
        raise CommandError("New description cannot be empty.")

    tasks = state.task_store.load()
    task = _require_task(tasks, task_id)
    task.description = description
    task.touch(state.clock())
    state.task_store.save(tasks)

    logger.info("Task updated id=%s", task_id)
    state.print(f"Task {task_id} updated successfully.")
    return 0


def cmd_delete(state: AppState, args: list[str]) -> int:
    task_id = _parse_id(args, "delete")

    tasks = state.task_store.load()
    task = _require_task(tasks, task_id)
    tasks.remove(task)
    state.task_store.save(tasks)

    logger.info("Task deleted id=%s", task_id)
    state.print(f"Task {task_id} deleted successfully.")
    return 0


def make_mark_handler(status: TaskStatus) -> tuple[str, CommandHandler]:
    """Build the `mark-<status>` command name and its handler."""
    label = STATUS_LABELS[status]
    name = f"mark-{label}"

    def cmd_mark(state: AppState, args: list[str]) -> int:
        task_id = _parse_id(args, name)

        tasks = state.task_store.load()
        task = _require_task(tasks, task_id)
        task.status = status
        task.touch(state.clock())
        state.task_store.save(tasks)

        logger.info("Task status changed id=%s status=%s", task_id, status.value)
        state.print(f"Task {task_id} marked as {label}.")
        return 0

    return name, cmd_mark


def cmd_list(state: AppState, args: list[str]) -> int:
    """
    list            -> every task
    list <status>   -> only tasks with that status (done | todo | in-progress)
    """
    if len(args) > 1:
        raise UsageError("list")

    wanted: TaskStatus | None = None
    if args and args[0].strip():
        wanted = parse_status_filter(args[0])
        if wanted is None:
            raise CommandError(
                "Unknown status filter. Use: done | todo | in-progress", usage_for="list"
            )

    tasks = state.task_store.load()
    if wanted is not None:
        tasks = [t for t in tasks if t.status == wanted]
    tasks.sort(key=lambda t: t.id)

    if not tasks:
        state.print("No tasks found.")
        return 0

    for line in format_task_table(tasks):
        state.print(line)
    return 0


registry.register("add", cmd_add, '"description"', help_text="Add a new task.")
registry.register(
    "update", cmd_update, '<id> "new description"', help_text="Replace a task's description."
)
registry.register("delete", cmd_delete, "<id>", help_text="Delete a task.")
for _status in TaskStatus:
    _name, _handler = make_mark_handler(_status)
    registry.register(_name, _handler, "<id>", help_text=f"Mark a task as {STATUS_LABELS[_status]}.")
registry.register(
    "list", cmd_list, "[done|todo|in-progress]", help_text="List tasks, optionally by status."
)
registry.register("help", cmd_help, "", help_text="Show this help.", aliases=["-h", "--help"])
