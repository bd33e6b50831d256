# src/taskline/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import InvalidArgument, MalformedRecord
from ..tasks import task_codec
from ..tasks.task_api import add_task, complete_task, delete_task, list_tasks, render_tasks
from .bootstrap import AppState

logger = logging.getLogger(__name__)

CommandHandler = Callable[[AppState, list[str], dict[str, bool]], str | None]


@dataclass(frozen=True, slots=True)
class Flag:
    long: str
    short: str | None = None
    help: str = ""

    @property
    def dest(self) -> str:
        return self.long.replace("-", "_")


@dataclass(frozen=True, slots=True)
class ArgSpec:
    """Positional word count bounds plus boolean flags for one command."""

    metavar: str | None = None
    min_args: int = 0
    max_args: int | None = 0
    flags: tuple[Flag, ...] = ()

    def check(self, args: list[str]) -> None:
        if len(args) < self.min_args:
            raise InvalidArgument(f"requires at least {self.min_args} arg(s), only received {len(args)}")
        if self.max_args is not None and len(args) > self.max_args:
            raise InvalidArgument("invalid number of arguments provided")


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    spec: ArgSpec
    handler: CommandHandler
    help_text: str
    description: str | None = None


class CommandRegistry:
    """Subcommand registry; builds the argparse parser and dispatches to handlers."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        spec: ArgSpec,
        handler: CommandHandler,
        help_text: str = "",
        description: str | None = None,
    ) -> None:
        key = name.lower()
        self._commands[key] = Command(key, spec, handler, help_text, description)

    def names(self) -> list[str]:
        return list(self._commands)

    def build_parser(self, prog: str = "tasks") -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=prog, description="Track simple text tasks in a CSV file.")
        parser.add_argument("--file", metavar="PATH", default=None, help="tasks file (default: tasks.csv)")
        parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")

        sub = parser.add_subparsers(dest="command", metavar="command", required=True)
        for cmd in self._commands.values():
            p = sub.add_parser(cmd.name, help=cmd.help_text, description=cmd.description or cmd.help_text)
            if cmd.spec.metavar is not None:
                p.add_argument("args", nargs="*", metavar=cmd.spec.metavar)
            for flag in cmd.spec.flags:
                opts = [f"--{flag.long}"] + ([f"-{flag.short}"] if flag.short else [])
                p.add_argument(*opts, dest=flag.dest, action="store_true", help=flag.help)
        return parser

    def dispatch(self, state: AppState, ns: argparse.Namespace) -> str | None:
        cmd = self._commands.get(ns.command)
        if cmd is None:
            raise InvalidArgument(f"unknown command: {ns.command}")

        args = list(getattr(ns, "args", None) or [])
        flags = {f.dest: bool(getattr(ns, f.dest, False)) for f in cmd.spec.flags}
        cmd.spec.check(args)

        logger.debug("Dispatch command=%s args=%s flags=%s", cmd.name, args, flags)
        return cmd.handler(state, args, flags)


def parse_task_id(args: list[str]) -> int:
    if len(args) != 1:
        raise InvalidArgument("invalid number of arguments provided")
    try:
        return task_codec.parse_id(args[0])
    except MalformedRecord as exc:
        raise InvalidArgument(str(exc)) from exc


def cmd_list(state: AppState, args: list[str], flags: dict[str, bool]) -> str:
    include_completed = flags.get("all", False)
    tasks = list_tasks(state.task_store, include_completed=include_completed)
    return render_tasks(tasks, include_completed=include_completed)


def cmd_add(state: AppState, args: list[str], flags: dict[str, bool]) -> None:
    add_task(state.task_store, " ".join(args))


def cmd_complete(state: AppState, args: list[str], flags: dict[str, bool]) -> None:
    complete_task(state.task_store, parse_task_id(args))


def cmd_delete(state: AppState, args: list[str], flags: dict[str, bool]) -> None:
    delete_task(state.task_store, parse_task_id(args))


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register(
        "list",
        ArgSpec(flags=(Flag("all", "a", "list all completed and uncompleted tasks"),)),
        cmd_list,
        help_text="List Tasks",
        description="list all the uncompleted tasks, use -a to list all tasks",
    )
    registry.register(
        "add",
        ArgSpec(metavar="name", min_args=1, max_args=None),
        cmd_add,
        help_text="Add new task",
        description="Add new task to current task list",
    )
    registry.register(
        "complete",
        ArgSpec(metavar="taskId", min_args=1, max_args=1),
        cmd_complete,
        help_text="Mark task as complete",
        description="Task with the given id will be marked as complete",
    )
    registry.register(
        "delete",
        ArgSpec(metavar="taskId", min_args=1, max_args=1),
        cmd_delete,
        help_text="Delete Task",
        description="Delete the task with the given ID",
    )
    return registry
