# src/taskline/cli/main.py

"""
CLI entrypoint.

Loads settings, configures logging, builds AppState, then runs one command.
Exit status: 0 on success, 1 on any task error, 2 on usage errors (argparse).
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from ..config import Settings, get_settings
from ..errors import TaskError
from ..logging_setup import setup_logging
from .bootstrap import create_initial_state
from .commands import build_registry

logger = logging.getLogger(__name__)


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: Settings | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    configure_logging: bool = True,
) -> int:
    if settings is None:
        settings = get_settings()

    registry = build_registry()
    parser = registry.build_parser(prog=settings.app_name)
    ns = parser.parse_args(argv)

    if configure_logging:
        level_name = "DEBUG" if ns.verbose else settings.log_level
        console_level = getattr(logging, level_name, logging.WARNING)
        setup_logging(console_level=console_level, log_dir=settings.log_dir)

    state = create_initial_state(settings=settings, tasks_file=ns.file, stdout=stdout, stderr=stderr)

    try:
        output = registry.dispatch(state, ns)
    except TaskError as exc:
        logger.debug("Command %s failed", ns.command, exc_info=True)
        print(f"error: {exc}", file=state.stderr)
        return 1
    except Exception as exc:
        logger.exception("Unexpected failure in command %s", ns.command)
        print(f"error: {exc}", file=state.stderr)
        return 1

    if output:
        print(output, file=state.stdout)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
