# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, context)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import typer

from ..config import BunenvSettings
from ..errors import BunenvError
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn

LOGGER = logging.getLogger("bunenv.cli")


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool
    debug_enabled: bool = False

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout verbatim, bypassing styling.

        Args:
            message: Text written to standard output.
        """

        typer.echo(message)

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            LOGGER.debug(message)


def build_cli_logger(*, emoji: bool, debug: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided emoji preference."""

    return CLILogger(use_emoji=emoji, debug_enabled=debug)


@dataclass(slots=True)
class CLIContext:
    """Per-invocation state stored on ``click.Context.obj``."""

    settings: BunenvSettings
    logger: CLILogger
    cwd: Path = field(default_factory=Path.cwd)


def get_cli_context(ctx: typer.Context) -> CLIContext:
    """Return the :class:`CLIContext` attached by the root callback.

    Commands invoked without the root callback (for example from tests that
    call a sub-application directly) get one built from the environment.
    """

    root = ctx.find_root()
    if not isinstance(root.obj, CLIContext):
        root.obj = CLIContext(settings=BunenvSettings.from_environ(), logger=build_cli_logger(emoji=False))
    return root.obj


def report_error(logger: CLILogger, error: BunenvError) -> CLIError:
    """Print ``error`` with its remediation hint and return the matching :class:`CLIError`."""

    logger.fail(str(error))
    if error.hint:
        logger.info(error.hint)
    return CLIError(str(error))


__all__ = [
    "CLIContext",
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "get_cli_context",
    "report_error",
]
