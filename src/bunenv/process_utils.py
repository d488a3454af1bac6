# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Child process helpers used by ``bunenv shell``."""

from __future__ import annotations

import os
import shutil

# Bandit: the command is an argument list and ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path


class CommandFailedError(RuntimeError):
    """Raised by :func:`run_command` when ``check`` is set and the child fails."""

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        super().__init__(f"'{command[0]}' exited with status {returncode}")
        self.command = tuple(command)
        self.returncode = returncode


def resolve_program(program: str, env: Mapping[str, str] | None = None) -> str:
    """Return an absolute path for ``program`` searched on the child's ``PATH``.

    Raises:
        FileNotFoundError: If ``program`` is relative and not on ``PATH``.
    """

    if Path(program).is_absolute():
        return program
    search_path = (env if env is not None else os.environ).get("PATH")
    resolved = shutil.which(program, path=search_path)
    if resolved is None:
        raise FileNotFoundError(f"Executable '{program}' was not found on PATH")
    return resolved


def run_command(
    args: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run ``args`` attached to the current terminal and wait for it to exit."""

    if not args:
        raise ValueError("run_command requires at least one argument")
    command = [resolve_program(args[0], env), *args[1:]]
    # Bandit: argument lists are passed directly without shell expansion.
    completed: subprocess.CompletedProcess[str] = subprocess.run(  # nosec B603
        command,
        env=dict(env) if env is not None else None,
        check=False,
        text=True,
    )
    if check and completed.returncode != 0:
        raise CommandFailedError(command, completed.returncode)
    return completed


__all__ = ["CommandFailedError", "resolve_program", "run_command"]
