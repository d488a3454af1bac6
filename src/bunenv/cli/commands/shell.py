# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv shell``: start a subshell pinned to one Bun version."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Annotated

import typer

from ...config import BunenvSettings
from ...errors import BunenvError
from ...process_utils import run_command
from ...shims import shell_env
from ...versions import VersionInventory, require_installed_version
from ..shared import get_cli_context, report_error

DEFAULT_POSIX_SHELL = "/bin/sh"
DEFAULT_WINDOWS_SHELL = "cmd.exe"


def interactive_shell(settings: BunenvSettings, environ: Mapping[str, str] | None = None) -> str:
    """Return the shell program ``bunenv shell`` should spawn."""

    env = os.environ if environ is None else environ
    if settings.windows:
        return env.get("COMSPEC") or DEFAULT_WINDOWS_SHELL
    return env.get("SHELL") or DEFAULT_POSIX_SHELL


def shell_command(
    ctx: typer.Context,
    version: Annotated[str, typer.Argument(help="Bun version to use in the new shell.")],
) -> None:
    """Start a new shell that uses a specific Bun version."""

    context = get_cli_context(ctx)
    logger = context.logger
    settings = context.settings
    try:
        normalized = require_installed_version(VersionInventory(settings.layout), version)
    except BunenvError as exc:
        raise typer.Exit(code=report_error(logger, exc).exit_code) from exc

    program = interactive_shell(settings)
    logger.info(f"Switching to Bun {normalized}")
    try:
        completed = run_command([program], env=shell_env(settings, normalized), check=False)
    except OSError as exc:
        logger.fail(f"Could not start shell '{program}': {exc}")
        raise typer.Exit(code=1) from exc
    logger.info(f"Shell exited with code {completed.returncode}")
    raise typer.Exit(code=completed.returncode)


def register(app: typer.Typer) -> None:
    app.command("shell")(shell_command)


__all__ = ["interactive_shell", "register", "shell_command"]
