# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv init``: print the shell integration snippet."""

from __future__ import annotations

from typing import Annotated

import typer

from ...platform import ShellType, detect_shell, shell_from_name
from ...shims import init_script
from ..shared import get_cli_context


def init_command(
    ctx: typer.Context,
    shell: Annotated[
        str | None,
        typer.Option("--shell", "-s", help="Shell type (bash, zsh, fish, powershell, cmd)."),
    ] = None,
) -> None:
    """Print shell integration for bunenv; evaluate it from your shell profile."""

    context = get_cli_context(ctx)
    settings = context.settings
    shell_type = shell_from_name(shell) if shell else detect_shell(os_name=settings.os_name)
    if shell and shell_type is ShellType.UNKNOWN:
        context.logger.warn(f"Unknown shell '{shell}'; printing bash integration.")
    typer.echo(init_script(shell_type, settings.root), nl=False)


def register(app: typer.Typer) -> None:
    app.command("init")(init_command)


__all__ = ["init_command", "register"]
