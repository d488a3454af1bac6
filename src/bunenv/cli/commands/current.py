# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv version``: print the effective Bun version."""

from __future__ import annotations

from typing import Annotated

import typer

from ...versions import VersionResolver
from ..shared import get_cli_context


def version_command(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Also show where the version was selected."),
    ] = False,
) -> None:
    """Show the current active Bun version."""

    context = get_cli_context(ctx)
    logger = context.logger
    resolved = VersionResolver(context.settings, cwd=context.cwd).resolve()
    if resolved is None:
        logger.echo("No active Bun version found.")
        logger.echo("Use bunenv global <version> to set a global version")
        logger.echo("or bunenv local <version> to set a version for this directory.")
        raise typer.Exit(code=1)
    if verbose:
        logger.echo(f"{resolved.version} ({resolved.describe()})")
    else:
        logger.echo(resolved.version)


def register(app: typer.Typer) -> None:
    app.command("version")(version_command)


__all__ = ["register", "version_command"]
