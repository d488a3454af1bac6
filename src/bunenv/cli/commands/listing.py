# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv list``: show installed (or downloadable) versions."""

from __future__ import annotations

from typing import Annotated

import typer

from ...install import fetch_remote_versions
from ...versions import VersionInventory, VersionResolver
from ..shared import CLILogger, get_cli_context


def _print_remote(logger: CLILogger, remote: list[str], installed: set[str], current: str | None) -> None:
    logger.echo("Available Bun versions:")
    for version in remote:
        marker = "*" if version == current else " "
        suffix = " (installed)" if version in installed else ""
        logger.echo(f"{marker} {version}{suffix}")


def list_command(
    ctx: typer.Context,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="List every version published upstream."),
    ] = False,
) -> None:
    """List installed Bun versions, marking the current one."""

    context = get_cli_context(ctx)
    logger = context.logger
    inventory = VersionInventory(context.settings.layout)
    installed = inventory.list_installed()
    current = VersionResolver(context.settings, cwd=context.cwd, inventory=inventory).resolve_version()

    if show_all:
        try:
            remote = fetch_remote_versions(timeout=context.settings.download_timeout)
        except (OSError, ValueError) as exc:
            logger.fail(f"Failed to fetch available Bun versions: {exc}")
            raise typer.Exit(code=1) from exc
        _print_remote(logger, remote, set(installed), current)
        return

    if not installed:
        logger.echo("No Bun versions installed.")
        logger.echo("You can install a version with: bunenv install <version>")
        return

    logger.echo("Installed Bun versions:")
    for version in installed:
        if version == current:
            logger.echo(f"* {version} (current)")
        else:
            logger.echo(f"  {version}")


def register(app: typer.Typer) -> None:
    app.command("list")(list_command)
    app.command("ls", hidden=True)(list_command)


__all__ = ["list_command", "register"]
