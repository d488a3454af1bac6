# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv install``: download a Bun release and refresh the shims."""

from __future__ import annotations

from typing import Annotated

import typer

from ...errors import BunenvError
from ...install import InstallStatus, install_version
from ...shims import rehash
from ..shared import get_cli_context, report_error


def install_command(
    ctx: typer.Context,
    version: Annotated[str, typer.Argument(help="Version to install (e.g., 1.0.0).")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Reinstall even if already installed.")] = False,
) -> None:
    """Install a specific version of Bun."""

    context = get_cli_context(ctx)
    logger = context.logger
    try:
        outcome = install_version(context.settings, version, force=force)
        if outcome.status is InstallStatus.ALREADY_INSTALLED:
            logger.info(f"Bun {outcome.version} is already installed.")
            return
        verb = "reinstalled" if outcome.replaced else "installed"
        logger.ok(f"Bun {outcome.version} {verb} successfully.")
        rehash(context.settings)
    except BunenvError as exc:
        raise typer.Exit(code=report_error(logger, exc).exit_code) from exc


def register(app: typer.Typer) -> None:
    app.command("install")(install_command)


__all__ = ["install_command", "register"]
