# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv local``: show or set the version for the current directory."""

from __future__ import annotations

from typing import Annotated

import typer

from ...errors import BunenvError
from ...paths import LOCAL_VERSION_FILENAME
from ...versions import VersionInventory, read_local_version, set_local_version
from ..shared import get_cli_context, report_error


def local_command(
    ctx: typer.Context,
    version: Annotated[
        str | None,
        typer.Argument(help="Version to set for this directory (e.g., 1.0.0)."),
    ] = None,
) -> None:
    """Set or show the local Bun version (writes .bun-version)."""

    context = get_cli_context(ctx)
    logger = context.logger
    inventory = VersionInventory(context.settings.layout)
    if version is None:
        current = read_local_version(inventory, context.cwd)
        if current is None:
            logger.info(f"No local Bun version set. No {LOCAL_VERSION_FILENAME} file found.")
        else:
            logger.info(f"Current local Bun version: {current}")
        return

    try:
        normalized = set_local_version(inventory, version, context.cwd)
    except BunenvError as exc:
        raise typer.Exit(code=report_error(logger, exc).exit_code) from exc
    logger.ok(f"Local Bun version set to {normalized}")


def register(app: typer.Typer) -> None:
    app.command("local")(local_command)


__all__ = ["local_command", "register"]
