# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv global``: show or set the global Bun version."""

from __future__ import annotations

from typing import Annotated

import typer

from ...errors import BunenvError
from ...versions import VersionInventory, read_global_version, set_global_version
from ..shared import get_cli_context, report_error


def global_command(
    ctx: typer.Context,
    version: Annotated[
        str | None,
        typer.Argument(help="Version to set as global (e.g., 1.0.0)."),
    ] = None,
) -> None:
    """Set or show the global Bun version."""

    context = get_cli_context(ctx)
    logger = context.logger
    inventory = VersionInventory(context.settings.layout)
    if version is None:
        current = read_global_version(inventory)
        if current is None:
            logger.info("No global Bun version set.")
        else:
            logger.info(f"Current global Bun version: {current}")
        return

    try:
        normalized = set_global_version(inventory, version)
    except BunenvError as exc:
        raise typer.Exit(code=report_error(logger, exc).exit_code) from exc
    logger.ok(f"Global Bun version set to {normalized}")


def register(app: typer.Typer) -> None:
    app.command("global")(global_command)


__all__ = ["global_command", "register"]
