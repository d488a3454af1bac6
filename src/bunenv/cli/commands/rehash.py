# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``bunenv rehash``: regenerate shims."""

from __future__ import annotations

import typer

from ...errors import BunenvError
from ...shims import rehash
from ..shared import get_cli_context, report_error


def rehash_command(ctx: typer.Context) -> None:
    """Rebuild Bun shim executables."""

    context = get_cli_context(ctx)
    logger = context.logger
    try:
        outcome = rehash(context.settings)
    except BunenvError as exc:
        raise typer.Exit(code=report_error(logger, exc).exit_code) from exc
    logger.debug(f"rehash wrote {', '.join(outcome.names)} to {outcome.shims_dir}")


def register(app: typer.Typer) -> None:
    app.command("rehash")(rehash_command)


__all__ = ["register", "rehash_command"]
