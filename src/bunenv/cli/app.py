# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from ..config import BunenvSettings
from ..errors import ConfigError
from ..logging import configure_debug_logging
from .commands import register_commands
from .shared import CLIContext, build_cli_logger, report_error
from .typer_ext import create_typer

app = create_typer(
    name="bunenv",
    help="Bun version manager.",
    no_args_is_help=True,
    add_completion=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"bunenv {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    ctx: typer.Context,
    debug: Annotated[bool, typer.Option("--debug", help="Log diagnostic details to stderr.")] = False,
    emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Decorate messages with emoji.")] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_print_version,
            is_eager=True,
            help="Show the bunenv version and exit.",
        ),
    ] = False,
) -> None:
    """Install and switch between Bun versions."""

    del version
    logger = build_cli_logger(emoji=emoji, debug=debug)
    try:
        settings = BunenvSettings.from_environ()
    except ConfigError as exc:
        raise typer.Exit(code=report_error(logger, exc).exit_code) from exc
    if debug or settings.debug:
        configure_debug_logging()
        logger.debug_enabled = True
    ctx.obj = CLIContext(settings=settings, logger=logger)


register_commands(app)


def main() -> None:
    """Run the ``bunenv`` console script."""

    app(prog_name="bunenv")


__all__ = ["app", "main"]
