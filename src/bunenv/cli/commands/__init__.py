# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from . import current, global_version, init, install, listing, local_version, rehash, shell

__all__ = ["register_commands"]


def register_commands(app: typer.Typer) -> None:
    """Register the built-in commands on ``app``.

    Args:
        app: Typer application receiving command registrations.
    """

    install.register(app)
    listing.register(app)
    global_version.register(app)
    local_version.register(app)
    current.register(app)
    rehash.register(app)
    shell.register(app)
    init.register(app)
