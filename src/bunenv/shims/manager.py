# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Regenerate the shims directory and build environments for ``bunenv shell``."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ..config import BunenvSettings
from ..errors import ShimError
from ..paths import VERSION_ENV_VAR
from ..platform import ShimFlavor
from ..versions import VersionInventory
from .render import ShimContext, render_shim

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RehashOutcome:
    """Shims written by a single rehash."""

    shims_dir: Path
    names: list[str] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.names)


def shim_filename(name: str, flavor: ShimFlavor) -> str:
    return f"{name}.cmd" if flavor is ShimFlavor.WINDOWS else name


def _clear_directory(directory: Path) -> list[Path]:
    removed: list[Path] = []
    for entry in directory.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            continue
        entry.unlink()
        removed.append(entry)
    return removed


def rehash(
    settings: BunenvSettings,
    *,
    inventory: VersionInventory | None = None,
    flavor: ShimFlavor | None = None,
) -> RehashOutcome:
    """Replace the contents of the shims directory with one shim per executable.

    Every file previously in the shims directory is removed first, so shims
    for executables no installed version provides disappear. The ``bun`` shim
    is always written, even with no versions installed.

    Args:
        settings: Active settings; the root is baked into each shim as its default.
        inventory: Inventory to scan; defaults to one over ``settings.layout``.
        flavor: Shim style; defaults to the host's.

    Returns:
        RehashOutcome: Names of the shims written.

    Raises:
        ShimError: If the shims directory cannot be cleared or written.
    """

    layout = settings.layout
    inventory = inventory or VersionInventory(layout)
    style = flavor or settings.shim_flavor
    context = ShimContext(default_root=layout.root, self_executable=settings.self_executable)
    script = render_shim(style, context)
    newline = "\r\n" if style is ShimFlavor.WINDOWS else "\n"

    shims_dir = layout.shims_dir
    outcome = RehashOutcome(shims_dir=shims_dir)
    try:
        shims_dir.mkdir(parents=True, exist_ok=True)
        outcome.removed = _clear_directory(shims_dir)
        for name in inventory.all_executables():
            destination = shims_dir / shim_filename(name, style)
            destination.write_text(script, encoding="utf-8", newline=newline)
            if style is ShimFlavor.POSIX:
                destination.chmod(0o755)
            outcome.names.append(name)
    except OSError as exc:
        raise ShimError(f"Failed to regenerate shims in {shims_dir}: {exc}") from exc
    LOGGER.debug("wrote %d shims to %s", outcome.count, shims_dir)
    return outcome


def shell_env(
    settings: BunenvSettings,
    version: str,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return a copy of ``environ`` pinned to ``version`` with the shims on ``PATH``."""

    env = dict(os.environ if environ is None else environ)
    env[VERSION_ENV_VAR] = version
    shims = str(settings.layout.shims_dir)
    entries = [entry for entry in env.get("PATH", "").split(os.pathsep) if entry and entry != shims]
    env["PATH"] = os.pathsep.join([shims, *entries])
    return env


__all__ = ["RehashOutcome", "rehash", "shell_env", "shim_filename"]
