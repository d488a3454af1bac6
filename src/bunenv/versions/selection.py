# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reading and writing the global and per-project version markers."""

from __future__ import annotations

from pathlib import Path

from ..errors import InvalidVersionError, VersionFileError, VersionNotInstalledError
from .identifiers import is_valid_version_format, normalize_version
from .inventory import VersionInventory
from .resolver import read_version_file


def require_installed_version(inventory: VersionInventory, version: str) -> str:
    """Return the normalised ``version`` after checking its format and installation.

    Raises:
        InvalidVersionError: If ``version`` is not shaped like ``x.y.z``.
        VersionNotInstalledError: If the version has no installed binary.
    """

    if not is_valid_version_format(version):
        raise InvalidVersionError(version)
    normalized = normalize_version(version)
    if not inventory.is_installed(normalized):
        raise VersionNotInstalledError(normalized)
    return normalized


def _write_marker(path: Path, version: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(version, encoding="utf-8")
    except OSError as exc:
        raise VersionFileError(
            f"Could not write {path}: {exc.strerror or exc}",
            hint="Check that the location is a writable file.",
        ) from exc


def set_global_version(inventory: VersionInventory, version: str) -> str:
    """Record ``version`` in ``<root>/version`` and return the normalised value."""

    normalized = require_installed_version(inventory, version)
    _write_marker(inventory.layout.global_version_file, normalized)
    return normalized


def set_local_version(inventory: VersionInventory, version: str, directory: Path) -> str:
    """Record ``version`` in ``directory/.bun-version`` and return the normalised value."""

    normalized = require_installed_version(inventory, version)
    _write_marker(inventory.layout.local_version_file(directory), normalized)
    return normalized


def read_global_version(inventory: VersionInventory) -> str | None:
    return read_version_file(inventory.layout.global_version_file)


def read_local_version(inventory: VersionInventory, directory: Path) -> str | None:
    """Return the marker in ``directory`` itself; ancestors are not consulted."""

    return read_version_file(inventory.layout.local_version_file(directory))


__all__ = [
    "read_global_version",
    "read_local_version",
    "require_installed_version",
    "set_global_version",
    "set_local_version",
]
