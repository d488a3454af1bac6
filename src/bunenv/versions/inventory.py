# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery of installed Bun versions and the executables they ship."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Final

from ..paths import PRIMARY_EXECUTABLE, BunenvLayout
from .identifiers import normalize_version, parse_version, sort_versions

LOGGER = logging.getLogger(__name__)

WINDOWS_EXECUTABLE_SUFFIXES: Final[tuple[str, ...]] = (".exe", ".cmd", ".bat")
_EXECUTE_BITS: Final[int] = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _is_version_dirname(name: str) -> bool:
    return normalize_version(name) == name and parse_version(name) is not None


def executable_name(path: Path, *, windows: bool) -> str | None:
    """Return the command name ``path`` provides, or ``None`` if it is not executable.

    POSIX hosts look at permission bits; Windows hosts look at the file
    extension and strip it from the returned name.
    """

    try:
        mode = path.stat().st_mode
    except OSError:
        return None
    if not stat.S_ISREG(mode):
        return None
    if windows:
        suffix = path.suffix.lower()
        return path.stem if suffix in WINDOWS_EXECUTABLE_SUFFIXES else None
    return path.name if mode & _EXECUTE_BITS else None


class VersionInventory:
    """Read-only view over ``<root>/versions``."""

    def __init__(self, layout: BunenvLayout) -> None:
        self._layout = layout

    @property
    def layout(self) -> BunenvLayout:
        return self._layout

    def list_installed(self) -> list[str]:
        """Return installed versions in ascending semantic-version order.

        Entries whose names are not exact version identifiers are skipped. A
        missing or unreadable versions directory yields an empty list.
        """

        try:
            entries = list(self._layout.versions_dir.iterdir())
        except OSError:
            return []
        names = [entry.name for entry in entries if entry.is_dir() and _is_version_dirname(entry.name)]
        return sort_versions(names)

    def is_installed(self, version: str) -> bool:
        """Return ``True`` when the primary executable of ``version`` exists and is executable."""

        if not version or os.sep in version or (os.altsep and os.altsep in version):
            return False
        binary = self._layout.binary_path(version)
        if not binary.is_file():
            return False
        return self._layout.windows or os.access(binary, os.X_OK)

    def executables(self, version: str) -> set[str]:
        """Return the command names found in ``version``'s ``bin`` directory."""

        bin_dir = self._layout.bin_dir(version)
        try:
            entries = list(bin_dir.iterdir())
        except OSError:
            LOGGER.debug("no readable bin directory for %s at %s", version, bin_dir)
            return set()
        names: set[str] = set()
        for entry in entries:
            name = executable_name(entry, windows=self._layout.windows)
            if name:
                names.add(name)
        return names

    def all_executables(self) -> list[str]:
        """Return every command name across installed versions plus ``bun``, sorted."""

        names: set[str] = {PRIMARY_EXECUTABLE}
        for version in self.list_installed():
            names.update(self.executables(version))
        return sorted(names)


__all__ = ["VersionInventory", "WINDOWS_EXECUTABLE_SUFFIXES", "executable_name"]
