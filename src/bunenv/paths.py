# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem layout of a bunenv install root."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

TOOL_NAME: Final[str] = "bunenv"
PRIMARY_EXECUTABLE: Final[str] = "bun"
ROOT_ENV_VAR: Final[str] = "BUNENV_ROOT"
VERSION_ENV_VAR: Final[str] = "BUNENV_VERSION"
ROOT_DIR_NAME: Final[str] = ".bunenv"
VERSIONS_SUBDIR: Final[str] = "versions"
SHIMS_SUBDIR: Final[str] = "shims"
BIN_SUBDIR: Final[str] = "bin"
GLOBAL_VERSION_FILENAME: Final[str] = "version"
LOCAL_VERSION_FILENAME: Final[str] = ".bun-version"
MANIFEST_FILENAME: Final[str] = "package.json"
MANIFEST_ENGINES_KEY: Final[str] = "engines"
MANIFEST_ENGINE_NAME: Final[str] = "bun"
SYSTEM_RUNTIME_SUBPATH: Final[tuple[str, ...]] = (".bun", "bin")


def default_root(home: Path) -> Path:
    """Return the install root used when ``BUNENV_ROOT`` is unset."""

    return home / ROOT_DIR_NAME


def resolve_root(environ: Mapping[str, str], home: Path) -> Path:
    """Return the install root honouring the ``BUNENV_ROOT`` override.

    Args:
        environ: Environment mapping consulted for the override.
        home: Home directory used for the fallback location.

    Returns:
        Path: Override when set and non-empty, otherwise ``<home>/.bunenv``.
    """

    override = environ.get(ROOT_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return default_root(home)


def executable_filename(name: str, *, windows: bool) -> str:
    """Return the on-disk filename of executable ``name`` for the platform."""

    return f"{name}.exe" if windows else name


def system_runtime_path(home: Path, *, windows: bool = False) -> Path:
    """Return the location of a Bun installed outside the managed tree."""

    return home.joinpath(*SYSTEM_RUNTIME_SUBPATH, executable_filename(PRIMARY_EXECUTABLE, windows=windows))


@dataclass(frozen=True, slots=True)
class BunenvLayout:
    """Well-known locations beneath an install root.

    Every property is a pure derivation from :attr:`root`; nothing touches the
    filesystem except :meth:`ensure_directories`.
    """

    root: Path
    windows: bool = False

    @property
    def versions_dir(self) -> Path:
        """Return the directory holding one subdirectory per installed version."""

        return self.root / VERSIONS_SUBDIR

    @property
    def shims_dir(self) -> Path:
        """Return the directory holding generated shims."""

        return self.root / SHIMS_SUBDIR

    @property
    def global_version_file(self) -> Path:
        """Return the global marker file."""

        return self.root / GLOBAL_VERSION_FILENAME

    def version_dir(self, version: str) -> Path:
        return self.versions_dir / version

    def bin_dir(self, version: str) -> Path:
        return self.version_dir(version) / BIN_SUBDIR

    def binary_path(self, version: str) -> Path:
        """Return the primary executable for ``version``."""

        return self.bin_dir(version) / executable_filename(PRIMARY_EXECUTABLE, windows=self.windows)

    def local_version_file(self, directory: Path) -> Path:
        return directory / LOCAL_VERSION_FILENAME

    @property
    def directories(self) -> tuple[Path, ...]:
        return (self.root, self.versions_dir, self.shims_dir)

    def ensure_directories(self) -> None:
        """Create the root, versions and shims directories when absent."""

        for path in self.directories:
            path.mkdir(parents=True, exist_ok=True)


__all__ = [
    "BIN_SUBDIR",
    "BunenvLayout",
    "GLOBAL_VERSION_FILENAME",
    "LOCAL_VERSION_FILENAME",
    "MANIFEST_ENGINES_KEY",
    "MANIFEST_ENGINE_NAME",
    "MANIFEST_FILENAME",
    "PRIMARY_EXECUTABLE",
    "ROOT_DIR_NAME",
    "ROOT_ENV_VAR",
    "SHIMS_SUBDIR",
    "TOOL_NAME",
    "VERSIONS_SUBDIR",
    "VERSION_ENV_VAR",
    "default_root",
    "executable_filename",
    "resolve_root",
    "system_runtime_path",
]
