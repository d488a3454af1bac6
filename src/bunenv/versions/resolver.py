# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Determine the effective Bun version for a working directory.

Sources are consulted in a fixed order and the first one that yields a
value wins:

1. the ``BUNENV_VERSION`` environment variable;
2. the nearest ``.bun-version`` file, walking from the working directory up
   to the filesystem root;
3. the nearest ``package.json`` whose ``engines.bun`` field is a non-empty
   string, using the same walk;
4. the global ``<root>/version`` file.

Whatever value wins is then expanded against the installed versions:
``latest`` and range expressions select the highest matching installed
version, and anything that cannot be expanded is returned unchanged so
callers can name it in a "not installed" message.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..config import BunenvSettings
from ..paths import LOCAL_VERSION_FILENAME, MANIFEST_ENGINE_NAME, MANIFEST_ENGINES_KEY, MANIFEST_FILENAME
from .identifiers import LATEST_ALIAS, highest_version, is_valid_version, normalize_version
from .inventory import VersionInventory
from .models import ResolvedVersion, VersionSource
from .ranges import VersionRange, is_range

LOGGER = logging.getLogger(__name__)


def iter_ancestors(start: Path) -> Iterator[Path]:
    """Yield ``start`` and each of its parents, ending with the filesystem root."""

    seen: set[Path] = set()
    current = start
    while True:
        if current in seen:
            break
        seen.add(current)
        yield current
        if current.parent == current:
            break
        current = current.parent


def read_version_file(path: Path) -> str | None:
    """Return the first non-blank line of ``path`` trimmed, or ``None``.

    Missing, unreadable, undecodable and blank files all return ``None``.
    """

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    for line in content.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return None


def find_version_file(start: Path, filename: str = LOCAL_VERSION_FILENAME) -> Path | None:
    """Return the nearest ``filename`` at or above ``start``."""

    for directory in iter_ancestors(start):
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def read_manifest_version(path: Path) -> str | None:
    """Return ``engines.bun`` from the manifest at ``path`` when present.

    Malformed JSON and missing or non-string fields are treated as absent.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        LOGGER.debug("ignoring unreadable manifest %s", path)
        return None
    if not isinstance(payload, dict):
        return None
    engines = payload.get(MANIFEST_ENGINES_KEY)
    if not isinstance(engines, dict):
        return None
    value = engines.get(MANIFEST_ENGINE_NAME)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def find_manifest_version(start: Path) -> tuple[str, Path] | None:
    """Return the first ``engines.bun`` value found walking up from ``start``."""

    for directory in iter_ancestors(start):
        candidate = directory / MANIFEST_FILENAME
        if not candidate.is_file():
            continue
        value = read_manifest_version(candidate)
        if value is not None:
            return value, candidate
    return None


def resolve_selector(selector: str, installed: Sequence[str]) -> str:
    """Expand ``selector`` against the ``installed`` versions.

    Args:
        selector: Exact version, ``latest`` or range expression.
        installed: Installed versions; order does not matter.

    Returns:
        str: The installed version the selector designates, or the selector
        itself (with a leading ``v`` removed from exact versions) when nothing
        installed matches.
    """

    candidate = selector.strip()
    if candidate in installed:
        return candidate
    if candidate == LATEST_ALIAS:
        return highest_version(installed) or candidate
    normalized = normalize_version(candidate)
    if is_valid_version(candidate):
        return normalized
    if is_range(candidate):
        parsed = VersionRange.parse(candidate)
        if parsed is not None:
            return parsed.max_satisfying(installed) or candidate
    return candidate


class VersionResolver:
    """Apply the version precedence rules for one working directory."""

    def __init__(
        self,
        settings: BunenvSettings,
        *,
        cwd: Path | None = None,
        inventory: VersionInventory | None = None,
    ) -> None:
        self._settings = settings
        self._cwd = Path.cwd() if cwd is None else cwd
        self._inventory = inventory or VersionInventory(settings.layout)

    @property
    def cwd(self) -> Path:
        return self._cwd

    def resolve(self) -> ResolvedVersion | None:
        """Return the effective version with provenance, or ``None`` when nothing is selected."""

        override = (self._settings.version_override or "").strip()
        if override:
            return self._expand(override, VersionSource.ENVIRONMENT, None)

        marker = find_version_file(self._cwd)
        if marker is not None:
            selector = read_version_file(marker)
            if selector:
                return self._expand(selector, VersionSource.LOCAL_FILE, marker)
            LOGGER.debug("%s is empty or unreadable; continuing with package.json", marker)

        manifest = find_manifest_version(self._cwd)
        if manifest is not None:
            selector, origin = manifest
            return self._expand(selector, VersionSource.MANIFEST, origin)

        global_file = self._settings.layout.global_version_file
        selector = read_version_file(global_file)
        if selector:
            return self._expand(selector, VersionSource.GLOBAL_FILE, global_file)
        return None

    def resolve_version(self) -> str | None:
        """Return only the effective version string."""

        resolved = self.resolve()
        return resolved.version if resolved else None

    def _expand(self, selector: str, source: VersionSource, origin: Path | None) -> ResolvedVersion:
        version = resolve_selector(selector, self._inventory.list_installed())
        LOGGER.debug("resolved %r from %s to %s", selector, source.value, version)
        return ResolvedVersion(version=version, selector=selector, source=source, origin=origin)


__all__ = [
    "VersionResolver",
    "find_manifest_version",
    "find_version_file",
    "iter_ancestors",
    "read_manifest_version",
    "read_version_file",
    "resolve_selector",
]
