# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for parsing, normalising and ordering version identifiers."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Final

from semver import Version

LATEST_ALIAS: Final[str] = "latest"
VERSION_FORMAT: Final[re.Pattern[str]] = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:-.*)?$")


def normalize_version(raw: str) -> str:
    """Return ``raw`` trimmed and without a leading ``v`` before a digit.

    Normalisation is idempotent and leaves aliases such as ``latest`` alone.
    """

    candidate = raw.strip()
    if len(candidate) > 1 and candidate[0] in "vV" and candidate[1].isdigit():
        return candidate[1:]
    return candidate


def parse_version(raw: str) -> Version | None:
    """Return the parsed semantic version for ``raw`` or ``None`` when invalid."""

    try:
        return Version.parse(normalize_version(raw))
    except (TypeError, ValueError):
        return None


def is_valid_version(raw: str) -> bool:
    """Return ``True`` when ``raw`` is an exact semantic version (``v`` prefix allowed)."""

    return parse_version(raw) is not None


def is_valid_version_format(raw: str) -> bool:
    """Return ``True`` when ``raw`` matches the ``x.y.z`` shape commands accept."""

    return VERSION_FORMAT.match(raw.strip()) is not None


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Return the valid entries of ``versions`` in ascending semantic-version order.

    Invalid identifiers are dropped.
    """

    parsed = [(parsed, raw) for raw in versions if (parsed := parse_version(raw)) is not None]
    parsed.sort(key=lambda item: item[0])
    return [raw for _, raw in parsed]


def highest_version(versions: Iterable[str]) -> str | None:
    """Return the highest valid version in ``versions``."""

    ordered = sort_versions(versions)
    return ordered[-1] if ordered else None


__all__ = [
    "LATEST_ALIAS",
    "VERSION_FORMAT",
    "highest_version",
    "is_valid_version",
    "is_valid_version_format",
    "normalize_version",
    "parse_version",
    "sort_versions",
]
