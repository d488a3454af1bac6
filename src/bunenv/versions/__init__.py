# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public exports for version identifiers, inventory and resolution."""

from __future__ import annotations

from .identifiers import (
    LATEST_ALIAS,
    highest_version,
    is_valid_version,
    is_valid_version_format,
    normalize_version,
    parse_version,
    sort_versions,
)
from .inventory import VersionInventory
from .models import ResolvedVersion, VersionSource
from .ranges import VersionRange, is_range
from .resolver import (
    VersionResolver,
    find_manifest_version,
    find_version_file,
    read_version_file,
    resolve_selector,
)
from .selection import (
    read_global_version,
    read_local_version,
    require_installed_version,
    set_global_version,
    set_local_version,
)

__all__ = [
    "LATEST_ALIAS",
    "ResolvedVersion",
    "VersionInventory",
    "VersionRange",
    "VersionResolver",
    "VersionSource",
    "find_manifest_version",
    "find_version_file",
    "highest_version",
    "is_range",
    "is_valid_version",
    "is_valid_version_format",
    "normalize_version",
    "parse_version",
    "read_global_version",
    "read_local_version",
    "read_version_file",
    "require_installed_version",
    "resolve_selector",
    "set_global_version",
    "set_local_version",
    "sort_versions",
]
