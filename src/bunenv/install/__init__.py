# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Downloading and installing Bun releases."""

from __future__ import annotations

from .installer import InstallOutcome, InstallStatus, install_version
from .releases import download_url, fetch_remote_versions, versions_from_tags

__all__ = [
    "InstallOutcome",
    "InstallStatus",
    "download_url",
    "fetch_remote_versions",
    "install_version",
    "versions_from_tags",
]
