# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bun release asset naming and remote version discovery."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Final

from ..platform import OperatingSystem
from ..versions import is_valid_version, normalize_version, sort_versions
from .archive import fetch_json

LOGGER = logging.getLogger(__name__)

DOWNLOAD_URL_TEMPLATE: Final[str] = (
    "https://github.com/oven-sh/bun/releases/download/bun-v{version}/bun-{platform}-{arch}.zip"
)
RELEASES_API_URL: Final[str] = "https://api.github.com/repos/oven-sh/bun/releases?per_page=100"
RELEASE_TAG_PREFIX: Final[str] = "bun-"
_PLATFORM_LABELS: Final[dict[OperatingSystem, str]] = {
    OperatingSystem.DARWIN: "darwin",
    OperatingSystem.LINUX: "linux",
    OperatingSystem.WINDOWS: "win",
}


def platform_label(os_name: OperatingSystem) -> str:
    """Return the platform component of a Bun release asset name."""

    try:
        return _PLATFORM_LABELS[os_name]
    except KeyError:
        raise ValueError(f"Bun does not publish release archives for platform '{os_name}'") from None


def asset_stem(os_name: OperatingSystem, arch: str) -> str:
    """Return the archive's base name, e.g. ``bun-linux-x64``."""

    return f"bun-{platform_label(os_name)}-{arch}"


def download_url(version: str, os_name: OperatingSystem, arch: str) -> str:
    """Return the release archive URL for ``version`` on the given host."""

    return DOWNLOAD_URL_TEMPLATE.format(
        version=normalize_version(version),
        platform=platform_label(os_name),
        arch=arch,
    )


def versions_from_tags(tags: Iterable[str]) -> list[str]:
    """Convert release tags such as ``bun-v1.1.0`` into sorted versions.

    Tags without the ``bun-`` prefix or without a valid version are dropped.
    """

    versions: set[str] = set()
    for tag in tags:
        if not tag.startswith(RELEASE_TAG_PREFIX):
            continue
        candidate = tag[len(RELEASE_TAG_PREFIX) :]
        if is_valid_version(candidate):
            versions.add(normalize_version(candidate))
    return sort_versions(versions)


def fetch_remote_versions(*, timeout: float, url: str = RELEASES_API_URL) -> list[str]:
    """Return the versions published on the Bun releases page, ascending."""

    payload: Any = fetch_json(url, timeout=timeout)
    if not isinstance(payload, list):
        raise ValueError(f"Unexpected response from {url}")
    tags = [str(item["tag_name"]) for item in payload if isinstance(item, dict) and "tag_name" in item]
    LOGGER.debug("found %d release tags at %s", len(tags), url)
    return versions_from_tags(tags)


__all__ = [
    "DOWNLOAD_URL_TEMPLATE",
    "RELEASES_API_URL",
    "asset_stem",
    "download_url",
    "fetch_remote_versions",
    "platform_label",
    "versions_from_tags",
]
