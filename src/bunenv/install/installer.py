# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install Bun releases into the versions directory."""

from __future__ import annotations

import logging
import shutil
import tempfile
import zipfile
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from ..config import BunenvSettings
from ..errors import InstallError, InvalidVersionError
from ..paths import PRIMARY_EXECUTABLE, executable_filename
from ..platform import detect_arch
from ..versions import VersionInventory, is_valid_version, is_valid_version_format, normalize_version
from .archive import download, safe_extract_zip
from .releases import asset_stem, download_url

LOGGER = logging.getLogger(__name__)


class InstallStatus(StrEnum):
    """Result of an install request."""

    INSTALLED = "installed"
    ALREADY_INSTALLED = "already-installed"


@dataclass(frozen=True, slots=True)
class InstallOutcome:
    """Describe what :func:`install_version` did."""

    version: str
    status: InstallStatus
    binary: Path
    replaced: bool = False


def _locate_binary(extract_dir: Path, stem: str, filename: str) -> Path | None:
    expected = extract_dir / stem / filename
    if expected.is_file():
        return expected
    for candidate in sorted(extract_dir.rglob(filename)):
        if candidate.is_file():
            return candidate
    return None


def _populate(settings: BunenvSettings, version: str, arch: str, work_dir: Path) -> Path:
    layout = settings.layout
    url = download_url(version, settings.os_name, arch)
    archive_path = work_dir / "bun.zip"
    LOGGER.debug("downloading %s", url)
    download(url, archive_path, timeout=settings.download_timeout)

    extract_dir = work_dir / "extract"
    with zipfile.ZipFile(archive_path) as archive:
        safe_extract_zip(archive, extract_dir)

    filename = executable_filename(PRIMARY_EXECUTABLE, windows=settings.windows)
    source = _locate_binary(extract_dir, asset_stem(settings.os_name, arch), filename)
    if source is None:
        raise InstallError(f"Could not find the {PRIMARY_EXECUTABLE} executable in {url}")

    binary = layout.binary_path(version)
    binary.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, binary)
    binary.chmod(0o755)
    return binary


def install_version(
    settings: BunenvSettings,
    version: str,
    *,
    force: bool = False,
    arch: str | None = None,
) -> InstallOutcome:
    """Download and unpack Bun ``version`` into ``<root>/versions``.

    Args:
        settings: Active settings providing the layout, platform and timeout.
        version: Requested version; a leading ``v`` is accepted.
        force: Remove an existing installation and install again.
        arch: Architecture label override; defaults to the host's.

    Returns:
        InstallOutcome: The normalised version and what happened to it.

    Raises:
        InvalidVersionError: If ``version`` is not shaped like ``x.y.z`` or is
            not a semantic version the inventory would list.
        InstallError: If the download, extraction or verification fails. The
            partially created version directory is removed first.
    """

    if not is_valid_version_format(version) or not is_valid_version(version):
        raise InvalidVersionError(version)
    normalized = normalize_version(version)
    layout = settings.layout
    inventory = VersionInventory(layout)
    binary = layout.binary_path(normalized)

    if not force and inventory.is_installed(normalized):
        return InstallOutcome(normalized, InstallStatus.ALREADY_INSTALLED, binary)

    target_arch = arch or detect_arch()
    if target_arch == "unknown":
        raise InstallError(f"Unsupported architecture for Bun {normalized}.")

    version_dir = layout.version_dir(normalized)
    replaced = False
    if force and version_dir.exists():
        LOGGER.debug("removing existing installation at %s", version_dir)
        shutil.rmtree(version_dir)
        replaced = True

    layout.ensure_directories()
    try:
        with tempfile.TemporaryDirectory(prefix="bunenv-") as work_dir:
            _populate(settings, normalized, target_arch, Path(work_dir))
        if not inventory.is_installed(normalized):
            raise InstallError(f"Failed to install Bun {normalized}.")
    except InstallError:
        shutil.rmtree(version_dir, ignore_errors=True)
        raise
    except (OSError, ValueError, RuntimeError, zipfile.BadZipFile) as exc:
        shutil.rmtree(version_dir, ignore_errors=True)
        raise InstallError(
            f"Failed to install Bun {normalized}: {exc}",
            hint="Check the version exists at https://github.com/oven-sh/bun/releases.",
        ) from exc
    LOGGER.debug("installed %s at %s", normalized, binary)
    return InstallOutcome(normalized, InstallStatus.INSTALLED, binary, replaced)


__all__ = ["InstallOutcome", "InstallStatus", "install_version"]
