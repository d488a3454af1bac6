# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for writing and reading version markers."""

from __future__ import annotations

from pathlib import Path

import pytest

from bunenv.config import BunenvSettings
from bunenv.errors import InvalidVersionError, VersionFileError, VersionNotInstalledError
from bunenv.versions import (
    VersionInventory,
    VersionResolver,
    read_global_version,
    read_local_version,
    set_global_version,
    set_local_version,
)


def test_set_global_round_trip(settings: BunenvSettings, install_fake, tmp_path: Path) -> None:
    install_fake("1.1.0")
    inventory = VersionInventory(settings.layout)

    assert set_global_version(inventory, "v1.1.0") == "1.1.0"
    assert settings.layout.global_version_file.read_text(encoding="utf-8") == "1.1.0"
    assert read_global_version(inventory) == "1.1.0"
    assert VersionResolver(settings, cwd=tmp_path).resolve_version() == "1.1.0"


def test_set_local_writes_marker_in_directory(settings: BunenvSettings, install_fake, tmp_path: Path) -> None:
    install_fake("1.0.0")
    project = tmp_path / "project"
    project.mkdir()
    inventory = VersionInventory(settings.layout)

    set_local_version(inventory, "1.0.0", project)

    marker = project / ".bun-version"
    assert marker.read_text(encoding="utf-8") == "1.0.0"
    assert read_local_version(inventory, project) == "1.0.0"
    assert read_local_version(inventory, project / "nested") is None


def test_set_version_rejects_bad_format(settings: BunenvSettings) -> None:
    inventory = VersionInventory(settings.layout)

    with pytest.raises(InvalidVersionError) as excinfo:
        set_global_version(inventory, "1.1")

    assert "Expected format: x.y.z" in str(excinfo.value)
    assert not settings.layout.global_version_file.exists()


def test_set_version_requires_install(settings: BunenvSettings, tmp_path: Path) -> None:
    inventory = VersionInventory(settings.layout)

    with pytest.raises(VersionNotInstalledError) as excinfo:
        set_local_version(inventory, "2.0.0", tmp_path)

    assert excinfo.value.hint == "Use 'bunenv install 2.0.0' to install it."
    assert not (tmp_path / ".bun-version").exists()


def test_unwritable_marker_raises_version_file_error(settings: BunenvSettings, install_fake) -> None:
    install_fake("1.0.0")
    settings.layout.global_version_file.mkdir(parents=True)
    inventory = VersionInventory(settings.layout)

    with pytest.raises(VersionFileError) as excinfo:
        set_global_version(inventory, "1.0.0")

    assert str(settings.layout.global_version_file) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_read_global_without_file(settings: BunenvSettings) -> None:
    assert read_global_version(VersionInventory(settings.layout)) is None
