# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for environment-derived settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from bunenv.config import DEFAULT_DOWNLOAD_TIMEOUT, BunenvSettings
from bunenv.errors import ConfigError
from bunenv.platform import OperatingSystem, ShimFlavor


def test_from_environ_defaults(tmp_path: Path) -> None:
    settings = BunenvSettings.from_environ({}, home=tmp_path, os_name=OperatingSystem.LINUX)

    assert settings.root == tmp_path / ".bunenv"
    assert settings.version_override is None
    assert settings.download_timeout == DEFAULT_DOWNLOAD_TIMEOUT
    assert settings.debug is False
    assert settings.self_executable.name == "bunenv"
    assert settings.shim_flavor is ShimFlavor.POSIX
    assert settings.system_runtime == tmp_path / ".bun" / "bin" / "bun"


def test_from_environ_reads_overrides(tmp_path: Path) -> None:
    env = {
        "BUNENV_ROOT": str(tmp_path / "elsewhere"),
        "BUNENV_VERSION": "1.1.0",
        "BUNENV_DOWNLOAD_TIMEOUT": "5",
        "BUNENV_DEBUG": "yes",
    }

    settings = BunenvSettings.from_environ(env, home=tmp_path, os_name=OperatingSystem.LINUX)

    assert settings.root == tmp_path / "elsewhere"
    assert settings.layout.root == tmp_path / "elsewhere"
    assert settings.version_override == "1.1.0"
    assert settings.download_timeout == 5.0
    assert settings.debug is True


def test_empty_version_override_is_ignored(tmp_path: Path) -> None:
    settings = BunenvSettings.from_environ({"BUNENV_VERSION": ""}, home=tmp_path)

    assert settings.version_override is None


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout_raises_config_error(tmp_path: Path, raw: str) -> None:
    with pytest.raises(ConfigError):
        BunenvSettings.from_environ({"BUNENV_DOWNLOAD_TIMEOUT": raw}, home=tmp_path)


def test_windows_settings_use_windows_layout(tmp_path: Path) -> None:
    settings = BunenvSettings.from_environ({}, home=tmp_path, os_name=OperatingSystem.WINDOWS)

    assert settings.windows
    assert settings.layout.binary_path("1.0.0").name == "bun.exe"
    assert settings.self_executable.name == "bunenv.exe"
    assert settings.shim_flavor is ShimFlavor.WINDOWS


def test_settings_are_frozen(settings: BunenvSettings) -> None:
    with pytest.raises(ValidationError):
        settings.debug = True  # type: ignore[misc]
