# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from bunenv.config import BunenvSettings
from bunenv.platform import OperatingSystem

FakeInstaller = Callable[..., Path]


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Return an empty home directory inside the test sandbox."""

    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def settings(tmp_path: Path, home_dir: Path) -> BunenvSettings:
    """Return POSIX settings rooted in the sandbox."""

    return BunenvSettings(
        root=tmp_path / "root",
        home=home_dir,
        self_executable=tmp_path / "self" / "bunenv",
        os_name=OperatingSystem.LINUX,
    )


def _write_executable(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def install_fake(settings: BunenvSettings) -> FakeInstaller:
    """Create fake installed versions whose executables echo their identity."""

    def _install(version: str, executables: Iterable[str] = ("bun",)) -> Path:
        bin_dir = settings.layout.bin_dir(version)
        for name in executables:
            _write_executable(bin_dir / name, f'#!/bin/sh\necho "{name} {version} $*"\n')
        return bin_dir

    return _install


@pytest.fixture
def write_executable() -> Callable[[Path, str], Path]:
    return _write_executable
