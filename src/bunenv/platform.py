# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Operating system, architecture and shell detection."""

from __future__ import annotations

import os
import platform
import sys
from collections.abc import Mapping
from enum import StrEnum
from pathlib import PurePath
from typing import Final


class OperatingSystem(StrEnum):
    """Operating systems Bun publishes release archives for."""

    DARWIN = "darwin"
    LINUX = "linux"
    WINDOWS = "windows"
    UNKNOWN = "unknown"


class ShellType(StrEnum):
    """Interactive shells ``bunenv init`` knows how to integrate with."""

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"
    POWERSHELL = "powershell"
    CMD = "cmd"
    UNKNOWN = "unknown"


class ShimFlavor(StrEnum):
    """Launcher artefact style written by ``rehash``."""

    POSIX = "posix"
    WINDOWS = "windows"


ARCH_ALIASES: Final[dict[str, str]] = {
    "amd64": "x64",
    "x86_64": "x64",
    "x64": "x64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


def detect_os(sys_platform: str | None = None) -> OperatingSystem:
    """Return the current operating system.

    Args:
        sys_platform: Optional ``sys.platform`` value used instead of the live one.

    Returns:
        OperatingSystem: Detected system or :attr:`OperatingSystem.UNKNOWN`.
    """

    value = sys.platform if sys_platform is None else sys_platform
    if value == "darwin":
        return OperatingSystem.DARWIN
    if value.startswith("linux"):
        return OperatingSystem.LINUX
    if value in {"win32", "cygwin"}:
        return OperatingSystem.WINDOWS
    return OperatingSystem.UNKNOWN


def detect_arch(machine: str | None = None) -> str:
    """Return the architecture label used in Bun release archive names."""

    raw = (platform.machine() if machine is None else machine).lower()
    return ARCH_ALIASES.get(raw, "unknown")


def detect_shell(
    environ: Mapping[str, str] | None = None,
    *,
    os_name: OperatingSystem | None = None,
) -> ShellType:
    """Return the interactive shell inferred from environment variables."""

    env = os.environ if environ is None else environ
    system = detect_os() if os_name is None else os_name
    shell = env.get("SHELL", "")
    if env.get("ZSH_VERSION"):
        return ShellType.ZSH
    if shell:
        named = shell_from_name(shell)
        if named is not ShellType.UNKNOWN:
            return named
    if system is OperatingSystem.WINDOWS:
        if env.get("PSModulePath"):
            return ShellType.POWERSHELL
        if env.get("COMSPEC"):
            return ShellType.CMD
    return ShellType.UNKNOWN


def shell_from_name(value: str) -> ShellType:
    """Map a shell path or name such as ``/usr/bin/zsh`` to a :class:`ShellType`."""

    name = PurePath(value).name.lower()
    if name.endswith(".exe"):
        name = name[: -len(".exe")]
    if name in {"pwsh", "powershell"}:
        return ShellType.POWERSHELL
    for candidate in (ShellType.BASH, ShellType.ZSH, ShellType.FISH, ShellType.CMD):
        if name == candidate.value:
            return candidate
    return ShellType.UNKNOWN


def default_shim_flavor(os_name: OperatingSystem | None = None) -> ShimFlavor:
    """Return the shim flavour appropriate for the host."""

    system = detect_os() if os_name is None else os_name
    return ShimFlavor.WINDOWS if system is OperatingSystem.WINDOWS else ShimFlavor.POSIX


__all__ = [
    "ARCH_ALIASES",
    "OperatingSystem",
    "ShellType",
    "ShimFlavor",
    "default_shim_flavor",
    "detect_arch",
    "detect_os",
    "detect_shell",
    "shell_from_name",
]
