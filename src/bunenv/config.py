# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process-wide settings resolved once from the environment."""

from __future__ import annotations

import os
import sysconfig
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError
from .paths import TOOL_NAME, VERSION_ENV_VAR, BunenvLayout, executable_filename, resolve_root, system_runtime_path
from .platform import OperatingSystem, ShimFlavor, default_shim_flavor, detect_os

DEBUG_ENV_VAR: Final[str] = "BUNENV_DEBUG"
TIMEOUT_ENV_VAR: Final[str] = "BUNENV_DOWNLOAD_TIMEOUT"
DEFAULT_DOWNLOAD_TIMEOUT: Final[float] = 60.0
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


def _default_self_executable(windows: bool) -> Path:
    scripts = sysconfig.get_path("scripts")
    return Path(scripts) / executable_filename(TOOL_NAME, windows=windows)


class BunenvSettings(BaseModel):
    """Immutable view of the environment a bunenv invocation runs in."""

    model_config = ConfigDict(frozen=True)

    root: Path
    home: Path
    version_override: str | None = None
    self_executable: Path
    os_name: OperatingSystem = Field(default_factory=detect_os)
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT
    debug: bool = False

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        home: Path | None = None,
        os_name: OperatingSystem | None = None,
    ) -> BunenvSettings:
        """Build settings from ``environ`` (defaults to :data:`os.environ`).

        Args:
            environ: Environment mapping consulted for overrides.
            home: Home directory; defaults to :meth:`Path.home`.
            os_name: Operating system override, mainly for tests.

        Returns:
            BunenvSettings: Frozen settings for the current invocation.

        Raises:
            ConfigError: If ``BUNENV_DOWNLOAD_TIMEOUT`` is not a positive number.
        """

        env = os.environ if environ is None else environ
        home_dir = Path.home() if home is None else home
        system = detect_os() if os_name is None else os_name
        return cls(
            root=resolve_root(env, home_dir),
            home=home_dir,
            version_override=env.get(VERSION_ENV_VAR) or None,
            self_executable=_default_self_executable(system is OperatingSystem.WINDOWS),
            os_name=system,
            download_timeout=_parse_timeout(env.get(TIMEOUT_ENV_VAR)),
            debug=(env.get(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY),
        )

    @property
    def windows(self) -> bool:
        return self.os_name is OperatingSystem.WINDOWS

    @property
    def layout(self) -> BunenvLayout:
        """Return the path registry rooted at :attr:`root`."""

        return BunenvLayout(root=self.root, windows=self.windows)

    @property
    def shim_flavor(self) -> ShimFlavor:
        return default_shim_flavor(self.os_name)

    @property
    def system_runtime(self) -> Path:
        """Return the Bun binary used as a fallback outside the managed tree."""

        return system_runtime_path(self.home, windows=self.windows)


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_DOWNLOAD_TIMEOUT
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV_VAR} must be a number of seconds, got {raw!r}.") from exc
    if value <= 0:
        raise ConfigError(f"{TIMEOUT_ENV_VAR} must be positive, got {raw!r}.")
    return value


__all__ = [
    "BunenvSettings",
    "DEBUG_ENV_VAR",
    "DEFAULT_DOWNLOAD_TIMEOUT",
    "TIMEOUT_ENV_VAR",
]
