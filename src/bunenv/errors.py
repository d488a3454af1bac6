# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the bunenv core and command layer."""

from __future__ import annotations


class BunenvError(RuntimeError):
    """Base class for failures the command layer reports to the user."""

    hint: str | None = None

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        """Initialise the error with a message and optional remediation hint.

        Args:
            message: Human-readable description of the failure.
            hint: Follow-up action the user can take, when one exists.
        """

        super().__init__(message)
        if hint is not None:
            self.hint = hint


class ConfigError(BunenvError):
    """Raised when environment-provided settings cannot be interpreted."""


class InvalidVersionError(BunenvError):
    """Raised when a version string is not a well-formed identifier."""

    def __init__(self, version: str) -> None:
        super().__init__(
            f"Invalid version format: {version}. Expected format: x.y.z",
            hint="Versions look like 1.1.8 (an optional leading 'v' is accepted).",
        )
        self.version = version


class VersionNotInstalledError(BunenvError):
    """Raised when an operation requires a version that is not installed."""

    def __init__(self, version: str) -> None:
        super().__init__(
            f"Bun {version} is not installed.",
            hint=f"Use 'bunenv install {version}' to install it.",
        )
        self.version = version


class VersionFileError(BunenvError):
    """Raised when a global or local version marker cannot be written."""


class InstallError(BunenvError):
    """Raised when downloading or unpacking a Bun release fails."""


class ShimError(BunenvError):
    """Raised when shims cannot be rendered or written."""


__all__ = [
    "BunenvError",
    "ConfigError",
    "InstallError",
    "InvalidVersionError",
    "ShimError",
    "VersionFileError",
    "VersionNotInstalledError",
]
