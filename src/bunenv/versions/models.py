# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models describing resolved versions."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class VersionSource(StrEnum):
    """Where an effective version was found, in precedence order."""

    ENVIRONMENT = "environment"
    LOCAL_FILE = "local-file"
    MANIFEST = "manifest"
    GLOBAL_FILE = "global-file"


class ResolvedVersion(BaseModel):
    """Effective version for a working directory together with its provenance."""

    model_config = ConfigDict(frozen=True)

    version: str
    selector: str
    source: VersionSource
    origin: Path | None = None

    def describe(self) -> str:
        """Return a short human-readable explanation of where the version came from."""

        if self.source is VersionSource.ENVIRONMENT:
            where = "set by the BUNENV_VERSION environment variable"
        elif self.source is VersionSource.MANIFEST:
            where = f"set by engines.bun in {self.origin}"
        else:
            where = f"set by {self.origin}"
        if self.selector != self.version:
            return f"{where}, selector '{self.selector}'"
        return where


__all__ = ["ResolvedVersion", "VersionSource"]
