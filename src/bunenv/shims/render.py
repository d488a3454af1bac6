# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render shim scripts from the packaged templates."""

from __future__ import annotations

import string
from dataclasses import dataclass
from functools import cache
from importlib import resources
from pathlib import Path, PureWindowsPath
from typing import Final

from ..errors import ShimError
from ..paths import (
    BIN_SUBDIR,
    GLOBAL_VERSION_FILENAME,
    LOCAL_VERSION_FILENAME,
    MANIFEST_ENGINE_NAME,
    MANIFEST_ENGINES_KEY,
    MANIFEST_FILENAME,
    PRIMARY_EXECUTABLE,
    ROOT_ENV_VAR,
    SYSTEM_RUNTIME_SUBPATH,
    TOOL_NAME,
    VERSION_ENV_VAR,
    VERSIONS_SUBDIR,
    executable_filename,
)
from ..platform import ShimFlavor
from ..versions import LATEST_ALIAS

_TEMPLATE_FILES: Final[dict[ShimFlavor, str]] = {
    ShimFlavor.POSIX: "posix.sh",
    ShimFlavor.WINDOWS: "windows.cmd",
}
_POSIX_SPECIALS: Final[tuple[str, ...]] = ("\\", '"', "$", "`")


class ShimTemplate(string.Template):
    """``string.Template`` using ``@{NAME}`` placeholders.

    Both shell dialects use ``$`` and ``%`` heavily, so neither works as the
    delimiter.
    """

    delimiter = "@"
    flags = 0
    idpattern = r"[A-Z][A-Z_]*"


@dataclass(frozen=True, slots=True)
class ShimContext:
    """Values substituted into a shim template."""

    default_root: Path
    self_executable: Path

    def placeholders(self, flavor: ShimFlavor) -> dict[str, str]:
        windows = flavor is ShimFlavor.WINDOWS
        runtime_parts = (*SYSTEM_RUNTIME_SUBPATH, executable_filename(PRIMARY_EXECUTABLE, windows=windows))
        system_runtime = str(PureWindowsPath(*runtime_parts)) if windows else "/".join(runtime_parts)
        return {
            "TOOL_NAME": TOOL_NAME,
            "PRIMARY": PRIMARY_EXECUTABLE,
            "VERSION_ENV": VERSION_ENV_VAR,
            "ROOT_ENV": ROOT_ENV_VAR,
            "DEFAULT_ROOT": str(self.default_root),
            "SELF_EXECUTABLE": str(self.self_executable),
            "SYSTEM_RUNTIME": system_runtime,
            "MARKER": LOCAL_VERSION_FILENAME,
            "MANIFEST": MANIFEST_FILENAME,
            "MANIFEST_ENGINES": MANIFEST_ENGINES_KEY,
            "ENGINE_KEY": MANIFEST_ENGINE_NAME,
            "GLOBAL_FILE": GLOBAL_VERSION_FILENAME,
            "VERSIONS_SUBDIR": VERSIONS_SUBDIR,
            "BIN_SUBDIR": BIN_SUBDIR,
            "LATEST_ALIAS": LATEST_ALIAS,
        }


def escape_value(value: str, flavor: ShimFlavor) -> str:
    """Escape ``value`` for a double-quoted string in the target dialect."""

    if flavor is ShimFlavor.WINDOWS:
        return value.replace("%", "%%").replace('"', "")
    escaped = value
    for special in _POSIX_SPECIALS:
        escaped = escaped.replace(special, "\\" + special)
    return escaped


@cache
def load_template(flavor: ShimFlavor) -> ShimTemplate:
    """Return the packaged template for ``flavor``."""

    resource = resources.files(__package__) / "templates" / _TEMPLATE_FILES[flavor]
    return ShimTemplate(resource.read_text(encoding="utf-8"))


def render_shim(flavor: ShimFlavor, context: ShimContext) -> str:
    """Return the shim script text for ``flavor``.

    Raises:
        ShimError: If the template references a placeholder with no value.
    """

    values = {key: escape_value(value, flavor) for key, value in context.placeholders(flavor).items()}
    rendered = load_template(flavor).safe_substitute(values)
    if "@{" in rendered:
        start = rendered.index("@{")
        end = rendered.find("}", start)
        raise ShimError(f"Shim template has an unknown placeholder: {rendered[start : end + 1]}")
    return rendered


__all__ = ["ShimContext", "ShimTemplate", "escape_value", "load_template", "render_shim"]
