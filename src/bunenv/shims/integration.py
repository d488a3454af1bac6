# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shell startup snippets printed by ``bunenv init``."""

from __future__ import annotations

import shlex
from pathlib import Path

from ..paths import ROOT_ENV_VAR, SHIMS_SUBDIR, TOOL_NAME
from ..platform import ShellType

_POSIX_SCRIPT = """\
# {tool} shell integration
export {root_env}={root}
export PATH="${root_env}/{shims}:$PATH"

{tool}_init() {{
  command {tool} rehash 2>/dev/null
}}

# Initialize {tool}
{tool}_init
"""

_FISH_SCRIPT = """\
# {tool} shell integration
set -gx {root_env} {root}
set -gx PATH "${root_env}/{shims}" $PATH

function {tool}_init
  command {tool} rehash 2>/dev/null
end

# Initialize {tool}
{tool}_init
"""

_POWERSHELL_SCRIPT = """\
# {tool} shell integration
$env:{root_env} = {root}
$env:PATH = (Join-Path $env:{root_env} '{shims}') + [IO.Path]::PathSeparator + $env:PATH

function {tool}_init {{
  & {tool} rehash 2>$null | Out-Null
}}

# Initialize {tool}
{tool}_init
"""

_CMD_SCRIPT = """\
@rem {tool} shell integration
@set "{root_env}={root}"
@set "PATH=%{root_env}%\\{shims};%PATH%"
@{tool} rehash >nul 2>&1
"""


def _powershell_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def init_script(shell: ShellType, root: Path) -> str:
    """Return the integration snippet for ``shell``.

    The snippet exports ``BUNENV_ROOT`` as ``root``, puts the shims directory
    in front of ``PATH`` and runs ``bunenv rehash`` once. Unknown shells get
    the bash flavour.
    """

    fields = {"tool": TOOL_NAME, "root_env": ROOT_ENV_VAR, "shims": SHIMS_SUBDIR}
    if shell is ShellType.FISH:
        return _FISH_SCRIPT.format(root=shlex.quote(str(root)), **fields)
    if shell is ShellType.POWERSHELL:
        return _POWERSHELL_SCRIPT.format(root=_powershell_quote(str(root)), **fields)
    if shell is ShellType.CMD:
        return _CMD_SCRIPT.format(root=str(root), **fields)
    return _POSIX_SCRIPT.format(root=shlex.quote(str(root)), **fields)


__all__ = ["init_script"]
