# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shim generation and shell integration."""

from __future__ import annotations

from .integration import init_script
from .manager import RehashOutcome, rehash, shell_env, shim_filename
from .render import ShimContext, render_shim

__all__ = [
    "RehashOutcome",
    "ShimContext",
    "init_script",
    "rehash",
    "render_shim",
    "shell_env",
    "shim_filename",
]
