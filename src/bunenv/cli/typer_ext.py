# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer subclasses that keep ``--help`` listings alphabetical."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import typer
from click.core import Argument, Context, Parameter
from typer.core import TyperCommand, TyperGroup

F = TypeVar("F", bound=Callable[..., Any])


def _option_sort_key(param: Parameter) -> str:
    names = [*getattr(param, "opts", ()), *getattr(param, "secondary_opts", ())]
    long_names = [name for name in names if name.startswith("--")]
    chosen = long_names[0] if long_names else (names[0] if names else param.name or "")
    return chosen.lstrip("-").lower()


def sort_params(params: list[Parameter]) -> list[Parameter]:
    """Return ``params`` with arguments first, in declaration order, then options by name.

    Both the plain click formatter and Typer's rich formatter render help
    from ``get_params``, so ordering here covers either renderer.
    """

    arguments = [param for param in params if isinstance(param, Argument)]
    options = sorted((param for param in params if not isinstance(param, Argument)), key=_option_sort_key)
    return [*arguments, *options]


class SortedTyperCommand(TyperCommand):
    """Command whose help lists options by name."""

    def get_params(self, ctx: Context) -> list[Parameter]:
        return sort_params(super().get_params(ctx))


class SortedTyperGroup(TyperGroup):
    """Group listing its options and subcommands alphabetically."""

    command_class = SortedTyperCommand

    def get_params(self, ctx: Context) -> list[Parameter]:
        return sort_params(super().get_params(ctx))

    def list_commands(self, ctx: Context) -> list[str]:
        return sorted(self.commands)


class SortedTyper(typer.Typer):
    """Typer application whose commands default to :class:`SortedTyperCommand`."""

    def __init__(self, *args: Any, cls: type[TyperGroup] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, cls=cls or SortedTyperGroup, **kwargs)

    def command(
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Callable[[F], F]:
        return super().command(name, cls=cls or SortedTyperCommand, **kwargs)


def create_typer(**kwargs: Any) -> SortedTyper:
    """Return a :class:`SortedTyper` built with ``kwargs``."""

    return SortedTyper(**kwargs)


__all__ = ["SortedTyper", "SortedTyperCommand", "SortedTyperGroup", "create_typer", "sort_params"]
