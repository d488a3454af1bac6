# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""npm-compatible version range expressions.

Supported syntax mirrors what ``package.json`` authors write in
``engines.bun``:

* comparators ``<``, ``<=``, ``>``, ``>=`` and ``=`` (or no operator);
* caret (``^1.2.3``) and tilde (``~1.2.3``, ``~>1.2``) ranges;
* wildcards and partial versions (``1``, ``1.x``, ``1.2.*``, ``*``);
* hyphen ranges (``1.2.3 - 2.3``);
* whitespace for intersection and ``||`` for union.

A pre-release version only satisfies a comparator set when one of the
set's comparators carries a pre-release on the same ``major.minor.patch``
tuple, matching npm's default behaviour.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from semver import Version

from .identifiers import is_valid_version, parse_version

_NUMERIC: Final[str] = r"0|[1-9]\d*|[xX*]"
_PARTIAL_RE: Final[re.Pattern[str]] = re.compile(
    rf"^v?(?P<major>{_NUMERIC})"
    rf"(?:\.(?P<minor>{_NUMERIC})"
    rf"(?:\.(?P<patch>{_NUMERIC})"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?)?)?$"
)
_OPERATOR_RE: Final[re.Pattern[str]] = re.compile(r"^(?P<op><=|>=|<|>|=|~>|~|\^)?(?P<rest>.*)$")
_OPERATOR_GAP_RE: Final[re.Pattern[str]] = re.compile(r"(<=|>=|<|>|=|~>|~|\^)\s+")
_HYPHEN_RE: Final[re.Pattern[str]] = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")
_WILDCARDS: Final[frozenset[str]] = frozenset({"x", "X", "*"})

_COMPARISONS: Final[dict[str, Callable[[Version, Version], bool]]] = {
    "<": lambda left, right: left < right,
    "<=": lambda left, right: left <= right,
    ">": lambda left, right: left > right,
    ">=": lambda left, right: left >= right,
    "=": lambda left, right: left == right,
}


@dataclass(frozen=True, slots=True)
class _Partial:
    """Possibly incomplete version; ``None`` components are wildcards."""

    major: int | None
    minor: int | None
    patch: int | None
    prerelease: str | None = None

    @property
    def complete(self) -> bool:
        return self.patch is not None

    def floor(self) -> Version:
        return Version(self.major or 0, self.minor or 0, self.patch or 0, prerelease=self.prerelease)


@dataclass(frozen=True, slots=True)
class Comparator:
    """Single ``<op><version>`` test."""

    operator: str
    version: Version

    def test(self, candidate: Version) -> bool:
        return _COMPARISONS[self.operator](candidate, self.version)

    def __str__(self) -> str:
        return f"{'' if self.operator == '=' else self.operator}{self.version}"


_ANY: Final[tuple[Comparator, ...]] = (Comparator(">=", Version(0, 0, 0)),)
_NOTHING: Final[tuple[Comparator, ...]] = (Comparator("<", Version(0, 0, 0, prerelease="0")),)


def _upper(major: int, minor: int = 0, patch: int = 0) -> Version:
    """Return the exclusive upper bound that also excludes pre-releases of it."""

    return Version(major, minor, patch, prerelease="0")


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL_RE.match(text)
    if match is None:
        raise ValueError(f"invalid version in range: {text!r}")

    def component(name: str) -> int | None:
        value = match.group(name)
        if value is None or value in _WILDCARDS:
            return None
        return int(value)

    major = component("major")
    minor = component("minor") if major is not None else None
    patch = component("patch") if minor is not None else None
    prerelease = match.group("pre") if patch is not None else None
    return _Partial(major, minor, patch, prerelease)


def _tilde(partial: _Partial) -> tuple[Comparator, ...]:
    if partial.major is None:
        return _ANY
    if partial.minor is None:
        return (Comparator(">=", partial.floor()), Comparator("<", _upper(partial.major + 1)))
    return (
        Comparator(">=", partial.floor()),
        Comparator("<", _upper(partial.major, partial.minor + 1)),
    )


def _caret(partial: _Partial) -> tuple[Comparator, ...]:
    if partial.major is None:
        return _ANY
    lower = Comparator(">=", partial.floor())
    if partial.minor is None or partial.major > 0:
        return (lower, Comparator("<", _upper(partial.major + 1)))
    if partial.patch is None or partial.minor > 0:
        return (lower, Comparator("<", _upper(0, partial.minor + 1)))
    return (lower, Comparator("<", _upper(0, 0, partial.patch + 1)))


def _primitive(operator: str, partial: _Partial) -> tuple[Comparator, ...]:
    if partial.major is None:
        return _NOTHING if operator in {"<", ">"} else _ANY
    if partial.complete:
        return (Comparator(operator, partial.floor()),)
    major = partial.major
    minor = partial.minor
    if operator == ">":
        bump = Version(major + 1, 0, 0) if minor is None else Version(major, minor + 1, 0)
        return (Comparator(">=", bump),)
    if operator == "<=":
        return (Comparator("<", _upper(major + 1) if minor is None else _upper(major, minor + 1)),)
    if operator == "<":
        return (Comparator("<", _upper(major, minor or 0)),)
    if operator == ">=":
        return (Comparator(">=", partial.floor()),)
    # "=" on a partial version behaves like the matching x-range.
    return (
        Comparator(">=", partial.floor()),
        Comparator("<", _upper(major + 1) if minor is None else _upper(major, minor + 1)),
    )


def _parse_comparator(token: str) -> tuple[Comparator, ...]:
    match = _OPERATOR_RE.match(token)
    if match is None:  # pragma: no cover - the pattern accepts any string
        raise ValueError(f"invalid comparator: {token!r}")
    operator = match.group("op") or "="
    partial = _parse_partial(match.group("rest"))
    if operator in {"~", "~>"}:
        return _tilde(partial)
    if operator == "^":
        return _caret(partial)
    return _primitive(operator, partial)


def _parse_hyphen(low_text: str, high_text: str) -> tuple[Comparator, ...]:
    low = _parse_partial(low_text)
    high = _parse_partial(high_text)
    comparators: list[Comparator] = []
    if low.major is not None:
        comparators.append(Comparator(">=", low.floor()))
    if high.major is not None:
        if high.complete:
            comparators.append(Comparator("<=", high.floor()))
        elif high.minor is None:
            comparators.append(Comparator("<", _upper(high.major + 1)))
        else:
            comparators.append(Comparator("<", _upper(high.major, high.minor + 1)))
    return tuple(comparators) or _ANY


def _parse_set(text: str) -> tuple[Comparator, ...]:
    cleaned = _OPERATOR_GAP_RE.sub(r"\1", text.strip())
    if not cleaned:
        return _ANY
    hyphen = _HYPHEN_RE.match(cleaned)
    if hyphen is not None:
        return _parse_hyphen(hyphen.group("low"), hyphen.group("high"))
    comparators: list[Comparator] = []
    for token in cleaned.split():
        comparators.extend(_parse_comparator(token))
    return tuple(comparators)


def _allows_prerelease(comparators: Sequence[Comparator], candidate: Version) -> bool:
    for comparator in comparators:
        bound = comparator.version
        if bound.prerelease and (bound.major, bound.minor, bound.patch) == (
            candidate.major,
            candidate.minor,
            candidate.patch,
        ):
            return True
    return False


@dataclass(frozen=True, slots=True)
class VersionRange:
    """Union of comparator sets parsed from a range expression."""

    expression: str
    sets: tuple[tuple[Comparator, ...], ...]

    @classmethod
    def parse(cls, expression: str) -> VersionRange | None:
        """Return the parsed range or ``None`` when ``expression`` is not a valid range."""

        try:
            sets = tuple(_parse_set(part) for part in expression.split("||"))
        except ValueError:
            return None
        return cls(expression=expression, sets=sets)

    def satisfies(self, version: str | Version) -> bool:
        """Return ``True`` when ``version`` falls inside the range."""

        candidate = parse_version(version) if isinstance(version, str) else version
        if candidate is None:
            return False
        for comparators in self.sets:
            if not all(comparator.test(candidate) for comparator in comparators):
                continue
            if candidate.prerelease and not _allows_prerelease(comparators, candidate):
                continue
            return True
        return False

    def max_satisfying(self, versions: Iterable[str]) -> str | None:
        """Return the highest entry of ``versions`` inside the range."""

        best: tuple[Version, str] | None = None
        for raw in versions:
            parsed = parse_version(raw)
            if parsed is None or not self.satisfies(parsed):
                continue
            if best is None or parsed > best[0]:
                best = (parsed, raw)
        return best[1] if best else None

    def __str__(self) -> str:
        return " || ".join(" ".join(str(item) for item in comparators) for comparators in self.sets)


def is_range(expression: str) -> bool:
    """Return ``True`` for a valid range expression that is not an exact version."""

    if not expression.strip() or is_valid_version(expression):
        return False
    return VersionRange.parse(expression) is not None


__all__ = ["Comparator", "VersionRange", "is_range"]
