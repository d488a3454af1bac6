# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""HTTPS downloads and safe archive extraction for release assets."""

from __future__ import annotations

import json
import shutil
import ssl
import urllib.request
import zipfile
from pathlib import Path
from typing import Any, Final
from urllib.parse import urlparse

from .. import __version__
from ..paths import TOOL_NAME

_SUPPORTED_SCHEMES: Final[frozenset[str]] = frozenset({"https"})
USER_AGENT: Final[str] = f"{TOOL_NAME}/{__version__}"


def _open(url: str, *, timeout: float, accept: str | None = None) -> Any:
    parsed = urlparse(url)
    if parsed.scheme.lower() not in _SUPPORTED_SCHEMES:
        raise ValueError(f"Unsupported download scheme '{parsed.scheme}' for {url}")
    headers = {"User-Agent": USER_AGENT}
    if accept:
        headers["Accept"] = accept
    request = urllib.request.Request(url, headers=headers)
    opener = urllib.request.build_opener(urllib.request.HTTPSHandler(context=ssl.create_default_context()))
    return opener.open(request, timeout=timeout)


def download(url: str, destination: Path, *, timeout: float) -> Path:
    """Download ``url`` into ``destination`` enforcing HTTPS.

    Args:
        url: HTTPS URL of the asset.
        destination: File path where the payload is written.
        timeout: Socket timeout in seconds.

    Returns:
        Path: ``destination``.
    """

    destination.parent.mkdir(parents=True, exist_ok=True)
    with _open(url, timeout=timeout) as response, destination.open("wb") as handle:
        shutil.copyfileobj(response, handle)
    return destination


def fetch_json(url: str, *, timeout: float) -> Any:
    """Return the decoded JSON document served at ``url``."""

    with _open(url, timeout=timeout, accept="application/json") as response:
        return json.loads(response.read().decode("utf-8"))


def safe_extract_zip(archive: zipfile.ZipFile, destination: Path) -> None:
    """Extract ``archive`` into ``destination`` preventing path escapes.

    Executable permission bits recorded in the archive are restored, since
    :meth:`zipfile.ZipFile.extract` drops them.
    """

    destination = destination.resolve()
    members = archive.infolist()
    for member in members:
        member_path = (destination / member.filename).resolve()
        if not member_path.is_relative_to(destination):
            raise RuntimeError(f"Unsafe path detected in archive: {member.filename}")
    for member in members:
        extracted = Path(archive.extract(member, path=destination))
        mode = (member.external_attr >> 16) & 0o777
        if mode and not member.is_dir():
            extracted.chmod(mode)


__all__ = ["USER_AGENT", "download", "fetch_json", "safe_extract_zip"]
