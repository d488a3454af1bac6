# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for shim rendering, rehash and the generated POSIX launcher."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

import bunenv
from bunenv.config import BunenvSettings
from bunenv.errors import ShimError
from bunenv.platform import ShimFlavor
from bunenv.shims import ShimContext, rehash, render_shim
from bunenv.versions import VersionResolver

posix_only = pytest.mark.skipif(
    sys.platform == "win32" or not Path("/bin/sh").exists(),
    reason="POSIX shims need /bin/sh",
)


def _run_shim(
    settings: BunenvSettings,
    name: str,
    cwd: Path,
    *args: str,
    extra_env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    env = {"PATH": os.environ.get("PATH", "/usr/bin:/bin"), "HOME": str(settings.home)}
    env.update(extra_env or {})
    return subprocess.run(
        [str(settings.layout.shims_dir / name), *args],
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    path = tmp_path / "work" / "app" / "lib"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def manager(settings: BunenvSettings, write_executable) -> Path:
    """Install a runnable ``bunenv`` at the path the shims delegate to."""

    src_dir = Path(bunenv.__file__).resolve().parent.parent
    body = f'#!/bin/sh\nPYTHONPATH="{src_dir}" exec "{sys.executable}" -m bunenv "$@"\n'
    return write_executable(settings.self_executable, body)


@pytest.mark.parametrize("flavor", list(ShimFlavor))
def test_render_resolves_every_placeholder(tmp_path: Path, flavor: ShimFlavor) -> None:
    context = ShimContext(default_root=tmp_path / "root", self_executable=tmp_path / "bin" / "bunenv")

    script = render_shim(flavor, context)

    assert "@{" not in script
    assert str(tmp_path / "root") in script
    assert ".bun-version" in script
    assert "BUNENV_VERSION" in script


def test_render_escapes_shell_specials(tmp_path: Path) -> None:
    context = ShimContext(default_root=Path('/tmp/we"ird$root'), self_executable=tmp_path / "bunenv")

    script = render_shim(ShimFlavor.POSIX, context)

    assert 'root="/tmp/we\\"ird\\$root"' in script


def test_rehash_writes_union_and_removes_stale(settings: BunenvSettings, install_fake) -> None:
    install_fake("1.0.0", executables=("bun", "bunx"))
    install_fake("1.1.0", executables=("bun", "other"))
    shims_dir = settings.layout.shims_dir
    shims_dir.mkdir(parents=True)
    (shims_dir / "retired").write_text("old shim", encoding="utf-8")

    outcome = rehash(settings)

    assert outcome.names == ["bun", "bunx", "other"]
    assert sorted(path.name for path in shims_dir.iterdir()) == ["bun", "bunx", "other"]
    assert [path.name for path in outcome.removed] == ["retired"]
    if sys.platform != "win32":
        assert all(os.access(path, os.X_OK) for path in shims_dir.iterdir())


def test_rehash_after_uninstall_drops_names(settings: BunenvSettings, install_fake) -> None:
    install_fake("1.0.0", executables=("bun", "bunx"))
    rehash(settings)
    shutil.rmtree(settings.layout.version_dir("1.0.0"))

    outcome = rehash(settings)

    assert outcome.names == ["bun"]
    assert [path.name for path in settings.layout.shims_dir.iterdir()] == ["bun"]


def test_rehash_without_versions_writes_primary(settings: BunenvSettings) -> None:
    outcome = rehash(settings)

    assert outcome.count == 1
    assert (settings.layout.shims_dir / "bun").is_file()


def test_rehash_windows_flavor_writes_cmd_files(settings: BunenvSettings, install_fake) -> None:
    install_fake("1.0.0", executables=("bun", "bunx"))

    rehash(settings, flavor=ShimFlavor.WINDOWS)

    names = sorted(path.name for path in settings.layout.shims_dir.iterdir())
    assert names == ["bun.cmd", "bunx.cmd"]
    assert (settings.layout.shims_dir / "bun.cmd").read_bytes().startswith(b"@echo off\r\n")


def test_rehash_failure_raises_shim_error(tmp_path: Path, settings: BunenvSettings) -> None:
    blocked_root = tmp_path / "blocked"
    blocked_root.write_text("not a directory", encoding="utf-8")
    blocked = settings.model_copy(update={"root": blocked_root})

    with pytest.raises(ShimError):
        rehash(blocked)


ScenarioBuilder = Callable[[BunenvSettings, Path], dict[str, str]]


def _marker_in_parent(settings: BunenvSettings, project: Path) -> dict[str, str]:
    (project.parent / ".bun-version").write_text("1.1.0\n", encoding="utf-8")
    return {}


def _empty_marker_then_manifest(settings: BunenvSettings, project: Path) -> dict[str, str]:
    (project.parent.parent / ".bun-version").write_text("1.0.0", encoding="utf-8")
    (project / ".bun-version").write_text("  \n", encoding="utf-8")
    manifest = {"name": "app", "engines": {"node": ">=20", "bun": "1.2.0"}}
    (project.parent / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return {}


def _manifest_only(settings: BunenvSettings, project: Path) -> dict[str, str]:
    (project / "package.json").write_text('{"engines": {"bun": "v1.1.0"}}', encoding="utf-8")
    return {}


def _global_only(settings: BunenvSettings, project: Path) -> dict[str, str]:
    settings.layout.global_version_file.write_text("1.0.0", encoding="utf-8")
    return {}


def _environment(settings: BunenvSettings, project: Path) -> dict[str, str]:
    (project / ".bun-version").write_text("1.0.0", encoding="utf-8")
    return {"BUNENV_VERSION": "1.2.0"}


def _latest(settings: BunenvSettings, project: Path) -> dict[str, str]:
    (project / ".bun-version").write_text("latest", encoding="utf-8")
    return {}


def _manifest_caret_range(settings: BunenvSettings, project: Path) -> dict[str, str]:
    (project.parent / "package.json").write_text('{"engines": {"bun": "^1.0.0"}}', encoding="utf-8")
    return {}


def _partial_marker(settings: BunenvSettings, project: Path) -> dict[str, str]:
    (project / ".bun-version").write_text("1.1\n", encoding="utf-8")
    return {}


def _global_tilde_range(settings: BunenvSettings, project: Path) -> dict[str, str]:
    settings.layout.global_version_file.write_text("~1.2", encoding="utf-8")
    return {}


def _environment_range(settings: BunenvSettings, project: Path) -> dict[str, str]:
    return {"BUNENV_VERSION": ">=1.0.0 <1.2.0"}


@posix_only
@pytest.mark.parametrize(
    ("builder", "expected"),
    [
        (_marker_in_parent, "1.1.0"),
        (_empty_marker_then_manifest, "1.2.0"),
        (_manifest_only, "1.1.0"),
        (_global_only, "1.0.0"),
        (_environment, "1.2.0"),
        (_latest, "1.10.0"),
        (_manifest_caret_range, "1.10.0"),
        (_partial_marker, "1.1.0"),
        (_global_tilde_range, "1.2.0"),
        (_environment_range, "1.1.0"),
    ],
)
def test_shim_agrees_with_resolver(
    settings: BunenvSettings,
    install_fake,
    manager: Path,
    project: Path,
    builder: ScenarioBuilder,
    expected: str,
) -> None:
    for version in ("1.0.0", "1.1.0", "1.2.0", "1.10.0"):
        install_fake(version)
    rehash(settings)
    extra_env = builder(settings, project)
    in_process = settings.model_copy(update={"version_override": extra_env.get("BUNENV_VERSION")})

    result = _run_shim(settings, "bun", project, "run", "dev", extra_env=extra_env)

    assert VersionResolver(in_process, cwd=project).resolve_version() == expected
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == f"bun {expected} run dev"


@posix_only
def test_shim_reports_uninstalled_version(settings: BunenvSettings, project: Path) -> None:
    rehash(settings)
    (project / ".bun-version").write_text("9.9.9", encoding="utf-8")

    result = _run_shim(settings, "bun", project)

    assert result.returncode == 1
    assert "version '9.9.9' is not installed" in result.stderr
    assert "bunenv install 9.9.9" in result.stderr


@posix_only
def test_shim_reports_missing_selection(settings: BunenvSettings, project: Path) -> None:
    rehash(settings)

    result = _run_shim(settings, "bun", project)

    assert result.returncode == 1
    assert "no bun version specified" in result.stderr


@posix_only
def test_shim_reports_unmatched_range(
    settings: BunenvSettings,
    install_fake,
    manager: Path,
    project: Path,
) -> None:
    install_fake("1.0.0")
    rehash(settings)
    (project / ".bun-version").write_text("^2.0.0", encoding="utf-8")

    result = _run_shim(settings, "bun", project)

    assert result.returncode == 1
    assert "no installed bun version matches '^2.0.0'" in result.stderr
    assert "install ^2.0.0" not in result.stderr


@posix_only
def test_shim_range_without_manager_executable(settings: BunenvSettings, install_fake, project: Path) -> None:
    install_fake("1.0.0")
    rehash(settings)
    (project / ".bun-version").write_text("^1.0.0", encoding="utf-8")

    result = _run_shim(settings, "bun", project)

    assert result.returncode == 1
    assert "no installed bun version matches '^1.0.0'" in result.stderr


@posix_only
def test_shim_latest_without_manager_orders_prereleases(
    settings: BunenvSettings,
    install_fake,
    project: Path,
) -> None:
    for version in ("1.2.0", "2.0.0-beta.1", "1.10.0"):
        install_fake(version)
    rehash(settings)
    (project / ".bun-version").write_text("latest", encoding="utf-8")

    result = _run_shim(settings, "bun", project)

    assert VersionResolver(settings, cwd=project).resolve_version() == "2.0.0-beta.1"
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "bun 2.0.0-beta.1"


def test_windows_shim_orders_latest_by_precedence(tmp_path: Path) -> None:
    context = ShimContext(default_root=tmp_path / "root", self_executable=tmp_path / "bin" / "bunenv.exe")

    script = render_shim(ShimFlavor.WINDOWS, context)

    assert "[version]" not in script
    assert "(-[0-9A-Za-z.-]+)?$' } | Sort-Object" in script
    assert "{ if ($_.Name.Contains('-')) { 0 } else { 1 } }" in script
    assert f'`"{tmp_path / "bin" / "bunenv.exe"}" version 2^>nul`' in script


@posix_only
def test_shim_falls_back_to_system_runtime(
    settings: BunenvSettings,
    project: Path,
    write_executable,
) -> None:
    rehash(settings)
    write_executable(settings.system_runtime, '#!/bin/sh\necho "system $*"\n')

    result = _run_shim(settings, "bun", project, "--version")

    assert result.returncode == 0
    assert result.stdout.strip() == "system --version"
    assert "using system bun instead" in result.stderr


@posix_only
def test_sibling_executable_dispatch(settings: BunenvSettings, install_fake, project: Path) -> None:
    install_fake("1.0.0")
    install_fake("1.1.0", executables=("bun", "bunx"))
    rehash(settings)

    pinned = _run_shim(settings, "bunx", project, "cowsay", extra_env={"BUNENV_VERSION": "1.1.0"})
    missing = _run_shim(settings, "bunx", project, extra_env={"BUNENV_VERSION": "1.0.0"})

    assert pinned.stdout.strip() == "bunx 1.1.0 cowsay"
    assert missing.returncode == 1
    assert "'bunx' is not provided by bun 1.0.0" in missing.stderr


@posix_only
def test_non_primary_never_uses_system_runtime(
    settings: BunenvSettings,
    install_fake,
    project: Path,
    write_executable,
) -> None:
    install_fake("1.1.0", executables=("bun", "bunx"))
    rehash(settings)
    write_executable(settings.system_runtime, '#!/bin/sh\necho "system $*"\n')

    result = _run_shim(settings, "bunx", project)

    assert result.returncode == 1
    assert "system" not in result.stdout


@posix_only
def test_self_name_bypasses_resolution(
    settings: BunenvSettings,
    project: Path,
    write_executable,
) -> None:
    rehash(settings)
    shutil.copy2(settings.layout.shims_dir / "bun", settings.layout.shims_dir / "bunenv")
    (project / ".bun-version").write_text("9.9.9", encoding="utf-8")
    write_executable(settings.self_executable, '#!/bin/sh\necho "manager $*"\n')

    result = _run_shim(settings, "bunenv", project, "version")

    assert result.returncode == 0
    assert result.stdout.strip() == "manager version"


@posix_only
def test_root_override_at_invocation(
    settings: BunenvSettings,
    install_fake,
    project: Path,
    tmp_path: Path,
    write_executable,
) -> None:
    install_fake("1.0.0")
    rehash(settings)
    other_root = tmp_path / "other-root"
    write_executable(other_root / "versions" / "2.0.0" / "bin" / "bun", '#!/bin/sh\necho "other $*"\n')
    (other_root / "version").write_text("2.0.0", encoding="utf-8")

    result = _run_shim(settings, "bun", project, extra_env={"BUNENV_ROOT": str(other_root)})

    assert result.stdout.strip() == "other"
