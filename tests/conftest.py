"""Shared test fixtures."""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest

from claude_locator.environment import EnvironmentBuilder
from claude_locator.platforms import UnixPlatform, WindowsPlatform
from claude_locator.process import RunResult
from claude_locator.types import ProbeResult

HOME = "/home/tester"


# ============================================================================
# Test Doubles
# ============================================================================


class FakeFileSystem:
    """In-memory filesystem keyed by path string.

    Parent directories of every file are created implicitly.
    """

    def __init__(
        self,
        files: Mapping[str, str] | Iterable[str] = (),
        dirs: Iterable[str] = (),
    ) -> None:
        if isinstance(files, Mapping):
            self.files = dict(files)
        else:
            self.files = {path: "" for path in files}
        self.dirs: set[str] = set()
        for directory in dirs:
            self.add_dir(directory)
        for path in self.files:
            self.add_dir(str(Path(path).parent))

    def add_dir(self, path: str) -> None:
        current = Path(path)
        while str(current) not in self.dirs and current != current.parent:
            self.dirs.add(str(current))
            current = current.parent

    def exists(self, path: Path) -> bool:
        return str(path) in self.files or str(path) in self.dirs

    def is_file(self, path: Path) -> bool:
        return str(path) in self.files

    def is_dir(self, path: Path) -> bool:
        return str(path) in self.dirs

    def iterdir(self, path: Path) -> list[Path]:
        children = {
            entry
            for entry in (*self.files, *self.dirs)
            if str(Path(entry).parent) == str(path) and entry != str(path)
        }
        return [Path(entry) for entry in sorted(children)]

    def glob(self, pattern: str) -> list[Path]:
        return [Path(p) for p in sorted(self.files) if fnmatch.fnmatch(p, pattern)]

    def read_text(self, path: Path) -> str:
        if str(path) not in self.files:
            raise FileNotFoundError(str(path))
        return self.files[str(path)]


class FakeRunner:
    """Process runner answering from a table keyed by program.

    Unknown programs raise FileNotFoundError, like a failed spawn.
    """

    def __init__(self, responses: Mapping[str, RunResult | Exception] | None = None) -> None:
        self.responses: dict[str, RunResult | Exception] = dict(responses or {})
        self.calls: list[dict[str, Any]] = []

    def run(
        self,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
        creation_flags: int = 0,
        timeout: float | None = None,
    ) -> RunResult:
        self.calls.append(
            {
                "args": list(args),
                "env": dict(env) if env is not None else None,
                "creation_flags": creation_flags,
                "timeout": timeout,
            }
        )
        response = self.responses.get(args[0])
        if response is None:
            raise FileNotFoundError(args[0])
        if isinstance(response, Exception):
            raise response
        return response

    def programs(self) -> list[str]:
        return [call["args"][0] for call in self.calls]


class FakeProber:
    """Prober answering from a table; unknown paths are not functional."""

    def __init__(self, results: Mapping[str, ProbeResult] | None = None) -> None:
        self.results: dict[str, ProbeResult] = dict(results or {})
        self.probed: list[str] = []

    def probe(self, path: str) -> ProbeResult:
        self.probed.append(path)
        return self.results.get(path, ProbeResult(functional=False))


def version_output(version: str) -> RunResult:
    """A successful ``--version`` run printing the given version."""
    return RunResult(returncode=0, stdout=f"{version} (Claude Code)\n".encode())


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


@pytest.fixture
def unix_platform() -> UnixPlatform:
    """Create a UnixPlatform instance."""
    return UnixPlatform()


@pytest.fixture
def windows_platform() -> WindowsPlatform:
    """Create a WindowsPlatform instance."""
    return WindowsPlatform()


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Create an empty in-memory filesystem."""
    return FakeFileSystem()


@pytest.fixture
def unix_env() -> dict[str, str]:
    """Minimal Unix process environment."""
    return {"HOME": HOME, "PATH": "/usr/bin:/bin"}


@pytest.fixture
def env_builder(
    unix_platform: UnixPlatform, unix_env: dict[str, str], fake_fs: FakeFileSystem
) -> EnvironmentBuilder:
    """Create an environment builder over the fake filesystem."""
    return EnvironmentBuilder.create(unix_platform, environ=unix_env, filesystem=fake_fs)
