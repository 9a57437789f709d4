"""Tests for CLI commands using context injection.

Commands accept a _context parameter for dependency injection, so they are
tested without touching the host's installations or settings database.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from claude_locator import __version__, cli
from claude_locator.cache import CacheError
from claude_locator.locator import BinaryNotFoundError
from claude_locator.types import Installation, InstallationType


@pytest.fixture
def mock_context() -> MagicMock:
    """Create a mock AppContext."""
    ctx = MagicMock()
    ctx.cache.read_preference.return_value = "system"
    return ctx


class TestMain:
    """Tests for global options."""

    def test_version(self) -> None:
        """Test --version prints the version and exits cleanly."""
        result = CliRunner().invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert f"claude-locator v{__version__}" in result.output

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """Test an explicit config file that does not exist exits 1."""
        result = CliRunner().invoke(
            cli.app, ["--config", str(tmp_path / "missing.json"), "cache", "show"]
        )

        assert result.exit_code == 1


class TestFind:
    """Tests for the find command."""

    def test_prints_path(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test the selected path is printed bare."""
        mock_context.locator.find_binary.return_value = "/usr/local/bin/claude"

        cli.find(as_json=False, _context=mock_context)

        assert capsys.readouterr().out == "/usr/local/bin/claude\n"

    def test_json(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test JSON output wraps the path."""
        mock_context.locator.find_binary.return_value = "/usr/local/bin/claude"

        cli.find(as_json=True, _context=mock_context)

        assert json.loads(capsys.readouterr().out) == {"path": "/usr/local/bin/claude"}

    def test_not_found_exits_1(
        self, mock_context: MagicMock, capsys: pytest.CaptureFixture
    ) -> None:
        """Test a missing binary exits with status 1 and reports on stderr."""
        mock_context.locator.find_binary.side_effect = BinaryNotFoundError(
            "claude", ["PATH"]
        )

        with pytest.raises(typer.Exit) as exc_info:
            cli.find(as_json=False, _context=mock_context)

        assert exc_info.value.exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "claude not found" in captured.err


class TestList:
    """Tests for the list command."""

    def test_json(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test JSON output lists every installation in order."""
        mock_context.locator.discover_all.return_value = [
            Installation("/b/claude", "2.0.0", "which"),
            Installation("claude", None, "PATH"),
        ]

        cli.list_installations(as_json=True, _context=mock_context)

        data = json.loads(capsys.readouterr().out)
        assert [entry["path"] for entry in data] == ["/b/claude", "claude"]
        assert data[1]["version"] is None

    def test_empty_json(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test nothing found is an empty JSON list and not an error."""
        mock_context.locator.discover_all.return_value = []

        cli.list_installations(as_json=True, _context=mock_context)

        assert json.loads(capsys.readouterr().out) == []

    def test_table(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test the default output is a table."""
        mock_context.locator.discover_all.return_value = [
            Installation("/b/claude", "2.0.0", "which"),
        ]

        cli.list_installations(as_json=False, _context=mock_context)

        assert "2.0.0" in capsys.readouterr().out


class TestSetPath:
    """Tests for the set-path command."""

    def test_success(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test a working path is confirmed."""
        mock_context.locator.set_custom_path.return_value = Installation(
            "/opt/claude", "1.2.3", "custom", InstallationType.CUSTOM
        )

        cli.set_path(path="/opt/claude", _context=mock_context)

        mock_context.locator.set_custom_path.assert_called_once_with("/opt/claude")
        assert "1.2.3" in capsys.readouterr().out

    def test_broken_path_exits_1(self, mock_context: MagicMock) -> None:
        """Test a path that does not work exits with status 1."""
        mock_context.locator.set_custom_path.side_effect = BinaryNotFoundError(
            "claude", ["/tmp/x"], detail="/tmp/x is not a working claude binary"
        )

        with pytest.raises(typer.Exit) as exc_info:
            cli.set_path(path="/tmp/x", _context=mock_context)

        assert exc_info.value.exit_code == 1

    def test_cache_failure_exits_1(self, mock_context: MagicMock) -> None:
        """Test a path that cannot be saved exits with status 1."""
        mock_context.locator.set_custom_path.side_effect = CacheError("read-only")

        with pytest.raises(typer.Exit) as exc_info:
            cli.set_path(path="/opt/claude", _context=mock_context)

        assert exc_info.value.exit_code == 1


class TestCacheCommands:
    """Tests for cache show and clear."""

    def test_show(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test the stored path and preference are shown."""
        mock_context.cache.stored_path.return_value = "/opt/claude"

        cli.cache_show(_context=mock_context)

        out = capsys.readouterr().out
        assert "/opt/claude" in out
        assert "system" in out

    def test_show_empty(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test an empty cache is reported."""
        mock_context.cache.stored_path.return_value = None

        cli.cache_show(_context=mock_context)

        assert "No cached path" in capsys.readouterr().out

    def test_show_error_exits_1(self, mock_context: MagicMock) -> None:
        """Test an unreadable database exits with status 1."""
        mock_context.cache.stored_path.side_effect = CacheError("corrupt")

        with pytest.raises(typer.Exit) as exc_info:
            cli.cache_show(_context=mock_context)

        assert exc_info.value.exit_code == 1

    def test_clear(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test clearing reports removal."""
        mock_context.cache.clear.return_value = True

        cli.cache_clear(_context=mock_context)

        assert "Cleared cached path" in capsys.readouterr().out

    def test_clear_nothing(self, mock_context: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Test clearing an empty cache is not an error."""
        mock_context.cache.clear.return_value = False

        cli.cache_clear(_context=mock_context)

        assert "No cached path to clear" in capsys.readouterr().out
