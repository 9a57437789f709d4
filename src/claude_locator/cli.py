"""CLI commands using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from claude_locator.context import AppContext

import typer
from rich.console import Console

from claude_locator import __version__
from claude_locator.cache import CacheError
from claude_locator.config import load_config
from claude_locator.context import create_context
from claude_locator.display import Display
from claude_locator.locator import BinaryNotFoundError

app = typer.Typer(
    name="claude-locator",
    help="Find a working Claude Code CLI installation",
    no_args_is_help=True,
)

cache_app = typer.Typer(help="Manage the cached binary path")

app.add_typer(cache_app, name="cache")

console = Console()
display = Display(console)
errors = Display(Console(stderr=True))

# Global options set by the app callback
_state: dict[str, Path | None] = {"config_path": None}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"claude-locator v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Log discovery details")
    ] = False,
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to a config file")
    ] = None,
) -> None:
    """Find a working Claude Code CLI installation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    _state["config_path"] = config


def _default_context() -> AppContext:
    """Build the production context from the configured settings."""
    try:
        config = load_config(_state["config_path"])
    except (FileNotFoundError, ValueError) as e:
        errors.show_error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from e
    return create_context(config=config)


def _echo_json(data: object) -> None:
    typer.echo(json.dumps(data, indent=2))


# ============================================================================
# Discovery Commands
# ============================================================================


@app.command("find")
def find(
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    _context=None,
) -> None:
    """Print the path of the best working installation."""
    ctx = _context or _default_context()

    try:
        path = ctx.locator.find_binary()
    except BinaryNotFoundError as e:
        errors.show_error(str(e))
        raise typer.Exit(1) from e

    if as_json:
        _echo_json({"path": path})
    else:
        typer.echo(path)


@app.command("list")
def list_installations(
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    _context=None,
) -> None:
    """List every working installation, best first."""
    ctx = _context or _default_context()
    installations = ctx.locator.discover_all()

    if as_json:
        _echo_json([installation.to_dict() for installation in installations])
    else:
        display.show_installations(installations)


@app.command("set-path")
def set_path(
    path: Annotated[str, typer.Argument(help="Path to the claude executable")],
    _context=None,
) -> None:
    """Use a specific executable and remember it."""
    ctx = _context or _default_context()

    try:
        installation = ctx.locator.set_custom_path(path)
    except BinaryNotFoundError as e:
        errors.show_error(str(e))
        raise typer.Exit(1) from e
    except CacheError as e:
        errors.show_error(f"Could not save path: {e}")
        raise typer.Exit(1) from e

    version = installation.version or "unknown version"
    display.show_success(f"Using {installation.path} ({version})")


# ============================================================================
# Cache Commands
# ============================================================================


@cache_app.command("show")
def cache_show(_context=None) -> None:
    """Show the cached path without validating it."""
    ctx = _context or _default_context()

    try:
        stored = ctx.cache.stored_path()
    except CacheError as e:
        errors.show_error(str(e))
        raise typer.Exit(1) from e

    if stored is None:
        display.show_info("No cached path")
    else:
        display.show_info(f"Cached path: {stored}")
    display.show_info(f"Installation preference: {ctx.cache.read_preference()}")


@cache_app.command("clear")
def cache_clear(_context=None) -> None:
    """Forget the cached path so the next lookup rediscovers."""
    ctx = _context or _default_context()

    try:
        removed = ctx.cache.clear()
    except CacheError as e:
        errors.show_error(str(e))
        raise typer.Exit(1) from e

    if removed:
        display.show_success("Cleared cached path")
    else:
        display.show_info("No cached path to clear")
