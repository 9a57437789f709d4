"""Rich console output for the command line."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from claude_locator.types import Installation


class Display:
    """Console presentation of installations and status messages."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the display.

        Args:
            console: Rich console to print to.
        """
        self.console = console or Console()

    def show_installations(self, installations: list[Installation]) -> None:
        """Display installations table.

        Args:
            installations: Installations in display order.
        """
        if not installations:
            self.console.print("[yellow]No installations found[/yellow]")
            return

        table = Table(title="Claude Installations")
        table.add_column("#", justify="right")
        table.add_column("Path", style="cyan")
        table.add_column("Version")
        table.add_column("Source")
        table.add_column("Type")

        for index, installation in enumerate(installations, start=1):
            table.add_row(
                str(index),
                installation.path,
                installation.version or "[dim]unknown[/dim]",
                installation.source,
                installation.installation_type.value,
            )

        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")
