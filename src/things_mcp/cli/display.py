"""Rich rendering for the CLI: tool listings and availability checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from things_mcp.tools.base import ToolDefinition


class ToolDisplay:
    """Renders CLI output.

    Accepts an optional :class:`~rich.console.Console` for dependency
    injection in tests.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def tool_table(self, definitions: Sequence[ToolDefinition]) -> None:
        """Print one row per tool with its parameter names."""
        table = Table(title=f"Things tools ({len(definitions)})", show_lines=False)
        table.add_column("Tool", style="bold cyan", no_wrap=True)
        table.add_column("Parameters", style="green")
        table.add_column("Description")
        for definition in definitions:
            properties = definition.parameters_schema.get("properties", {})
            required = set(definition.parameters_schema.get("required", []))
            names = [
                f"{name}*" if name in required else name for name in properties
            ]
            table.add_row(
                definition.name,
                ", ".join(names) or "-",
                definition.description,
            )
        self._console.print(table)

    def availability(self, running: bool) -> None:
        if running:
            self._console.print("[green]Things 3 is running.[/green]")
        else:
            self._console.print(
                "[red]Things 3 is not running.[/red] "
                "Please open Things 3 and try again."
            )
