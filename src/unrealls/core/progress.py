"""Human-facing CLI output on stderr.

``unrealls serve`` owns stdout for the protocol stream, so every command
prints through the one stderr console here::

    status("Found 2 engines", style="success")   # ✓ Found 2 engines
    status("No engine installs found", style="warning")
"""

from __future__ import annotations

import structlog
from rich.console import Console
from rich.table import Table

_console = Console(stderr=True)

_MARKERS: dict[str, str] = {
    "success": "[green]✓[/green]",
    "error": "[red]✗[/red]",
    "warning": "[yellow]![/yellow]",
    "info": " ",
}


def get_console() -> Console:
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one status line; unknown styles print the bare message."""
    marker = _MARKERS.get(style)
    line = f"{marker} {message}" if marker else message
    _console.print(" " * indent + line, highlight=False)
    structlog.get_logger().debug("cli_status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``pluralize(1, "engine")`` → ``1 engine``; ``pluralize(3, "engine")`` → ``3 engines``."""
    return f"{count} {singular if count == 1 else plural or singular + 's'}"


def make_table(*columns: str, title: str | None = None) -> Table:
    """Borderless listing table with bold headers."""
    table = Table(title=title, show_edge=False, header_style="bold")
    for column in columns:
        table.add_column(column)
    return table
