"""
Console output helpers shared by the CLI.
"""

from rich.console import Console

VERSION = "0.1.0"

console = Console()

_STATUS_STYLES = {
    "info": ("cyan", "ℹ"),
    "success": ("green", "✓"),
    "warning": ("yellow", "⚠"),
    "error": ("red", "✗"),
}


def cx_print(message: str, status: str = "info") -> None:
    """Print a status line with an icon."""
    color, icon = _STATUS_STYLES.get(status, _STATUS_STYLES["info"])
    console.print(f"[{color}]{icon}[/{color}] {message}")


def cx_header(title: str) -> None:
    """Print a section header."""
    console.print()
    console.rule(f"[bold cyan]{title}[/bold cyan]")
    console.print()
