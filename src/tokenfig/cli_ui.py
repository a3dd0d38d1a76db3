"""
Rich console helpers for the tokenfig CLI.

Provides styled status lines and the token inspection table.
"""

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

console = Console()
err_console = Console(stderr=True)

# Style definitions
STYLES = {
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
}


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(Text(f"✗ {message}", style=STYLES["error"]), soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(Text(f"⚠ {message}", style=STYLES["warning"]))


def format_value(value: object) -> str:
    """Short display form of a variable value."""
    if isinstance(value, dict) and {"r", "g", "b", "a"} <= value.keys():
        return "rgba({:.3f}, {:.3f}, {:.3f}, {:.2f})".format(
            value["r"], value["g"], value["b"], value["a"]
        )
    return str(value)


def print_variables_table(rows: list[tuple[str, str, str, str]], title: str = "Tokens") -> None:
    """
    Print variables as a table.

    Args:
        rows: (collection, name, figma type, display value) tuples
        title: Table title
    """
    table = Table(title=title, box=box.SIMPLE_HEAD, show_lines=False)
    table.add_column("Collection", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Type", style="magenta")
    table.add_column("Value")
    for row in rows:
        table.add_row(*row)
    console.print(table)
