"""Rich consoles and output helpers for the quote-intake CLI."""

from rich.console import Console
from rich.table import Table

# Messages, tables and logs go to stderr so --json output stays pipeable
console = Console(stderr=True)

# JSON payloads go to stdout; resolves sys.stdout at write time
stdout_console = Console()


def print_ok(msg: str) -> None:
    console.print(f"[green]✓[/green] {msg}")


def print_err(msg: str) -> None:
    console.print(f"[red]✗[/red] {msg}")


def print_warn(msg: str) -> None:
    console.print(f"[yellow]![/yellow] {msg}")


def output_json(data: dict) -> None:
    """Print a command result as JSON on stdout."""
    stdout_console.print_json(data=data)


def output_services_table(rows: list[dict], *, title: str, columns: list[str]) -> None:
    """Print one row per service, or a placeholder when nothing was detected."""
    if not rows:
        console.print("[dim]No services detected[/dim]")
        return

    table = Table(title=title, show_lines=False)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*[str(row.get(c, "")) for c in columns])
    console.print(table)
