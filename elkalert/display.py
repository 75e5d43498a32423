"""Rich-based display functions for elkalert."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from elkalert.config import AlertConfig
from elkalert.models import AlertLine
from elkalert.utils import format_count

console = Console()


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_info(message: str) -> None:
    """Print info message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def print_no_data() -> None:
    """Print the nothing-to-report notice."""
    console.print("No Data Found")


def print_report(report: str) -> None:
    """Print report text exactly as it will be sent."""
    console.print(report, end="", markup=False, highlight=False, soft_wrap=True)


def print_alert_table(lines: list[AlertLine], threshold: int) -> None:
    """Print offending buckets as a table.

    Args:
        lines: Offending buckets
        threshold: Threshold they exceeded
    """
    table = Table(
        title=f"[bold]Above threshold[/bold] (> {threshold})",
        show_header=True,
        header_style="bold cyan"
    )

    table.add_column("Count", justify="right", style="yellow")
    table.add_column("Client", style="white")

    for line in lines:
        table.add_row(format_count(line.count), escape(line.key))

    console.print()
    console.print(table)
    console.print()


def print_config(config: AlertConfig) -> None:
    """Print configuration panel. The password is never shown."""
    lines = [
        f"Host: {escape(config.elk_host)}",
        f"Index: {escape(config.elk_index)}",
        f"User: {escape(config.elk_username) or '[dim]none[/dim]'}",
        f"Threshold: {config.elk_threshold}",
    ]

    if config.whitelist:
        lines.append(f"Whitelist: {escape(', '.join(config.whitelist))}")
    else:
        lines.append("Whitelist: [dim]empty[/dim]")

    lines.append(f"Webhook: {'configured' if config.has_webhook else '[dim]not set[/dim]'}")

    if config.title:
        lines.append(f"Title: {escape(config.title)}")

    panel = Panel(
        "\n".join(lines),
        title="[bold]Configuration[/bold]",
        border_style="blue"
    )

    console.print()
    console.print(panel)
    console.print()
