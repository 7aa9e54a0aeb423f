"""
Utility functions for CLI commands.

This module provides helper functions for formatting CLI output.
"""

from typing import Any

import click
from rich.console import Console
from rich.table import Table

console = Console()


def echo_success(message: str) -> None:
    """Print success message in green."""
    click.secho(f"✓ {message}", fg="green")


def echo_info(message: str) -> None:
    """Print info message in blue."""
    click.secho(f"ℹ {message}", fg="blue")


def print_table(
    title: str,
    columns: list[str],
    rows: list[list[Any]],
    show_header: bool = True,
) -> None:
    """
    Print a formatted table using rich.

    Args:
        title: Table title
        columns: Column headers
        rows: List of row data
        show_header: Whether to show header row
    """
    table = Table(title=title, show_header=show_header)

    for col in columns:
        table.add_column(col)

    for row in rows:
        table.add_row(*[str(cell) for cell in row])

    console.print(table)
