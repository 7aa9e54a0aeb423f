"""Compatibility report generation and display."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from schema_compat.schema.models import ComparisonResult


def display_compatibility_summary(
    result: ComparisonResult,
    console: Console | None = None,
) -> None:
    """Display the outcome of one compatibility check.

    Args:
        result: Comparison result
        console: Rich console (created if None)
    """
    if console is None:
        console = Console()

    location = escape(str(result.path) or "<root>")

    if result.is_compatible:
        message = f"[green]✓ New schema is compatible at {location}[/green]"
        if result.narrowed_properties:
            narrowed = escape(", ".join(result.narrowed_properties))
            message += f"\n[yellow]LCD narrowed, dropped properties: {narrowed}[/yellow]"
        console.print(
            Panel.fit(message, title="🔍 Schema Compatibility", border_style="green")
        )
        return

    console.print(
        Panel.fit(
            "[bold red]⚠️  INCOMPATIBLE SCHEMA CHANGE[/bold red]\n"
            "Consumers bound to the existing schema would break",
            border_style="red",
        )
    )
    console.print()

    table = Table(title=f"Violations ({len(result.violations)})")
    table.add_column("Location", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")
    table.add_column("Message", style="white", max_width=50)

    for violation in result.violations:
        table.add_row(
            escape(str(violation.path)),
            escape(", ".join(str(v) for v in violation.value)) or "-",
            escape(violation.message),
        )

    console.print(table)


def generate_compatibility_report_text(result: ComparisonResult) -> str:
    """Generate a plain-text report of a compatibility check.

    Args:
        result: Comparison result

    Returns:
        Multi-line text report
    """
    lines = [
        "=" * 80,
        "Schema Compatibility Report",
        "=" * 80,
        "",
        f"  Location: {str(result.path) or '<root>'}",
        f"  Narrow existing: {result.narrow_existing}",
        f"  Compatible: {result.is_compatible}",
        "",
    ]

    if result.is_compatible:
        if result.narrowed_properties:
            lines.append("Narrowed properties:")
            lines.extend(f"  • {name}" for name in result.narrowed_properties)
            lines.append("")
    else:
        lines.append("Violations:")
        for violation in result.violations:
            lines.append(f"  • {violation.path}")
            if violation.value:
                lines.append(f"    Value: {', '.join(str(v) for v in violation.value)}")
            lines.append(f"    Message: {violation.message}")
            lines.append("")

    lines.extend(["=" * 80, ""])

    return "\n".join(lines)
