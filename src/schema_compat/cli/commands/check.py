"""Compatibility check command."""

import json
from pathlib import Path

import click

from schema_compat.cli.context import SchemaCompatContext
from schema_compat.cli.decorators import handle_errors, pass_context
from schema_compat.cli.utils import console, echo_success
from schema_compat.reporting.schema_report import display_compatibility_summary
from schema_compat.schema.comparator import SchemaComparator
from schema_compat.schema.field_path import FieldPath
from schema_compat.schema.persistence import load_schema_document, save_lcd, save_report
from schema_compat.utils.logging import get_logger

logger = get_logger(__name__)


@click.command(name="check")
@click.argument("existing", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("new", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--narrow/--strict",
    "narrow",
    default=None,
    help="Narrow the LCD silently instead of rejecting removed properties "
    "(default: from configuration, strict)",
)
@click.option(
    "--path",
    "root_path",
    help="Dotted field path prefixed to violations (default: schema.openAPISchema)",
)
@click.option(
    "--select",
    help="Dotted selector of the schema inside both documents",
)
@click.option(
    "--lcd-output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the LCD schema here (.json, .yaml or .yml)",
)
@click.option(
    "--report",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a JSON compatibility report here",
)
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON")
@pass_context
@handle_errors
def check(
    ctx: SchemaCompatContext,
    existing: Path,
    new: Path,
    narrow: bool | None,
    root_path: str | None,
    select: str | None,
    lcd_output: Path | None,
    report: Path | None,
    json_output: bool,
) -> None:
    """Check whether NEW may replace EXISTING without breaking consumers.

    Exits with 0 when compatible and 4 when properties would be lost.

    Examples:

        # Strict check
        schema-compat check existing.yaml new.yaml

        # Narrow to the compatible subset and keep the result
        schema-compat check existing.yaml new.yaml --narrow --lcd-output lcd.yaml

        # Check the schema embedded in a resource document
        schema-compat check old.yaml new.yaml --select spec.schema.openAPIV3Schema
    """
    config = ctx.config

    narrow_existing = config.compatibility.narrow_existing if narrow is None else narrow
    try:
        path = FieldPath.parse(root_path) if root_path else config.compatibility.field_path
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--path") from e
    select = select or config.compatibility.select

    existing_schema = load_schema_document(existing, select)
    new_schema = load_schema_document(new, select)

    comparator = SchemaComparator(root_path=path, narrow_existing=narrow_existing)
    result = comparator.compare(existing_schema, new_schema)

    report_file = report or config.output.report_file
    if report_file:
        save_report(result, report_file, existing_file=str(existing), new_file=str(new))

    lcd_file = lcd_output or config.output.lcd_file
    if lcd_file and result.lcd is not None:
        save_lcd(result.lcd, lcd_file)

    if json_output:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        display_compatibility_summary(result, console)
        if report_file:
            echo_success(f"Report written to {report_file}")
        if lcd_file and result.lcd is not None:
            echo_success(f"LCD written to {lcd_file}")

    result.raise_for_incompatibility()
