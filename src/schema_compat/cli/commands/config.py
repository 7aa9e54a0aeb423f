"""
Configuration management commands.

This module provides commands for inspecting and validating
Schema Compat configuration.
"""

import click
import yaml

from schema_compat.cli.context import SchemaCompatContext
from schema_compat.cli.decorators import handle_errors, pass_context, requires_config
from schema_compat.cli.utils import echo_info, echo_success, print_table
from schema_compat.config import SchemaCompatConfig


@click.group(name="config")
def config() -> None:
    """Configuration management commands."""
    pass


@config.command(name="show")
@pass_context
@handle_errors
def show(ctx: SchemaCompatContext) -> None:
    """Print the effective configuration as YAML.

    Values come from the configuration file when one is given, otherwise
    from defaults and SCHEMA_COMPAT_* environment variables.
    """
    click.echo(yaml.dump(ctx.config.model_dump(), default_flow_style=False, sort_keys=False))


@config.command(name="validate")
@pass_context
@requires_config
@handle_errors
def validate(ctx: SchemaCompatContext) -> None:
    """Validate a configuration file.

    Examples:

        schema-compat --config compat.yaml config validate
    """
    echo_info(f"Validating configuration: {ctx.config_path}")

    click.echo()
    _display_config_summary(ctx.config)

    click.echo()
    echo_success("Configuration is valid!")


def _display_config_summary(config: SchemaCompatConfig) -> None:
    """Display configuration summary."""
    rows = [
        ["Narrow Existing", config.compatibility.narrow_existing],
        ["Root Path", config.compatibility.root_path],
        ["Select", config.compatibility.select or "-"],
        ["LCD File", config.output.lcd_file or "-"],
        ["Report File", config.output.report_file or "-"],
        ["Log Level", config.logging.level],
    ]

    print_table("Configuration Summary", ["Setting", "Value"], rows)
