"""
Main CLI entry point for Schema Compat.

This module provides the command-line interface for checking whether a new
structural schema may replace an existing one.
"""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from schema_compat import __version__
from schema_compat.cli.commands import check as check_commands
from schema_compat.cli.commands import config as config_commands
from schema_compat.cli.context import SchemaCompatContext
from schema_compat.utils.logging import configure_logging, get_logger

# Load environment variables from .env file
load_dotenv()

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="schema-compat")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
    envvar="SCHEMA_COMPAT_CONFIG",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Set console logging level [default: from configuration, WARNING]",
    envvar="SCHEMA_COMPAT_LOG_LEVEL",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    help="Also write JSON logs to this file",
    envvar="SCHEMA_COMPAT_LOG_FILE",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    log_level: str | None,
    log_file: Path | None,
) -> None:
    """Schema Compat - gate structural schema changes.

    Decides whether a new schema version may replace an existing one without
    breaking consumers, and computes the Least Common Denominator (LCD)
    schema both versions agree on.

    Examples:

        # Reject any capability loss
        schema-compat check existing.yaml new.yaml

        # Narrow to the largest still-compatible schema
        schema-compat check existing.yaml new.yaml --narrow --lcd-output lcd.yaml

        # Show effective configuration
        schema-compat --config compat.yaml config show
    """
    # Command-line settings only until the configuration is loaded
    configure_logging(level=log_level or "WARNING", log_file=str(log_file) if log_file else None)

    ctx.obj = SchemaCompatContext(
        config_path=config,
        log_level=log_level,
        log_file=log_file,
    )
    ctx.obj.setup_logging()

    logger.debug(
        "CLI initialized",
        config=str(config) if config else None,
        log_level=log_level,
    )


cli.add_command(check_commands.check)
cli.add_command(config_commands.config)


def main() -> int:
    """Main entry point for CLI."""
    try:
        # Without standalone mode click returns the exit code of Exit instead of raising
        exit_code = cli(standalone_mode=False)
        return exit_code if isinstance(exit_code, int) else 0
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except Exception as e:
        logger.error("Unexpected error", error=str(e), exc_info=True)
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
