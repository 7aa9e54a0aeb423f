"""
Decorators for CLI commands.

This module provides decorators for error handling, context passing,
and other common CLI patterns.
"""

import functools
from collections.abc import Callable

import click

from schema_compat.cli.context import SchemaCompatContext
from schema_compat.exceptions import (
    ConfigurationError,
    SchemaDocumentError,
    SchemaIncompatibleError,
)
from schema_compat.utils.logging import get_logger

logger = get_logger(__name__)


def pass_context(f: Callable) -> Callable:
    """
    Decorator to pass SchemaCompatContext to command function.

    Usage:
        @click.command()
        @pass_context
        def my_command(ctx: SchemaCompatContext):
            print(ctx.config)
    """

    @click.pass_context
    @functools.wraps(f)
    def wrapper(click_ctx: click.Context, *args, **kwargs):
        compat_ctx: SchemaCompatContext = click_ctx.obj
        return f(compat_ctx, *args, **kwargs)

    return wrapper


def handle_errors(f: Callable) -> Callable:
    """
    Decorator to handle common errors in CLI commands.

    Exit codes:
        0: Success
        1: General error
        2: Configuration error
        3: Schema document error
        4: Schema incompatible
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)

        except (click.exceptions.Exit, click.ClickException):
            raise

        except ConfigurationError as e:
            logger.error("Configuration error", error=str(e))
            click.echo(f"Configuration Error: {e}", err=True)
            click.echo(
                "\nPlease check your configuration file and environment variables.",
                err=True,
            )
            raise click.exceptions.Exit(2) from e

        except SchemaDocumentError as e:
            logger.error("Schema document error", error=str(e))
            click.echo(f"Schema Document Error: {e}", err=True)
            raise click.exceptions.Exit(3) from e

        except SchemaIncompatibleError as e:
            logger.warning("Schema incompatible", violations_count=len(e))
            click.echo(f"Schema Incompatible: {len(e)} violation(s) found", err=True)
            raise click.exceptions.Exit(4) from e

        except Exception as e:
            logger.error("Unexpected error", error=str(e), exc_info=True)
            click.echo(f"Unexpected Error: {e}", err=True)
            click.echo(
                "\nAn unexpected error occurred. Please check the logs for details.",
                err=True,
            )
            raise click.exceptions.Exit(1) from e

    return wrapper


def requires_config(f: Callable) -> Callable:
    """
    Decorator to ensure a configuration file was given and loads it.
    """

    @functools.wraps(f)
    def wrapper(ctx: SchemaCompatContext, *args, **kwargs):
        if ctx.config_path is None:
            click.echo(
                "Error: Configuration file required. Use --config option or set "
                "SCHEMA_COMPAT_CONFIG.",
                err=True,
            )
            raise click.exceptions.Exit(2)

        try:
            _ = ctx.config
        except ConfigurationError as e:
            click.echo(f"Error loading configuration: {e}", err=True)
            raise click.exceptions.Exit(2) from e

        return f(ctx, *args, **kwargs)

    return wrapper
