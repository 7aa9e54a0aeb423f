"""
CLI context for Schema Compat.

This module provides the context object that is passed to all CLI commands,
holding the loaded configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from schema_compat.config import LoggingConfig, SchemaCompatConfig, load_config_from_yaml
from schema_compat.exceptions import ConfigurationError
from schema_compat.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@dataclass
class SchemaCompatContext:
    """
    Context object for CLI commands.

    Attributes:
        config_path: Path to configuration file
        log_level: Console log level from the command line, overrides configuration
        log_file: Log file from the command line, overrides configuration
        config: Loaded configuration (defaults plus environment when no file is given)
    """

    config_path: Path | None = None
    log_level: str | None = None
    log_file: Path | None = None

    _config: SchemaCompatConfig | None = field(default=None, init=False, repr=False)

    @property
    def config(self) -> SchemaCompatConfig:
        """Get or load configuration."""
        if self._config is None:
            if self.config_path is None:
                logger.debug("No configuration file, using defaults and environment")
                try:
                    self._config = SchemaCompatConfig()
                except ValidationError as e:
                    raise ConfigurationError(str(e)) from e
            else:
                logger.debug("Loading configuration", config_path=str(self.config_path))
                self._config = load_config_from_yaml(self.config_path)
                logger.debug("Configuration loaded successfully")

        return self._config

    def setup_logging(self) -> None:
        """Configure logging from configuration and command-line overrides.

        An invalid configuration falls back to default logging settings; the
        command that needs the configuration reports the error.
        """
        try:
            settings = self.config.logging
        except ConfigurationError:
            settings = LoggingConfig()

        log_file = str(self.log_file) if self.log_file else settings.file
        configure_logging(
            level=self.log_level or settings.level,
            log_format=settings.format,
            log_file=log_file,
            file_level=settings.file_level,
        )
