"""Configuration management for Schema Compat using Pydantic.

This module provides type-safe configuration models for compatibility
policy, output locations and logging.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schema_compat.exceptions import ConfigurationError
from schema_compat.schema.field_path import FieldPath


class CompatibilityConfig(BaseModel):
    """Compatibility policy applied by the check command."""

    narrow_existing: bool = Field(
        default=False,
        description=(
            "Silently narrow the LCD to the compatible subset instead of "
            "rejecting removed properties"
        ),
    )
    root_path: str = Field(
        default="schema.openAPISchema",
        description="Dotted field path prefixed to every reported violation",
    )
    select: str | None = Field(
        default=None,
        description="Dotted selector of the schema inside loaded documents "
        "(e.g. spec.versions.0.schema.openAPIV3Schema)",
    )

    @field_validator("root_path")
    @classmethod
    def validate_root_path(cls, v: str) -> str:
        """Validate root path has no empty segments."""
        FieldPath.parse(v)
        return v

    @property
    def field_path(self) -> FieldPath:
        """Root path as a FieldPath."""
        return FieldPath.parse(self.root_path)


class OutputConfig(BaseModel):
    """Configuration for files written by the check command."""

    lcd_file: str | None = Field(default=None, description="Where to write the LCD schema")
    report_file: str | None = Field(
        default=None, description="Where to write the JSON compatibility report"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="WARNING",
        description="Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    file_level: str = Field(
        default="DEBUG",
        description="File log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    format: str = Field(default="json", description="Log format (json or console)")
    file: str | None = Field(default=None, description="Log file path")

    @field_validator("level", "file_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v_lower


class SchemaCompatConfig(BaseSettings):
    """Main Schema Compat configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_COMPAT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    compatibility: CompatibilityConfig = Field(
        default_factory=CompatibilityConfig, description="Compatibility policy"
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output files")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )


def load_config_from_yaml(config_path: str | Path) -> SchemaCompatConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        SchemaCompatConfig: Loaded configuration

    Raises:
        ConfigurationError: If the file is missing, empty or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not config_data:
        raise ConfigurationError(f"Empty configuration file: {config_path}")
    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration must be a mapping: {config_path}")

    config_data = _expand_env_vars(config_data)

    try:
        return SchemaCompatConfig(**config_data)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def _expand_env_vars(data: dict) -> dict:
    """Recursively expand environment variables in config dict.

    Supports ${VAR_NAME} syntax for environment variable substitution.

    Args:
        data: Configuration dictionary

    Returns:
        dict: Dictionary with expanded environment variables
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_name = data[2:-1]
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ConfigurationError(
                    f"Environment variable '{var_name}' not found. "
                    f"Please set it in your environment or .env file."
                )
            return env_value
        return data
    else:
        return data


def save_config_to_yaml(config: SchemaCompatConfig, output_path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        output_path: Path to output YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
