"""Configuration management for fieldval using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError

CONFIG_FILENAME = ".fieldval.json"


class ReportFormat(str, Enum):
    """Report format types."""
    TABLE = "table"
    JSON = "json"
    MARKDOWN = "markdown"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return getattr(logging, self.value.upper())


class ValidatorSettings(BaseModel):
    """Execution settings for ``Validator.validate``."""
    parallel: bool = False
    max_workers: int | None = Field(alias="maxWorkers", default=None)
    parallel_threshold: int = Field(alias="parallelThreshold", default=32)

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v):
        if v is not None and v < 1:
            raise ValueError("max_workers must be >= 1")
        return v

    @field_validator("parallel_threshold")
    @classmethod
    def validate_parallel_threshold(cls, v):
        if v < 1:
            raise ValueError("parallel_threshold must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: ReportFormat = ReportFormat.TABLE

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARNING


class FieldvalConfig(BaseModel):
    """Complete fieldval configuration model."""
    validator: ValidatorSettings = Field(default_factory=ValidatorSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> FieldvalConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .fieldval.json

    Returns:
        FieldvalConfig: Loaded and validated configuration

    Raises:
        ConfigurationError: If the file is not valid JSON or fails validation
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if not config_path or not config_path.exists():
        return create_default_config()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in config file: {e}", source=str(config_path)) from e

    try:
        return FieldvalConfig(**config_data)
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}", source=str(config_path)) from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .fieldval.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> FieldvalConfig:
    """Create default configuration."""
    return FieldvalConfig()
