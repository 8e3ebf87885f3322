"""Configuration management for sanitizr using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .patterns import DEFAULT_CACHE_SIZE, set_cache_size

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".sanitizr.json"


class OutputFormat(str, Enum):
    """CLI output formats."""
    TABLE = "table"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class PatternConfig(BaseModel):
    """Regex handling configuration section."""
    cache_size: int = Field(alias="cacheSize", default=DEFAULT_CACHE_SIZE)

    @field_validator("cache_size")
    @classmethod
    def validate_cache_size(cls, v):
        if v < 0:
            raise ValueError("cache_size must be >= 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class OutputConfig(BaseModel):
    """CLI output configuration section."""
    format: OutputFormat = OutputFormat.TABLE


class SanitizrConfig(BaseModel):
    """Complete sanitizr configuration model."""
    patterns: PatternConfig = Field(default_factory=PatternConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> SanitizrConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .sanitizr.json

    Returns:
        SanitizrConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If config file specified but not found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return create_default_config()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e

    try:
        config = SanitizrConfig(**config_data)
    except (ValidationError, TypeError) as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    logger.debug(f"Loaded configuration from {config_path}")
    return config


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .sanitizr.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> SanitizrConfig:
    return SanitizrConfig()


def configure(config: SanitizrConfig) -> None:
    """Apply library-wide settings from a configuration."""
    set_cache_size(config.patterns.cache_size)
