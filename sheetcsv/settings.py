"""Settings management for sheetcsv."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from sheetcsv.config import CONFIG_DIR, DEFAULT_DATE_FORMAT, SAMPLE_ROWS, SETTINGS_FILENAME


@dataclass
class ConversionSettings:
    """Column typing and date configuration."""
    sample_rows: int = SAMPLE_ROWS
    default_date_format: str = DEFAULT_DATE_FORMAT


@dataclass
class OutputSettings:
    """CSV output configuration."""
    encoding: str = "utf-8"
    line_terminator: Literal["crlf", "lf"] = "crlf"


@dataclass
class LoggingSettings:
    """Logging configuration."""
    enabled: bool = False
    filename: str = "logs/sheetcsv_{date}.log"
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@dataclass
class Settings:
    """Global application settings."""
    conversion: ConversionSettings = field(default_factory=ConversionSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def load_settings(config_dir: Path | None = None) -> Settings:
    """Load settings from TOML file.

    Args:
        config_dir: Directory containing settings.toml. If None, uses default.

    Returns:
        Settings object with loaded or default values.
    """
    if config_dir is None:
        config_dir = CONFIG_DIR

    settings_file = config_dir / SETTINGS_FILENAME

    if not settings_file.exists():
        return Settings()

    try:
        with open(settings_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return Settings()

    conversion_data = data.get("conversion", {})
    conversion = ConversionSettings(
        sample_rows=conversion_data.get("sample_rows", SAMPLE_ROWS),
        default_date_format=conversion_data.get(
            "default_date_format", DEFAULT_DATE_FORMAT
        ),
    )

    output = OutputSettings(
        encoding=data.get("output", {}).get("encoding", "utf-8"),
        line_terminator=data.get("output", {}).get("line_terminator", "crlf"),
    )

    logging_data = data.get("logging", {})
    logging = LoggingSettings(
        enabled=logging_data.get("enabled", False),
        filename=logging_data.get("filename", "logs/sheetcsv_{date}.log"),
        level=logging_data.get("level", "INFO"),
    )

    return Settings(conversion=conversion, output=output, logging=logging)


# Global settings instance (loaded once)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reload_settings(config_dir: Path | None = None) -> Settings:
    """Reload settings from disk."""
    global _settings
    _settings = load_settings(config_dir)
    return _settings
