"""Logging configuration for sheetcsv."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sheetcsv.classifier import ColumnType

from sheetcsv.settings import get_settings

LOGGER_NAME = "sheetcsv"

# Module-level logger
_logger: logging.Logger | None = None
_log_file_path: Path | None = None


def setup_logging(source: Path, output_dir: Path | None = None) -> logging.Logger:
    """Set up logging for a conversion session.

    Args:
        source: The workbook being converted
        output_dir: Directory for log files. If None, uses current directory.

    Returns:
        Configured logger instance
    """
    global _logger, _log_file_path

    settings = get_settings()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # Capture all, filter at handler level

    # Remove existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # Console handler (only warnings and errors)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if settings.logging.enabled:
        if output_dir is None:
            output_dir = Path.cwd()

        date_str = datetime.now().strftime("%Y-%m-%d")
        log_path = Path(settings.logging.filename.format(date=date_str))
        if not log_path.is_absolute():
            log_path = output_dir / log_path

        log_path.parent.mkdir(parents=True, exist_ok=True)
        _log_file_path = log_path

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        level = getattr(logging, settings.logging.level, logging.INFO)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

        logger.info("=" * 60)
        logger.info(f"Conversion session started for workbook: {source.name}")
        logger.info("=" * 60)
    else:
        _log_file_path = None

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The configured logger, or a default logger if not set up.
    """
    global _logger
    if _logger is None:
        _logger = logging.getLogger(LOGGER_NAME)
        if not _logger.handlers:
            _logger.addHandler(logging.NullHandler())
    return _logger


def get_log_file_path() -> Path | None:
    """Get the current log file path, or None if file logging is disabled."""
    return _log_file_path


def log_conversion_start(excel_path: Path, csv_path: Path) -> None:
    """Log the start of a conversion."""
    logger = get_logger()
    logger.info(f"Converting {excel_path} -> {csv_path}")


def log_worksheet_selected(name: str, rows: int, columns: int) -> None:
    """Log the worksheet chosen for conversion."""
    logger = get_logger()
    logger.info(f"Worksheet '{name}' ({rows} rows, {columns} columns)")


def log_column_type(column: int, header: str, column_type: ColumnType) -> None:
    """Log the type decided for a column."""
    logger = get_logger()
    logger.info(f"Column {column} ({header}): {column_type.value}")


def log_conversion_complete(data_rows: int, columns: int, duration: float) -> None:
    """Log conversion completion."""
    logger = get_logger()
    logger.info("-" * 60)
    logger.info("Conversion complete:")
    logger.info(f"  Data rows written: {data_rows}")
    logger.info(f"  Columns: {columns}")
    logger.info(f"  Duration: {duration:.2f}s")
    logger.info("=" * 60)


def log_error(message: str, exc: Exception | None = None) -> None:
    """Log an error."""
    logger = get_logger()
    if exc:
        logger.error(f"{message}: {exc}", exc_info=exc)
    else:
        logger.error(message)
