"""Console output utilities with colors and formatting."""

import os
import sys
import time
from dataclasses import dataclass, field


# Colors are disabled by NO_COLOR or when stdout is not a terminal
USE_COLORS = (
    not os.environ.get("NO_COLOR")
    and hasattr(sys.stdout, "isatty")
    and sys.stdout.isatty()
)

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[91m",
    "green": "\033[92m",
    "cyan": "\033[96m",
}


def _color(text: str, name: str) -> str:
    if USE_COLORS:
        return f"{_CODES[name]}{text}{_CODES['reset']}"
    return text


def red(text: str) -> str:
    return _color(text, "red")

def green(text: str) -> str:
    return _color(text, "green")

def cyan(text: str) -> str:
    return _color(text, "cyan")

def bold(text: str) -> str:
    return _color(text, "bold")

def dim(text: str) -> str:
    return _color(text, "dim")


def info(message: str):
    """Print an info message."""
    print(message)

def success(message: str):
    """Print a success message in green."""
    print(green(message))

def error(message: str):
    """Print an error message in red."""
    print(red(f"Error: {message}"))


def header(title: str):
    """Print a section header."""
    line = "-" * 21
    print(line)
    print(bold(title))
    print(line)


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def format_number(n: int) -> str:
    """Format a number with thousand separators."""
    return f"{n:,}"


@dataclass
class ConversionStats:
    """Track conversion statistics."""
    start_time: float = field(default_factory=time.time)
    worksheet: str = ""
    data_rows: int = 0
    columns: int = 0
    output_file: str = ""

    def elapsed(self) -> float:
        """Return elapsed time in seconds."""
        return time.time() - self.start_time


def print_column_types(headers: list[str], column_types: dict) -> None:
    """Print the detected type of every column."""
    for column, column_type in column_types.items():
        name = headers[column - 1] if column <= len(headers) else ""
        label = f"Column {column}"
        if name:
            label += f" ({name})"
        print(f"  {dim('-')} {label}: {cyan(column_type.value)}")


def print_summary_box(stats: ConversionStats, width: int = 40):
    """Print a boxed summary of a finished conversion."""
    rule = "+" + "-" * (width - 2) + "+"
    rows = [
        ("Worksheet", stats.worksheet),
        ("Data rows", format_number(stats.data_rows)),
        ("Columns", format_number(stats.columns)),
        ("Time elapsed", format_duration(stats.elapsed())),
        ("Output", stats.output_file),
    ]

    print()
    print(rule)
    print(f"| {'Conversion Complete'.ljust(width - 4)} |")
    print(rule)
    for label, value in rows:
        line = f"{label + ':':14} {value}"
        print(f"| {line.ljust(width - 4)} |")
    print(rule)
