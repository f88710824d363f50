"""Workbook access over openpyxl: worksheet lookup, cell values and display text."""

from __future__ import annotations

import calendar
import re
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Iterable, Iterator

from openpyxl import load_workbook
from openpyxl.styles.numbers import FORMAT_GENERAL, FORMAT_TEXT, is_date_format
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

DATE_TYPES = (datetime, date, time)
NUMERIC_TYPES = (int, float, Decimal)

# Excel serial day zero, used to give time-only values a calendar date
EXCEL_EPOCH = date(1899, 12, 30)

# Number format parsing
_DATE_TOKEN = re.compile(
    r'"[^"]*"|\\.|\[[^\]]*\]|am/pm|a/p|y+|m+|d+|h+|s+|.', re.IGNORECASE
)
_NUMBER_TOKEN = re.compile(r'"[^"]*"|\\.|\[[^\]]*\]|_.|\*.|general|e[+-]|.', re.IGNORECASE)
_PLACEHOLDERS = set("0#?.,")


class WorksheetNotFoundError(LookupError):
    """Raised when a worksheet name is not present in the workbook."""

    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        self.available = list(available)
        super().__init__(
            f"Worksheet '{name}' not found. "
            f"Available worksheets: {', '.join(self.available)}"
        )


@dataclass(frozen=True)
class SheetCell:
    """A cell's underlying value together with its display text."""
    value: Any
    text: str


class SheetReader:
    """Read-only, 1-based view of a worksheet."""

    def __init__(self, worksheet: Worksheet):
        self._worksheet = worksheet

    @property
    def name(self) -> str:
        return self._worksheet.title

    @property
    def rows(self) -> int:
        return self._worksheet.max_row

    @property
    def columns(self) -> int:
        return self._worksheet.max_column

    def cell(self, row: int, column: int) -> SheetCell:
        cell = self._worksheet.cell(row=row, column=column)
        return SheetCell(cell.value, display_text(cell.value, cell.number_format))


@contextmanager
def open_workbook(path: Path | str) -> Iterator[Workbook]:
    """Open a workbook with cached formula values, closing it on exit."""
    workbook = load_workbook(path, data_only=True)
    try:
        yield workbook
    finally:
        workbook.close()


def select_worksheet(workbook: Workbook, name: str | None = None) -> SheetReader:
    """Return the named worksheet, or the first one when no name is given.

    Raises:
        WorksheetNotFoundError: If the name does not match any worksheet.
    """
    worksheets = workbook.worksheets
    if not name:
        return SheetReader(worksheets[0])

    for worksheet in worksheets:
        if worksheet.title == name:
            return SheetReader(worksheet)

    raise WorksheetNotFoundError(name, (ws.title for ws in worksheets))


def is_date_value(value: Any) -> bool:
    """True for date, time and datetime values."""
    return isinstance(value, DATE_TYPES)


def is_numeric_value(value: Any) -> bool:
    """True for int, float and Decimal values. Booleans are not numbers."""
    return isinstance(value, NUMERIC_TYPES) and not isinstance(value, bool)


def display_text(value: Any, number_format: str | None = FORMAT_GENERAL) -> str:
    """Render a value the way a spreadsheet viewer shows it.

    Covers General, text, zero-padded, fixed-decimal, thousands, percent,
    scientific and date/time codes. Anything else falls back to General.
    """
    code = number_format or FORMAT_GENERAL

    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, str):
        return value
    if is_date_value(value):
        return _format_date(value, code)
    if isinstance(value, timedelta):
        return _format_elapsed(value)
    if is_numeric_value(value):
        return _format_number(value, code)
    return str(value)


def _format_general(value: int | float | Decimal) -> str:
    if isinstance(value, int):
        return str(value)
    number = float(value)
    if number.is_integer() and abs(number) < 1e11:
        return str(int(number))
    return f"{number:.10g}".upper()


def _split_sections(code: str) -> list[str]:
    """Split a format code on ';' outside quoted literals."""
    sections, current, quoted = [], [], False
    for char in code:
        if char == '"':
            quoted = not quoted
        if char == ";" and not quoted:
            sections.append("".join(current))
            current = []
        else:
            current.append(char)
    sections.append("".join(current))
    return sections


def _format_number(value: int | float | Decimal, code: str) -> str:
    if code in (FORMAT_GENERAL, FORMAT_TEXT) or is_date_format(code):
        return _format_general(value)

    sections = _split_sections(code)
    negative = value < 0
    if negative and len(sections) > 1 and sections[1]:
        section, sign = sections[1], ""
    elif value == 0 and len(sections) > 2 and sections[2]:
        section, sign = sections[2], ""
    else:
        section, sign = sections[0], "-" if negative else ""

    prefix, suffix, pattern = [], [], []
    percent = general = False
    for token in _NUMBER_TOKEN.findall(section):
        lower = token.lower()
        target = suffix if pattern or general else prefix
        if token.startswith('"'):
            target.append(token[1:-1])
        elif token.startswith("\\"):
            target.append(token[1:])
        elif token.startswith("_"):
            target.append(" ")
        elif token.startswith(("[", "*")):
            continue
        elif lower == "general":
            general = True
        elif token in _PLACEHOLDERS or lower in ("e+", "e-"):
            if suffix:
                # Literals between placeholders are not rendered
                suffix.clear()
            pattern.append(token)
        elif token == "%":
            percent = True
            target.append(token)
        else:
            target.append(token)

    magnitude = abs(value)
    if percent:
        magnitude = Decimal(str(magnitude)) * 100

    if general or not pattern:
        body = _format_general(magnitude)
    else:
        body = _render_pattern(magnitude, "".join(pattern))
        if body is None:
            return _format_general(value)

    return f"{sign}{''.join(prefix)}{body}{''.join(suffix)}"


def _render_pattern(magnitude: int | float | Decimal, pattern: str) -> str | None:
    """Render a non-negative number with a placeholder pattern like '#,##0.00'."""
    lower = pattern.lower()
    if "e+" in lower or "e-" in lower:
        mantissa = re.split(r"e[+-]", lower)[0]
        decimals = len(mantissa.partition(".")[2])
        return f"{float(magnitude):.{decimals}E}"

    # Trailing commas scale by a thousand each
    while pattern.endswith(","):
        pattern = pattern[:-1]
        magnitude = Decimal(str(magnitude)) / 1000

    integer_part, has_point, fraction_part = pattern.partition(".")
    grouped = "," in integer_part
    min_integer = integer_part.count("0")
    min_fraction = fraction_part.count("0")
    max_fraction = len(fraction_part.replace(",", ""))

    try:
        quantum = Decimal(1).scaleb(-max_fraction)
        rounded = Decimal(str(magnitude)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None

    integer_text, _, fraction_text = f"{rounded:f}".partition(".")
    while len(fraction_text) > min_fraction and fraction_text.endswith("0"):
        fraction_text = fraction_text[:-1]

    if integer_text == "0" and min_integer == 0:
        integer_text = ""
    integer_text = integer_text.zfill(min_integer)
    if grouped and integer_text:
        integer_text = f"{int(integer_text):,}"

    if fraction_text or (has_point and min_fraction):
        return f"{integer_text}.{fraction_text}"
    return integer_text


def _format_elapsed(value: timedelta) -> str:
    total = int(value.total_seconds())
    sign = "-" if total < 0 else ""
    hours, remainder = divmod(abs(total), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{sign}{hours}:{minutes:02d}:{seconds:02d}"


def as_datetime(value: datetime | date | time) -> datetime:
    """Widen a date or time to a datetime; times fall on the Excel epoch."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    return datetime.combine(EXCEL_EPOCH, value)


def _format_date(value: datetime | date | time, code: str) -> str:
    if not is_date_format(code):
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%d %H:%M:%S")
        if isinstance(value, date):
            return value.strftime("%Y-%m-%d")
        return value.strftime("%H:%M:%S")

    moment = as_datetime(value)
    tokens = []
    for token in _DATE_TOKEN.findall(_split_sections(code)[0]):
        inner = token[1:-1].lower()
        if token.startswith("[") and inner and set(inner) <= set("hms"):
            token = inner
        tokens.append(token)
    twelve_hour = any(token.lower() in ("am/pm", "a/p") for token in tokens)

    parts = []
    for index, token in enumerate(tokens):
        lower = token.lower()
        kind = lower[0]
        if token.startswith('"'):
            parts.append(token[1:-1])
        elif token.startswith("\\"):
            parts.append(token[1:])
        elif token.startswith("["):
            continue
        elif lower == "am/pm":
            parts.append("AM" if moment.hour < 12 else "PM")
        elif lower == "a/p":
            parts.append("A" if moment.hour < 12 else "P")
        elif kind == "y":
            parts.append(f"{moment.year:04d}" if len(lower) > 2 else f"{moment.year % 100:02d}")
        elif kind == "m" and _is_minute(tokens, index):
            parts.append(_pad(moment.minute, lower))
        elif kind == "m":
            if len(lower) == 1 or len(lower) == 2:
                parts.append(_pad(moment.month, lower))
            elif len(lower) == 3:
                parts.append(calendar.month_abbr[moment.month])
            elif len(lower) == 4:
                parts.append(calendar.month_name[moment.month])
            else:
                parts.append(calendar.month_name[moment.month][0])
        elif kind == "d":
            if len(lower) <= 2:
                parts.append(_pad(moment.day, lower))
            elif len(lower) == 3:
                parts.append(calendar.day_abbr[moment.weekday()])
            else:
                parts.append(calendar.day_name[moment.weekday()])
        elif kind == "h":
            hour = moment.hour % 12 or 12 if twelve_hour else moment.hour
            parts.append(_pad(hour, lower))
        elif kind == "s":
            parts.append(_pad(moment.second, lower))
        else:
            parts.append(token)
    return "".join(parts)


def _pad(number: int, token: str) -> str:
    return f"{number:02d}" if len(token) > 1 else str(number)


def _is_date_part(token: str) -> bool:
    return token[:1].lower() in ("y", "m", "d", "h", "s")


def _is_minute(tokens: list[str], index: int) -> bool:
    """An 'm' token means minutes when it follows hours or precedes seconds."""
    for token in reversed(tokens[:index]):
        if _is_date_part(token):
            if token[0].lower() == "h":
                return True
            break
    for token in tokens[index + 1:]:
        if _is_date_part(token):
            return token[0].lower() == "s"
    return False
