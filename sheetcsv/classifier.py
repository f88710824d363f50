"""Column type inference from a sample of worksheet rows."""

from __future__ import annotations

from enum import Enum

from sheetcsv import app_logging as logging
from sheetcsv.workbook import SheetReader, is_date_value, is_numeric_value

FIRST_DATA_ROW = 2


class ColumnType(Enum):
    """How every cell of a column is quoted in the CSV output."""
    TEXT = "Text"
    NUMERIC = "Numeric"
    DATE = "Date"


def has_leading_zeros(text: str) -> bool:
    """Check if text looks like a number with significant leading zeros.

    "007" and "0123" qualify; "0", "0.5" and "" do not.
    """
    if not text:
        return False
    return text.startswith("0") and len(text) > 1 and not text.startswith("0.")


def classify_column(sheet: SheetReader, column: int, sample_row_limit: int) -> ColumnType:
    """Decide the type of one column from rows 2 up to sample_row_limit (exclusive).

    Scanning stops at the first leading-zero text or non-numeric value, so
    later rows never override that evidence.
    """
    has_non_numeric = False
    has_any_value = False
    all_dates = True
    has_leading = False

    for row in range(FIRST_DATA_ROW, sample_row_limit):
        cell = sheet.cell(row, column)
        if cell.value is None or cell.value == "":
            continue

        has_any_value = True

        if has_leading_zeros(cell.text):
            has_leading = True
            break

        if is_date_value(cell.value):
            continue
        all_dates = False

        if not is_numeric_value(cell.value):
            has_non_numeric = True
            break

    if not has_any_value or has_non_numeric or has_leading:
        return ColumnType.TEXT
    if all_dates:
        return ColumnType.DATE
    return ColumnType.NUMERIC


def classify_columns(
    sheet: SheetReader, column_count: int, sample_row_limit: int
) -> dict[int, ColumnType]:
    """Classify columns 1..column_count.

    Args:
        sheet: Worksheet to sample.
        column_count: Number of columns to classify.
        sample_row_limit: Exclusive upper row bound, normally min(rows, 26).

    Returns:
        Mapping of 1-based column index to its ColumnType.
    """
    column_types: dict[int, ColumnType] = {}
    for column in range(1, column_count + 1):
        column_type = classify_column(sheet, column, sample_row_limit)
        column_types[column] = column_type
        logging.log_column_type(column, sheet.cell(1, column).text, column_type)
    return column_types
