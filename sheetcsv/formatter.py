"""CSV row formatting driven by classified column types."""

from __future__ import annotations

from typing import Mapping, TextIO

from sheetcsv.classifier import ColumnType, has_leading_zeros
from sheetcsv.config import DEFAULT_DATE_FORMAT
from sheetcsv.workbook import SheetCell, SheetReader, as_datetime, is_date_value

SEPARATOR = ","
QUOTE = '"'


def cell_value(cell: SheetCell, date_format: str | None = None) -> str:
    """Return the text emitted for a data cell, before quoting.

    Dates use date_format (strftime directives) or the default pattern;
    everything else uses the cell's display text.
    """
    if cell.value is None:
        return ""
    if is_date_value(cell.value):
        return as_datetime(cell.value).strftime(date_format or DEFAULT_DATE_FORMAT)
    return cell.text


def quote_value(value: str, column_type: ColumnType) -> str:
    """Apply the column's quoting policy to a single value."""
    if column_type is ColumnType.TEXT or has_leading_zeros(value):
        escaped = value.replace(QUOTE, QUOTE * 2)
        return f"{QUOTE}{escaped}{QUOTE}"
    if column_type is ColumnType.DATE:
        return f"{QUOTE}{value}{QUOTE}"
    return value


def format_header(sheet: SheetReader, columns: int) -> str:
    """Header cells are written verbatim and never quoted."""
    return SEPARATOR.join(sheet.cell(1, column).text for column in range(1, columns + 1))


def format_row(
    sheet: SheetReader,
    row: int,
    column_types: Mapping[int, ColumnType],
    date_format: str | None = None,
) -> str:
    """Format one data row as a CSV line without terminator."""
    fields = []
    for column in range(1, len(column_types) + 1):
        value = cell_value(sheet.cell(row, column), date_format)
        fields.append(quote_value(value, column_types[column]))
    return SEPARATOR.join(fields)


def write_csv(
    sheet: SheetReader,
    column_types: Mapping[int, ColumnType],
    stream: TextIO,
    date_format: str | None = None,
    line_terminator: str = "\r\n",
) -> int:
    """Write the header and every data row to stream.

    Returns:
        Number of data rows written.
    """
    stream.write(format_header(sheet, len(column_types)) + line_terminator)

    data_rows = 0
    for row in range(2, sheet.rows + 1):
        stream.write(format_row(sheet, row, column_types, date_format) + line_terminator)
        data_rows += 1
    return data_rows
