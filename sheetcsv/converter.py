"""Workbook to CSV conversion."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from sheetcsv import app_logging as logging
from sheetcsv.classifier import ColumnType, classify_columns
from sheetcsv.config import LINE_TERMINATORS
from sheetcsv.formatter import write_csv
from sheetcsv.settings import Settings, get_settings
from sheetcsv.workbook import open_workbook, select_worksheet


@dataclass
class ConversionOptions:
    """Per-run parameters.

    An empty worksheet_name selects the first worksheet; an empty
    date_format uses the configured default pattern.
    """
    worksheet_name: str = ""
    date_format: str = ""


@dataclass
class ConversionResult:
    """Outcome of a conversion."""
    worksheet: str
    rows: int
    columns: int
    column_types: dict[int, ColumnType] = field(default_factory=dict)
    data_rows: int = 0
    headers: list[str] = field(default_factory=list)


def convert_excel_to_csv(
    excel_path: Path | str,
    csv_path: Path | str,
    options: ConversionOptions | None = None,
    settings: Settings | None = None,
) -> ConversionResult:
    """Convert one worksheet of an Excel workbook to a CSV file.

    Args:
        excel_path: Workbook to read.
        csv_path: CSV file to write. Existing content is overwritten.
        options: Worksheet and date format selection.
        settings: Settings to use. If None, uses the global settings.

    Returns:
        ConversionResult describing the sheet and the column types used.

    Raises:
        WorksheetNotFoundError: If options name a worksheet that does not exist.
    """
    if options is None:
        options = ConversionOptions()
    if settings is None:
        settings = get_settings()

    excel_path = Path(excel_path)
    csv_path = Path(csv_path)
    start = time.time()
    logging.log_conversion_start(excel_path, csv_path)

    with open_workbook(excel_path) as workbook:
        sheet = select_worksheet(workbook, options.worksheet_name)
        rows, columns = sheet.rows, sheet.columns
        logging.log_worksheet_selected(sheet.name, rows, columns)

        sample_row_limit = min(rows, settings.conversion.sample_rows)
        column_types = classify_columns(sheet, columns, sample_row_limit)

        date_format = options.date_format or settings.conversion.default_date_format
        line_terminator = LINE_TERMINATORS.get(settings.output.line_terminator, "\r\n")

        with open(csv_path, "w", newline="", encoding=settings.output.encoding) as stream:
            data_rows = write_csv(sheet, column_types, stream, date_format, line_terminator)

        headers = [sheet.cell(1, column).text for column in range(1, columns + 1)]

    logging.log_conversion_complete(data_rows, columns, time.time() - start)

    return ConversionResult(
        worksheet=sheet.name,
        rows=rows,
        columns=columns,
        column_types=column_types,
        data_rows=data_rows,
        headers=headers,
    )
