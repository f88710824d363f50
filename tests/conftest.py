import logging

import pytest
from openpyxl import Workbook

from sheetcsv import app_logging
from sheetcsv.settings import reload_settings
from sheetcsv.workbook import SheetCell, display_text


class FakeSheet:
    """In-memory stand-in for SheetReader built from a list of rows."""

    def __init__(self, grid, texts=None, name="Sheet1"):
        self.name = name
        self._grid = grid
        self._texts = texts or {}

    @property
    def rows(self):
        return len(self._grid)

    @property
    def columns(self):
        return max((len(row) for row in self._grid), default=0)

    def cell(self, row, column):
        values = self._grid[row - 1] if row <= len(self._grid) else []
        value = values[column - 1] if column <= len(values) else None
        text = self._texts.get((row, column), display_text(value))
        return SheetCell(value, text)


@pytest.fixture
def fake_sheet():
    return FakeSheet


@pytest.fixture
def make_workbook(tmp_path):
    """Build an .xlsx file from {sheet name: rows} and optional number formats."""

    def _make(sheets, formats=None, filename="book.xlsx"):
        wb = Workbook()
        wb.remove(wb.active)
        for name, rows in sheets.items():
            ws = wb.create_sheet(name)
            for row in rows:
                ws.append(row)
        for (sheet_name, coordinate), number_format in (formats or {}).items():
            wb[sheet_name][coordinate].number_format = number_format
        path = tmp_path / filename
        wb.save(path)
        return path

    return _make


@pytest.fixture(autouse=True)
def default_settings():
    """Each test starts from the packaged settings."""
    reload_settings()
    yield
    reload_settings()


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to a previous test's captured streams."""
    yield
    logger = logging.getLogger(app_logging.LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
