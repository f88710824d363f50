import io
from datetime import date, datetime, time

from sheetcsv.classifier import ColumnType
from sheetcsv.formatter import (
    cell_value,
    format_header,
    format_row,
    quote_value,
    write_csv,
)
from sheetcsv.workbook import SheetCell


def test_text_values_are_quoted_and_escaped():
    assert quote_value('say "hi"', ColumnType.TEXT) == '"say ""hi"""'
    assert quote_value("a,b", ColumnType.TEXT) == '"a,b"'
    assert quote_value("", ColumnType.TEXT) == '""'


def test_date_values_are_quoted_without_escaping():
    assert quote_value("2021/05/03", ColumnType.DATE) == '"2021/05/03"'


def test_numeric_values_are_bare():
    assert quote_value("10.5", ColumnType.NUMERIC) == "10.5"
    assert quote_value("", ColumnType.NUMERIC) == ""


def test_leading_zero_values_are_quoted_in_any_column():
    assert quote_value("007", ColumnType.NUMERIC) == '"007"'
    assert quote_value("08:30", ColumnType.DATE) == '"08:30"'


def test_cell_value_rules():
    assert cell_value(SheetCell(None, "")) == ""
    assert cell_value(SheetCell(10.5, "10.50")) == "10.50"
    moment = datetime(2021, 5, 3, 14, 7, 9)
    assert cell_value(SheetCell(moment, "5/3/21")) == "2021-05-03 14:07:09"
    assert cell_value(SheetCell(moment, "5/3/21"), "%Y/%m/%d") == "2021/05/03"
    assert cell_value(SheetCell(moment, "5/3/21"), "") == "2021-05-03 14:07:09"


def test_header_is_never_quoted(fake_sheet):
    sheet = fake_sheet([["007", 'He said "x"', "ZIP"], ["a", "b", "c"]])
    assert format_header(sheet, 3) == '007,He said "x",ZIP'


def test_format_row_applies_column_policy(fake_sheet):
    sheet = fake_sheet([
        ["ZIP", "Price", "Hired", "Note"],
        ["01234", 10.5, datetime(2021, 5, 3), None],
    ])
    column_types = {
        1: ColumnType.TEXT,
        2: ColumnType.NUMERIC,
        3: ColumnType.DATE,
        4: ColumnType.TEXT,
    }
    line = format_row(sheet, 2, column_types, "%Y/%m/%d")
    assert line == '"01234",10.5,"2021/05/03",""'


def test_write_csv_writes_every_row(fake_sheet):
    sheet = fake_sheet([
        ["Name", "Qty"],
        ["Widget", 3],
        ["Gadget", None],
        ["Gizmo", 12],
    ])
    column_types = {1: ColumnType.TEXT, 2: ColumnType.NUMERIC}
    stream = io.StringIO()

    data_rows = write_csv(sheet, column_types, stream)

    assert data_rows == 3
    assert stream.getvalue() == (
        "Name,Qty\r\n"
        '"Widget",3\r\n'
        '"Gadget",\r\n'
        '"Gizmo",12\r\n'
    )


def test_write_csv_line_terminator(fake_sheet):
    sheet = fake_sheet([["A"], [1]])
    stream = io.StringIO()
    write_csv(sheet, {1: ColumnType.NUMERIC}, stream, line_terminator="\n")
    assert stream.getvalue() == "A\n1\n"


def test_write_csv_header_only(fake_sheet):
    sheet = fake_sheet([["A", "B"]])
    stream = io.StringIO()
    assert write_csv(sheet, {1: ColumnType.TEXT, 2: ColumnType.TEXT}, stream) == 0
    assert stream.getvalue() == "A,B\r\n"


def test_time_only_values_fall_on_excel_epoch():
    assert cell_value(SheetCell(time(13, 5), "13:05")) == "1899-12-30 13:05:00"
    assert cell_value(SheetCell(time(13, 5), "13:05"), "%H:%M") == "13:05"


def test_date_only_values_have_midnight_time():
    assert cell_value(SheetCell(date(2021, 5, 3), "2021-05-03")) == "2021-05-03 00:00:00"
