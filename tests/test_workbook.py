from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest

from sheetcsv.workbook import (
    WorksheetNotFoundError,
    display_text,
    is_date_value,
    is_numeric_value,
    open_workbook,
    select_worksheet,
)


def test_select_first_worksheet_by_default(make_workbook):
    path = make_workbook({"Sheet1": [["A"], [1]], "Data": [["B"], [2]]})
    with open_workbook(path) as workbook:
        assert select_worksheet(workbook).name == "Sheet1"
        assert select_worksheet(workbook, "").name == "Sheet1"


def test_select_worksheet_by_name(make_workbook):
    path = make_workbook({"Sheet1": [["A"], [1]], "Data": [["B"], [2], [3]]})
    with open_workbook(path) as workbook:
        sheet = select_worksheet(workbook, "Data")
        assert sheet.name == "Data"
        assert (sheet.rows, sheet.columns) == (3, 1)
        assert sheet.cell(3, 1).value == 3


def test_missing_worksheet_lists_available(make_workbook):
    path = make_workbook({"Sheet1": [["A"]], "Data": [["B"]]})
    with open_workbook(path) as workbook:
        with pytest.raises(WorksheetNotFoundError) as excinfo:
            select_worksheet(workbook, "Summary")

    assert str(excinfo.value) == (
        "Worksheet 'Summary' not found. Available worksheets: Sheet1, Data"
    )
    assert excinfo.value.name == "Summary"
    assert excinfo.value.available == ["Sheet1", "Data"]


def test_cell_reads_value_and_formatted_text(make_workbook):
    path = make_workbook(
        {"Sheet1": [["Code", "Amount"], [1234, 1234.5]]},
        formats={("Sheet1", "A2"): "00000", ("Sheet1", "B2"): "#,##0.00"},
    )
    with open_workbook(path) as workbook:
        sheet = select_worksheet(workbook)
        code = sheet.cell(2, 1)
        amount = sheet.cell(2, 2)

    assert (code.value, code.text) == (1234, "01234")
    assert (amount.value, amount.text) == (1234.5, "1,234.50")


def test_value_kinds():
    assert is_date_value(datetime(2021, 5, 3))
    assert is_date_value(date(2021, 5, 3))
    assert is_date_value(time(8, 30))
    assert not is_date_value("2021-05-03")
    assert is_numeric_value(7)
    assert is_numeric_value(7.5)
    assert is_numeric_value(Decimal("7.50"))
    assert not is_numeric_value(True)
    assert not is_numeric_value("7")


@pytest.mark.parametrize(
    "value, number_format, expected",
    [
        (None, "General", ""),
        ("01234", "@", "01234"),
        (True, "General", "TRUE"),
        (False, "General", "FALSE"),
        (20, "General", "20"),
        (20.0, "General", "20"),
        (10.5, "General", "10.5"),
        (1 / 3, "General", "0.3333333333"),
        (42, "@", "42"),
        (1234, "00000", "01234"),
        (3.14159, "0.00", "3.14"),
        (2.675, "0.00", "2.68"),
        (1234567.891, "#,##0.00", "1,234,567.89"),
        (1234, "$#,##0", "$1,234"),
        (0.125, "0%", "13%"),
        (0.5, "0.0%", "50.0%"),
        (12345.678, "0.00E+00", "1.23E+04"),
        (-5, "0.00", "-5.00"),
        (-5, "0.00;(0.00)", "(5.00)"),
        (0.5, "#.##", ".5"),
        (1500000, '0.0,,"M"', "1.5M"),
    ],
)
def test_display_text_numbers(value, number_format, expected):
    assert display_text(value, number_format) == expected


@pytest.mark.parametrize(
    "value, number_format, expected",
    [
        (datetime(2021, 5, 3, 14, 7, 9), "yyyy-mm-dd hh:mm:ss", "2021-05-03 14:07:09"),
        (datetime(2021, 5, 3), "dd/mm/yyyy", "03/05/2021"),
        (datetime(2021, 5, 3), "m/d/yy", "5/3/21"),
        (datetime(2021, 5, 3), "mmm d, yyyy", "May 3, 2021"),
        (datetime(2021, 5, 3), "dddd, mmmm d", "Monday, May 3"),
        (datetime(2021, 5, 3, 14, 7), "h:mm AM/PM", "2:07 PM"),
        (datetime(2021, 5, 3, 0, 5), "h:mm AM/PM", "12:05 AM"),
        (date(2021, 5, 3), "yyyy-mm-dd", "2021-05-03"),
        (time(8, 30), "hh:mm", "08:30"),
        (datetime(2021, 5, 3, 9, 0), "General", "2021-05-03 09:00:00"),
    ],
)
def test_display_text_dates(value, number_format, expected):
    assert display_text(value, number_format) == expected


def test_display_text_elapsed_time():
    assert display_text(timedelta(hours=26, minutes=5), "[h]:mm:ss") == "26:05:00"
