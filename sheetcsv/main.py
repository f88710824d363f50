#!/usr/bin/env python3
"""sheetcsv - Main entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sheetcsv import app_logging as logging
from sheetcsv import output as console
from sheetcsv.config import SUCCESS_MESSAGE
from sheetcsv.converter import ConversionOptions, convert_excel_to_csv
from sheetcsv.settings import get_settings, reload_settings


def suggest_output_filename(excel_path: str) -> str:
    """Suggest a CSV path next to the workbook: report.xlsx -> report.csv."""
    if not excel_path:
        return ""
    return str(Path(excel_path).with_suffix(".csv"))


def prompt(message: str, default: str = "") -> str:
    """Ask for a value, returning default when the answer is empty."""
    suffix = f" [{default}]" if default else ""
    answer = input(f"{message}{suffix}: ").strip()
    return answer or default


def check_file_accessible(file_path: Path) -> bool:
    """Check if a file can be written to (not locked by another process).

    Args:
        file_path: Path to the file to check

    Returns:
        True if file is accessible or doesn't exist, False if locked
    """
    if not file_path.exists():
        return True

    try:
        with open(file_path, "a"):
            pass
        return True
    except OSError:
        return False


def ensure_file_accessible(file_path: Path) -> bool:
    """Ensure a file is accessible, prompting user to close it if needed.

    Returns:
        True if file is accessible, False if user chose to quit
    """
    while not check_file_accessible(file_path):
        console.error(f"Cannot access '{file_path.name}' - file is in use.")
        response = input("Close the file and press Enter to retry, or X to quit: ").strip().lower()
        if response == "x":
            return False
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheetcsv",
        description="Convert an Excel worksheet to CSV with per-column quoting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    sheetcsv                                  (prompt for every option)
    sheetcsv report.xlsx report.csv
    sheetcsv report.xlsx report.csv --sheet Data
    sheetcsv report.xlsx report.csv --date-format "%%Y/%%m/%%d"
        """,
    )
    parser.add_argument("excel", nargs="?", help="Excel workbook to convert")
    parser.add_argument("csv", nargs="?", help="CSV file to write (overwritten)")
    parser.add_argument(
        "--sheet",
        metavar="NAME",
        default=None,
        help="Worksheet name (default: first worksheet)",
    )
    parser.add_argument(
        "--date-format",
        metavar="PATTERN",
        default=None,
        help="strftime pattern for date cells (default: %%Y-%%m-%%d %%H:%%M:%%S)",
    )
    parser.add_argument(
        "--config",
        metavar="DIR",
        type=Path,
        default=None,
        help="Directory containing settings.toml",
    )
    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config is not None:
        reload_settings(args.config)
    settings = get_settings()

    # Anything missing from the command line is asked for interactively
    interactive = not args.excel or not args.csv
    excel_path = args.excel or prompt("Enter Excel file path")
    csv_path = args.csv or prompt(
        "Enter output CSV file path", suggest_output_filename(excel_path)
    )
    worksheet_name = args.sheet
    if worksheet_name is None:
        worksheet_name = (
            prompt("Enter worksheet name (or press Enter for first worksheet)")
            if interactive
            else ""
        )
    date_format = args.date_format
    if date_format is None:
        date_format = (
            prompt("Enter date format (e.g. '%Y-%m-%d' or press Enter for default)")
            if interactive
            else ""
        )

    if not excel_path or not csv_path:
        console.error("Excel and CSV file paths cannot be empty!")
        sys.exit(1)

    output_path = Path(csv_path)
    if not ensure_file_accessible(output_path):
        console.info("Exiting.")
        sys.exit(0)

    logging.setup_logging(Path(excel_path), output_dir=output_path.parent)
    console.header(f"Workbook: {Path(excel_path).name}")

    stats = console.ConversionStats(output_file=str(output_path))
    options = ConversionOptions(worksheet_name=worksheet_name, date_format=date_format)

    try:
        result = convert_excel_to_csv(excel_path, output_path, options, settings)
    except Exception as e:
        logging.log_error("Conversion failed", e)
        console.error(str(e))
        sys.exit(1)

    stats.worksheet = result.worksheet
    stats.data_rows = result.data_rows
    stats.columns = result.columns

    console.info(f"Detected column types ({console.bold(result.worksheet)}):")
    console.print_column_types(result.headers, result.column_types)
    console.success(SUCCESS_MESSAGE)
    console.print_summary_box(stats)


if __name__ == "__main__":
    main()
