"""Global configuration constants for sheetcsv."""

from pathlib import Path

# Paths
BASE_DIR = Path(__file__).parent
CONFIG_DIR = BASE_DIR / "config"
SETTINGS_FILENAME = "settings.toml"

# Defaults
SAMPLE_ROWS = 26  # header row plus the data rows inspected for column typing
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LINE_TERMINATORS = {"crlf": "\r\n", "lf": "\n"}

# Messages
SUCCESS_MESSAGE = "Conversion completed successfully!"
