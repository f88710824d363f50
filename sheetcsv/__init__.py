"""Convert an Excel worksheet to CSV with per-column quoting."""

__version__ = "1.0.0"
