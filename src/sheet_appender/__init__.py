"""Append formatted rows to a Google Sheets tab."""

from sheet_appender.config import ConfigError, SheetConfig
from sheet_appender.sheets import RowAppender, RowRecord, ensure_header_row, insert_row, style_sheet_rows

__all__ = [
    "ConfigError",
    "SheetConfig",
    "RowAppender",
    "RowRecord",
    "ensure_header_row",
    "insert_row",
    "style_sheet_rows",
]
