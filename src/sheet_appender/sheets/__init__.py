"""Append rows to a Google Sheets tab with service account authentication.

Usage:
    from sheet_appender.config import SheetConfig
    from sheet_appender.sheets import RowAppender

    appender = RowAppender(SheetConfig.from_env())
    record = appender.insert_row("a@x.com", "hi")

Setup:
    1. Create a service account and download its JSON key
    2. Share the spreadsheet with the service account email
    3. Set GOOGLE_SHEET_ID and CREDENTIALS_PATH (or put them in .env)
"""

from __future__ import annotations

from sheet_appender.sheets.appender import (
    HEADER,
    RowAppender,
    RowRecord,
    ensure_header_row,
    insert_row,
    style_sheet_rows,
)
from sheet_appender.sheets.client import Sheet, SheetsClient, Spreadsheet
from sheet_appender.sheets.exceptions import SheetNotFoundError, SheetsError

__all__ = [
    "HEADER",
    "RowAppender",
    "RowRecord",
    "Sheet",
    "SheetsClient",
    "Spreadsheet",
    "SheetsError",
    "SheetNotFoundError",
    "ensure_header_row",
    "insert_row",
    "style_sheet_rows",
]
