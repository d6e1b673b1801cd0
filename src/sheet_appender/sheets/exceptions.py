"""Google Sheets exceptions."""

from __future__ import annotations


class SheetsError(Exception):
    """Base exception for spreadsheet errors."""


class SheetNotFoundError(SheetsError):
    """Raised when a tab title is not present in the spreadsheet."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f'Sheet tab "{title}" not found')
