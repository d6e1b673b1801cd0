"""Google Sheets API client implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sheet_appender.config import SheetConfig
from sheet_appender.google import GoogleServiceAccount
from sheet_appender.sheets.exceptions import SheetNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class Sheet:
    """Represents a sheet (tab) within a spreadsheet."""

    id: int
    title: str


@dataclass
class Spreadsheet:
    """Represents a Google Spreadsheet."""

    id: str
    title: str
    sheets: list[Sheet] | None = None

    def find_sheet(self, title: str) -> Sheet | None:
        """Get a sheet by its tab title."""
        for sheet in self.sheets or []:
            if sheet.title == title:
                return sheet
        return None


def column_letter(index: int) -> str:
    """Convert a 0-based column index to its A1 letters (0 -> A, 26 -> AA)."""
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")
    letters = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def a1_range(
    tab: str,
    start_row: int | None = None,
    end_row: int | None = None,
    start_column: int = 0,
    end_column: int = 3,
) -> str:
    """Build an A1 range on a tab.

    Rows are 1-based; columns are 0-based and inclusive. A missing
    ``start_row`` selects whole columns (``A:D``); a missing ``end_row``
    leaves the range open-ended (``A2:D``).

    Example:
        >>> a1_range("Test Run", 1, 1)
        "'Test Run'!A1:D1"
    """
    quoted = "'" + tab.replace("'", "''") + "'"
    first = column_letter(start_column)
    last = column_letter(end_column)
    if start_row is None:
        return f"{quoted}!{first}:{last}"
    end = "" if end_row is None else str(end_row)
    return f"{quoted}!{first}{start_row}:{last}{end}"


class SheetsClient:
    """Google Sheets API client bound to one spreadsheet.

    Wraps a Sheets v4 discovery service. API errors
    (``googleapiclient.errors.HttpError``) are not caught and reach the caller.

    Usage:
        client = SheetsClient.from_config(config)

        values = client.read_range("'Test Run'!A1:D1")
        client.write_range("'Test Run'!A2:D2", [["a", "b", "c", "d"]])
    """

    def __init__(self, service: Any, spreadsheet_id: str) -> None:
        """Initialize Sheets client.

        Args:
            service: Sheets v4 service object from ``googleapiclient``.
            spreadsheet_id: Google Sheets spreadsheet ID.
        """
        self._service = service
        self.spreadsheet_id = spreadsheet_id

    @classmethod
    def from_config(cls, config: SheetConfig) -> SheetsClient:
        """Authenticate with the configured service account key.

        Reads the key file every time it is called.

        Raises:
            CredentialsNotFoundError: If the key file does not exist.
            GoogleAuthError: If the key file is invalid.
        """
        auth = GoogleServiceAccount(key_path=config.credentials_path, scopes=config.scopes)
        return cls(auth.build_service("sheets", "v4"), config.spreadsheet_id)

    # =========================================================================
    # Spreadsheets
    # =========================================================================

    def get_spreadsheet(self) -> Spreadsheet:
        """Fetch spreadsheet metadata, including its tab listing."""
        result = self._service.spreadsheets().get(spreadsheetId=self.spreadsheet_id).execute()
        return self._parse_spreadsheet(result)

    def get_sheet_id(self, title: str) -> int:
        """Resolve a tab title to its numeric sheet ID.

        Raises:
            SheetNotFoundError: If no tab has that title.
        """
        sheet = self.get_spreadsheet().find_sheet(title)
        if sheet is None:
            raise SheetNotFoundError(title)
        return sheet.id

    # =========================================================================
    # Values
    # =========================================================================

    def read_range(self, range_notation: str) -> list[list[Any]]:
        """Read values from a range.

        Args:
            range_notation: A1 notation (e.g., "'Test Run'!A1:D1").

        Returns:
            2D list of cell values; empty when the range holds no data.
        """
        result = (
            self._service.spreadsheets()
            .values()
            .get(spreadsheetId=self.spreadsheet_id, range=range_notation)
            .execute()
        )
        return result.get("values", [])

    def write_range(
        self,
        range_notation: str,
        values: list[list[Any]],
        value_input_option: str = "USER_ENTERED",
    ) -> int:
        """Write values to a range.

        Args:
            range_notation: A1 notation (e.g., "'Test Run'!A2:D2").
            values: 2D list of values to write.
            value_input_option: "RAW" stores input literally, "USER_ENTERED"
                lets the service parse formulas and dates.

        Returns:
            Number of cells updated.
        """
        result = (
            self._service.spreadsheets()
            .values()
            .update(
                spreadsheetId=self.spreadsheet_id,
                range=range_notation,
                valueInputOption=value_input_option,
                body={"values": values},
            )
            .execute()
        )
        return result.get("updatedCells", 0)

    # =========================================================================
    # Formatting
    # =========================================================================

    def batch_update(self, requests: list[dict[str, Any]]) -> dict[str, Any]:
        """Submit a list of spreadsheet requests as one batchUpdate call."""
        logger.debug(f"batchUpdate with {len(requests)} requests")
        return (
            self._service.spreadsheets()
            .batchUpdate(spreadsheetId=self.spreadsheet_id, body={"requests": requests})
            .execute()
        )

    def _parse_spreadsheet(self, data: dict) -> Spreadsheet:
        """Parse spreadsheet from API response."""
        sheets = []
        for sheet_data in data.get("sheets", []):
            props = sheet_data.get("properties", {})
            sheets.append(Sheet(id=props.get("sheetId", 0), title=props.get("title", "")))

        return Spreadsheet(
            id=data.get("spreadsheetId", self.spreadsheet_id),
            title=data.get("properties", {}).get("title", ""),
            sheets=sheets,
        )
