"""Append records to a tab and keep its banding up to date.

The tab layout is a fixed header in row 1 (``id, from, message, created_at``)
followed by contiguous data rows. The next row is found by counting the
existing data rows, so two appenders running at the same time can pick the
same row and overwrite each other. There is no lock or conditional write.

Every append restyles all data rows (two formatting requests per row, sent
in one batchUpdate).
"""

from __future__ import annotations

import logging
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sheet_appender.config import SheetConfig
from sheet_appender.sheets.client import SheetsClient, a1_range

logger = logging.getLogger(__name__)

HEADER = ("id", "from", "message", "created_at")
MESSAGE_COLUMN = HEADER.index("message")

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 12

LIGHT_GREEN = {"red": 0.88, "green": 1, "blue": 0.88}
LIGHT_BLUE = {"red": 0.88, "green": 0.92, "blue": 1}


@dataclass(frozen=True)
class RowRecord:
    """One appended row."""

    id: str
    sender: str
    message: str
    created_at: str

    def as_row(self) -> list[str]:
        """Cell values in header order."""
        return [self.id, self.sender, self.message, self.created_at]

    def to_dict(self) -> dict[str, str]:
        return dict(zip(HEADER, self.as_row()))


def generate_row_id(length: int = ID_LENGTH) -> str:
    """Random base-36 string. Not checked for uniqueness."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2026-10-19T08:15:30.123Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def next_row_number(existing_rows: int) -> int:
    """1-based row number following ``existing_rows`` data rows under the header."""
    return 2 + existing_rows


def band_color(position: int) -> dict[str, float]:
    """Background for the data row at 1-based ``position``."""
    return LIGHT_GREEN if position % 2 == 1 else LIGHT_BLUE


def build_style_requests(sheet_id: int, num_rows: int) -> list[dict[str, Any]]:
    """Formatting requests for every data row of a tab holding ``num_rows`` rows.

    ``num_rows`` counts the header. Data row ``i`` (1-based) sits at grid row
    index ``i`` and gets a banded background over columns A-D plus bold text
    in the message column.
    """
    requests = []
    for i in range(1, num_rows):
        requests.append(
            {
                "repeatCell": {
                    "range": {
                        "sheetId": sheet_id,
                        "startRowIndex": i,
                        "endRowIndex": i + 1,
                        "startColumnIndex": 0,
                        "endColumnIndex": len(HEADER),
                    },
                    "cell": {"userEnteredFormat": {"backgroundColor": band_color(i)}},
                    "fields": "userEnteredFormat.backgroundColor",
                }
            }
        )
        requests.append(
            {
                "repeatCell": {
                    "range": {
                        "sheetId": sheet_id,
                        "startRowIndex": i,
                        "endRowIndex": i + 1,
                        "startColumnIndex": MESSAGE_COLUMN,
                        "endColumnIndex": MESSAGE_COLUMN + 1,
                    },
                    "cell": {"userEnteredFormat": {"textFormat": {"bold": True}}},
                    "fields": "userEnteredFormat.textFormat.bold",
                }
            }
        )
    return requests


class RowAppender:
    """Writes records to one tab of a spreadsheet.

    Each public method opens its own client through ``client_factory``, which
    re-reads the service account key.

    Usage:
        appender = RowAppender(SheetConfig.from_env())
        record = appender.insert_row("a@x.com", "hi")
    """

    def __init__(
        self,
        config: SheetConfig,
        client_factory: Callable[[SheetConfig], SheetsClient] | None = None,
    ) -> None:
        self.config = config
        self._client_factory = client_factory or SheetsClient.from_config

    @property
    def tab(self) -> str:
        return self.config.tab_name

    def _client(self) -> SheetsClient:
        return self._client_factory(self.config)

    def ensure_header_row(self) -> bool:
        """Write the header to row 1 unless it is already there.

        Returns:
            True if the header was written.
        """
        client = self._client()
        header_range = a1_range(self.tab, 1, 1)
        values = client.read_range(header_range)
        if values and list(values[0]) == list(HEADER):
            logger.debug(f"Header already present in {self.tab!r}")
            return False

        client.write_range(header_range, [list(HEADER)], value_input_option="RAW")
        logger.info(f"Wrote header row to {header_range}")
        return True

    def style_sheet_rows(self) -> int:
        """Reapply banding and bold message text to all data rows.

        Returns:
            Number of formatting requests sent (0 when only the header exists).

        Raises:
            SheetNotFoundError: If the tab is not in the spreadsheet.
        """
        client = self._client()
        num_rows = len(client.read_range(a1_range(self.tab)))
        if num_rows < 2:
            logger.debug(f"No data rows in {self.tab!r}, skipping styling")
            return 0

        sheet_id = client.get_sheet_id(self.tab)
        requests = build_style_requests(sheet_id, num_rows)
        client.batch_update(requests)
        logger.info(f"Styled {num_rows - 1} data rows in {self.tab!r}")
        return len(requests)

    def insert_row(self, sender: str, message: str) -> RowRecord:
        """Append a record below the existing data rows, then restyle the tab.

        Args:
            sender: Sender identifier, stored in the ``from`` column.
            message: Message text.

        Returns:
            The record that was written.
        """
        client = self._client()
        record = RowRecord(
            id=generate_row_id(),
            sender=sender,
            message=message,
            created_at=utc_timestamp(),
        )

        self.ensure_header_row()

        data_rows = client.read_range(a1_range(self.tab, 2))
        row_number = next_row_number(len(data_rows))
        target = a1_range(self.tab, row_number, row_number)

        logger.info(f"Writing to exact range: {target} (data rows: {len(data_rows)})")
        client.write_range(target, [record.as_row()], value_input_option="USER_ENTERED")

        self.style_sheet_rows()
        return record


def _appender(config: SheetConfig | None) -> RowAppender:
    return RowAppender(config or SheetConfig.from_env())


def ensure_header_row(config: SheetConfig | None = None) -> bool:
    """Ensure the header row, using the environment config if none is given."""
    return _appender(config).ensure_header_row()


def style_sheet_rows(config: SheetConfig | None = None) -> int:
    """Restyle data rows, using the environment config if none is given."""
    return _appender(config).style_sheet_rows()


def insert_row(sender: str, message: str, config: SheetConfig | None = None) -> dict[str, str]:
    """Append a record and return it as ``{id, from, message, created_at}``."""
    return _appender(config).insert_row(sender, message).to_dict()
