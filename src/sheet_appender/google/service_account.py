"""Google Service Account authentication.

Service accounts are used for server-to-server authentication without user interaction.
The target spreadsheet must be shared with the service account email.

Example:
    >>> auth = GoogleServiceAccount(
    ...     key_path="service_account_key.json",
    ...     scopes=["sheets", "drive"]
    ... )
    >>> sheets_service = auth.build_service("sheets", "v4")
"""

import json
import logging
from pathlib import Path

from google.oauth2 import service_account
from googleapiclient.discovery import build

from sheet_appender.google.exceptions import CredentialsNotFoundError, GoogleAuthError

logger = logging.getLogger(__name__)


SCOPES = {
    "drive": "https://www.googleapis.com/auth/drive",
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
}

DEFAULT_SCOPES = ("sheets", "drive")


def resolve_scopes(scopes) -> list[str]:
    """Resolve scope names to full URLs."""
    resolved = []
    for scope in scopes:
        if scope.startswith("https://"):
            resolved.append(scope)
        elif scope in SCOPES:
            resolved.append(SCOPES[scope])
        else:
            raise ValueError(
                f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
            )
    return resolved


class GoogleServiceAccount:
    """Google Service Account authentication.

    Every instance re-reads the key file and builds fresh credentials;
    nothing is cached between instances.
    """

    def __init__(
        self,
        key_path: str | Path,
        scopes: list[str] | tuple[str, ...] | None = None,
    ):
        """Initialize service account authentication.

        Args:
            key_path: Path to service account JSON key file.
            scopes: Scope names (e.g., ["sheets", "drive"]) or full URLs.
                   If None, defaults to spreadsheets and drive read/write.

        Raises:
            CredentialsNotFoundError: If key file not found.
            GoogleAuthError: If key file is invalid.
        """
        self.key_path = Path(key_path)

        if not self.key_path.is_file():
            raise CredentialsNotFoundError(str(self.key_path))

        self.scopes = resolve_scopes(scopes or DEFAULT_SCOPES)

        try:
            with open(self.key_path, encoding="utf-8") as f:
                key_data = json.load(f)
        except json.JSONDecodeError as e:
            raise GoogleAuthError(f"Invalid JSON in key file: {e}") from e
        except UnicodeDecodeError as e:
            raise GoogleAuthError(f"Key file is not UTF-8 text: {e}") from e
        except OSError as e:
            raise GoogleAuthError(f"Cannot read key file {self.key_path}: {e}") from e

        if not isinstance(key_data, dict) or key_data.get("type") != "service_account":
            found = key_data.get("type") if isinstance(key_data, dict) else None
            raise GoogleAuthError(
                f"Invalid key file: expected type 'service_account', got '{found}'"
            )

        self.client_email = key_data.get("client_email", "")
        self.project_id = key_data.get("project_id", "")

        try:
            self._credentials = service_account.Credentials.from_service_account_info(
                key_data,
                scopes=self.scopes,
            )
        except ValueError as e:
            raise GoogleAuthError(f"Invalid service account key: {e}") from e

        logger.info(f"Service account initialized: {self.client_email}")
        logger.debug(f"Scopes: {self.scopes}")

    @property
    def email(self) -> str:
        """Get the service account email address.

        Share the spreadsheet with this email to grant access.
        """
        return self.client_email

    def build_service(self, service_name: str = "sheets", version: str = "v4"):
        """Build a Google API service with service account credentials.

        Args:
            service_name: Name of the service (e.g., 'sheets', 'drive').
            version: API version (e.g., 'v4', 'v3').

        Returns:
            Google API service object.
        """
        return build(service_name, version, credentials=self._credentials, cache_discovery=False)

    def get_info(self) -> dict:
        """Get information about the service account."""
        return {
            "type": "service_account",
            "email": self.client_email,
            "project_id": self.project_id,
            "scopes": self.scopes,
            "key_path": str(self.key_path),
        }
