"""Google service account authentication."""

from sheet_appender.google.exceptions import CredentialsNotFoundError, GoogleAuthError
from sheet_appender.google.service_account import SCOPES, GoogleServiceAccount

__all__ = [
    "GoogleServiceAccount",
    "GoogleAuthError",
    "CredentialsNotFoundError",
    "SCOPES",
]
