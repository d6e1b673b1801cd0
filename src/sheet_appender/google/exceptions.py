"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class CredentialsNotFoundError(GoogleAuthError):
    """Raised when the service account key file is not found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Service account key not found at {path}. "
            "Download a JSON key for the service account from Google Cloud Console."
        )
