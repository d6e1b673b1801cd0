"""Spreadsheet target configuration.

Settings come from explicit ``SheetConfig`` instances. ``SheetConfig.from_env``
builds one from the environment:
    GOOGLE_SHEET_ID   - spreadsheet ID (required)
    CREDENTIALS_PATH  - path to the service account JSON key (required)
    SHEET_TAB         - tab name (optional, defaults to "Test Run")

A ``.env`` file in the working directory is loaded first; variables already
set in the environment take precedence.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sheet_appender.google.service_account import DEFAULT_SCOPES

ENV_FILE = Path(".env")
DEFAULT_TAB = "Test Run"


class ConfigError(ValueError):
    """Raised when a required setting is missing."""


def load_env_file(env_path: Path, environ: dict | None = None) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.
        environ: Mapping to populate. Defaults to ``os.environ``.

    Returns:
        Dictionary of loaded variables.
    """
    target = os.environ if environ is None else environ
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            # Remove surrounding quotes
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            if key and key not in target:
                target[key] = value
                loaded[key] = value

    return loaded


@dataclass(frozen=True)
class SheetConfig:
    """Where rows are written and how to authenticate."""

    spreadsheet_id: str
    credentials_path: Path
    tab_name: str = DEFAULT_TAB
    scopes: tuple[str, ...] = DEFAULT_SCOPES

    def __post_init__(self) -> None:
        if not self.spreadsheet_id:
            raise ConfigError("spreadsheet_id is required")
        if not self.tab_name:
            raise ConfigError("tab_name is required")
        object.__setattr__(self, "credentials_path", Path(self.credentials_path))
        object.__setattr__(self, "scopes", tuple(self.scopes))

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        env_file: Path | None = ENV_FILE,
    ) -> SheetConfig:
        """Build a config from environment variables.

        Args:
            env: Mapping to read from. Defaults to ``os.environ`` after
                loading ``env_file`` into it.
            env_file: Optional .env file to load first. Ignored when ``env``
                is given.

        Raises:
            ConfigError: If GOOGLE_SHEET_ID or CREDENTIALS_PATH is missing.
        """
        if env is None:
            if env_file is not None:
                load_env_file(Path(env_file))
            env = os.environ

        spreadsheet_id = env.get("GOOGLE_SHEET_ID")
        if not spreadsheet_id:
            raise ConfigError("GOOGLE_SHEET_ID is not set")

        credentials_path = env.get("CREDENTIALS_PATH")
        if not credentials_path:
            raise ConfigError("CREDENTIALS_PATH is not set")

        return cls(
            spreadsheet_id=spreadsheet_id,
            credentials_path=Path(credentials_path),
            tab_name=env.get("SHEET_TAB") or DEFAULT_TAB,
        )
