"""Login credentials read from a JSON test-data file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import CredentialsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """An immutable username/password pair."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"

    def as_payload(self) -> dict[str, str]:
        """Return the JSON body expected by the login endpoint."""
        return {"username": self.username, "password": self.password}


def load_credentials(path: str | Path) -> Credentials:
    """
    Read ``{"username": ..., "password": ...}`` from ``path``.

    Args:
        path: Location of the credentials JSON file.

    Returns:
        The parsed credentials.

    Raises:
        CredentialsError: If the file is missing, is not JSON, or lacks a
            non-empty string ``username`` or ``password``.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as credentials_file:
            data = json.load(credentials_file)
    except FileNotFoundError as exc:
        raise CredentialsError(f"Credentials file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CredentialsError(f"Credentials file is not valid JSON: {path}") from exc

    if not isinstance(data, dict):
        raise CredentialsError(f"Credentials file must hold a JSON object: {path}")

    for field_name in ("username", "password"):
        value = data.get(field_name)
        if not isinstance(value, str) or not value:
            raise CredentialsError(f"Credentials file {path} is missing '{field_name}'")

    logger.info("Loaded credentials for user '%s' from %s", data["username"], path)
    return Credentials(username=data["username"], password=data["password"])
