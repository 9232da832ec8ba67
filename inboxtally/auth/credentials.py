"""Credential storage and token lookup for Gmail API access."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

logger = logging.getLogger(__name__)


def get_token_path() -> Path:
    """Get the path for storing OAuth tokens."""
    token_path = os.getenv("TOKEN_PATH", "./data/credentials/token.json")
    path = Path(token_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def load_credentials() -> Optional[Credentials]:
    """
    Load OAuth credentials from the token file.

    Returns:
        Credentials object if a readable token exists, None otherwise.
    """
    token_path = get_token_path()

    if not token_path.exists():
        return None

    try:
        return Credentials.from_authorized_user_file(str(token_path))
    except (json.JSONDecodeError, ValueError):
        return None


def save_credentials(creds: Credentials) -> None:
    """Save OAuth credentials to the token file."""
    token_path = get_token_path()
    token_path.parent.mkdir(parents=True, exist_ok=True)

    with open(token_path, "w") as f:
        f.write(creds.to_json())


def refresh_if_needed(creds: Credentials) -> Credentials:
    """
    Refresh credentials if they are expired.

    Raises:
        google.auth.exceptions.RefreshError: If refresh fails.
    """
    if creds.expired and creds.refresh_token:
        creds.refresh(Request())
        save_credentials(creds)

    return creds


def get_access_token() -> Optional[str]:
    """
    Return a current access token, or None if there is none.

    Never opens a browser: expired tokens are refreshed with the stored
    refresh token, anything else yields None.
    """
    creds = load_credentials()
    if creds is None:
        return None

    if not creds.valid:
        try:
            creds = refresh_if_needed(creds)
        except RefreshError as e:
            logger.warning("Token refresh failed: %s", e)
            return None

    return creds.token if creds.valid else None


def delete_credentials() -> bool:
    """
    Delete stored credentials.

    Returns:
        True if credentials were deleted, False if they didn't exist.
    """
    token_path = get_token_path()

    if token_path.exists():
        token_path.unlink()
        return True

    return False
