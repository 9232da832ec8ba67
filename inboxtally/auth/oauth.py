"""OAuth 2.0 flow and Gmail service construction."""

import os
from pathlib import Path

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource

from .credentials import load_credentials, refresh_if_needed, save_credentials

# Counting unread mail only needs read access
SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
]


def get_credentials_path() -> Path:
    """Get the path to the OAuth client credentials file."""
    creds_path = os.getenv("GOOGLE_CREDENTIALS_PATH", "./credentials.json")
    return Path(creds_path)


def authenticate() -> Credentials:
    """
    Authenticate with Gmail API using OAuth 2.0.

    This function will:
    1. Try to load existing credentials from token file
    2. Refresh if expired
    3. Run OAuth flow if no valid credentials exist

    Returns:
        Valid Google OAuth credentials.

    Raises:
        FileNotFoundError: If credentials.json is not found.
    """
    creds = load_credentials()

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            return refresh_if_needed(creds)
        except Exception:
            # Refresh failed, need to re-authenticate
            creds = None

    credentials_path = get_credentials_path()

    if not credentials_path.exists():
        raise FileNotFoundError(
            f"OAuth credentials file not found at {credentials_path}. "
            "Please download credentials.json from Google Cloud Console "
            "and place it in the project root."
        )

    flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), SCOPES)
    creds = flow.run_local_server(port=0)

    save_credentials(creds)

    return creds


def build_service(token: str) -> Resource:
    """
    Build a Gmail API service authorized with a bare access token.

    Each call returns a new service with its own HTTP transport, so one can
    be created per worker thread.
    """
    creds = Credentials(token=token)
    return build("gmail", "v1", credentials=creds, cache_discovery=False)
