"""Tests for credential lookup."""

import json
from datetime import datetime, timedelta

from inboxtally.auth import get_access_token, load_credentials


def _write_token(path, expiry: datetime | None = None, refresh_token: str | None = None):
    data = {
        "token": "access-123",
        "client_id": "client",
        "client_secret": "secret",
        "refresh_token": refresh_token,
    }
    if expiry:
        data["expiry"] = expiry.strftime("%Y-%m-%dT%H:%M:%SZ")
    path.write_text(json.dumps(data))


class TestGetAccessToken:
    """Tests for the non-interactive token provider."""

    def test_no_token_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TOKEN_PATH", str(tmp_path / "token.json"))

        assert load_credentials() is None
        assert get_access_token() is None

    def test_corrupt_token_file(self, tmp_path, monkeypatch):
        token_path = tmp_path / "token.json"
        token_path.write_text("not json")
        monkeypatch.setenv("TOKEN_PATH", str(token_path))

        assert get_access_token() is None

    def test_valid_token(self, tmp_path, monkeypatch):
        token_path = tmp_path / "token.json"
        _write_token(token_path, expiry=datetime.utcnow() + timedelta(hours=1), refresh_token="r")
        monkeypatch.setenv("TOKEN_PATH", str(token_path))

        assert get_access_token() == "access-123"

    def test_expired_without_refresh_token(self, tmp_path, monkeypatch):
        token_path = tmp_path / "token.json"
        _write_token(token_path, expiry=datetime.utcnow() - timedelta(hours=1))
        monkeypatch.setenv("TOKEN_PATH", str(token_path))

        assert get_access_token() is None
