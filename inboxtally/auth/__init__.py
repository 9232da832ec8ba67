"""Authentication module for Gmail API."""

from .credentials import delete_credentials, get_access_token, load_credentials, save_credentials
from .oauth import authenticate, build_service

__all__ = [
    "authenticate",
    "build_service",
    "delete_credentials",
    "get_access_token",
    "load_credentials",
    "save_credentials",
]
