"""Fetcher module for Gmail unread message retrieval."""

from .labels import fetch_label_names
from .message_ids import build_unread_query, list_unread_message_ids
from .metadata import fetch_message_meta, fetch_message_metas

__all__ = [
    "build_unread_query",
    "fetch_label_names",
    "fetch_message_meta",
    "fetch_message_metas",
    "list_unread_message_ids",
]
