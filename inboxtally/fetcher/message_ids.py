"""Unread message id listing with bounded pagination."""

import logging
from datetime import datetime, timedelta, timezone

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)

# Gmail caps messages.list at 500 results per page
MAX_PAGE_SIZE = 500


def build_unread_query(days: int, now: datetime | None = None) -> str:
    """Build the search query for unread mail received in the last ``days`` days."""
    if now is None:
        now = datetime.now(timezone.utc)
    after_date = now - timedelta(days=days)
    return f"is:unread after:{after_date.strftime('%Y/%m/%d')}"


def list_unread_message_ids(
    service: Resource,
    days: int = 7,
    max_messages: int = 1000,
    page_size: int = MAX_PAGE_SIZE,
) -> list[str]:
    """
    List ids of unread messages within the lookback window.

    Pagination stops as soon as ``max_messages`` ids are collected, when the
    server returns no further page token, or when a page request fails. A
    failed page is not an error: the ids gathered so far are returned.

    Args:
        service: Gmail API service.
        days: Lookback window in days.
        max_messages: Maximum number of ids to collect.
        page_size: Results per page (capped at 500).

    Returns:
        Message ids, newest first as returned by the API.
    """
    query = build_unread_query(days)
    page_size = min(page_size, MAX_PAGE_SIZE)

    message_ids: list[str] = []
    page_token = None

    while len(message_ids) < max_messages:
        try:
            results = (
                service.users()
                .messages()
                .list(
                    userId="me",
                    q=query,
                    maxResults=page_size,
                    pageToken=page_token,
                )
                .execute()
            )
        except HttpError as e:
            logger.warning(
                "Unread listing stopped after %d ids: %s", len(message_ids), e
            )
            break

        refs = results.get("messages", [])
        remaining = max_messages - len(message_ids)
        message_ids.extend(ref["id"] for ref in refs[:remaining])

        page_token = results.get("nextPageToken")
        if not page_token:
            break

    logger.debug("Listed %d unread message ids (query=%r)", len(message_ids), query)
    return message_ids
