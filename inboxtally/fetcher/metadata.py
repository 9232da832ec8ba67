"""Message metadata fetching in paced, bounded-concurrency batches."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from googleapiclient.discovery import Resource

from inboxtally.models import MessageMeta

logger = logging.getLogger(__name__)

META_FIELDS = "id,threadId,labelIds"


def fetch_message_meta(service: Resource, message_id: str) -> MessageMeta | None:
    """
    Fetch id, thread id and labels for one message.

    Returns:
        The message metadata, or None if the request failed.
    """
    try:
        data = (
            service.users()
            .messages()
            .get(
                userId="me",
                id=message_id,
                format="minimal",
                fields=META_FIELDS,
            )
            .execute()
        )
    except Exception as e:
        # Skip this message, the rest of the scan goes on
        logger.warning("Failed to fetch message %s: %s", message_id, e)
        return None

    return MessageMeta.from_api(data)


def fetch_message_metas(
    message_ids: list[str],
    service_factory: Callable[[], Resource],
    batch_size: int = 10,
    batch_delay_ms: int = 100,
    progress_callback: Callable[[int, int], None] | None = None,
) -> list[MessageMeta]:
    """
    Resolve message ids to metadata.

    Ids are fetched ``batch_size`` at a time in parallel. A batch must finish
    before the next one starts, and consecutive batches are separated by
    ``batch_delay_ms`` to stay under the API quota.

    Args:
        message_ids: Ids to resolve.
        service_factory: Builds a Gmail service; called once per worker thread.
        batch_size: Number of concurrent requests per batch.
        batch_delay_ms: Pause between batches in milliseconds.
        progress_callback: Optional callback for progress updates (current, total).

    Returns:
        Metadata of every message that could be fetched, in no particular order.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    local = threading.local()

    def fetch_one(message_id: str) -> MessageMeta | None:
        if not hasattr(local, "service"):
            local.service = service_factory()
        return fetch_message_meta(local.service, message_id)

    metas: list[MessageMeta] = []
    total = len(message_ids)

    with ThreadPoolExecutor(max_workers=batch_size) as pool:
        for start in range(0, total, batch_size):
            batch = message_ids[start : start + batch_size]
            results = list(pool.map(fetch_one, batch))
            metas.extend(meta for meta in results if meta is not None)

            done = start + len(batch)
            if progress_callback:
                progress_callback(done, total)

            if done < total:
                time.sleep(batch_delay_ms / 1000)

    dropped = total - len(metas)
    if dropped:
        logger.info("Resolved %d of %d messages (%d dropped)", len(metas), total, dropped)
    return metas
