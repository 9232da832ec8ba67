"""Data models shared by the fetcher, analytics and engine."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class MessageMeta:
    """Minimal message metadata: id, thread and labels."""

    id: str
    thread_id: str | None
    label_ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "MessageMeta":
        """Build from a Gmail ``messages.get`` response."""
        return cls(
            id=data.get("id"),
            thread_id=data.get("threadId"),
            label_ids=frozenset(data.get("labelIds") or []),
        )


@dataclass(frozen=True)
class LabelCounts:
    """Distinct unread thread counts per label plus the archive bucket."""

    user: dict[str, int] = field(default_factory=dict)
    system: dict[str, int] = field(default_factory=dict)
    archive: int = 0


@dataclass(frozen=True)
class UnreadSnapshot:
    """
    Read-only view of the engine's materialized state.

    Attributes:
        user_label_counts: Unread thread count per user label id.
        system_label_counts: Unread thread count per system label id.
        archive_count: Unread threads carrying no system or category label.
        loading: True while a scan is in flight.
        error: Message of the last failed scan, cleared by the next success.
        state: Current scan state name ("idle" or "scanning").
        scanned_messages: Messages resolved by the last successful scan.
        last_updated: Completion time of the last successful scan.
    """

    user_label_counts: dict[str, int]
    system_label_counts: dict[str, int]
    archive_count: int
    loading: bool
    error: str | None
    state: str
    scanned_messages: int = 0
    last_updated: datetime | None = None
