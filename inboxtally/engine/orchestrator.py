"""Unread count engine: guarded full scans plus live event deltas."""

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Callable

from googleapiclient.discovery import Resource

from inboxtally.analytics import build_counts
from inboxtally.auth import build_service, get_access_token
from inboxtally.config import DEFAULT_POLICY, LabelPolicy, ScanSettings
from inboxtally.errors import CredentialError
from inboxtally.fetcher import fetch_message_metas, list_unread_message_ids
from inboxtally.models import LabelCounts, UnreadSnapshot

from .events import LabelChangeEvent, LabelEventBus
from .live_updates import apply_label_change

logger = logging.getLogger(__name__)


class ScanState(Enum):
    IDLE = "idle"
    SCANNING = "scanning"


class UnreadCountEngine:
    """
    Keeps unread thread counts per label, the archive bucket included.

    Counts are replaced wholesale by each full scan and nudged by label
    change events in between. Events that arrive while a scan is running
    are applied to the current counts but are lost once that scan finishes:
    a completed scan always overwrites pending deltas.

    Producers of read-status changes publish them with
    ``engine.event_bus.emit(LabelChangeEvent.from_action(...))``.
    """

    def __init__(
        self,
        token_provider: Callable[[], str | None] = get_access_token,
        event_bus: LabelEventBus | None = None,
        settings: ScanSettings | None = None,
        policy: LabelPolicy = DEFAULT_POLICY,
        service_factory: Callable[[str], Resource] = build_service,
        scan_on_start: bool = True,
    ):
        """
        Initialize the engine and subscribe it to label change events.

        Args:
            token_provider: Returns a Gmail access token, or None.
            event_bus: Source of label change events. Created if not provided.
            settings: Scan bounds and pacing. Read from environment if not provided.
            policy: System and archive-excluded label sets.
            service_factory: Builds a Gmail service from an access token.
            scan_on_start: Run one scan before returning.
        """
        self.token_provider = token_provider
        self.event_bus = event_bus or LabelEventBus()
        self.settings = settings or ScanSettings.from_env()
        self.policy = policy
        self.service_factory = service_factory

        self._lock = threading.Lock()
        self._state = ScanState.IDLE
        self._counts = LabelCounts()
        self._error: str | None = None
        self._scanned_messages = 0
        self._last_updated: datetime | None = None

        self._unsubscribe = self.event_bus.subscribe(self.handle_event)

        if scan_on_start:
            self.refresh()

    @property
    def state(self) -> ScanState:
        with self._lock:
            return self._state

    def snapshot(self) -> UnreadSnapshot:
        """Return a copy of the current counts and status."""
        with self._lock:
            return UnreadSnapshot(
                user_label_counts=dict(self._counts.user),
                system_label_counts=dict(self._counts.system),
                archive_count=self._counts.archive,
                loading=self._state is ScanState.SCANNING,
                error=self._error,
                state=self._state.value,
                scanned_messages=self._scanned_messages,
                last_updated=self._last_updated,
            )

    def refresh(self) -> bool:
        """
        Run a full scan unless one is already running.

        A call made during a scan is dropped, not queued.

        Returns:
            True if this call ran a scan, False if it was dropped.
        """
        with self._lock:
            if self._state is ScanState.SCANNING:
                logger.debug("Scan already in progress, refresh dropped")
                return False
            self._state = ScanState.SCANNING
            self._error = None

        try:
            counts, scanned = self._scan()
        except Exception as e:
            logger.exception("Unread scan failed")
            with self._lock:
                self._error = str(e) or type(e).__name__
        else:
            with self._lock:
                self._counts = counts
                self._scanned_messages = scanned
                self._last_updated = datetime.now(timezone.utc)
                self._error = None
            logger.info(
                "Unread scan done: %d messages, %d user labels, archive=%d",
                scanned,
                len(counts.user),
                counts.archive,
            )
        finally:
            with self._lock:
                self._state = ScanState.IDLE

        return True

    def _scan(self) -> tuple[LabelCounts, int]:
        token = self.token_provider()
        if not token:
            raise CredentialError("No Gmail access token")

        message_ids = list_unread_message_ids(
            self.service_factory(token),
            days=self.settings.lookback_days,
            max_messages=self.settings.max_messages,
            page_size=self.settings.page_size,
        )
        if not message_ids:
            return LabelCounts(), 0

        metas = fetch_message_metas(
            message_ids,
            service_factory=lambda: self.service_factory(token),
            batch_size=self.settings.batch_size,
            batch_delay_ms=self.settings.batch_delay_ms,
        )
        return build_counts(metas, self.policy), len(metas)

    def handle_event(self, event: LabelChangeEvent) -> None:
        """Apply a label change delta to the current counts."""
        with self._lock:
            self._counts = apply_label_change(self._counts, event, self.policy)

    def close(self) -> None:
        """Stop listening for label change events."""
        self._unsubscribe()

    def __enter__(self) -> "UnreadCountEngine":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
