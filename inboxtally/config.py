"""Label policy and scan settings."""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# Built-in Gmail labels that get their own counters
SYSTEM_LABELS = frozenset(
    {
        "INBOX",
        "SENT",
        "DRAFT",
        "TRASH",
        "SPAM",
        "STARRED",
        "IMPORTANT",
    }
)

CATEGORY_LABELS = frozenset(
    {
        "CATEGORY_FORUMS",
        "CATEGORY_UPDATES",
        "CATEGORY_PROMOTIONS",
        "CATEGORY_SOCIAL",
    }
)

# A thread carrying any of these is not counted as archived
ARCHIVE_EXCLUDED_LABELS = SYSTEM_LABELS | CATEGORY_LABELS


@dataclass(frozen=True)
class LabelPolicy:
    """Which labels are system labels and which keep a thread out of the archive."""

    system_labels: frozenset[str] = SYSTEM_LABELS
    archive_excluded: frozenset[str] = ARCHIVE_EXCLUDED_LABELS

    def is_system(self, label_id: str) -> bool:
        return label_id in self.system_labels

    def excludes_from_archive(self, label_ids) -> bool:
        """True if any of the labels keeps a thread out of the archive bucket."""
        return any(label_id in self.archive_excluded for label_id in label_ids)


DEFAULT_POLICY = LabelPolicy()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, using %d", name, raw, default)
        return default


@dataclass
class ScanSettings:
    """Bounds and pacing for one full unread scan."""

    lookback_days: int = 7
    max_messages: int = 1000
    batch_size: int = 10
    batch_delay_ms: int = 100
    page_size: int = field(default=500, repr=False)

    @classmethod
    def from_env(cls) -> "ScanSettings":
        """Build settings from UNREAD_* environment variables."""
        return cls(
            lookback_days=_env_int("UNREAD_LOOKBACK_DAYS", 7),
            max_messages=_env_int("UNREAD_MAX_MESSAGES", 1000),
            batch_size=_env_int("UNREAD_BATCH_SIZE", 10),
            batch_delay_ms=_env_int("UNREAD_BATCH_DELAY_MS", 100),
        )
