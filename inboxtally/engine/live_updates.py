"""Incremental count updates from label change events."""

from inboxtally.config import DEFAULT_POLICY, LabelPolicy
from inboxtally.models import LabelCounts

from .events import LabelChangeEvent


def _bump(counts: dict[str, int], label_id: str, delta: int) -> None:
    counts[label_id] = max(0, counts.get(label_id, 0) + delta)


def apply_label_change(
    counts: LabelCounts,
    event: LabelChangeEvent,
    policy: LabelPolicy = DEFAULT_POLICY,
) -> LabelCounts:
    """
    Apply one event's delta to the counts.

    Each affected label moves by one in its system or user map. The archive
    bucket moves too unless one of the labels is archive-excluded. Every
    count is clamped at zero.

    This assumes the event describes one thread's net change and is not
    checked against scan data; drift is corrected by the next full scan.
    """
    delta = event.delta
    user = dict(counts.user)
    system = dict(counts.system)

    for label_id in event.label_ids:
        if policy.is_system(label_id):
            _bump(system, label_id, delta)
        else:
            _bump(user, label_id, delta)

    archive = counts.archive
    if not policy.excludes_from_archive(event.label_ids):
        archive = max(0, archive + delta)

    return LabelCounts(user=user, system=system, archive=archive)
