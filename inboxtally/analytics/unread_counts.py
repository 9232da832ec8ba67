"""Unread thread counts per label."""

from collections import defaultdict
from typing import Iterable

from inboxtally.config import DEFAULT_POLICY, LabelPolicy
from inboxtally.models import LabelCounts, MessageMeta


def group_thread_labels(messages: Iterable[MessageMeta]) -> dict[str, set[str]]:
    """
    Union the labels of every message per thread.

    Messages without a thread id are skipped.
    """
    thread_labels: dict[str, set[str]] = defaultdict(set)
    for msg in messages:
        if not msg.thread_id:
            continue
        thread_labels[msg.thread_id].update(msg.label_ids)
    return dict(thread_labels)


def build_counts(
    messages: Iterable[MessageMeta],
    policy: LabelPolicy = DEFAULT_POLICY,
) -> LabelCounts:
    """
    Count distinct unread threads per label.

    A thread adds one to every label found on any of its messages, no matter
    how many of them carry it. System labels and user labels go to separate
    maps. The archive bucket counts threads with none of the policy's
    excluded labels, including threads with no labels at all.

    Args:
        messages: Message metadata from one scan.
        policy: Label policy deciding system and archive membership.

    Returns:
        User counts, system counts and archive count.
    """
    user: dict[str, int] = defaultdict(int)
    system: dict[str, int] = defaultdict(int)
    archive = 0

    for labels in group_thread_labels(messages).values():
        for label_id in labels:
            if policy.is_system(label_id):
                system[label_id] += 1
            else:
                user[label_id] += 1

        if not policy.excludes_from_archive(labels):
            archive += 1

    return LabelCounts(user=dict(user), system=dict(system), archive=archive)
