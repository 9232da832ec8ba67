"""Analytics module for unread count aggregation."""

from .label_tree import build_label_tree, flatten_label_tree
from .unread_counts import build_counts, group_thread_labels

__all__ = [
    "build_counts",
    "build_label_tree",
    "flatten_label_tree",
    "group_thread_labels",
]
