"""Unread count engine and live label updates."""

from .events import Direction, LabelChangeEvent, LabelEventBus
from .live_updates import apply_label_change
from .orchestrator import ScanState, UnreadCountEngine

__all__ = [
    "Direction",
    "LabelChangeEvent",
    "LabelEventBus",
    "ScanState",
    "UnreadCountEngine",
    "apply_label_change",
]
