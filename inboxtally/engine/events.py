"""Label change events and a small in-process event bus."""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Whether a label change adds or removes an unread thread."""

    INCREASE = 1
    DECREASE = -1


# Read-status actions emitted by mail clients
ACTION_DIRECTIONS = {
    "mark-unread": Direction.INCREASE,
    "mark-read": Direction.DECREASE,
}


@dataclass(frozen=True)
class LabelChangeEvent:
    """A thread's unread state changed on the given labels."""

    direction: Direction
    label_ids: tuple[str, ...]
    thread_id: str | None = None
    message_id: str | None = None

    @property
    def delta(self) -> int:
        return self.direction.value

    @classmethod
    def from_action(
        cls,
        action: str,
        label_ids: Iterable[str],
        thread_id: str | None = None,
        message_id: str | None = None,
    ) -> "LabelChangeEvent":
        """
        Build an event from a read-status action ("mark-read" or "mark-unread").

        Raises:
            ValueError: If the action is unknown.
        """
        try:
            direction = ACTION_DIRECTIONS[action]
        except KeyError:
            raise ValueError(f"Unknown label action: {action!r}") from None
        return cls(direction, tuple(label_ids), thread_id, message_id)


Listener = Callable[[LabelChangeEvent], None]


class LabelEventBus:
    """Push-based fan-out of label change events to subscribers."""

    def __init__(self):
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: LabelChangeEvent) -> None:
        """Deliver an event to every current listener."""
        with self._lock:
            listeners = list(self._listeners)

        logger.debug("Label update event: %s", event)
        for listener in listeners:
            listener(event)
