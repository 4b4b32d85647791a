"""
User-facing notifications.

The Notifier collects the short success/error messages shown to the user
after an action, keeps a bounded history and mirrors every message to the
log.
"""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

logger = logging.getLogger(__name__)


class NotificationLevel(Enum):
    """Notification severity."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Notification:
    """A single user-facing message."""

    level: NotificationLevel
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, str]:
        return {
            "level": self.level.value,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }


class Notifier:
    """Bounded notification feed with optional listeners."""

    def __init__(self, max_history: int = 50) -> None:
        self._history: deque[Notification] = deque(maxlen=max_history)
        self._listeners: list[Callable[[Notification], None]] = []

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self._history]

    def subscribe(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    def success(self, message: str) -> None:
        self._emit(NotificationLevel.SUCCESS, message)

    def error(self, message: str) -> None:
        self._emit(NotificationLevel.ERROR, message)

    def info(self, message: str) -> None:
        self._emit(NotificationLevel.INFO, message)

    def drain(self) -> list[Notification]:
        """Return and forget all pending notifications."""
        pending = list(self._history)
        self._history.clear()
        return pending

    def discard_since(self, snapshot: list[Notification]) -> list[Notification]:
        """
        Remove notifications emitted after `snapshot` (a `history` copy) was taken.

        Returns:
            The removed notifications
        """
        earlier = {id(n) for n in snapshot}
        added = [n for n in self._history if id(n) not in earlier]
        self._history = deque(
            (n for n in self._history if id(n) in earlier),
            maxlen=self._history.maxlen,
        )
        return added

    def _emit(self, level: NotificationLevel, message: str) -> None:
        notification = Notification(level=level, message=message)
        self._history.append(notification)

        log = logger.warning if level is NotificationLevel.ERROR else logger.info
        log(f"Notification: {message}", extra={"notification_level": level.value})

        for listener in self._listeners:
            try:
                listener(notification)
            except Exception as e:
                logger.warning(f"Notification listener failed: {e}")
