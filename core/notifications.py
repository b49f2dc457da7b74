"""User-facing notification hub for store and catalog events.

Updates:
  v0.2.0 - 2026-10-04 - Add notify() shortcut used by favorites and catalog flows.
  v0.1.0 - 2026-09-26 - Introduce notification hub with bounded history.
"""
from __future__ import annotations

import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("prompt_hero.notifications")


class NotificationLevel(str, Enum):
    """Severity levels communicated to listeners."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True)
class Notification:
    """Payload describing a notification event."""
    id: uuid.UUID
    message: str
    level: NotificationLevel
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return a serialisable representation of the notification."""
        return {
            "id": str(self.id),
            "message": self.message,
            "level": self.level.value,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }


class NotificationSubscription:
    """Disposable handle that removes its callback when closed."""
    def __init__(
        self,
        center: NotificationCenter,
        callback: Callable[[Notification], None],
    ) -> None:
        self._center = center
        self._callback = callback
        self._closed = False

    def close(self) -> None:
        """Detach the stored callback if it is still active."""
        if self._closed:
            return
        self._closed = True
        self._center.unsubscribe(self._callback)

    def __enter__(self) -> NotificationSubscription:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


class NotificationCenter:
    """Publish/subscribe hub delivering notifications to listeners."""
    def __init__(self, history_limit: int = 200) -> None:
        self._subscribers: list[Callable[[Notification], None]] = []
        self._history: deque[Notification] = deque(maxlen=history_limit)

    def subscribe(self, callback: Callable[[Notification], None]) -> NotificationSubscription:
        """Register *callback* to receive future notifications."""
        self._subscribers.append(callback)
        return NotificationSubscription(self, callback)

    def unsubscribe(self, callback: Callable[[Notification], None]) -> None:
        """Remove a previously subscribed callback if present."""
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def publish(self, notification: Notification) -> None:
        """Deliver *notification* to all registered subscribers."""
        self._history.append(notification)
        logger.debug(
            "Notification event",
            extra={"level": notification.level.value, "notification": notification.message},
        )
        for callback in list(self._subscribers):
            try:
                callback(notification)
            except Exception:  # pragma: no cover - defensive log to avoid cascading failures
                logger.exception("Notification subscriber raised an exception")

    def notify(
        self,
        message: str,
        level: NotificationLevel = NotificationLevel.INFO,
        **metadata: Any,
    ) -> Notification:
        """Publish *message* at *level* and return the created notification."""
        notification = Notification(
            id=uuid.uuid4(),
            message=message,
            level=level,
            metadata=dict(metadata),
        )
        self.publish(notification)
        return notification

    def history(self) -> tuple[Notification, ...]:
        """Return a snapshot of stored notifications."""
        return tuple(self._history)


__all__ = [
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "NotificationSubscription",
]
