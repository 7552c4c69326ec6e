"""
User-facing notifications.

Screens report the outcome of every operation through a ``Notifier``. The
notifier is passed in explicitly so each caller decides where the messages go:
the log, an in-memory history returned over HTTP, or a test assertion.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)


class NotificationVariant(str, enum.Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None:
        ...


def success(description: str) -> Notification:
    return Notification(title="Success", description=description)


def error(description: str) -> Notification:
    return Notification(
        title="Error",
        description=description,
        variant=NotificationVariant.DESTRUCTIVE
    )


class LoggingNotifier:
    """Writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        if notification.is_error:
            logger.warning(f"{notification.title}: {notification.description}")
        else:
            logger.info(f"{notification.title}: {notification.description}")


class CollectingNotifier:
    """Keeps every notification so callers can inspect or return them."""

    def __init__(self, forward: Optional[Notifier] = None):
        self.history: List[Notification] = []
        self.forward = forward

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)
        if self.forward is not None:
            self.forward.notify(notification)

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None

    @property
    def errors(self) -> List[Notification]:
        return [n for n in self.history if n.is_error]

    def clear(self) -> None:
        self.history.clear()
