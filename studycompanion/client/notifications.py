"""Transient user-facing notifications raised by the controllers."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class NotificationVariant(StrEnum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A toast shown to the user."""

    title: str
    description: str | None = None
    variant: NotificationVariant = NotificationVariant.DEFAULT


class Notifier:
    """Collects notifications and forwards them to an optional listener."""

    def __init__(self, listener: Callable[[Notification], None] | None = None) -> None:
        self.listener = listener
        self.history: list[Notification] = []

    def notify(
        self,
        title: str,
        description: str | None = None,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.history.append(notification)
        if self.listener is not None:
            self.listener(notification)
        return notification

    def error(self, title: str, description: str | None = None) -> Notification:
        return self.notify(title, description, NotificationVariant.DESTRUCTIVE)

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None
