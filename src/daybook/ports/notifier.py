"""Notification presentation interface."""

from typing import Protocol


class Notifier(Protocol):
    """Presents a reminder to the user. Delivery may silently be a no-op."""

    def notify(self, title: str, body: str) -> None:
        ...
