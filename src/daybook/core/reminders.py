"""Reminder due-window logic - no I/O dependencies."""

from datetime import datetime, timedelta

from .events import DEFAULT_REMINDER_MINUTES, Event


def reminder_instant(event: Event) -> datetime:
    minutes = event.reminder_minutes if event.reminder_minutes is not None else DEFAULT_REMINDER_MINUTES
    return event.start_at - timedelta(minutes=minutes)


def is_due(event: Event, now: datetime) -> bool:
    """
    Pending reminder whose window [start - lead, start] contains `now`.

    Once `now` is past the start the window is gone for good.
    """
    if not event.reminder or event.reminder_shown:
        return False
    return reminder_instant(event) <= now <= event.start_at


def due_reminders(events: list[Event], now: datetime) -> list[Event]:
    return [e for e in events if is_due(e, now)]


def reminder_message(event: Event) -> tuple[str, str]:
    """(title, body) handed to the notifier."""
    minutes = event.reminder_minutes if event.reminder_minutes is not None else DEFAULT_REMINDER_MINUTES
    return f"Reminder: {event.title}", f"Event starts in {minutes} minutes"
