"""Periodic reminder delivery."""

import logging
from collections.abc import Callable
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .core.events import Event
from .core.reminders import due_reminders, reminder_message
from .ports import Notifier
from .store import EventStore

logger = logging.getLogger(__name__)

JOB_ID = "reminder_tick"


class ReminderScheduler:
    """
    Scans the store for due reminders on a fixed interval.

    Each reminder goes pending -> fired exactly once: after notifying, the
    event's reminder_shown flag is latched through the store. A window that
    passes while the scheduler is not running is never caught up.
    """

    def __init__(
        self,
        store: EventStore,
        notifier: Notifier,
        clock: Callable[[], datetime] = datetime.now,
        interval_seconds: int = 60,
    ):
        self.store = store
        self.notifier = notifier
        self.clock = clock
        self.interval_seconds = interval_seconds
        self._scheduler: BackgroundScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def tick(self) -> list[Event]:
        """Fire every reminder that is due now. Returns the events fired."""
        now = self.clock()
        fired = []

        for event in due_reminders(self.store.all(), now):
            title, body = reminder_message(event)
            try:
                self.notifier.notify(title, body)
            except Exception as e:
                logger.error(f"Failed to deliver reminder for {event.id}: {e}")
            self.store.mark_reminder_shown(event.id)
            logger.info(f"Reminder fired for '{event.title}' at {now:%Y-%m-%d %H:%M}")
            fired.append(event)

        return fired

    def start(self) -> None:
        if self.running:
            return
        self._scheduler = BackgroundScheduler()
        self._scheduler.add_job(
            self.tick,
            IntervalTrigger(seconds=self.interval_seconds),
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info(f"Reminder scheduler started, checking every {self.interval_seconds}s")

    def stop(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Reminder scheduler stopped")
