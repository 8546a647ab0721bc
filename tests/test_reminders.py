"""Tests for reminder windows and the reminder scheduler."""

from datetime import date, datetime, time
from unittest.mock import MagicMock, patch

import pytest

from daybook.adapters import MemoryStore
from daybook.core.events import Event
from daybook.core.reminders import due_reminders, is_due, reminder_instant, reminder_message
from daybook.reminders import JOB_ID, ReminderScheduler
from daybook.store import EventStore


@pytest.fixture
def event():
    return Event(
        id="r1",
        title="Standup",
        date=date(2024, 6, 10),
        start_time=time(9, 0),
        end_time=time(9, 15),
        reminder=True,
        reminder_minutes=10,
    )


class TestIsDue:
    def test_window_opens_at_lead_time(self, event):
        assert reminder_instant(event) == datetime(2024, 6, 10, 8, 50)
        assert is_due(event, datetime(2024, 6, 10, 8, 49, 59)) is False
        assert is_due(event, datetime(2024, 6, 10, 8, 50)) is True

    def test_window_closes_at_start(self, event):
        assert is_due(event, datetime(2024, 6, 10, 9, 0)) is True
        assert is_due(event, datetime(2024, 6, 10, 9, 0, 1)) is False

    def test_already_shown(self, event):
        event.reminder_shown = True
        assert is_due(event, datetime(2024, 6, 10, 8, 55)) is False

    def test_reminder_disabled(self, event):
        event.reminder = False
        assert is_due(event, datetime(2024, 6, 10, 8, 55)) is False

    def test_default_lead_time(self, event):
        event.reminder_minutes = None
        assert reminder_instant(event) == datetime(2024, 6, 10, 8, 45)

    def test_due_reminders_filters(self, event):
        later = Event(
            id="r2", title="Lunch", date=date(2024, 6, 10),
            start_time=time(12, 0), end_time=time(13, 0), reminder=True,
        )
        assert due_reminders([event, later], datetime(2024, 6, 10, 8, 55)) == [event]

    def test_message(self, event):
        assert reminder_message(event) == ("Reminder: Standup", "Event starts in 10 minutes")


class TestReminderScheduler:
    @pytest.fixture
    def store(self, event):
        store = EventStore(MemoryStore())
        store.create(event.to_dict())
        return store

    @pytest.fixture
    def notifier(self):
        return MagicMock()

    def _scheduler(self, store, notifier, now):
        return ReminderScheduler(store, notifier, clock=lambda: now)

    def test_fires_once(self, store, notifier):
        scheduler = self._scheduler(store, notifier, datetime(2024, 6, 10, 8, 55))
        assert len(scheduler.tick()) == 1
        assert scheduler.tick() == []
        notifier.notify.assert_called_once_with("Reminder: Standup", "Event starts in 10 minutes")
        assert store.all()[0].reminder_shown is True

    def test_before_window(self, store, notifier):
        scheduler = self._scheduler(store, notifier, datetime(2024, 6, 10, 8, 30))
        assert scheduler.tick() == []
        notifier.notify.assert_not_called()

    def test_missed_window_never_fires(self, store, notifier):
        scheduler = self._scheduler(store, notifier, datetime(2024, 6, 10, 9, 5))
        assert scheduler.tick() == []
        assert store.all()[0].reminder_shown is False

    def test_notifier_failure_still_latches(self, store, notifier):
        notifier.notify.side_effect = RuntimeError("display unavailable")
        scheduler = self._scheduler(store, notifier, datetime(2024, 6, 10, 8, 55))
        assert len(scheduler.tick()) == 1
        assert store.all()[0].reminder_shown is True

    def test_fired_state_survives_reload(self, store, notifier):
        kv = store._kv
        self._scheduler(store, notifier, datetime(2024, 6, 10, 8, 55)).tick()
        assert EventStore(kv).all()[0].reminder_shown is True

    @patch("daybook.reminders.BackgroundScheduler")
    def test_start_registers_single_instance_job(self, mock_scheduler_cls, store, notifier):
        scheduler = ReminderScheduler(store, notifier, interval_seconds=30)
        mock_scheduler_cls.return_value.running = False
        scheduler.start()

        mock_bg = mock_scheduler_cls.return_value
        args, kwargs = mock_bg.add_job.call_args
        assert args[0] == scheduler.tick
        assert args[1].interval.total_seconds() == 30
        assert kwargs["id"] == JOB_ID
        assert kwargs["max_instances"] == 1
        assert kwargs["coalesce"] is True
        mock_bg.start.assert_called_once()

    @patch("daybook.reminders.BackgroundScheduler")
    def test_stop_shuts_down(self, mock_scheduler_cls, store, notifier):
        scheduler = ReminderScheduler(store, notifier)
        scheduler.start()
        mock_bg = mock_scheduler_cls.return_value
        mock_bg.running = True

        scheduler.stop()

        mock_bg.shutdown.assert_called_once_with(wait=False)
        assert scheduler.running is False

    def test_stop_without_start(self, store, notifier):
        ReminderScheduler(store, notifier).stop()
