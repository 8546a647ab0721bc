"""Tests for recurring event expansion."""

import itertools
from dataclasses import replace
from datetime import date, time, timedelta

import pytest

from daybook.core.events import Event, RecurrenceType
from daybook.core.recurrence import expand, occurrence_dates


@pytest.fixture
def new_id():
    counter = itertools.count(1)
    return lambda: f"occ-{next(counter)}"


@pytest.fixture
def base():
    return Event(
        id="base",
        title="Gym",
        date=date(2024, 6, 1),
        start_time=time(7, 0),
        end_time=time(8, 0),
        recurring=True,
        recurring_type=RecurrenceType.WEEKLY,
        recurring_end_date=date(2024, 6, 22),
        reminder=True,
        reminder_minutes=10,
    )


class TestExpand:
    def test_weekly_exact_multiple(self, base, new_id):
        series = expand(base, new_id)
        offsets = [(e.date - base.date).days for e in series]
        assert offsets == [0, 7, 14, 21]

    def test_end_between_steps(self, base, new_id):
        base.recurring_end_date = base.date + timedelta(days=20)
        assert len(expand(base, new_id)) == 3

    def test_first_element_is_base(self, base, new_id):
        series = expand(base, new_id)
        assert series[0] is base

    def test_no_end_date_is_noop(self, base, new_id):
        base.recurring_end_date = None
        assert expand(base, new_id) == [base]

    def test_end_before_start(self, base, new_id):
        base.recurring_end_date = date(2024, 5, 1)
        assert expand(base, new_id) == [base]

    def test_daily_includes_end_date(self, base, new_id):
        base.recurring_type = RecurrenceType.DAILY
        base.recurring_end_date = date(2024, 6, 3)
        series = expand(base, new_id)
        assert [e.date for e in series] == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]

    def test_occurrences_copy_fields_with_new_ids(self, base, new_id):
        series = expand(base, new_id)
        assert len({e.id for e in series}) == len(series)
        for occurrence in series[1:]:
            assert occurrence.title == base.title
            assert occurrence.start_time == base.start_time
            assert occurrence.end_time == base.end_time
            assert occurrence.reminder_minutes == 10
            assert occurrence.recurring_type == RecurrenceType.WEEKLY

    def test_occurrence_reminders_start_pending(self, base, new_id):
        base.reminder_shown = True
        series = expand(base, new_id)
        assert all(e.reminder_shown is False for e in series[1:])

    def test_occurrences_are_independent(self, base, new_id):
        series = expand(base, new_id)
        series[1].title = "Changed"
        assert series[2].title == "Gym"

    def test_deterministic(self, base):
        first = [e.date for e in expand(base, lambda: "x")]
        second = [e.date for e in expand(replace(base), lambda: "y")]
        assert first == second

    def test_never_after_end_date(self, base, new_id):
        for rule in RecurrenceType:
            base.recurring_type = rule
            base.recurring_end_date = date(2026, 3, 15)
            assert all(e.date <= base.recurring_end_date for e in expand(base, new_id))


class TestOccurrenceDates:
    def test_monthly_clamps_without_drift(self):
        dates = list(occurrence_dates(date(2024, 1, 31), RecurrenceType.MONTHLY, date(2024, 5, 31)))
        assert dates == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
            date(2024, 5, 31),
        ]

    def test_yearly_leap_day(self):
        dates = list(occurrence_dates(date(2024, 2, 29), RecurrenceType.YEARLY, date(2028, 3, 1)))
        assert dates == [
            date(2024, 2, 29),
            date(2025, 2, 28),
            date(2026, 2, 28),
            date(2027, 2, 28),
            date(2028, 2, 29),
        ]

    def test_monthly_end_date_landed_exactly(self):
        dates = list(occurrence_dates(date(2024, 6, 15), RecurrenceType.MONTHLY, date(2024, 8, 15)))
        assert dates[-1] == date(2024, 8, 15)
        assert len(dates) == 3

    def test_accepts_rule_string(self):
        dates = list(occurrence_dates(date(2024, 6, 1), "daily", date(2024, 6, 2)))
        assert len(dates) == 2
