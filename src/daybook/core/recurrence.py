"""Recurring event expansion - no I/O dependencies."""

from collections.abc import Callable, Iterator
from dataclasses import replace
from datetime import date, timedelta

from .dates import add_months, add_years
from .events import Event, RecurrenceType


def _nth(start: date, rule: RecurrenceType, n: int) -> date:
    match rule:
        case RecurrenceType.DAILY:
            return start + timedelta(days=n)
        case RecurrenceType.WEEKLY:
            return start + timedelta(days=7 * n)
        case RecurrenceType.MONTHLY:
            return add_months(start, n)
        case RecurrenceType.YEARLY:
            return add_years(start, n)
    raise ValueError(f"Unknown recurrence rule: {rule!r}")


def occurrence_dates(start: date, rule: RecurrenceType, until: date) -> Iterator[date]:
    """
    Dates of a series from `start` through `until` inclusive.

    Every date is computed from `start` rather than from the previous one, so
    a series anchored on the 31st lands on the last day of short months and
    returns to the 31st afterwards instead of drifting.
    """
    yield start
    n = 1
    while True:
        current = _nth(start, RecurrenceType(rule), n)
        if current > until:
            return
        yield current
        n += 1


def expand(base: Event, new_id: Callable[[], str]) -> list[Event]:
    """
    Materialize a recurring event into independent occurrences.

    The base event is always the first element. Without an end date (or a
    rule) nothing is expanded and only the base is returned.
    """
    if not base.recurring_end_date or not base.recurring_type:
        return [base]

    dates = occurrence_dates(base.date, base.recurring_type, base.recurring_end_date)
    next(dates)  # the base date itself
    return [base] + [
        replace(base, id=new_id(), date=d, reminder_shown=False) for d in dates
    ]
