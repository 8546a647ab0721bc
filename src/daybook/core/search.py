"""Event search, date filters and sorting - no I/O dependencies."""

from datetime import date, timedelta
from enum import Enum

from .dates import end_of_month, start_of_month, start_of_week
from .events import Event


class DateFilter(str, Enum):
    ALL = "all"
    TODAY = "today"
    TOMORROW = "tomorrow"
    WEEK = "week"
    MONTH = "month"
    UPCOMING = "upcoming"
    PAST = "past"


class SortField(str, Enum):
    DATE = "date"
    TITLE = "title"
    COLOR = "color"


def matches_term(event: Event, term: str | None) -> bool:
    """Case-insensitive substring match on title, description or location."""
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return any(
        needle in (field or "").lower()
        for field in (event.title, event.description, event.location)
    )


def matches_date(event: Event, date_filter: DateFilter, today: date | None = None) -> bool:
    today = today or date.today()
    match DateFilter(date_filter):
        case DateFilter.ALL:
            return True
        case DateFilter.TODAY:
            return event.date == today
        case DateFilter.TOMORROW:
            return event.date == today + timedelta(days=1)
        case DateFilter.WEEK:
            week_start = start_of_week(today)
            return week_start <= event.date <= week_start + timedelta(days=6)
        case DateFilter.MONTH:
            return start_of_month(today) <= event.date <= end_of_month(today)
        case DateFilter.UPCOMING:
            return event.date > today
        case DateFilter.PAST:
            return event.date < today


def filter_events(
    events: list[Event],
    term: str | None = None,
    date_filter: DateFilter = DateFilter.ALL,
    today: date | None = None,
) -> list[Event]:
    """
    Events matching both the search term and the date filter.

    Pure function - no I/O.
    """
    today = today or date.today()
    return [e for e in events if matches_term(e, term) and matches_date(e, date_filter, today)]


def sort_events(
    events: list[Event],
    field: SortField = SortField.DATE,
    descending: bool = False,
) -> list[Event]:
    return sorted(events, key=_SORT_KEYS[SortField(field)], reverse=descending)


_SORT_KEYS = {
    SortField.DATE: lambda e: e.start_at,
    SortField.TITLE: lambda e: e.title.lower(),
    SortField.COLOR: lambda e: e.color or "",
}
