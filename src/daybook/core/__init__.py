"""Functional core - pure scheduling logic with no I/O."""

from .events import Event, Priority, RecurrenceType, TimeRange, ValidationError, parse_event
from .dates import ViewMode, month_grid, start_of_week, week_grid, year_months
from .holidays import Holiday, HolidayRegistry, HolidayType
from .conflicts import find_conflicts, pairwise_conflicts
from .recurrence import expand
from .reminders import due_reminders, reminder_message
from .search import DateFilter, SortField, filter_events, sort_events
from .export import to_ical

__all__ = [
    # Events
    "Event",
    "Priority",
    "RecurrenceType",
    "TimeRange",
    "ValidationError",
    "parse_event",
    # Dates
    "ViewMode",
    "month_grid",
    "start_of_week",
    "week_grid",
    "year_months",
    # Holidays
    "Holiday",
    "HolidayRegistry",
    "HolidayType",
    # Scheduling
    "find_conflicts",
    "pairwise_conflicts",
    "expand",
    "due_reminders",
    "reminder_message",
    # Search / export
    "DateFilter",
    "SortField",
    "filter_events",
    "sort_events",
    "to_ical",
]
