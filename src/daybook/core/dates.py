"""Calendar arithmetic for the day/week/month/year views - no I/O dependencies."""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .holidays import Holiday, HolidayRegistry

MONTH_GRID_DAYS = 42


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _as_date(d: date | datetime) -> date:
    return d.date() if isinstance(d, datetime) else d


def start_of_week(d: date | datetime) -> date:
    """The Sunday on or before `d`. Weeks always start on Sunday."""
    d = _as_date(d)
    # weekday(): Monday=0 .. Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def start_of_month(d: date | datetime) -> date:
    return _as_date(d).replace(day=1)


def end_of_month(d: date | datetime) -> date:
    d = _as_date(d)
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def week_grid(d: date | datetime) -> list[date]:
    start = start_of_week(d)
    return [start + timedelta(days=i) for i in range(7)]


def month_grid(d: date | datetime) -> list[date]:
    """
    Six full weeks covering the month of `d`.

    Always 42 days so every month renders at the same size, even when that
    means a leading or trailing week entirely outside the month.
    """
    start = start_of_week(start_of_month(d))
    return [start + timedelta(days=i) for i in range(MONTH_GRID_DAYS)]


def year_months(d: date | datetime) -> list[date]:
    year = _as_date(d).year
    return [date(year, month, 1) for month in range(1, 13)]


def is_same_day(a: date | datetime, b: date | datetime) -> bool:
    return _as_date(a) == _as_date(b)


def is_same_month(a: date | datetime, b: date | datetime) -> bool:
    a, b = _as_date(a), _as_date(b)
    return (a.year, a.month) == (b.year, b.month)


def is_today(d: date | datetime, today: date | None = None) -> bool:
    return _as_date(d) == (today or date.today())


def add_months(d: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the last day of short months."""
    index = d.year * 12 + (d.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_years(d: date, years: int) -> date:
    return add_months(d, years * 12)


def shift_period(d: date, view: ViewMode, step: int = 1) -> date:
    """Move `step` views forward (or backward when negative)."""
    match ViewMode(view):
        case ViewMode.DAY:
            return d + timedelta(days=step)
        case ViewMode.WEEK:
            return d + timedelta(days=7 * step)
        case ViewMode.MONTH:
            return add_months(d, step)
        case ViewMode.YEAR:
            return add_years(d, step)


def week_of_year(d: date | datetime) -> int:
    """Sunday-start week number; week 1 is the week containing January 1."""
    d = _as_date(d)
    first = start_of_week(date(d.year, 1, 1))
    return (start_of_week(d) - first).days // 7 + 1


def header_text(d: date, view: ViewMode) -> str:
    """Title shown above a calendar view."""
    match ViewMode(view):
        case ViewMode.DAY:
            return f"{d:%B} {d.day}, {d.year}"
        case ViewMode.WEEK:
            start = start_of_week(d)
            end = start + timedelta(days=6)
            if (start.year, start.month) == (end.year, end.month):
                return f"{start:%B %Y} - Week {week_of_year(start)}"
            if start.year == end.year:
                return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
            return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"
        case ViewMode.MONTH:
            return f"{d:%B %Y}"
        case ViewMode.YEAR:
            return str(d.year)


@dataclass
class YearSummary:
    """Facts shown in the year-details panel."""

    year: int
    is_leap_year: bool
    first_day: date
    last_day: date
    sundays: list[date] = field(default_factory=list)
    holidays: list["Holiday"] = field(default_factory=list)
    week_count: int = 0


def year_summary(year: int, registry: "HolidayRegistry") -> YearSummary:
    first = date(year, 1, 1)
    last = date(year, 12, 31)
    days = [first + timedelta(days=i) for i in range((last - first).days + 1)]
    return YearSummary(
        year=year,
        is_leap_year=calendar.isleap(year),
        first_day=first,
        last_day=last,
        sundays=[d for d in days if d.weekday() == 6],
        holidays=registry.between(first, last),
        week_count=len({start_of_week(d) for d in days}),
    )
