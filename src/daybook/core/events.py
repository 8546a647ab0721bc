"""Event data model and validation - no I/O dependencies."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

COLORS = ("blue", "green", "red", "purple", "yellow", "indigo", "pink", "gray")
DEFAULT_COLOR = "blue"
DEFAULT_REMINDER_MINUTES = 15


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ValidationError(ValueError):
    """Rejected event input, with one reason per offending field."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


def to_minutes(value: str | time) -> int:
    """Minutes since midnight for an HH:MM string or a time."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


@dataclass(frozen=True)
class TimeRange:
    """Half-open minute-of-day interval [start_minutes, end_minutes)."""

    start_minutes: int
    end_minutes: int

    @classmethod
    def from_times(cls, start: str | time, end: str | time) -> "TimeRange":
        return cls(to_minutes(start), to_minutes(end))

    def overlaps(self, other: "TimeRange") -> bool:
        """Back-to-back ranges (one ends when the other starts) do not overlap."""
        return self.start_minutes < other.end_minutes and self.end_minutes > other.start_minutes

    def contains(self, minute: int) -> bool:
        return self.start_minutes <= minute < self.end_minutes

    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes


@dataclass
class Event:
    """A single calendar entry on one day."""

    id: str
    title: str
    date: date
    start_time: time
    end_time: time
    color: str = DEFAULT_COLOR
    description: str = ""
    location: str = ""
    notes: str = ""
    category: str = "default"
    priority: Priority = Priority.MEDIUM
    reminder: bool = False
    reminder_minutes: int | None = None
    reminder_shown: bool = False
    recurring: bool = False
    recurring_type: RecurrenceType | None = None
    recurring_end_date: date | None = None

    @property
    def time_range(self) -> TimeRange:
        return TimeRange.from_times(self.start_time, self.end_time)

    @property
    def start_at(self) -> datetime:
        return datetime.combine(self.date, self.start_time)

    @property
    def end_at(self) -> datetime:
        return datetime.combine(self.date, self.end_time)

    @property
    def duration_minutes(self) -> int:
        return self.time_range.duration_minutes()

    def format_time(self) -> str:
        return f"{format_time(self.start_time)}-{format_time(self.end_time)}"

    def ends_before(self, now: datetime) -> bool:
        """True when the event is already over at `now`."""
        return self.end_at < now

    def to_dict(self) -> dict:
        """JSON-ready representation used for persistence."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "start_time": format_time(self.start_time),
            "end_time": format_time(self.end_time),
            "color": self.color,
            "description": self.description,
            "location": self.location,
            "notes": self.notes,
            "category": self.category,
            "priority": self.priority.value,
            "reminder": self.reminder,
            "reminder_minutes": self.reminder_minutes,
            "reminder_shown": self.reminder_shown,
            "recurring": self.recurring,
            "recurring_type": self.recurring_type.value if self.recurring_type else None,
            "recurring_end_date": (
                self.recurring_end_date.isoformat() if self.recurring_end_date else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "Event":
        """Rebuild a stored event. Raises KeyError without an id."""
        return parse_event(data, str(data["id"]))


def format_time(value: time) -> str:
    return value.strftime("%H:%M")


def parse_time(value: str | time) -> time:
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    hours, _, minutes = str(value).strip().partition(":")
    return time(int(hours), int(minutes or 0))


def parse_date(value: str | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def end_after(start: time, minutes: int) -> time | None:
    """Time `minutes` after `start`, or None if that crosses midnight."""
    moved = datetime.combine(date.min, start) + timedelta(minutes=minutes)
    if moved.date() != date.min:
        return None
    return moved.time()


def parse_event(data: Mapping, event_id: str) -> Event:
    """
    Build a validated Event from form-style input.

    Values may be strings (ISO dates, HH:MM times, enum values) or already
    typed. Defaults are resolved here so consumers never see missing fields.
    Every problem is collected and raised together as a ValidationError.
    """
    errors: dict[str, str] = {}

    title = str(data.get("title") or "").strip()
    if not title:
        errors["title"] = "Title is required"

    event_date = None
    try:
        event_date = parse_date(data["date"])
    except (KeyError, TypeError, ValueError):
        errors["date"] = "A valid date is required"

    start = end = None
    try:
        start = parse_time(data["start_time"])
        end = parse_time(data["end_time"])
    except (KeyError, TypeError, ValueError):
        errors["time"] = "Start and end times must be HH:MM"
    else:
        if start >= end:
            errors["time"] = "End time must be after start time"

    color = data.get("color") or DEFAULT_COLOR
    if color not in COLORS:
        errors["color"] = f"Unknown color {color!r}"

    priority = Priority.MEDIUM
    try:
        priority = Priority(data.get("priority") or Priority.MEDIUM)
    except ValueError:
        errors["priority"] = f"Unknown priority {data.get('priority')!r}"

    reminder = bool(data.get("reminder", False))
    reminder_minutes = None
    if reminder:
        raw = data.get("reminder_minutes")
        try:
            reminder_minutes = DEFAULT_REMINDER_MINUTES if raw is None else int(raw)
            if reminder_minutes < 0:
                raise ValueError(raw)
        except (TypeError, ValueError):
            errors["reminder_minutes"] = "Reminder lead time must be a non-negative number"

    recurring = bool(data.get("recurring", False))
    recurring_type = None
    recurring_end_date = None
    if recurring:
        try:
            recurring_type = RecurrenceType(data.get("recurring_type") or RecurrenceType.DAILY)
        except ValueError:
            errors["recurring_type"] = f"Unknown recurrence {data.get('recurring_type')!r}"
        if not data.get("recurring_end_date"):
            errors["recurring_end_date"] = "End date is required for recurring events"
        else:
            try:
                recurring_end_date = parse_date(data["recurring_end_date"])
            except (TypeError, ValueError):
                errors["recurring_end_date"] = "End date must be YYYY-MM-DD"

    if errors:
        raise ValidationError(errors)

    return Event(
        id=event_id,
        title=title,
        date=event_date,
        start_time=start,
        end_time=end,
        color=color,
        description=data.get("description") or "",
        location=data.get("location") or "",
        notes=data.get("notes") or "",
        category=data.get("category") or "default",
        priority=priority,
        reminder=reminder,
        reminder_minutes=reminder_minutes,
        reminder_shown=bool(data.get("reminder_shown", False)),
        recurring=recurring,
        recurring_type=recurring_type,
        recurring_end_date=recurring_end_date,
    )
