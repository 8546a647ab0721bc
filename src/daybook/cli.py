"""Daybook CLI - event calendar."""

import json
import logging
import sys
import time
from datetime import date, datetime, timedelta

import click

from .adapters import ConsoleNotifier, DesktopNotifier, JsonFileStore
from .config import Config, load_config
from .core.conflicts import conflicting_pairs
from .core.dates import (
    ViewMode,
    header_text,
    is_same_month,
    is_today,
    month_grid,
    week_grid,
    year_months,
    year_summary,
)
from .core.events import COLORS, Event, Priority, RecurrenceType, ValidationError, end_after, parse_event, parse_time
from .core.holidays import HolidayRegistry
from .core.search import DateFilter, SortField, sort_events
from .reminders import ReminderScheduler
from .store import EventStore, RecentSearches, load_seed

logger = logging.getLogger(__name__)

DATE = click.DateTime(formats=["%Y-%m-%d"])


def _open(config: Config) -> tuple[EventStore, JsonFileStore]:
    kv = JsonFileStore(config.data_path)
    return EventStore(kv, seed=load_seed(config.seed_file)), kv


def _fail(error: ValidationError) -> None:
    for field, reason in error.errors.items():
        click.echo(f"Error: {field}: {reason}", err=True)
    sys.exit(1)


def _event_line(event: Event, conflicted: set[str] | None = None) -> str:
    flag = "!" if conflicted and event.id in conflicted else " "
    loc = f" @ {event.location}" if event.location else ""
    return f"  {event.format_time()} {flag} {event.title}{loc}  [{event.id}]"


def _day_label(registry: HolidayRegistry, d: date) -> str:
    info = registry.classify(d)
    labels = []
    if info.is_sunday:
        labels.append("Sunday")
    if info.holiday:
        labels.append(f"{info.holiday.name} ({info.holiday.type.value})")
    return f" - {', '.join(labels)}" if labels else ""


def event_options(editing: bool):
    """Form fields shared by `add` and `edit`; when editing, omitted means unchanged."""

    def decorator(f):
        options = [
            click.option("--date", "date_", type=DATE, help="Event date (YYYY-MM-DD)"),
            click.option("--start", help="Start time (HH:MM)"),
            click.option("--end", help="End time (HH:MM)"),
            click.option("--color", type=click.Choice(COLORS)),
            click.option("--priority", type=click.Choice([p.value for p in Priority])),
            click.option("--location"),
            click.option("--description"),
            click.option("--notes"),
            click.option("--category"),
            click.option("--remind/--no-remind", default=None, help="Enable a reminder"),
            click.option("--lead", type=int, help="Reminder lead time in minutes"),
            click.option("--repeat", type=click.Choice([r.value for r in RecurrenceType])),
            click.option("--until", type=DATE, help="Last date of a recurring series"),
        ]
        if editing:
            options.append(click.option("--title"))
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


def _form_data(base: dict, **fields) -> dict:
    """Overlay the options that were given onto `base`."""
    data = dict(base)
    mapping = {
        "date_": "date",
        "start": "start_time",
        "end": "end_time",
        "lead": "reminder_minutes",
        "remind": "reminder",
    }
    for option, value in fields.items():
        if value is None or option in ("repeat", "until"):
            continue
        if isinstance(value, datetime):
            value = value.date()
        data[mapping.get(option, option)] = value

    if fields.get("repeat"):
        data.update(recurring=True, recurring_type=fields["repeat"])
    if fields.get("until"):
        data["recurring_end_date"] = fields["until"].date()
    return data


@click.group()
@click.version_option()
@click.option("--data-dir", type=click.Path(file_okay=False), help="Override the data directory")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx, data_dir: str | None, verbose: bool):
    """Daybook - event calendar."""
    config = load_config()
    if data_dir:
        config.data_dir = data_dir

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING),
    )
    ctx.obj = config


@main.command()
@click.argument("title")
@event_options(editing=False)
@click.option("--allow-past", is_flag=True, help="Allow events that have already ended")
@click.pass_obj
def add(config: Config, title: str, allow_past: bool, **fields):
    """Create an event (or a recurring series)."""
    store, _ = _open(config)

    if fields["until"] and not fields["repeat"]:
        raise click.UsageError("--until requires --repeat")
    if fields["start"] is None:
        raise click.UsageError("--start is required")

    base = {"title": title, "date": date.today()}
    if fields["end"] is None:
        try:
            fields["end"] = end_after(parse_time(fields["start"]), 60) or "23:59"
        except ValueError:
            pass
    if fields["remind"] and fields["lead"] is None:
        fields["lead"] = config.default_reminder_minutes
    data = _form_data(base, **fields)

    try:
        preview = parse_event(data, "new")
        if not allow_past and preview.ends_before(datetime.now()):
            raise ValidationError({"time": "Cannot add events that end in the past"})
        created = store.create(data)
    except ValidationError as e:
        _fail(e)

    for event in created:
        click.echo(f"Created {event.date} {event.format_time()} {event.title} [{event.id}]")
        for other in store.conflicts_for(event):
            click.echo(f"  ! conflicts with {other.title} ({other.format_time()})")


@main.command()
@click.argument("event_id")
@event_options(editing=True)
@click.pass_obj
def edit(config: Config, event_id: str, **fields):
    """Change fields of one event (siblings in a series are untouched)."""
    store, _ = _open(config)
    current = store.get(event_id)
    if current is None:
        click.echo(f"No event {event_id}", err=True)
        sys.exit(1)
    if fields["until"] and not fields["repeat"] and not current.recurring:
        raise click.UsageError("--until requires --repeat")

    try:
        updated = store.update(event_id, _form_data(current.to_dict(), **fields))
    except ValidationError as e:
        _fail(e)

    click.echo(f"Updated {updated.date} {updated.format_time()} {updated.title}")
    for other in store.conflicts_for(updated):
        click.echo(f"  ! conflicts with {other.title} ({other.format_time()})")


@main.command()
@click.argument("event_id")
@click.option("--date", "date_", type=DATE, required=True, help="New date")
@click.option("--start", help="New start time (HH:MM); duration is kept")
@click.pass_obj
def move(config: Config, event_id: str, date_: datetime, start: str | None):
    """Reschedule an event, keeping its duration."""
    store, _ = _open(config)
    try:
        moved = store.reschedule(event_id, date_.date(), start)
    except ValidationError as e:
        _fail(e)
    except ValueError:
        _fail(ValidationError({"time": "Start time must be HH:MM"}))

    if moved is None:
        click.echo(f"No event {event_id}", err=True)
        sys.exit(1)
    click.echo(f"Moved {moved.title} to {moved.date} {moved.format_time()}")


@main.command()
@click.argument("event_id")
@click.pass_obj
def delete(config: Config, event_id: str):
    """Delete one event."""
    store, _ = _open(config)
    store.delete(event_id)
    click.echo(f"Deleted {event_id}")


@main.command()
@click.option("--view", type=click.Choice([v.value for v in ViewMode]), default="week")
@click.option("--date", "date_", type=DATE, help="Any date inside the period")
@click.option("--hours", is_flag=True, help="Day view as an hour grid")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def show(config: Config, view: str, date_: datetime | None, hours: bool, as_json: bool):
    """Show a day, week, month or year."""
    store, _ = _open(config)
    registry = HolidayRegistry()
    view = ViewMode(view)
    target = date_.date() if date_ else date.today()

    match view:
        case ViewMode.DAY:
            days = [target]
        case ViewMode.WEEK:
            days = week_grid(target)
        case ViewMode.MONTH:
            days = [d for d in month_grid(target) if is_same_month(d, target)]
        case ViewMode.YEAR:
            days = [date(target.year, 1, 1) + timedelta(days=i) for i in range(366)]
            days = [d for d in days if d.year == target.year]

    if as_json:
        events = store.query_by_range(days[0], days[-1])
        click.echo(json.dumps([e.to_dict() for e in events], indent=2))
        return

    click.echo(f"### {header_text(target, view)}")

    if view == ViewMode.DAY and hours:
        conflicted = store.conflicting_ids(target)
        for hour in range(24):
            for event in store.query_by_date_and_time(target, f"{hour:02d}:00"):
                click.echo(f"{hour:02d}:00 {_event_line(event, conflicted).strip()}")
        return

    if view == ViewMode.MONTH:
        _show_month(store, registry, target)
        return

    if view == ViewMode.YEAR:
        _show_year(store, registry, target)
        return

    for d in days:
        today_mark = " (today)" if is_today(d) else ""
        click.echo(f"{d:%a %d %b}{today_mark}{_day_label(registry, d)}")
        conflicted = store.conflicting_ids(d)
        for event in store.query_by_date(d):
            click.echo(_event_line(event, conflicted))


def _show_month(store: EventStore, registry: HolidayRegistry, target: date) -> None:
    click.echo(" Sun  Mon  Tue  Wed  Thu  Fri  Sat")
    grid = month_grid(target)
    for week in range(6):
        cells = []
        for d in grid[week * 7 : week * 7 + 7]:
            if not is_same_month(d, target):
                cells.append("   .")
                continue
            if store.day_has_conflict(d):
                mark = "!"
            elif store.query_by_date(d):
                mark = "*"
            elif registry.is_holiday(d):
                mark = "+"
            else:
                mark = " "
            cells.append(f"{d.day:>3}{mark}")
        click.echo(" ".join(cells))

    for holiday in registry.between(grid[0], grid[-1]):
        if is_same_month(holiday.date, target):
            click.echo(f"  + {holiday.date:%d %b} {holiday.name} ({holiday.type.value})")


def _show_year(store: EventStore, registry: HolidayRegistry, target: date) -> None:
    for first in year_months(target):
        days = [d for d in month_grid(first) if is_same_month(d, first)]
        events = store.query_by_range(days[0], days[-1])
        holidays = registry.between(days[0], days[-1])
        sundays = sum(1 for d in days if registry.is_sunday(d))
        click.echo(
            f"{first:%B}".ljust(10)
            + f" events: {len(events):>3}  holidays: {len(holidays):>2}  sundays: {sundays}"
        )


@main.command()
@click.argument("term", required=False, default="")
@click.option("--when", type=click.Choice([f.value for f in DateFilter]), default="all")
@click.option("--sort", "sort_field", type=click.Choice([f.value for f in SortField]), default="date")
@click.option("--desc", is_flag=True, help="Sort descending")
@click.option("--recent", is_flag=True, help="List recent searches")
@click.pass_obj
def search(config: Config, term: str, when: str, sort_field: str, desc: bool, recent: bool):
    """Search titles, descriptions and locations."""
    store, kv = _open(config)
    history = RecentSearches(kv)

    if recent:
        for item in history.items():
            click.echo(item)
        return

    history.add(term)
    results = sort_events(store.search(term, DateFilter(when)), SortField(sort_field), desc)
    if not results:
        click.echo("No matching events.")
        return

    click.echo(f"Search Results ({len(results)})")
    current_date = None
    for event in results:
        if event.date != current_date:
            click.echo(f"### {event.date:%A, %B %d %Y}")
            current_date = event.date
        click.echo(_event_line(event))


@main.command("list")
@click.option("--upcoming", "scope", flag_value="upcoming", help="Only events not yet started")
@click.option("--past", "scope", flag_value="past", help="Only events already started")
@click.option("--sort", "sort_field", type=click.Choice([f.value for f in SortField]), default="date")
@click.option("--desc", is_flag=True, help="Sort descending")
@click.pass_obj
def list_events(config: Config, scope: str | None, sort_field: str, desc: bool):
    """List all events."""
    store, _ = _open(config)
    now = datetime.now()

    if scope == "upcoming":
        events = store.query_upcoming(now)
    elif scope == "past":
        events = store.query_past(now)
    else:
        events = store.all()

    if not events:
        click.echo("No events.")
        return

    for event in sort_events(events, SortField(sort_field), desc):
        click.echo(f"{event.date} {_event_line(event).strip()}")


@main.command()
@click.option("--date", "date_", type=DATE, help="Only this day")
@click.pass_obj
def conflicts(config: Config, date_: datetime | None):
    """Report overlapping events."""
    store, _ = _open(config)
    days = [date_.date()] if date_ else sorted({e.date for e in store.all()})

    found = False
    for d in days:
        for first, second in conflicting_pairs(store.query_by_date(d)):
            found = True
            click.echo(
                f"{d} {first.title} ({first.format_time()}) overlaps "
                f"{second.title} ({second.format_time()})"
            )
    if not found:
        click.echo("No conflicts.")


@main.command()
@click.option("--from", "from_", type=DATE, help="Start of window (default today)")
@click.option("--days", type=int, help="Window length in days")
@click.pass_obj
def holidays(config: Config, from_: datetime | None, days: int | None):
    """Upcoming holidays and weekly offs."""
    registry = HolidayRegistry()
    start = from_.date() if from_ else date.today()
    window = days if days is not None else config.upcoming_window_days

    for holiday in registry.between(start, start + timedelta(days=window)):
        color = registry.type_color(holiday.type)
        click.echo(f"{holiday.date:%a %d %b %Y}  {holiday.name} - {holiday.type.value} [{color}]")

    counts = registry.count_upcoming(start, window)
    click.echo(
        f"Next {window} days: {counts.total} off days "
        f"({counts.govt_or_named} holidays, {counts.sundays} Sundays)"
    )


@main.command()
@click.option("--year", type=int, help="Year (default current)")
def year(year: int | None):
    """Year summary: leap year, Sundays, holidays."""
    summary = year_summary(year or date.today().year, HolidayRegistry())
    click.echo(f"### {summary.year}")
    click.echo(f"Leap year: {'yes' if summary.is_leap_year else 'no'}")
    click.echo(f"Starts: {summary.first_day:%A, %B %d}")
    click.echo(f"Ends: {summary.last_day:%A, %B %d}")
    click.echo(f"Weeks: {summary.week_count}")
    click.echo(f"Sundays: {len(summary.sundays)}")
    click.echo(f"Holidays: {len(summary.holidays)}")
    for holiday in summary.holidays:
        click.echo(f"  {holiday.date:%b %d, %Y}  {holiday.name}")


@main.command()
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write to file instead of stdout")
@click.pass_obj
def export(config: Config, output: str | None):
    """Export all events as iCalendar."""
    store, _ = _open(config)
    content = store.export_ical()
    if output:
        with open(output, "w", newline="") as f:
            f.write(content)
        click.echo(f"Exported {len(store)} events to {output}")
    else:
        click.echo(content)


@main.command()
@click.option("--once", is_flag=True, help="Check once and exit")
@click.pass_obj
def remind(config: Config, once: bool):
    """Deliver due reminders."""
    store, _ = _open(config)
    notifier = DesktopNotifier() if config.notifier == "desktop" else ConsoleNotifier()
    scheduler = ReminderScheduler(store, notifier, interval_seconds=config.reminder_interval_seconds)

    if once:
        fired = scheduler.tick()
        click.echo(f"{len(fired)} reminder(s) sent.")
        return

    scheduler.start()
    click.echo("Watching for reminders. Press Ctrl-C to stop.")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.stop()


if __name__ == "__main__":
    main()
