"""Event repository - the single source of truth for calendar events."""

import json
import logging
import uuid
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import date, datetime, time
from pathlib import Path

from .core.conflicts import find_conflicts, pairwise_conflicts
from .core.events import Event, ValidationError, end_after, parse_event, parse_time, to_minutes
from .core.export import to_ical
from .core.recurrence import expand
from .core.search import DateFilter, filter_events
from .ports import KeyValueStore

logger = logging.getLogger(__name__)

EVENTS_KEY = "calendarEvents"
RECENT_SEARCHES_KEY = "recentSearches"


def _uuid_id() -> str:
    return uuid.uuid4().hex


def load_seed(path: Path | str | None) -> list[dict]:
    """Read a bundled JSON array of event dicts. Missing or malformed files give []."""
    if not path:
        return []
    path = Path(path).expanduser()
    if not path.exists():
        logger.warning(f"Seed file {path} not found")
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Failed to parse seed file {path}: {e}")
        return []
    return data if isinstance(data, list) else []


def _as_date(d: date | datetime) -> date:
    return d.date() if isinstance(d, datetime) else d


class EventStore:
    """
    In-memory event collection persisted through a KeyValueStore.

    Every mutation rewrites the whole collection to the key-value store.
    Loading is load-or-default: unreadable data means an empty calendar,
    never a crash. Unknown ids on update/delete are silently ignored.
    Callers only ever get copies; the collection itself is never handed out.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        seed: list[dict] | None = None,
        id_factory: Callable[[], str] | None = None,
    ):
        self._kv = kv
        self._id_factory = id_factory or _uuid_id
        self._events: list[Event] = self._load(seed or [])

    def __len__(self) -> int:
        return len(self._events)

    # -- persistence -------------------------------------------------------

    def _load(self, seed: list[dict]) -> list[Event]:
        try:
            raw = self._kv.get(EVENTS_KEY)
        except Exception as e:
            logger.warning(f"Could not read stored events, starting empty: {e}")
            raw = None

        # A stored "[]" is a calendar the user emptied; only a missing or
        # unreadable value falls back to the seed.
        records = None
        if raw:
            try:
                records = json.loads(raw)
            except json.JSONDecodeError as e:
                logger.warning(f"Stored events are not valid JSON, starting empty: {e}")
            else:
                if not isinstance(records, list):
                    logger.warning("Stored events are not a list, starting empty")
                    records = None

        if records is not None:
            return self._parse_records(records)

        events = self._parse_records(seed)
        if events:
            logger.info(f"Loaded {len(events)} seed events")
            self._events = events
            self._save()
        return events

    def _parse_records(self, records: list) -> list[Event]:
        events: list[Event] = []
        seen: set[str] = set()
        for item in records:
            try:
                event = Event.from_dict(item)
            except (KeyError, TypeError, AttributeError, ValidationError) as e:
                logger.debug(f"Skipping malformed stored event: {e}")
                continue
            if event.id in seen:
                logger.debug(f"Skipping duplicate stored event id {event.id}")
                continue
            seen.add(event.id)
            events.append(event)
        return events

    def _save(self) -> None:
        payload = json.dumps([e.to_dict() for e in self._events])
        try:
            self._kv.set(EVENTS_KEY, payload)
        except Exception as e:
            logger.error(f"Failed to persist events: {e}")

    # -- helpers -----------------------------------------------------------

    def _find(self, event_id: str) -> int | None:
        for i, event in enumerate(self._events):
            if event.id == event_id:
                return i
        return None

    def _id_minter(self) -> Callable[[], str]:
        """An id source that never repeats an id already in the store."""
        taken = {e.id for e in self._events}

        def mint() -> str:
            new_id = self._id_factory()
            while new_id in taken:
                new_id = self._id_factory()
            taken.add(new_id)
            return new_id

        return mint

    def _warn_conflicts(self, event: Event, others: list[Event]) -> None:
        clashes = find_conflicts(
            [e for e in others if e.date == event.date], event, exclude_id=event.id
        )
        if clashes:
            titles = ", ".join(e.title for e in clashes)
            logger.warning(
                f"'{event.title}' on {event.date} {event.format_time()} overlaps: {titles}"
            )

    # -- mutations ---------------------------------------------------------

    def create(self, data: Mapping) -> list[Event]:
        """
        Validate and insert a new event.

        A recurring event is expanded into its whole series and inserted at
        once; a validation failure leaves the store untouched.
        """
        mint = self._id_minter()
        base = parse_event({**data, "reminder_shown": False}, mint())
        series = expand(base, mint) if base.recurring else [base]

        for event in series:
            self._warn_conflicts(event, self._events)

        self._events.extend(series)
        self._save()
        return [replace(e) for e in series]

    def update(self, event_id: str, data: Mapping) -> Event | None:
        """
        Replace every field of one event except its id.

        Siblings from the same recurring series are left alone. A reminder
        that already fired stays fired.
        """
        index = self._find(event_id)
        if index is None:
            logger.debug(f"Update ignored, no event {event_id}")
            return None

        current = self._events[index]
        updated = parse_event(data, event_id)
        updated.reminder_shown = current.reminder_shown or updated.reminder_shown

        self._warn_conflicts(updated, self._events)
        self._events[index] = updated
        self._save()
        return replace(updated)

    def delete(self, event_id: str) -> None:
        index = self._find(event_id)
        if index is None:
            logger.debug(f"Delete ignored, no event {event_id}")
            return
        del self._events[index]
        self._save()

    def reschedule(
        self,
        event_id: str,
        new_date: date | str,
        new_start: time | str | None = None,
    ) -> Event | None:
        """Move an event to another day/start time, keeping its duration."""
        index = self._find(event_id)
        if index is None:
            return None

        current = self._events[index]
        start = parse_time(new_start) if new_start is not None else current.start_time
        end = end_after(start, current.duration_minutes)
        if end is None:
            raise ValidationError({"time": "Event would run past midnight"})

        data = {**current.to_dict(), "date": new_date, "start_time": start, "end_time": end}
        moved = parse_event(data, event_id)
        self._warn_conflicts(moved, self._events)
        self._events[index] = moved
        self._save()
        return replace(moved)

    def mark_reminder_shown(self, event_id: str) -> None:
        index = self._find(event_id)
        if index is None:
            return
        self._events[index].reminder_shown = True
        self._save()

    # -- queries -----------------------------------------------------------

    def get(self, event_id: str) -> Event | None:
        index = self._find(event_id)
        return replace(self._events[index]) if index is not None else None

    def all(self) -> list[Event]:
        """Every event, ordered by start."""
        return [replace(e) for e in sorted(self._events, key=lambda e: e.start_at)]

    def query_by_date(self, d: date | datetime) -> list[Event]:
        d = _as_date(d)
        return [e for e in self.all() if e.date == d]

    def query_by_date_and_time(self, d: date | datetime, time_slot: str | time | int) -> list[Event]:
        """Events in progress at the slot's minute (start <= slot < end)."""
        minute = time_slot if isinstance(time_slot, int) else to_minutes(parse_time(time_slot))
        return [e for e in self.query_by_date(d) if e.time_range.contains(minute)]

    def query_by_range(self, start: date | datetime, end: date | datetime) -> list[Event]:
        """Events whose start instant falls in [start, end]; bare dates cover whole days."""
        if not isinstance(start, datetime):
            start = datetime.combine(start, time.min)
        if not isinstance(end, datetime):
            end = datetime.combine(end, time.max)
        return [e for e in self.all() if start <= e.start_at <= end]

    def query_upcoming(self, now: datetime) -> list[Event]:
        return [e for e in self.all() if e.start_at >= now]

    def query_past(self, now: datetime) -> list[Event]:
        return [e for e in self.all() if e.start_at < now]

    def search(
        self,
        term: str | None,
        date_filter: DateFilter = DateFilter.ALL,
        today: date | None = None,
    ) -> list[Event]:
        return filter_events(self.all(), term, date_filter, today)

    def conflicts_for(self, event: Event) -> list[Event]:
        return find_conflicts(self.query_by_date(event.date), event, exclude_id=event.id)

    def conflicting_ids(self, d: date | datetime) -> set[str]:
        return pairwise_conflicts(self.query_by_date(d))

    def day_has_conflict(self, d: date | datetime) -> bool:
        return bool(self.conflicting_ids(d))

    def export_ical(self) -> str:
        return to_ical(self.all())


class RecentSearches:
    """Most-recent-first list of search terms, capped at `limit`."""

    def __init__(self, kv: KeyValueStore, limit: int = 5):
        self._kv = kv
        self.limit = limit
        self._terms = self._load()

    def _load(self) -> list[str]:
        try:
            raw = self._kv.get(RECENT_SEARCHES_KEY)
            terms = json.loads(raw) if raw else []
        except Exception as e:
            logger.warning(f"Could not read recent searches: {e}")
            return []
        if not isinstance(terms, list):
            return []
        return [t for t in terms if isinstance(t, str)][: self.limit]

    def _save(self) -> None:
        try:
            self._kv.set(RECENT_SEARCHES_KEY, json.dumps(self._terms))
        except Exception as e:
            logger.error(f"Failed to persist recent searches: {e}")

    def items(self) -> list[str]:
        return list(self._terms)

    def add(self, term: str) -> None:
        """Remember a term; blanks and terms already listed are ignored."""
        term = term.strip()
        if not term or term in self._terms:
            return
        self._terms = [term, *self._terms][: self.limit]
        self._save()

    def clear(self) -> None:
        self._terms = []
        self._save()
