"""Schedule overlap detection for same-day events - no I/O dependencies."""

from .events import Event, TimeRange


def find_conflicts(
    events: list[Event],
    candidate: Event | TimeRange,
    exclude_id: str | None = None,
) -> list[Event]:
    """
    Events whose time range overlaps the candidate's.

    `events` should already be restricted to the candidate's day. The event
    being edited is skipped via `exclude_id` so it never conflicts with itself.
    """
    target = candidate if isinstance(candidate, TimeRange) else candidate.time_range
    return [
        e
        for e in events
        if (exclude_id is None or e.id != exclude_id) and e.time_range.overlaps(target)
    ]


def pairwise_conflicts(events: list[Event]) -> set[str]:
    """Ids of every event involved in at least one overlapping pair."""
    involved: set[str] = set()
    for i, a in enumerate(events):
        for b in events[i + 1 :]:
            if a.time_range.overlaps(b.time_range):
                involved.add(a.id)
                involved.add(b.id)
    return involved


def conflicting_pairs(events: list[Event]) -> list[tuple[Event, Event]]:
    """
    Overlapping (earlier, later) pairs for a single day.

    Sweeps events sorted by start; once a later event starts at or after the
    current one's end, nothing further can overlap it.
    """
    pairs = []
    ordered = sorted(events, key=lambda e: (e.start_time, e.end_time))

    for i, first in enumerate(ordered):
        for second in ordered[i + 1 :]:
            if second.start_time >= first.end_time:
                break
            pairs.append((first, second))

    return pairs
