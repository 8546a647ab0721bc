"""Tests for conflict detection."""

from datetime import date, time

import pytest

from daybook.core.conflicts import conflicting_pairs, find_conflicts, pairwise_conflicts
from daybook.core.events import Event, TimeRange


@pytest.fixture
def today():
    return date(2024, 6, 10)


@pytest.fixture
def make_event(today):
    """Factory for creating events."""
    def _make(event_id: str, start: str, end: str) -> Event:
        sh, sm = map(int, start.split(":"))
        eh, em = map(int, end.split(":"))
        return Event(
            id=event_id,
            title=f"Event {event_id}",
            date=today,
            start_time=time(sh, sm),
            end_time=time(eh, em),
        )
    return _make


class TestFindConflicts:
    def test_overlapping_event(self, make_event):
        existing = [make_event("a", "09:00", "10:00")]
        candidate = make_event("b", "09:30", "10:30")
        assert [e.id for e in find_conflicts(existing, candidate)] == ["a"]

    def test_back_to_back_is_not_a_conflict(self, make_event):
        existing = [make_event("a", "09:00", "10:00")]
        candidate = make_event("b", "10:00", "11:00")
        assert find_conflicts(existing, candidate) == []

    def test_candidate_inside_existing(self, make_event):
        existing = [make_event("a", "08:00", "12:00")]
        assert len(find_conflicts(existing, make_event("b", "09:00", "09:15"))) == 1

    def test_existing_inside_candidate(self, make_event):
        existing = [make_event("a", "09:00", "09:15")]
        assert len(find_conflicts(existing, make_event("b", "08:00", "12:00"))) == 1

    def test_excludes_event_being_edited(self, make_event):
        a = make_event("a", "09:00", "10:00")
        b = make_event("b", "09:30", "10:30")
        assert find_conflicts([a, b], a, exclude_id="a") == [b]

    def test_accepts_time_range(self, make_event):
        existing = [make_event("a", "09:00", "10:00"), make_event("b", "14:00", "15:00")]
        found = find_conflicts(existing, TimeRange.from_times("14:30", "16:00"))
        assert [e.id for e in found] == ["b"]

    def test_matches_overlap_formula(self, make_event):
        times = ["08:00", "09:00", "09:30", "10:00", "11:00"]
        for a0 in times:
            for a1 in times:
                if a1 <= a0:
                    continue
                for b0 in times:
                    for b1 in times:
                        if b1 <= b0:
                            continue
                        a = make_event("a", a0, a1)
                        b = make_event("b", b0, b1)
                        expected = a0 < b1 and a1 > b0
                        assert (find_conflicts([a], b) == [a]) is expected


class TestPairwiseConflicts:
    def test_reports_everyone_involved(self, make_event):
        events = [
            make_event("a", "09:00", "10:00"),
            make_event("b", "09:30", "10:30"),
            make_event("c", "11:00", "12:00"),
        ]
        assert pairwise_conflicts(events) == {"a", "b"}

    def test_no_conflicts(self, make_event):
        events = [make_event("a", "09:00", "10:00"), make_event("b", "10:00", "11:00")]
        assert pairwise_conflicts(events) == set()

    def test_empty_day(self):
        assert pairwise_conflicts([]) == set()


class TestConflictingPairs:
    def test_pairs_sorted_by_start(self, make_event):
        events = [
            make_event("late", "09:45", "11:00"),
            make_event("early", "09:00", "10:00"),
            make_event("lunch", "12:00", "13:00"),
        ]
        pairs = conflicting_pairs(events)
        assert [(a.id, b.id) for a, b in pairs] == [("early", "late")]

    def test_one_long_event_overlaps_many(self, make_event):
        events = [
            make_event("day", "09:00", "17:00"),
            make_event("a", "10:00", "11:00"),
            make_event("b", "13:00", "14:00"),
        ]
        assert len(conflicting_pairs(events)) == 2
