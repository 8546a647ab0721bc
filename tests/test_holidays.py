"""Tests for holiday lookup and classification."""

from datetime import date, datetime

import pytest

from daybook.core.holidays import (
    DEFAULT_STYLE,
    KERALA_HOLIDAYS,
    Holiday,
    HolidayRegistry,
    HolidayType,
    is_sunday,
    type_classes,
    type_color,
)


@pytest.fixture
def registry():
    return HolidayRegistry()


class TestIsSunday:
    def test_sunday(self):
        assert is_sunday(date(2024, 6, 9)) is True

    def test_weekday(self):
        assert is_sunday(date(2024, 6, 10)) is False

    def test_registry_exposes_rule(self, registry):
        assert registry.is_sunday(date(2024, 6, 16)) is True


class TestLookup:
    def test_named_holiday(self, registry):
        holiday = registry.lookup(date(2024, 8, 15))
        assert holiday.name == "Independence Day"
        assert holiday.type == HolidayType.NATIONAL

    def test_ignores_time_of_day(self, registry):
        assert registry.lookup(datetime(2024, 12, 25, 23, 59)).name == "Christmas"

    def test_ordinary_day(self, registry):
        assert registry.lookup(date(2024, 6, 11)) is None
        assert registry.is_holiday(date(2024, 6, 11)) is False

    def test_is_pure(self, registry):
        d = date(2024, 10, 2)
        assert registry.lookup(d) == registry.lookup(d)

    def test_custom_table(self):
        custom = HolidayRegistry([Holiday(date(2030, 1, 1), "Launch Day", HolidayType.OPTIONAL)])
        assert len(custom) == 1
        assert custom.lookup(date(2030, 1, 1)).name == "Launch Day"

    def test_bundled_table_covers_two_years(self):
        assert {h.date.year for h in KERALA_HOLIDAYS} == {2024, 2025}


class TestClassify:
    def test_sunday_and_holiday_at_once(self, registry):
        # Vishu 2024 fell on a Sunday
        result = registry.classify(date(2024, 4, 14))
        assert result.is_sunday is True
        assert result.holiday is not None
        assert result.holiday.name == "Vishu"
        assert result.is_off is True

    def test_plain_sunday(self, registry):
        result = registry.classify(date(2024, 6, 9))
        assert result.is_sunday is True
        assert result.holiday is None

    def test_weekday_holiday(self, registry):
        result = registry.classify(date(2024, 5, 1))
        assert result.is_sunday is False
        assert result.holiday.name == "May Day"

    def test_ordinary_day(self, registry):
        assert registry.classify(date(2024, 6, 11)).is_off is False


class TestHolidayInfo:
    def test_sunday_label_wins(self, registry):
        info = registry.holiday_info(date(2024, 4, 14))
        assert info.name == "Sunday"
        assert info.is_sunday is True
        assert info.type is None

    def test_named_holiday(self, registry):
        assert registry.holiday_info(date(2024, 10, 2)).name == "Gandhi Jayanti"

    def test_ordinary_day(self, registry):
        assert registry.holiday_info(date(2024, 6, 11)) is None


class TestTypeStyling:
    @pytest.mark.parametrize(
        "kind,color",
        [
            (HolidayType.NATIONAL, "indigo"),
            (HolidayType.PUBLIC, "emerald"),
            (HolidayType.REGIONAL, "fuchsia"),
            (HolidayType.GOVERNMENT, "cyan"),
            (HolidayType.RESTRICTED, "amber"),
            (HolidayType.OPTIONAL, "slate"),
        ],
    )
    def test_type_color(self, kind, color):
        assert type_color(kind) == color

    def test_accepts_type_string(self):
        assert type_color("Government Holiday") == "cyan"

    def test_unknown_type_falls_back(self):
        assert type_color("Bank Holiday") == "emerald"
        assert type_color(None) == "emerald"
        assert type_classes("Bank Holiday") == DEFAULT_STYLE

    def test_classes(self):
        style = type_classes(HolidayType.NATIONAL)
        assert style.border == "border-indigo-500"
        assert "bg-indigo-100" in style.bg


class TestBetween:
    def test_sorted_by_date(self, registry):
        # the table lists Thiruvonam before Uthradom
        names = [h.name for h in registry.between(date(2024, 9, 1), date(2024, 9, 10))]
        assert names == ["Onam (Uthradom)", "Onam (Thiruvonam)"]

    def test_inclusive_bounds(self, registry):
        found = registry.between(date(2024, 8, 15), date(2024, 8, 19))
        assert [h.date for h in found] == [date(2024, 8, 15), date(2024, 8, 19)]


class TestCountUpcoming:
    def test_thirty_day_window(self, registry):
        counts = registry.count_upcoming(date(2024, 6, 1), 30)
        # Sundays June 2, 9, 16, 23, 30
        assert counts.sundays == 5
        # Bakrid (June 17) and Rath Yatra (June 21)
        assert counts.govt_or_named == 2
        assert counts.total == 7

    def test_sunday_holiday_counted_in_both_buckets(self, registry):
        counts = registry.count_upcoming(date(2024, 4, 14), 0)
        assert counts.sundays == 1
        assert counts.govt_or_named == 1
        assert counts.total == 2

    def test_window_end_is_inclusive(self, registry):
        # June 8 (Sat) + 1 day reaches Sunday June 9
        assert registry.count_upcoming(date(2024, 6, 8), 1).sundays == 1

    def test_sundays_independent_of_holiday_table(self):
        empty = HolidayRegistry([])
        counts = empty.count_upcoming(date(2024, 6, 1), 30)
        assert counts.sundays == 5
        assert counts.govt_or_named == 0
