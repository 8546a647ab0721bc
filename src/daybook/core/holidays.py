"""Holiday overlay: the fixed holiday table plus the Sunday weekly-off rule."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum


class HolidayType(str, Enum):
    NATIONAL = "National Holiday"
    PUBLIC = "Public Holiday"
    GOVERNMENT = "Government Holiday"
    RESTRICTED = "Restricted Holiday"
    OPTIONAL = "Optional Holiday"
    REGIONAL = "Regional Holiday"


@dataclass(frozen=True)
class Holiday:
    date: date
    name: str
    type: HolidayType | None
    description: str = ""
    is_sunday: bool = False


@dataclass(frozen=True)
class HolidayStyle:
    """Display classification for a holiday category."""

    bg: str
    text: str
    border: str
    gradient: str
    icon: str


@dataclass(frozen=True)
class DayClassification:
    is_sunday: bool
    holiday: Holiday | None

    @property
    def is_off(self) -> bool:
        return self.is_sunday or self.holiday is not None


@dataclass(frozen=True)
class UpcomingCount:
    total: int
    govt_or_named: int
    sundays: int


_COLORS = {
    HolidayType.NATIONAL: "indigo",
    HolidayType.PUBLIC: "emerald",
    HolidayType.REGIONAL: "fuchsia",
    HolidayType.GOVERNMENT: "cyan",
    HolidayType.RESTRICTED: "amber",
    HolidayType.OPTIONAL: "slate",
}
DEFAULT_COLOR = "emerald"

_STYLES = {
    HolidayType.NATIONAL: HolidayStyle(
        "bg-indigo-100 dark:bg-indigo-900/40", "text-indigo-800 dark:text-indigo-200",
        "border-indigo-500", "from-indigo-500 to-blue-600", "🌟",
    ),
    HolidayType.PUBLIC: HolidayStyle(
        "bg-emerald-100 dark:bg-emerald-900/40", "text-emerald-800 dark:text-emerald-200",
        "border-emerald-500", "from-emerald-500 to-green-600", "🏛️",
    ),
    HolidayType.REGIONAL: HolidayStyle(
        "bg-fuchsia-100 dark:bg-fuchsia-900/40", "text-fuchsia-800 dark:text-fuchsia-200",
        "border-fuchsia-500", "from-fuchsia-500 to-purple-600", "🎭",
    ),
    HolidayType.GOVERNMENT: HolidayStyle(
        "bg-cyan-100 dark:bg-cyan-900/40", "text-cyan-800 dark:text-cyan-200",
        "border-cyan-500", "from-cyan-500 to-blue-500", "🏢",
    ),
    HolidayType.RESTRICTED: HolidayStyle(
        "bg-amber-100 dark:bg-amber-900/40", "text-amber-800 dark:text-amber-200",
        "border-amber-500", "from-amber-500 to-yellow-500", "📅",
    ),
    HolidayType.OPTIONAL: HolidayStyle(
        "bg-slate-100 dark:bg-slate-700", "text-slate-800 dark:text-slate-200",
        "border-slate-500", "from-slate-500 to-gray-600", "🔄",
    ),
}
DEFAULT_STYLE = HolidayStyle(
    "bg-emerald-100 dark:bg-emerald-900/40", "text-emerald-800 dark:text-emerald-200",
    "border-emerald-500", "from-emerald-500 to-green-600", "📆",
)
SUNDAY_STYLE = HolidayStyle(
    "bg-red-100 dark:bg-red-900/30", "text-red-700 dark:text-red-300",
    "border-red-500", "from-rose-500 to-red-600", "🌞",
)


def _holiday(iso: str, name: str, kind: HolidayType, description: str) -> Holiday:
    return Holiday(date.fromisoformat(iso), name, kind, description)


N, P, G, R, O, RG = (
    HolidayType.NATIONAL,
    HolidayType.PUBLIC,
    HolidayType.GOVERNMENT,
    HolidayType.RESTRICTED,
    HolidayType.OPTIONAL,
    HolidayType.REGIONAL,
)

# Kerala government holidays, per the state gazette.
KERALA_HOLIDAYS: tuple[Holiday, ...] = (
    _holiday("2024-01-01", "New Year", P, "New Year celebration as per Gregorian calendar"),
    _holiday("2024-01-14", "Makara Sankranti", R, "Festival marking the transition of the Sun to Capricorn"),
    _holiday("2024-01-26", "Republic Day", N, "Commemorates the adoption of the Indian Constitution"),
    _holiday("2024-02-14", "Sivarathri", G, "Night of Shiva worship and devotion"),
    _holiday("2024-02-24", "Guru Ravidas Jayanti", R, "Birthday of Saint Guru Ravidas"),
    _holiday("2024-03-08", "Maha Shivaratri", G, "Great night of Shiva worship"),
    _holiday("2024-03-18", "Holi", O, "Festival of colors and spring"),
    _holiday("2024-03-25", "Doljatra/Holi", G, "Bengal New Year and festival of colors"),
    _holiday("2024-03-29", "Good Friday", P, "Christian observance of the crucifixion of Jesus Christ"),
    _holiday("2024-04-09", "Ram Navami", R, "Birthday of Lord Rama"),
    _holiday("2024-04-11", "Eid-ul-Fitr", P, "Festival marking the end of Ramadan"),
    _holiday("2024-04-14", "Vishu", G, "Malayalam New Year and harvest festival"),
    _holiday("2024-04-21", "Thrissur Pooram", RG, "Famous temple festival of Kerala"),
    _holiday("2024-05-01", "May Day", P, "International Workers' Day and Kerala Labour Day"),
    _holiday("2024-05-23", "Buddha Purnima", G, "Birthday of Lord Buddha"),
    _holiday("2024-06-17", "Bakrid/Eid al-Adha", P, "Festival of Sacrifice"),
    _holiday("2024-06-21", "Jagannath Rath Yatra", R, "Chariot festival of Lord Jagannath"),
    _holiday("2024-07-17", "Muharram", P, "Islamic New Year and day of mourning"),
    _holiday("2024-07-20", "Guru Purnima", R, "Full moon day dedicated to spiritual and academic teachers"),
    _holiday("2024-08-15", "Independence Day", N, "Commemorates India's independence from British rule"),
    _holiday("2024-08-19", "Raksha Bandhan", R, "Festival celebrating the bond between brothers and sisters"),
    _holiday("2024-08-26", "Janmashtami", G, "Birthday of Lord Krishna"),
    _holiday("2024-09-07", "Onam (Thiruvonam)", P, "Main day of Kerala's harvest festival"),
    _holiday("2024-09-06", "Onam (Uthradom)", G, "Second day of Onam celebrations"),
    _holiday("2024-09-16", "Milad-un-Nabi", P, "Birthday of Prophet Muhammad"),
    _holiday("2024-10-02", "Gandhi Jayanti", N, "Birthday of Mahatma Gandhi"),
    _holiday("2024-10-12", "Dussehra", G, "Victory of good over evil, celebration of Goddess Durga"),
    _holiday("2024-10-31", "Diwali", P, "Festival of Lights"),
    _holiday("2024-11-01", "Kerala Piravi", RG, "Formation Day of Kerala State (1956)"),
    _holiday("2024-11-15", "Guru Nanak Jayanti", G, "Birthday of Guru Nanak Dev, founder of Sikhism"),
    _holiday("2024-11-24", "Kali Puja", R, "Worship of Goddess Kali"),
    _holiday("2024-12-25", "Christmas", P, "Birth of Jesus Christ"),
    _holiday("2024-12-31", "New Year Eve", O, "Last day of the Gregorian calendar year"),
    _holiday("2025-01-01", "New Year", P, "New Year celebration as per Gregorian calendar"),
    _holiday("2025-01-14", "Pongal/Makara Sankranti", G, "Harvest festival and solar transition"),
    _holiday("2025-01-26", "Republic Day", N, "Commemorates the adoption of the Indian Constitution"),
    _holiday("2025-02-26", "Maha Shivaratri", G, "Great night of Shiva worship"),
    _holiday("2025-02-13", "Vasant Panchami", R, "Festival marking the arrival of spring"),
    _holiday("2025-03-14", "Holi", G, "Festival of colors and spring"),
    _holiday("2025-03-30", "Ram Navami", R, "Birthday of Lord Rama"),
    _holiday("2025-03-31", "Eid-ul-Fitr", P, "Festival marking the end of Ramadan"),
    _holiday("2025-04-14", "Vishu", G, "Malayalam New Year and harvest festival"),
    _holiday("2025-04-18", "Good Friday", P, "Christian observance of the crucifixion of Jesus Christ"),
    _holiday("2025-04-21", "Easter Monday", O, "Day after Easter Sunday"),
    _holiday("2025-05-01", "May Day", P, "International Workers' Day and Kerala Labour Day"),
    _holiday("2025-05-12", "Buddha Purnima", G, "Birthday of Lord Buddha"),
    _holiday("2025-06-06", "Bakrid/Eid al-Adha", P, "Festival of Sacrifice"),
    _holiday("2025-06-15", "Vat Purnima", R, "Festival for married women"),
    _holiday("2025-07-05", "Muharram", P, "Islamic New Year and day of mourning"),
    _holiday("2025-07-13", "Guru Purnima", R, "Full moon day dedicated to spiritual teachers"),
    _holiday("2025-08-15", "Independence Day", N, "Commemorates India's independence from British rule"),
    _holiday("2025-08-16", "Janmashtami", G, "Birthday of Lord Krishna"),
    _holiday("2025-09-05", "Milad-un-Nabi", P, "Birthday of Prophet Muhammad"),
    _holiday("2025-09-27", "Onam (Thiruvonam)", P, "Main day of Kerala's harvest festival"),
    _holiday("2025-10-02", "Gandhi Jayanti", N, "Birthday of Mahatma Gandhi"),
    _holiday("2025-10-22", "Dussehra", G, "Victory of good over evil"),
    _holiday("2025-10-20", "Karva Chauth", O, "Hindu festival of married women"),
    _holiday("2025-11-01", "Kerala Piravi", RG, "Formation Day of Kerala State"),
    _holiday("2025-11-05", "Guru Nanak Jayanti", G, "Birthday of Guru Nanak Dev"),
    _holiday("2025-11-12", "Diwali", P, "Festival of Lights"),
    _holiday("2025-12-25", "Christmas", P, "Birth of Jesus Christ"),
    _holiday("2025-12-31", "New Year Eve", O, "Last day of the year"),
)

del N, P, G, R, O, RG


def _as_date(d: date | datetime) -> date:
    return d.date() if isinstance(d, datetime) else d


def _coerce_type(kind: HolidayType | str | None) -> HolidayType | None:
    if kind is None or isinstance(kind, HolidayType):
        return kind
    try:
        return HolidayType(kind)
    except ValueError:
        return None


def is_sunday(d: date | datetime) -> bool:
    return _as_date(d).weekday() == 6


def type_color(kind: HolidayType | str | None) -> str:
    """Palette tag for a holiday category; unknown categories get the default."""
    return _COLORS.get(_coerce_type(kind), DEFAULT_COLOR)


def type_classes(kind: HolidayType | str | None) -> HolidayStyle:
    return _STYLES.get(_coerce_type(kind), DEFAULT_STYLE)


class HolidayRegistry:
    """
    Read-only holiday lookup.

    Dates are matched as plain calendar days. A date can be a Sunday and a
    named holiday at the same time; both facts are reported and the caller
    decides which one to display.
    """

    def __init__(self, holidays: tuple[Holiday, ...] | list[Holiday] = KERALA_HOLIDAYS):
        self._by_date: dict[date, Holiday] = {}
        for holiday in holidays:
            self._by_date.setdefault(holiday.date, holiday)

    def __len__(self) -> int:
        return len(self._by_date)

    is_sunday = staticmethod(is_sunday)
    type_color = staticmethod(type_color)
    type_classes = staticmethod(type_classes)

    def lookup(self, d: date | datetime) -> Holiday | None:
        return self._by_date.get(_as_date(d))

    def is_holiday(self, d: date | datetime) -> bool:
        return _as_date(d) in self._by_date

    def classify(self, d: date | datetime) -> DayClassification:
        return DayClassification(is_sunday=is_sunday(d), holiday=self.lookup(d))

    def holiday_info(self, d: date | datetime) -> Holiday | None:
        """The single label a grid cell shows: Sunday wins over a named holiday."""
        d = _as_date(d)
        if is_sunday(d):
            return Holiday(d, "Sunday", None, "Weekly Holiday", is_sunday=True)
        return self.lookup(d)

    def between(self, start: date, end: date) -> list[Holiday]:
        return sorted(
            (h for d, h in self._by_date.items() if start <= d <= end),
            key=lambda h: h.date,
        )

    def count_upcoming(self, from_date: date | datetime, window_days: int = 30) -> UpcomingCount:
        """
        Count named holidays and Sundays in [from_date, from_date + window_days].

        The buckets are independent: a Sunday that is also a named holiday is
        counted once in each, and both go into the total.
        """
        start = _as_date(from_date)
        end = start + timedelta(days=window_days)
        named = len(self.between(start, end))
        sundays = sum(
            1 for i in range(window_days + 1) if is_sunday(start + timedelta(days=i))
        )
        return UpcomingCount(total=named + sundays, govt_or_named=named, sundays=sundays)
