# laborpay/services/calendar_service.py
import logging
import re
from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple, Union

from laborpay.core.config import LaborConfig
from laborpay.core.errors import (
    ConfigurationError,
    InvalidDateFormat,
    InvalidShiftDuration,
    InvalidTimeFormat,
)

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
NIGHT_START_HOUR = 21  # 9 PM
NIGHT_END_HOUR = 6     # 6 AM

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

DateLike = Union[date, str]
TimeLike = Union[time, str]

# Colombian public holidays, 2024
COLOMBIAN_HOLIDAYS_2024 = [
    "2024-01-01",  # Año Nuevo
    "2024-01-08",  # Reyes Magos
    "2024-03-25",  # San José
    "2024-03-28",  # Jueves Santo
    "2024-03-29",  # Viernes Santo
    "2024-05-01",  # Día del Trabajo
    "2024-05-13",  # Ascensión del Señor
    "2024-06-03",  # Corpus Christi
    "2024-06-10",  # Sagrado Corazón
    "2024-07-01",  # San Pedro y San Pablo
    "2024-07-20",  # Independencia
    "2024-08-07",  # Batalla de Boyacá
    "2024-08-19",  # Asunción de la Virgen
    "2024-10-14",  # Día de la Raza
    "2024-11-04",  # Todos los Santos
    "2024-11-11",  # Independencia de Cartagena
    "2024-12-08",  # Inmaculada Concepción
    "2024-12-25",  # Navidad
]

# (month, day) of holidays that are always observed on their own date
FIXED_HOLIDAYS = [(1, 1), (5, 1), (7, 20), (8, 7), (12, 8), (12, 25)]

# (month, day) of holidays moved to the following Monday (Ley Emiliani)
MONDAY_HOLIDAYS = [(1, 6), (3, 19), (6, 29), (8, 15), (10, 12), (11, 1), (11, 11)]

# Days after Easter Sunday, moved to the following Monday
EASTER_MONDAY_OFFSETS = [39, 60, 68]  # Ascensión, Corpus Christi, Sagrado Corazón

# Days before Easter Sunday, observed on their own date
EASTER_FIXED_OFFSETS = [-3, -2]  # Jueves Santo, Viernes Santo


def time_to_minutes(value: TimeLike) -> int:
    """Convert HH:MM into minutes since midnight"""
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeFormat(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(value)

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as HH:MM (wraps past 24:00)"""
    minutes = minutes % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def shift_bounds(start: TimeLike, end: TimeLike) -> Tuple[int, int]:
    """
    Minute offsets of a shift measured from midnight of its start date.

    An end earlier than the start means the shift finishes the next day, so the
    returned end may be up to 2879. Equal start and end is rejected.
    """
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)

    if end_minutes == start_minutes:
        raise InvalidShiftDuration(str(start), str(end))

    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    return start_minutes, end_minutes


def hours_between(start: TimeLike, end: TimeLike) -> float:
    """Hours worked between two clock times, across midnight if needed"""
    start_minutes, end_minutes = shift_bounds(start, end)
    return (end_minutes - start_minutes) / 60


def _night_windows() -> List[Tuple[int, int]]:
    night_start = NIGHT_START_HOUR * 60
    night_end = NIGHT_END_HOUR * 60
    return [
        (0, night_end),                                                # 00:00 - 06:00
        (night_start, MINUTES_PER_DAY + night_end),                    # 21:00 - 06:00 (+1d)
        (MINUTES_PER_DAY + night_start, 2 * MINUTES_PER_DAY),          # 21:00 - 24:00 (+1d)
    ]


def night_hours(start: TimeLike, end: TimeLike) -> float:
    """Hours of the shift that fall between 21:00 and 06:00"""
    start_minutes, end_minutes = shift_bounds(start, end)

    night_minutes = 0
    for window_start, window_end in _night_windows():
        overlap = min(end_minutes, window_end) - max(start_minutes, window_start)
        if overlap > 0:
            night_minutes += overlap

    return night_minutes / 60


def parse_date(value: DateLike) -> date:
    """Accept a date or an ISO YYYY-MM-DD string"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise InvalidDateFormat(value)


def is_sunday(value: DateLike) -> bool:
    return parse_date(value).weekday() == 6


def get_easter_date(year: int) -> date:
    """Easter Sunday for a Gregorian year (anonymous Gregorian algorithm)"""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def next_monday(day: date) -> date:
    """The same date if it is a Monday, otherwise the following Monday"""
    return day + timedelta(days=(7 - day.weekday()) % 7)


class HolidayCalendar(ABC):
    """Source of public-holiday dates used by the pay engine"""

    name = "base"

    @abstractmethod
    def holidays_for_year(self, year: int) -> List[date]:
        ...

    def is_holiday(self, value: DateLike) -> bool:
        day = parse_date(value)
        return day in self.holidays_for_year(day.year)


class StaticHolidayCalendar(HolidayCalendar):
    """A literal list of holiday dates. Years not in the list have no holidays."""

    def __init__(self, dates: Iterable[DateLike], name: str = "static"):
        self.name = name
        self._dates = frozenset(parse_date(d) for d in dates)

    def holidays_for_year(self, year: int) -> List[date]:
        return sorted(d for d in self._dates if d.year == year)

    def is_holiday(self, value: DateLike) -> bool:
        return parse_date(value) in self._dates


class ColombianHolidayCalendar(HolidayCalendar):
    """Colombian public holidays computed for any year"""

    name = "computed"

    @staticmethod
    @lru_cache(maxsize=64)
    def _holidays(year: int) -> Tuple[date, ...]:
        holidays = [date(year, month, day) for month, day in FIXED_HOLIDAYS]
        holidays += [next_monday(date(year, month, day)) for month, day in MONDAY_HOLIDAYS]

        easter = get_easter_date(year)
        holidays += [easter + timedelta(days=offset) for offset in EASTER_FIXED_OFFSETS]
        holidays += [next_monday(easter + timedelta(days=offset)) for offset in EASTER_MONDAY_OFFSETS]

        return tuple(sorted(set(holidays)))

    def holidays_for_year(self, year: int) -> List[date]:
        return list(self._holidays(year))


COLOMBIA_2024 = StaticHolidayCalendar(COLOMBIAN_HOLIDAYS_2024, name="static")
COLOMBIA_COMPUTED = ColombianHolidayCalendar()


def get_holiday_calendar(source: Optional[str] = None) -> HolidayCalendar:
    """Resolve a calendar by name; defaults to LaborConfig.HOLIDAY_CALENDAR"""
    source = (source or LaborConfig.HOLIDAY_CALENDAR).lower()
    if source == "static":
        return COLOMBIA_2024
    if source == "computed":
        return COLOMBIA_COMPUTED
    raise ConfigurationError(f"Unknown holiday calendar '{source}'. Use 'static' or 'computed'")


def is_holiday(value: DateLike, calendar: Optional[HolidayCalendar] = None) -> bool:
    calendar = calendar or get_holiday_calendar()
    return calendar.is_holiday(value)
