"""
Italian public holidays.

Fixed-date national holidays plus Easter Sunday and Easter Monday, with Easter
computed by the anonymous Gregorian (Meeus/Jones/Butcher) algorithm.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Holiday:
    day: date
    name: str
    local_name: str


# (month, day, name, local name)
FIXED_HOLIDAYS: Tuple[Tuple[int, int, str, str], ...] = (
    (1, 1, "New Year's Day", "Capodanno"),
    (1, 6, "Epiphany", "Epifania"),
    (4, 25, "Liberation Day", "Festa della Liberazione"),
    (5, 1, "Labour Day", "Festa del Lavoro"),
    (6, 2, "Republic Day", "Festa della Repubblica"),
    (8, 15, "Assumption of Mary", "Ferragosto"),
    (11, 1, "All Saints' Day", "Ognissanti"),
    (12, 8, "Immaculate Conception", "Immacolata Concezione"),
    (12, 25, "Christmas Day", "Natale"),
    (12, 26, "St. Stephen's Day", "Santo Stefano"),
)


def easter_sunday(year: int) -> date:
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


@lru_cache(maxsize=32)
def italian_holidays(year: int) -> Tuple[Holiday, ...]:
    holidays: List[Holiday] = [
        Holiday(date(year, month, day), name, local_name)
        for month, day, name, local_name in FIXED_HOLIDAYS
    ]
    easter = easter_sunday(year)
    holidays.append(Holiday(easter, "Easter Sunday", "Pasqua"))
    holidays.append(Holiday(easter + timedelta(days=1), "Easter Monday", "Pasquetta"))
    return tuple(sorted(holidays, key=lambda h: h.day))


def is_holiday(day: date) -> Optional[Holiday]:
    for holiday in italian_holidays(day.year):
        if holiday.day == day:
            return holiday
    return None


def holidays_between(start: date, end: date) -> List[Holiday]:
    """Holidays falling inside the inclusive range, in date order."""
    found = []
    day = start
    while day <= end:
        holiday = is_holiday(day)
        if holiday is not None:
            found.append(holiday)
        day += timedelta(days=1)
    return found
