"""
Locale Provider

- Supplies weekday/month names, meridiem and ordinal suffixes to the formatter
- Supplies the locale-default first weekday to week-boundary arithmetic
"""

import calendar
from dataclasses import dataclass
from typing import Callable, Tuple

from core.week_start import SUNDAY


def english_ordinal(number: int) -> str:
    """1 -> '1st', 12 -> '12th', 22 -> '22nd'."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


@dataclass(frozen=True)
class DateLocale:
    """
    Names are indexed the Python way:
    weekdays Monday == 0, months January == 0.
    """

    name: str
    weekdays: Tuple[str, ...]
    weekdays_short: Tuple[str, ...]
    weekdays_min: Tuple[str, ...]
    months: Tuple[str, ...]
    months_short: Tuple[str, ...]
    first_weekday: int = SUNDAY
    # Week 1 is the week holding January week_one_day
    week_one_day: int = 1
    meridiem: Tuple[str, str] = ("AM", "PM")
    ordinal: Callable[[int], str] = english_ordinal

    def weekday_name(self, weekday: int) -> str:
        return self.weekdays[weekday]

    def month_name(self, month: int) -> str:
        return self.months[month - 1]


ENGLISH = DateLocale(
    name="en",
    weekdays=(
        "Monday", "Tuesday", "Wednesday", "Thursday",
        "Friday", "Saturday", "Sunday",
    ),
    weekdays_short=("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    weekdays_min=("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"),
    months=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    months_short=(
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ),
)


def default_locale() -> DateLocale:
    return ENGLISH


def system_locale(first_weekday: int = SUNDAY, week_one_day: int = 1) -> DateLocale:
    """
    Build a locale from the process LC_TIME names.
    Call after locale.setlocale(); the result is a snapshot.
    """
    weekdays = tuple(calendar.day_name)
    weekdays_short = tuple(calendar.day_abbr)
    return DateLocale(
        name="system",
        weekdays=weekdays,
        weekdays_short=weekdays_short,
        weekdays_min=tuple(name[:2] for name in weekdays_short),
        months=tuple(calendar.month_name)[1:],
        months_short=tuple(calendar.month_abbr)[1:],
        first_weekday=first_weekday,
        week_one_day=week_one_day,
    )
