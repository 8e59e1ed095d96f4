"""
Calendar arithmetic shared by the resolver and the formatter.

All helpers are pure and keep the tzinfo of their input.
"""

import calendar
from datetime import MAXYEAR, date, datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta


UNIT_DELTAS = {
    "minute": lambda n: relativedelta(minutes=n),
    "hour": lambda n: relativedelta(hours=n),
    "day": lambda n: relativedelta(days=n),
    "week": lambda n: relativedelta(weeks=n),
    "month": lambda n: relativedelta(months=n),
    "year": lambda n: relativedelta(years=n),
}

# Units finer than a day keep the time of day
TIME_UNITS = {"minute", "hour"}


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_units(dt: datetime, unit: str, amount: int) -> datetime:
    """
    Calendar-correct addition.
    Month and year overflow clamps to the last valid day (Jan 31 + 1 month = Feb 28/29).
    """
    return dt + UNIT_DELTAS[unit](amount)


def start_of_week(dt: datetime, first_weekday: int) -> datetime:
    offset = (dt.weekday() - first_weekday) % 7
    return start_of_day(dt) - timedelta(days=offset)


def end_of_week(dt: datetime, first_weekday: int) -> datetime:
    return start_of_week(dt, first_weekday) + timedelta(days=6)


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=1)


def end_of_month(dt: datetime) -> datetime:
    return start_of_day(dt).replace(day=last_day_of_month(dt.year, dt.month))


def start_of_year(dt: datetime) -> datetime:
    return start_of_day(dt).replace(month=1, day=1)


def end_of_year(dt: datetime) -> datetime:
    return start_of_day(dt).replace(month=12, day=31)


def next_weekday(dt: datetime, weekday: int) -> datetime:
    """Next occurrence strictly after dt's date."""
    days_ahead = (weekday - dt.weekday()) % 7 or 7
    return start_of_day(dt) + timedelta(days=days_ahead)


def previous_weekday(dt: datetime, weekday: int) -> datetime:
    """Most recent occurrence strictly before dt's date."""
    days_back = (dt.weekday() - weekday) % 7 or 7
    return start_of_day(dt) - timedelta(days=days_back)


def weekday_in_week(dt: datetime, weekday: int, first_weekday: int) -> datetime:
    """The given weekday inside the week that contains dt."""
    week_start = start_of_week(dt, first_weekday)
    return week_start + timedelta(days=(weekday - first_weekday) % 7)


def nth_weekday_of_month(year: int, month: int, weekday: int, nth: int) -> Optional[date]:
    """
    nth >= 1 counts from the start of the month, nth == -1 is the last one.
    Returns None when the month has no such weekday (e.g. a fifth Monday).
    """
    last_day = last_day_of_month(year, month)

    if nth == -1:
        last = date(year, month, last_day)
        return last - timedelta(days=(last.weekday() - weekday) % 7)

    first = date(year, month, 1)
    day = 1 + (weekday - first.weekday()) % 7 + (nth - 1) * 7
    if day > last_day:
        return None
    return date(year, month, day)


def _first_week_start(dt: datetime, year: int, first_weekday: int, week_one_day: int) -> datetime:
    return start_of_week(dt.replace(year=year, month=1, day=week_one_day), first_weekday)


def week_of_year(dt: datetime, first_weekday: int, week_one_day: int = 1):
    """
    Locale week numbering: weeks open on first_weekday and
    week 1 is the week holding January `week_one_day`
    (1 for US-style numbering, 4 for ISO-style numbering).
    Returns (week_year, week).
    """
    week_start = start_of_week(dt, first_weekday)

    week_year = dt.year
    at_year_end = dt.month == 12 and dt.year < MAXYEAR
    if at_year_end and week_start >= _first_week_start(dt, dt.year + 1, first_weekday, week_one_day):
        week_year = dt.year + 1
    elif week_start < _first_week_start(dt, dt.year, first_weekday, week_one_day):
        week_year = dt.year - 1

    first_week_start = _first_week_start(dt, week_year, first_weekday, week_one_day)
    return week_year, (week_start - first_week_start).days // 7 + 1
