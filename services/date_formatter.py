"""
Date Formatter Service

- Renders an instant through a moment-style token pattern (YYYY-MM-DD, dddd, HH:mm, ...)
- Bracketed runs ([at], [[]) are copied literally
- The invalid instant always renders as the fixed sentinel string
"""

import re
from datetime import date, datetime, time, timedelta
from typing import Callable, Dict, Optional, Union

from core.outcome import Resolved, Unresolved, instant_of
from services.calendar_math import week_of_year
from services.locale import DateLocale, default_locale

INVALID_DATE = "Invalid date"


def _sunday_based_weekday(dt: datetime) -> int:
    return (dt.weekday() + 1) % 7


def _twelve_hour(dt: datetime) -> int:
    return dt.hour % 12 or 12


def _utc_offset(dt: datetime) -> timedelta:
    if dt.tzinfo is None or dt.utcoffset() is None:
        # Naive instants are system-local
        return dt.astimezone().utcoffset()
    return dt.utcoffset()


def _render_offset(dt: datetime, separator: str) -> str:
    offset = _utc_offset(dt)
    minutes = int(offset.total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _quarter(dt: datetime) -> int:
    return (dt.month - 1) // 3 + 1


Renderer = Callable[[datetime, DateLocale], str]

TOKENS: Dict[str, Renderer] = {
    # Year
    "YYYY": lambda dt, loc: f"{dt.year:04d}",
    "YY": lambda dt, loc: f"{dt.year % 100:02d}",
    "Y": lambda dt, loc: str(dt.year),
    "GGGG": lambda dt, loc: f"{dt.isocalendar()[0]:04d}",
    "gggg": lambda dt, loc: f"{week_of_year(dt, loc.first_weekday, loc.week_one_day)[0]:04d}",
    # Quarter
    "Q": lambda dt, loc: str(_quarter(dt)),
    "Qo": lambda dt, loc: loc.ordinal(_quarter(dt)),
    # Month
    "MMMM": lambda dt, loc: loc.month_name(dt.month),
    "MMM": lambda dt, loc: loc.months_short[dt.month - 1],
    "MM": lambda dt, loc: f"{dt.month:02d}",
    "Mo": lambda dt, loc: loc.ordinal(dt.month),
    "M": lambda dt, loc: str(dt.month),
    # Day of month / year
    "DDDD": lambda dt, loc: f"{dt.timetuple().tm_yday:03d}",
    "DDD": lambda dt, loc: str(dt.timetuple().tm_yday),
    "DD": lambda dt, loc: f"{dt.day:02d}",
    "Do": lambda dt, loc: loc.ordinal(dt.day),
    "D": lambda dt, loc: str(dt.day),
    # Day of week
    "dddd": lambda dt, loc: loc.weekday_name(dt.weekday()),
    "ddd": lambda dt, loc: loc.weekdays_short[dt.weekday()],
    "dd": lambda dt, loc: loc.weekdays_min[dt.weekday()],
    "do": lambda dt, loc: loc.ordinal(_sunday_based_weekday(dt)),
    "d": lambda dt, loc: str(_sunday_based_weekday(dt)),
    "E": lambda dt, loc: str(dt.isoweekday()),
    "e": lambda dt, loc: str((dt.weekday() - loc.first_weekday) % 7),
    # Week of year
    "WW": lambda dt, loc: f"{dt.isocalendar()[1]:02d}",
    "Wo": lambda dt, loc: loc.ordinal(dt.isocalendar()[1]),
    "W": lambda dt, loc: str(dt.isocalendar()[1]),
    "ww": lambda dt, loc: f"{week_of_year(dt, loc.first_weekday, loc.week_one_day)[1]:02d}",
    "wo": lambda dt, loc: loc.ordinal(week_of_year(dt, loc.first_weekday, loc.week_one_day)[1]),
    "w": lambda dt, loc: str(week_of_year(dt, loc.first_weekday, loc.week_one_day)[1]),
    # Time of day
    "HH": lambda dt, loc: f"{dt.hour:02d}",
    "H": lambda dt, loc: str(dt.hour),
    "hh": lambda dt, loc: f"{_twelve_hour(dt):02d}",
    "h": lambda dt, loc: str(_twelve_hour(dt)),
    "kk": lambda dt, loc: f"{dt.hour or 24:02d}",
    "k": lambda dt, loc: str(dt.hour or 24),
    "mm": lambda dt, loc: f"{dt.minute:02d}",
    "m": lambda dt, loc: str(dt.minute),
    "ss": lambda dt, loc: f"{dt.second:02d}",
    "s": lambda dt, loc: str(dt.second),
    "SSS": lambda dt, loc: f"{dt.microsecond // 1000:03d}",
    "SS": lambda dt, loc: f"{dt.microsecond // 10000:02d}",
    "S": lambda dt, loc: str(dt.microsecond // 100000),
    "A": lambda dt, loc: loc.meridiem[dt.hour >= 12],
    "a": lambda dt, loc: loc.meridiem[dt.hour >= 12].lower(),
    # Epoch / offset
    "X": lambda dt, loc: str(int(dt.timestamp())),
    "x": lambda dt, loc: str(int(dt.timestamp() * 1000)),
    "ZZ": lambda dt, loc: _render_offset(dt, ""),
    "Z": lambda dt, loc: _render_offset(dt, ":"),
}

# Escaped runs first, then the longest token wins
_TOKEN_RE = re.compile(
    r"\[(?P<literal>[^\[]*)\]|"
    + "|".join(re.escape(token) for token in sorted(TOKENS, key=len, reverse=True))
)

Formattable = Union[datetime, date, Resolved, Unresolved, None]


def format_date(instant: Formattable, pattern: str, locale: Optional[DateLocale] = None) -> str:
    """
    Render `instant` with `pattern`.
    None / Unresolved is the invalid instant and always yields INVALID_DATE.
    """
    if isinstance(instant, (Resolved, Unresolved)):
        instant = instant_of(instant)
    if instant is None:
        return INVALID_DATE
    if not isinstance(instant, datetime):
        instant = datetime.combine(instant, time())

    locale = locale or default_locale()

    def substitute(match: "re.Match") -> str:
        literal = match.group("literal")
        if literal is not None:
            return literal
        return TOKENS[match.group(0)](instant, locale)

    return _TOKEN_RE.sub(substitute, pattern)


def is_valid(text: Optional[str]) -> bool:
    """String-level validity check used by callers of format_date."""
    return text is not None and text != INVALID_DATE
