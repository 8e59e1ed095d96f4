"""
Date Resolver Service

- Converts natural language date expressions into concrete instants
- Grounds every relative reference on an explicit reference instant (no hidden clock)
- Pattern classes are tried in a fixed priority order; the first match wins
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

from dateutil import parser as dateutil_parser

from core.outcome import ParseOutcome, Resolved, Unresolved
from core.week_start import WeekStart
from services.calendar_math import (
    TIME_UNITS,
    add_units,
    end_of_month,
    end_of_week,
    end_of_year,
    last_day_of_month,
    next_weekday,
    nth_weekday_of_month,
    previous_weekday,
    start_of_day,
    start_of_month,
    start_of_week,
    start_of_year,
    weekday_in_week,
)
from services.locale import DateLocale

logger = logging.getLogger(__name__)

Handler = Callable[[str, datetime, int], Optional[datetime]]

# -----------------------------
# Vocabulary
# -----------------------------
WEEKDAYS = {
    "monday": 0, "mon": 0,
    "tuesday": 1, "tue": 1, "tues": 1,
    "wednesday": 2, "wed": 2,
    "thursday": 3, "thu": 3, "thur": 3, "thurs": 3,
    "friday": 4, "fri": 4,
    "saturday": 5, "sat": 5,
    "sunday": 6, "sun": 6,
}

MONTH_NAMES = {
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
}

NUMBER_WORDS = {
    "a": 1, "an": 1, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "ten": 10, "eleven": 11, "twelve": 12,
}

ORDINALS = {
    "first": 1, "1st": 1,
    "second": 2, "2nd": 2,
    "third": 3, "3rd": 3,
    "fourth": 4, "4th": 4,
    "fifth": 5, "5th": 5,
    "last": -1,
}

KEYWORD_OFFSETS = {
    "today": 0,
    "tomorrow": 1,
    "yesterday": -1,
    "day after tomorrow": 2,
    "day before yesterday": -2,
}

QUALIFIER_STEPS = {"this": 0, "next": 1, "last": -1}

MID_MONTH_DAY = 15

# -----------------------------
# Grammar
# -----------------------------
_UNIT = r"(?P<unit>minute|hour|day|week|month|year)s?"

_QUALIFIED_RE = re.compile(r"^(?P<qualifier>next|last|this) (?P<word>[a-z]+)$")
_IN_RE = re.compile(rf"^in (?P<amount>[a-z0-9]+) {_UNIT}$")
_AGO_RE = re.compile(rf"^(?P<amount>[a-z0-9]+) {_UNIT} (?P<direction>ago|from now)$")

_WEEK_EDGE_RE = re.compile(
    r"^(?P<edge>start|beginning|end) of (?:the )?(?:(?P<qualifier>this|next|last) )?week$"
)
_BARE_WEEKDAY_RE = re.compile(r"^(?:on )?(?P<weekday>[a-z]+)$")

_PERIOD_EDGE_RE = re.compile(
    r"^(?P<edge>first day|last day|start|beginning|end) of (?:the )?"
    r"(?P<qualifier>this|next|last) (?P<unit>month|year)$"
)
_MONTH_EDGE_RE = re.compile(
    r"^(?P<edge>first day of|last day of|start of|beginning of|end of|mid) "
    r"(?P<month>[a-z]+)(?: (?P<year>\d{4}))?$"
)
_MID_QUALIFIED_RE = re.compile(r"^mid(?: |-)(?P<qualifier>this|next|last) month$")
_NTH_WEEKDAY_RE = re.compile(
    r"^(?:the )?(?P<ordinal>[a-z0-9]+) (?P<weekday>[a-z]+) (?:of|in) "
    r"(?:(?P<qualifier>this|next|last) month|(?P<month>[a-z]+)(?: (?P<year>\d{4}))?)$"
)

_CLOCK = r"\d{1,2}:\d{2}(?::\d{2})?(?: ?[ap]m)?"
_ISO_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[t ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:z|[+-]\d{2}(?::?\d{2})?)?)?$"
)
_NUMERIC_DATE_RE = re.compile(
    rf"^(?:\d{{1,2}}/\d{{1,2}}/\d{{4}}|\d{{4}}/\d{{1,2}}/\d{{1,2}})(?:,? (?:at )?{_CLOCK})?$"
)
_NAMED_DATE_RE = re.compile(
    r"^(?:[a-z]+,? )?"
    r"(?:(?P<month_first>[a-z]+)\.? \d{1,2}(?:st|nd|rd|th)?"
    r"|\d{1,2}(?:st|nd|rd|th)? (?:of )?(?P<month_last>[a-z]+)\.?)"
    rf",? \d{{4}}(?:,? (?:at )?{_CLOCK})?$"
)

_CLOCK_SUFFIX_RE = re.compile(
    r"^(?:(?P<body>.*?) )?(?:at )?"
    r"(?:(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))? ?(?P<meridiem>am|pm)"
    r"|(?P<hour24>\d{1,2}):(?P<minute24>\d{2}))$"
)
_AT_SUFFIX_RE = re.compile(r"^(?:(?P<body>.*?) )?at (?:(?P<hour>\d{1,2})|(?P<word>noon|midnight))$")


def normalize(text: Optional[str]) -> str:
    """Lower-case and collapse whitespace."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text.strip().lower())


def _magnitude(word: str) -> Optional[int]:
    if word.isdigit():
        value = int(word)
    else:
        value = NUMBER_WORDS.get(word)
    if value is None or value < 1:
        return None
    return value


def _on_date(reference: datetime, year: int, month: int, day: int) -> datetime:
    return start_of_day(reference).replace(year=year, month=month, day=day)


# -----------------------------
# 1. Literal keywords
# -----------------------------
def _match_keyword(text: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    if text == "now":
        return reference

    if text in KEYWORD_OFFSETS:
        return start_of_day(reference) + timedelta(days=KEYWORD_OFFSETS[text])

    if text == "noon":
        return start_of_day(reference).replace(hour=12)

    if text == "midnight":
        return start_of_day(reference)

    return None


# -----------------------------
# 2. Relative unit offsets
# -----------------------------
def _match_relative(text: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    match = _QUALIFIED_RE.match(text)
    if match:
        return _qualified(match.group("qualifier"), match.group("word"), reference, first_weekday)

    match = _IN_RE.match(text)
    if match:
        return _offset(match.group("amount"), match.group("unit"), 1, reference)

    match = _AGO_RE.match(text)
    if match:
        sign = -1 if match.group("direction") == "ago" else 1
        return _offset(match.group("amount"), match.group("unit"), sign, reference)

    return None


def _qualified(qualifier: str, word: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    if word in WEEKDAYS:
        weekday = WEEKDAYS[word]
        if qualifier == "next":
            return next_weekday(reference, weekday)
        if qualifier == "last":
            return previous_weekday(reference, weekday)
        return weekday_in_week(reference, weekday, first_weekday)

    step = QUALIFIER_STEPS[qualifier]

    if word in TIME_UNITS:
        if step != 0:
            return add_units(reference, word, step)
        if word == "hour":
            return reference.replace(minute=0, second=0, microsecond=0)
        return reference.replace(second=0, microsecond=0)

    if word not in ("day", "week", "month", "year"):
        return None

    if step != 0:
        return add_units(start_of_day(reference), word, step)

    if word == "week":
        return start_of_week(reference, first_weekday)
    if word == "month":
        return start_of_month(reference)
    if word == "year":
        return start_of_year(reference)
    return start_of_day(reference)


def _offset(amount_word: str, unit: str, sign: int, reference: datetime) -> Optional[datetime]:
    amount = _magnitude(amount_word)
    if amount is None:
        return None

    base = reference if unit in TIME_UNITS else start_of_day(reference)
    return add_units(base, unit, sign * amount)


# -----------------------------
# 3. Weekday references
# -----------------------------
def _match_weekday(text: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    match = _WEEK_EDGE_RE.match(text)
    if match:
        step = QUALIFIER_STEPS[match.group("qualifier") or "this"]
        anchor = reference + timedelta(weeks=step)
        if match.group("edge") == "end":
            return end_of_week(anchor, first_weekday)
        return start_of_week(anchor, first_weekday)

    match = _BARE_WEEKDAY_RE.match(text)
    if match and match.group("weekday") in WEEKDAYS:
        # Always forward-seeking, whatever the week start
        return next_weekday(reference, WEEKDAYS[match.group("weekday")])

    return None


# -----------------------------
# 4. Ordinal-in-unit
# -----------------------------
def _match_ordinal_in_unit(text: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    match = _PERIOD_EDGE_RE.match(text)
    if match:
        unit = match.group("unit")
        anchor = add_units(start_of_day(reference), unit, QUALIFIER_STEPS[match.group("qualifier")])
        at_end = match.group("edge") in ("last day", "end")
        if unit == "month":
            return end_of_month(anchor) if at_end else start_of_month(anchor)
        return end_of_year(anchor) if at_end else start_of_year(anchor)

    match = _MID_QUALIFIED_RE.match(text)
    if match:
        anchor = add_units(start_of_month(reference), "month", QUALIFIER_STEPS[match.group("qualifier")])
        return anchor.replace(day=MID_MONTH_DAY)

    match = _MONTH_EDGE_RE.match(text)
    if match and match.group("month") in MONTH_NAMES:
        month = MONTH_NAMES[match.group("month")]
        year = int(match.group("year") or reference.year)
        edge = match.group("edge")
        if edge in ("last day of", "end of"):
            day = last_day_of_month(year, month)
        elif edge == "mid":
            day = MID_MONTH_DAY
        else:
            day = 1
        return _on_date(reference, year, month, day)

    match = _NTH_WEEKDAY_RE.match(text)
    if match:
        return _nth_weekday(match, reference)

    return None


def _nth_weekday(match: "re.Match", reference: datetime) -> Optional[datetime]:
    nth = ORDINALS.get(match.group("ordinal"))
    weekday = WEEKDAYS.get(match.group("weekday"))
    if nth is None or weekday is None:
        return None

    if match.group("qualifier"):
        anchor = add_units(start_of_month(reference), "month", QUALIFIER_STEPS[match.group("qualifier")])
        year, month = anchor.year, anchor.month
    else:
        month = MONTH_NAMES.get(match.group("month"))
        if month is None:
            return None
        year = int(match.group("year") or reference.year)

    found = nth_weekday_of_month(year, month, weekday, nth)
    if found is None:
        return None
    return _on_date(reference, found.year, found.month, found.day)


# -----------------------------
# 5. Raw date literals
# -----------------------------
def _match_literal(text: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    try:
        if _ISO_RE.match(text):
            parsed = dateutil_parser.isoparse(text.upper())
        elif _NUMERIC_DATE_RE.match(text) or _is_named_date(text):
            parsed = dateutil_parser.parse(text)
        else:
            return None
    except (ValueError, OverflowError):
        return None

    if parsed.tzinfo is not None:
        # Instants are system-local
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _is_named_date(text: str) -> bool:
    match = _NAMED_DATE_RE.match(text)
    if not match:
        return False
    month = match.group("month_first") or match.group("month_last")
    return month in MONTH_NAMES


# -----------------------------
# Ordered pattern classes (first match wins)
# -----------------------------
PATTERN_HANDLERS: List[Tuple[str, Handler]] = [
    ("keyword", _match_keyword),
    ("relative", _match_relative),
    ("weekday", _match_weekday),
    ("ordinal", _match_ordinal_in_unit),
    ("literal", _match_literal),
]


def _classify(text: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    for name, handler in PATTERN_HANDLERS:
        try:
            instant = handler(text, reference, first_weekday)
        except (ValueError, OverflowError) as e:
            # Out-of-range calendar values fail the pattern, not the call
            logger.debug(f"[OUT_OF_RANGE] class={name}, text='{text}', error={e}")
            continue
        if instant is not None:
            logger.debug(f"[MATCH] class={name}, text='{text}'")
            return instant
    return None


def _split_clock(text: str) -> Optional[Tuple[str, int, int]]:
    """
    Split a trailing time-of-day clause off the text.
    Returns (body, hour, minute); hour is -1 when the clause is out of range.
    """
    match = _CLOCK_SUFFIX_RE.match(text)
    if match:
        body = match.group("body") or ""
        if match.group("meridiem"):
            hour = int(match.group("hour"))
            minute = int(match.group("minute") or 0)
            if not 1 <= hour <= 12:
                return body, -1, 0
            hour = hour % 12 + (12 if match.group("meridiem") == "pm" else 0)
        else:
            hour = int(match.group("hour24"))
            minute = int(match.group("minute24"))
        if hour > 23 or minute > 59:
            return body, -1, 0
        return body, hour, minute

    match = _AT_SUFFIX_RE.match(text)
    if match:
        body = match.group("body") or ""
        if match.group("word"):
            return body, 12 if match.group("word") == "noon" else 0, 0
        hour = int(match.group("hour"))
        if hour > 23:
            return body, -1, 0
        return body, hour, 0

    return None


def _classify_with_clock(text: str, reference: datetime, first_weekday: int) -> Optional[datetime]:
    split = _split_clock(text)
    if split is None:
        return None

    body, hour, minute = split
    if hour < 0:
        return None

    if body:
        base = _classify(body, reference, first_weekday)
        if base is None:
            return None
    else:
        base = reference

    return base.replace(hour=hour, minute=minute, second=0, microsecond=0)


def resolve(
    text: Optional[str],
    reference: datetime,
    week_start=WeekStart.LOCALE_DEFAULT,
    locale: Optional[DateLocale] = None,
) -> ParseOutcome:
    """
    Resolve a natural language date expression against `reference`.
    Returns Resolved(instant) or Unresolved; never raises for unmatched input.
    """
    normalized = normalize(text)
    if not normalized:
        return Unresolved(text or "")

    first_weekday = WeekStart(week_start).first_weekday(locale)

    instant = _classify(normalized, reference, first_weekday)
    if instant is None:
        instant = _classify_with_clock(normalized, reference, first_weekday)

    if instant is None:
        return Unresolved(text)
    return Resolved(instant)
