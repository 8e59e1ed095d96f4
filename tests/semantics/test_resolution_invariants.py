from datetime import datetime, timedelta

import pytest

from core.outcome import Unresolved, instant_of
from core.week_start import WeekStart
from services.calendar_math import start_of_day
from services.date_formatter import INVALID_DATE, format_date
from services.date_resolver import resolve


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def reference_points():
    """
    Every day of a leap year and the following year at a non-midnight time,
    plus a few far-away instants.
    """
    start = datetime(2020, 1, 1, 18, 5, 9)
    for offset in range(366 + 365):
        yield start + timedelta(days=offset)
    yield datetime(1901, 3, 1, 0, 0, 1)
    yield datetime(2399, 12, 31, 23, 59, 59)


REFERENCES = list(reference_points())


def _resolve(text, reference, week_start=WeekStart.LOCALE_DEFAULT):
    return instant_of(resolve(text, reference, week_start))


# ---------------------------------------------------------------------
# INVARIANTS
# ---------------------------------------------------------------------

def test_today_is_start_of_reference_day():
    for ref in REFERENCES:
        for week_start in WeekStart:
            assert _resolve("today", ref, week_start) == start_of_day(ref)


def test_tomorrow_is_today_plus_one_calendar_day():
    for ref in REFERENCES:
        today = _resolve("today", ref)
        tomorrow = _resolve("tomorrow", ref)
        assert tomorrow == today + timedelta(days=1)


def test_tomorrow_crosses_year_boundary():
    assert _resolve("tomorrow", datetime(2021, 12, 31, 22, 0)) == datetime(2022, 1, 1)


@pytest.mark.parametrize(
    "reference, expected",
    [
        (datetime(2021, 1, 31), datetime(2021, 2, 28)),
        (datetime(2020, 1, 31), datetime(2020, 2, 29)),
    ],
)
def test_next_month_clamps_to_month_end(reference, expected):
    for week_start in WeekStart:
        assert _resolve("next month", reference, week_start) == expected


def test_blank_input_is_unresolved():
    for ref in REFERENCES[:31]:
        assert isinstance(resolve("", ref, WeekStart.MONDAY), Unresolved)
        assert isinstance(resolve("   ", ref, WeekStart.MONDAY), Unresolved)


def test_bare_weekday_is_strictly_forward():
    for ref in REFERENCES:
        friday = _resolve("friday", ref)
        assert friday.weekday() == 4
        assert 1 <= (friday - start_of_day(ref)).days <= 7
        if ref.weekday() == 4:
            assert friday == start_of_day(ref) + timedelta(days=7)


def test_start_of_week_differs_by_convention_offset():
    for ref in REFERENCES:
        if ref.weekday() in (0, 6):
            # On one of the two boundaries
            continue
        monday_start = _resolve("start of this week", ref, WeekStart.MONDAY)
        sunday_start = _resolve("start of this week", ref, WeekStart.SUNDAY)
        assert monday_start - sunday_start == timedelta(days=1)


@pytest.mark.parametrize(
    "pattern",
    ["YYYY-MM-DD", "YYYY-MM-DD HH:mm:ss", "YYYY-MM-DDTHH:mm:ss", "MM/DD/YYYY", "MMMM D, YYYY"],
)
def test_literal_form_output_round_trips(pattern):
    for ref in REFERENCES[::7]:
        if "HH" in pattern:
            instant = ref.replace(microsecond=0)
        else:
            instant = start_of_day(ref)
        rendered = format_date(instant, pattern)
        # Any reference: literals never look at it
        assert _resolve(rendered, datetime(1970, 1, 1)) == instant


def test_invalid_instant_formats_to_sentinel_for_any_pattern():
    for pattern in ("YYYY", "[x]", "", "dddd", "HH:mm", "Invalid"):
        assert format_date(None, pattern) == INVALID_DATE


def test_resolution_is_deterministic():
    ref = datetime(2021, 6, 16, 14, 30)
    for text in ("next friday", "in 3 weeks", "end of next month", "tomorrow at 5pm"):
        assert resolve(text, ref, WeekStart.MONDAY) == resolve(text, ref, WeekStart.MONDAY)
