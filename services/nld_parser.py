# FILE: services/nld_parser.py
"""
Parse → Format orchestration.

The only place that reads the wall clock and the active settings;
both are read once at the start of each call.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from config import get_settings
from core.outcome import instant_of
from core.week_start import WeekStart
from models.result import NLDResult
from models.settings import NLDSettings
from services.date_formatter import format_date, is_valid
from services.date_resolver import resolve
from services.locale import DateLocale

# -----------------------------
# Logging Setup
# -----------------------------
logger = logging.getLogger("nld_parser")


def get_now() -> datetime:
    """Reference instant for relative expressions (system-local wall clock)."""
    return datetime.now()


def get_utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse(
    text: str,
    pattern: Optional[str] = None,
    reference: Optional[datetime] = None,
    week_start: Optional[WeekStart] = None,
    settings: Optional[NLDSettings] = None,
    locale: Optional[DateLocale] = None,
) -> NLDResult:
    """
    Resolve `text` and render it with `pattern`.
    Unresolvable input is reported through NLDResult.valid, never raised.
    """
    settings = settings or get_settings()
    reference = reference or get_now()
    pattern = pattern or settings.date_format
    week_start = week_start or settings.week_start

    outcome = resolve(text, reference, week_start, locale)
    instant = instant_of(outcome)
    formatted_string = format_date(instant, pattern, locale)

    valid = is_valid(formatted_string)
    if not valid:
        logger.debug(f"Input date {text} can't be parsed by nldates")

    return NLDResult(
        date=instant,
        pattern=pattern,
        formatted_string=formatted_string,
        valid=valid,
    )


def parse_date(text: str, reference: Optional[datetime] = None) -> NLDResult:
    settings = get_settings()
    return parse(text, settings.date_format, reference, settings=settings)


def parse_time(text: str, reference: Optional[datetime] = None) -> NLDResult:
    settings = get_settings()
    return parse(text, settings.time_format, reference, settings=settings)


def format_instant(
    instant: Optional[datetime],
    pattern: Optional[str] = None,
    locale: Optional[DateLocale] = None,
) -> str:
    """Render an instant directly, without a parse step."""
    pattern = pattern or get_settings().date_format
    return format_date(instant, pattern, locale)
