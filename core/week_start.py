# core/week_start.py
from enum import Enum


# Python weekday numbers (Monday == 0)
MONDAY = 0
SATURDAY = 5
SUNDAY = 6


class WeekStart(str, Enum):
    """
    Which weekday opens the week.
    Only week-boundary phrases depend on it.
    """

    SUNDAY = "sunday"
    MONDAY = "monday"
    SATURDAY = "saturday"
    LOCALE_DEFAULT = "locale-default"

    # -----------------------------
    # Semantic helpers (SAFE)
    # -----------------------------
    def first_weekday(self, locale=None) -> int:
        if self is WeekStart.SUNDAY:
            return SUNDAY
        if self is WeekStart.MONDAY:
            return MONDAY
        if self is WeekStart.SATURDAY:
            return SATURDAY

        if locale is None:
            from services.locale import default_locale

            locale = default_locale()
        return locale.first_weekday
