# core/parse_mode.py
from enum import Enum


class ParseMode(str, Enum):
    """
    How a parsed selection is written back.
    """

    REPLACE = "replace"
    LINK = "link"
    CLEAN = "clean"
    TIME = "time"

    # -----------------------------
    # Semantic helpers (SAFE)
    # -----------------------------
    def uses_time_format(self) -> bool:
        return self is ParseMode.TIME


class InsertMode(str, Enum):
    NOW = "now"
    NOW_UTC = "now_utc"
    DATE = "date"
    TIME = "time"

    def is_utc(self) -> bool:
        return self is InsertMode.NOW_UTC
