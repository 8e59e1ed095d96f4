# core/outcome.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True)
class Resolved:
    """The input matched a pattern and produced a concrete instant."""

    instant: datetime


@dataclass(frozen=True)
class Unresolved:
    """
    No pattern matched.
    This is a normal outcome, not a failure signal.
    """

    text: str = ""


ParseOutcome = Union[Resolved, Unresolved]


def instant_of(outcome: ParseOutcome) -> Optional[datetime]:
    """Unwrap an outcome; None is the invalid-instant sentinel."""
    if isinstance(outcome, Resolved):
        return outcome.instant
    return None
