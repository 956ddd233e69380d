"""
timeline.py — Project instants into "weeks since birth".

Week offsets are the shared time unit of the engine: fill rules, events and
the "now" marker all live in this space. Offsets are 1-indexed, so the first
week of life is week 1.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Union

from .errors import InputError
from .units import ONE_WEEK

Instant = Union[date, datetime]


@dataclass(frozen=True)
class NormalizedEvent:
    """An event projected into week-offset space."""
    name: str
    from_week: int
    to_week: int
    color: str


def to_instant(value: Instant) -> datetime:
    """Dates become midnight UTC; naive datetimes are taken as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def weeks_elapsed(from_instant: Instant, to_instant_: Instant) -> int:
    """floor((to - from) / 7 days) + 1"""
    return (to_instant(to_instant_) - to_instant(from_instant)) // ONE_WEEK + 1


def weeks_since_birth(date_of_birth: Instant, now: Instant) -> int:
    """
    Elapsed weeks between birth and now.

    Raises:
        InputError: if the date of birth lies in the future
    """
    birth = to_instant(date_of_birth)
    current = to_instant(now)

    if current < birth:
        raise InputError(
            f"Invalid date of birth {date_of_birth.isoformat()}: it is in the future"
        )

    return weeks_elapsed(birth, current)


def normalize_event(date_of_birth: Instant, event) -> NormalizedEvent:
    """Project an event's boundaries relative to the date of birth (no range checks)."""
    return NormalizedEvent(
        name=event.name,
        from_week=weeks_elapsed(date_of_birth, event.from_date),
        to_week=weeks_elapsed(date_of_birth, event.to_date),
        color=event.color,
    )
