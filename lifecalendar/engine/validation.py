"""
validation.py — Structural checks for colors, fill rules and events.

Validators never repair their input: a list that is out of order or an
event that overlaps another is rejected, not sorted or clipped.
"""

import re
from typing import Mapping, Sequence

from .errors import ConfigurationError, InputError

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-f]{6}|[0-9a-f]{3})$", re.IGNORECASE)


# =============================================================================
# COLORS AND FILL RULES
# =============================================================================

def is_valid_color(color) -> bool:
    """True for `#abc` or `#aabbcc` (any case, no alpha channel)."""
    if not isinstance(color, str):
        return False
    return HEX_COLOR_PATTERN.match(color) is not None


def is_valid_fill_rule_list(rules: Sequence) -> bool:
    """
    Check an ordered fill rule list.

    Fails on an empty list, on any invalid color, or when `starting_from`
    is not strictly increasing between two neighbours.
    """
    if len(rules) == 0:
        return False

    for i, rule in enumerate(rules):
        if not is_valid_color(rule.color):
            return False

        if i >= 1 and rules[i - 1].starting_from >= rule.starting_from:
            return False

    return True


def validate_colors(colors: Mapping[str, str]) -> None:
    """
    Check named colors, e.g. `{"titleColor": "#fff"}`.

    Raises:
        ConfigurationError: naming the first invalid color
    """
    for name, color in colors.items():
        if not is_valid_color(color):
            raise ConfigurationError(f"Invalid color '{color}' for {name}")


# =============================================================================
# EVENTS
# =============================================================================

def is_valid_event(from_week: int, to_week: int) -> bool:
    """An event must not end before it starts nor start before birth."""
    return from_week <= to_week and from_week >= 0


def non_overlapping(a_from: int, a_to: int, b_from: int, b_to: int) -> bool:
    """
    True when A lies entirely before B, or A starts after B has ended.

    The predicate is asymmetric. Ranges sharing a boundary week, and any two
    ranges starting on the same week, count as overlapping.
    """
    return (a_from < b_from and a_to < b_from) or (a_from > b_from and a_from > b_to)


def validate_events(events: Sequence) -> None:
    """
    Validate normalized events, stopping at the first failure.

    Args:
        events: Objects with `name`, `from_week` and `to_week`

    Raises:
        InputError: naming the invalid event, or both overlapping events
    """
    for event in events:
        if not is_valid_event(event.from_week, event.to_week):
            raise InputError(
                f"Invalid event '{event.name}': it must start on or after the date "
                f"of birth and end on or after its start "
                f"(weeks {event.from_week} to {event.to_week})"
            )

    for i, a in enumerate(events):
        for b in events[i + 1:]:
            if not non_overlapping(a.from_week, a.to_week, b.from_week, b.to_week):
                raise InputError(
                    f"Event '{a.name}' (weeks {a.from_week} to {a.to_week}) overlaps "
                    f"with event '{b.name}' (weeks {b.from_week} to {b.to_week})"
                )
