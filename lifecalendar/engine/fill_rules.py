"""
fill_rules.py — Run-length encoded coloring of the week grid.

A fill rule list is the engine's only color-assignment primitive: rule i
colors every week index in [rule[i].starting_from, rule[i+1].starting_from),
and the last rule is open-ended. Its size grows with the number of color
changes, not with the number of cells.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from .errors import ConfigurationError
from .timeline import NormalizedEvent
from .validation import is_valid_fill_rule_list

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FillRule:
    """Color every week from `starting_from` until the next rule."""
    starting_from: int
    color: str

    def to_dict(self) -> dict:
        return {"startingFrom": self.starting_from, "color": self.color}


def resolve_fill_rules(
    weeks_elapsed: int,
    filled_color: str,
    unfilled_color: str,
    events: Iterable[NormalizedEvent] = ()
) -> List[FillRule]:
    """
    Merge the elapsed/unelapsed split with event overlays.

    Insertion order matters: a later insert at an existing week replaces
    the earlier color. Events are applied in order, then the "now" marker.

    Args:
        weeks_elapsed: Weeks since birth (1-indexed)
        filled_color: Color of elapsed weeks
        unfilled_color: Color of weeks still to come
        events: Normalized events, already validated

    Returns:
        Fill rules sorted by `starting_from`

    Raises:
        ConfigurationError: if the merged rules are not a valid list
    """
    colors: Dict[int, str] = {0: filled_color}

    for event in events:
        # The overlay starts one week before the event's nominal start
        colors[event.from_week - 1] = event.color
        colors[event.to_week] = unfilled_color if event.to_week >= weeks_elapsed else filled_color

    colors[weeks_elapsed] = unfilled_color

    rules = [FillRule(starting_from=week, color=color) for week, color in sorted(colors.items())]

    if not is_valid_fill_rule_list(rules):
        raise ConfigurationError(
            f"Invalid cell fill rules: {[rule.to_dict() for rule in rules]}"
        )

    logger.debug(f"Resolved {len(rules)} fill rules for week {weeks_elapsed}")
    return rules


def color_at(rules: Sequence[FillRule], index: int) -> str:
    """Color of the last rule starting at or before `index`."""
    if not rules:
        raise ConfigurationError("There must be at least one cell fill rule but found none")

    color = rules[0].color
    for rule in rules:
        if rule.starting_from > index:
            break
        color = rule.color
    return color
