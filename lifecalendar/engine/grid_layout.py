"""
grid_layout.py — Compose the week grid from fill rules.

The grid is `number_of_years` parallel lines of 52 cells:
- horizontal: lines are columns running left-to-right, weeks run top-to-bottom
- vertical: lines are rows running top-to-bottom, weeks run left-to-right

Cells are colored by a single forward-only walk over the fill rules, so the
cost is O(cells + rules) regardless of how many rules there are.
"""

from enum import Enum
from typing import Iterator, Sequence, Tuple

from .boxes import Box, FlexDirection, make_box, make_flex_container
from .errors import ConfigurationError
from .fill_rules import FillRule
from .validation import is_valid_fill_rule_list
from .units import (
    GRID_CELL_MARGIN,
    GRID_CELL_RADIUS,
    GRID_CELL_SIZE,
    NUMBER_OF_WEEKS_IN_YEAR,
    axis_extent,
)


class GridDirection(str, Enum):
    """Orientation of the year axis."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


# =============================================================================
# GRID GEOMETRY
# =============================================================================

def grid_cell_counts(number_of_years: int, direction: GridDirection) -> Tuple[int, int]:
    """Number of cells along (x, y)."""
    if direction == GridDirection.HORIZONTAL:
        return number_of_years, NUMBER_OF_WEEKS_IN_YEAR
    return NUMBER_OF_WEEKS_IN_YEAR, number_of_years


def grid_size(number_of_years: int, direction: GridDirection) -> Tuple[int, int]:
    """Pixel (width, height) of the grid alone."""
    cells_x, cells_y = grid_cell_counts(number_of_years, direction)
    return axis_extent(cells_x), axis_extent(cells_y)


# =============================================================================
# COMPOSITION
# =============================================================================

def _check_rules(fill_rules: Sequence[FillRule]) -> None:
    if len(fill_rules) == 0:
        raise ConfigurationError("There must be at least one cell fill rule but found none")

    if not is_valid_fill_rule_list(fill_rules):
        raise ConfigurationError(
            f"Invalid cell fill rules: {[rule.to_dict() for rule in fill_rules]}"
        )


def iter_cell_colors(number_of_years: int, fill_rules: Sequence[FillRule]) -> Iterator[str]:
    """
    Yield the color of every cell in global index order (year * 52 + week).

    The rule pointer only moves forward and is never reset.

    Raises:
        ConfigurationError: if the rule list is empty or invalid
    """
    _check_rules(fill_rules)
    return _walk_rules(number_of_years, fill_rules)


def _walk_rules(number_of_years: int, fill_rules: Sequence[FillRule]) -> Iterator[str]:
    current = 0
    last = len(fill_rules) - 1

    for index in range(number_of_years * NUMBER_OF_WEEKS_IN_YEAR):
        while current < last and fill_rules[current + 1].starting_from <= index:
            current += 1
        yield fill_rules[current].color


def make_cell(fill_color: str) -> Box:
    return make_box(
        background_color=fill_color,
        width=GRID_CELL_SIZE,
        height=GRID_CELL_SIZE,
        border_radius=GRID_CELL_RADIUS,
    )


def compose_grid(
    number_of_years: int,
    direction: GridDirection,
    fill_rules: Sequence[FillRule]
) -> Box:
    """
    Build the grid box tree.

    Args:
        number_of_years: Number of lines (one per year of life)
        direction: Orientation of the year axis
        fill_rules: Validated, sorted fill rules

    Returns:
        A flex container holding `number_of_years` lines of 52 cells

    Raises:
        ConfigurationError: if the rule list is empty or invalid
    """
    is_horizontal = direction == GridDirection.HORIZONTAL
    width, height = grid_size(number_of_years, direction)

    grid = make_flex_container(
        FlexDirection.ROW if is_horizontal else FlexDirection.COLUMN,
        gap=GRID_CELL_MARGIN,
        width=width,
        height=height,
    )

    colors = iter_cell_colors(number_of_years, fill_rules)

    for _ in range(number_of_years):
        line = make_flex_container(
            FlexDirection.COLUMN if is_horizontal else FlexDirection.ROW,
            gap=GRID_CELL_MARGIN,
        )
        for _ in range(NUMBER_OF_WEEKS_IN_YEAR):
            line.append(make_cell(next(colors)))
        grid.append(line)

    return grid
