"""
dimensions.py — Canvas size of the composed figure.

The figure is a vertical stack: title, legend, grid, progress readout.
Auxiliary blocks always add to the height, whatever the grid direction;
only the grid itself swaps width and height when the direction changes.

The result is handed to the box renderer as its canvas size and must match
the composed tree exactly, otherwise the renderer clips or letterboxes.
"""

import math
from dataclasses import dataclass

from .grid_layout import GridDirection, grid_size
from .units import (
    LEGEND_EVENTS_PER_LINE_HORIZONTAL,
    LEGEND_EVENTS_PER_LINE_VERTICAL,
    LEGEND_LINE_HEIGHT,
    LEGEND_LINE_MARGIN,
    LEGEND_MARGIN_BOTTOM,
    MIN_CANVAS_WIDTH,
    PROGRESS_LINE_HEIGHT,
    PROGRESS_MARGIN_TOP,
    TITLE_LINE_HEIGHT,
    TITLE_MARGIN_BOTTOM,
)


@dataclass(frozen=True)
class CanvasSize:
    """Pixel size of the declared canvas."""
    width: int
    height: int


def title_block_height(show_title: bool) -> int:
    return TITLE_LINE_HEIGHT + TITLE_MARGIN_BOTTOM if show_title else 0


def progress_block_height(show_progress: bool) -> int:
    return PROGRESS_LINE_HEIGHT + PROGRESS_MARGIN_TOP if show_progress else 0


def legend_events_per_line(direction: GridDirection) -> int:
    """Wide (horizontal) calendars fit two legend entries per line."""
    if direction == GridDirection.HORIZONTAL:
        return LEGEND_EVENTS_PER_LINE_HORIZONTAL
    return LEGEND_EVENTS_PER_LINE_VERTICAL


def legend_line_count(number_of_events: int, direction: GridDirection) -> int:
    return math.ceil(number_of_events / legend_events_per_line(direction))


def legend_block_height(show_legend: bool, number_of_events: int, direction: GridDirection) -> int:
    """Lines plus margins between them plus one trailing margin; 0 when empty."""
    if not show_legend or number_of_events == 0:
        return 0

    lines = legend_line_count(number_of_events, direction)
    return LEGEND_LINE_HEIGHT * lines + LEGEND_LINE_MARGIN * (lines - 1) + LEGEND_MARGIN_BOTTOM


def has_text_blocks(config) -> bool:
    return (
        config.show_title
        or config.show_progress
        or (config.show_legend and len(config.events) > 0)
    )


def canvas_size(config) -> CanvasSize:
    """
    Compute the canvas size for a configuration.

    Args:
        config: A CalendarConfiguration (only layout fields are read)

    Returns:
        CanvasSize of grid plus every enabled auxiliary block
    """
    width, height = grid_size(config.number_of_years, config.direction)

    if has_text_blocks(config):
        width = max(width, MIN_CANVAS_WIDTH)

    height += title_block_height(config.show_title)
    height += legend_block_height(config.show_legend, len(config.events), config.direction)
    height += progress_block_height(config.show_progress)

    return CanvasSize(width=width, height=height)
