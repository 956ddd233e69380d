"""
units.py — Calendar constants and pixel measurements.

This is the foundation module. ALL sizing math uses these constants.
Never hardcode pixel values anywhere else in the codebase.

All values are in PIXELS of the declared canvas.
"""

from datetime import timedelta

# =============================================================================
# TIME
# =============================================================================

NUMBER_OF_WEEKS_IN_YEAR = 52
ONE_WEEK = timedelta(weeks=1)

# =============================================================================
# GRID
# =============================================================================

GRID_CELL_SIZE = 5
GRID_CELL_MARGIN = 1          # Gap between cells and between lines
GRID_CELL_RADIUS = 1

# =============================================================================
# AUXILIARY BLOCKS
# =============================================================================

# Title (above the grid)
TITLE_FONT_SIZE = 18
TITLE_LINE_HEIGHT = 24
TITLE_MARGIN_BOTTOM = 8

# Legend (between title and grid)
LEGEND_FONT_SIZE = 12
LEGEND_LINE_HEIGHT = 16
LEGEND_LINE_MARGIN = 4        # Between two legend lines
LEGEND_MARGIN_BOTTOM = 8      # After the last legend line
LEGEND_ITEM_GAP = 12          # Between two events on the same line
LEGEND_SWATCH_SIZE = 8
LEGEND_SWATCH_GAP = 4
LEGEND_EVENTS_PER_LINE_HORIZONTAL = 2
LEGEND_EVENTS_PER_LINE_VERTICAL = 1

# Progress readout (below the grid)
PROGRESS_FONT_SIZE = 12
PROGRESS_LINE_HEIGHT = 16
PROGRESS_MARGIN_TOP = 8

# Canvas never narrower than this once any text block is shown
MIN_CANVAS_WIDTH = 320


def axis_extent(count: int) -> int:
    """Pixel length of `count` cells laid out with gaps between them."""
    if count <= 0:
        return 0
    return GRID_CELL_SIZE * count + GRID_CELL_MARGIN * (count - 1)
