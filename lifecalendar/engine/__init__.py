# Life Calendar Composition Engine
#
# CalendarGenerator lives in .calendar_generator and is not re-exported here:
# it depends on lifecalendar.dsl.schema, which itself imports this package.

from .units import (
    NUMBER_OF_WEEKS_IN_YEAR,
    GRID_CELL_SIZE,
    GRID_CELL_MARGIN,
    axis_extent,
)

from .errors import (
    CalendarError,
    ConfigurationError,
    InputError,
    ProviderError,
)

from .validation import (
    is_valid_color,
    is_valid_fill_rule_list,
    is_valid_event,
    non_overlapping,
    validate_colors,
    validate_events,
)

from .timeline import (
    NormalizedEvent,
    to_instant,
    weeks_elapsed,
    weeks_since_birth,
    normalize_event,
)

from .fill_rules import (
    FillRule,
    resolve_fill_rules,
    color_at,
)

from .boxes import (
    Box,
    BoxKind,
    FlexDirection,
    BoxRenderer,
    RenderFont,
    RenderOptions,
    make_box,
    make_flex_container,
    make_text,
)

from .grid_layout import (
    GridDirection,
    grid_cell_counts,
    grid_size,
    iter_cell_colors,
    compose_grid,
)

from .dimensions import (
    CanvasSize,
    canvas_size,
    title_block_height,
    progress_block_height,
    legend_line_count,
    legend_block_height,
)

from .svg_renderer import (
    SVGBoxRenderer,
    render_to_svg_string,
    strip_svg_dimensions,
)

__all__ = [
    # Units
    'NUMBER_OF_WEEKS_IN_YEAR',
    'GRID_CELL_SIZE',
    'GRID_CELL_MARGIN',
    'axis_extent',
    # Errors
    'CalendarError',
    'ConfigurationError',
    'InputError',
    'ProviderError',
    # Validation
    'is_valid_color',
    'is_valid_fill_rule_list',
    'is_valid_event',
    'non_overlapping',
    'validate_colors',
    'validate_events',
    # Timeline
    'NormalizedEvent',
    'to_instant',
    'weeks_elapsed',
    'weeks_since_birth',
    'normalize_event',
    # Fill rules
    'FillRule',
    'resolve_fill_rules',
    'color_at',
    # Boxes
    'Box',
    'BoxKind',
    'FlexDirection',
    'BoxRenderer',
    'RenderFont',
    'RenderOptions',
    'make_box',
    'make_flex_container',
    'make_text',
    # Grid
    'GridDirection',
    'grid_cell_counts',
    'grid_size',
    'iter_cell_colors',
    'compose_grid',
    # Dimensions
    'CanvasSize',
    'canvas_size',
    'title_block_height',
    'progress_block_height',
    'legend_line_count',
    'legend_block_height',
    # Rendering
    'SVGBoxRenderer',
    'render_to_svg_string',
    'strip_svg_dimensions',
]
