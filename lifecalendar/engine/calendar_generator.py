"""
calendar_generator.py — Compose and render a life calendar.

Pipeline for one call:
1. weeks since birth (rejects a birth date in the future)
2. normalize and validate events
3. resolve fill rules
4. compose the grid and the auxiliary blocks into one box tree
5. size the canvas, load fonts, render, strip the root's pixel size

compose() is a pure function of its inputs. generate() adds the I/O owned
by collaborators (font provider, emoji resolver, box renderer), awaited one
after the other.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Mapping, Optional

from lifecalendar.dsl.schema import CalendarConfiguration
from lifecalendar.providers.font_loader import parse_font_variant

from .boxes import Box, BoxRenderer, FlexDirection, RenderFont, RenderOptions, make_box, make_flex_container, make_text
from .dimensions import CanvasSize, canvas_size, legend_events_per_line
from .fill_rules import FillRule, resolve_fill_rules
from .grid_layout import compose_grid
from .svg_renderer import SVGBoxRenderer, strip_svg_dimensions
from .timeline import NormalizedEvent, normalize_event, weeks_since_birth
from .units import (
    GRID_CELL_RADIUS,
    LEGEND_FONT_SIZE,
    LEGEND_ITEM_GAP,
    LEGEND_LINE_HEIGHT,
    LEGEND_LINE_MARGIN,
    LEGEND_MARGIN_BOTTOM,
    LEGEND_SWATCH_GAP,
    LEGEND_SWATCH_SIZE,
    NUMBER_OF_WEEKS_IN_YEAR,
    PROGRESS_FONT_SIZE,
    PROGRESS_LINE_HEIGHT,
    PROGRESS_MARGIN_TOP,
    TITLE_FONT_SIZE,
    TITLE_LINE_HEIGHT,
    TITLE_MARGIN_BOTTOM,
)
from .validation import validate_colors, validate_events

logger = logging.getLogger(__name__)


@dataclass
class Composition:
    """Everything derived from one configuration before rendering."""
    root: Box
    size: CanvasSize
    fill_rules: List[FillRule]
    weeks_elapsed: int
    events: List[NormalizedEvent] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Rendered calendar and the canvas it was rendered on."""
    result: str
    width: int
    height: int


def progress_text(weeks_elapsed: int, number_of_years: int) -> str:
    """e.g. "1234 / 5200 weeks (23.73%)"; lived weeks never exceed the grid."""
    total = number_of_years * NUMBER_OF_WEEKS_IN_YEAR
    lived = min(weeks_elapsed, total)
    return f"{lived} / {total} weeks ({lived / total * 100:.2f}%)"


# =============================================================================
# AUXILIARY BLOCKS
# =============================================================================

def compose_title(config: CalendarConfiguration) -> Box:
    return make_text(
        config.title,
        color=config.title_color,
        fontSize=TITLE_FONT_SIZE,
        lineHeight=TITLE_LINE_HEIGHT,
        height=TITLE_LINE_HEIGHT,
        marginBottom=TITLE_MARGIN_BOTTOM,
    )


def compose_legend(config: CalendarConfiguration) -> Box:
    """Events with their colors, one or two per line depending on direction."""
    per_line = legend_events_per_line(config.direction)
    events = list(config.events)

    legend = make_flex_container(
        FlexDirection.COLUMN,
        gap=LEGEND_LINE_MARGIN,
        marginBottom=LEGEND_MARGIN_BOTTOM,
        alignItems="center",
    )

    for start in range(0, len(events), per_line):
        line = make_flex_container(
            FlexDirection.ROW,
            gap=LEGEND_ITEM_GAP,
            height=LEGEND_LINE_HEIGHT,
            alignItems="center",
        )
        for event in events[start:start + per_line]:
            swatch = make_box(
                background_color=event.color,
                width=LEGEND_SWATCH_SIZE,
                height=LEGEND_SWATCH_SIZE,
                border_radius=GRID_CELL_RADIUS,
            )
            label = make_text(
                event.name,
                color=config.legend_color,
                fontSize=LEGEND_FONT_SIZE,
                lineHeight=LEGEND_LINE_HEIGHT,
            )
            line.append(make_flex_container(
                FlexDirection.ROW,
                gap=LEGEND_SWATCH_GAP,
                alignItems="center",
                children=[swatch, label],
            ))
        legend.append(line)

    return legend


def compose_progress(config: CalendarConfiguration, weeks_elapsed: int) -> Box:
    return make_text(
        progress_text(weeks_elapsed, config.number_of_years),
        color=config.progress_color,
        fontSize=PROGRESS_FONT_SIZE,
        lineHeight=PROGRESS_LINE_HEIGHT,
        height=PROGRESS_LINE_HEIGHT,
        marginTop=PROGRESS_MARGIN_TOP,
    )


def compose_calendar(config: CalendarConfiguration, now: datetime) -> Composition:
    """
    Compose a calendar for one configuration snapshot.

    Raises:
        InputError: future birth date, invalid or overlapping events
        ConfigurationError: invalid text colors, or invalid colors in the
            resolved fill rules
    """
    validate_colors({
        "titleColor": config.title_color,
        "legendColor": config.legend_color,
        "progressColor": config.progress_color,
    })

    weeks = weeks_since_birth(config.date_of_birth, now)

    events = [normalize_event(config.date_of_birth, event) for event in config.events]
    validate_events(events)

    fill_rules = resolve_fill_rules(
        weeks,
        config.filled_cell_color,
        config.unfilled_cell_color,
        events,
    )

    size = canvas_size(config)
    root = make_flex_container(
        FlexDirection.COLUMN,
        width=size.width,
        height=size.height,
        alignItems="center",
        fontFamily=config.font_family,
    )

    if config.show_title:
        root.append(compose_title(config))

    if config.show_legend and config.events:
        root.append(compose_legend(config))

    root.append(compose_grid(config.number_of_years, config.direction, fill_rules))

    if config.show_progress:
        root.append(compose_progress(config, weeks))

    return Composition(
        root=root,
        size=size,
        fill_rules=fill_rules,
        weeks_elapsed=weeks,
        events=events,
    )


# =============================================================================
# GENERATOR
# =============================================================================

class CalendarGenerator:
    """
    Holds the current configuration and the collaborators used to render it.

    The configuration is replaced as a whole on every update, and compose()
    and generate() accept an explicit snapshot, so concurrent renders never
    share mutable state.
    """

    def __init__(
        self,
        font_provider=None,
        renderer: Optional[BoxRenderer] = None,
        emoji_resolver=None,
        configurations: Optional[CalendarConfiguration] = None,
    ):
        """
        Args:
            font_provider: Object with fetch_fonts(), available_fonts and
                load_font(family, variant); None renders without fonts
            renderer: Box renderer, defaults to SVGBoxRenderer
            emoji_resolver: Object with resolve(grapheme); None disables emoji images
            configurations: Initial configuration, defaults to CalendarConfiguration()
        """
        self.font_provider = font_provider
        self.renderer = renderer or SVGBoxRenderer()
        self.emoji_resolver = emoji_resolver
        self._configurations = configurations or CalendarConfiguration()
        self._is_initialized = False

    @property
    def configurations(self) -> CalendarConfiguration:
        return self._configurations

    @property
    def available_fonts(self) -> dict:
        if self.font_provider is None:
            return {}
        return self.font_provider.available_fonts

    def update_configurations(self, partial: Mapping) -> CalendarConfiguration:
        """Merge a partial configuration over the current one."""
        self._configurations = self._configurations.merged(partial)
        return self._configurations

    async def initialize(self) -> None:
        """Fetch the font catalog once."""
        if self._is_initialized:
            return

        if self.font_provider is not None:
            await self.font_provider.fetch_fonts()

        self._is_initialized = True

    def compose(
        self,
        configurations: Optional[CalendarConfiguration] = None,
        now: Optional[datetime] = None,
    ) -> Composition:
        config = configurations or self._configurations
        return compose_calendar(config, now or datetime.now(timezone.utc))

    async def generate(
        self,
        configurations: Optional[CalendarConfiguration] = None,
        now: Optional[datetime] = None,
    ) -> GenerationResult:
        """
        Compose and render a calendar.

        Args:
            configurations: Snapshot to render, defaults to the current one
            now: Reference instant, defaults to the current UTC time

        Returns:
            GenerationResult whose SVG has no root width/height attributes

        Raises:
            InputError, ConfigurationError: from composition
            ProviderError: from the font provider or emoji resolver
        """
        config = configurations or self._configurations
        composition = self.compose(config, now)

        fonts = await self._load_fonts(config)

        load_additional_asset = None
        if config.emoji_support and self.emoji_resolver is not None:
            load_additional_asset = self._load_emoji

        svg = await self.renderer.render(
            composition.root,
            RenderOptions(
                width=composition.size.width,
                height=composition.size.height,
                fonts=fonts,
                load_additional_asset=load_additional_asset,
            ),
        )

        logger.info(
            f"Generated calendar: week {composition.weeks_elapsed}, "
            f"{len(composition.fill_rules)} fill rules, "
            f"{composition.size.width}x{composition.size.height}px"
        )

        return GenerationResult(
            result=strip_svg_dimensions(svg),
            width=composition.size.width,
            height=composition.size.height,
        )

    async def _load_fonts(self, config: CalendarConfiguration) -> List[RenderFont]:
        if self.font_provider is None:
            return []

        await self.initialize()

        data = await self.font_provider.load_font(config.font_family, config.font_variant)
        variant = parse_font_variant(config.font_variant)

        return [RenderFont(name=config.font_family, data=data, weight=variant.weight, style=variant.style)]

    async def _load_emoji(self, code: str, segment: str) -> Optional[str]:
        if code != "emoji":
            return None
        return await self.emoji_resolver.resolve(segment)
