"""
test_calendar_generator.py — Tests for calendar composition and generation.

Tests:
- Block order and composition for one snapshot
- Cell colors in the rendered SVG
- Embedded fonts and emoji images
- Error propagation from inputs and providers
"""

import asyncio
from xml.etree import ElementTree as ET

import pytest

from lifecalendar.dsl.schema import CalendarConfiguration
from lifecalendar.engine.calendar_generator import CalendarGenerator, progress_text
from lifecalendar.engine.errors import ConfigurationError, InputError, ProviderError

from conftest import NOW, FakeEmojiResolver, FakeFontProvider, event_dict

SVG = "{http://www.w3.org/2000/svg}"
PARTY = "\U0001F389"

# 2000-01-01 to 2024-06-15 12:00 is 1276 whole weeks and a half day
WEEKS_AT_NOW = 1277


def config(**partial) -> CalendarConfiguration:
    return CalendarConfiguration.from_partial({"dateOfBirth": "2000-01-01", **partial})


def generate(generator: CalendarGenerator, **partial):
    return asyncio.run(generator.generate(config(**partial), now=NOW))


def fills(svg: str) -> list[str]:
    return [rect.get("fill") for rect in ET.fromstring(svg).iter(f"{SVG}rect")]


# =============================================================================
# PROGRESS
# =============================================================================

class TestProgressText:
    """Test the progress caption."""

    def test_format(self) -> None:
        """Test the caption format."""
        assert progress_text(WEEKS_AT_NOW, 100) == "1277 / 5200 weeks (24.56%)"

    def test_clamped_to_grid(self) -> None:
        """Test that lived weeks are clamped to the grid."""
        assert progress_text(9000, 100) == "5200 / 5200 weeks (100.00%)"


# =============================================================================
# COMPOSITION
# =============================================================================

class TestCompose:
    """Test the composed box tree for one snapshot."""

    def test_grid_only(self, generator) -> None:
        """Test a calendar with only the grid."""
        composition = generator.compose(config(), now=NOW)

        assert composition.weeks_elapsed == WEEKS_AT_NOW
        assert len(composition.root.child_boxes) == 1
        assert composition.root.style["width"] == composition.size.width == 599
        assert composition.root.style["height"] == composition.size.height == 311

    def test_block_order(self, generator) -> None:
        """Test block order."""
        composition = generator.compose(
            config(showTitle=True, showLegend=True, showProgress=True, events=[event_dict("Trip", 5, 8)]),
            now=NOW,
        )
        title, legend, grid, progress = composition.root.child_boxes

        assert title.children == "Life Calendar"
        assert legend.style["flexDirection"] == "column"
        assert len(grid.child_boxes) == 100
        assert progress.children == "1277 / 5200 weeks (24.56%)"

    def test_legend_needs_events(self, generator) -> None:
        """Test legend needs events."""
        composition = generator.compose(config(showLegend=True), now=NOW)
        assert len(composition.root.child_boxes) == 1

    def test_legend_lines_per_direction(self, generator) -> None:
        """Test legend lines per direction."""
        events = [event_dict(f"E{i}", 10 * i + 1, 10 * i + 5) for i in range(3)]

        horizontal = generator.compose(config(showLegend=True, events=events), now=NOW)
        vertical = generator.compose(config(showLegend=True, events=events, direction="vertical"), now=NOW)

        assert len(horizontal.root.child_boxes[0].child_boxes) == 2
        assert len(vertical.root.child_boxes[0].child_boxes) == 3

    def test_fill_rules(self, generator) -> None:
        """Test the resolved fill rules."""
        composition = generator.compose(config(events=[event_dict("Trip", 5, 8)]), now=NOW)
        pairs = [(rule.starting_from, rule.color) for rule in composition.fill_rules]

        assert pairs == [(0, "#ffffff"), (4, "#ff0000"), (8, "#ffffff"), (WEEKS_AT_NOW, "#3f3f46")]

    def test_uses_current_configuration_by_default(self, generator) -> None:
        """Test uses current configuration by default."""
        generator.update_configurations({"numberOfYears": 10})
        assert generator.compose(now=NOW).size.width == 59


# =============================================================================
# GENERATION
# =============================================================================

class TestGenerate:
    """Test rendered output."""

    def test_cell_count(self, generator) -> None:
        """Test the number of rendered cells."""
        result = generate(generator)
        assert len(fills(result.result)) == 5200

    def test_root_size_is_stripped(self, generator) -> None:
        """Test root size is stripped."""
        result = generate(generator)
        root = ET.fromstring(result.result)

        assert root.get("width") is None
        assert root.get("height") is None
        assert root.get("viewBox") == "0 0 599 311"
        assert (result.width, result.height) == (599, 311)

    def test_lived_weeks_are_filled(self, generator) -> None:
        """Test lived weeks are filled."""
        colors = fills(generate(generator).result)

        assert colors.count("#ffffff") == WEEKS_AT_NOW
        assert colors.count("#3f3f46") == 5200 - WEEKS_AT_NOW
        assert colors[WEEKS_AT_NOW - 1] == "#ffffff"
        assert colors[WEEKS_AT_NOW] == "#3f3f46"

    def test_event_cells(self, generator) -> None:
        """Test the colors of an event's cells."""
        colors = fills(generate(generator, events=[event_dict("Trip", 5, 8)]).result)

        assert colors[3] == "#ffffff"
        assert colors[4:8] == ["#ff0000"] * 4
        assert colors[8] == "#ffffff"

    def test_text_blocks(self, generator) -> None:
        """Test text blocks."""
        svg = generate(generator, showTitle=True, title="My life", showProgress=True).result
        texts = [element.text for element in ET.fromstring(svg).iter(f"{SVG}text")]

        assert texts == ["My life", "1277 / 5200 weeks (24.56%)"]

    def test_does_not_mutate_configuration(self, generator) -> None:
        """Test does not mutate configuration."""
        generate(generator, numberOfYears=10)
        assert generator.configurations.number_of_years == 100


class TestGenerateErrors:
    """Test error propagation."""

    def test_future_birth(self, generator) -> None:
        """Test that a birth date in the future is rejected."""
        with pytest.raises(InputError, match="in the future"):
            generate(generator, dateOfBirth="2030-01-01")

    def test_overlapping_events(self, generator) -> None:
        """Test that overlapping events are rejected."""
        events = [event_dict("A", 5, 8), event_dict("B", 7, 10)]
        with pytest.raises(InputError, match="overlaps"):
            generate(generator, events=events)

    def test_event_ending_before_start(self, generator) -> None:
        """Test event ending before start."""
        with pytest.raises(InputError, match="Invalid event"):
            generate(generator, events=[event_dict("Backwards", 8, 5)])

    def test_bad_color(self, generator) -> None:
        """Test that an invalid cell color is rejected."""
        with pytest.raises(ConfigurationError, match="Invalid cell fill rules"):
            generate(generator, filledCellColor="not a color")

    @pytest.mark.parametrize("key", ["titleColor", "legendColor", "progressColor"])
    def test_bad_text_color(self, generator, key) -> None:
        """Test that an invalid text block color is rejected."""
        with pytest.raises(ConfigurationError, match=key):
            generate(generator, **{key: "rgb(0, 0, 0)"})


# =============================================================================
# COLLABORATORS
# =============================================================================

class TestFonts:
    """Test fonts loaded through the font provider."""

    def test_font_is_embedded(self) -> None:
        """Test font is embedded."""
        provider = FakeFontProvider()
        generator = CalendarGenerator(font_provider=provider)

        svg = generate(generator, fontFamily="Roboto", fontVariant="italic").result

        assert provider.loaded == [("Roboto", "italic")]
        assert "Zm9udC1ieXRlcw==" in svg
        assert "font-style: italic" in svg

    def test_catalog_fetched_once(self) -> None:
        """Test that the font catalog is fetched only once."""
        provider = FakeFontProvider()
        generator = CalendarGenerator(font_provider=provider)

        generate(generator)
        generate(generator)

        assert provider.fetch_calls == 1
        assert set(generator.available_fonts) == {"Inter", "Roboto"}

    def test_provider_failure_propagates(self) -> None:
        """Test provider failure propagates."""
        generator = CalendarGenerator(font_provider=FakeFontProvider(fail_on_load=True))
        with pytest.raises(ProviderError):
            generate(generator)

    def test_no_provider_no_fonts(self, generator) -> None:
        """Test rendering without a font provider."""
        svg = generate(generator).result
        assert "@font-face" not in svg
        assert generator.available_fonts == {}


class TestEmoji:
    """Test emoji images."""

    def test_emoji_support(self) -> None:
        """Test emoji images when emoji support is on."""
        resolver = FakeEmojiResolver()
        generator = CalendarGenerator(emoji_resolver=resolver)

        svg = generate(generator, showTitle=True, title=f"Party {PARTY}", emojiSupport=True).result

        assert resolver.requested == [PARTY]
        assert 'href="data:image/svg+xml,fake"' in svg

    def test_emoji_support_disabled(self) -> None:
        """Test that emoji stay text when emoji support is off."""
        resolver = FakeEmojiResolver()
        generator = CalendarGenerator(emoji_resolver=resolver)

        svg = generate(generator, showTitle=True, title=f"Party {PARTY}").result

        assert resolver.requested == []
        assert "<image" not in svg
