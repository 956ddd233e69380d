"""
svg_renderer.py — SVG generation from a calendar box tree.

This renderer consumes the Box tree produced by the calendar generator and
produces SVG strings. It NEVER decides colors or cell counts; that's the
engine's job. It only places boxes and writes SVG elements.

Supported layout is the flexbox subset the engine emits:
- flex containers with flexDirection, gap, alignItems: center
- explicit width/height in pixels or "100%"
- marginTop / marginBottom / marginLeft / marginRight
- leaf boxes with backgroundColor and borderRadius
- single-line text with fontSize, lineHeight, color, fontFamily

There are no text metrics: text advance is estimated at 0.6 em per character.
"""

import base64
import re
from typing import Dict, List, Optional, Tuple
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element, SubElement

from .boxes import Box, RenderFont, RenderOptions


# =============================================================================
# CONSTANTS
# =============================================================================

SVG_NS = "http://www.w3.org/2000/svg"

DEFAULT_FONT_SIZE = 16
LINE_HEIGHT_RATIO = 1.2
CHAR_ADVANCE_EM = 0.6

# Styles inherited by descendants, as in CSS
INHERITED_STYLES = ("color", "fontFamily", "fontSize")

EMOJI_PATTERN = re.compile(
    "(?:"
    "[\U0001F1E6-\U0001F1FF]{2}"
    "|"
    "[\U00002600-\U000027BF\U0001F300-\U0001FAFF][\U0000FE0F\U0001F3FB-\U0001F3FF]?"
    "(?:\U0000200D[\U00002600-\U000027BF\U0001F300-\U0001FAFF][\U0000FE0F\U0001F3FB-\U0001F3FF]?)*"
    ")"
)

ROOT_DIMENSION_PATTERNS = (
    re.compile(r'\swidth="\d*"'),
    re.compile(r'\sheight="\d*"'),
)


# =============================================================================
# HELPERS
# =============================================================================

def format_px(value: float) -> str:
    """Integers stay integers, everything else gets 2 decimal places."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def resolve_length(value, available: float) -> Optional[float]:
    """Pixels for a style length; percentages resolve against `available`."""
    if value is None:
        return None
    if isinstance(value, str) and value.endswith("%"):
        return available * float(value[:-1]) / 100
    return float(value)


def margins(style: Dict) -> Tuple[float, float, float, float]:
    """(top, right, bottom, left) margins of a box."""
    return (
        float(style.get("marginTop", 0)),
        float(style.get("marginRight", 0)),
        float(style.get("marginBottom", 0)),
        float(style.get("marginLeft", 0)),
    )


def split_emoji(text: str) -> List[Tuple[bool, str]]:
    """Split text into (is_emoji, segment) runs."""
    segments = []
    position = 0
    for match in EMOJI_PATTERN.finditer(text):
        if match.start() > position:
            segments.append((False, text[position:match.start()]))
        segments.append((True, match.group()))
        position = match.end()
    if position < len(text):
        segments.append((False, text[position:]))
    return segments


def strip_svg_dimensions(svg: str) -> str:
    """
    Drop the root element's numeric width/height attributes.

    The viewBox is kept, so the embedding page can rescale the SVG freely.
    """
    for pattern in ROOT_DIMENSION_PATTERNS:
        svg = pattern.sub("", svg, count=1)
    return svg


# =============================================================================
# SVG RENDERER
# =============================================================================

class SVGBoxRenderer:
    """
    Renders a Box tree to SVG format.

    The renderer is stateless: each render() call creates a new SVG.
    """

    async def render(self, root: Box, options: RenderOptions) -> str:
        """
        Render a box tree onto a canvas of the declared size.

        Args:
            root: The box tree to render
            options: Canvas size, fonts and optional asset loader

        Returns:
            SVG content as string
        """
        svg = Element('svg')
        svg.set('xmlns', SVG_NS)
        svg.set('width', format_px(options.width))
        svg.set('height', format_px(options.height))
        svg.set('viewBox', f"0 0 {format_px(options.width)} {format_px(options.height)}")

        if options.fonts:
            self._add_font_faces(svg, options.fonts)

        content = SubElement(svg, 'g')
        content.set('id', 'calendar')

        top, right, bottom, left = margins(root.style)
        width = resolve_length(root.style.get('width'), options.width) or options.width
        height = resolve_length(root.style.get('height'), options.height) or options.height

        await self._render_box(
            content,
            root,
            left,
            top,
            width - left - right,
            height - top - bottom,
            inherited={},
            options=options,
        )

        return ET.tostring(svg, encoding='unicode')

    # =========================================================================
    # FONTS
    # =========================================================================

    def _add_font_faces(self, svg: Element, fonts: List[RenderFont]) -> None:
        """Embed every font as a base64 @font-face rule."""
        rules = []
        for font in fonts:
            data = base64.b64encode(font.data).decode('ascii')
            rules.append(
                f"@font-face {{ font-family: '{font.name}'; "
                f"src: url(data:font/ttf;base64,{data}); "
                f"font-weight: {font.weight}; font-style: {font.style}; }}"
            )

        style = SubElement(svg, 'style')
        style.text = "\n".join(rules)

    # =========================================================================
    # MEASUREMENT
    # =========================================================================

    def _inherit(self, box: Box, inherited: Dict) -> Dict:
        merged = dict(inherited)
        for key in INHERITED_STYLES:
            if key in box.style:
                merged[key] = box.style[key]
        return merged

    def _font_size(self, box: Box, inherited: Dict) -> float:
        return float(box.style.get('fontSize', inherited.get('fontSize', DEFAULT_FONT_SIZE)))

    def _measure(self, box: Box, available_w: float, available_h: float, inherited: Dict) -> Tuple[float, float]:
        """Border-box (width, height) of a node, margins excluded."""
        style = box.style
        width = resolve_length(style.get('width'), available_w)
        height = resolve_length(style.get('height'), available_h)

        if width is not None and height is not None:
            return width, height

        if box.is_text:
            font_size = self._font_size(box, inherited)
            content_w = len(box.children) * font_size * CHAR_ADVANCE_EM
            content_h = float(style.get('lineHeight', font_size * LINE_HEIGHT_RATIO))
        else:
            content_w, content_h = self._measure_children(box, available_w, available_h, inherited)

        return (
            width if width is not None else content_w,
            height if height is not None else content_h,
        )

    def _measure_children(self, box: Box, available_w: float, available_h: float, inherited: Dict) -> Tuple[float, float]:
        children = box.child_boxes
        if not children:
            return 0.0, 0.0

        inherited = self._inherit(box, inherited)
        is_row = self._is_row(box)
        gap = float(box.style.get('gap', 0))

        main, cross = 0.0, 0.0
        for child in children:
            w, h = self._outer_size(child, available_w, available_h, inherited)
            if is_row:
                main += w
                cross = max(cross, h)
            else:
                main += h
                cross = max(cross, w)
        main += gap * (len(children) - 1)

        return (main, cross) if is_row else (cross, main)

    def _outer_size(self, box: Box, available_w: float, available_h: float, inherited: Dict) -> Tuple[float, float]:
        top, right, bottom, left = margins(box.style)
        w, h = self._measure(box, available_w, available_h, inherited)
        return w + left + right, h + top + bottom

    def _is_row(self, box: Box) -> bool:
        if box.style.get('display') != 'flex':
            return False
        return box.style.get('flexDirection', 'row') == 'row'

    # =========================================================================
    # ELEMENT RENDERING
    # =========================================================================

    async def _render_box(
        self,
        parent: Element,
        box: Box,
        x: float,
        y: float,
        width: float,
        height: float,
        inherited: Dict,
        options: RenderOptions,
    ) -> None:
        """Render a node whose border box is already placed."""
        style = box.style
        inherited = self._inherit(box, inherited)

        if box.is_text:
            await self._render_text(parent, box, x, y, width, height, inherited, options)
            return

        if style.get('backgroundColor'):
            rect = SubElement(parent, 'rect')
            rect.set('x', format_px(x))
            rect.set('y', format_px(y))
            rect.set('width', format_px(width))
            rect.set('height', format_px(height))
            if style.get('borderRadius'):
                rect.set('rx', format_px(style['borderRadius']))
            rect.set('fill', style['backgroundColor'])

        children = box.child_boxes
        if not children:
            return

        is_row = self._is_row(box)
        gap = float(style.get('gap', 0))
        centered = style.get('alignItems') == 'center'

        cursor = x if is_row else y
        for child in children:
            top, right, bottom, left = margins(child.style)
            child_w, child_h = self._measure(child, width, height, inherited)

            if is_row:
                child_x = cursor + left
                cross_free = height - (child_h + top + bottom)
                child_y = y + top + (cross_free / 2 if centered else 0)
                cursor += left + child_w + right + gap
            else:
                child_y = cursor + top
                cross_free = width - (child_w + left + right)
                child_x = x + left + (cross_free / 2 if centered else 0)
                cursor += top + child_h + bottom + gap

            await self._render_box(parent, child, child_x, child_y, child_w, child_h, inherited, options)

    # =========================================================================
    # TEXT RENDERING
    # =========================================================================

    async def _render_text(
        self,
        parent: Element,
        box: Box,
        x: float,
        y: float,
        width: float,
        height: float,
        inherited: Dict,
        options: RenderOptions,
    ) -> None:
        """
        Render a single line of text, vertically centered in its box.

        Emoji graphemes become <image> elements when an asset loader
        supplies an image for them.
        """
        content = box.children
        if not content:
            return

        font_size = self._font_size(box, inherited)
        baseline_y = y + height / 2
        advance = font_size * CHAR_ADVANCE_EM

        cursor = x
        for is_emoji, segment in split_emoji(content):
            uri = None
            if is_emoji and options.load_additional_asset is not None:
                uri = await options.load_additional_asset('emoji', segment)

            if uri:
                image = SubElement(parent, 'image')
                image.set('href', uri)
                image.set('x', format_px(cursor))
                image.set('y', format_px(baseline_y - font_size / 2))
                image.set('width', format_px(font_size))
                image.set('height', format_px(font_size))
                cursor += font_size
                continue

            text_elem = SubElement(parent, 'text')
            text_elem.set('x', format_px(cursor))
            text_elem.set('y', format_px(baseline_y))
            text_elem.set('dominant-baseline', 'central')
            text_elem.set('font-size', format_px(font_size))
            text_elem.set('fill', inherited.get('color', '#000000'))
            if inherited.get('fontFamily'):
                text_elem.set('font-family', f"'{inherited['fontFamily']}', sans-serif")
            text_elem.text = segment
            cursor += len(segment) * advance


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

async def render_to_svg_string(root: Box, width: int, height: int) -> str:
    """Render a box tree with no fonts and no asset loader."""
    return await SVGBoxRenderer().render(root, RenderOptions(width=width, height=height))
