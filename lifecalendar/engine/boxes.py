"""
boxes.py — The contract between the calendar engine and box renderers.

The engine outputs a tree of Box nodes. Renderers (SVG, or any external
flexbox rasterizer) consume it. They NEVER decide colors or counts.

A node is a tagged variant: a BOX holds child nodes, a TEXT holds a string.
All sizes are in pixels of the declared canvas.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union


class BoxKind(Enum):
    """Kinds of nodes in the box tree."""
    BOX = "box"     # Container or leaf rectangle
    TEXT = "text"   # Single line of text


class FlexDirection(Enum):
    """Main axis of a flex container."""
    ROW = "row"
    COLUMN = "column"


@dataclass
class Box:
    """
    One node of the box tree.

    `style` uses CSS-like camelCase keys (backgroundColor, flexDirection,
    gap, width, height, marginTop...) so the tree can be handed to any
    flexbox renderer unchanged.
    """
    kind: BoxKind
    style: Dict[str, Any] = field(default_factory=dict)
    children: Union[List["Box"], str] = field(default_factory=list)

    @property
    def is_text(self) -> bool:
        return self.kind == BoxKind.TEXT

    @property
    def child_boxes(self) -> List["Box"]:
        """Child nodes, or an empty list for text nodes."""
        if isinstance(self.children, str):
            return []
        return self.children

    def append(self, child: "Box") -> None:
        if isinstance(self.children, str):
            raise TypeError("Text boxes cannot hold child boxes")
        self.children.append(child)

    def to_dict(self) -> dict:
        """Serialize to plain `{kind, style, children}` mappings."""
        children = self.children
        if not isinstance(children, str):
            children = [child.to_dict() for child in children]
        return {"kind": self.kind.value, "style": dict(self.style), "children": children}


# =============================================================================
# CONSTRUCTORS
# =============================================================================

def make_box(
    background_color: Optional[str] = None,
    width: Optional[Union[int, str]] = None,
    height: Optional[Union[int, str]] = None,
    border_radius: Optional[int] = None,
    **style: Any
) -> Box:
    """A leaf rectangle (a grid cell or a legend swatch)."""
    if background_color is not None:
        style["backgroundColor"] = background_color
    if width is not None:
        style["width"] = width
    if height is not None:
        style["height"] = height
    if border_radius is not None:
        style["borderRadius"] = border_radius
    return Box(kind=BoxKind.BOX, style=style, children=[])


def make_flex_container(
    direction: FlexDirection,
    gap: Optional[Union[int, str]] = None,
    width: Optional[Union[int, str]] = None,
    height: Optional[Union[int, str]] = None,
    children: Optional[List[Box]] = None,
    **style: Any
) -> Box:
    """
    A flex container.

    Width, height and gap are only set when supplied; renderers treat a
    missing key as "size to content".
    """
    style = {"display": "flex", "flexDirection": direction.value, **style}
    if width:
        style["width"] = width
    if height:
        style["height"] = height
    if gap:
        style["gap"] = gap
    return Box(kind=BoxKind.BOX, style=style, children=list(children or []))


def make_text(content: str, **style: Any) -> Box:
    """A single line of text."""
    return Box(kind=BoxKind.TEXT, style=style, children=content)


# =============================================================================
# RENDERER CONTRACT
# =============================================================================

# (language code, text segment) -> image URI, or None to keep the text as is
AssetLoader = Callable[[str, str], Awaitable[Optional[str]]]


@dataclass
class RenderFont:
    """A font binary handed to the renderer."""
    name: str
    data: bytes
    weight: int = 400
    style: str = "normal"


@dataclass
class RenderOptions:
    """Canvas and resources for one render call."""
    width: int
    height: int
    fonts: List[RenderFont] = field(default_factory=list)
    load_additional_asset: Optional[AssetLoader] = None


class BoxRenderer(Protocol):
    """Anything that turns a box tree into SVG markup."""

    async def render(self, root: Box, options: RenderOptions) -> str:
        ...
