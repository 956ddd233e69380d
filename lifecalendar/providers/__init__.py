"""Network-backed collaborators: font catalog and emoji assets."""

from lifecalendar.providers.font_loader import (
    FontLoader,
    FontVariant,
    font_variant_label,
    parse_font_variant,
)
from lifecalendar.providers.emoji_loader import EmojiResolver, emoji_code

__all__ = [
    "FontLoader",
    "FontVariant",
    "font_variant_label",
    "parse_font_variant",
    "EmojiResolver",
    "emoji_code",
]
