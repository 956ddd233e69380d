"""FastAPI dependencies."""

from functools import lru_cache

from lifecalendar.api.config import get_settings
from lifecalendar.engine.calendar_generator import CalendarGenerator
from lifecalendar.providers.emoji_loader import EmojiResolver
from lifecalendar.providers.font_loader import FontLoader


@lru_cache()
def get_generator() -> CalendarGenerator:
    """Process-wide generator; its font catalog is fetched once.

    Requests never mutate the generator's configuration: each one renders
    its own snapshot built from the defaults.
    """
    settings = get_settings()

    font_provider = None
    if settings.has_fonts_api_key:
        font_provider = FontLoader(
            api_key=settings.google_fonts_api_key,
            api_url=settings.google_fonts_api_url,
            referer=settings.google_fonts_referer or None,
            timeout=settings.http_timeout,
        )

    return CalendarGenerator(
        font_provider=font_provider,
        emoji_resolver=EmojiResolver(
            base_url=settings.twemoji_base_url,
            timeout=settings.http_timeout,
        ),
    )
