"""Twemoji lookup for emoji graphemes."""

import logging
from urllib.parse import quote

import httpx

from lifecalendar.engine.errors import ProviderError

logger = logging.getLogger(__name__)

TWEMOJI_BASE_URL = "https://cdn.jsdelivr.net/gh/jdecked/twemoji@latest/assets/svg/"

ZERO_WIDTH_JOINER = "\U0000200D"
VARIATION_SELECTOR_16 = "\U0000FE0F"


def emoji_code(grapheme: str) -> str:
    """
    Twemoji file name for a grapheme, e.g. "1f468-200d-1f4bb".

    The emoji presentation selector is dropped unless the grapheme is a
    ZWJ sequence, matching Twemoji's asset names.
    """
    if ZERO_WIDTH_JOINER not in grapheme:
        grapheme = grapheme.replace(VARIATION_SELECTOR_16, "")
    return "-".join(f"{ord(char):x}" for char in grapheme)


class EmojiResolver:
    """Emoji Resolver returning inline SVG data URIs."""

    def __init__(
        self,
        base_url: str = TWEMOJI_BASE_URL,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self._client = client

    def emoji_url(self, grapheme: str) -> str:
        return f"{self.base_url}{emoji_code(grapheme)}.svg"

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url)

    async def resolve(self, grapheme: str) -> str:
        """
        Fetch the Twemoji SVG for a grapheme.

        Returns:
            A `data:image/svg+xml,...` URI

        Raises:
            ProviderError: if the asset cannot be fetched
        """
        url = self.emoji_url(grapheme)

        try:
            response = await self._get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError(f"Could not load emoji '{grapheme}' from {url}: {e}") from e

        logger.debug(f"Loaded emoji {emoji_code(grapheme)}")
        return f"data:image/svg+xml,{quote(response.text, safe='')}"
