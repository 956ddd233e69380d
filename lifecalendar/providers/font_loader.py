"""Google Fonts catalog lookup and font binary fetching."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from lifecalendar.engine.errors import ProviderError

logger = logging.getLogger(__name__)

# Reference: https://developers.google.com/fonts/docs/developer_api
GOOGLE_FONTS_API_URL = "https://www.googleapis.com/webfonts/v1/webfonts"


@dataclass(frozen=True)
class FontVariant:
    """Weight and style encoded by a Google Fonts variant name."""

    weight: int
    style: str = "normal"


def parse_font_variant(variant: str) -> FontVariant:
    """
    Parse a variant name such as `regular`, `italic`, `700` or `300italic`.

    Raises:
        ProviderError: if the variant does not start with a weight
    """
    if variant == "regular":
        return FontVariant(weight=400)

    if variant == "italic":
        return FontVariant(weight=400, style="italic")

    try:
        weight = int(variant[:3])
    except ValueError as e:
        raise ProviderError(f"Unknown font variant '{variant}'") from e

    style = variant[3:]
    return FontVariant(weight=weight, style=style or "normal")


def font_variant_label(variant: str) -> str:
    """Human readable variant: `regular` -> `400`, `700italic` -> `700 Italic`."""
    if variant == "regular":
        return "400"

    if variant == "italic":
        return "400 Italic"

    if variant.endswith("italic"):
        return f"{variant[:-len('italic')]} Italic"

    return variant


def _is_catalog_item(item: Any) -> bool:
    """A catalog entry needs a family name; variants and files are optional."""
    return (
        isinstance(item, dict)
        and isinstance(item.get("family"), str)
        and isinstance(item.get("variants", []), list)
        and isinstance(item.get("files", {}), dict)
    )


class FontLoader:
    """
    Font Provider backed by the Google Fonts developer API.

    The catalog is fetched once per loader; font files are downloaded on
    every load_font() call.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = GOOGLE_FONTS_API_URL,
        referer: str | None = None,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.referer = referer
        self.timeout = timeout
        self._client = client
        self._fonts: dict[str, dict[str, Any]] = {}
        self._is_fetched = False

    @property
    def available_fonts(self) -> dict[str, dict[str, Any]]:
        """Family -> {"variants": [...], "files": {variant: url}}."""
        return self._fonts

    async def _get(self, url: str, **kwargs) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url, **kwargs)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, **kwargs)

    async def fetch_fonts(self) -> None:
        """
        Fetch the font catalog.

        Raises:
            ProviderError: if the catalog cannot be fetched or is malformed
        """
        if self._is_fetched:
            return

        headers = {"referer": self.referer} if self.referer else {}

        try:
            response = await self._get(self.api_url, params={"key": self.api_key}, headers=headers)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(f"Could not fetch the font catalog: {e}") from e

        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise ProviderError(f"Invalid response from Google Font API: \n{payload}")

        fonts = {}
        for item in items:
            if not _is_catalog_item(item):
                raise ProviderError(f"Invalid response from Google Font API, malformed item: \n{item}")
            fonts[item["family"]] = {
                "variants": list(item.get("variants", [])),
                "files": dict(item.get("files", {})),
            }

        self._fonts = fonts
        self._is_fetched = True
        logger.info(f"Fetched {len(fonts)} font families")

    async def load_font(self, family: str, variant: str) -> bytes:
        """
        Download one font file.

        Args:
            family: Font family name, e.g. "Inter"
            variant: Variant name, e.g. "regular" or "700italic"

        Returns:
            The font binary

        Raises:
            ProviderError: if the catalog is not fetched, the family or
                variant is unknown, or the download fails
        """
        if not self._is_fetched:
            raise ProviderError("Fonts has not been fetched, you may need to call fetch_fonts first")

        if family not in self._fonts:
            raise ProviderError(f"The requested font '{family}' does not exist")

        font = self._fonts[family]
        if variant not in font["variants"] or variant not in font["files"]:
            logger.warning(f"Variants available for '{family}': {font['variants']}")
            raise ProviderError(f"The requested variant '{variant}' for '{family}' does not exist")

        try:
            response = await self._get(font["files"][variant])
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ProviderError(f"Could not download font '{family}' ({variant}): {e}") from e

        return response.content
