"""Embeddable calendar routes."""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from lifecalendar.api.config import Settings, get_settings
from lifecalendar.api.dependencies import get_generator
from lifecalendar.dsl.schema import decode_configurations
from lifecalendar.engine.calendar_generator import CalendarGenerator
from lifecalendar.engine.errors import CalendarError, ProviderError
from lifecalendar.providers.font_loader import font_variant_label

logger = logging.getLogger("lifecalendar.api")

router = APIRouter()


class ErrorResponse(BaseModel):
    """Error body returned with 4xx/5xx responses."""
    error: str


class FontVariantInfo(BaseModel):
    """A variant name as used in `fontVariant`, and its display label."""
    name: str
    label: str


class FontInfo(BaseModel):
    """One font family and its variants."""
    family: str
    variants: list[FontVariantInfo]


def error_response(message: str = "The request is invalid", status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get(
    "/embed",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}},
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def embed_calendar(
    configurations: str | None = None,
    generator: CalendarGenerator = Depends(get_generator),
    settings: Settings = Depends(get_settings),
):
    """Render a calendar from a base64-encoded JSON configuration."""
    if not configurations:
        return error_response()

    try:
        partial = decode_configurations(configurations)
        snapshot = generator.configurations.merged(partial)
        result = await generator.generate(snapshot)
    except ProviderError as e:
        logger.error(f"Provider failure while rendering: {e}")
        return error_response(str(e), status.HTTP_502_BAD_GATEWAY)
    except CalendarError as e:
        logger.warning(f"Rejected configurations: {e}")
        return error_response(str(e))

    return Response(
        content=result.result,
        media_type="image/svg+xml",
        headers={"Cache-Control": f"public, max-age={settings.cache_max_age}"},
    )


@router.get("/fonts", response_model=list[FontInfo], responses={502: {"model": ErrorResponse}})
async def list_fonts(generator: CalendarGenerator = Depends(get_generator)):
    """Font families available for the `fontFamily` configuration key."""
    try:
        await generator.initialize()
    except ProviderError as e:
        logger.error(f"Could not fetch font catalog: {e}")
        return error_response(str(e), status.HTTP_502_BAD_GATEWAY)

    return [
        FontInfo(
            family=family,
            variants=[FontVariantInfo(name=v, label=font_variant_label(v)) for v in info["variants"]],
        )
        for family, info in sorted(generator.available_fonts.items())
    ]
