"""Pydantic v2 models for the calendar configuration.

Configurations travel as camelCase JSON (usually base64 encoded in a query
string) and are exposed as snake_case attributes in Python. Models are
frozen: an update always builds a new configuration from the old one.

Colors are kept as plain strings here. They are validated by the engine
when fill rules are resolved, so a bad color surfaces as a
ConfigurationError rather than a schema error.
"""

import base64
import binascii
import json
from datetime import date, datetime, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from lifecalendar.engine.errors import ConfigurationError, InputError
from lifecalendar.engine.grid_layout import GridDirection


# Fields holding user-supplied dates; parse failures there are input errors
DATE_FIELDS = {"dateOfBirth", "date_of_birth", "from", "to", "from_date", "to_date"}


def _epoch_millis_to_datetime(value: float) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def _is_date_error(error: ValidationError) -> bool:
    """True when every failure is on a birth date or an event boundary."""
    for detail in error.errors():
        loc = detail["loc"]
        is_birth = len(loc) == 1 and loc[0] in DATE_FIELDS
        is_event_boundary = len(loc) == 3 and loc[0] == "events" and loc[2] in DATE_FIELDS
        if not (is_birth or is_event_boundary):
            return False
    return True


# ============================================================================
# Event
# ============================================================================


class CalendarEvent(BaseModel):
    """A labeled, colored span of life."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(default="", description="Label shown in the legend")
    from_date: datetime = Field(alias="from", description="Start of the event")
    to_date: datetime = Field(alias="to", description="End of the event")
    color: str = Field(description="Hex color of the event's cells")

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def _coerce_instant(cls, value: Any) -> Any:
        # Epoch numbers are milliseconds, as produced by JavaScript clients
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return _epoch_millis_to_datetime(value)
        if isinstance(value, str) and len(value) == 10:
            return f"{value}T00:00:00"
        return value


# ============================================================================
# Configuration
# ============================================================================


class CalendarConfiguration(BaseModel):
    """Everything needed to compose one calendar."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        alias_generator=to_camel,
    )

    date_of_birth: date = Field(default=date(2000, 1, 1))
    filled_cell_color: str = "#ffffff"
    unfilled_cell_color: str = "#3f3f46"
    direction: GridDirection = GridDirection.HORIZONTAL
    number_of_years: int = Field(default=100, ge=1, le=150)

    title: str = "Life Calendar"
    title_color: str = "#ffffff"
    show_title: bool = False
    show_progress: bool = False
    show_legend: bool = False

    events: list[CalendarEvent] = Field(default_factory=list)
    legend_color: str = "#ffffff"
    progress_color: str = "#ffffff"

    font_family: str = "Inter"
    font_variant: str = "regular"
    emoji_support: bool = False

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _coerce_date_of_birth(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return _epoch_millis_to_datetime(value).date()
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    def merged(self, partial: Mapping[str, Any]) -> "CalendarConfiguration":
        """
        Merge a partial update over this configuration.

        Keys may be camelCase (wire format) or snake_case; the last write
        wins per key and unknown keys are ignored.

        Raises:
            InputError: if only birth or event dates fail to parse
            ConfigurationError: if any other supplied value has the wrong shape
        """
        aliases = {name: field.alias or name for name, field in type(self).model_fields.items()}

        data = self.model_dump(by_alias=True)
        for key, value in partial.items():
            data[aliases.get(key, key)] = value

        try:
            return type(self).model_validate(data)
        except ValidationError as e:
            if _is_date_error(e):
                raise InputError(f"Invalid dates in configurations: {e}") from e
            raise ConfigurationError(f"Invalid configurations: {e}") from e

    @classmethod
    def from_partial(cls, partial: Mapping[str, Any]) -> "CalendarConfiguration":
        """Build a configuration from defaults plus a partial update."""
        return cls().merged(partial)


# ============================================================================
# Wire format
# ============================================================================


def decode_configurations(raw: str) -> dict[str, Any]:
    """
    Decode a base64-encoded JSON object.

    Raises:
        ConfigurationError: if the text is not base64 JSON describing an object
    """
    try:
        decoded = base64.b64decode(raw, validate=True).decode("utf-8")
        configurations = json.loads(decoded)
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise ConfigurationError(f"Fail to parse configurations '{raw}', {e}") from e

    if not isinstance(configurations, dict):
        raise ConfigurationError(f"Configurations must be a JSON object, got '{decoded}'")

    return configurations


def encode_configurations(configurations: Mapping[str, Any]) -> str:
    """Inverse of decode_configurations (used by clients and tests)."""
    return base64.b64encode(json.dumps(configurations, default=str).encode("utf-8")).decode("ascii")
