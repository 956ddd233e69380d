"""
errors.py — Typed failures raised while composing a calendar.

Every failure is fatal to the current composition; nothing is retried and no
partial figure is returned. Callers translate these into user-facing
responses (see lifecalendar.api.routes.embed).
"""


class CalendarError(Exception):
    """Base class for all calendar composition failures."""


class ConfigurationError(CalendarError):
    """The configuration cannot produce a valid set of fill rules.

    Raised for empty or malformed fill rule lists, invalid hex colors and
    configuration fields that cannot be parsed.
    """


class InputError(CalendarError):
    """The caller supplied impossible dates or events.

    Raised for a birth date in the future, birth or event dates that cannot
    be parsed, an event ending before it starts or starting before birth,
    and overlapping events.
    """


class ProviderError(CalendarError):
    """A collaborator (font catalog, font file, emoji asset) failed."""
