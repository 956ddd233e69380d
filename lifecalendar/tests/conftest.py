"""Pytest configuration and fixtures."""

from datetime import date, datetime, time, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from lifecalendar.api.dependencies import get_generator
from lifecalendar.api.main import create_app
from lifecalendar.engine.calendar_generator import CalendarGenerator
from lifecalendar.engine.errors import ProviderError

BIRTH = date(2000, 1, 1)
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def week_start(week: int) -> datetime:
    """First instant of the given 1-indexed week of life (born on BIRTH)."""
    return datetime.combine(BIRTH, time.min, tzinfo=timezone.utc) + timedelta(weeks=week - 1)


def event_dict(name: str, from_week: int, to_week: int, color: str = "#ff0000") -> dict:
    """Wire-format event spanning the given weeks of life."""
    return {
        "name": name,
        "from": week_start(from_week).isoformat(),
        "to": week_start(to_week).isoformat(),
        "color": color,
    }


class FakeFontProvider:
    """In-memory Font Provider."""

    def __init__(self, fail_on_load: bool = False, fail_on_fetch: bool = False):
        self.fail_on_load = fail_on_load
        self.fail_on_fetch = fail_on_fetch
        self.fetch_calls = 0
        self.loaded: list[tuple[str, str]] = []
        self._fonts: dict = {}

    @property
    def available_fonts(self) -> dict:
        return self._fonts

    async def fetch_fonts(self) -> None:
        self.fetch_calls += 1
        if self.fail_on_fetch:
            raise ProviderError("Invalid response from Google Font API, malformed item")
        self._fonts = {
            "Inter": {"variants": ["regular", "700"], "files": {}},
            "Roboto": {"variants": ["regular", "italic"], "files": {}},
        }

    async def load_font(self, family: str, variant: str) -> bytes:
        if self.fail_on_load:
            raise ProviderError(f"The requested font '{family}' does not exist")
        self.loaded.append((family, variant))
        return b"font-bytes"


class FakeEmojiResolver:
    """Emoji Resolver that records requested graphemes."""

    def __init__(self):
        self.requested: list[str] = []

    async def resolve(self, grapheme: str) -> str:
        self.requested.append(grapheme)
        return "data:image/svg+xml,fake"


@pytest.fixture
def generator() -> CalendarGenerator:
    """Generator with no network collaborators."""
    return CalendarGenerator()


@pytest.fixture
def client(generator) -> TestClient:
    """Create a test client whose routes use the `generator` fixture."""
    app = create_app()
    app.dependency_overrides[get_generator] = lambda: generator
    return TestClient(app)
