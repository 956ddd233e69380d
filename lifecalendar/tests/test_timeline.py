"""Tests for week-offset normalization."""

from datetime import date, datetime, timedelta, timezone

import pytest

from lifecalendar.dsl.schema import CalendarEvent
from lifecalendar.engine.errors import InputError
from lifecalendar.engine.timeline import (
    normalize_event,
    to_instant,
    weeks_elapsed,
    weeks_since_birth,
)

from conftest import BIRTH, NOW, week_start


class TestToInstant:
    """Test conversion of dates and datetimes to aware instants."""

    def test_date_is_midnight_utc(self) -> None:
        """Test that a date becomes midnight UTC."""
        assert to_instant(date(2000, 1, 1)) == datetime(2000, 1, 1, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self) -> None:
        """Test that a naive datetime is taken as UTC."""
        assert to_instant(datetime(2000, 1, 1, 6)) == datetime(2000, 1, 1, 6, tzinfo=timezone.utc)

    def test_aware_datetime_is_kept(self) -> None:
        """Test aware datetime is kept."""
        instant = datetime(2000, 1, 1, 6, tzinfo=timezone(timedelta(hours=2)))
        assert to_instant(instant) is instant


class TestWeeksElapsed:
    """Test floor(difference / 1 week) + 1."""

    def test_same_instant_is_first_week(self) -> None:
        """Test same instant is first week."""
        assert weeks_elapsed(NOW, NOW) == 1

    def test_six_days_is_still_first_week(self) -> None:
        """Test six days is still first week."""
        assert weeks_elapsed(NOW - timedelta(days=6, hours=23), NOW) == 1

    def test_seven_days_starts_second_week(self) -> None:
        """Test seven days starts second week."""
        assert weeks_elapsed(NOW - timedelta(days=7), NOW) == 2

    def test_fourteen_days(self) -> None:
        """Test two full weeks."""
        assert weeks_elapsed(NOW - timedelta(days=14), NOW) == 3

    def test_negative_difference_floors_down(self) -> None:
        """Test negative difference floors down."""
        assert weeks_elapsed(NOW, NOW - timedelta(days=3)) == 0
        assert weeks_elapsed(NOW, NOW - timedelta(days=8)) == -1

    def test_mixes_dates_and_datetimes(self) -> None:
        """Test mixes dates and datetimes."""
        assert weeks_elapsed(BIRTH, week_start(10)) == 10


class TestWeeksSinceBirth:
    """Test the top-level birth-to-now computation."""

    def test_birth_now_is_first_week(self) -> None:
        """Test that birth at the current instant is week 1."""
        assert weeks_since_birth(NOW, NOW) == 1

    def test_counts_weeks(self) -> None:
        """Test weeks counted from birth."""
        assert weeks_since_birth(BIRTH, week_start(1200)) == 1200

    def test_future_birth_is_rejected(self) -> None:
        """Test future birth is rejected."""
        with pytest.raises(InputError, match="future"):
            weeks_since_birth(date(2030, 1, 1), NOW)


class TestNormalizeEvent:
    """Test projection of events into week space."""

    def test_projects_boundaries(self) -> None:
        """Test projects boundaries."""
        event = CalendarEvent(name="Trip", from_date=week_start(5), to_date=week_start(8), color="#ff0000")
        normalized = normalize_event(BIRTH, event)

        assert normalized.name == "Trip"
        assert normalized.from_week == 5
        assert normalized.to_week == 8
        assert normalized.color == "#ff0000"

    def test_event_before_birth_is_not_rejected_here(self) -> None:
        """Test event before birth is not rejected here."""
        event = CalendarEvent(
            name="Before",
            from_date=week_start(1) - timedelta(days=8),
            to_date=week_start(2),
            color="#ff0000",
        )
        assert normalize_event(BIRTH, event).from_week == -1
