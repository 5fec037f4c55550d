"""Shared test fixtures."""

from datetime import date, datetime, time, timedelta

import pytest

from caltools.core.calendar import Event
from caltools.ports.event_source import CalendarUnavailableError


class FakeEventSource:
    """In-memory EventSource that records the ranges it was asked for."""

    def __init__(self, events: list[Event] | None = None, error: str | None = None):
        self.events = events or []
        self.error = error
        self.calls: list[tuple[date, date]] = []

    def fetch_range(self, start: date, end: date) -> list[Event]:
        self.calls.append((start, end))
        if self.error:
            raise CalendarUnavailableError(self.error)
        return list(self.events)


@pytest.fixture
def fake_source():
    """Factory for FakeEventSource."""
    return FakeEventSource


@pytest.fixture
def all_day_event():
    """Factory for all-day events, using the exclusive-midnight end convention."""
    def _make(title: str, start: date, end: date | None = None, calendar: str = "Home") -> Event:
        last = end or start
        return Event(
            title=title,
            start=datetime.combine(start, time(0, 0)),
            end=datetime.combine(last + timedelta(days=1), time(0, 0)),
            calendar=calendar,
            all_day=True,
        )
    return _make
