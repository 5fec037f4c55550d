"""Calendar event source interface."""

from datetime import date
from typing import Protocol

from caltools.core.calendar import Event


class CalendarUnavailableError(RuntimeError):
    """Raised when a calendar backend cannot be read."""


class EventSource(Protocol):
    """Interface for reading calendar events from any backend."""

    def fetch_range(self, start: date, end: date) -> list[Event]:
        """Fetch events overlapping start through end, both inclusive.

        Raises:
            CalendarUnavailableError: if the backend cannot be read.
        """
        ...
