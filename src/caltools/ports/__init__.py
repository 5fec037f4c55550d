"""Ports - interfaces/protocols for external dependencies."""

from .event_source import CalendarUnavailableError, EventSource

__all__ = [
    "CalendarUnavailableError",
    "EventSource",
]
