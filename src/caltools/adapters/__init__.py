"""Adapters - I/O implementations of ports."""

from .composite_calendar import CompositeEventSource
from .google_calendar import GoogleCalendarEventSource
from .icalpal import IcalPalEventSource

__all__ = [
    "CompositeEventSource",
    "GoogleCalendarEventSource",
    "IcalPalEventSource",
]
