"""Composite calendar adapter - combines multiple calendar sources."""

import logging
from datetime import date

from caltools.config import Config
from caltools.core.calendar import Event, filter_events_by_date, sort_events_by_start
from caltools.ports.event_source import EventSource

from .google_calendar import GoogleCalendarEventSource
from .icalpal import IcalPalEventSource

logger = logging.getLogger(__name__)


class CompositeEventSource:
    """
    Composite event source combining icalPal and Google Calendar accounts.

    Implements the EventSource protocol.
    """

    def __init__(self, config: Config):
        self.config = config
        self._sources: list[EventSource] = []

        if "icalpal" in config.calendar_sources:
            self._sources.append(
                IcalPalEventSource(
                    include_calendars=config.icalpal_include_calendars or None,
                    exclude_calendars=config.icalpal_exclude_calendars or None,
                )
            )
        if "google" in config.calendar_sources:
            for account in config.google_accounts:
                self._sources.append(
                    GoogleCalendarEventSource(
                        config_folder=account.config_folder,
                        label=account.label,
                        calendars=account.calendars or None,
                        client_secret_file=config.google_client_secret_file,
                        timezone=config.timezone,
                    )
                )

        unknown = set(config.calendar_sources) - {"icalpal", "google"}
        if unknown:
            logger.warning(f"Ignoring unknown calendar sources: {', '.join(sorted(unknown))}")

    @property
    def sources(self) -> list[EventSource]:
        return list(self._sources)

    def fetch_range(self, start: date, end: date) -> list[Event]:
        """Fetch events from all configured sources, sorted by start."""
        events = []
        for source in self._sources:
            events.extend(source.fetch_range(start, end))

        events = filter_events_by_date(events, start, end)
        return sort_events_by_start(events)
