"""Pure calendar domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta


@dataclass
class Event:
    """A calendar event."""

    title: str
    start: datetime
    end: datetime | None
    calendar: str
    all_day: bool


def last_covered_day(start: datetime, end: datetime | None) -> date:
    """
    Last calendar day covered by an event.

    Calendars disagree on all-day end times: some use 23:59:59 on the last
    day, others (iCalendar, Google) use midnight of the following day.
    """
    if end is None or end <= start:
        return start.date()
    if end.time() == time(0, 0):
        return (end - timedelta(days=1)).date()
    return end.date()


def _sort_key(event: Event) -> datetime:
    # Mixed aware/naive datetimes can't be compared; compare wall-clock time.
    return event.start.replace(tzinfo=None)


def sort_events_by_start(events: list[Event]) -> list[Event]:
    """Sort events by start time."""
    return sorted(events, key=_sort_key)


def filter_events_by_date(
    events: list[Event],
    start_date: date,
    end_date: date | None = None,
) -> list[Event]:
    """
    Filter events to those overlapping a date range.

    A multi-day event that began before start_date is kept as long as it
    still covers start_date or a later day.

    Pure function - no I/O.
    """
    end_date = end_date or start_date
    return [
        e for e in events
        if e.start.date() <= end_date and last_covered_day(e.start, e.end) >= start_date
    ]


def filter_all_day(events: list[Event]) -> list[Event]:
    """Keep only all-day events."""
    return [e for e in events if e.all_day]
