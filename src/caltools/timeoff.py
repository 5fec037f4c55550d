"""Time-off tracking over an injected calendar event source."""

import logging
from datetime import date, datetime, timedelta
from functools import cached_property

from .config import DEFAULT_LOOKAHEAD_DAYS, Config
from .core.calendar import sort_events_by_start
from .core.days_off import DayOffRange
from .core.leave import LeaveRequest, parse_leave_event
from .core import tracker
from .core.tracker import as_datetime
from .ports.event_source import EventSource

logger = logging.getLogger(__name__)


class TimeOffTracker:
    """
    Time off taken since a start date, against a yearly budget.

    `ranges` and `budget_days` are computed on first access and then kept
    for the lifetime of the tracker.
    """

    def __init__(
        self,
        source: EventSource,
        start_date: date | datetime,
        target_days_per_year: int,
        now: datetime | None = None,
        lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
    ):
        self.source = source
        self.start_date = as_datetime(start_date)
        self.target_days_per_year = target_days_per_year
        self.now = now or datetime.now()
        self.lookahead_days = lookahead_days

    @classmethod
    def from_config(
        cls,
        source: EventSource,
        config: Config,
        since: date | None = None,
        target_days_per_year: int | None = None,
    ) -> "TimeOffTracker":
        """Build a tracker, filling unset options from config, then defaults."""
        start = since or config.time_off_since or date.today()
        target = target_days_per_year if target_days_per_year is not None else config.target_days_per_year
        return cls(
            source,
            start,
            target,
            lookahead_days=config.lookahead_days,
        )

    def leave_requests(self) -> list[LeaveRequest]:
        """Fetch events and keep the ones that are leave, in start order."""
        end = self.now.date() + timedelta(days=self.lookahead_days)
        events = sort_events_by_start(self.source.fetch_range(self.start_date.date(), end))
        logger.debug(f"Fetched {len(events)} events from {self.start_date.date()} to {end}")

        requests = []
        for event in events:
            request = parse_leave_event(event)
            if request is not None:
                requests.append(request)
        logger.debug(f"Found {len(requests)} leave events")
        return requests

    @cached_property
    def ranges(self) -> list[DayOffRange]:
        return tracker.build_ranges(self.leave_requests())

    @cached_property
    def budget_days(self) -> int:
        return tracker.budget_days(self.start_date, self.target_days_per_year, self.now)

    @property
    def total_used(self) -> int:
        return tracker.total_used(self.ranges)
