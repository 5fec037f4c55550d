"""Time-off folding and budget arithmetic - no I/O dependencies."""

import math
from collections.abc import Iterable
from datetime import date, datetime, time

from .days_off import DayOffRange
from .leave import LeaveRequest

SECONDS_PER_YEAR = 365.25 * 24 * 3600


def build_ranges(requests: Iterable[LeaveRequest]) -> list[DayOffRange]:
    """
    Fold chronologically ordered leave requests into merged ranges.

    Only the most recent range is a merge candidate for the next request.
    Once a range has been pushed behind another one it is final, even if a
    later request happens to reach back into it.
    """
    result: list[DayOffRange] = []
    for request in requests:
        new_range = DayOffRange.from_leave(
            request.type, request.start, request.end, request.name
        )
        if not result:
            result.append(new_range)
            continue
        last = result.pop()
        result.extend(last.merge(new_range))
    return result


def as_datetime(d: date | datetime) -> datetime:
    """Midnight of a date, or the datetime unchanged."""
    if isinstance(d, datetime):
        return d
    return datetime.combine(d, time(0, 0))


def budget_days(
    start: date | datetime,
    target_days_per_year: int,
    now: datetime | None = None,
) -> int:
    """
    Days of leave accrued linearly since `start`, rounded down.

    A start in the future (or right now) yields 0.
    """
    now = now or datetime.now()
    elapsed = (now - as_datetime(start)).total_seconds()
    years = elapsed / SECONDS_PER_YEAR
    return max(0, math.floor(years * target_days_per_year))


def total_used(ranges: Iterable[DayOffRange]) -> int:
    """Sum of budget-consuming days across ranges."""
    return sum(r.used_days for r in ranges)
