"""Functional core - pure business logic with no I/O."""

from .calendar import Event, filter_events_by_date, sort_events_by_start
from .days_off import (
    DayOff,
    DayOffRange,
    DayOffType,
    InvalidLeaveRequestError,
    build_range,
    classify,
    merge,
)
from .leave import LeaveRequest, parse_leave_event
from .report import format_range, is_muted
from .tracker import budget_days, build_ranges, total_used

__all__ = [
    # Calendar
    "Event",
    "filter_events_by_date",
    "sort_events_by_start",
    # Days off
    "DayOff",
    "DayOffRange",
    "DayOffType",
    "InvalidLeaveRequestError",
    "build_range",
    "classify",
    "merge",
    # Leave parsing
    "LeaveRequest",
    "parse_leave_event",
    # Tracking
    "budget_days",
    "build_ranges",
    "total_used",
    # Report
    "format_range",
    "is_muted",
]
