"""Leave-request parsing from calendar event titles - no I/O dependencies."""

import re
from dataclasses import dataclass
from datetime import date

from .calendar import Event, last_covered_day
from .days_off import DayOffType

# Prefix matches; a name is only taken after ": ".
_LEAVE_PATTERNS: list[tuple[re.Pattern[str], DayOffType]] = [
    (re.compile(r"^Company Holiday: (?P<name>.*)$", re.DOTALL), DayOffType.HOLIDAY),
    (re.compile(r"^Time Off(?:: (?P<name>.*))?", re.DOTALL), DayOffType.VACATION),
    (re.compile(r"^Sick Leave(?:: (?P<name>.*))?", re.DOTALL), DayOffType.SICK_LEAVE),
]


@dataclass(frozen=True)
class LeaveRequest:
    """A classified leave block taken from one all-day calendar event."""

    type: DayOffType
    start: date
    end: date
    name: str | None = None


def parse_title(title: str) -> tuple[DayOffType, str | None] | None:
    """Match a title against the leave prefixes. Returns (type, name) or None."""
    for pattern, leave_type in _LEAVE_PATTERNS:
        match = pattern.match(title)
        if match:
            return leave_type, match.group("name")
    return None


def parse_leave_event(event: Event) -> LeaveRequest | None:
    """Turn an all-day leave event into a LeaveRequest, or None if it isn't one."""
    if not event.all_day:
        return None

    parsed = parse_title(event.title)
    if parsed is None:
        return None

    leave_type, name = parsed
    return LeaveRequest(
        type=leave_type,
        start=event.start.date(),
        end=last_covered_day(event.start, event.end),
        name=name,
    )
