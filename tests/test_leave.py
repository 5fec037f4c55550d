"""Tests for leave-event parsing."""

from datetime import date, datetime, time

import pytest

from caltools.core.calendar import Event
from caltools.core.days_off import DayOffType
from caltools.core.leave import LeaveRequest, parse_leave_event, parse_title


class TestParseTitle:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Company Holiday: New Year", (DayOffType.HOLIDAY, "New Year")),
            ("Time Off", (DayOffType.VACATION, None)),
            ("Time Off: Ski trip", (DayOffType.VACATION, "Ski trip")),
            ("Sick Leave", (DayOffType.SICK_LEAVE, None)),
            ("Sick Leave: Flu", (DayOffType.SICK_LEAVE, "Flu")),
        ],
    )
    def test_known_prefixes(self, title, expected):
        assert parse_title(title) == expected

    @pytest.mark.parametrize(
        "title",
        ["Lunch", "Company Holiday", "company holiday: lowercase", "My Time Off", ""],
    )
    def test_unmatched_titles(self, title):
        assert parse_title(title) is None

    def test_prefix_without_separator_has_no_name(self):
        assert parse_title("Time Off - beach") == (DayOffType.VACATION, None)

    def test_name_keeps_later_colons(self):
        assert parse_title("Time Off: Trip: Rome") == (DayOffType.VACATION, "Trip: Rome")


class TestParseLeaveEvent:
    def test_all_day_vacation(self, all_day_event):
        event = all_day_event("Time Off: Ski trip", date(2024, 1, 2), date(2024, 1, 3))
        assert parse_leave_event(event) == LeaveRequest(
            type=DayOffType.VACATION,
            start=date(2024, 1, 2),
            end=date(2024, 1, 3),
            name="Ski trip",
        )

    def test_single_day_holiday(self, all_day_event):
        event = all_day_event("Company Holiday: New Year", date(2024, 1, 1))
        request = parse_leave_event(event)
        assert request.type == DayOffType.HOLIDAY
        assert request.start == request.end == date(2024, 1, 1)

    def test_timed_events_ignored(self):
        event = Event(
            title="Time Off",
            start=datetime.combine(date(2024, 1, 2), time(9, 0)),
            end=datetime.combine(date(2024, 1, 2), time(12, 0)),
            calendar="Home",
            all_day=False,
        )
        assert parse_leave_event(event) is None

    def test_other_all_day_events_ignored(self, all_day_event):
        assert parse_leave_event(all_day_event("Birthday", date(2024, 1, 2))) is None
