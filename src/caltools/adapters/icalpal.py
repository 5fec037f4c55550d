"""icalPal adapter - subprocess wrapper for macOS Calendar."""

import json
import logging
import subprocess
from datetime import date, datetime, timedelta

from caltools.core.calendar import Event
from caltools.ports.event_source import CalendarUnavailableError

logger = logging.getLogger(__name__)

# Longest span requested from icalPal in a single call.
MAX_WINDOW = timedelta(days=4 * 365)


def date_windows(start: date, end: date, size: timedelta = MAX_WINDOW) -> list[tuple[date, date]]:
    """Split [start, end] into consecutive inclusive windows of at most `size`."""
    windows = []
    current = start
    while current <= end:
        window_end = min(current + size - timedelta(days=1), end)
        windows.append((current, window_end))
        current = window_end + timedelta(days=1)
    return windows


class IcalPalEventSource:
    """
    icalPal subprocess adapter.

    Reads events from macOS Calendar via the icalPal CLI tool. icalPal
    needs Full Disk Access for the terminal it runs from.
    """

    def __init__(
        self,
        include_calendars: list[str] | None = None,
        exclude_calendars: list[str] | None = None,
        timeout: int = 60,
    ):
        self.include_calendars = include_calendars
        self.exclude_calendars = exclude_calendars
        self.timeout = timeout

    def fetch_range(self, start: date, end: date) -> list[Event]:
        """Fetch events overlapping start through end, both inclusive."""
        events = []
        for window_start, window_end in date_windows(start, end):
            events.extend(self._parse_events(self._run(window_start, window_end)))
        return events

    def _run(self, start: date, end: date) -> list[dict]:
        cmd = [
            "icalPal",
            "events",
            f"--from={start.isoformat()}",
            f"--to={end.isoformat()}",
            "-o",
            "json",
        ]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
            return json.loads(result.stdout) if result.stdout.strip() else []
        except subprocess.CalledProcessError as e:
            logger.warning(f"icalPal command failed: {e.stderr or e}")
            raise CalendarUnavailableError(
                "icalPal failed - check that your terminal has Full Disk Access"
            ) from e
        except FileNotFoundError as e:
            raise CalendarUnavailableError(
                "icalPal not found - install with 'brew install icalpal'"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CalendarUnavailableError(f"icalPal timed out after {self.timeout}s") from e
        except json.JSONDecodeError as e:
            raise CalendarUnavailableError(f"Failed to parse icalPal output: {e}") from e

    def _parse_events(self, data: list[dict]) -> list[Event]:
        """Parse icalPal JSON output into Event objects."""
        events = []

        for item in data:
            cal_name = item.get("calendar", "")

            # Apply calendar filters
            if self.include_calendars and cal_name not in self.include_calendars:
                continue
            if self.exclude_calendars and cal_name in self.exclude_calendars:
                continue

            try:
                event = self._parse_event(item)
                if event:
                    events.append(event)
            except (ValueError, KeyError, TypeError) as e:
                logger.debug(f"Skipping malformed event: {e}")
                continue

        return events

    def _parse_event(self, item: dict) -> Event | None:
        """Parse a single event from icalPal data."""
        is_all_day = item.get("all_day") == 1

        # sctime/ectime strings carry the right dates for recurring events
        sctime = item.get("sctime", "")
        ectime = item.get("ectime", "")

        if sctime:
            start = datetime.strptime(sctime[:19], "%Y-%m-%d %H:%M:%S")
        elif item.get("sseconds"):
            start = datetime.fromtimestamp(item["sseconds"])
        else:
            return None

        if ectime:
            end = datetime.strptime(ectime[:19], "%Y-%m-%d %H:%M:%S")
        elif item.get("eseconds"):
            end = datetime.fromtimestamp(item["eseconds"])
        else:
            end = None

        return Event(
            title=item.get("title") or "Untitled",
            start=start,
            end=end,
            calendar=item.get("calendar", ""),
            all_day=is_all_day,
        )
