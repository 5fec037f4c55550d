"""Google Calendar API adapter."""

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from caltools.core.calendar import Event
from caltools.ports.event_source import CalendarUnavailableError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]


def _api_errors() -> tuple[type[Exception], ...]:
    """Failures that mean the calendar can't be read: API, auth, network, bad TIMEZONE."""
    from google.auth.exceptions import GoogleAuthError
    from googleapiclient.errors import HttpError

    return (HttpError, GoogleAuthError, OSError, ZoneInfoNotFoundError)


class GoogleCalendarEventSource:
    """Reads events from Google Calendar via the API."""

    def __init__(
        self,
        config_folder: str,
        label: str | None = None,
        calendars: list[str] | None = None,
        client_secret_file: str = "",
        timezone: str = "America/Toronto",
    ):
        self.config_folder = config_folder
        self.label = label or Path(config_folder).name
        self.calendars = calendars
        self.client_secret_file = client_secret_file
        self.timezone = timezone
        self._token_path = Path(config_folder).expanduser() / "token.json"

    def _get_credentials(self):
        """Load credentials from token.json, refreshing if needed."""
        from google.auth.exceptions import RefreshError
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        if not self._token_path.exists():
            raise CalendarUnavailableError(
                f"No token.json for {self.label} - run 'caltools cal-auth'"
            )

        creds = Credentials.from_authorized_user_file(str(self._token_path), SCOPES)

        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as e:
                raise CalendarUnavailableError(
                    f"Failed to refresh token for {self.label}: {e}"
                ) from e
            self._token_path.write_text(creds.to_json())
            self._token_path.chmod(0o600)

        return creds

    def _build_service(self):
        """Build a Google Calendar API service."""
        from googleapiclient.discovery import build

        return build("calendar", "v3", credentials=self._get_credentials())

    def _resolve_calendar_ids(self, service) -> list[str]:
        """Resolve display name filters to calendar IDs."""
        if not self.calendars:
            return ["primary"]

        result = service.calendarList().list().execute()
        cal_map = {}
        for entry in result.get("items", []):
            cal_map[entry["summary"]] = entry["id"]

        ids = []
        for name in self.calendars:
            if name in cal_map:
                ids.append(cal_map[name])
            else:
                logger.warning(f"Calendar '{name}' not found for {self.label}")
        return ids or ["primary"]

    def authenticate(self) -> bool:
        """Run OAuth flow for this account. Returns True on success."""
        from google_auth_oauthlib.flow import InstalledAppFlow

        if not self.client_secret_file:
            logger.error("No client secret file configured")
            return False

        secret_path = Path(self.client_secret_file).expanduser()
        if not secret_path.exists():
            logger.error(f"Client secret file not found: {secret_path}")
            return False

        flow = InstalledAppFlow.from_client_secrets_file(str(secret_path), SCOPES)
        creds = flow.run_local_server(port=0)

        token_dir = self._token_path.parent
        token_dir.mkdir(parents=True, exist_ok=True)
        self._token_path.write_text(creds.to_json())
        self._token_path.chmod(0o600)
        return True

    def _unavailable(self, e: Exception) -> CalendarUnavailableError:
        logger.warning(f"Google Calendar error for {self.label}: {e}")
        return CalendarUnavailableError(f"Google Calendar error for {self.label}: {e}")

    def fetch_range(self, start: date, end: date) -> list[Event]:
        """Fetch events overlapping start through end, both inclusive."""
        try:
            return self._fetch_range_api(start, end)
        except _api_errors() as e:
            raise self._unavailable(e) from e

    def _fetch_range_api(self, start: date, end: date) -> list[Event]:
        service = self._build_service()

        cal_ids = self._resolve_calendar_ids(service)
        time_min = datetime(start.year, start.month, start.day).isoformat() + "Z"
        after_end = end + timedelta(days=1)
        time_max = datetime(after_end.year, after_end.month, after_end.day).isoformat() + "Z"

        events = []
        for cal_id in cal_ids:
            page_token = None
            while True:
                result = (
                    service.events()
                    .list(
                        calendarId=cal_id,
                        timeMin=time_min,
                        timeMax=time_max,
                        singleEvents=True,
                        orderBy="startTime",
                        timeZone=self.timezone,
                        pageToken=page_token,
                    )
                    .execute()
                )
                events.extend(self._parse_items(result.get("items", [])))
                page_token = result.get("nextPageToken")
                if not page_token:
                    break

        return events

    def _parse_items(self, items: list[dict]) -> list[Event]:
        try:
            tz = ZoneInfo(self.timezone)
        except ValueError as e:
            raise ZoneInfoNotFoundError(f"Invalid TIMEZONE {self.timezone!r}") from e

        events = []
        for item in items:
            start_raw = item.get("start", {})
            end_raw = item.get("end", {})

            try:
                if "date" in start_raw:
                    # All-day event: end date is exclusive (midnight of the following day)
                    start_dt = datetime.fromisoformat(start_raw["date"]).replace(tzinfo=tz)
                    end_dt = datetime.fromisoformat(end_raw["date"]).replace(tzinfo=tz) if "date" in end_raw else None
                    all_day = True
                elif "dateTime" in start_raw:
                    start_dt = datetime.fromisoformat(start_raw["dateTime"])
                    end_dt = datetime.fromisoformat(end_raw["dateTime"]) if "dateTime" in end_raw else None
                    all_day = False
                else:
                    continue
            except ValueError as e:
                logger.debug(f"Skipping malformed Google event: {e}")
                continue

            events.append(
                Event(
                    title=item.get("summary", "Untitled"),
                    start=start_dt,
                    end=end_dt,
                    calendar=self.label,
                    all_day=all_day,
                )
            )
        return events

    def list_calendars(self) -> list[tuple[str, str]]:
        """List calendars as (accessRole, summary) tuples."""
        try:
            result = self._build_service().calendarList().list().execute()
        except _api_errors() as e:
            raise self._unavailable(e) from e
        return [
            (entry.get("accessRole", ""), entry.get("summary", ""))
            for entry in result.get("items", [])
        ]
