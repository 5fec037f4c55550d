"""Configuration management for caltools."""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

CALTOOLS_HOME = Path(os.environ.get("CALTOOLS_HOME", Path.home() / "caltools"))
CONFIG_FILE = CALTOOLS_HOME / "config" / "caltools.conf"

DEFAULT_TARGET_DAYS_PER_YEAR = 18
# Leave is often booked well ahead; look this far past today for it.
DEFAULT_LOOKAHEAD_DAYS = 4 * 365


@dataclass
class GoogleAccount:
    """A Google Calendar account configuration."""

    config_folder: str
    label: str | None = None
    calendars: list[str] = field(default_factory=list)


@dataclass
class Config:
    """caltools configuration."""

    calendar_sources: list[str] = field(default_factory=lambda: ["icalpal"])
    icalpal_include_calendars: list[str] = field(default_factory=list)
    icalpal_exclude_calendars: list[str] = field(default_factory=list)
    google_accounts: list[GoogleAccount] = field(default_factory=list)
    google_client_secret_file: str = ""
    timezone: str = "America/Toronto"
    time_off_since: date | None = None
    target_days_per_year: int = DEFAULT_TARGET_DAYS_PER_YEAR
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key.upper()}={value!r}")
        return default


def _parse_google_accounts(value: str) -> list[GoogleAccount]:
    # JSON format: [{"config_folder": "...", "label": "...", "calendars": [...]}]
    # Simple format: "path1:label1,path2:label2"
    accounts = []
    if value.startswith("["):
        try:
            data = json.loads(value)
            for item in data:
                accounts.append(
                    GoogleAccount(
                        config_folder=item["config_folder"],
                        label=item.get("label"),
                        calendars=item.get("calendars", []),
                    )
                )
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Failed to parse GOOGLE_ACCOUNTS JSON: {e}")
        return accounts

    for entry in _split_list(value):
        if ":" in entry:
            folder, label = entry.split(":", 1)
            accounts.append(GoogleAccount(folder.strip(), label.strip()))
        else:
            accounts.append(GoogleAccount(entry))
    return accounts


def load_config() -> Config:
    """Load configuration from caltools.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        logger.debug(f"No config file at {CONFIG_FILE}, using defaults")
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "calendar_sources":
                config.calendar_sources = [s.lower() for s in _split_list(value)]
            case "icalpal_include_calendars":
                config.icalpal_include_calendars = _split_list(value)
            case "icalpal_exclude_calendars":
                config.icalpal_exclude_calendars = _split_list(value)
            case "google_accounts":
                config.google_accounts = _parse_google_accounts(value)
            case "google_client_secret_file":
                config.google_client_secret_file = value
            case "timezone":
                config.timezone = value
            case "time_off_since":
                try:
                    config.time_off_since = date.fromisoformat(value)
                except ValueError:
                    logger.warning(f"Ignoring TIME_OFF_SINCE={value!r}, expected YYYY-MM-DD")
            case "target_days_per_year":
                config.target_days_per_year = _parse_int(key, value, config.target_days_per_year)
            case "lookahead_days":
                config.lookahead_days = _parse_int(key, value, config.lookahead_days)
            case _:
                logger.debug(f"Unknown config key {key.upper()}")

    return config
