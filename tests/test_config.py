"""Tests for config file parsing."""

from datetime import date
from unittest.mock import patch

from caltools.config import DEFAULT_LOOKAHEAD_DAYS, Config, load_config


def load_from(tmp_path, text: str) -> Config:
    config_file = tmp_path / "caltools.conf"
    config_file.write_text(text)
    with patch("caltools.config.CONFIG_FILE", config_file):
        return load_config()


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        with patch("caltools.config.CONFIG_FILE", tmp_path / "missing.conf"):
            config = load_config()

        assert config.calendar_sources == ["icalpal"]
        assert config.target_days_per_year == 18
        assert config.time_off_since is None
        assert config.lookahead_days == DEFAULT_LOOKAHEAD_DAYS

    def test_time_off_settings(self, tmp_path):
        config = load_from(
            tmp_path,
            "TIME_OFF_SINCE=2023-09-01\n"
            "TARGET_DAYS_PER_YEAR=25  # contract\n"
            "LOOKAHEAD_DAYS='365'\n",
        )

        assert config.time_off_since == date(2023, 9, 1)
        assert config.target_days_per_year == 25
        assert config.lookahead_days == 365

    def test_invalid_values_keep_defaults(self, tmp_path):
        config = load_from(tmp_path, "TIME_OFF_SINCE=yesterday\nTARGET_DAYS_PER_YEAR=lots\n")

        assert config.time_off_since is None
        assert config.target_days_per_year == 18

    def test_comments_and_blank_lines_ignored(self, tmp_path):
        config = load_from(tmp_path, "# comment\n\nnot a setting\nTIMEZONE=\"Europe/Prague\" # home\n")
        assert config.timezone == "Europe/Prague"

    def test_calendar_sources_and_filters(self, tmp_path):
        config = load_from(
            tmp_path,
            "CALENDAR_SOURCES=iCalPal, google\n"
            "ICALPAL_INCLUDE_CALENDARS=Home, Work\n"
            "ICALPAL_EXCLUDE_CALENDARS=Birthdays\n",
        )

        assert config.calendar_sources == ["icalpal", "google"]
        assert config.icalpal_include_calendars == ["Home", "Work"]
        assert config.icalpal_exclude_calendars == ["Birthdays"]


class TestGoogleAccountConfig:
    def test_parse_single_account_with_label(self, tmp_path):
        config = load_from(tmp_path, 'GOOGLE_ACCOUNTS="~/.config/work:Work"')

        assert len(config.google_accounts) == 1
        assert config.google_accounts[0].config_folder == "~/.config/work"
        assert config.google_accounts[0].label == "Work"

    def test_parse_multiple_accounts(self, tmp_path):
        config = load_from(tmp_path, 'GOOGLE_ACCOUNTS="~/.config/personal,~/.config/work:Work"')

        assert [a.config_folder for a in config.google_accounts] == [
            "~/.config/personal",
            "~/.config/work",
        ]
        assert config.google_accounts[0].label is None

    def test_parse_json_format_with_calendars(self, tmp_path):
        config = load_from(
            tmp_path,
            'GOOGLE_ACCOUNTS=\'[{"config_folder": "~/.config/work", "label": "Work", "calendars": ["Work", "Time Off"]}]\'',
        )

        assert len(config.google_accounts) == 1
        assert config.google_accounts[0].calendars == ["Work", "Time Off"]

    def test_bad_json_gives_no_accounts(self, tmp_path):
        config = load_from(tmp_path, "GOOGLE_ACCOUNTS='[{\"label\": \"Work\"}]'")
        assert config.google_accounts == []

    def test_parse_google_client_secret_file(self, tmp_path):
        config = load_from(tmp_path, 'GOOGLE_CLIENT_SECRET_FILE="~/secrets/client_secret.json"')
        assert config.google_client_secret_file == "~/secrets/client_secret.json"
