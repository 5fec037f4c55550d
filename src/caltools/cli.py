"""caltools CLI - personal calendar utilities."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.composite_calendar import CompositeEventSource
from .adapters.google_calendar import GoogleCalendarEventSource
from .config import load_config
from .core.calendar import filter_all_day
from .core.days_off import InvalidLeaveRequestError
from .core.report import format_range, is_muted, report_to_dict, summary_lines
from .ports.event_source import CalendarUnavailableError
from .timeoff import TimeOffTracker


def _parse_date(ctx, param, value: str | None) -> date | None:
    """Click callback for YYYY-MM-DD options."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Invalid date format {value!r}. Use YYYY-MM-DD.") from None


@click.group()
@click.version_option(package_name="calendar-tools")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """caltools - personal calendar utilities."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.WARNING,
    )


@main.group(invoke_without_command=True)
@click.pass_context
def timeoff(ctx):
    """Track your time off."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(timeoff_list)


@timeoff.command("list")
@click.option("--since", callback=_parse_date, default=None,
              help="Start date in YYYY-MM-DD format (default: config, then today)")
@click.option("--target-days-per-year", type=int, default=None,
              help="Target number of days off per year (default: config, then 18)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def timeoff_list(since: date | None = None, target_days_per_year: int | None = None, as_json: bool = False):
    """List taken time off."""
    config = load_config()
    source = CompositeEventSource(config)
    tracker = TimeOffTracker.from_config(
        source, config, since=since, target_days_per_year=target_days_per_year
    )

    try:
        ranges = tracker.ranges
    except CalendarUnavailableError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except InvalidLeaveRequestError as e:
        click.echo(f"Error: malformed leave event: {e}", err=True)
        sys.exit(1)

    used = tracker.total_used
    budget = tracker.budget_days

    if as_json:
        click.echo(json.dumps(report_to_dict(ranges, used, budget), indent=2))
        return

    for r in ranges:
        line = format_range(r)
        click.echo(click.style(line, fg="bright_black") if is_muted(r) else line)

    click.echo()
    for line in summary_lines(used, budget):
        click.echo(line)


@main.command("cal-auth")
@click.option("--account", default=None, help="Label of account to authenticate (default: all)")
def cal_auth(account: str | None):
    """Authenticate with Google Calendar."""
    config = load_config()

    if not config.google_accounts:
        click.echo("No Google accounts configured in caltools.conf", err=True)
        sys.exit(1)

    if not config.google_client_secret_file:
        click.echo("GOOGLE_CLIENT_SECRET_FILE not set in caltools.conf", err=True)
        sys.exit(1)

    failed = False
    for acct in config.google_accounts:
        if account and acct.label != account:
            continue

        click.echo(f"\nAuthenticating: {acct.label or acct.config_folder}")
        source = GoogleCalendarEventSource(
            config_folder=acct.config_folder,
            label=acct.label,
            client_secret_file=config.google_client_secret_file,
        )
        if source.authenticate():
            click.echo(f"  ✓ Token saved to {source._token_path}")
        else:
            click.echo("  ✗ Authentication failed", err=True)
            failed = True

    if failed:
        sys.exit(1)


@main.command("cal-debug")
def cal_debug():
    """Debug calendar connectivity per source."""
    config = load_config()
    composite = CompositeEventSource(config)

    if not composite.sources:
        click.echo("No calendar sources configured (set CALENDAR_SOURCES in caltools.conf)")
        return

    today = date.today()
    for source in composite.sources:
        label = getattr(source, "label", type(source).__name__)
        click.echo(f"\nSource: {label}")

        if isinstance(source, GoogleCalendarEventSource):
            try:
                calendars = source.list_calendars()
            except CalendarUnavailableError as e:
                click.echo(f"  ✗ Failed: {e}")
                continue
            click.echo("  Calendars:")
            for access, name in calendars:
                click.echo(f"    {access:16} {name}")
            if source.calendars:
                click.echo(f"  Filter: {', '.join(source.calendars)}")
            else:
                click.echo("  Filter: (primary calendar)")

        try:
            events = source.fetch_range(today, today)
        except CalendarUnavailableError as e:
            click.echo(f"  ✗ Failed: {e}")
            continue
        click.echo(f"  ✓ Today's events: {len(events)} ({len(filter_all_day(events))} all-day)")


if __name__ == "__main__":
    main()
