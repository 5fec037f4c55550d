"""Plain-text and JSON rendering of time-off ranges - no I/O dependencies."""

from datetime import date

from .days_off import DayOffRange


def format_date(d: date) -> str:
    """Medium date style, e.g. 'Jan 1, 2024'."""
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_dates(r: DayOffRange) -> str:
    if r.total_days == 1:
        return format_date(r.start)
    return f"{format_date(r.start)} to {format_date(r.end)}"


def format_range(r: DayOffRange) -> str:
    """One report line: '[used/total]  dates[: name]'."""
    line = f"[{r.used_days:2d}/{r.total_days:2d}]  {format_dates(r)}"
    if r.name is not None:
        line += f": {r.name}"
    return line


def is_muted(r: DayOffRange) -> bool:
    """Ranges made only of weekends and holidays are shown dimmed."""
    return r.used_days == 0


def summary_lines(used: int, budget: int) -> list[str]:
    return [f"Total used: {used}", f"Budget: {budget}"]


def range_to_dict(r: DayOffRange) -> dict:
    return {
        "start": r.start.isoformat(),
        "end": r.end.isoformat(),
        "name": r.name,
        "total_days": r.total_days,
        "used_days": r.used_days,
        "days": [{"date": d.date.isoformat(), "type": d.type.name.lower()} for d in r.days_off],
    }


def report_to_dict(ranges: list[DayOffRange], used: int, budget: int) -> dict:
    return {
        "ranges": [range_to_dict(r) for r in ranges],
        "total_used": used,
        "budget": budget,
    }
