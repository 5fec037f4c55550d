"""Pure day-off domain logic - classification, range building and merging."""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import IntEnum

ONE_DAY = timedelta(days=1)


class DayOffType(IntEnum):
    """Kind of day off, ranked lowest first. A higher rank always wins."""

    WEEKEND = 0
    HOLIDAY = 1
    SICK_LEAVE = 2
    VACATION = 3

    @property
    def uses_budget(self) -> bool:
        return self in (DayOffType.SICK_LEAVE, DayOffType.VACATION)


class InvalidLeaveRequestError(ValueError):
    """Raised when a leave request ends before it starts."""


def is_weekend(d: date) -> bool:
    """Saturday or Sunday."""
    return d.weekday() >= 5


@dataclass(frozen=True)
class DayOff:
    """A single calendar day with its day-off type.

    Weekend days are always typed WEEKEND, whatever type was requested.
    """

    date: date
    type: DayOffType

    def __post_init__(self):
        if is_weekend(self.date) and self.type != DayOffType.WEEKEND:
            object.__setattr__(self, "type", DayOffType.WEEKEND)

    def upgraded(self, to: DayOffType) -> "DayOff":
        """Copy with the higher-ranked of the current and given type."""
        if self.type >= to:
            return self
        # Bypass __post_init__ so an upgrade may lift a weekend day.
        result = replace(self)
        object.__setattr__(result, "type", to)
        return result


def classify(d: date, requested_type: DayOffType) -> DayOff:
    """Label a date, forcing weekends to WEEKEND."""
    return DayOff(date=d, type=requested_type)


@dataclass(frozen=True)
class DayOffRange:
    """A dense run of days off covering [start, end], plus an optional name."""

    days_off: tuple[DayOff, ...]
    name: str | None = None

    def __post_init__(self):
        if not self.days_off:
            raise ValueError("DayOffRange needs at least one day")
        object.__setattr__(self, "days_off", tuple(self.days_off))

    @classmethod
    def from_leave(
        cls,
        type: DayOffType,
        start: date,
        end: date,
        name: str | None = None,
    ) -> "DayOffRange":
        """
        Build a range from a leave request.

        The range is padded outward so that weekends directly before the
        start and directly after the end belong to the same range.

        Raises:
            InvalidLeaveRequestError: if start is after end.
        """
        if start > end:
            raise InvalidLeaveRequestError(
                f"Leave request starts after it ends: {start.isoformat()} > {end.isoformat()}"
            )

        while is_weekend(start - ONE_DAY):
            start -= ONE_DAY
        while is_weekend(end + ONE_DAY):
            end += ONE_DAY

        count = (end - start).days + 1
        days = tuple(classify(start + timedelta(days=i), type) for i in range(count))
        return cls(days_off=days, name=name)

    @property
    def start(self) -> date:
        return self.days_off[0].date

    @property
    def end(self) -> date:
        return self.days_off[-1].date

    @property
    def total_days(self) -> int:
        return len(self.days_off)

    @property
    def used_days(self) -> int:
        """Days that consume the time-off budget (sick leave and vacation)."""
        return sum(1 for d in self.days_off if d.type.uses_budget)

    def merge(self, other: "DayOffRange") -> list["DayOffRange"]:
        """Merge with another range. See :func:`merge`."""
        return merge(self, other)


def build_range(
    type: DayOffType,
    start: date,
    end: date,
    name: str | None = None,
) -> DayOffRange:
    """Expand a leave request into a weekend-padded range of classified days."""
    return DayOffRange.from_leave(type, start, end, name)


def _overlay_by_position(
    first: tuple[DayOff, ...],
    second: tuple[DayOff, ...],
) -> list[DayOff]:
    """
    Overlay `second` onto `first` starting at `second`'s first date.

    Inside the overlap, days are paired by index rather than by date. This
    only lines up because both sequences are dense with a one-day step;
    ranges with any other step would be paired wrongly.
    """
    second_start = second[0].date
    merged: list[DayOff] = []
    index = 0

    for day in first:
        if day.date < second_start:
            merged.append(day)
        elif index < len(second):
            merged.append(day.upgraded(second[index].type))
            index += 1
        else:
            # `first` runs past the end of `second`
            merged.append(day)

    merged.extend(second[index:])
    return merged


def merge(a: DayOffRange, b: DayOffRange) -> list[DayOffRange]:
    """
    Merge two ranges if they overlap or touch.

    Returns [a, b] or [b, a] (ordered by start) when there is at least one
    free day between them, otherwise a single merged range whose days carry
    the higher-ranked type where both ranges cover the same day.

    The merged name comes from the longer range; ties keep `a`'s name.
    """
    if a.end + ONE_DAY < b.start:
        return [a, b]
    if b.end + ONE_DAY < a.start:
        return [b, a]

    first, second = (a, b) if a.start < b.start else (b, a)
    days = _overlay_by_position(first.days_off, second.days_off)
    name = a.name if a.total_days >= b.total_days else b.name

    return [DayOffRange(days_off=tuple(days), name=name)]
