"""Inclusive period ranges and calendar-day arithmetic.

All comparisons here work on calendar days.  A ``datetime`` and a ``date``
on the same day are equal for containment and day-difference purposes;
only ``hours_between`` looks at the time of day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

DateLike = date | datetime


def as_day(value: DateLike) -> date:
    """Drop the time-of-day component."""
    return value.date() if isinstance(value, datetime) else value


def as_datetime(value: DateLike) -> datetime:
    """Promote a plain date to midnight of that day."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def days_between(start: DateLike, end: DateLike) -> int:
    """Signed number of calendar days from ``start`` to ``end``."""
    return (as_day(end) - as_day(start)).days


def hours_between(start: DateLike, end: DateLike) -> int:
    """Signed whole hours from ``start`` to ``end``, truncated toward zero."""
    start_dt, end_dt = as_datetime(start), as_datetime(end)
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        # Compare a naive wall clock against an aware one as local time
        start_dt = start_dt.replace(tzinfo=None)
        end_dt = end_dt.replace(tzinfo=None)
    return int((end_dt - start_dt).total_seconds() / 3600)


@dataclass(frozen=True)
class PeriodRange:
    """A period window, inclusive on both ends.

    Attributes:
        start: First day of the period.
        end:   Last day of the period.
    """

    start: datetime
    end: datetime

    @property
    def is_valid(self) -> bool:
        return as_day(self.start) <= as_day(self.end)

    def contains(self, value: DateLike) -> bool:
        """True if ``value``'s day falls inside the range.

        An inverted range contains nothing.
        """
        if not self.is_valid:
            return False
        return as_day(self.start) <= as_day(value) <= as_day(self.end)

    def starts_on(self, value: DateLike) -> bool:
        return as_day(self.start) == as_day(value)


def project_future_ranges(
    start: DateLike,
    period_length: int,
    cycle_length: int,
    count: int,
) -> list[PeriodRange]:
    """Project ``count`` future period ranges after a recorded start.

    Range *i* (1-based) starts ``cycle_length * i`` days after ``start`` and
    spans ``period_length`` days.  Ranges are returned in chronological
    order; overlaps (period_length > cycle_length) are not merged.

    Args:
        start:         Recorded period start.
        period_length: Days per projected period, at least 1.
        cycle_length:  Days per cycle.
        count:         Number of ranges to produce.
    """
    anchor = as_datetime(start)
    span = timedelta(days=max(1, period_length) - 1)
    ranges: list[PeriodRange] = []
    for i in range(1, count + 1):
        future_start = anchor + timedelta(days=cycle_length * i)
        ranges.append(PeriodRange(start=future_start, end=future_start + span))
    return ranges
