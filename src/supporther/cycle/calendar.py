"""Month grid for the cycle calendar display.

The calendar renders whole weeks covering the visible month.  For every cell
it needs the day, whether it belongs to the visible month, and what the
engine says about it (phase, period membership, period start).
"""

from __future__ import annotations

import calendar as _calendar
from dataclasses import dataclass
from datetime import date, timedelta

from supporther.cycle.engine import CycleEngine
from supporther.cycle.phase import CyclePhase
from supporther.cycle.ranges import DateLike, as_day

SUNDAY = _calendar.SUNDAY
MONDAY = _calendar.MONDAY

WEEKDAY_LABELS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid.

    Attributes:
        date:             The calendar day.
        is_current_month: False for leading/trailing days from adjacent months.
        is_today:         True for today's cell.
        is_period_start:  Recorded start or a predicted start falls on this day.
        in_period:        Day is inside the recorded or a predicted period.
        phase:            Phase for the day, None with no recorded start.
    """

    date: date
    is_current_month: bool
    is_today: bool
    is_period_start: bool
    in_period: bool
    phase: CyclePhase | None


def weekday_labels(first_weekday: int = SUNDAY) -> list[str]:
    """Header labels starting from ``first_weekday`` (0 = Monday)."""
    return [WEEKDAY_LABELS[(first_weekday + i) % 7] for i in range(7)]


def month_dates(month_of: DateLike, first_weekday: int = SUNDAY) -> list[date]:
    """Every day of the whole weeks spanning ``month_of``'s month."""
    day = as_day(month_of)
    first = day.replace(day=1)
    last = first.replace(day=_calendar.monthrange(first.year, first.month)[1])

    lead = (first.weekday() - first_weekday) % 7
    trail = (first_weekday + 6 - last.weekday()) % 7
    grid_start = first - timedelta(days=lead)
    total = (last - first).days + 1 + lead + trail
    return [grid_start + timedelta(days=i) for i in range(total)]


def month_grid(
    engine: CycleEngine,
    month_of: DateLike,
    today: DateLike | None = None,
    first_weekday: int = SUNDAY,
) -> list[CalendarDay]:
    """Build the calendar cells for ``month_of``'s month.

    Args:
        engine:        Engine answering phase and period questions.
        month_of:      Any day inside the month to show.
        today:         Reference for the today marker. Defaults to the
                       engine's clock.
        first_weekday: Column the week starts on (0 = Monday, 6 = Sunday).
    """
    visible = as_day(month_of)
    today_day = as_day(engine.resolve_today(today))
    cells: list[CalendarDay] = []
    for day in month_dates(visible, first_weekday):
        cells.append(
            CalendarDay(
                date=day,
                is_current_month=(day.year, day.month) == (visible.year, visible.month),
                is_today=day == today_day,
                is_period_start=engine.is_period_start(day),
                in_period=engine.is_date_in_period(day),
                phase=engine.get_phase_for(day),
            )
        )
    return cells


def shift_month(month_of: DateLike, months: int) -> date:
    """Move the visible month forward or back, clamping the day."""
    day = as_day(month_of)
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    return date(year, month, min(day.day, _calendar.monthrange(year, month)[1]))
