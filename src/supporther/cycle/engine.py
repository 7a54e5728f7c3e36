"""Cycle phase and period-range engine.

Owns the most recently recorded period (start and end date), derives the
phase for any date from a fixed-length cycle model, keeps a rolling window
of predicted future periods, and answers the "how close are we to a
period" questions the dashboard asks.

State changes only through the explicit setters, which write through to
the injected key-value store before returning.  Everything else is a pure
query over in-memory state and "today".  Missing data never raises: with
no recorded start, predicates return False and phase lookups return None.

Usage::

    engine = CycleEngine(JsonFileStore("state.json"))
    engine.record_period_start(date(2025, 1, 1))
    engine.get_phase_for(date(2025, 1, 14))   # CyclePhase.ovulatory
    engine.is_within_days_before_period(5, 0)
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from supporther.cycle.config_loader import CycleConfig, CycleModelConfig, get_cycle_config
from supporther.cycle.phase import (
    NO_DATA_COLOR,
    NO_DATA_DISPLAY,
    CyclePhase,
    normalize_day,
    phase_for_normalized_day,
)
from supporther.cycle.ranges import (
    DateLike,
    PeriodRange,
    as_datetime,
    as_day,
    days_between,
    hours_between,
    project_future_ranges,
)
from supporther.storage import CYCLE_START_KEY, PERIOD_END_KEY, KeyValueStore

logger = logging.getLogger("supporther.cycle.engine")

# Default end date offset applied when a start date is picked
DEFAULT_END_OFFSET_DAYS = 5


class CycleEngine:
    """Track one recorded period and derive phases and predictions from it.

    Args:
        store:  Persistence store read at construction and written on every
                start/end mutation.
        config: Cycle model configuration. Defaults to the bundled YAML.
        clock:  Returns "now". Defaults to ``datetime.now``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        config: CycleConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._config = config or get_cycle_config()
        self._clock = clock or datetime.now

        self.start_date: datetime | None = None
        self.end_date: datetime | None = None
        self.future_ranges: list[PeriodRange] = []
        self.current_phase: CyclePhase = CyclePhase.follicular

        self._restore()
        self.update_current_phase()

    @property
    def config(self) -> CycleConfig:
        return self._config

    @property
    def _model(self) -> CycleModelConfig:
        return self._config.cycle

    def resolve_today(self, today: DateLike | None = None) -> datetime:
        """Return ``today`` as a datetime, or the clock's now."""
        return as_datetime(today) if today is not None else self._clock()

    def _restore(self) -> None:
        self.start_date = self._store.get_datetime(CYCLE_START_KEY)
        saved_end = self._store.get_datetime(PERIOD_END_KEY)
        if saved_end is not None:
            self.end_date = saved_end
            self.regenerate_future_ranges()
        logger.debug("Restored cycle record start=%s end=%s", self.start_date, self.end_date)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_start_date(self, value: DateLike) -> None:
        """Record a new period start and persist it.

        Future ranges are left alone until an end date is set.
        """
        self.start_date = as_datetime(value)
        self._store.set_datetime(CYCLE_START_KEY, self.start_date)
        logger.debug("Period start set to %s", self.start_date.date())

    def set_end_date(self, value: DateLike) -> None:
        """Record the period end, persist it, and re-project future periods."""
        self.end_date = as_datetime(value)
        self._store.set_datetime(PERIOD_END_KEY, self.end_date)
        logger.debug("Period end set to %s", self.end_date.date())
        self.regenerate_future_ranges()

    def record_period_start(self, value: DateLike, today: DateLike | None = None) -> None:
        """Start a new period with the default end date.

        Sets the start, sets the end ``DEFAULT_END_OFFSET_DAYS`` later (which
        re-projects future ranges), then refreshes the cached phase.
        """
        self.set_start_date(value)
        self.set_end_date(self.start_date + timedelta(days=DEFAULT_END_OFFSET_DAYS))
        self.update_current_phase(today)

    def regenerate_future_ranges(self) -> None:
        """Rebuild the predicted period ranges from the current record."""
        self.future_ranges = []
        if self.start_date is None:
            return
        self.future_ranges = project_future_ranges(
            self.start_date,
            period_length=self.period_length,
            cycle_length=self._model.cycle_length,
            count=self._model.forecast_cycles,
        )
        logger.debug(
            "Projected %d future periods of %d days from %s",
            len(self.future_ranges),
            self.period_length,
            self.start_date.date(),
        )

    # ------------------------------------------------------------------
    # Range queries
    # ------------------------------------------------------------------

    @property
    def period_length(self) -> int:
        """Days between start and end, or the default without an end date.

        Clamped to at least 1 so an end date before the start never yields
        inverted future ranges.
        """
        if self.start_date is None or self.end_date is None:
            return self._model.default_period_length
        return max(1, days_between(self.start_date, self.end_date))

    @property
    def recorded_range(self) -> PeriodRange | None:
        if self.start_date is None or self.end_date is None:
            return None
        return PeriodRange(start=self.start_date, end=self.end_date)

    def is_date_in_period(self, value: DateLike) -> bool:
        """True if the day is inside the recorded period or any predicted one."""
        recorded = self.recorded_range
        if recorded is not None and recorded.contains(value):
            return True
        return any(r.contains(value) for r in self.future_ranges)

    def is_future_period_start(self, value: DateLike) -> bool:
        return any(r.starts_on(value) for r in self.future_ranges)

    def is_future_period_date(self, value: DateLike) -> bool:
        return any(r.contains(value) for r in self.future_ranges)

    def is_period_start(self, value: DateLike) -> bool:
        """True on the recorded start day or any predicted start day."""
        if self.start_date is not None and as_day(self.start_date) == as_day(value):
            return True
        return self.is_future_period_start(value)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def get_phase_for(self, value: DateLike) -> CyclePhase | None:
        """Return the phase for a day, or None with no recorded start."""
        if self.is_date_in_period(value):
            return CyclePhase.menstruating
        if self.start_date is None:
            return None
        day = normalize_day(days_between(self.start_date, value), self._model.cycle_length)
        return phase_for_normalized_day(day, self._model)

    def update_current_phase(self, today: DateLike | None = None) -> CyclePhase:
        """Refresh the cached phase for today.

        A missing phase (no data yet) keeps the previously cached value.
        """
        phase = self.get_phase_for(self.resolve_today(today))
        if phase is not None:
            self.current_phase = phase
        return self.current_phase

    def is_currently_menstruating(self, today: DateLike | None = None) -> bool:
        return self.is_date_in_period(self.resolve_today(today))

    def current_phase_display(self, today: DateLike | None = None) -> str:
        if self.start_date is None:
            return NO_DATA_DISPLAY
        if self.is_currently_menstruating(today):
            return CyclePhase.menstruating.value
        return self.current_phase.value

    def current_phase_color(self, today: DateLike | None = None) -> str:
        if self.start_date is None:
            return NO_DATA_COLOR
        if self.is_currently_menstruating(today):
            return CyclePhase.menstruating.color
        return self.current_phase.color

    @property
    def period_range_text(self) -> str:
        """Short label for the period picker button."""
        if self.start_date is None:
            return "Set Period"
        start = f"{self.start_date.day} {self.start_date:%b}"
        if self.end_date is None:
            return f"Started {start}"
        return f"{start} - {self.end_date.day} {self.end_date:%b}"

    # ------------------------------------------------------------------
    # Proximity predicates
    # ------------------------------------------------------------------

    def next_period_start(self, today: DateLike | None = None) -> datetime | None:
        """First cycle boundary on or after today's day.

        Lands exactly on ``start + cycle_length * k``.  The number of whole
        cycles to skip is computed directly, so a start far in the past or
        future costs the same.  On a boundary day that day is returned.
        """
        if self.start_date is None:
            return None
        cycle_length = self._model.cycle_length
        elapsed = days_between(self.start_date, self.resolve_today(today))
        if elapsed <= 0:
            return self.start_date
        cycles = -(-elapsed // cycle_length)
        return self.start_date + timedelta(days=cycle_length * cycles)

    def days_until_next_period(self, today: DateLike | None = None) -> int | None:
        now = self.resolve_today(today)
        upcoming = self.next_period_start(now)
        if upcoming is None:
            return None
        return days_between(now, upcoming)

    def is_within_days_before_period(
        self, start_days: int, end_days: int, today: DateLike | None = None
    ) -> bool:
        """True if the next period starts between ``end_days`` and ``start_days`` days from today."""
        days_until = self.days_until_next_period(today)
        if days_until is None:
            return False
        return end_days <= days_until <= start_days

    def is_within_24_hours_after_period_start(self, today: DateLike | None = None) -> bool:
        if self.start_date is None:
            return False
        return 0 <= hours_between(self.start_date, self.resolve_today(today)) <= 24

    def is_within_days_after_period_start(self, days: int, today: DateLike | None = None) -> bool:
        """True during the first ``days`` days of the recorded or any predicted period."""
        if self.start_date is None:
            return False
        now = self.resolve_today(today)
        starts = [self.start_date, *(r.start for r in self.future_ranges)]
        return any(0 <= days_between(s, now) < days for s in starts)
