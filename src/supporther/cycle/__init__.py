"""Cycle phase and period-range engine.

Modules:
    engine        — CycleEngine: recorded period, phases, predictions, proximity
    phase         — CyclePhase enum and normalised-day segment mapping
    ranges        — PeriodRange, calendar-day arithmetic, future projection
    calendar      — Month grid cells for the calendar display
    config_loader — Load/validate/reload cycle_config.yaml
"""

from supporther.cycle.config_loader import CycleConfig, get_cycle_config
from supporther.cycle.engine import CycleEngine
from supporther.cycle.phase import CyclePhase
from supporther.cycle.ranges import PeriodRange

__all__ = [
    "CycleEngine",
    "CyclePhase",
    "PeriodRange",
    "CycleConfig",
    "get_cycle_config",
]
