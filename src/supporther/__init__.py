"""SupportHER cycle engine.

This package tracks a partner's menstrual cycle from one recorded period and
derives what the support dashboard shows: the phase for any date, predicted
future periods, and how close today is to the next one.

Subpackages:
    cycle/   — Cycle engine, phase model, period ranges, month grid, config
    support/ — Mood/pain estimates, readiness checklist, care plan, quest

Core modules:
    config  — Process settings and logging setup
    storage — Key-value persistence (in-memory and JSON file)
"""

from supporther.cycle.engine import CycleEngine
from supporther.cycle.phase import CyclePhase
from supporther.cycle.ranges import PeriodRange
from supporther.storage import InMemoryStore, JsonFileStore, KeyValueStore, open_store

__all__ = [
    "CycleEngine",
    "CyclePhase",
    "PeriodRange",
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "open_store",
]
