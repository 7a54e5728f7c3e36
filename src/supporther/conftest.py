"""Shared fixtures for SupportHER tests."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest

from supporther.cycle.config_loader import CycleConfig, load_cycle_config
from supporther.cycle.engine import CycleEngine
from supporther.storage import InMemoryStore

# Canonical recorded period used across tests: 1–5 Jan 2025
PERIOD_START = datetime(2025, 1, 1)
PERIOD_END = datetime(2025, 1, 5)
TEST_NOW = datetime(2025, 1, 10, 9, 30)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cycle_config() -> CycleConfig:
    """Load the real bundled cycle config for tests."""
    return load_cycle_config()


# ---------------------------------------------------------------------------
# Store / clock fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """A clock frozen at TEST_NOW."""
    return lambda: TEST_NOW


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def empty_engine(store: InMemoryStore, cycle_config: CycleConfig, clock) -> CycleEngine:
    """An engine with nothing recorded yet."""
    return CycleEngine(store, config=cycle_config, clock=clock)


@pytest.fixture
def engine(empty_engine: CycleEngine) -> CycleEngine:
    """An engine with the 1–5 Jan 2025 period recorded."""
    empty_engine.set_start_date(PERIOD_START)
    empty_engine.set_end_date(PERIOD_END)
    empty_engine.update_current_phase()
    return empty_engine
