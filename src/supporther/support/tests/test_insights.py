"""Tests for mood/pain estimates and dashboard card selection."""

from __future__ import annotations

from datetime import date

import pytest

from supporther.cycle.config_loader import SupportConfig
from supporther.cycle.engine import CycleEngine
from supporther.cycle.phase import CyclePhase
from supporther.support.insights import (
    DashboardCard,
    Mood,
    dashboard_card,
    estimate_mood,
    estimate_pain,
    pain_level_color,
    pain_level_text,
)


class TestMood:
    def test_no_data(self, empty_engine: CycleEngine) -> None:
        assert estimate_mood(empty_engine) is None

    @pytest.mark.parametrize(
        "today,expected",
        [
            (date(2025, 1, 3), Mood.painful),
            (date(2025, 1, 10), Mood.happy),
            (date(2025, 1, 14), Mood.playful),
            (date(2025, 1, 20), Mood.cranky),
        ],
    )
    def test_mood_follows_current_phase(
        self, engine: CycleEngine, today: date, expected: Mood
    ) -> None:
        engine.update_current_phase(today)
        assert estimate_mood(engine) is expected


class TestPain:
    def test_no_data(self, empty_engine: CycleEngine) -> None:
        estimate = estimate_pain(empty_engine)
        assert estimate.level == 0.0
        assert estimate.label == "No Data"

    @pytest.mark.parametrize(
        "today,level,label",
        [
            (date(2025, 1, 1), 0.9, "Severe Pain"),
            (date(2025, 1, 2), 0.9, "Severe Pain"),
            (date(2024, 12, 29), 0.7, "Mild Pain"),
            (date(2024, 12, 31), 0.7, "Mild Pain"),
            (date(2025, 1, 3), 0.4, "Normal Pain"),
            (date(2025, 1, 6), 0.4, "Normal Pain"),
            (date(2025, 1, 7), 0.1, "Normal Pain"),
            (date(2024, 12, 28), 0.1, "Normal Pain"),
        ],
    )
    def test_pain_by_offset(
        self, engine: CycleEngine, today: date, level: float, label: str
    ) -> None:
        estimate = estimate_pain(engine, today=today)
        assert estimate.level == pytest.approx(level)
        assert estimate.label == label

    def test_custom_windows(self, engine: CycleEngine) -> None:
        config = SupportConfig(pain_windows={"severe": (0, 3), "mild": (-1, -1), "normal": (4, 4)})
        assert estimate_pain(engine, today=date(2025, 1, 4), config=config).label == "Severe Pain"

    @pytest.mark.parametrize(
        "level,color,text",
        [
            (0.1, "green", "No Pain"),
            (0.4, "yellow", "Mild Pain"),
            (0.7, "orange", "Moderate Pain"),
            (0.9, "red", "Severe Pain"),
        ],
    )
    def test_level_bands(self, level: float, color: str, text: str) -> None:
        assert pain_level_color(level) == color
        assert pain_level_text(level) == text

    def test_estimate_color(self, engine: CycleEngine) -> None:
        assert estimate_pain(engine, today=date(2025, 1, 1)).color == "red"


class TestDashboardCard:
    def test_no_data_shows_nothing(self, empty_engine: CycleEngine) -> None:
        assert dashboard_card(empty_engine) is None

    def test_things_to_do_while_menstruating(self, engine: CycleEngine) -> None:
        engine.update_current_phase(date(2025, 1, 3))
        assert engine.current_phase is CyclePhase.menstruating
        assert dashboard_card(engine) is DashboardCard.things_to_do

    def test_readiness_check_otherwise(self, engine: CycleEngine) -> None:
        assert dashboard_card(engine) is DashboardCard.readiness_check
