"""Dashboard estimates derived from the cycle engine.

Mood and pain cards, and the choice between the "things to do" card and the
readiness checklist.  Everything here reads the engine; nothing writes back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from supporther.cycle.config_loader import SupportConfig
from supporther.cycle.engine import CycleEngine
from supporther.cycle.phase import CyclePhase
from supporther.cycle.ranges import DateLike, days_between

logger = logging.getLogger("supporther.support.insights")


class Mood(str, Enum):
    happy = "Happy"
    playful = "Playful"
    cranky = "Cranky"
    painful = "Painful"


MOOD_BY_PHASE: dict[CyclePhase, Mood] = {
    CyclePhase.follicular: Mood.happy,
    CyclePhase.ovulatory: Mood.playful,
    CyclePhase.luteal: Mood.cranky,
    CyclePhase.menstruating: Mood.painful,
}


class DashboardCard(str, Enum):
    things_to_do = "things_to_do"
    readiness_check = "readiness_check"


# Pain levels are on a 0.0–1.0 slider
_SEVERE_LEVEL = 0.9
_MILD_LEVEL = 0.7
_NORMAL_LEVEL = 0.4
_BASELINE_LEVEL = 0.1


@dataclass(frozen=True)
class PainEstimate:
    """Estimated pain for today.

    Attributes:
        level: Slider position 0.0–1.0.
        label: Text shown under the slider.
    """

    level: float
    label: str

    @property
    def color(self) -> str:
        return pain_level_color(self.level)


NO_PAIN_DATA = PainEstimate(level=0.0, label="No Data")


def pain_level_color(level: float) -> str:
    """Colour band for a slider position."""
    if level < 0.25:
        return "green"
    if level < 0.5:
        return "yellow"
    if level < 0.75:
        return "orange"
    return "red"


def pain_level_text(level: float) -> str:
    """Spoken description for a slider position."""
    if level < 0.25:
        return "No Pain"
    if level < 0.5:
        return "Mild Pain"
    if level < 0.75:
        return "Moderate Pain"
    return "Severe Pain"


def estimate_mood(engine: CycleEngine) -> Mood | None:
    """Mood for the cached current phase, None before a period is recorded."""
    if engine.start_date is None:
        return None
    return MOOD_BY_PHASE[engine.current_phase]


def estimate_pain(
    engine: CycleEngine,
    today: DateLike | None = None,
    config: SupportConfig | None = None,
) -> PainEstimate:
    """Estimate pain from the distance to the recorded period start.

    The first two days of the period are the worst, the three days before
    it are mild, the rest of the period is normal.
    """
    if engine.start_date is None:
        return NO_PAIN_DATA
    windows = (config or engine.config.support).pain_windows
    offset = days_between(engine.start_date, engine.resolve_today(today))

    def _within(label: str) -> bool:
        low, high = windows[label]
        return low <= offset <= high

    if _within("severe"):
        return PainEstimate(level=_SEVERE_LEVEL, label="Severe Pain")
    if _within("mild"):
        return PainEstimate(level=_MILD_LEVEL, label="Mild Pain")
    if _within("normal"):
        return PainEstimate(level=_NORMAL_LEVEL, label="Normal Pain")
    return PainEstimate(level=_BASELINE_LEVEL, label="Normal Pain")


def dashboard_card(engine: CycleEngine) -> DashboardCard | None:
    """Pick the support card to show under the mood and pain cards."""
    if engine.start_date is None:
        return None
    if engine.current_phase is CyclePhase.menstruating:
        return DashboardCard.things_to_do
    return DashboardCard.readiness_check
