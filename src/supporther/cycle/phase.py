"""Cycle phases and their position inside one normalised cycle."""

from __future__ import annotations

from enum import Enum

from supporther.cycle.config_loader import CycleModelConfig


class CyclePhase(str, Enum):
    """One of the four named segments of the cycle.

    The value is the display label shown on the calendar and the phase
    banner.
    """

    menstruating = "MENSTRUATING"
    follicular = "FOLLICULAR"
    ovulatory = "OVULATORY"
    luteal = "LUTEAL"

    @property
    def color(self) -> str:
        return PHASE_COLORS[self]


PHASE_COLORS: dict[CyclePhase, str] = {
    CyclePhase.menstruating: "red",
    CyclePhase.follicular: "purple",
    CyclePhase.ovulatory: "blue",
    CyclePhase.luteal: "yellow",
}

NO_DATA_DISPLAY = "Select period dates"
NO_DATA_COLOR = "black"


def normalize_day(days_since_start: int, cycle_length: int) -> int:
    """Reduce a signed day offset into ``[0, cycle_length)``.

    Python's ``%`` already floors toward negative infinity, so offsets
    before the recorded start wrap to the end of the previous cycle.
    """
    return days_since_start % cycle_length


def phase_for_normalized_day(day: int, model: CycleModelConfig) -> CyclePhase | None:
    """Map a normalised cycle day to its non-menstruating phase.

    Segments: ``[0, follicular)`` follicular, then ovulatory, then luteal
    up to the cycle end.  Anything outside returns None.
    """
    if 0 <= day < model.ovulatory_start:
        return CyclePhase.follicular
    if model.ovulatory_start <= day < model.luteal_start:
        return CyclePhase.ovulatory
    if model.luteal_start <= day < model.cycle_end:
        return CyclePhase.luteal
    return None
