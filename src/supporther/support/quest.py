"""Seven-day support quest progress.

Tracks which quest days are done and when the quest was started.  Day
content lives with the presentation layer; this module keeps score and
the reflection message for it.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from supporther.cycle.config_loader import SupportConfig, get_cycle_config
from supporther.storage import QUEST_COMPLETED_KEY, QUEST_START_KEY, KeyValueStore

logger = logging.getLogger("supporther.support.quest")


class QuestStage(str, Enum):
    """Reflection band for the support score."""

    not_started = "not_started"
    getting_started = "getting_started"
    building = "building"
    almost_there = "almost_there"
    complete = "complete"

    @property
    def reflection(self) -> str:
        return QUEST_REFLECTIONS[self]


QUEST_REFLECTIONS: dict[QuestStage, str] = {
    QuestStage.not_started: (
        "Your quest hasn't started yet. Take your time — every small step matters."
    ),
    QuestStage.getting_started: (
        "You've taken your first steps. Showing up is what counts most."
    ),
    QuestStage.building: (
        "You're building a meaningful habit of care. That takes real intention."
    ),
    QuestStage.almost_there: (
        "Your commitment to understanding and supporting is making a difference."
    ),
    QuestStage.complete: (
        "You completed the full quest. This kind of empathy and effort is rare and deeply valued."
    ),
}


class QuestProgress:
    """Completion bookkeeping for the support quest.

    Args:
        store:  Holds completed day numbers and the quest start timestamp.
        config: Supplies the number of quest days.
        clock:  Returns "now". Defaults to ``datetime.now``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        config: SupportConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or datetime.now
        self.total_days = (config or get_cycle_config().support).quest_days
        stored = self._store.get_set(QUEST_COMPLETED_KEY, int)
        self._completed: set[int] = {d for d in stored if 1 <= d <= self.total_days}
        self.started_at: datetime | None = self._store.get_datetime(QUEST_START_KEY)

    def _check_day(self, day: int) -> None:
        if not 1 <= day <= self.total_days:
            raise ValueError(f"Quest day must be between 1 and {self.total_days}, got {day}")

    def _persist(self) -> None:
        self._store.set_set(QUEST_COMPLETED_KEY, self._completed)

    @property
    def completed_days(self) -> set[int]:
        return set(self._completed)

    @property
    def support_score(self) -> int:
        return len(self._completed)

    @property
    def is_complete(self) -> bool:
        return len(self._completed) == self.total_days

    @property
    def stage(self) -> QuestStage:
        done = len(self._completed)
        if done == 0:
            return QuestStage.not_started
        if done <= 2:
            return QuestStage.getting_started
        if done <= 4:
            return QuestStage.building
        if done < self.total_days:
            return QuestStage.almost_there
        return QuestStage.complete

    @property
    def reflection(self) -> str:
        """Reflection message for the current support score."""
        return self.stage.reflection

    def is_day_completed(self, day: int) -> bool:
        return day in self._completed

    def mark_day_completed(self, day: int) -> None:
        """Mark a day done, starting the quest clock on the first completion."""
        self._check_day(day)
        if self.started_at is None:
            self.started_at = self._clock()
            self._store.set_datetime(QUEST_START_KEY, self.started_at)
            logger.debug("Support quest started at %s", self.started_at)
        self._completed.add(day)
        self._persist()

    def undo_day_completion(self, day: int) -> None:
        self._check_day(day)
        self._completed.discard(day)
        self._persist()

    def reset(self) -> None:
        self._completed.clear()
        self.started_at = None
        self._persist()
        self._store.delete(QUEST_START_KEY)
