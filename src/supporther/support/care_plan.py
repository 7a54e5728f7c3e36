"""Care-plan preferences and the checklist generated from them."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from supporther.storage import CARE_PLAN_KEY, CARE_PLAN_RESET_KEY, KeyValueStore

logger = logging.getLogger("supporther.support.care_plan")

# Helps and red flags beyond this are kept but not shown
MAX_CHECKLIST_ENTRIES = 3


class ComfortType(str, Enum):
    hug = "A warm hug"
    space = "Some quiet space"
    distraction = "A gentle distraction"
    talk = "Someone to talk to"

    @property
    def icon(self) -> str:
        return _COMFORT_ICONS[self]


_COMFORT_ICONS = {
    ComfortType.hug: "heart.circle.fill",
    ComfortType.space: "figure.walk",
    ComfortType.distraction: "gamecontroller.fill",
    ComfortType.talk: "bubble.left.and.bubble.right.fill",
}


class CarePlanPreferences(BaseModel):
    """What helps, what to avoid, and what to watch for."""

    model_config = ConfigDict(str_strip_whitespace=True)

    comfort_preference: ComfortType = ComfortType.hug
    top_helps: list[str] = Field(default_factory=list)
    top_avoids: list[str] = Field(default_factory=list)
    red_flags: list[str] = Field(default_factory=list)


class CarePlan:
    """Load, save, and turn preferences into a checklist.

    The checklist is unchecked once per calendar month, like the readiness
    checklist.

    Args:
        store: Holds the preferences and the last reset timestamp.
        clock: Returns "now". Defaults to ``datetime.now``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or datetime.now
        self.preferences: CarePlanPreferences | None = self._load()
        self.checklist: list[tuple[str, bool]] = self._generate_checklist()
        self.reset_if_needed()

    def _load(self) -> CarePlanPreferences | None:
        raw = self._store.get(CARE_PLAN_KEY)
        if raw is None:
            return None
        try:
            return CarePlanPreferences.model_validate_json(raw)
        except (ValidationError, TypeError):
            logger.warning("Ignoring undecodable care plan preferences", exc_info=True)
            return None

    def save(self, preferences: CarePlanPreferences) -> None:
        self.preferences = preferences
        self._store.set(CARE_PLAN_KEY, preferences.model_dump_json())
        self.checklist = self._generate_checklist()

    def _generate_checklist(self) -> list[tuple[str, bool]]:
        prefs = self.preferences
        if prefs is None:
            return []
        items = [(f"Remember: {prefs.comfort_preference.value}", False)]
        items += [(h, False) for h in prefs.top_helps[:MAX_CHECKLIST_ENTRIES] if h]
        items += [(f"Watch for: {f}", False) for f in prefs.red_flags[:MAX_CHECKLIST_ENTRIES] if f]
        return items

    def toggle(self, index: int) -> None:
        """Flip the checklist entry at ``index``.  Out-of-range indexes are ignored."""
        if 0 <= index < len(self.checklist):
            text, done = self.checklist[index]
            self.checklist[index] = (text, not done)

    def uncheck_all(self) -> None:
        self.checklist = [(text, False) for text, _ in self.checklist]

    def reset_if_needed(self, now: datetime | None = None) -> bool:
        """Uncheck everything if no reset has happened this calendar month.

        Returns:
            True if a reset happened.
        """
        now = now or self._clock()
        last_reset = self._store.get_datetime(CARE_PLAN_RESET_KEY)
        if last_reset is not None and (last_reset.year, last_reset.month) == (now.year, now.month):
            return False
        self.uncheck_all()
        self._store.set_datetime(CARE_PLAN_RESET_KEY, now)
        logger.debug("Care plan checklist reset for %04d-%02d", now.year, now.month)
        return True
