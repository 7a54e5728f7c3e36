"""Readiness checklist shown outside the period.

A fixed list of things to have ready before the next period.  Checked items
persist across sessions and are cleared once per calendar month.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from supporther.storage import LAST_RESET_KEY, READINESS_CHECKED_KEY, KeyValueStore

logger = logging.getLogger("supporther.support.readiness")


@dataclass(frozen=True)
class ChecklistItem:
    name: str
    icon: str


READINESS_ITEMS: tuple[ChecklistItem, ...] = (
    ChecklistItem("Pills", "cross.case.fill"),
    ChecklistItem("Heating Bag", "flame.fill"),
    ChecklistItem("Warm Water", "drop.fill"),
    ChecklistItem("Sanitary Products", "heart.circle.fill"),
    ChecklistItem("Disposable Bags", "bag.fill"),
    ChecklistItem("Comfort Snacks", "heart.fill"),
    ChecklistItem("Warm Drinks", "cup.and.saucer.fill"),
)


class ReadinessChecklist:
    """Checklist state with a monthly reset.

    Args:
        store: Holds the checked item names and the last reset timestamp.
        clock: Returns "now". Defaults to ``datetime.now``.
        items: Checklist items. Defaults to ``READINESS_ITEMS``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] | None = None,
        items: tuple[ChecklistItem, ...] = READINESS_ITEMS,
    ) -> None:
        self._store = store
        self._clock = clock or datetime.now
        self.items = items
        known = {item.name for item in items}
        self._checked: set[str] = self._store.get_set(READINESS_CHECKED_KEY) & known
        self.reset_if_needed()

    @property
    def checked(self) -> set[str]:
        return set(self._checked)

    def is_checked(self, name: str) -> bool:
        return name in self._checked

    def toggle(self, name: str) -> bool:
        """Flip one item and return its new state.

        Raises:
            KeyError: If ``name`` is not on the checklist.
        """
        if name not in {item.name for item in self.items}:
            raise KeyError(name)
        if name in self._checked:
            self._checked.discard(name)
        else:
            self._checked.add(name)
        self._store.set_set(READINESS_CHECKED_KEY, self._checked)
        return name in self._checked

    def reset_if_needed(self, now: datetime | None = None) -> bool:
        """Clear the checklist if it has not been reset this calendar month.

        Returns:
            True if a reset happened.
        """
        now = now or self._clock()
        last_reset = self._store.get_datetime(LAST_RESET_KEY)
        if last_reset is not None and (last_reset.year, last_reset.month) == (now.year, now.month):
            return False
        self._checked.clear()
        self._store.set_set(READINESS_CHECKED_KEY, self._checked)
        self._store.set_datetime(LAST_RESET_KEY, now)
        logger.debug("Readiness checklist reset for %04d-%02d", now.year, now.month)
        return True
