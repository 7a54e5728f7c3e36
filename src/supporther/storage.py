"""Key-value persistence for SupportHER state.

The cycle engine and the support helpers keep a handful of scalar and
set-valued fields (the recorded period dates, checklist state, quest
progress).  They read them once at construction and write them back on
every mutation.  Values are kept as JSON primitives so every store
behaves the same way whether it lives in memory or on disk:

    datetime  -> ISO 8601 string
    set       -> sorted list

Decoding goes through pydantic ``TypeAdapter`` so a malformed value is
treated as "no saved value" instead of crashing the caller.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable

from pydantic import TypeAdapter, ValidationError

from supporther.config import Settings, get_settings

logger = logging.getLogger("supporther.storage")

# Store keys (camelCase, matching the app's saved-state names)
CYCLE_START_KEY = "cycleStartDate"
PERIOD_END_KEY = "periodEndDate"
READINESS_CHECKED_KEY = "readinessChecked"
LAST_RESET_KEY = "lastResetDate"
CARE_PLAN_KEY = "carePlanPreferences"
QUEST_COMPLETED_KEY = "questCompletedDays"
QUEST_START_KEY = "questStartDate"
CARE_PLAN_RESET_KEY = "carePlanLastResetDate"

_DATETIME = TypeAdapter(datetime)


class KeyValueStore(ABC):
    """Passive key-value sink/source used by the engine and support helpers.

    Subclasses only implement raw ``get``/``set``/``delete`` over JSON
    primitives; the typed helpers below handle encoding.
    """

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the raw stored value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a raw JSON-compatible value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key.  Missing keys are ignored."""

    # ------------------------------------------------------------------
    # Typed helpers
    # ------------------------------------------------------------------

    def get_datetime(self, key: str) -> datetime | None:
        """Decode a stored timestamp.

        Returns:
            The datetime, or None if the key is absent or undecodable.
        """
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return _DATETIME.validate_python(raw)
        except ValidationError:
            logger.warning("Ignoring undecodable datetime stored under %r: %r", key, raw)
            return None

    def set_datetime(self, key: str, value: date | datetime) -> None:
        if not isinstance(value, datetime):
            value = datetime.combine(value, datetime.min.time())
        self.set(key, value.isoformat())

    def get_set(self, key: str, item_type: type = str) -> set:
        """Decode a stored set of ``item_type`` values.

        Returns:
            The set, or an empty set if the key is absent or undecodable.
        """
        raw = self.get(key)
        if raw is None:
            return set()
        try:
            return TypeAdapter(set[item_type]).validate_python(raw)
        except ValidationError:
            logger.warning("Ignoring undecodable set stored under %r: %r", key, raw)
            return set()

    def set_set(self, key: str, values: Iterable[Any]) -> None:
        self.set(key, sorted(values))


class InMemoryStore(KeyValueStore):
    """Dict-backed store.  Used in tests and for throwaway sessions."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, Any]:
        """Return a copy of the raw stored data."""
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """Store backed by a single JSON object on disk.

    The file is read once at construction.  Every write rewrites the whole
    file through a temporary sibling and ``os.replace`` so a crash never
    leaves a half-written document behind.  Read failures start the store
    empty; write failures are logged and dropped.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = self._load()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError):
            logger.warning("Failed to read store %s; starting empty", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store %s does not hold a JSON object; starting empty", self.path)
            return {}
        return data

    def _save(self) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as fh:
                json.dump(self._data, fh, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except OSError:
            logger.exception("Failed to write store %s", self.path)

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def delete(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._save()


def open_store(settings: Settings | None = None) -> JsonFileStore:
    """Open the JSON file store at the configured ``store_path``."""
    settings = settings or get_settings()
    logger.info("Opening store at %s", settings.store_path)
    return JsonFileStore(settings.store_path)
