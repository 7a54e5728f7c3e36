"""Load, validate, and hot-reload the SupportHER cycle model configuration.

The config lives in ``cycle_config.yaml`` alongside this module.  At startup
it is loaded once and cached.  Call ``reload_cycle_config()`` to re-read from
disk after an edit, no restart required.

Usage::

    from supporther.cycle.config_loader import get_cycle_config

    config = get_cycle_config()
    config.cycle.cycle_length          # 28
    config.cycle.ovulatory_start       # 13
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from supporther.config import get_settings

logger = logging.getLogger("supporther.cycle.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "cycle_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class CycleModelConfig:
    """Fixed-length cycle model.

    Attributes:
        cycle_length:          Days in one cycle.
        default_period_length: Period length used when no end date is recorded.
        forecast_cycles:       Number of future period ranges to project.
        follicular_days:       Length of the follicular segment (day 0 onward).
        ovulatory_days:        Length of the ovulatory segment.
        luteal_days:           Length of the luteal segment.
    """

    cycle_length: int = 28
    default_period_length: int = 5
    forecast_cycles: int = 12
    follicular_days: int = 13
    ovulatory_days: int = 1
    luteal_days: int = 14

    @property
    def ovulatory_start(self) -> int:
        return self.follicular_days

    @property
    def luteal_start(self) -> int:
        return self.follicular_days + self.ovulatory_days

    @property
    def cycle_end(self) -> int:
        return self.follicular_days + self.ovulatory_days + self.luteal_days


@dataclass
class SupportConfig:
    """Thresholds for the support helpers.

    Attributes:
        pain_windows: label → (low, high) inclusive day offsets from the
                      recorded start.
        quest_days:   Number of days in the support quest.
    """

    pain_windows: dict[str, tuple[int, int]] = field(
        default_factory=lambda: {"severe": (0, 1), "mild": (-3, -1), "normal": (2, 5)}
    )
    quest_days: int = 7


@dataclass
class CycleConfig:
    """Complete, validated cycle configuration.

    This is the single in-memory representation of cycle_config.yaml.
    The engine and the support helpers read from this object.
    """

    version: str
    cycle: CycleModelConfig
    support: SupportConfig
    _raw: dict = field(default_factory=dict, repr=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when cycle_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Cycle config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> CycleConfig:
    """Validate the raw YAML dict and construct a CycleConfig.

    Applies defaults for missing keys, then checks every constraint and
    reports all failures at once.

    Raises:
        ConfigValidationError: If any value is missing a valid shape.
    """
    errors: list[str] = []

    def _int(d: dict, key: str, section: str, default: int) -> int:
        val = d.get(key, default)
        try:
            return int(val)
        except (TypeError, ValueError):
            errors.append(f"{section}.{key} must be an integer, got {val!r}")
            return default

    version = str(raw.get("version", "1.0"))

    # ── Cycle model ──
    cy_raw: dict[str, Any] = raw.get("cycle") or {}
    ph_raw: dict[str, Any] = cy_raw.get("phases") or {}
    cycle = CycleModelConfig(
        cycle_length=_int(cy_raw, "cycle_length", "cycle", 28),
        default_period_length=_int(cy_raw, "default_period_length", "cycle", 5),
        forecast_cycles=_int(cy_raw, "forecast_cycles", "cycle", 12),
        follicular_days=_int(ph_raw, "follicular_days", "cycle.phases", 13),
        ovulatory_days=_int(ph_raw, "ovulatory_days", "cycle.phases", 1),
        luteal_days=_int(ph_raw, "luteal_days", "cycle.phases", 14),
    )

    if cycle.cycle_length < 1:
        errors.append(f"cycle.cycle_length must be positive, got {cycle.cycle_length}")
    if cycle.default_period_length < 1:
        errors.append(
            f"cycle.default_period_length must be positive, got {cycle.default_period_length}"
        )
    if cycle.forecast_cycles < 1:
        errors.append(f"cycle.forecast_cycles must be at least 1, got {cycle.forecast_cycles}")
    for name in ("follicular_days", "ovulatory_days", "luteal_days"):
        if getattr(cycle, name) < 1:
            errors.append(f"cycle.phases.{name} must be positive, got {getattr(cycle, name)}")
    if cycle.cycle_end != cycle.cycle_length:
        errors.append(
            f"cycle.phases lengths sum to {cycle.cycle_end}, "
            f"expected cycle_length {cycle.cycle_length}"
        )

    # ── Support ──
    su_raw: dict[str, Any] = raw.get("support") or {}
    support = SupportConfig(quest_days=_int(su_raw, "quest_days", "support", 7))
    if support.quest_days < 1:
        errors.append(f"support.quest_days must be positive, got {support.quest_days}")

    windows_raw = su_raw.get("pain_windows")
    if windows_raw is not None:
        if not isinstance(windows_raw, dict):
            errors.append("support.pain_windows must be a mapping of label→[low, high]")
        else:
            windows: dict[str, tuple[int, int]] = {}
            for label, bounds in windows_raw.items():
                try:
                    low, high = (int(b) for b in bounds)
                except (TypeError, ValueError):
                    errors.append(
                        f"support.pain_windows.{label} must be a [low, high] pair, got {bounds!r}"
                    )
                    continue
                if low > high:
                    errors.append(f"support.pain_windows.{label} has low {low} > high {high}")
                windows[label] = (low, high)
            missing = {"severe", "mild", "normal"} - windows.keys()
            if missing:
                errors.append(f"support.pain_windows is missing {sorted(missing)}")
            support.pain_windows = windows

    if errors:
        raise ConfigValidationError(
            f"cycle_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return CycleConfig(version=version, cycle=cycle, support=support, _raw=raw)


def load_cycle_config(path: Path | None = None) -> CycleConfig:
    """Load and validate the cycle config from disk.

    Args:
        path: Override path to YAML. Falls back to ``SUPPORTHER_CYCLE_CONFIG_PATH``,
              then to the bundled cycle_config.yaml.
    """
    target = path or get_settings().cycle_config_path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded cycle config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: CycleConfig | None = None
_config_lock = threading.Lock()


def get_cycle_config() -> CycleConfig:
    """Return the global CycleConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_cycle_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_cycle_config()
    return _config


def reload_cycle_config(path: Path | None = None) -> CycleConfig:
    """Reload the cycle config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_cycle_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded cycle config: %s → %s", old_version, new_config.version)
    return new_config
