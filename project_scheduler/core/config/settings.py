from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Literal, cast

import yaml


UnparseableDueDates = Literal["ignore", "info"]

DEFAULT_SETTINGS: dict[str, Any] = {
    # "ignore" treats unparseable due dates as absent.
    "unparseable_due_dates": "ignore",
    "min_estimated_hours": 1,
    "max_estimated_hours": 1000,
}

ALLOWED_UNPARSEABLE_DUE_DATES: set[str] = {"ignore", "info"}

# Upper bound for any single task estimate.
ESTIMATED_HOURS_CEILING = 1000


class SettingsConfigError(ValueError):
    pass


@dataclass(frozen=True)
class SchedulerSettings:
    unparseable_due_dates: UnparseableDueDates = "ignore"
    min_estimated_hours: int = 1
    max_estimated_hours: int = 1000

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Load scheduler settings overrides from a YAML file.

    Format:
      unparseable_due_dates: ignore|info
      min_estimated_hours: <int>
      max_estimated_hours: <int>

    Unknown keys are rejected so typos do not silently fall back to defaults.
    """
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsConfigError(f"settings file is not valid YAML: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SettingsConfigError("settings file must be a mapping of name -> value")

    out: dict[str, Any] = {}
    for k, v in raw.items():
        if k not in DEFAULT_SETTINGS:
            raise SettingsConfigError(
                f"unknown setting '{k}' (choose from: {', '.join(sorted(DEFAULT_SETTINGS))})"
            )
        if k == "unparseable_due_dates":
            if not isinstance(v, str) or v not in ALLOWED_UNPARSEABLE_DUE_DATES:
                raise SettingsConfigError(
                    f"unparseable_due_dates must be one of {sorted(ALLOWED_UNPARSEABLE_DUE_DATES)}"
                )
        elif isinstance(v, bool) or not isinstance(v, int) or v < 1:
            raise SettingsConfigError(f"{k} must be a positive integer")
        elif v > ESTIMATED_HOURS_CEILING:
            raise SettingsConfigError(f"{k} must not exceed {ESTIMATED_HOURS_CEILING}")
        out[k] = v

    lo = out.get("min_estimated_hours", DEFAULT_SETTINGS["min_estimated_hours"])
    hi = out.get("max_estimated_hours", DEFAULT_SETTINGS["max_estimated_hours"])
    if lo > hi:
        raise SettingsConfigError("min_estimated_hours must not exceed max_estimated_hours")
    return out


def merged_settings(overrides: dict[str, Any] | None = None) -> SchedulerSettings:
    """Return DEFAULT_SETTINGS merged with optional overrides."""
    merged = dict(DEFAULT_SETTINGS)
    if overrides:
        merged.update(overrides)
    return SchedulerSettings(
        unparseable_due_dates=cast(UnparseableDueDates, merged["unparseable_due_dates"]),
        min_estimated_hours=int(merged["min_estimated_hours"]),
        max_estimated_hours=int(merged["max_estimated_hours"]),
    )


def load_and_merge(settings_file: str | None) -> SchedulerSettings:
    if not settings_file:
        return merged_settings()
    overrides = load_settings_file(settings_file)
    return merged_settings(overrides)
