from __future__ import annotations

from dataclasses import fields
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_hhmm
from ..core import constants as c
from ..core.exceptions import ConfigurationError
from .model import TIME_FIELDS, TimeRuleConfig

DEFAULTS: dict[str, Any] = {
    "standard_start_time": c.DEFAULT_STANDARD_START_TIME,
    "standard_end_time": c.DEFAULT_STANDARD_END_TIME,
    "friday_end_time": c.DEFAULT_FRIDAY_END_TIME,
    "lunch_start_time": c.DEFAULT_LUNCH_START_TIME,
    "lunch_end_time": c.DEFAULT_LUNCH_END_TIME,
    "grace_minutes": c.DEFAULT_GRACE_MINUTES,
    "lunch_out_grace_minutes": c.DEFAULT_LUNCH_OUT_GRACE_MINUTES,
    "clock1_max_time": c.DEFAULT_CLOCK1_MAX_TIME,
    "clock2_window_start": c.DEFAULT_CLOCK2_WINDOW[0],
    "clock2_window_end": c.DEFAULT_CLOCK2_WINDOW[1],
    "clock3_window_start": c.DEFAULT_CLOCK3_WINDOW[0],
    "clock3_window_end": c.DEFAULT_CLOCK3_WINDOW[1],
    "clock4_min_time": c.DEFAULT_CLOCK4_MIN_TIME,
    "standard_lunch_minutes": c.DEFAULT_STANDARD_LUNCH_MINUTES,
    "apply_lunch_on_friday": False,
    "daily_bathroom_threshold_minutes": c.DEFAULT_DAILY_BATHROOM_THRESHOLD_MINUTES,
    "long_bathroom_threshold_minutes": c.DEFAULT_LONG_BATHROOM_THRESHOLD_MINUTES,
    "early_bathroom_threshold_minutes": c.DEFAULT_EARLY_BATHROOM_THRESHOLD_MINUTES,
    "bathroom_duplicate_seconds": c.DEFAULT_BATHROOM_DUPLICATE_SECONDS,
    "main_clock_duplicate_minutes": c.DEFAULT_MAIN_CLOCK_DUPLICATE_MINUTES,
    "flag_overtime_after": c.DEFAULT_FLAG_OVERTIME_AFTER,
    "flag_late_after": c.DEFAULT_FLAG_LATE_AFTER,
    "early_arrival_flag_minutes": None,
}

_KNOWN = {f.name for f in fields(TimeRuleConfig)}


class TimeRuleConfigBuilder:
    """Merge partial overrides onto the defaults and build a validated config.

    Values may come from settings files or environment variables, so times
    are accepted as "HH:MM" strings and numbers as digit strings.
    """

    def __init__(self, base: Optional[Mapping[str, Any]] = None):
        self._values: dict[str, Any] = dict(DEFAULTS)
        if base:
            self.with_overrides(base)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "TimeRuleConfigBuilder":
        unknown = sorted(set(overrides) - _KNOWN)
        if unknown:
            raise ConfigurationError(f"Unknown time rule setting(s): {', '.join(unknown)}")
        self._values.update(overrides)
        return self

    def set(self, name: str, value: Any) -> "TimeRuleConfigBuilder":
        return self.with_overrides({name: value})

    def build(self) -> TimeRuleConfig:
        return TimeRuleConfig(**{name: self._coerce(name, value) for name, value in self._values.items()})

    @staticmethod
    def _coerce(name: str, value: Any) -> Any:
        if name in TIME_FIELDS:
            try:
                return parse_hhmm(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"{name} must be HH:MM, got {value!r}")
        if name == "apply_lunch_on_friday":
            if isinstance(value, str):
                return value.strip().lower() in {"1", "true", "yes", "on"}
            return bool(value)
        if name == "early_arrival_flag_minutes" and value in (None, ""):
            return None
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value.strip())
        return value


def build_config(overrides: Optional[Mapping[str, Any]] = None) -> TimeRuleConfig:
    return TimeRuleConfigBuilder(overrides).build()
