from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import time
from typing import Optional

from ..common.validators import require_non_negative_int, require_time, require_window

TIME_FIELDS = (
    "standard_start_time",
    "standard_end_time",
    "friday_end_time",
    "lunch_start_time",
    "lunch_end_time",
    "clock1_max_time",
    "clock2_window_start",
    "clock2_window_end",
    "clock3_window_start",
    "clock3_window_end",
    "clock4_min_time",
    "flag_overtime_after",
    "flag_late_after",
)

MINUTE_FIELDS = (
    "grace_minutes",
    "lunch_out_grace_minutes",
    "standard_lunch_minutes",
    "daily_bathroom_threshold_minutes",
    "long_bathroom_threshold_minutes",
    "early_bathroom_threshold_minutes",
    "bathroom_duplicate_seconds",
    "main_clock_duplicate_minutes",
)


@dataclass(frozen=True)
class TimeRuleConfig:
    """Tunable time rules for one processing run.

    Built through `TimeRuleConfigBuilder`; every instance is validated on
    construction so a bad config never reaches per-day processing.
    """

    standard_start_time: time
    standard_end_time: time
    friday_end_time: time
    lunch_start_time: time
    lunch_end_time: time
    grace_minutes: int
    lunch_out_grace_minutes: int
    clock1_max_time: time
    clock2_window_start: time
    clock2_window_end: time
    clock3_window_start: time
    clock3_window_end: time
    clock4_min_time: time
    standard_lunch_minutes: int
    apply_lunch_on_friday: bool
    daily_bathroom_threshold_minutes: int
    long_bathroom_threshold_minutes: int
    early_bathroom_threshold_minutes: int
    bathroom_duplicate_seconds: int
    main_clock_duplicate_minutes: int
    flag_overtime_after: time
    flag_late_after: time
    early_arrival_flag_minutes: Optional[int] = None

    def __post_init__(self) -> None:
        for name in TIME_FIELDS:
            require_time(getattr(self, name), name)
        for name in MINUTE_FIELDS:
            require_non_negative_int(getattr(self, name), name)
        if self.early_arrival_flag_minutes is not None:
            require_non_negative_int(self.early_arrival_flag_minutes, "early_arrival_flag_minutes")

        require_window(self.standard_start_time, self.standard_end_time, "standard day")
        require_window(self.standard_start_time, self.friday_end_time, "Friday")
        require_window(self.lunch_start_time, self.lunch_end_time, "lunch")
        require_window(self.clock2_window_start, self.clock2_window_end, "clock 2")
        require_window(self.clock3_window_start, self.clock3_window_end, "clock 3")

    def as_dict(self) -> dict:
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.strftime("%H:%M") if isinstance(value, time) else value
        return out
