from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import at, minutes_between
from ..core import flags
from ..core.enums import Slot
from ..rules.model import TimeRuleConfig
from .model import AdjustedDay, ClassifiedDay


def _to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


class GraceAdjuster:
    """Apply grace periods, caps and review flags to classified slots.

    Never creates a slot: absent slots stay absent.
    """

    def __init__(self, config: TimeRuleConfig):
        self._config = config

    def adjust(self, day: ClassifiedDay) -> AdjustedDay:
        slots: dict[Slot, datetime] = {}
        day_flags: list[str] = []
        for slot, actual in day.slots.items():
            adjusted, flag = self.adjust_slot(slot, _to_minute(actual), is_friday=day.is_friday)
            slots[slot] = adjusted
            if flag and flag not in day_flags:
                day_flags.append(flag)
        return AdjustedDay(classified=day, slots=slots, flags=tuple(day_flags))

    def adjust_slot(self, slot: Slot, actual: datetime, *, is_friday: bool = False) -> tuple[datetime, Optional[str]]:
        if slot is Slot.MORNING_IN:
            return self.morning_in(actual)
        if slot is Slot.LUNCH_OUT:
            return self.lunch_out(actual), None
        if slot is Slot.LUNCH_IN:
            return self.lunch_in(actual)
        if is_friday:
            return self.friday_out(actual)
        return self.afternoon_out(actual)

    def morning_in(self, actual: datetime) -> tuple[datetime, Optional[str]]:
        c = self._config
        day = actual.date()
        start = at(day, c.standard_start_time)

        if actual < start:
            early_by = minutes_between(actual, start)
            if c.early_arrival_flag_minutes is not None and early_by >= c.early_arrival_flag_minutes:
                return start, flags.EARLY_ARRIVAL
            return start, None
        if actual <= start + timedelta(minutes=c.grace_minutes):
            return start, None
        if actual > at(day, c.flag_late_after):
            return actual, flags.LATE_ARRIVAL
        return actual, None

    def lunch_out(self, actual: datetime) -> datetime:
        c = self._config
        lunch_start = at(actual.date(), c.lunch_start_time)
        if lunch_start <= actual <= lunch_start + timedelta(minutes=c.lunch_out_grace_minutes):
            return lunch_start
        return actual

    def lunch_in(self, actual: datetime) -> tuple[datetime, Optional[str]]:
        if actual > at(actual.date(), self._config.lunch_end_time):
            return actual, flags.LATE_LUNCH_RETURN
        return actual, None

    def afternoon_out(self, actual: datetime) -> tuple[datetime, Optional[str]]:
        # Leaving early is left to payroll judgement: no adjustment, no flag.
        if actual >= at(actual.date(), self._config.flag_overtime_after):
            return actual, flags.OVERTIME
        return actual, None

    def friday_out(self, actual: datetime) -> tuple[datetime, Optional[str]]:
        if actual > at(actual.date(), self._config.friday_end_time):
            return actual, flags.OVERTIME
        return actual, None
