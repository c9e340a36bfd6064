from __future__ import annotations

from ...common.datetime_utils import minutes_between
from ...core import flags
from ...core.enums import Scenario, Slot
from ..model import AdjustedDay, PaidTimeResult
from .base import PaidTimeStrategy


class FridayStrategy(PaidTimeStrategy):
    """Friday: Morning-In to Afternoon-Out, no lunch unless configured."""

    def calculate(self, day: AdjustedDay) -> PaidTimeResult:
        morning = day.get(Slot.MORNING_IN)
        out = day.get(Slot.AFTERNOON_OUT)

        if morning and out and out > morning:
            minutes = minutes_between(morning, out)
            if self._config.apply_lunch_on_friday:
                minutes -= self._config.standard_lunch_minutes
            return self._result(day, Scenario.FRIDAY_FULL, max(minutes, 0), None)
        if morning and out:
            return self._result(day, Scenario.IRREGULAR, 0, flags.IMPOSSIBLE_ORDER)
        if morning:
            return self._result(day, Scenario.FRIDAY_MISSING_OUT, 0, flags.MISSING_FRIDAY_OUT)
        if out:
            return self._result(day, Scenario.FRIDAY_MISSING_IN, 0, flags.MISSING_FRIDAY_IN)
        return self._result(day, Scenario.IRREGULAR, 0, flags.IRREGULAR)
