from __future__ import annotations

from ...common.datetime_utils import minutes_between
from ...core import flags
from ...core.enums import Scenario, Slot
from ..model import AdjustedDay, PaidTimeResult
from .base import PaidTimeStrategy

M, LO, LI, A = Slot.MORNING_IN, Slot.LUNCH_OUT, Slot.LUNCH_IN, Slot.AFTERNOON_OUT

# Presence pattern -> (scenario, flag). Only FULL_DAY and MISSING_LUNCH_OUT are paid.
SCENARIOS: dict[frozenset, tuple[Scenario, str | None]] = {
    frozenset({M, LO, LI, A}): (Scenario.FULL_DAY, None),
    frozenset({M, LI, A}): (Scenario.MISSING_LUNCH_OUT, flags.MISSING_LUNCH_OUT),
    frozenset({M}): (Scenario.ONLY_MORNING, flags.ONLY_MORNING),
    frozenset({A}): (Scenario.ONLY_AFTERNOON, flags.ONLY_AFTERNOON),
    frozenset({M, A}): (Scenario.NO_LUNCH, flags.NO_LUNCH),
    frozenset({M, LO, A}): (Scenario.MISSING_LUNCH_RETURN, flags.MISSING_LUNCH_RETURN),
    frozenset({LO, LI, A}): (Scenario.NO_MORNING, flags.NO_MORNING),
    frozenset({M, LO, LI}): (Scenario.NO_AFTERNOON_OUT, flags.NO_AFTERNOON_OUT),
    frozenset({LO, LI}): (Scenario.ONLY_LUNCH, flags.ONLY_LUNCH),
    frozenset({LO}): (Scenario.ONLY_LUNCH_OUT, flags.ONLY_LUNCH_OUT),
    frozenset({LI}): (Scenario.ONLY_LUNCH_RETURN, flags.ONLY_LUNCH_RETURN),
}

PAID_SCENARIOS = (Scenario.FULL_DAY, Scenario.MISSING_LUNCH_OUT)


class WeekdayStrategy(PaidTimeStrategy):
    """Monday-Thursday (and weekend) table: four slots, lunch deducted on Lunch-In."""

    def calculate(self, day: AdjustedDay) -> PaidTimeResult:
        if not day.classified.is_chronological():
            return self._result(day, Scenario.IRREGULAR, 0, flags.IMPOSSIBLE_ORDER)

        scenario, flag = SCENARIOS.get(day.presence, (Scenario.IRREGULAR, flags.IRREGULAR))
        if scenario not in PAID_SCENARIOS:
            return self._result(day, scenario, 0, flag)

        minutes = minutes_between(day.get(M), day.get(A))
        # Lunch-In present means lunch was taken, whether or not Lunch-Out was scanned.
        if LI in day.slots:
            minutes -= self._config.standard_lunch_minutes
        return self._result(day, scenario, max(minutes, 0), flag)
