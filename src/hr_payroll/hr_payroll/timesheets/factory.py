from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..rules.model import TimeRuleConfig
from .strategies.base import PaidTimeStrategy
from .strategies.friday_strategy import FridayStrategy
from .strategies.weekday_strategy import WeekdayStrategy

FRIDAY = 4


@dataclass
class PaidTimeStrategyFactory:
    """Factory Pattern: choose the paid-time table for a calendar day."""

    config: TimeRuleConfig

    def for_day(self, work_date: date) -> PaidTimeStrategy:
        if work_date.weekday() == FRIDAY:
            return FridayStrategy(self.config)
        return WeekdayStrategy(self.config)
