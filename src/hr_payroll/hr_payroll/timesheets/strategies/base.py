from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import Scenario
from ...rules.model import TimeRuleConfig
from ..model import AdjustedDay, PaidTimeResult


class PaidTimeStrategy(ABC):
    """Strategy Pattern: turn one adjusted day into paid minutes + flags."""

    def __init__(self, config: TimeRuleConfig):
        self._config = config

    @abstractmethod
    def calculate(self, day: AdjustedDay) -> PaidTimeResult:
        raise NotImplementedError

    @staticmethod
    def _result(day: AdjustedDay, scenario: Scenario, minutes: int, flag: Optional[str]) -> PaidTimeResult:
        return PaidTimeResult(
            work_date=day.work_date,
            scenario=scenario,
            paid_minutes=minutes,
            flags=(flag,) if flag else (),
            slots=dict(day.slots),
        )
