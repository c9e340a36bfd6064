from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def standard_pay(self, paid_minutes: int, hourly_rate: Decimal) -> Decimal:
        raise NotImplementedError
