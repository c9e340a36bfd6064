from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .base import PayCalculator

CENTS = Decimal("0.01")


class StandardPayCalculator(PayCalculator):
    """Standard rule: paid_minutes / 60 * hourly_rate, rounded to cents."""

    def standard_pay(self, paid_minutes: int, hourly_rate: Decimal) -> Decimal:
        minutes = max(int(paid_minutes), 0)
        amount = Decimal(minutes) / Decimal(60) * Decimal(str(hourly_rate))
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
