from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Employee:
    """Thực thể miền (domain): Nhân viên, tra cứu theo mã máy chấm công."""

    employee_id: str
    display_name: str
    clock_ref: str
    hourly_rate: Decimal = Decimal("0.00")
