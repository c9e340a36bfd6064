from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import TimesheetStatus


@dataclass(frozen=True)
class PendingTimesheet:
    """Thực thể miền (domain): Bảng công tuần chờ duyệt."""

    timesheet_id: int
    employee_id: str
    employee_name: str
    clock_ref: str
    week_ending: date
    total_hours: int
    total_minutes: int
    standard_pay: Decimal
    flags: tuple[str, ...]
    status: TimesheetStatus
    created_at: datetime
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    @property
    def paid_minutes(self) -> int:
        return self.total_hours * 60 + self.total_minutes

    @property
    def needs_review(self) -> bool:
        return bool(self.flags)
