from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import TimesheetStatus
from ..core.exceptions import ValidationError
from ..employees.directory import EmployeeDirectory
from ..timesheets.model import WeekReport
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator
from .model import PendingTimesheet
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)


class TimesheetApprovalService:
    """Use case: turn a processed week into timesheets and approve/reject them."""

    def __init__(
        self,
        timesheets: TimesheetRepository,
        directory: EmployeeDirectory,
        *,
        calculator: Optional[PayCalculator] = None,
    ):
        self._timesheets = timesheets
        self._directory = directory
        self._calculator = calculator or StandardPayCalculator()

    def submit_week(self, report: WeekReport, *, now: Optional[datetime] = None) -> list[int]:
        if report.week_ending is None:
            raise ValidationError("Week report has no week ending date")
        now = now or datetime.now()

        created: list[int] = []
        for week in report:
            employee = self._directory.get_by_id(week.employee_id)
            if not employee:
                raise ValidationError(f"Employee {week.employee_id} does not exist")
            if self._timesheets.find(employee_id=employee.employee_id, week_ending=report.week_ending):
                logger.warning(
                    "Timesheet for %s week ending %s already submitted, skipping",
                    employee.employee_id, report.week_ending,
                )
                continue

            minutes = week.week_total_paid_minutes
            tid = self._timesheets.add(
                PendingTimesheet(
                    timesheet_id=0,
                    employee_id=employee.employee_id,
                    employee_name=employee.display_name,
                    clock_ref=employee.clock_ref,
                    week_ending=report.week_ending,
                    total_hours=minutes // 60,
                    total_minutes=minutes % 60,
                    standard_pay=self._calculator.standard_pay(minutes, employee.hourly_rate),
                    flags=week.flags,
                    status=TimesheetStatus.PENDING,
                    created_at=now,
                )
            )
            created.append(tid)
        return created

    def approve(self, *, timesheet_id: int, approved_by: str, now: Optional[datetime] = None) -> PendingTimesheet:
        return self._decide(timesheet_id, TimesheetStatus.APPROVED, approved_by, now)

    def reject(self, *, timesheet_id: int, rejected_by: str, now: Optional[datetime] = None) -> PendingTimesheet:
        return self._decide(timesheet_id, TimesheetStatus.REJECTED, rejected_by, now)

    def _decide(self, timesheet_id: int, status: TimesheetStatus, user: str, now: Optional[datetime]) -> PendingTimesheet:
        user = require_non_empty(user, "Approver")
        current = self._timesheets.get(timesheet_id)
        if not current:
            raise ValidationError("Timesheet not found")
        if current.status != TimesheetStatus.PENDING:
            raise ValidationError(f"Timesheet already {current.status.value.lower()}")

        ok = self._timesheets.decide(
            timesheet_id=timesheet_id, status=status, decided_by=user, decided_at=now or datetime.now()
        )
        if not ok:
            raise ValidationError("Timesheet could not be updated")
        return self._timesheets.get(timesheet_id)

    def list_pending(self, *, week_ending: Optional[date] = None) -> list[PendingTimesheet]:
        return list(self._timesheets.list(status=TimesheetStatus.PENDING, week_ending=week_ending))

    def week_total_pay(self, week_ending: date) -> Decimal:
        approved = self._timesheets.list(status=TimesheetStatus.APPROVED, week_ending=week_ending)
        return sum((t.standard_pay for t in approved), Decimal("0.00"))
