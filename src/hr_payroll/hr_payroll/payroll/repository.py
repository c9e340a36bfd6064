from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TimesheetStatus
from .model import PendingTimesheet


class TimesheetRepository(Protocol):
    def add(self, timesheet: PendingTimesheet) -> int:
        raise NotImplementedError

    def get(self, timesheet_id: int) -> Optional[PendingTimesheet]:
        raise NotImplementedError

    def find(self, *, employee_id: str, week_ending: date) -> Optional[PendingTimesheet]:
        raise NotImplementedError

    def list(self, *, status: Optional[TimesheetStatus] = None, week_ending: Optional[date] = None) -> Sequence[PendingTimesheet]:
        raise NotImplementedError

    def decide(self, *, timesheet_id: int, status: TimesheetStatus, decided_by: str, decided_at: datetime) -> bool:
        raise NotImplementedError


class InMemoryTimesheetRepository:
    """Process-local store; the payroll ledger itself lives outside this package."""

    def __init__(self):
        self._items: dict[int, PendingTimesheet] = {}
        self._next_id = 1

    def add(self, timesheet: PendingTimesheet) -> int:
        tid = self._next_id
        self._next_id += 1
        self._items[tid] = replace(timesheet, timesheet_id=tid)
        return tid

    def get(self, timesheet_id: int) -> Optional[PendingTimesheet]:
        return self._items.get(int(timesheet_id))

    def find(self, *, employee_id: str, week_ending: date) -> Optional[PendingTimesheet]:
        for t in self._items.values():
            if t.employee_id == employee_id and t.week_ending == week_ending:
                return t
        return None

    def list(self, *, status: Optional[TimesheetStatus] = None, week_ending: Optional[date] = None):
        items = list(self._items.values())
        if status is not None:
            items = [t for t in items if t.status == status]
        if week_ending is not None:
            items = [t for t in items if t.week_ending == week_ending]
        return items

    def decide(self, *, timesheet_id: int, status: TimesheetStatus, decided_by: str, decided_at: datetime) -> bool:
        t = self._items.get(int(timesheet_id))
        if not t or t.status != TimesheetStatus.PENDING:
            return False
        self._items[t.timesheet_id] = replace(t, status=status, approved_by=decided_by, approved_at=decided_at)
        return True
