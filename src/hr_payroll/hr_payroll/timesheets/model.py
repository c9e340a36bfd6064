from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..bathroom.model import BathroomReport
from ..core.enums import AssignmentRule, Scenario, Slot
from ..punches.model import DuplicatePunch, Punch, RejectedPunch


@dataclass(frozen=True)
class SlotAssignment:
    slot: Slot
    punch: Punch
    rule: AssignmentRule


@dataclass(frozen=True)
class ClassifiedDay:
    """Thực thể miền (domain): Ngày công sau khi phân loại các lượt chấm."""

    work_date: date
    is_friday: bool
    slots: dict[Slot, datetime]
    assignments: tuple[SlotAssignment, ...] = ()
    bathroom: tuple[Punch, ...] = ()
    unclassified: tuple[Punch, ...] = ()
    flags: tuple[str, ...] = ()

    @property
    def day_of_week(self) -> int:
        return self.work_date.weekday()

    def get(self, slot: Slot) -> Optional[datetime]:
        return self.slots.get(slot)

    @property
    def presence(self) -> frozenset[Slot]:
        return frozenset(self.slots)

    def is_chronological(self) -> bool:
        times = [self.slots[s] for s in sorted(self.slots, key=lambda s: s.order)]
        return all(a < b for a, b in zip(times, times[1:]))


@dataclass(frozen=True)
class AdjustedDay:
    """Classified day with grace/rounding applied to each present slot."""

    classified: ClassifiedDay
    slots: dict[Slot, datetime]
    flags: tuple[str, ...] = ()

    @property
    def work_date(self) -> date:
        return self.classified.work_date

    @property
    def is_friday(self) -> bool:
        return self.classified.is_friday

    def get(self, slot: Slot) -> Optional[datetime]:
        return self.slots.get(slot)

    @property
    def presence(self) -> frozenset[Slot]:
        return frozenset(self.slots)


@dataclass(frozen=True)
class PaidTimeResult:
    work_date: date
    scenario: Scenario
    paid_minutes: int
    flags: tuple[str, ...] = ()
    slots: dict[Slot, datetime] = field(default_factory=dict)


@dataclass(frozen=True)
class DayResult:
    employee_id: str
    paid: PaidTimeResult
    bathroom: BathroomReport
    duplicates: tuple[DuplicatePunch, ...] = ()
    rejected: tuple[RejectedPunch, ...] = ()
    unclassified: tuple[Punch, ...] = ()


@dataclass(frozen=True)
class EmployeeWeek:
    employee_id: str
    days: tuple[PaidTimeResult, ...]
    bathroom: tuple[BathroomReport, ...]
    week_total_paid_minutes: int
    flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class WeekReport:
    week_ending: Optional[date]
    employees: dict[str, EmployeeWeek]

    def __getitem__(self, employee_id: str) -> EmployeeWeek:
        return self.employees[employee_id]

    def __iter__(self):
        return iter(self.employees.values())

    def __len__(self) -> int:
        return len(self.employees)
