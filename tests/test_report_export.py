from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pandas as pd

from src.hr_payroll.hr_payroll.bathroom.model import BathroomReport, BathroomVisit
from src.hr_payroll.hr_payroll.core.enums import Scenario, Slot
from src.hr_payroll.hr_payroll.employees.directory import InMemoryEmployeeDirectory
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.reports.export import WeekReportExporter
from src.hr_payroll.hr_payroll.timesheets.model import EmployeeWeek, PaidTimeResult, WeekReport

TUESDAY = date(2026, 1, 6)
FRIDAY = date(2026, 1, 9)


def sample_report() -> WeekReport:
    tuesday = PaidTimeResult(
        work_date=TUESDAY,
        scenario=Scenario.FULL_DAY,
        paid_minutes=515,
        flags=("Overtime - manual review",),
        slots={
            Slot.MORNING_IN: datetime(2026, 1, 6, 7, 30),
            Slot.LUNCH_OUT: datetime(2026, 1, 6, 12, 0),
            Slot.LUNCH_IN: datetime(2026, 1, 6, 12, 28),
            Slot.AFTERNOON_OUT: datetime(2026, 1, 6, 16, 35),
        },
    )
    friday = PaidTimeResult(
        work_date=FRIDAY,
        scenario=Scenario.FRIDAY_FULL,
        paid_minutes=330,
        slots={Slot.MORNING_IN: datetime(2026, 1, 9, 7, 30), Slot.AFTERNOON_OUT: datetime(2026, 1, 9, 13, 0)},
    )
    bathroom = (
        BathroomReport(
            work_date=TUESDAY,
            entries=(BathroomVisit(datetime(2026, 1, 6, 10, 0), datetime(2026, 1, 6, 10, 20), 20),),
            daily_total_minutes=20,
            warnings=("Long bathroom break: 20 minutes",),
        ),
        BathroomReport(work_date=FRIDAY),
    )
    return WeekReport(
        week_ending=date(2026, 1, 10),
        employees={
            "E002": EmployeeWeek("E002", days=(), bathroom=(), week_total_paid_minutes=0),
            "E001": EmployeeWeek(
                "E001",
                days=(tuesday, friday),
                bathroom=bathroom,
                week_total_paid_minutes=845,
                flags=("Overtime - manual review",),
            ),
        },
    )


def directory():
    return InMemoryEmployeeDirectory(
        [
            Employee("E001", "Anna Smit", "101", Decimal("50")),
            Employee("E002", "Zola Dube", "102", Decimal("50")),
        ]
    )


def test_build_daily_rows_and_summary():
    data = WeekReportExporter(directory()).build(sample_report())

    assert len(data.rows) == 2
    first = data.rows[0]
    assert first["full_name"] == "Anna Smit"
    assert first["morning_in"] == "07:30"
    assert first["afternoon_out"] == "16:35"
    assert first["paid_hours"] == "08:35"
    assert first["scenario"] == "FULL_DAY"
    assert data.rows[1]["lunch_out"] == "-"

    assert [s["full_name"] for s in data.summary] == ["Anna Smit", "Zola Dube"]
    assert data.summary[0]["total_hours"] == "14:05"
    assert data.summary[0]["flagged_days"] == 1


def test_bathroom_sheet_only_lists_days_with_activity():
    data = WeekReportExporter(directory()).build(sample_report())

    assert len(data.bathroom) == 1
    assert data.bathroom[0]["visits"] == 1
    assert data.bathroom[0]["total_minutes"] == 20


def test_unknown_employee_falls_back_to_id():
    data = WeekReportExporter().build(sample_report())

    assert {s["full_name"] for s in data.summary} == {"E001", "E002"}


def test_write_xlsx(tmp_path):
    path = WeekReportExporter(directory()).write_xlsx(sample_report(), tmp_path / "out" / "week.xlsx")

    assert path.exists()
    sheets = pd.read_excel(path, sheet_name=None)
    assert set(sheets) == {"Days", "Summary", "Bathroom"}
    assert list(sheets["Summary"]["full_name"]) == ["Anna Smit", "Zola Dube"]
