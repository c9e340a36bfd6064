"""Ví dụ: chạy pipeline tính công trong bộ nhớ (không cần file).

Mục tiêu: minh hoạ luồng Punch -> phân loại -> giờ công được trả -> bảng công chờ duyệt.
"""

from datetime import date
from decimal import Decimal

from src.hr_payroll.hr_payroll.container import build_container
from src.hr_payroll.hr_payroll.employees.directory import InMemoryEmployeeDirectory
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.punches.model import RawPunch


def main():
    directory = InMemoryEmployeeDirectory([Employee("E001", "Thandi Mokoena", "101", Decimal("50.00"))])
    container = build_container(directory=directory, time_rules={"grace_minutes": 5})

    rows = [
        RawPunch("101", "Clock In", "2026-01-06 07:32"),
        RawPunch("101", "Clock Out", "2026-01-06 12:01"),
        RawPunch("101", "Clock In", "2026-01-06 12:28"),
        RawPunch("101", "Clock Out", "2026-01-06 16:35"),
    ]
    result = container.importer.from_rows(rows, imported_by="example")
    report = container.processor.process_week(result.streams, week_ending=date(2026, 1, 10))

    for week in report:
        for day in week.days:
            print(day.work_date, day.scenario.value, day.paid_minutes, day.flags)

    ids = container.approval_service.submit_week(report)
    print(container.approval_service.list_pending())
    print(f"Submitted: {ids}")


if __name__ == "__main__":
    main()
