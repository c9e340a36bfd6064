from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..common.datetime_utils import fmt_hhmm, fmt_minutes
from ..core.enums import Slot
from ..employees.directory import EmployeeDirectory
from ..timesheets.model import WeekReport


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
    bathroom: list[dict]


class WeekReportExporter:
    """Flatten a WeekReport into rows for review and spreadsheet export."""

    def __init__(self, directory: Optional[EmployeeDirectory] = None):
        self._directory = directory

    def _name(self, employee_id: str) -> str:
        if self._directory:
            e = self._directory.get_by_id(employee_id)
            if e:
                return e.display_name
        return employee_id

    def build(self, report: WeekReport) -> ReportData:
        rows: list[dict] = []
        summary: list[dict] = []
        bathroom: list[dict] = []

        for week in report:
            name = self._name(week.employee_id)
            for day in week.days:
                rows.append(
                    {
                        "employee_id": week.employee_id,
                        "full_name": name,
                        "work_date": day.work_date.strftime("%Y-%m-%d"),
                        "morning_in": fmt_hhmm(day.slots.get(Slot.MORNING_IN)),
                        "lunch_out": fmt_hhmm(day.slots.get(Slot.LUNCH_OUT)),
                        "lunch_in": fmt_hhmm(day.slots.get(Slot.LUNCH_IN)),
                        "afternoon_out": fmt_hhmm(day.slots.get(Slot.AFTERNOON_OUT)),
                        "scenario": day.scenario.value,
                        "paid_hours": fmt_minutes(day.paid_minutes),
                        "flags": "; ".join(day.flags),
                    }
                )
            for b in week.bathroom:
                if not b.entries and not b.warnings:
                    continue
                bathroom.append(
                    {
                        "employee_id": week.employee_id,
                        "full_name": name,
                        "work_date": b.work_date.strftime("%Y-%m-%d"),
                        "visits": len(b.entries),
                        "total_minutes": b.daily_total_minutes,
                        "warnings": "; ".join(b.warnings),
                    }
                )
            summary.append(
                {
                    "employee_id": week.employee_id,
                    "full_name": name,
                    "total_hours": fmt_minutes(week.week_total_paid_minutes),
                    "flagged_days": sum(1 for d in week.days if d.flags),
                }
            )

        summary.sort(key=lambda x: x["full_name"])
        return ReportData(rows=rows, summary=summary, bathroom=bathroom)

    def to_frames(self, report: WeekReport) -> dict[str, pd.DataFrame]:
        data = self.build(report)
        return {
            "Days": pd.DataFrame(data.rows),
            "Summary": pd.DataFrame(data.summary),
            "Bathroom": pd.DataFrame(data.bathroom),
        }

    def write_xlsx(self, report: WeekReport, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet, df in self.to_frames(report).items():
                df.to_excel(writer, sheet_name=sheet, index=False)
        return path
