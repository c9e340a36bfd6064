from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .employees.directory import EmployeeDirectory, InMemoryEmployeeDirectory
from .payroll.repository import InMemoryTimesheetRepository
from .payroll.service import TimesheetApprovalService
from .punches.importer import PunchImporter
from .reports.export import WeekReportExporter
from .rules.builder import build_config
from .rules.model import TimeRuleConfig
from .timesheets.service import TimesheetProcessor


@dataclass(frozen=True)
class Container:
    config: TimeRuleConfig
    directory: EmployeeDirectory

    timesheets_repo: InMemoryTimesheetRepository

    importer: PunchImporter
    processor: TimesheetProcessor
    approval_service: TimesheetApprovalService
    exporter: WeekReportExporter


def build_container(
    *,
    time_rules: Optional[Mapping[str, Any]] = None,
    directory: Optional[EmployeeDirectory] = None,
    punch_columns: Optional[Mapping[str, str]] = None,
) -> Container:
    # Snapshot the rules once; every component of the run shares this frozen config.
    config = build_config(time_rules)
    directory = directory or InMemoryEmployeeDirectory()
    timesheets_repo = InMemoryTimesheetRepository()

    return Container(
        config=config,
        directory=directory,
        timesheets_repo=timesheets_repo,
        importer=PunchImporter(directory, columns=punch_columns),
        processor=TimesheetProcessor(config),
        approval_service=TimesheetApprovalService(timesheets_repo, directory),
        exporter=WeekReportExporter(directory),
    )
