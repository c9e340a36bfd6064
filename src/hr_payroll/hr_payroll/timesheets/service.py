from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..bathroom.analyzer import BathroomAnalyzer
from ..bathroom.model import BathroomReport
from ..common.datetime_utils import week_ending_for
from ..core import flags
from ..core.enums import Scenario
from ..punches.model import DayPunches
from ..punches.normalizer import PunchNormalizer
from ..rules.builder import build_config
from ..rules.model import TimeRuleConfig
from .adjuster import GraceAdjuster
from .classifier import ClockClassifier
from .factory import PaidTimeStrategyFactory
from .model import DayResult, EmployeeWeek, PaidTimeResult, WeekReport

logger = logging.getLogger(__name__)

EmployeePunchStreams = Mapping[str, Sequence[DayPunches]]


class TimesheetProcessor:
    """Run the punch pipeline per employee-day and fold days into a week.

    normalize -> classify -> adjust -> paid time, then bathroom analysis on
    the classified day. One failing day becomes a flagged zero-paid day; it
    never aborts the rest of the batch.
    """

    def __init__(
        self,
        config: TimeRuleConfig,
        *,
        normalizer: Optional[PunchNormalizer] = None,
        classifier: Optional[ClockClassifier] = None,
        adjuster: Optional[GraceAdjuster] = None,
        strategy_factory: Optional[PaidTimeStrategyFactory] = None,
        bathroom: Optional[BathroomAnalyzer] = None,
    ):
        self._config = config
        self._normalizer = normalizer or PunchNormalizer(config)
        self._classifier = classifier or ClockClassifier(config)
        self._adjuster = adjuster or GraceAdjuster(config)
        self._factory = strategy_factory or PaidTimeStrategyFactory(config)
        self._bathroom = bathroom or BathroomAnalyzer(config)

    @property
    def config(self) -> TimeRuleConfig:
        return self._config

    def process_day(self, employee_id: str, day: DayPunches) -> DayResult:
        try:
            return self._run_day(employee_id, day)
        except Exception:
            logger.exception("Processing failed for employee %s on %s", employee_id, day.work_date)
            return DayResult(
                employee_id=employee_id,
                paid=PaidTimeResult(
                    work_date=day.work_date,
                    scenario=Scenario.IRREGULAR,
                    paid_minutes=0,
                    flags=(flags.PROCESSING_ERROR,),
                ),
                bathroom=BathroomReport(work_date=day.work_date),
            )

    def _run_day(self, employee_id: str, day: DayPunches) -> DayResult:
        normalized = self._normalizer.normalize(day.punches, day.work_date)
        classified = self._classifier.classify(day.work_date, normalized.main, normalized.bathroom)
        adjusted = self._adjuster.adjust(classified)
        paid = self._factory.for_day(day.work_date).calculate(adjusted)
        report = self._bathroom.analyze(classified)

        merged = flags.merge(normalized.flags, classified.flags, adjusted.flags, paid.flags)
        paid = PaidTimeResult(
            work_date=paid.work_date,
            scenario=paid.scenario,
            paid_minutes=paid.paid_minutes,
            flags=merged,
            slots=paid.slots,
        )
        return DayResult(
            employee_id=employee_id,
            paid=paid,
            bathroom=report,
            duplicates=normalized.duplicates,
            rejected=normalized.rejected,
            unclassified=classified.unclassified,
        )

    def process_employee(self, employee_id: str, days: Iterable[DayPunches]) -> EmployeeWeek:
        results = [self.process_day(employee_id, d) for d in sorted(days, key=lambda d: d.work_date)]
        paid = tuple(r.paid for r in results)
        return EmployeeWeek(
            employee_id=employee_id,
            days=paid,
            bathroom=tuple(r.bathroom for r in results),
            week_total_paid_minutes=sum(p.paid_minutes for p in paid),
            flags=flags.merge(*(p.flags for p in paid)),
        )

    def process_week(self, streams: EmployeePunchStreams, *, week_ending: Optional[date] = None) -> WeekReport:
        """Process every employee stream; days outside `week_ending`'s week are skipped."""
        employees: dict[str, EmployeeWeek] = {}
        for employee_id, days in streams.items():
            selected = list(days)
            if week_ending is not None:
                selected = [d for d in selected if week_ending_for(d.work_date) == week_ending]
            employees[employee_id] = self.process_employee(employee_id, selected)
            logger.info(
                "Processed %d day(s) for %s: %d paid minutes",
                len(selected), employee_id, employees[employee_id].week_total_paid_minutes,
            )
        return WeekReport(week_ending=week_ending, employees=employees)


def process_week(
    streams: EmployeePunchStreams,
    config: Union[TimeRuleConfig, Mapping[str, Any], None] = None,
    *,
    week_ending: Optional[date] = None,
) -> WeekReport:
    """Entry point for payroll. A mapping (or None) is merged onto the default rules first."""
    if not isinstance(config, TimeRuleConfig):
        config = build_config(config)
    return TimesheetProcessor(config).process_week(streams, week_ending=week_ending)
