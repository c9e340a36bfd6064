from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import at, minutes_between
from ..core import flags
from ..core.enums import DeviceKind, Slot
from ..punches.model import Punch
from ..rules.model import TimeRuleConfig
from ..timesheets.model import ClassifiedDay
from .model import BathroomReport, BathroomVisit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkWindow:
    name: str
    start: datetime
    end: datetime

    def contains(self, value: datetime) -> bool:
        return self.start <= value <= self.end


class BathroomAnalyzer:
    """Pair bathroom entry/exit scans inside work periods and raise warnings.

    Only pairs whose entry and exit fall in the same work window are counted.
    The lunch break lies outside every window. Paid time is never touched.
    """

    def __init__(self, config: TimeRuleConfig):
        self._config = config

    def work_windows(self, day: ClassifiedDay) -> list[WorkWindow]:
        c = self._config
        d = day.work_date
        morning_in = day.get(Slot.MORNING_IN) or at(d, c.standard_start_time)

        if day.is_friday:
            out = day.get(Slot.AFTERNOON_OUT) or at(d, c.friday_end_time)
            return [WorkWindow("day", morning_in, out)]

        lunch_out = day.get(Slot.LUNCH_OUT) or at(d, c.lunch_start_time)
        lunch_in = day.get(Slot.LUNCH_IN) or at(d, c.lunch_end_time)
        out = day.get(Slot.AFTERNOON_OUT) or at(d, c.standard_end_time)
        return [
            WorkWindow("morning", morning_in, lunch_out),
            WorkWindow("afternoon", lunch_in, out),
        ]

    def analyze(self, day: ClassifiedDay, punches: Optional[Sequence[Punch]] = None) -> BathroomReport:
        punches = sorted(day.bathroom if punches is None else punches, key=lambda p: p.time)
        windows = self.work_windows(day)

        def window_of(value: datetime) -> Optional[int]:
            for i, w in enumerate(windows):
                if w.contains(value):
                    return i
            return None

        visits: list[BathroomVisit] = []
        warnings: list[str] = []

        def warn(message: str) -> None:
            if message not in warnings:
                warnings.append(message)

        def close_unmatched(entry: Punch) -> None:
            visits.append(BathroomVisit(entry_time=entry.time))
            warn(flags.BATHROOM_ENTRY_WITHOUT_EXIT)

        open_entry: Optional[Punch] = None
        open_window: Optional[int] = None
        for p in punches:
            w = window_of(p.time)
            if p.kind is DeviceKind.BATHROOM_ENTRY:
                if open_entry is not None:
                    close_unmatched(open_entry)
                    open_entry = None
                if w is None:
                    logger.debug("Bathroom entry %s outside work periods ignored", p.time)
                    continue
                open_entry, open_window = p, w
                continue

            if open_entry is None:
                if w is not None:
                    warn(flags.BATHROOM_EXIT_WITHOUT_ENTRY)
                continue
            if w == open_window:
                visits.append(
                    BathroomVisit(
                        entry_time=open_entry.time,
                        exit_time=p.time,
                        duration_minutes=minutes_between(open_entry.time, p.time),
                    )
                )
            else:
                # Crosses a work-period boundary (e.g. into lunch): not counted.
                close_unmatched(open_entry)
                if w is not None:
                    warn(flags.BATHROOM_EXIT_WITHOUT_ENTRY)
            open_entry = None

        if open_entry is not None:
            close_unmatched(open_entry)

        counted = [v for v in visits if v.duration_minutes is not None]
        for v in counted:
            self._visit_warnings(day, v, warn)

        total = sum(v.duration_minutes for v in counted)
        if total > self._config.daily_bathroom_threshold_minutes:
            warn(flags.daily_bathroom_exceeded(total))

        return BathroomReport(
            work_date=day.work_date,
            entries=tuple(visits),
            daily_total_minutes=total,
            warnings=tuple(warnings),
        )

    def _visit_warnings(self, day: ClassifiedDay, visit: BathroomVisit, warn) -> None:
        c = self._config
        if visit.duration_minutes > c.long_bathroom_threshold_minutes:
            warn(flags.long_bathroom_break(visit.duration_minutes))

        early = timedelta(minutes=c.early_bathroom_threshold_minutes)
        morning_in = day.get(Slot.MORNING_IN)
        if morning_in and morning_in <= visit.entry_time <= morning_in + early:
            warn(flags.EARLY_BATHROOM_MORNING)
        lunch_in = day.get(Slot.LUNCH_IN)
        if lunch_in and not day.is_friday and lunch_in <= visit.entry_time <= lunch_in + early:
            warn(flags.EARLY_BATHROOM_LUNCH)
