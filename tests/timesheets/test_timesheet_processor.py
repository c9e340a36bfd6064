from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_payroll.hr_payroll.core import flags
from src.hr_payroll.hr_payroll.core.enums import Scenario, Slot
from src.hr_payroll.hr_payroll.core.exceptions import ConfigurationError
from src.hr_payroll.hr_payroll.punches.model import DayPunches, RawPunch
from src.hr_payroll.hr_payroll.rules.builder import build_config
from src.hr_payroll.hr_payroll.timesheets.factory import PaidTimeStrategyFactory
from src.hr_payroll.hr_payroll.timesheets.service import TimesheetProcessor, process_week

MONDAY = date(2026, 1, 5)
TUESDAY = date(2026, 1, 6)
WEDNESDAY = date(2026, 1, 7)
FRIDAY = date(2026, 1, 9)
WEEK_ENDING = date(2026, 1, 10)


def day(work_date: date, *punches: tuple[str, str]) -> DayPunches:
    return DayPunches(
        work_date=work_date,
        punches=tuple(
            RawPunch(person_ref="E001", device_label=device, timestamp=f"{work_date:%Y-%m-%d} {hhmm}")
            for hhmm, device in punches
        ),
    )


STANDARD_TUESDAY = day(
    TUESDAY,
    ("07:32:00", "Clock In"),
    ("12:01:00", "Clock Out"),
    ("12:28:00", "Clock In"),
    ("16:35:00", "Clock Out"),
)


def test_standard_day():
    result = TimesheetProcessor(build_config()).process_day("E001", STANDARD_TUESDAY)

    paid = result.paid
    assert paid.scenario is Scenario.FULL_DAY
    assert paid.slots[Slot.MORNING_IN] == datetime(2026, 1, 6, 7, 30)
    assert paid.slots[Slot.LUNCH_OUT] == datetime(2026, 1, 6, 12, 0)
    assert paid.slots[Slot.LUNCH_IN] == datetime(2026, 1, 6, 12, 28)
    assert paid.slots[Slot.AFTERNOON_OUT] == datetime(2026, 1, 6, 16, 35)
    # (16:35 - 07:30) - 30
    assert paid.paid_minutes == 515
    assert paid.flags == (flags.OVERTIME,)


def test_missing_lunch_out():
    result = TimesheetProcessor(build_config()).process_day(
        "E001",
        day(WEDNESDAY, ("07:30:00", "Clock In"), ("12:25:00", "Clock In"), ("16:30:00", "Clock Out")),
    )

    assert result.paid.scenario is Scenario.MISSING_LUNCH_OUT
    assert result.paid.paid_minutes == 510
    assert flags.MISSING_LUNCH_OUT in result.paid.flags
    assert flags.IRREGULAR not in result.paid.flags


def test_friday():
    result = TimesheetProcessor(build_config()).process_day(
        "E001", day(FRIDAY, ("07:30:00", "Clock In"), ("13:00:00", "Clock Out"))
    )

    assert result.paid.scenario is Scenario.FRIDAY_FULL
    assert result.paid.paid_minutes == 330
    assert result.paid.flags == ()


def test_friday_ignores_stray_noon_punch():
    result = TimesheetProcessor(build_config()).process_day(
        "E001", day(FRIDAY, ("07:30:00", "Clock In"), ("12:02:00", "Clock Out"), ("13:00:00", "Clock Out"))
    )

    assert result.paid.paid_minutes == 330
    assert result.paid.scenario is Scenario.FRIDAY_FULL


def test_rescan_after_lunch_in_keeps_real_clock_out():
    result = TimesheetProcessor(build_config()).process_day(
        "E001",
        day(
            MONDAY,
            ("07:30:00", "Factory Door"),
            ("12:01:00", "Factory Door"),
            ("12:25:00", "Factory Door"),
            ("12:40:00", "Factory Door"),
            ("16:30:00", "Factory Door"),
        ),
    )

    assert result.paid.scenario is Scenario.FULL_DAY
    assert result.paid.slots[Slot.AFTERNOON_OUT] == datetime(2026, 1, 5, 16, 30)
    assert result.paid.paid_minutes == 510
    assert flags.UNCLASSIFIED_PUNCH in result.paid.flags


def test_friday_unlabelled_early_leave_is_paid():
    result = TimesheetProcessor(build_config()).process_day(
        "E001", day(FRIDAY, ("07:30:00", "Factory Door"), ("11:30:00", "Factory Door"))
    )

    assert result.paid.scenario is Scenario.FRIDAY_FULL
    assert result.paid.paid_minutes == 240
    assert result.paid.flags == (flags.POSITIONAL_ASSIGNMENT,)


def test_duplicate_clock_in_is_filtered_but_recorded():
    result = TimesheetProcessor(build_config()).process_day(
        "E001",
        day(
            MONDAY,
            ("07:30:00", "Clock In"),
            ("07:31:30", "Clock In"),
            ("12:00:00", "Clock Out"),
            ("12:30:00", "Clock In"),
            ("16:00:00", "Clock Out"),
        ),
    )

    assert [d.punch.time for d in result.duplicates] == [datetime(2026, 1, 5, 7, 31, 30)]
    assert result.paid.scenario is Scenario.FULL_DAY
    assert result.paid.paid_minutes == 480
    assert result.unclassified == ()


def test_malformed_punch_is_dropped_and_day_flagged():
    raw = day(FRIDAY, ("07:30:00", "Clock In"), ("13:00:00", "Clock Out"))
    broken = DayPunches(work_date=FRIDAY, punches=raw.punches + (RawPunch("E001", "Clock Out", "13:??"),))

    result = TimesheetProcessor(build_config()).process_day("E001", broken)

    assert result.paid.paid_minutes == 330
    assert flags.UNREADABLE_PUNCH in result.paid.flags
    assert len(result.rejected) == 1


def test_bathroom_breaks_never_change_paid_time():
    with_breaks = day(
        TUESDAY,
        *((p.timestamp[-8:], p.device_label) for p in STANDARD_TUESDAY.punches),
        ("10:00:00", "Bathroom Entry"),
        ("10:20:00", "Bathroom Exit"),
    )

    result = TimesheetProcessor(build_config()).process_day("E001", with_breaks)

    assert result.paid.paid_minutes == 515
    assert result.bathroom.daily_total_minutes == 20
    assert result.bathroom.warnings == ("Long bathroom break: 20 minutes",)


class ExplodingFactory(PaidTimeStrategyFactory):
    def for_day(self, work_date):
        if work_date == TUESDAY:
            raise RuntimeError("boom")
        return super().for_day(work_date)


def test_one_failing_day_does_not_abort_the_week():
    cfg = build_config()
    processor = TimesheetProcessor(cfg, strategy_factory=ExplodingFactory(cfg))

    week = processor.process_employee(
        "E001", [STANDARD_TUESDAY, day(FRIDAY, ("07:30:00", "Clock In"), ("13:00:00", "Clock Out"))]
    )

    assert [d.work_date for d in week.days] == [TUESDAY, FRIDAY]
    assert week.days[0].paid_minutes == 0
    assert week.days[0].flags == (flags.PROCESSING_ERROR,)
    assert week.days[1].paid_minutes == 330
    assert week.week_total_paid_minutes == 330


def test_empty_day_still_produces_a_result():
    week = TimesheetProcessor(build_config()).process_employee("E001", [DayPunches(work_date=MONDAY)])

    assert len(week.days) == 1
    assert week.days[0].scenario is Scenario.IRREGULAR
    assert week.days[0].paid_minutes == 0


def _streams():
    return {
        "E001": [
            STANDARD_TUESDAY,
            day(FRIDAY, ("07:30:00", "Clock In"), ("13:00:00", "Clock Out")),
            day(date(2026, 1, 12), ("07:30:00", "Clock In")),
        ],
        "E002": [
            day(WEDNESDAY, ("07:30:00", "Clock In"), ("12:25:00", "Clock In"), ("16:30:00", "Clock Out")),
            day(MONDAY, ("07:45:00", "Clock In")),
        ],
    }


def test_week_report_totals_flags_and_order():
    report = process_week(_streams(), build_config(), week_ending=WEEK_ENDING)

    e1 = report["E001"]
    assert [d.work_date for d in e1.days] == [TUESDAY, FRIDAY]
    assert e1.week_total_paid_minutes == 515 + 330
    assert e1.flags == (flags.OVERTIME,)

    e2 = report["E002"]
    assert [d.work_date for d in e2.days] == [MONDAY, WEDNESDAY]
    assert e2.week_total_paid_minutes == 510
    assert flags.ONLY_MORNING in e2.flags
    assert flags.LATE_ARRIVAL in e2.flags
    assert len(e2.bathroom) == 2

    assert list(report.employees) == ["E001", "E002"]
    assert report.week_ending == WEEK_ENDING


def test_processing_is_idempotent():
    cfg = build_config()

    first = process_week(_streams(), cfg, week_ending=WEEK_ENDING)
    second = process_week(_streams(), cfg, week_ending=WEEK_ENDING)

    assert first == second


def test_paid_minutes_only_for_paid_patterns():
    report = process_week(_streams(), build_config())

    for week in report:
        for d in week.days:
            assert d.paid_minutes >= 0
            if d.paid_minutes:
                assert d.scenario in (Scenario.FULL_DAY, Scenario.MISSING_LUNCH_OUT, Scenario.FRIDAY_FULL)


def test_partial_config_mapping_is_merged_with_defaults():
    report = process_week({"E001": [day(MONDAY, ("07:38:00", "Clock In"))]}, {"grace_minutes": 10, "flag_late_after": "07:40"})

    assert report["E001"].days[0].slots[Slot.MORNING_IN] == datetime(2026, 1, 5, 7, 30)


def test_invalid_config_aborts_before_processing():
    with pytest.raises(ConfigurationError):
        process_week(_streams(), {"clock3_window_start": "13:00", "clock3_window_end": "12:10"})
