from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.hr_payroll.hr_payroll.core import flags
from src.hr_payroll.hr_payroll.core.enums import Scenario, Slot
from src.hr_payroll.hr_payroll.rules.builder import build_config
from src.hr_payroll.hr_payroll.timesheets.factory import PaidTimeStrategyFactory
from src.hr_payroll.hr_payroll.timesheets.model import AdjustedDay, ClassifiedDay
from src.hr_payroll.hr_payroll.timesheets.strategies.friday_strategy import FridayStrategy
from src.hr_payroll.hr_payroll.timesheets.strategies.weekday_strategy import WeekdayStrategy

WEDNESDAY = date(2026, 1, 7)
FRIDAY = date(2026, 1, 9)

M, LO, LI, A = Slot.MORNING_IN, Slot.LUNCH_OUT, Slot.LUNCH_IN, Slot.AFTERNOON_OUT
STANDARD_TIMES = {M: "07:30", LO: "12:00", LI: "12:30", A: "16:30"}


def at(day: date, hhmm: str) -> datetime:
    h, m = (int(x) for x in hhmm.split(":"))
    return datetime.combine(day, time(h, m))


def adjusted_day(day: date, slots: dict) -> AdjustedDay:
    values = {slot: at(day, hhmm) for slot, hhmm in slots.items()}
    classified = ClassifiedDay(work_date=day, is_friday=day.weekday() == 4, slots=dict(values))
    return AdjustedDay(classified=classified, slots=values)


def weekday(present) -> AdjustedDay:
    return adjusted_day(WEDNESDAY, {s: STANDARD_TIMES[s] for s in present})


def test_factory_picks_friday_strategy():
    factory = PaidTimeStrategyFactory(build_config())

    assert isinstance(factory.for_day(FRIDAY), FridayStrategy)
    assert isinstance(factory.for_day(WEDNESDAY), WeekdayStrategy)


def test_full_day_deducts_lunch():
    result = WeekdayStrategy(build_config()).calculate(weekday({M, LO, LI, A}))

    assert result.scenario is Scenario.FULL_DAY
    assert result.paid_minutes == 510
    assert result.flags == ()


def test_missing_lunch_out_still_deducts_lunch():
    result = WeekdayStrategy(build_config()).calculate(weekday({M, LI, A}))

    assert result.scenario is Scenario.MISSING_LUNCH_OUT
    assert result.paid_minutes == 510
    assert result.flags == (flags.MISSING_LUNCH_OUT,)


def test_lunch_deduction_follows_configured_minutes():
    result = WeekdayStrategy(build_config({"standard_lunch_minutes": 45})).calculate(weekday({M, LO, LI, A}))

    assert result.paid_minutes == 495


@pytest.mark.parametrize(
    "present, scenario, flag",
    [
        ({M}, Scenario.ONLY_MORNING, flags.ONLY_MORNING),
        ({A}, Scenario.ONLY_AFTERNOON, flags.ONLY_AFTERNOON),
        ({M, A}, Scenario.NO_LUNCH, flags.NO_LUNCH),
        ({M, LO, A}, Scenario.MISSING_LUNCH_RETURN, flags.MISSING_LUNCH_RETURN),
        ({LO, LI, A}, Scenario.NO_MORNING, flags.NO_MORNING),
        ({M, LO, LI}, Scenario.NO_AFTERNOON_OUT, flags.NO_AFTERNOON_OUT),
        ({LO, LI}, Scenario.ONLY_LUNCH, flags.ONLY_LUNCH),
        ({LO}, Scenario.ONLY_LUNCH_OUT, flags.ONLY_LUNCH_OUT),
        ({LI}, Scenario.ONLY_LUNCH_RETURN, flags.ONLY_LUNCH_RETURN),
        (set(), Scenario.IRREGULAR, flags.IRREGULAR),
        ({M, LO}, Scenario.IRREGULAR, flags.IRREGULAR),
        ({M, LI}, Scenario.IRREGULAR, flags.IRREGULAR),
        ({LO, A}, Scenario.IRREGULAR, flags.IRREGULAR),
        ({LI, A}, Scenario.IRREGULAR, flags.IRREGULAR),
    ],
)
def test_unpaid_patterns_need_manual_adjustment(present, scenario, flag):
    result = WeekdayStrategy(build_config()).calculate(weekday(present))

    assert result.scenario is scenario
    assert result.paid_minutes == 0
    assert result.flags == (flag,)


def test_out_of_order_slots_are_never_paid():
    day = adjusted_day(WEDNESDAY, {M: "07:30", LO: "12:20", LI: "12:15", A: "16:30"})

    result = WeekdayStrategy(build_config()).calculate(day)

    assert result.paid_minutes == 0
    assert result.flags == (flags.IMPOSSIBLE_ORDER,)


def test_friday_full_has_no_lunch_deduction():
    result = FridayStrategy(build_config()).calculate(adjusted_day(FRIDAY, {M: "07:30", A: "13:00"}))

    assert result.scenario is Scenario.FRIDAY_FULL
    assert result.paid_minutes == 330
    assert result.flags == ()


def test_friday_lunch_deduction_when_enabled():
    cfg = build_config({"apply_lunch_on_friday": True})

    result = FridayStrategy(cfg).calculate(adjusted_day(FRIDAY, {M: "07:30", A: "13:00"}))

    assert result.paid_minutes == 300


@pytest.mark.parametrize(
    "slots, scenario, flag",
    [
        ({M: "07:30"}, Scenario.FRIDAY_MISSING_OUT, flags.MISSING_FRIDAY_OUT),
        ({A: "13:00"}, Scenario.FRIDAY_MISSING_IN, flags.MISSING_FRIDAY_IN),
        ({}, Scenario.IRREGULAR, flags.IRREGULAR),
    ],
)
def test_friday_missing_scans(slots, scenario, flag):
    result = FridayStrategy(build_config()).calculate(adjusted_day(FRIDAY, slots))

    assert result.scenario is scenario
    assert result.paid_minutes == 0
    assert result.flags == (flag,)
