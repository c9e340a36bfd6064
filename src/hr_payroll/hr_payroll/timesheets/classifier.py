"""Assign the main-clock punches of one day to the four canonical slots.

Monday-Thursday runs a small state machine over the punches in time order.
Each punch is offered to an ordered list of rules and the first rule that
returns a slot wins:

1. ``TimeWindowRule``  - the earliest open slot whose window holds the punch.
2. ``DeviceHintRule``  - the punch sits in the window of a slot that is
   already filled; a Clock In / Clock Out label picks the next open slot of
   the same direction.
3. ``PositionalRule``  - same situation with an unlabelled device; the next
   open slot is taken and the day is flagged for review.

Slots only move forward: once a slot is filled no earlier slot can be filled.
Rules 2 and 3 never take a slot that a later punch of the day reaches by
time window; the fallback punch is dropped instead.
Punches no rule accepts are dropped and logged.

Friday only has Morning-In and Afternoon-Out. With no punch after the
morning window and no Clock Out label, the last punch clear of the re-scan
margin is taken as an early leave and flagged like a positional assignment.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..core import flags
from ..core.constants import FRIDAY_RESCAN_MINUTES
from ..core.enums import WEEKDAY_SLOTS, AssignmentRule, DeviceKind, Slot
from ..punches.model import Punch
from ..rules.model import TimeRuleConfig
from .model import ClassifiedDay, SlotAssignment

logger = logging.getLogger(__name__)

FRIDAY = 4


def time_of_day(value: datetime) -> time:
    # Clock exports are minute-resolution; seconds never push a punch out of a window.
    return value.time().replace(second=0, microsecond=0)


@dataclass(frozen=True)
class SlotWindows:
    config: TimeRuleConfig

    def contains(self, slot: Slot, value: datetime) -> bool:
        t = time_of_day(value)
        c = self.config
        if slot is Slot.MORNING_IN:
            return t <= c.clock1_max_time
        if slot is Slot.LUNCH_OUT:
            return c.clock2_window_start <= t <= c.clock2_window_end
        if slot is Slot.LUNCH_IN:
            return c.clock3_window_start <= t <= c.clock3_window_end
        return t >= c.clock4_min_time

    def slots_for(self, value: datetime) -> list[Slot]:
        return [s for s in WEEKDAY_SLOTS if self.contains(s, value)]


@dataclass
class ClassifierState:
    filled: dict[Slot, SlotAssignment] = field(default_factory=dict)

    @property
    def last_order(self) -> int:
        return max((s.order for s in self.filled), default=0)

    def open_slots(self) -> list[Slot]:
        last = self.last_order
        return [s for s in WEEKDAY_SLOTS if s.order > last]

    def next_open(self) -> Optional[Slot]:
        open_slots = self.open_slots()
        return open_slots[0] if open_slots else None

    def fill(self, slot: Slot, punch: Punch, rule: AssignmentRule) -> None:
        self.filled[slot] = SlotAssignment(slot=slot, punch=punch, rule=rule)


class ClassificationRule:
    rule = AssignmentRule.TIME_WINDOW

    def assign(self, punch: Punch, state: ClassifierState, windows: SlotWindows) -> Optional[Slot]:
        raise NotImplementedError


class TimeWindowRule(ClassificationRule):
    rule = AssignmentRule.TIME_WINDOW

    def assign(self, punch, state, windows):
        candidates = [s for s in state.open_slots() if windows.contains(s, punch.time)]
        if not candidates:
            return None
        if len(candidates) > 1 and punch.kind in (DeviceKind.MAIN_IN, DeviceKind.MAIN_OUT):
            wants_in = punch.kind is DeviceKind.MAIN_IN
            for slot in candidates:
                if slot.is_in == wants_in:
                    return slot
        return candidates[0]


def _in_filled_window(punch: Punch, state: ClassifierState, windows: SlotWindows, *, skip=()) -> bool:
    return any(s in state.filled and s not in skip for s in windows.slots_for(punch.time))


class DeviceHintRule(ClassificationRule):
    rule = AssignmentRule.DEVICE_HINT

    def assign(self, punch, state, windows):
        if punch.kind not in (DeviceKind.MAIN_IN, DeviceKind.MAIN_OUT):
            return None
        if not _in_filled_window(punch, state, windows):
            return None
        nxt = state.next_open()
        if nxt is not None and nxt.is_in == (punch.kind is DeviceKind.MAIN_IN):
            return nxt
        return None


class PositionalRule(ClassificationRule):
    """Best-effort fallback for unlabelled devices. Output is always flagged."""

    rule = AssignmentRule.POSITION

    def assign(self, punch, state, windows):
        if punch.kind is not DeviceKind.MAIN_UNKNOWN:
            return None
        # A second scan inside the morning window is a re-scan, never lunch out.
        if not _in_filled_window(punch, state, windows, skip=(Slot.MORNING_IN,)):
            return None
        return state.next_open()


DEFAULT_RULES: tuple[ClassificationRule, ...] = (TimeWindowRule(), DeviceHintRule(), PositionalRule())


class ClockClassifier:
    def __init__(self, config: TimeRuleConfig, rules: Sequence[ClassificationRule] = DEFAULT_RULES):
        self._config = config
        self._windows = SlotWindows(config)
        self._rules = tuple(rules)

    def classify(
        self,
        work_date: date,
        main: Sequence[Punch],
        bathroom: Sequence[Punch] = (),
    ) -> ClassifiedDay:
        ordered = sorted(main, key=lambda p: p.time)
        if work_date.weekday() == FRIDAY:
            assignments, dropped = self._classify_friday(ordered)
        else:
            assignments, dropped = self._classify_weekday(ordered)

        day_flags: list[str] = []
        if any(a.rule is AssignmentRule.POSITION for a in assignments):
            day_flags.append(flags.POSITIONAL_ASSIGNMENT)
        if dropped:
            day_flags.append(flags.UNCLASSIFIED_PUNCH)
            for p in dropped:
                logger.warning(
                    "Unclassified punch %s (%s) for %s on %s dropped",
                    p.time.strftime("%H:%M:%S"), p.device_label, p.person_ref, work_date,
                )
        if work_date.weekday() >= 5 and ordered:
            day_flags.append(flags.WEEKEND_PUNCHES)

        return ClassifiedDay(
            work_date=work_date,
            is_friday=work_date.weekday() == FRIDAY,
            slots={a.slot: a.punch.time for a in assignments},
            assignments=tuple(assignments),
            bathroom=tuple(sorted(bathroom, key=lambda p: p.time)),
            unclassified=tuple(dropped),
            flags=tuple(day_flags),
        )

    def _classify_weekday(self, punches: Sequence[Punch]) -> tuple[list[SlotAssignment], list[Punch]]:
        state = ClassifierState()
        dropped: list[Punch] = []
        for i, punch in enumerate(punches):
            later = punches[i + 1:]
            for rule in self._rules:
                slot = rule.assign(punch, state, self._windows)
                if slot is None:
                    continue
                if rule.rule is not AssignmentRule.TIME_WINDOW and self._reached_later(slot, later):
                    continue
                state.fill(slot, punch, rule.rule)
                break
            else:
                dropped.append(punch)
        assignments = sorted(state.filled.values(), key=lambda a: a.slot.order)
        return assignments, dropped

    def _reached_later(self, slot: Slot, later: Sequence[Punch]) -> bool:
        return any(self._windows.contains(slot, p.time) for p in later)

    def _classify_friday(self, punches: Sequence[Punch]) -> tuple[list[SlotAssignment], list[Punch]]:
        max_morning = self._config.clock1_max_time
        morning = next((p for p in punches if time_of_day(p.time) <= max_morning), None)

        after = [p for p in punches if p is not morning and (morning is None or p.time > morning.time)]
        candidates = [p for p in after if time_of_day(p.time) > max_morning or p.kind is DeviceKind.MAIN_OUT]

        afternoon: Optional[Punch] = None
        rule = AssignmentRule.TIME_WINDOW
        if candidates:
            afternoon = candidates[-1]
            if time_of_day(afternoon.time) <= max_morning:
                rule = AssignmentRule.DEVICE_HINT
        elif morning is not None:
            # Early leave on an unlabelled device; scans just after morning in are re-scans.
            rescan_until = morning.time + timedelta(minutes=FRIDAY_RESCAN_MINUTES)
            leaving = [p for p in after if p.time > rescan_until]
            if leaving:
                afternoon, rule = leaving[-1], AssignmentRule.POSITION

        assignments: list[SlotAssignment] = []
        if morning is not None:
            assignments.append(SlotAssignment(Slot.MORNING_IN, morning, AssignmentRule.TIME_WINDOW))
        if afternoon is not None:
            assignments.append(SlotAssignment(Slot.AFTERNOON_OUT, afternoon, rule))

        used = {id(a.punch) for a in assignments}
        dropped = [p for p in punches if id(p) not in used]
        return assignments, dropped
