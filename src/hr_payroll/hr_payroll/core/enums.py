from __future__ import annotations

from enum import Enum


class DeviceKind(str, Enum):
    """Loại thiết bị chấm công, xác định một lần khi chuẩn hoá punch."""

    MAIN_IN = "MAIN_IN"
    MAIN_OUT = "MAIN_OUT"
    MAIN_UNKNOWN = "MAIN_UNKNOWN"
    BATHROOM_ENTRY = "BATHROOM_ENTRY"
    BATHROOM_EXIT = "BATHROOM_EXIT"

    @property
    def is_bathroom(self) -> bool:
        return self in (DeviceKind.BATHROOM_ENTRY, DeviceKind.BATHROOM_EXIT)


class Slot(str, Enum):
    """The four canonical daily clock slots, in chronological order."""

    MORNING_IN = "MORNING_IN"
    LUNCH_OUT = "LUNCH_OUT"
    LUNCH_IN = "LUNCH_IN"
    AFTERNOON_OUT = "AFTERNOON_OUT"

    @property
    def order(self) -> int:
        return _SLOT_ORDER[self]

    @property
    def is_in(self) -> bool:
        return self in (Slot.MORNING_IN, Slot.LUNCH_IN)


_SLOT_ORDER = {
    Slot.MORNING_IN: 1,
    Slot.LUNCH_OUT: 2,
    Slot.LUNCH_IN: 3,
    Slot.AFTERNOON_OUT: 4,
}

WEEKDAY_SLOTS = (Slot.MORNING_IN, Slot.LUNCH_OUT, Slot.LUNCH_IN, Slot.AFTERNOON_OUT)
FRIDAY_SLOTS = (Slot.MORNING_IN, Slot.AFTERNOON_OUT)


class Scenario(str, Enum):
    """Presence patterns of the paid-time table."""

    FULL_DAY = "FULL_DAY"
    MISSING_LUNCH_OUT = "MISSING_LUNCH_OUT"
    ONLY_MORNING = "ONLY_MORNING"
    ONLY_AFTERNOON = "ONLY_AFTERNOON"
    NO_LUNCH = "NO_LUNCH"
    MISSING_LUNCH_RETURN = "MISSING_LUNCH_RETURN"
    NO_MORNING = "NO_MORNING"
    NO_AFTERNOON_OUT = "NO_AFTERNOON_OUT"
    ONLY_LUNCH = "ONLY_LUNCH"
    ONLY_LUNCH_OUT = "ONLY_LUNCH_OUT"
    ONLY_LUNCH_RETURN = "ONLY_LUNCH_RETURN"
    IRREGULAR = "IRREGULAR"

    FRIDAY_FULL = "FRIDAY_FULL"
    FRIDAY_MISSING_OUT = "FRIDAY_MISSING_OUT"
    FRIDAY_MISSING_IN = "FRIDAY_MISSING_IN"


class AssignmentRule(str, Enum):
    """Which classifier rule placed a punch into its slot."""

    TIME_WINDOW = "TIME_WINDOW"
    DEVICE_HINT = "DEVICE_HINT"
    POSITION = "POSITION"


class TimesheetStatus(str, Enum):
    """Trạng thái luồng duyệt bảng công tuần."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
