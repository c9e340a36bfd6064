from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Union

from ..core.enums import DeviceKind


@dataclass(frozen=True)
class RawPunch:
    """A punch as exported by the clock device, before any parsing."""

    person_ref: str
    device_label: str
    timestamp: Union[str, datetime]


@dataclass(frozen=True)
class Punch:
    """Thực thể miền (domain): Lượt quẹt thẻ đã chuẩn hoá."""

    person_ref: str
    device_label: str
    kind: DeviceKind
    time: datetime


@dataclass(frozen=True)
class DuplicatePunch:
    punch: Punch
    kept: Punch


@dataclass(frozen=True)
class RejectedPunch:
    raw: RawPunch
    reason: str


@dataclass(frozen=True)
class DayPunches:
    """All raw punches of one employee for one calendar day."""

    work_date: date
    punches: tuple[RawPunch, ...] = ()


@dataclass(frozen=True)
class NormalizedPunches:
    main: tuple[Punch, ...]
    bathroom: tuple[Punch, ...]
    duplicates: tuple[DuplicatePunch, ...] = ()
    rejected: tuple[RejectedPunch, ...] = ()
    flags: tuple[str, ...] = field(default=())
