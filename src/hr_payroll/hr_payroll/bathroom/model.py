from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class BathroomVisit:
    entry_time: datetime
    exit_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None


@dataclass(frozen=True)
class BathroomReport:
    """Báo cáo giờ vệ sinh trong ngày (chỉ để xem xét, không trừ lương)."""

    work_date: date
    entries: tuple[BathroomVisit, ...] = ()
    daily_total_minutes: int = 0
    warnings: tuple[str, ...] = ()
