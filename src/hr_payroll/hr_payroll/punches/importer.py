from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

import pandas as pd

from ..common.datetime_utils import parse_timestamp
from ..core.exceptions import ValidationError
from ..employees.directory import EmployeeDirectory
from .model import DayPunches, RawPunch, RejectedPunch

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = {
    "clock_ref": "Person",
    "device": "Device",
    "timestamp": "Time",
}


def _cell(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class ImportBatch:
    """Thông tin một lần nhập dữ liệu máy chấm công."""

    imported_at: datetime
    records_imported: int
    unmatched_count: int
    rejected_count: int
    imported_by: str = ""
    source: str = ""


@dataclass(frozen=True)
class ImportResult:
    streams: dict[str, list[DayPunches]]
    batch: ImportBatch
    unmatched: tuple[RawPunch, ...] = ()
    rejected: tuple[RejectedPunch, ...] = ()
    unmatched_refs: tuple[str, ...] = field(default=())


class PunchImporter:
    """Turn a clock export into per-employee, per-day punch streams.

    Clock references are resolved here; punches whose reference is unknown
    are reported as unmatched and never reach classification.
    """

    def __init__(self, directory: EmployeeDirectory, *, columns: Optional[Mapping[str, str]] = None):
        self._directory = directory
        self._columns = {**DEFAULT_COLUMNS, **(columns or {})}

    def read_file(self, path: Union[str, Path]) -> pd.DataFrame:
        path = Path(path)
        if path.suffix.lower() in {".xlsx", ".xls"}:
            return pd.read_excel(path, dtype=str, keep_default_na=False)
        return pd.read_csv(path, dtype=str, keep_default_na=False)

    def import_file(self, path: Union[str, Path], *, imported_by: str = "", now: Optional[datetime] = None) -> ImportResult:
        return self.from_frame(self.read_file(path), imported_by=imported_by, source=str(path), now=now)

    def from_frame(
        self,
        df: pd.DataFrame,
        *,
        imported_by: str = "",
        source: str = "",
        now: Optional[datetime] = None,
    ) -> ImportResult:
        missing = [col for col in self._columns.values() if col not in df.columns]
        if missing:
            raise ValidationError(f"Punch export is missing column(s): {', '.join(missing)}")

        ref_col = self._columns["clock_ref"]
        device_col = self._columns["device"]
        ts_col = self._columns["timestamp"]

        rows = []
        for rec in df.to_dict("records"):
            ts = rec[ts_col]
            if isinstance(ts, pd.Timestamp):
                ts = ts.to_pydatetime()
            elif pd.isna(ts):
                ts = ""
            rows.append(RawPunch(
                person_ref=_cell(rec[ref_col]),
                device_label=_cell(rec[device_col]),
                timestamp=ts,
            ))
        return self.from_rows(rows, imported_by=imported_by, source=source, now=now)

    def from_rows(
        self,
        rows: Iterable[RawPunch],
        *,
        imported_by: str = "",
        source: str = "",
        now: Optional[datetime] = None,
    ) -> ImportResult:
        grouped: dict[str, dict] = {}
        unmatched: list[RawPunch] = []
        unmatched_refs: list[str] = []
        rejected: list[RejectedPunch] = []
        imported = 0

        for raw in rows:
            employee = self._directory.resolve(raw.person_ref)
            if employee is None:
                unmatched.append(raw)
                if raw.person_ref not in unmatched_refs:
                    unmatched_refs.append(raw.person_ref)
                continue
            try:
                ts = parse_timestamp(raw.timestamp)
            except (TypeError, ValueError) as exc:
                rejected.append(RejectedPunch(raw=raw, reason=str(exc)))
                continue

            days = grouped.setdefault(employee.employee_id, {})
            days.setdefault(ts.date(), []).append(
                RawPunch(person_ref=raw.person_ref, device_label=raw.device_label, timestamp=ts)
            )
            imported += 1

        for ref in unmatched_refs:
            logger.warning("Clock reference %r not found in employee directory", ref)
        for r in rejected:
            logger.warning("Rejected punch row %r: %s", r.raw, r.reason)

        streams = {
            employee_id: [DayPunches(work_date=d, punches=tuple(days[d])) for d in sorted(days)]
            for employee_id, days in grouped.items()
        }
        batch = ImportBatch(
            imported_at=now or datetime.now(),
            records_imported=imported,
            unmatched_count=len(unmatched),
            rejected_count=len(rejected),
            imported_by=imported_by,
            source=source,
        )
        logger.info(
            "Imported %d punch(es) for %d employee(s); %d unmatched, %d rejected",
            imported, len(streams), len(unmatched), len(rejected),
        )
        return ImportResult(
            streams=streams,
            batch=batch,
            unmatched=tuple(unmatched),
            rejected=tuple(rejected),
            unmatched_refs=tuple(unmatched_refs),
        )
