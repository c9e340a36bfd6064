from __future__ import annotations

from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Union

import pandas as pd

from ..core.exceptions import ValidationError
from .directory import InMemoryEmployeeDirectory
from .model import Employee

REQUIRED_COLUMNS = ("employee_id", "display_name", "clock_ref", "hourly_rate")


def directory_from_frame(df: pd.DataFrame) -> InMemoryEmployeeDirectory:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(f"Employee list is missing column(s): {', '.join(missing)}")

    employees = []
    for rec in df.to_dict("records"):
        try:
            rate = Decimal(str(rec["hourly_rate"]).strip() or "0")
        except InvalidOperation:
            raise ValidationError(f"Invalid hourly rate for {rec['employee_id']}: {rec['hourly_rate']!r}")
        employees.append(
            Employee(
                employee_id=str(rec["employee_id"]).strip(),
                display_name=str(rec["display_name"]).strip(),
                clock_ref=str(rec["clock_ref"]).strip(),
                hourly_rate=rate,
            )
        )
    return InMemoryEmployeeDirectory(employees)


def load_directory(path: Union[str, Path]) -> InMemoryEmployeeDirectory:
    return directory_from_frame(pd.read_csv(path, dtype=str, keep_default_na=False))
