"""HR payroll timesheet package.

Organised by feature modules (punches, timesheets, bathroom, payroll, ...).
The punch-to-paid-time pipeline is pure and synchronous; file reading and
report writing stay in the importer/exporter at the edges.
"""
from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

from config import load_settings

from .common.logging_utils import configure_logging
from .container import Container, build_container
from .employees.loader import load_directory


def create_container() -> Container:
    load_dotenv(override=False)

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    employees_file = Path(getattr(settings, "EMPLOYEES_FILE", ""))
    directory = load_directory(employees_file) if employees_file.is_file() else None

    return build_container(
        time_rules=getattr(settings, "TIME_RULES", {}),
        directory=directory,
        punch_columns=getattr(settings, "PUNCH_COLUMNS", None),
    )
