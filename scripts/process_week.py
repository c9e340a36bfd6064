"""Process one week of clock punches and export the review workbook.

Usage:
    python scripts/process_week.py punches.csv --week-ending 2026-01-10
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.hr_payroll.hr_payroll import create_container
from src.hr_payroll.hr_payroll.common.datetime_utils import fmt_minutes, parse_iso_date, week_ending_for
from src.hr_payroll.hr_payroll.core.exceptions import DomainError

logger = logging.getLogger("process_week")


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Reconcile clock punches into paid time for one week")
    p.add_argument("punch_file", help="Clock export (.csv or .xlsx)")
    p.add_argument("--week-ending", help="Saturday closing the week (YYYY-MM-DD); defaults to the latest punch's week")
    p.add_argument("--imported-by", default="", help="User running the import")
    p.add_argument("--output", help="Workbook path (default: OUTPUT_DIR/timesheets_<week>.xlsx)")
    p.add_argument("--submit", action="store_true", help="Create pending timesheets for approval")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        container = create_container()
        result = container.importer.import_file(args.punch_file, imported_by=args.imported_by)

        if args.week_ending:
            week_ending = week_ending_for(parse_iso_date(args.week_ending))
        else:
            all_days = [d.work_date for days in result.streams.values() for d in days]
            if not all_days:
                logger.error("No punches could be matched to employees")
                return 1
            week_ending = week_ending_for(max(all_days))

        report = container.processor.process_week(result.streams, week_ending=week_ending)

        settings = load_settings()
        out = Path(args.output or Path(getattr(settings, "OUTPUT_DIR", "reports")) / f"timesheets_{week_ending:%Y%m%d}.xlsx")
        container.exporter.write_xlsx(report, out)

        if args.submit:
            ids = container.approval_service.submit_week(report)
            logger.info("Submitted %d timesheet(s) for approval", len(ids))
    except DomainError as exc:
        logger.error("%s", exc)
        return 2

    for week in report:
        print(f"{week.employee_id:<12} {fmt_minutes(week.week_total_paid_minutes)}  flags={len(week.flags)}")
    if result.unmatched_refs:
        print(f"Unmatched clock refs: {', '.join(result.unmatched_refs)}")
    print(f"OK: Report written to {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
