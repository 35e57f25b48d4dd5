"""Run attendance reconciliation for a date range (cron or manual use).

    python scripts/run_reconciliation.py --start 2024-01-01 --end 2024-01-31
    python scripts/run_reconciliation.py --start 2024-01-01 --end 2024-01-31 --employee E042
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_analytics.hr_analytics.common.datetime_utils import parse_iso_date
from src.hr_analytics.hr_analytics.container import build_container_from_settings
from src.hr_analytics.hr_analytics.main import configure_logging, load_settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--start", required=True, type=parse_iso_date, help="first day, YYYY-MM-DD")
    parser.add_argument("--end", required=True, type=parse_iso_date, help="last day (inclusive), YYYY-MM-DD")
    parser.add_argument("--employee", help="only reconcile this employee code")
    parser.add_argument(
        "--rebuild-coverage",
        action="store_true",
        help="also rebuild the attendance_coverage cache for the range",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container_from_settings(settings)

    if args.rebuild_coverage:
        container.coverage_service.rebuild_cache(start_date=args.start, end_date=args.end)

    engine = container.reconciliation_engine
    if args.employee:
        result = engine.reconcile_employee(employee_code=args.employee, start_date=args.start, end_date=args.end)
        if result is None:
            print(f"Employee {args.employee} is not in the eligible population; nothing to do.")
            return 0
    else:
        result = engine.reconcile(start_date=args.start, end_date=args.end)

    print(json.dumps(result.to_dict(), indent=2))
    return 1 if result.failure_count else 0


if __name__ == "__main__":
    sys.exit(main())
