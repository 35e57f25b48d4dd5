"""Nightly lifecycle status update (notice period -> inactive, pending onboard -> active)."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.hr_analytics.hr_analytics.common.datetime_utils import parse_iso_date, today_local
from src.hr_analytics.hr_analytics.container import build_container_from_settings
from src.hr_analytics.hr_analytics.main import configure_logging, load_settings


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--as-of", type=parse_iso_date, default=None, help="defaults to today")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container_from_settings(settings)

    results = container.lifecycle_job.run(as_of=args.as_of or today_local())
    print(json.dumps([r.to_dict() for r in results], indent=2))
    return 0 if all(r.success for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
