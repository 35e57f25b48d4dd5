"""Example: use the service layer directly (no Flask).

Controllers are thin; the reconciliation and analytics logic lives in services.
"""

from datetime import date

from src.hr_analytics.hr_analytics.container import build_container_from_settings
from src.hr_analytics.hr_analytics.main import configure_logging, load_settings


def main():
    settings = load_settings()
    configure_logging("INFO")
    container = build_container_from_settings(settings)

    result = container.reconciliation_engine.reconcile(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
    print(result.to_dict())
    print(container.analytics_service.unapproved_absences(date(2024, 1, 1), date(2024, 1, 31)))


if __name__ == "__main__":
    main()
