"""Example: drive the service layer directly, without Flask.

Controllers are a thin layer; the scheduling rules live in the services.
"""

import importlib

from config import get_settings_module

from src.shift_scheduler.shift_scheduler.container import build_container
from src.shift_scheduler.shift_scheduler.logging_utils import setup_logging


def main():
    settings = importlib.import_module(get_settings_module())
    setup_logging("INFO")
    container = build_container(db_config=settings.DB_CONFIG)

    admin = container.auth_service.authenticate("admin@example.com", "admin123")
    for day in container.shift_service.calendar(admin):
        print(day.work_date, "complete" if day.completeness.is_complete else f"missing {day.completeness.missing_types}")

    for report in container.report_service.all_reports(admin, report_type="weekly"):
        print(report.user.name, report.summary.to_dict())


if __name__ == "__main__":
    main()
