"""Ví dụ: dùng service layer (không qua Flask).

Prints this month's dispatch calendar summary straight from the container.
"""

import importlib

from config import get_settings_module

from dispatch_system.common.datetime_utils import today_local
from dispatch_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    today = today_local()
    summary = container.dispatch_service.get_month_summary(year=today.year, month=today.month)
    for day, s in sorted(summary.items()):
        label = s.holiday_name if s.is_holiday else f"{s.normal_count}/{s.substitute_count}/{s.no_service_count}"
        print(day.isoformat(), label)


if __name__ == "__main__":
    main()
