"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"

# Fixed weekly non-working day (date.weekday(): Monday=0 ... Sunday=6)
WEEKLY_HOLIDAY_WEEKDAY = 6
WEEKLY_HOLIDAY_NAME = "일요일"

PRIMARY_DRIVER_ROLE = "primary"
FALLBACK_DRIVER_ROLE = "fallback-{n}"

REASON_PRIMARY_ON_LEAVE = "{name} on leave"
REASON_ALL_DRIVERS_ON_LEAVE = "all assigned drivers on leave"
REASON_NO_DRIVERS_ASSIGNED = "no drivers assigned"

SETUP_REQUIRED_NOTICE = "배차 설정이 필요합니다"

DEFAULT_DISPATCH_WORKERS = 0

# Longest date span a single range query may cover (inclusive days)
MAX_RANGE_DAYS = 366
