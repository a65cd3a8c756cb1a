from __future__ import annotations

from enum import Enum


class RouteType(str, Enum):
    """Loại tuyến: đón (등원) hoặc trả (하원)."""

    PICKUP = "PICKUP"
    DROPOFF = "DROPOFF"


class DispatchStatus(str, Enum):
    """Kết quả điều xe của một tuyến trong một ngày."""

    NORMAL = "NORMAL"
    SUBSTITUTE = "SUBSTITUTE"
    NO_SERVICE = "NO_SERVICE"
    HOLIDAY = "HOLIDAY"


class LeaveStatus(str, Enum):
    """Trạng thái duyệt đơn nghỉ phép (đọc từ hệ thống nghỉ phép)."""

    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


class LeaveDuration(str, Enum):
    FULL_DAY = "FULL_DAY"
    HALF_DAY_AM = "HALF_DAY_AM"
    HALF_DAY_PM = "HALF_DAY_PM"
    UNUSED = "UNUSED"


class LeaveType(str, Enum):
    REGULAR = "regular"
    MANDATORY = "mandatory"
