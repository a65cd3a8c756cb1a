from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import coerce_date
from ..common.rows import first_present
from ..core.enums import LeaveDuration, LeaveStatus, LeaveType
from .model import LeaveRequest

logger = logging.getLogger(__name__)


def parse_leave_request(row: Mapping[str, Any]) -> Optional[LeaveRequest]:
    """Build a LeaveRequest from a vacation-service row.

    Accepts both the API shape (userName/date/type) and DB columns
    (user_name/leave_date/leave_type). Returns None when the row cannot be
    trusted: missing name, bad date or unknown status. A missing duration
    means a full day; unknown statuses such as "canceled" are not leave.
    """
    user_name = first_present(row, "user_name", "userName")
    leave_date = coerce_date(first_present(row, "leave_date", "date"))
    if not user_name or leave_date is None:
        return None

    try:
        status = LeaveStatus(str(first_present(row, "status") or "").lower())
    except ValueError:
        return None

    try:
        duration = LeaveDuration(str(first_present(row, "duration") or LeaveDuration.FULL_DAY.value).upper())
    except ValueError:
        return None

    try:
        leave_type = LeaveType(str(first_present(row, "leave_type", "type") or LeaveType.REGULAR.value).lower())
    except ValueError:
        # sick/other leave still counts as leave
        leave_type = LeaveType.REGULAR

    return LeaveRequest(
        user_name=str(user_name).strip(),
        leave_date=leave_date,
        status=status,
        duration=duration,
        leave_type=leave_type,
    )


def parse_leave_requests(rows: Iterable[Mapping[str, Any]]) -> list[LeaveRequest]:
    out: list[LeaveRequest] = []
    for row in rows:
        req = parse_leave_request(row)
        if req is None:
            logger.warning("Skipping malformed leave record: %r", row)
            continue
        out.append(req)
    return out
