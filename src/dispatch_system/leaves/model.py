from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import LeaveDuration, LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    """Read-model of one leave day from the vacation system (read-only here)."""

    user_name: str
    leave_date: date
    status: LeaveStatus
    duration: LeaveDuration = LeaveDuration.FULL_DAY
    leave_type: LeaveType = LeaveType.REGULAR

    @property
    def blocks_dispatch(self) -> bool:
        # Half-day leave blocks the whole day for dispatch purposes.
        return self.status == LeaveStatus.APPROVED and self.duration != LeaveDuration.UNUSED
