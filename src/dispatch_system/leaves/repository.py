from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_range(self, *, start: date, end: date) -> Sequence[LeaveRequest]:
        """Every leave day (any status) between start and end, inclusive."""

        raise NotImplementedError
