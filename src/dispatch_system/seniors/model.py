from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Senior:
    """Thực thể miền (domain): Người cao tuổi đi xe theo tuyến."""

    senior_id: str
    name: str
    route_id: Optional[str]
    boarding_order: int


@dataclass(frozen=True)
class SeniorAbsence:
    senior_id: str
    absence_date: date
    reason: Optional[str] = None
