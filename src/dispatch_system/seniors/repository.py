from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from .model import Senior, SeniorAbsence


class SeniorRepository(Protocol):
    def list_all(self) -> Sequence[Senior]:
        """Seniors in insertion order."""

        raise NotImplementedError

    def get_by_id(self, senior_id: str) -> Optional[Senior]:
        raise NotImplementedError

    def create(self, senior: Senior) -> str:
        raise NotImplementedError

    def update(self, senior: Senior) -> bool:
        raise NotImplementedError

    def delete(self, senior_id: str) -> bool:
        raise NotImplementedError

    def unassign_route(self, route_id: str) -> int:
        """Detach every senior from a deleted route. Returns affected rows."""

        raise NotImplementedError

    def update_boarding_orders(self, route_id: str, orders: Mapping[str, int]) -> int:
        raise NotImplementedError


class SeniorAbsenceRepository(Protocol):
    def list_range(self, *, start: date, end: date) -> Sequence[SeniorAbsence]:
        raise NotImplementedError

    def add(self, absence: SeniorAbsence) -> bool:
        """Insert if missing. Returns False when (senior_id, date) already exists."""

        raise NotImplementedError

    def remove(self, *, senior_id: str, absence_date: date) -> bool:
        raise NotImplementedError

    def delete_for_senior(self, senior_id: str) -> int:
        raise NotImplementedError
