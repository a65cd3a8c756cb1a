from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Route


class RouteRepository(Protocol):
    def list_all(self) -> Sequence[Route]:
        """Routes in configuration order, each with its driver chain in stored order."""

        raise NotImplementedError

    def get_by_id(self, route_id: str) -> Optional[Route]:
        raise NotImplementedError

    def create(self, route: Route) -> str:
        raise NotImplementedError

    def update(self, route: Route) -> bool:
        """Replace name/type and the whole driver chain."""

        raise NotImplementedError

    def delete(self, route_id: str) -> bool:
        raise NotImplementedError
