from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .model import Route
from .service import NewRouteDriver

logger = logging.getLogger(__name__)


def _route_dict(route: Route) -> dict:
    return {
        "route_id": route.route_id,
        "name": route.name,
        "route_type": route.route_type.value,
        "drivers": [
            {
                "driver_id": d.driver_id,
                "driver_name": d.driver_name,
                "vehicle_name": d.vehicle_name,
                "vehicle_capacity": d.vehicle_capacity,
            }
            for d in route.drivers
        ],
    }


def register(app: Flask, container: Container) -> None:
    def _body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("요청 본문(JSON)이 올바르지 않습니다")
        return data

    def _drivers(data: dict):
        if "drivers" not in data:
            return None
        raw = data.get("drivers")
        if not isinstance(raw, list):
            raise ValidationError("운전자 목록 형식이 올바르지 않습니다")
        return [
            NewRouteDriver(
                driver_id=str(d.get("driver_id") or ""),
                driver_name=str(d.get("driver_name") or ""),
                vehicle_name=str(d.get("vehicle_name") or ""),
                vehicle_capacity=d.get("vehicle_capacity") or 0,
            )
            for d in raw
            if isinstance(d, dict)
        ]

    def _parse_day(value: str):
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)")

    def _handle(action, *, success_code: int = 200):
        try:
            return action(), success_code
        except NotFoundError as e:
            return {"error": str(e)}, 404
        except ValidationError as e:
            return {"error": str(e)}, 400
        except Exception:
            logger.exception("Dispatch configuration request failed: %s %s", request.method, request.path)
            return {"error": "배차 설정 처리 중 오류가 발생했습니다"}, 500

    def _respond(action, *, success_code: int = 200):
        payload, code = _handle(action, success_code=success_code)
        return jsonify(payload), code

    svc = container.route_config_service

    @app.route("/api/dispatch/routes", methods=["GET"], endpoint="list_dispatch_routes")
    def list_dispatch_routes():
        return _respond(lambda: {"routes": [_route_dict(r) for r in svc.list_routes()]})

    @app.route("/api/dispatch/routes", methods=["POST"], endpoint="create_dispatch_route")
    def create_dispatch_route():
        def action():
            data = _body()
            route_id = svc.create_route(
                name=str(data.get("name") or ""),
                route_type=data.get("route_type") or "",
                drivers=_drivers(data) or [],
            )
            return {"route_id": route_id}

        return _respond(action, success_code=201)

    @app.route("/api/dispatch/routes/<route_id>", methods=["PUT"], endpoint="update_dispatch_route")
    def update_dispatch_route(route_id: str):
        def action():
            data = _body()
            route = svc.update_route(
                route_id=route_id,
                name=data.get("name"),
                route_type=data.get("route_type"),
                drivers=_drivers(data),
            )
            return _route_dict(route)

        return _respond(action)

    @app.route("/api/dispatch/routes/<route_id>", methods=["DELETE"], endpoint="delete_dispatch_route")
    def delete_dispatch_route(route_id: str):
        def action():
            svc.delete_route(route_id=route_id)
            return {"deleted": route_id}

        return _respond(action)

    @app.route("/api/dispatch/routes/<route_id>/boarding-order", methods=["POST"], endpoint="reorder_dispatch_seniors")
    def reorder_dispatch_seniors(route_id: str):
        def action():
            senior_ids = _body().get("senior_ids")
            if not isinstance(senior_ids, list):
                raise ValidationError("탑승 순서 목록이 올바르지 않습니다")
            updated = svc.reorder_seniors(route_id=route_id, senior_ids=[str(s) for s in senior_ids])
            return {"updated": updated}

        return _respond(action)

    @app.route("/api/dispatch/seniors", methods=["GET"], endpoint="list_dispatch_seniors")
    def list_dispatch_seniors():
        return _respond(
            lambda: {
                "seniors": [
                    {
                        "senior_id": s.senior_id,
                        "name": s.name,
                        "route_id": s.route_id,
                        "boarding_order": s.boarding_order,
                    }
                    for s in svc.list_seniors()
                ]
            }
        )

    @app.route("/api/dispatch/seniors", methods=["POST"], endpoint="create_dispatch_senior")
    def create_dispatch_senior():
        def action():
            data = _body()
            senior_id = svc.create_senior(
                name=str(data.get("name") or ""),
                route_id=data.get("route_id") or None,
                boarding_order=data.get("boarding_order"),
            )
            return {"senior_id": senior_id}

        return _respond(action, success_code=201)

    @app.route("/api/dispatch/seniors/<senior_id>", methods=["PUT"], endpoint="update_dispatch_senior")
    def update_dispatch_senior(senior_id: str):
        def action():
            data = _body()
            senior = svc.update_senior(
                senior_id=senior_id,
                name=data.get("name"),
                route_id=data.get("route_id"),
                boarding_order=data.get("boarding_order"),
            )
            return {
                "senior_id": senior.senior_id,
                "name": senior.name,
                "route_id": senior.route_id,
                "boarding_order": senior.boarding_order,
            }

        return _respond(action)

    @app.route("/api/dispatch/seniors/<senior_id>", methods=["DELETE"], endpoint="delete_dispatch_senior")
    def delete_dispatch_senior(senior_id: str):
        def action():
            svc.delete_senior(senior_id=senior_id)
            return {"deleted": senior_id}

        return _respond(action)

    @app.route("/api/dispatch/seniors/<senior_id>/absences/<day>", methods=["POST"], endpoint="add_senior_absence")
    def add_senior_absence(senior_id: str, day: str):
        def action():
            data = request.get_json(silent=True) or {}
            created = svc.add_absence(
                senior_id=senior_id,
                absence_date=_parse_day(day),
                reason=data.get("reason") if isinstance(data, dict) else None,
            )
            return {"created": created}

        return _respond(action)

    @app.route("/api/dispatch/seniors/<senior_id>/absences/<day>", methods=["DELETE"], endpoint="remove_senior_absence")
    def remove_senior_absence(senior_id: str, day: str):
        return _respond(lambda: {"removed": svc.remove_absence(senior_id=senior_id, absence_date=_parse_day(day))})
