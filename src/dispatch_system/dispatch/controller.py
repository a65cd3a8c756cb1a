from __future__ import annotations

import logging
from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_date, parse_iso_date, today_local
from ..core.constants import SETUP_REQUIRED_NOTICE
from ..core.enums import DispatchStatus
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str, field_name: str) -> date:
        try:
            return parse_iso_date(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} 날짜 형식이 올바르지 않습니다 (YYYY-MM-DD)")

    def _parse_status(value: str | None) -> DispatchStatus | None:
        if not value or value == "all":
            return None
        try:
            return DispatchStatus(value.upper())
        except ValueError:
            raise ValidationError("배차 상태가 올바르지 않습니다")

    def _error(message: str, code: int):
        return jsonify({"error": message}), code

    @app.route("/api/dispatch/days/<day>", methods=["GET"], endpoint="dispatch_day")
    def dispatch_day(day: str):
        try:
            daily = container.dispatch_service.get_day(_parse_date(day, "조회"))
            payload = daily.to_dict()
            if not daily.route_dispatches:
                payload["notice"] = SETUP_REQUIRED_NOTICE
            return jsonify(payload)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to resolve dispatch for %s", day)
            return _error("배차 정보를 불러오지 못했습니다", 500)

    @app.route("/api/dispatch", methods=["GET"], endpoint="dispatch_range")
    def dispatch_range():
        today = today_local()
        start_s = request.args.get("start") or format_date(today)
        end_s = request.args.get("end") or format_date(today + timedelta(days=6))
        try:
            result = container.dispatch_service.get_range(
                start=_parse_date(start_s, "시작"),
                end=_parse_date(end_s, "종료"),
                route_id=request.args.get("route_id") or None,
                status=_parse_status(request.args.get("status")),
            )
            payload = {
                "start": start_s,
                "end": end_s,
                "dispatches": [d.to_dict() for d in result.dispatches],
                "statistics": result.statistics.to_dict(),
            }
            if result.total_routes == 0:
                payload["notice"] = SETUP_REQUIRED_NOTICE
            return jsonify(payload)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to resolve dispatch range %s..%s", start_s, end_s)
            return _error("배차 정보를 불러오지 못했습니다", 500)

    @app.route("/api/dispatch/statistics", methods=["GET"], endpoint="dispatch_statistics")
    def dispatch_statistics():
        try:
            stats = container.dispatch_service.get_range_statistics(
                start=_parse_date(request.args.get("start") or "", "시작"),
                end=_parse_date(request.args.get("end") or "", "종료"),
            )
            return jsonify(stats.to_dict())
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to compute dispatch statistics")
            return _error("배차 통계를 불러오지 못했습니다", 500)

    @app.route("/api/dispatch/summary/<int:year>/<int:month>", methods=["GET"], endpoint="dispatch_month_summary")
    def dispatch_month_summary(year: int, month: int):
        try:
            summary = container.dispatch_service.get_month_summary(year=year, month=month)
            days = [s.to_dict() for _, s in sorted(summary.items())]
            payload = {"year": year, "month": month, "days": days}
            if any(s.is_unconfigured for s in summary.values()):
                payload["notice"] = SETUP_REQUIRED_NOTICE
            return jsonify(payload)
        except ValidationError as e:
            return _error(str(e), 400)
        except Exception:
            logger.exception("Failed to summarize dispatch for %s-%s", year, month)
            return _error("월간 배차 요약을 불러오지 못했습니다", 500)
