from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta

from dispatch_system.common.datetime_utils import iter_days
from dispatch_system.core.enums import DispatchStatus, LeaveDuration, LeaveStatus, RouteType
from dispatch_system.dispatch.aggregator import (
    dispatch_statistics,
    filter_dispatches,
    resolve_range,
    summarize_month,
)
from dispatch_system.dispatch.model import DispatchSnapshot
from dispatch_system.holidays.calendar import HolidayCalendar
from dispatch_system.leaves.model import LeaveRequest
from dispatch_system.routes.model import Route, RouteDriver
from dispatch_system.seniors.model import Senior


def _route(route_id: str, *names: str) -> Route:
    return Route(
        route_id=route_id,
        name=route_id,
        route_type=RouteType.DROPOFF,
        drivers=tuple(RouteDriver(driver_id=f"u-{n}", driver_name=n) for n in names),
    )


def _leave(name: str, day: date) -> LeaveRequest:
    return LeaveRequest(user_name=name, leave_date=day, status=LeaveStatus.APPROVED, duration=LeaveDuration.FULL_DAY)


def test_range_has_one_entry_per_date_ascending():
    snapshot = DispatchSnapshot.of([_route("A", "Kim")])

    dailies = resolve_range(date(2025, 2, 27), date(2025, 3, 2), snapshot)

    assert [d.dispatch_date for d in dailies] == [
        date(2025, 2, 27),
        date(2025, 2, 28),
        date(2025, 3, 1),
        date(2025, 3, 2),
    ]


def test_range_end_before_start_is_empty():
    snapshot = DispatchSnapshot.of([_route("A", "Kim")])
    assert resolve_range(date(2025, 3, 10), date(2025, 3, 9), snapshot) == []


def test_range_single_day():
    snapshot = DispatchSnapshot.of([_route("A", "Kim")])

    dailies = resolve_range(date(2025, 3, 10), date(2025, 3, 10), snapshot)

    assert len(dailies) == 1
    assert dailies[0].route_dispatches[0].status == DispatchStatus.NORMAL


def test_range_ending_on_last_representable_date():
    snapshot = DispatchSnapshot.of([_route("A", "Kim")])

    dailies = resolve_range(date.max - timedelta(days=1), date.max, snapshot)

    assert [d.dispatch_date for d in dailies] == [date(9999, 12, 30), date(9999, 12, 31)]


def test_iter_days_stops_at_date_max():
    assert list(iter_days(date.max, date.max)) == [date.max]
    assert list(iter_days(date.max, date(9999, 12, 30))) == []


def test_range_with_no_routes_still_lists_every_date():
    dailies = resolve_range(date(2025, 3, 10), date(2025, 3, 12), DispatchSnapshot.of([]))

    assert len(dailies) == 3
    assert all(d.route_dispatches == () for d in dailies)


def test_executor_gives_same_result_as_sequential():
    snapshot = DispatchSnapshot.of(
        [_route("A", "Kim", "Lee"), _route("B", "Choi")],
        [Senior("s1", "Park", "A", 1)],
    )
    leaves = [_leave("Kim", date(2025, 3, 11)), _leave("Choi", date(2025, 3, 12))]

    sequential = resolve_range(date(2025, 3, 1), date(2025, 3, 31), snapshot, leaves)
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = resolve_range(date(2025, 3, 1), date(2025, 3, 31), snapshot, leaves, executor=pool)

    assert parallel == sequential


def test_month_summary_march_2025_one_route_no_leave():
    snapshot = DispatchSnapshot.of([_route("A", "Kim", "Lee")])

    summary = summarize_month(2025, 3, snapshot)

    assert len(summary) == 31
    assert sum(s.normal_count for s in summary.values()) == 26
    holidays = {d for d, s in summary.items() if s.is_holiday}
    assert holidays == {
        date(2025, 3, 2),
        date(2025, 3, 9),
        date(2025, 3, 16),
        date(2025, 3, 23),
        date(2025, 3, 30),
    }
    assert summary[date(2025, 3, 2)].holiday_name == "일요일"
    assert summary[date(2025, 3, 3)].normal_count == 1


def test_month_summary_with_public_holidays_enabled():
    snapshot = DispatchSnapshot.of([_route("A", "Kim", "Lee")])
    calendar = HolidayCalendar.with_extra([], public_holidays=True)

    summary = summarize_month(2025, 3, snapshot, calendar=calendar)

    assert sum(s.normal_count for s in summary.values()) == 24
    assert summary[date(2025, 3, 1)].holiday_name == "삼일절"
    assert summary[date(2025, 3, 3)].is_holiday


def test_month_summary_counts_add_up_on_working_days():
    snapshot = DispatchSnapshot.of([_route("A", "Kim", "Lee"), _route("B", "Choi"), _route("C")])
    leaves = [
        _leave("Kim", date(2025, 3, 10)),
        _leave("Choi", date(2025, 3, 10)),
        _leave("Kim", date(2025, 3, 11)),
        _leave("Lee", date(2025, 3, 11)),
    ]

    summary = summarize_month(2025, 3, snapshot, leaves)

    for s in summary.values():
        assert s.total_routes == 3
        if s.is_holiday:
            assert (s.normal_count, s.substitute_count, s.no_service_count) == (0, 0, 0)
        else:
            assert s.normal_count + s.substitute_count + s.no_service_count == s.total_routes

    monday = summary[date(2025, 3, 10)]
    assert (monday.normal_count, monday.substitute_count, monday.no_service_count) == (0, 1, 2)
    tuesday = summary[date(2025, 3, 11)]
    assert (tuesday.normal_count, tuesday.substitute_count, tuesday.no_service_count) == (1, 0, 2)


def test_month_summary_without_routes_still_marks_holidays():
    summary = summarize_month(2025, 3, DispatchSnapshot.of([]))

    sunday = summary[date(2025, 3, 9)]
    assert sunday.is_unconfigured
    assert sunday.is_holiday
    assert sunday.holiday_name == "일요일"
    assert not summary[date(2025, 3, 10)].is_holiday


def test_month_summary_invalid_month_is_empty():
    snapshot = DispatchSnapshot.of([_route("A", "Kim")])

    assert summarize_month(2025, 13, snapshot) == {}
    assert summarize_month(2025, 0, snapshot) == {}


def test_month_summary_february_leap_year():
    summary = summarize_month(2028, 2, DispatchSnapshot.of([]))
    assert len(summary) == 29


def test_filter_by_route_and_status():
    snapshot = DispatchSnapshot.of([_route("A", "Kim", "Lee"), _route("B", "Choi")])
    dailies = resolve_range(
        date(2025, 3, 10),
        date(2025, 3, 12),
        snapshot,
        [_leave("Kim", date(2025, 3, 11))],
    )

    only_b = filter_dispatches(dailies, route_id="B")
    assert [len(d.route_dispatches) for d in only_b] == [1, 1, 1]
    assert all(d.route_dispatches[0].route_id == "B" for d in only_b)

    substitutes = filter_dispatches(dailies, status=DispatchStatus.SUBSTITUTE)
    assert [d.dispatch_date for d in substitutes] == [date(2025, 3, 11)]

    assert filter_dispatches(dailies, route_id="B", status=DispatchStatus.SUBSTITUTE) == []
    assert filter_dispatches(dailies) == dailies


def test_statistics_count_route_days_by_status():
    snapshot = DispatchSnapshot.of([_route("A", "Kim", "Lee"), _route("B", "Choi")])
    # Sat 8, Sun 9, Mon 10
    dailies = resolve_range(
        date(2025, 3, 8),
        date(2025, 3, 10),
        snapshot,
        [_leave("Kim", date(2025, 3, 10)), _leave("Choi", date(2025, 3, 10))],
    )

    stats = dispatch_statistics(dailies)

    assert (stats.normal, stats.substitute, stats.no_service, stats.holiday) == (2, 1, 1, 2)
    assert stats.total == 4
    assert stats.to_dict()["total"] == 4
