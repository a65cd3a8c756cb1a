from __future__ import annotations

from datetime import date

import pytest

from dispatch_system.core.enums import RouteType
from dispatch_system.core.exceptions import NotFoundError, ValidationError
from dispatch_system.routes.service import NewRouteDriver, RouteConfigService


@pytest.fixture
def svc(repos) -> RouteConfigService:
    return RouteConfigService(repos["routes_repo"], repos["seniors_repo"], repos["absences_repo"])


def test_create_route_keeps_driver_chain_order(svc):
    route_id = svc.create_route(
        name=" 오후 하원 ",
        route_type="dropoff",
        drivers=[
            NewRouteDriver(driver_id="u-3", driver_name="Han", vehicle_name="카니발", vehicle_capacity=9),
            NewRouteDriver(driver_id="u-4", driver_name="Yoon"),
        ],
    )

    route = svc.get_route(route_id)
    assert route.name == "오후 하원"
    assert route.route_type == RouteType.DROPOFF
    assert [d.driver_name for d in route.drivers] == ["Han", "Yoon"]
    assert route.primary_driver.vehicle_capacity == 9


def test_create_route_requires_a_driver(svc):
    with pytest.raises(ValidationError):
        svc.create_route(name="빈 노선", route_type=RouteType.PICKUP, drivers=[])


def test_create_route_rejects_duplicate_driver(svc):
    with pytest.raises(ValidationError):
        svc.create_route(
            name="중복",
            route_type=RouteType.PICKUP,
            drivers=[NewRouteDriver("u-1", "Kim"), NewRouteDriver("u-9", "Kim")],
        )


def test_create_route_rejects_bad_type_and_capacity(svc):
    with pytest.raises(ValidationError):
        svc.create_route(name="x", route_type="SHUTTLE", drivers=[NewRouteDriver("u-1", "Kim")])
    with pytest.raises(ValidationError):
        svc.create_route(
            name="x",
            route_type=RouteType.PICKUP,
            drivers=[NewRouteDriver("u-1", "Kim", vehicle_capacity=-1)],
        )


def test_update_route_replaces_only_given_fields(svc):
    route = svc.update_route(route_id="A", drivers=[NewRouteDriver("u-Lee", "Lee"), NewRouteDriver("u-Kim", "Kim")])

    assert route.name == "A"
    assert [d.driver_name for d in route.drivers] == ["Lee", "Kim"]
    assert svc.get_route("A").primary_driver.driver_name == "Lee"


def test_update_unknown_route_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.update_route(route_id="missing", name="x")


def test_delete_route_unassigns_its_seniors(svc):
    svc.delete_route(route_id="A")

    assert svc.list_routes() == []
    assert {s.route_id for s in svc.list_seniors()} == {None}


def test_delete_unknown_route_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.delete_route(route_id="missing")


def test_create_senior_appends_to_boarding_order(svc, repos):
    senior_id = svc.create_senior(name="Jung", route_id="A")

    assert repos["seniors_repo"].get_by_id(senior_id).boarding_order == 3


def test_create_senior_without_route(svc, repos):
    senior_id = svc.create_senior(name="Jung", route_id=None)

    senior = repos["seniors_repo"].get_by_id(senior_id)
    assert senior.route_id is None
    assert senior.boarding_order == 1


def test_create_senior_on_unknown_route_rejected(svc):
    with pytest.raises(ValidationError):
        svc.create_senior(name="Jung", route_id="missing")


def test_reorder_sets_position_as_boarding_order(svc, repos):
    updated = svc.reorder_seniors(route_id="A", senior_ids=["s-park", "s-choi"])

    assert updated == 2
    assert repos["seniors_repo"].get_by_id("s-park").boarding_order == 1
    assert repos["seniors_repo"].get_by_id("s-choi").boarding_order == 2


def test_reorder_rejects_senior_from_other_route(svc):
    svc.create_senior(name="Jung", route_id=None)
    with pytest.raises(ValidationError):
        svc.reorder_seniors(route_id="A", senior_ids=["s-park", "nobody"])


def test_absence_is_recorded_once(svc):
    day = date(2025, 3, 10)

    assert svc.add_absence(senior_id="s-park", absence_date=day, reason=" 병원 ") is True
    assert svc.add_absence(senior_id="s-park", absence_date=day) is False

    absences = svc.list_absences(start=day, end=day)
    assert len(absences) == 1
    assert absences[0].reason == "병원"


def test_absence_for_unknown_senior_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.add_absence(senior_id="missing", absence_date=date(2025, 3, 10))


def test_remove_absence(svc):
    day = date(2025, 3, 10)
    svc.add_absence(senior_id="s-park", absence_date=day)

    assert svc.remove_absence(senior_id="s-park", absence_date=day) is True
    assert svc.remove_absence(senior_id="s-park", absence_date=day) is False


def test_delete_senior_drops_absences(svc):
    day = date(2025, 3, 10)
    svc.add_absence(senior_id="s-park", absence_date=day)

    svc.delete_senior(senior_id="s-park")

    assert svc.list_absences(start=day, end=day) == []


def test_list_absences_inverted_range_is_empty(svc):
    assert svc.list_absences(start=date(2025, 3, 10), end=date(2025, 3, 1)) == []


def test_snapshot_reflects_current_configuration(svc):
    snapshot = svc.snapshot()

    assert [r.route_id for r in snapshot.routes] == ["A"]
    assert {s.senior_id for s in snapshot.seniors} == {"s-park", "s-choi"}
