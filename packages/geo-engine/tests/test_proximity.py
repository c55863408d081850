import pytest

from geo_engine.models import GeoPoint
from geo_engine.proximity import InvalidProximityQuery, ProximityQuery, bounding_box


def test_create_reports_every_violation_together() -> None:
    with pytest.raises(InvalidProximityQuery) as exc_info:
        ProximityQuery.create(lng=200, lat=-95, radius_meters=0)

    assert set(exc_info.value.violations) == {"lng", "lat", "distance"}


@pytest.mark.parametrize("radius", [1, 50_000])
def test_create_accepts_radius_bounds(radius: int) -> None:
    query = ProximityQuery.create(lng=18.42, lat=-33.92, radius_meters=radius)
    assert query.radius_meters == float(radius)


def test_create_rejects_radius_above_limit() -> None:
    with pytest.raises(InvalidProximityQuery) as exc_info:
        ProximityQuery.create(lng=18.42, lat=-33.92, radius_meters=50_001)
    assert list(exc_info.value.violations) == ["distance"]


def test_rank_orders_nearest_first_and_drops_far_points() -> None:
    query = ProximityQuery.create(lng=18.42, lat=-33.92, radius_meters=5_000)
    items = [
        ("far", GeoPoint(lat=-34.10, lng=18.47)),
        ("mid", GeoPoint(lat=-33.94, lng=18.43)),
        ("near", GeoPoint(lat=-33.921, lng=18.421)),
        ("missing", None),
    ]

    ranked = query.rank(items, point_of=lambda item: item[1])

    assert [item[0] for item, _ in ranked] == ["near", "mid"]
    assert ranked[0][1] <= ranked[1][1] <= 5_000


def test_rank_keeps_input_order_for_equal_distances() -> None:
    query = ProximityQuery.create(lng=18.42, lat=-33.92, radius_meters=1_000)
    same = GeoPoint(lat=-33.921, lng=18.42)

    ranked = query.rank([("a", same), ("b", same)], point_of=lambda item: item[1])

    assert [item[0] for item, _ in ranked] == ["a", "b"]


def test_bounding_box_contains_every_point_inside_the_radius() -> None:
    query = ProximityQuery.create(lng=18.42, lat=-33.92, radius_meters=5_000)
    box = query.bounding_box()
    for point in (
        GeoPoint(lat=-33.9649, lng=18.42),
        GeoPoint(lat=-33.8751, lng=18.42),
        GeoPoint(lat=-33.92, lng=18.4739),
        GeoPoint(lat=-33.92, lng=18.3661),
    ):
        if query.distance_to(point) <= 5_000:
            assert box.contains(point)


def test_bounding_box_spans_all_longitudes_near_the_antimeridian() -> None:
    box = bounding_box(GeoPoint(lat=0.0, lng=179.99), 5_000)
    assert box.min_lng == -180.0
    assert box.max_lng == 180.0
