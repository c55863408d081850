from geo_engine.distance import haversine_distance_meters, meters_to_lat_degrees, meters_to_lng_degrees
from geo_engine.models import GeoPoint


def test_haversine_distance_is_zero_for_same_point() -> None:
    point = GeoPoint(lat=-33.9249, lng=18.4241)
    distance = haversine_distance_meters(point, point)
    assert distance == 0.0


def test_haversine_distance_is_positive_for_different_points() -> None:
    cbd = GeoPoint(lat=-33.9249, lng=18.4241)
    bellville = GeoPoint(lat=-33.9022, lng=18.6292)
    distance = haversine_distance_meters(cbd, bellville)
    assert distance > 15_000
    assert distance < 25_000


def test_haversine_distance_is_symmetric() -> None:
    cbd = GeoPoint(lat=-33.9249, lng=18.4241)
    muizenberg = GeoPoint(lat=-34.1083, lng=18.4695)
    assert haversine_distance_meters(cbd, muizenberg) == haversine_distance_meters(muizenberg, cbd)


def test_one_degree_of_latitude_is_about_111_km() -> None:
    assert abs(meters_to_lat_degrees(111_195) - 1.0) < 0.001


def test_longitude_span_widens_away_from_equator() -> None:
    at_equator = meters_to_lng_degrees(5_000, at_lat=0.0)
    at_cape_town = meters_to_lng_degrees(5_000, at_lat=-33.9)
    assert at_equator is not None and at_cape_town is not None
    assert at_cape_town > at_equator


def test_longitude_span_is_unbounded_at_the_pole() -> None:
    assert meters_to_lng_degrees(5_000, at_lat=90.0) is None
    assert meters_to_lng_degrees(5_000, at_lat=-89.99) is None
