import math

from geo_engine.models import GeoPoint

EARTH_RADIUS_METERS = 6_371_000


def haversine_distance_meters(origin: GeoPoint, target: GeoPoint) -> float:
    phi1, phi2 = math.radians(origin.lat), math.radians(target.lat)
    half_dphi = math.radians(target.lat - origin.lat) / 2
    half_dlambda = math.radians(target.lng - origin.lng) / 2
    h = math.sin(half_dphi) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(half_dlambda) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def meters_to_lat_degrees(meters: float) -> float:
    return math.degrees(meters / EARTH_RADIUS_METERS)


def meters_to_lng_degrees(meters: float, at_lat: float) -> float | None:
    """Widest longitude offset reachable within ``meters`` of a point at ``at_lat``.

    Returns None when the circle reaches a pole and every longitude qualifies.
    """
    scale = math.cos(math.radians(at_lat))
    if scale <= 1e-12:
        return None
    ratio = math.sin(meters / EARTH_RADIUS_METERS) / scale
    if ratio >= 1:
        return None
    return math.degrees(math.asin(ratio))
