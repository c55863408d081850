from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from geo_engine.distance import haversine_distance_meters, meters_to_lat_degrees, meters_to_lng_degrees
from geo_engine.models import BoundingBox, GeoPoint

T = TypeVar("T")

MIN_RADIUS_METERS = 1
MAX_RADIUS_METERS = 50_000

# ~1 cm of slack so points sitting exactly on the radius survive float rounding
_BOX_PAD_DEGREES = 1e-7


class InvalidProximityQuery(ValueError):
    """Raised with every out-of-range proximity input, keyed by field name."""

    def __init__(self, violations: dict[str, str]) -> None:
        super().__init__("; ".join(f"{name} {message}" for name, message in violations.items()))
        self.violations = violations


def bounding_box(center: GeoPoint, radius_meters: float) -> BoundingBox:
    delta_lat = meters_to_lat_degrees(radius_meters) + _BOX_PAD_DEGREES
    min_lat = max(-90.0, center.lat - delta_lat)
    max_lat = min(90.0, center.lat + delta_lat)
    delta_lng = meters_to_lng_degrees(radius_meters, at_lat=center.lat)
    if delta_lng is None:
        return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=-180.0, max_lng=180.0)
    delta_lng += _BOX_PAD_DEGREES
    if center.lng - delta_lng < -180.0 or center.lng + delta_lng > 180.0:
        # circle wraps the antimeridian; fall back to the full longitude band
        return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=-180.0, max_lng=180.0)
    return BoundingBox(
        min_lat=min_lat,
        max_lat=max_lat,
        min_lng=center.lng - delta_lng,
        max_lng=center.lng + delta_lng,
    )


@dataclass(frozen=True)
class ProximityQuery:
    center: GeoPoint
    radius_meters: float

    @classmethod
    def create(cls, lng: float, lat: float, radius_meters: float) -> ProximityQuery:
        violations: dict[str, str] = {}
        if not -180 <= lng <= 180:
            violations["lng"] = "must be between -180 and 180"
        if not -90 <= lat <= 90:
            violations["lat"] = "must be between -90 and 90"
        if not MIN_RADIUS_METERS <= radius_meters <= MAX_RADIUS_METERS:
            violations["distance"] = f"must be between {MIN_RADIUS_METERS} and {MAX_RADIUS_METERS} meters"
        if violations:
            raise InvalidProximityQuery(violations)
        return cls(center=GeoPoint(lat=lat, lng=lng), radius_meters=float(radius_meters))

    def bounding_box(self) -> BoundingBox:
        return bounding_box(self.center, self.radius_meters)

    def distance_to(self, point: GeoPoint) -> float:
        return haversine_distance_meters(self.center, point)

    def rank(
        self,
        items: Iterable[T],
        point_of: Callable[[T], GeoPoint | None],
    ) -> list[tuple[T, float]]:
        """Items within the radius, nearest first.

        The sort is stable, so items at equal distance keep their input order.
        """
        ranked: list[tuple[T, float]] = []
        for item in items:
            point = point_of(item)
            if point is None:
                continue
            distance = self.distance_to(point)
            if distance <= self.radius_meters:
                ranked.append((item, distance))
        ranked.sort(key=lambda pair: pair[1])
        return ranked
