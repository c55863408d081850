"""Geodesic helpers: point models, haversine distance and radius queries."""

from geo_engine.distance import haversine_distance_meters
from geo_engine.models import BoundingBox, GeoPoint
from geo_engine.proximity import (
    MAX_RADIUS_METERS,
    MIN_RADIUS_METERS,
    InvalidProximityQuery,
    ProximityQuery,
    bounding_box,
)

__all__ = [
    "BoundingBox",
    "GeoPoint",
    "InvalidProximityQuery",
    "MAX_RADIUS_METERS",
    "MIN_RADIUS_METERS",
    "ProximityQuery",
    "bounding_box",
    "haversine_distance_meters",
]
