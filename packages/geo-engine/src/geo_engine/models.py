from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    @classmethod
    def from_lng_lat(cls, lng: float, lat: float) -> "GeoPoint":
        return cls(lat=lat, lng=lng)

    def as_lng_lat(self) -> list[float]:
        return [self.lng, self.lat]


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, point: GeoPoint) -> bool:
        return self.min_lat <= point.lat <= self.max_lat and self.min_lng <= point.lng <= self.max_lng
