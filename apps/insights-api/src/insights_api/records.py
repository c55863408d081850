from __future__ import annotations

from dataclasses import dataclass, field

from devkit.timezone import now_sast_iso
from geo_engine.models import GeoPoint

FACILITIES = "facilities"
RENTALS = "rentals"


@dataclass(frozen=True)
class Facility:
    id: int
    name: str | None
    classification: str | None = None
    province: str | None = None
    district: str | None = None
    town: str | None = None
    status: str | None = None
    contact: str | None = None
    email: str | None = None
    open_days: str | None = None
    open_time: str | None = None
    lng: float | None = None
    lat: float | None = None

    @property
    def point(self) -> GeoPoint | None:
        if self.lng is None or self.lat is None:
            return None
        return GeoPoint.from_lng_lat(self.lng, self.lat)


@dataclass(frozen=True)
class RentalListing:
    id: str
    title: str
    description: str
    location: str
    price: int
    bedrooms: int
    bathrooms: int
    property_type: str = "Apartment"
    category: str = "Moderate"
    furnished: str = "Unfurnished"
    features: tuple[str, ...] = ()
    available: bool = True
    parking: int = 0
    floor_size: float | None = None
    view_count: int = 0
    created_at: str = field(default_factory=now_sast_iso)
    lng: float | None = None
    lat: float | None = None

    @property
    def point(self) -> GeoPoint | None:
        if self.lng is None or self.lat is None:
            return None
        return GeoPoint.from_lng_lat(self.lng, self.lat)

    @property
    def price_per_sqm(self) -> int | None:
        if not self.floor_size:
            return None
        return round(self.price / self.floor_size)

    @property
    def affordability(self) -> str:
        if self.price >= 50000:
            return "Ultra-Luxury"
        if self.price >= 35000:
            return "Luxury"
        if self.price >= 20000:
            return "Expensive"
        if self.price >= 12000:
            return "Moderate"
        if self.price >= 8000:
            return "Affordable"
        return "Budget"

    @property
    def bedroom_category(self) -> str:
        if self.bedrooms <= 0:
            return "Studio"
        if self.bedrooms == 1:
            return "1 Bedroom"
        if self.bedrooms >= 4:
            return "4+ Bedrooms"
        return f"{self.bedrooms} Bedrooms"


Record = Facility | RentalListing
