"""Output contracts for facility and rental records.

All three contracts carry the same underlying values; only ``icon`` and
``caption`` are specific to the map-marker contract.
"""

from __future__ import annotations

import base64
from enum import Enum
from html import escape
from typing import Any

from insights_api.errors import ValidationError
from insights_api.records import Facility, RentalListing


class OutputContract(str, Enum):
    MAP_MARKER = "map-marker"
    GEO_FEATURE = "geo-feature"
    FLAT = "flat"


CONTRACT_ALIASES = {
    "google-maps": OutputContract.MAP_MARKER,
    "geojson": OutputContract.GEO_FEATURE,
    "raw": OutputContract.FLAT,
}


def resolve_contract(name: str | None, default: OutputContract = OutputContract.MAP_MARKER) -> OutputContract:
    if name is None or name == "":
        return default
    if name in CONTRACT_ALIASES:
        return CONTRACT_ALIASES[name]
    try:
        return OutputContract(name)
    except ValueError as exc:
        raise ValidationError([{"field": "format", "message": f"unsupported output format: {name}"}]) from exc


def _svg_icon(fill: str, path: str, size: int) -> dict[str, Any]:
    svg = f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="{fill}"><path d="{path}"/></svg>'
    encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
    return {"url": f"data:image/svg+xml;base64,{encoded}", "scaledSize": {"width": size, "height": size}}


_CROSS = "M19 8h-2v3h-3v2h3v3h2v-3h3v-2h-3V8zM4 6H2v14c0 1.1.9 2 2 2h14v-2H4V6zm16-4H8c-1.1 0-2 .9-2 2v12c0 1.1.9 2 2 2h12c1.1 0 2-.9 2-2V4c0-1.1-.9-2-2-2zm0 14H8V4h12v12z"
_STAR = "M12 2l3.09 6.26L22 9.27l-5 4.87 1.18 6.88L12 17.77l-6.18 3.25L7 14.14 2 9.27l6.91-1.01L12 2z"
_CHECK = "M12 2C6.48 2 2 6.48 2 12s4.48 10 10 10 10-4.48 10-10S17.52 2 12 2zm-2 15l-5-5 1.41-1.41L10 14.17l7.59-7.59L19 8l-9 9z"
_HOUSE = "M10 20v-6h4v6h5v-8h3L12 3 2 12h3v8z"

FACILITY_ICONS = {
    "Hospital": _svg_icon("#dc2626", _CROSS, 32),
    "Clinic": _svg_icon("#059669", _STAR, 28),
    "CHC": _svg_icon("#2563eb", _CHECK, 28),
}

RENTAL_ICONS = {
    "Budget": _svg_icon("#16a34a", _HOUSE, 26),
    "Moderate": _svg_icon("#2563eb", _HOUSE, 28),
    "Luxury": _svg_icon("#9333ea", _HOUSE, 30),
    "Ultra-Luxury": _svg_icon("#b45309", _HOUSE, 32),
}


def facility_icon(classification: str | None) -> dict[str, Any]:
    return FACILITY_ICONS.get(classification or "", FACILITY_ICONS["Clinic"])


def rental_icon(category: str | None) -> dict[str, Any]:
    return RENTAL_ICONS.get(category or "", RENTAL_ICONS["Moderate"])


_LINE = '<p style="margin: 4px 0; color: #6b7280; font-size: 14px;"><strong>{label}:</strong> {value}</p>'
_BADGE = '<span style="background: {color}; color: white; padding: 2px 8px; border-radius: 12px; font-size: 12px;">{text}</span>'


def facility_caption(facility: Facility) -> str:
    status_badge = (
        _BADGE.format(color="#10b981", text="Active")
        if facility.status == "Active"
        else _BADGE.format(color="#ef4444", text="Inactive")
    )
    lines = [
        '<div style="padding: 12px; font-family: Arial, sans-serif; max-width: 300px;">',
        f'<h3 style="margin: 0 0 8px 0; color: #1f2937; font-size: 16px;">{escape(facility.name or "Unknown Facility")}</h3>',
        '<div style="margin-bottom: 8px;">',
        _BADGE.format(color="#3b82f6", text=escape(facility.classification or "Healthcare Facility")),
        status_badge,
        "</div>",
        _LINE.format(
            label="Location",
            value=f"{escape(facility.town or 'Unknown')}, {escape(facility.district or 'Unknown District')}",
        ),
    ]
    if facility.contact:
        lines.append(_LINE.format(label="Contact", value=escape(facility.contact)))
    if facility.open_time and facility.open_days:
        lines.append(_LINE.format(label="Hours", value=f"{escape(facility.open_time)} ({escape(facility.open_days)})"))
    if facility.email:
        lines.append(_LINE.format(label="Email", value=escape(facility.email)))
    lines.append("</div>")
    return "".join(lines)


def rental_caption(rental: RentalListing) -> str:
    lines = [
        '<div style="padding: 12px; font-family: Arial, sans-serif; max-width: 300px;">',
        f'<h3 style="margin: 0 0 8px 0; color: #1f2937; font-size: 16px;">{escape(rental.title or "Rental Property")}</h3>',
        '<div style="margin-bottom: 8px;">',
        _BADGE.format(color="#3b82f6", text=escape(rental.category)),
        _BADGE.format(color="#10b981", text="Available")
        if rental.available
        else _BADGE.format(color="#ef4444", text="Let"),
        "</div>",
        _LINE.format(label="Location", value=escape(rental.location or "Unknown")),
        _LINE.format(label="Price", value=f"R{rental.price:,} per month"),
        _LINE.format(
            label="Layout",
            value=f"{escape(rental.bedroom_category)}, {rental.bathrooms} bath, {escape(rental.property_type)}",
        ),
    ]
    if rental.features:
        lines.append(_LINE.format(label="Features", value=escape(", ".join(rental.features[:3]))))
    lines.append("</div>")
    return "".join(lines)


def facility_fields(facility: Facility) -> dict[str, Any]:
    return {
        "id": facility.id,
        "name": facility.name,
        "classification": facility.classification,
        "province": facility.province,
        "district": facility.district,
        "town": facility.town,
        "status": facility.status,
        "contact": facility.contact,
        "email": facility.email,
    }


def rental_fields(rental: RentalListing) -> dict[str, Any]:
    return {
        "id": rental.id,
        "title": rental.title,
        "description": rental.description,
        "location": rental.location,
        "price": rental.price,
        "bedrooms": rental.bedrooms,
        "bathrooms": rental.bathrooms,
        "floorSize": rental.floor_size,
        "parking": rental.parking,
        "propertyType": rental.property_type,
        "category": rental.category,
        "furnished": rental.furnished,
        "features": list(rental.features),
        "available": rental.available,
        "viewCount": rental.view_count,
        "createdAt": rental.created_at,
        "pricePerSqm": rental.price_per_sqm,
        "affordability": rental.affordability,
        "bedroomCategory": rental.bedroom_category,
    }


def _position(record: Facility | RentalListing) -> dict[str, float] | None:
    point = record.point
    return {"lat": point.lat, "lng": point.lng} if point else None


def _geometry(record: Facility | RentalListing) -> dict[str, Any] | None:
    point = record.point
    return {"type": "Point", "coordinates": point.as_lng_lat()} if point else None


def shape_facility(facility: Facility, contract: OutputContract = OutputContract.MAP_MARKER) -> dict[str, Any]:
    fields = facility_fields(facility)
    if contract is OutputContract.MAP_MARKER:
        return {
            **fields,
            "position": _position(facility),
            "operatingHours": {"days": facility.open_days, "hours": facility.open_time},
            "icon": facility_icon(facility.classification),
            "caption": facility_caption(facility),
        }
    if contract is OutputContract.GEO_FEATURE:
        return {
            "type": "Feature",
            "geometry": _geometry(facility),
            "properties": {**fields, "operatingHours": {"days": facility.open_days, "hours": facility.open_time}},
        }
    return {
        **fields,
        "openDays": facility.open_days,
        "openTime": facility.open_time,
        "latitude": facility.lat,
        "longitude": facility.lng,
    }


def shape_rental(rental: RentalListing, contract: OutputContract = OutputContract.FLAT) -> dict[str, Any]:
    fields = rental_fields(rental)
    if contract is OutputContract.MAP_MARKER:
        return {
            **fields,
            "position": _position(rental),
            "icon": rental_icon(rental.category),
            "caption": rental_caption(rental),
        }
    if contract is OutputContract.GEO_FEATURE:
        return {"type": "Feature", "geometry": _geometry(rental), "properties": fields}
    return {**fields, "latitude": rental.lat, "longitude": rental.lng}


def shape_many(records: list[Any], contract: OutputContract) -> list[dict[str, Any]]:
    return [
        shape_facility(item, contract) if isinstance(item, Facility) else shape_rental(item, contract)
        for item in records
    ]
