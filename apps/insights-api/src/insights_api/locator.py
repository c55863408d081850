from __future__ import annotations

from geo_engine.proximity import InvalidProximityQuery, ProximityQuery

from insights_api.errors import ValidationError
from insights_api.predicates import Near


def _parse_number(raw: str, field: str, violations: dict[str, str], integer: bool = False) -> float | None:
    try:
        value = int(raw) if integer else float(raw)
    except (TypeError, ValueError):
        violations[field] = "must be an integer" if integer else "must be a number"
        return None
    return float(value)


def proximity_violations(lng: str, lat: str, distance: str) -> tuple[ProximityQuery | None, dict[str, str]]:
    """Parse path values into a query, collecting every out-of-range field."""
    violations: dict[str, str] = {}
    lng_value = _parse_number(lng, "lng", violations)
    lat_value = _parse_number(lat, "lat", violations)
    distance_value = _parse_number(distance, "distance", violations, integer=True)
    try:
        query = ProximityQuery.create(
            lng=lng_value if lng_value is not None else 0.0,
            lat=lat_value if lat_value is not None else 0.0,
            radius_meters=distance_value if distance_value is not None else 1.0,
        )
    except InvalidProximityQuery as exc:
        violations.update(exc.violations)
        return None, violations
    if violations:
        return None, violations
    return query, violations


def near_predicate(
    lng: str,
    lat: str,
    distance: str,
    pending: list[dict[str, str]] | None = None,
) -> Near:
    """Build a proximity predicate, folding in errors already found in other parameters."""
    query, violations = proximity_violations(lng, lat, distance)
    details = [{"field": field, "message": message} for field, message in violations.items()]
    details.extend(pending or [])
    if query is None or details:
        raise ValidationError(details)
    return Near(query)
