from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic

from insights_api.errors import ValidationError
from insights_api.predicates import AnyOf, Contains, Equals, Predicate, Range, all_of
from insights_api.schemas.facility import FacilityListQuery
from insights_api.schemas.rental import RecommendationRequest, RentalListQuery, RentalSearchQuery

M = TypeVar("M", bound=pydantic.BaseModel)

FACILITY_TEXT_FIELDS = ("name", "town", "district", "classification")
RENTAL_TEXT_FIELDS = ("title", "description", "location", "property_type")
RENTAL_SEARCH_TEXT_FIELDS = ("title", "description", "location")


def validation_details(errors: list[Any]) -> list[dict[str, str]]:
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("query", "path", "body")]
        details.append({"field": ".".join(loc) or "request", "message": error.get("msg", "invalid value")})
    return details


def parse_request(model: type[M], raw: Mapping[str, Any]) -> M:
    """Validate raw parameters into ``model``, reporting every bad field at once."""
    try:
        return model.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        raise ValidationError(validation_details(exc.errors())) from exc


def parse_request_collecting(model: type[M], raw: Mapping[str, Any]) -> tuple[M | None, list[dict[str, str]]]:
    """Like parse_request, but hands errors back so they can join path-parameter errors."""
    try:
        return parse_request(model, raw), []
    except ValidationError as exc:
        return None, list(exc.details or [])


def text_search(term: str, fields: tuple[str, ...]) -> Predicate:
    return AnyOf(tuple(Contains(field, term) for field in fields))


def _contains(field: str, term: str | None) -> Predicate | None:
    return Contains(field, term) if term else None


def _any_contains(field: str, terms: list[str], many: bool = False) -> Predicate | None:
    return AnyOf(tuple(Contains(field, term, many=many) for term in terms)) if terms else None


def _compose(*parts: Predicate | None) -> Predicate:
    return all_of(*(part for part in parts if part is not None))


def facility_predicate(request: FacilityListQuery) -> Predicate:
    return _compose(
        _contains("classification", request.classification),
        _contains("province", request.province),
        _contains("district", request.district),
        _contains("town", request.town),
        _contains("status", request.status),
        text_search(request.q, FACILITY_TEXT_FIELDS) if request.q else None,
    )


def rental_predicate(request: RentalListQuery) -> Predicate:
    price = None
    if request.min_price is not None or request.max_price is not None:
        price = Range("price", low=request.min_price, high=request.max_price)
    return _compose(
        text_search(request.q, RENTAL_TEXT_FIELDS) if request.q else None,
        _contains("location", request.location),
        price,
        Equals("bedrooms", request.bedrooms) if request.bedrooms is not None else None,
        Equals("bathrooms", request.bathrooms) if request.bathrooms is not None else None,
        _contains("property_type", request.property_type),
        Equals("category", request.category) if request.category else None,
        Equals("furnished", request.furnished) if request.furnished else None,
        Equals("available", request.available) if request.available is not None else None,
    )


def rental_search_predicate(request: RentalSearchQuery) -> Predicate:
    return _compose(
        text_search(request.q, RENTAL_SEARCH_TEXT_FIELDS) if request.q else None,
        _contains("location", request.location),
        Range("price", high=request.budget) if request.budget is not None else None,
        Equals("bedrooms", request.bedrooms) if request.bedrooms is not None else None,
        Contains("features", request.features, many=True) if request.features else None,
    )


def recommendation_predicate(request: RecommendationRequest) -> Predicate:
    return _compose(
        Equals("available", True),
        Range("price", high=request.max_budget) if request.max_budget else None,
        Equals("bedrooms", request.bedrooms) if request.bedrooms is not None else None,
        _contains("property_type", request.property_type),
        Equals("furnished", request.furnished) if request.furnished else None,
        _any_contains("location", request.preferred_locations),
        _any_contains("features", request.features, many=True),
    )
