import pytest

from insights_api.errors import ValidationError
from insights_api.filters import (
    facility_predicate,
    parse_request,
    parse_request_collecting,
    recommendation_predicate,
    rental_predicate,
    rental_search_predicate,
)
from insights_api.records import Facility, RentalListing
from insights_api.schemas.facility import FacilityListQuery
from insights_api.schemas.rental import RecommendationRequest, RentalListQuery, RentalSearchQuery


def _rental(**overrides) -> RentalListing:
    values = dict(
        id="r-1",
        title="Sea-facing apartment",
        description="Balcony with views",
        location="Sea Point",
        price=28000,
        bedrooms=2,
        bathrooms=2,
        features=("Sea View", "Pool"),
    )
    values.update(overrides)
    return RentalListing(**values)


def test_parse_request_applies_defaults_and_drops_blank_values() -> None:
    query = parse_request(FacilityListQuery, {"classification": "  ", "district": " Cape "})
    assert query.classification is None
    assert query.district == "Cape"
    assert query.limit == 100
    assert query.offset == 0


def test_parse_request_reports_every_bad_field() -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_request(FacilityListQuery, {"limit": "0", "offset": "-1", "colour": "red"})
    fields = {detail["field"] for detail in exc_info.value.details}
    assert fields == {"limit", "offset", "colour"}
    assert exc_info.value.status_code == 400


def test_parse_request_collecting_returns_details() -> None:
    query, details = parse_request_collecting(FacilityListQuery, {"limit": "501"})
    assert query is None
    assert details[0]["field"] == "limit"


def test_rental_list_query_rejects_inverted_price_bounds() -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_request(RentalListQuery, {"minPrice": "30000", "maxPrice": "10000"})
    assert exc_info.value.details == [
        {"field": "maxPrice", "message": "Value error, must be greater than or equal to minPrice"}
    ]


def test_rental_list_query_echoes_filters_by_wire_name() -> None:
    query = parse_request(RentalListQuery, {"minPrice": "10000", "propertyType": "House"})
    echoed = query.echoed_filters()
    assert echoed["minPrice"] == 10000
    assert echoed["propertyType"] == "House"
    assert echoed["maxPrice"] is None


def test_facility_predicate_ands_every_supplied_filter() -> None:
    predicate = facility_predicate(parse_request(FacilityListQuery, {"classification": "hospital", "town": "obs"}))
    assert predicate.matches(Facility(id=1, name="Groote Schuur", classification="Hospital", town="Observatory"))
    assert not predicate.matches(Facility(id=2, name="Tygerberg", classification="Hospital", town="Bellville"))


def test_facility_free_text_covers_name_town_district_and_classification() -> None:
    predicate = facility_predicate(parse_request(FacilityListQuery, {"q": "winelands"}))
    assert predicate.matches(Facility(id=9, name="Stellenbosch Clinic", district="Cape Winelands"))
    assert not predicate.matches(Facility(id=1, name="Groote Schuur", district="City of Cape Town"))


def test_rental_predicate_price_range_and_flags() -> None:
    query = parse_request(
        RentalListQuery,
        {"minPrice": "20000", "maxPrice": "30000", "bedrooms": "2", "available": "true"},
    )
    predicate = rental_predicate(query)
    assert predicate.matches(_rental())
    assert not predicate.matches(_rental(price=31000))
    assert not predicate.matches(_rental(available=False))
    assert not predicate.matches(_rental(bedrooms=3))


def test_rental_search_matches_features_and_budget() -> None:
    predicate = rental_search_predicate(parse_request(RentalSearchQuery, {"features": "pool", "budget": "30000"}))
    assert predicate.matches(_rental())
    assert not predicate.matches(_rental(features=("Garden",)))
    assert not predicate.matches(_rental(price=45000))


def test_recommendation_predicate_only_considers_available_listings() -> None:
    request = RecommendationRequest.model_validate(
        {"budget": 30000, "preferredLocations": ["sea point", "green point"], "features": ["pool"]}
    )
    predicate = recommendation_predicate(request)
    assert predicate.matches(_rental())
    assert not predicate.matches(_rental(available=False))
    assert not predicate.matches(_rental(location="Gardens"))


def test_recommendation_predicate_ignores_blank_preferences() -> None:
    request = RecommendationRequest.model_validate({"preferredLocations": [" "], "features": [""]})
    assert recommendation_predicate(request).matches(_rental(location="Gardens", features=()))
