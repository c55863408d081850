from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from insights_api.dependencies import get_facility_service
from insights_api.errors import ValidationError
from insights_api.filters import parse_request, parse_request_collecting
from insights_api.locator import near_predicate
from insights_api.response import success_response
from insights_api.schemas.base import FormatQuery
from insights_api.schemas.facility import FacilityListQuery, FacilityNearQuery, FacilitySearchQuery
from insights_api.services.facility_service import FacilityService
from insights_api.shaping import resolve_contract, shape_facility, shape_many

router = APIRouter(prefix="/v1/facilities", tags=["facilities"])

MIN_SEARCH_TERM = 2


@router.get("")
async def list_facilities(
    request: Request,
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    query = parse_request(FacilityListQuery, request.query_params)
    contract = resolve_contract(query.format)
    page = await service.list_facilities(query)
    return success_response(shape_many(page.items, contract), meta={"pagination": page.pagination()})


@router.get("/classifications")
async def list_classifications(service: FacilityService = Depends(get_facility_service)) -> dict:
    values = await service.distinct("classification")
    return success_response(values, meta={"count": len(values)})


@router.get("/districts")
async def list_districts(service: FacilityService = Depends(get_facility_service)) -> dict:
    values = await service.distinct("district")
    return success_response(values, meta={"count": len(values)})


@router.get("/provinces")
async def list_provinces(service: FacilityService = Depends(get_facility_service)) -> dict:
    values = await service.distinct("province")
    return success_response(values, meta={"count": len(values)})


@router.get("/stats")
async def facility_stats(service: FacilityService = Depends(get_facility_service)) -> dict:
    return success_response(await service.stats(), meta={})


@router.get("/near/{lng}/{lat}/{distance}")
async def facilities_near(
    lng: str,
    lat: str,
    distance: str,
    request: Request,
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    query, pending = parse_request_collecting(FacilityNearQuery, request.query_params)
    near = near_predicate(lng, lat, distance, pending=pending)
    if query is None:
        raise ValidationError(pending)
    contract = resolve_contract(query.format)
    ranked = await service.near(near, query.limit)
    data = [{**shape_facility(facility, contract), "distanceMeters": round(meters, 1)} for facility, meters in ranked]
    center = near.query.center
    return success_response(
        data,
        meta={
            "count": len(data),
            "location": {"lng": center.lng, "lat": center.lat},
            "distance": int(near.query.radius_meters),
        },
    )


@router.get("/search/{term}")
async def search_facilities(
    term: str,
    request: Request,
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    query, details = parse_request_collecting(FacilitySearchQuery, request.query_params)
    term = term.strip()
    if len(term) < MIN_SEARCH_TERM:
        details.insert(0, {"field": "term", "message": f"must be at least {MIN_SEARCH_TERM} characters"})
    if details or query is None:
        raise ValidationError(details)
    contract = resolve_contract(query.format)
    items = await service.search(term, query.limit)
    return success_response(shape_many(items, contract), meta={"searchTerm": term, "count": len(items)})


@router.get("/{facility_id}")
async def get_facility(
    facility_id: int,
    request: Request,
    service: FacilityService = Depends(get_facility_service),
) -> dict:
    query = parse_request(FormatQuery, request.query_params)
    contract = resolve_contract(query.format)
    facility = await service.get(facility_id)
    return success_response(shape_facility(facility, contract), meta={})
