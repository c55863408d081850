from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from insights_api.dependencies import get_rental_service
from insights_api.filters import parse_request
from insights_api.response import success_response
from insights_api.schemas.base import FormatQuery
from insights_api.schemas.rental import (
    RecommendationRequest,
    RentalListQuery,
    RentalLocationQuery,
    RentalSearchQuery,
)
from insights_api.services.rental_service import RentalService
from insights_api.shaping import OutputContract, resolve_contract, shape_many, shape_rental

router = APIRouter(prefix="/v1/rentals", tags=["rentals"])


def _contract(name: str | None) -> OutputContract:
    return resolve_contract(name, default=OutputContract.FLAT)


@router.get("")
async def list_rentals(
    request: Request,
    service: RentalService = Depends(get_rental_service),
) -> dict:
    query = parse_request(RentalListQuery, request.query_params)
    contract = _contract(query.format)
    page = await service.list_rentals(query)
    return success_response(
        shape_many(page.items, contract),
        meta={"pagination": page.pagination(include_pages=True), "filters": query.echoed_filters()},
    )


@router.get("/stats")
async def rental_stats(service: RentalService = Depends(get_rental_service)) -> dict:
    return success_response(await service.stats(), meta={})


@router.get("/search")
async def search_rentals(
    request: Request,
    service: RentalService = Depends(get_rental_service),
) -> dict:
    query = parse_request(RentalSearchQuery, request.query_params)
    contract = _contract(query.format)
    items = await service.search(query)
    criteria = query.model_dump(exclude={"limit", "format"})
    return success_response(shape_many(items, contract), meta={"count": len(items), "searchCriteria": criteria})


@router.get("/market-insights")
async def market_insights(service: RentalService = Depends(get_rental_service)) -> dict:
    return success_response(await service.market_insights(), meta={})


@router.get("/location/{location}")
async def rentals_by_location(
    location: str,
    request: Request,
    service: RentalService = Depends(get_rental_service),
) -> dict:
    query = parse_request(RentalLocationQuery, request.query_params)
    contract = _contract(query.format)
    result = await service.by_location(location.strip(), query.limit, query.sort_by)
    rentals = shape_many(result["rentals"], contract)
    return success_response(
        {"location": location.strip(), "rentals": rentals, "stats": result["stats"]},
        meta={"count": len(rentals)},
    )


@router.get("/neighborhood/{name}")
async def neighborhood_rentals(
    name: str,
    service: RentalService = Depends(get_rental_service),
) -> dict:
    return success_response(await service.neighborhood(name.strip()), meta={})


@router.post("/recommendations")
async def recommend_rentals(
    body: RecommendationRequest,
    service: RentalService = Depends(get_rental_service),
) -> dict:
    return success_response(await service.recommendations(body), meta={})


@router.get("/{rental_id}")
async def get_rental(
    rental_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    service: RentalService = Depends(get_rental_service),
) -> dict:
    query = parse_request(FormatQuery, request.query_params)
    contract = _contract(query.format)
    rental = await service.get(rental_id)
    background_tasks.add_task(service.record_view, rental.id)
    return success_response(shape_rental(rental, contract), meta={})
