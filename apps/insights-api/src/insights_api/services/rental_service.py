from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from devkit.timezone import now_sast_iso

from insights_api import aggregator
from insights_api.aggregator import gather_all
from insights_api.errors import NotFoundError
from insights_api.filters import rental_predicate, rental_search_predicate, recommendation_predicate
from insights_api.narrative import NarrativeMerger
from insights_api.pager import RENTAL_LIST_MAX_LIMIT, RENTAL_SEARCH_MAX_LIMIT, Page, paginate
from insights_api.predicates import Contains, Equals, all_of
from insights_api.records import RENTALS, RentalListing
from insights_api.schemas.rental import RecommendationRequest, RentalListQuery, RentalSearchQuery
from insights_api.shaping import shape_rental
from insights_api.store import DocumentStore, SortKey

logger = logging.getLogger(__name__)

SORT_FIELDS = {"price": "price", "bedrooms": "bedrooms", "location": "location", "createdAt": "created_at"}

RECOMMENDATION_CANDIDATES = 20
RECOMMENDATION_RESULTS = 10
BEST_VALUE_POOL = 100
FEATURED_COUNT = 5
TRENDING_COUNT = 5

AVAILABLE = Equals("available", True)


def recommendation_score(rental: RentalListing, request: RecommendationRequest) -> float:
    score = 100.0
    if request.max_budget:
        score += (request.max_budget - rental.price) / request.max_budget * 50
    if request.bedrooms is not None and rental.bedrooms == request.bedrooms:
        score += 30
    location = rental.location.lower()
    if any(preferred.lower() in location for preferred in request.preferred_locations):
        score += 25
    wanted = [feature.lower() for feature in request.features]
    have = [feature.lower() for feature in rental.features]
    score += 10 * sum(1 for feature in wanted if any(feature in item for item in have))
    return max(0.0, score)


def value_score(rental: RentalListing) -> float:
    price_per_bedroom = rental.price / rental.bedrooms if rental.bedrooms > 0 else rental.price
    score = (50000 - price_per_bedroom) / 1000
    score += len(rental.features) * 5
    score += rental.parking * 3
    if rental.floor_size:
        score += rental.floor_size / 10
    return max(0.0, score)


def _describe(rentals: Sequence[RentalListing], limit: int = 3) -> str:
    lines = []
    for index, rental in enumerate(rentals[:limit], start=1):
        line = f"{index}. {rental.title} in {rental.location}: R{rental.price:,}/month, {rental.bedroom_category}"
        if rental.features:
            line += f" ({', '.join(rental.features[:3])})"
        lines.append(line)
    return "\n".join(lines)


class RentalService:
    def __init__(self, store: DocumentStore, merger: NarrativeMerger) -> None:
        self._store = store
        self._merger = merger

    async def list_rentals(self, query: RentalListQuery) -> Page:
        sort = [SortKey(SORT_FIELDS[query.sort_by], descending=query.sort_order == "desc")]
        return await paginate(
            self._store,
            RENTALS,
            rental_predicate(query),
            sort=sort,
            limit=query.limit,
            offset=query.offset,
            max_limit=RENTAL_LIST_MAX_LIMIT,
        )

    async def stats(self) -> dict[str, Any]:
        results = await gather_all(
            total=self._store.count(RENTALS),
            rentals=self._store.find(RENTALS),
        )
        rentals = results["rentals"]
        summary = aggregator.numeric_summary(rentals, "price")
        return {
            "overview": {"totalProperties": results["total"], "averagePrice": summary["mean"] or 0},
            "locationStats": aggregator.location_stats(rentals),
            "priceDistribution": aggregator.price_distribution(rentals),
            "bedroomStats": aggregator.bedroom_stats(rentals),
            "categoryStats": aggregator.category_stats(rentals),
            "lastUpdated": now_sast_iso(),
        }

    async def search(self, query: RentalSearchQuery) -> list[RentalListing]:
        return await self._store.find(
            RENTALS,
            rental_search_predicate(query),
            sort=[SortKey("price"), SortKey("id")],
            limit=min(query.limit, RENTAL_SEARCH_MAX_LIMIT),
        )

    async def by_location(self, location: str, limit: int, sort_by: str) -> dict[str, Any]:
        predicate = Contains("location", location)
        results = await gather_all(
            page=self._store.find(
                RENTALS,
                predicate,
                sort=[SortKey(SORT_FIELDS[sort_by]), SortKey("id")],
                limit=limit,
            ),
            matching=self._store.find(RENTALS, predicate),
        )
        stats: dict[str, Any] = {}
        if results["matching"]:
            prices = [item.price for item in results["matching"]]
            stats = {
                "count": len(prices),
                "avgPrice": sum(prices) / len(prices),
                "minPrice": min(prices),
                "maxPrice": max(prices),
                "avgBedrooms": sum(item.bedrooms for item in results["matching"]) / len(prices),
            }
        return {"rentals": results["page"], "stats": stats}

    async def get(self, rental_id: str) -> RentalListing:
        rental = await self._store.get(RENTALS, rental_id)
        if rental is None:
            raise NotFoundError("Rental property not found")
        return rental

    async def record_view(self, rental_id: str) -> None:
        try:
            await self._store.increment_view_count(rental_id)
        except Exception:
            logger.warning(
                "view_count_increment_failed",
                extra={"component": "insights_api", "rental_id": rental_id},
                exc_info=True,
            )

    async def recommendations(self, request: RecommendationRequest) -> dict[str, Any]:
        candidates = await self._store.find(
            RENTALS,
            recommendation_predicate(request),
            sort=[SortKey("price"), SortKey("id")],
            limit=RECOMMENDATION_CANDIDATES,
        )
        scored = sorted(
            ((rental, recommendation_score(rental, request)) for rental in candidates),
            key=lambda pair: pair[1],
            reverse=True,
        )[:RECOMMENDATION_RESULTS]
        payload = {
            "recommendations": [{**shape_rental(rental), "score": round(score, 2)} for rental, score in scored],
            "totalFound": len(candidates),
            "criteria": request.criteria(),
            "searchDate": now_sast_iso(),
        }
        budget = f"R{request.max_budget:,}" if request.max_budget else "a flexible budget"
        bedrooms = request.bedrooms if request.bedrooms is not None else "any number of"
        prompt = (
            f"Analyze these rental recommendations for someone with {budget}, looking for {bedrooms} "
            "bedrooms in Cape Town. Explain why these properties are good matches and provide insights "
            "about the locations.\n"
            f"{_describe([rental for rental, _ in scored])}"
        )
        history = [turn.model_dump() for turn in request.history]
        return await self._merger.merge(payload, prompt, history)

    async def market_insights(self) -> dict[str, Any]:
        results = await gather_all(
            available_total=self._store.count(RENTALS, AVAILABLE),
            rentals=self._store.find(RENTALS),
            value_pool=self._store.find(RENTALS, AVAILABLE, sort=[SortKey("id")], limit=BEST_VALUE_POOL),
        )
        location_rows = aggregator.location_stats(results["rentals"])
        best_value = sorted(results["value_pool"], key=value_score, reverse=True)[:FEATURED_COUNT]
        overview = {
            "totalAvailableProperties": results["available_total"],
            "averagePrice": (
                sum(row["avgPrice"] for row in location_rows) / len(location_rows) if location_rows else 0
            ),
            "mostPopularLocation": location_rows[0]["location"] if location_rows else "N/A",
            "priceRange": {
                "min": min((row["minPrice"] for row in location_rows), default=None),
                "max": max((row["maxPrice"] for row in location_rows), default=None),
            },
        }
        payload = {
            "overview": overview,
            "locationStats": location_rows[:10],
            "priceDistribution": aggregator.price_distribution(results["rentals"]),
            "trendingLocations": [
                {
                    "location": row["location"],
                    "properties": row["count"],
                    "avgPrice": round(row["avgPrice"]),
                    "trend": "stable",
                }
                for row in location_rows[:TRENDING_COUNT]
            ],
            "bestValue": [{**shape_rental(rental), "valueScore": round(value_score(rental), 2)} for rental in best_value],
            "lastUpdated": now_sast_iso(),
        }
        prompt = (
            "Analyze the current Cape Town rental market based on this data. Provide insights about trends, "
            "best value areas, and recommendations for different types of renters.\n"
            f"Most listed area: {overview['mostPopularLocation']}. "
            f"Average asking rent across areas: R{round(overview['averagePrice']):,}.\n"
            f"{_describe(best_value)}"
        )
        return await self._merger.merge(payload, prompt)

    async def neighborhood(self, name: str) -> dict[str, Any]:
        rentals = await self._store.find(
            RENTALS,
            all_of(Contains("location", name), AVAILABLE),
            sort=[SortKey("id")],
        )
        if not rentals:
            return {
                "neighborhood": name,
                "totalProperties": 0,
                "message": "No rental properties found in this neighborhood",
                "suggestions": "Try searching in nearby areas or check back later for new listings.",
            }
        featured = sorted(rentals, key=value_score, reverse=True)[:FEATURED_COUNT]
        statistics = aggregator.rental_statistics(rentals)
        payload = {
            "neighborhood": name,
            "totalProperties": len(rentals),
            "statistics": statistics,
            "propertyTypes": aggregator.property_type_breakdown(rentals),
            "bedroomDistribution": aggregator.bedroom_distribution(rentals),
            "priceRanges": aggregator.price_ranges(rentals),
            "featuredProperties": [shape_rental(rental) for rental in featured],
            "lastUpdated": now_sast_iso(),
        }
        prompt = (
            f"Provide insights about the rental market in {name}, Cape Town. Based on the data, what should "
            "potential renters know about this area?\n"
            f"Listings: {len(rentals)}, average rent R{statistics['averagePrice']:,}, "
            f"median R{statistics['medianPrice']:,}.\n"
            f"{_describe(featured)}"
        )
        return await self._merger.merge(payload, prompt)
