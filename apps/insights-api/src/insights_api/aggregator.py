from __future__ import annotations

import asyncio
import statistics
from collections import defaultdict
from collections.abc import Awaitable, Iterable, Sequence
from typing import Any

from insights_api.predicates import MATCH_ALL, Predicate
from insights_api.records import RentalListing
from insights_api.store import DocumentStore

PRICE_BUCKET_BOUNDARIES = (0, 15000, 25000, 40000, 60000, 100000, 300000)
PRICE_BUCKET_OVERFLOW = "Over 300k"

PRICE_RANGES = (
    ("Under R15k", 15000),
    ("R15k-R25k", 25000),
    ("R25k-R40k", 40000),
    ("R40k-R60k", 60000),
    ("R60k-R100k", 100000),
)
PRICE_RANGE_OVERFLOW = "Over R100k"


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _mean(values: Sequence[float]) -> float | None:
    return sum(values) / len(values) if values else None


def distinct_values(records: Iterable[Any], field: str) -> list[Any]:
    return sorted({getattr(item, field, None) for item in records} - {None, ""})


def count_by(records: Iterable[Any], field: str, top: int | None = None) -> list[dict[str, Any]]:
    """Per-value counts, most frequent first; equal counts order by value."""
    counts: dict[Any, int] = defaultdict(int)
    for item in records:
        value = getattr(item, field, None)
        if _present(value):
            counts[value] += 1
    ordered = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
    if top is not None:
        ordered = ordered[:top]
    return [{"value": value, "count": count} for value, count in ordered]


def numeric_summary(records: Iterable[Any], field: str) -> dict[str, Any]:
    values = [value for value in (getattr(item, field, None) for item in records) if value is not None]
    if not values:
        return {"count": 0, "mean": None, "min": None, "max": None, "median": None}
    return {
        "count": len(values),
        "mean": sum(values) / len(values),
        "min": min(values),
        "max": max(values),
        "median": statistics.median(values),
    }


def location_stats(rentals: Iterable[RentalListing]) -> list[dict[str, Any]]:
    grouped: dict[str, list[RentalListing]] = defaultdict(list)
    for rental in rentals:
        grouped[rental.location].append(rental)
    rows = []
    for location, items in grouped.items():
        prices = [item.price for item in items]
        rows.append(
            {
                "location": location,
                "count": len(items),
                "avgPrice": _mean(prices),
                "minPrice": min(prices),
                "maxPrice": max(prices),
                "avgBedrooms": _mean([item.bedrooms for item in items]),
            }
        )
    rows.sort(key=lambda row: (-row["count"], row["location"]))
    return rows


def bedroom_stats(rentals: Iterable[RentalListing]) -> list[dict[str, Any]]:
    grouped: dict[int, list[RentalListing]] = defaultdict(list)
    for rental in rentals:
        grouped[rental.bedrooms].append(rental)
    return [
        {
            "bedrooms": bedrooms,
            "count": len(items),
            "avgPrice": _mean([item.price for item in items]),
            "locations": sorted({item.location for item in items}),
        }
        for bedrooms, items in sorted(grouped.items())
    ]


def category_stats(rentals: Iterable[RentalListing]) -> list[dict[str, Any]]:
    grouped: dict[str, list[int]] = defaultdict(list)
    for rental in rentals:
        grouped[rental.category].append(rental.price)
    rows = [
        {"category": category, "count": len(prices), "avgPrice": _mean(prices)}
        for category, prices in grouped.items()
    ]
    rows.sort(key=lambda row: (-row["count"], row["category"]))
    return rows


def _bucket_for(price: float) -> int | str:
    for lower, upper in zip(PRICE_BUCKET_BOUNDARIES, PRICE_BUCKET_BOUNDARIES[1:]):
        if lower <= price < upper:
            return lower
    return PRICE_BUCKET_OVERFLOW


def price_distribution(rentals: Iterable[RentalListing]) -> list[dict[str, Any]]:
    """Non-empty price buckets in boundary order, overflow bucket last."""
    grouped: dict[int | str, list[int]] = defaultdict(list)
    for rental in rentals:
        grouped[_bucket_for(rental.price)].append(rental.price)
    order = {bound: index for index, bound in enumerate(PRICE_BUCKET_BOUNDARIES)}
    order[PRICE_BUCKET_OVERFLOW] = len(order)
    return [
        {"bucket": bucket, "count": len(prices), "avgPrice": _mean(prices)}
        for bucket, prices in sorted(grouped.items(), key=lambda pair: order[pair[0]])
    ]


def price_ranges(rentals: Iterable[RentalListing]) -> dict[str, int]:
    ranges = {label: 0 for label, _ in PRICE_RANGES}
    ranges[PRICE_RANGE_OVERFLOW] = 0
    for rental in rentals:
        label = next((name for name, upper in PRICE_RANGES if rental.price < upper), PRICE_RANGE_OVERFLOW)
        ranges[label] += 1
    return ranges


def property_type_breakdown(rentals: Iterable[RentalListing]) -> dict[str, dict[str, Any]]:
    grouped: dict[str, list[int]] = defaultdict(list)
    for rental in rentals:
        grouped[rental.property_type or "Unknown"].append(rental.price)
    return {
        property_type: {"count": len(prices), "avgPrice": round(_mean(prices) or 0)}
        for property_type, prices in sorted(grouped.items())
    }


def bedroom_distribution(rentals: Iterable[RentalListing]) -> dict[str, dict[str, Any]]:
    grouped: dict[int, list[int]] = defaultdict(list)
    for rental in rentals:
        grouped[rental.bedrooms].append(rental.price)
    return {
        str(bedrooms): {
            "count": len(prices),
            "avgPrice": round(_mean(prices) or 0),
            "minPrice": min(prices),
            "maxPrice": max(prices),
        }
        for bedrooms, prices in sorted(grouped.items())
    }


def rental_statistics(rentals: Sequence[RentalListing]) -> dict[str, Any]:
    prices = [rental.price for rental in rentals]
    if not prices:
        return {}
    per_sqm = [rental.price / rental.floor_size for rental in rentals if rental.floor_size]
    return {
        "averagePrice": round(sum(prices) / len(prices)),
        "medianPrice": statistics.median(prices),
        "minPrice": min(prices),
        "maxPrice": max(prices),
        "averageBedrooms": round(sum(rental.bedrooms for rental in rentals) / len(rentals), 1),
        "pricePerSqm": round(sum(per_sqm) / len(per_sqm)) if per_sqm else None,
    }


async def gather_all(**named: Awaitable[Any]) -> dict[str, Any]:
    """Await independent aggregations together; the first failure fails the lot."""
    results = await asyncio.gather(*named.values())
    return dict(zip(named.keys(), results))


class Aggregator:
    """Store-backed entry points for the pure summaries above."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def records(self, collection: str, predicate: Predicate = MATCH_ALL) -> list[Any]:
        return await self._store.find(collection, predicate)

    async def distinct_values(self, collection: str, field: str, predicate: Predicate = MATCH_ALL) -> list[Any]:
        return distinct_values(await self.records(collection, predicate), field)

    async def count_by(
        self,
        collection: str,
        field: str,
        predicate: Predicate = MATCH_ALL,
        top: int | None = None,
    ) -> list[dict[str, Any]]:
        return count_by(await self.records(collection, predicate), field, top=top)

    async def numeric_summary(self, collection: str, field: str, predicate: Predicate = MATCH_ALL) -> dict[str, Any]:
        return numeric_summary(await self.records(collection, predicate), field)

    async def count(self, collection: str, predicate: Predicate = MATCH_ALL) -> int:
        return await self._store.count(collection, predicate)
