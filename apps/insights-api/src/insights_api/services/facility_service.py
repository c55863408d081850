from __future__ import annotations

from insights_api.aggregator import Aggregator, gather_all
from insights_api.errors import NotFoundError
from insights_api.filters import FACILITY_TEXT_FIELDS, facility_predicate, text_search
from insights_api.pager import FACILITY_LIST_MAX_LIMIT, NEAR_MAX_LIMIT, SEARCH_MAX_LIMIT, Page, paginate
from insights_api.predicates import Near
from insights_api.records import FACILITIES, Facility
from insights_api.schemas.facility import FacilityListQuery
from insights_api.store import DocumentStore, SortKey

TOP_N = 10


class FacilityService:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._aggregator = Aggregator(store)

    async def list_facilities(self, query: FacilityListQuery) -> Page:
        return await paginate(
            self._store,
            FACILITIES,
            facility_predicate(query),
            sort=[SortKey("id")],
            limit=query.limit,
            offset=query.offset,
            max_limit=FACILITY_LIST_MAX_LIMIT,
        )

    async def distinct(self, field: str) -> list[str]:
        return await self._aggregator.distinct_values(FACILITIES, field)

    async def stats(self) -> dict[str, object]:
        results = await gather_all(
            total=self._aggregator.count(FACILITIES),
            classifications=self._aggregator.distinct_values(FACILITIES, "classification"),
            districts=self._aggregator.distinct_values(FACILITIES, "district"),
            provinces=self._aggregator.distinct_values(FACILITIES, "province"),
            breakdown=self._aggregator.count_by(FACILITIES, "classification"),
            district_counts=self._aggregator.count_by(FACILITIES, "district", top=TOP_N),
        )
        return {
            "totalFacilities": results["total"],
            "uniqueClassifications": len(results["classifications"]),
            "uniqueDistricts": len(results["districts"]),
            "uniqueProvinces": len(results["provinces"]),
            "classificationBreakdown": results["breakdown"],
            "topClassifications": [row["value"] for row in results["breakdown"][:TOP_N]],
            "topDistricts": [row["value"] for row in results["district_counts"]],
        }

    async def near(self, near: Near, limit: int) -> list[tuple[Facility, float]]:
        return await self._store.near(FACILITIES, near, min(limit, NEAR_MAX_LIMIT))

    async def search(self, term: str, limit: int) -> list[Facility]:
        return await self._store.find(
            FACILITIES,
            text_search(term, FACILITY_TEXT_FIELDS),
            sort=[SortKey("id")],
            limit=min(limit, SEARCH_MAX_LIMIT),
        )

    async def get(self, facility_id: int) -> Facility:
        facility = await self._store.get(FACILITIES, facility_id)
        if facility is None:
            raise NotFoundError("Facility not found")
        return facility
