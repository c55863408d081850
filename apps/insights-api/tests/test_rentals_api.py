import logging

from fastapi.testclient import TestClient

from insights_api.app import create_app
from insights_api.dependencies import get_rental_service
from insights_api.narrative import PLACEHOLDER_NARRATIVE, NarrativeMerger, PlaceholderNarrativeGenerator
from insights_api.services.rental_service import RentalService
from insights_api.store import InMemoryDocumentStore, TimedDocumentStore

from insights_samples import rentals, sample_store


class ViewCounterDownStore(InMemoryDocumentStore):
    async def increment_view_count(self, rental_id: str) -> bool:
        raise RuntimeError("database is read-only")


class FindFailsStore(InMemoryDocumentStore):
    async def find(self, *args, **kwargs):
        raise RuntimeError("read timed out")


def build_client(store=None) -> TestClient:
    app = create_app()
    service = RentalService(
        TimedDocumentStore(store or sample_store(), timeout_seconds=1),
        NarrativeMerger(PlaceholderNarrativeGenerator()),
    )
    app.dependency_overrides[get_rental_service] = lambda: service
    return TestClient(app)


def test_list_defaults_to_flat_contract_sorted_by_price() -> None:
    response = build_client().get("/v1/rentals")
    body = response.json()

    assert response.status_code == 200
    assert [item["id"] for item in body["data"]] == ["r-1", "r-5", "r-4", "r-2", "r-3"]
    assert "latitude" in body["data"][0]
    assert body["meta"]["pagination"] == {"total": 5, "limit": 20, "offset": 0, "hasMore": False, "pages": 1}


def test_list_filters_sort_and_echo() -> None:
    response = build_client().get("/v1/rentals?available=true&minPrice=10000&sortBy=price&sortOrder=desc&limit=2")
    body = response.json()

    assert [item["id"] for item in body["data"]] == ["r-3", "r-2"]
    assert body["meta"]["pagination"]["total"] == 3
    assert body["meta"]["pagination"]["hasMore"] is True
    assert body["meta"]["filters"]["minPrice"] == 10000
    assert body["meta"]["filters"]["available"] is True


def test_list_rejects_inverted_price_range() -> None:
    response = build_client().get("/v1/rentals?minPrice=40000&maxPrice=10000")
    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "maxPrice"


def test_stats_endpoint() -> None:
    data = build_client().get("/v1/rentals/stats").json()["data"]
    assert data["overview"]["totalProperties"] == 5
    assert data["locationStats"][0]["location"] == "Gardens"
    assert [row["bedrooms"] for row in data["bedroomStats"]] == [0, 2, 3]
    assert "lastUpdated" in data


def test_search_by_feature_and_budget() -> None:
    body = build_client().get("/v1/rentals/search?features=pool&budget=30000").json()
    assert [item["id"] for item in body["data"]] == ["r-2"]
    assert body["meta"]["count"] == 1
    assert body["meta"]["searchCriteria"]["budget"] == 30000


def test_location_endpoint_returns_rentals_and_stats() -> None:
    data = build_client().get("/v1/rentals/location/gardens").json()["data"]
    assert data["location"] == "gardens"
    assert [item["id"] for item in data["rentals"]] == ["r-1", "r-4"]
    assert data["stats"]["count"] == 2
    assert data["stats"]["minPrice"] == 9500


def test_recommendations_without_credential_use_labelled_placeholder() -> None:
    response = build_client().post(
        "/v1/rentals/recommendations",
        json={"budget": 30000, "bedrooms": 2},
    )
    data = response.json()["data"]

    assert response.status_code == 200
    assert [item["id"] for item in data["recommendations"]] == ["r-4", "r-2"]
    assert data["totalFound"] == 2
    assert data["criteria"]["maxBudget"] == 30000
    assert data["narrative"] == PLACEHOLDER_NARRATIVE
    assert data["narrativeSource"] == "placeholder"


def test_recommendations_reject_unknown_body_fields() -> None:
    response = build_client().post("/v1/rentals/recommendations", json={"budget": 1000, "pets": True})
    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "pets"


def test_market_insights() -> None:
    data = build_client().get("/v1/rentals/market-insights").json()["data"]
    assert data["overview"]["totalAvailableProperties"] == 4
    assert data["overview"]["mostPopularLocation"] == "Gardens"
    assert len(data["bestValue"]) == 4
    assert data["narrativeSource"] == "placeholder"


def test_neighborhood_with_and_without_listings() -> None:
    client = build_client()
    gardens = client.get("/v1/rentals/neighborhood/Gardens").json()["data"]
    empty = client.get("/v1/rentals/neighborhood/Atlantis").json()["data"]

    assert gardens["totalProperties"] == 2
    assert gardens["statistics"]["minPrice"] == 9500
    assert "narrative" in gardens
    assert empty["totalProperties"] == 0
    assert "narrative" not in empty


def test_fetching_twice_increments_view_count_by_two() -> None:
    store = sample_store()
    client = build_client(store)

    first = client.get("/v1/rentals/r-2")
    client.get("/v1/rentals/r-2")

    assert first.status_code == 200
    assert first.json()["data"]["viewCount"] == 0
    assert client.get("/v1/rentals/r-2").json()["data"]["viewCount"] == 2


def test_missing_rental_is_not_found() -> None:
    response = build_client().get("/v1/rentals/r-404")
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Rental property not found"


def test_view_count_failure_does_not_fail_the_read(caplog) -> None:
    client = build_client(ViewCounterDownStore(rentals=rentals()))

    with caplog.at_level(logging.WARNING, logger="insights_api.services.rental_service"):
        response = client.get("/v1/rentals/r-2")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == "r-2"
    assert "view_count_increment_failed" in [record.getMessage() for record in caplog.records]


def test_stats_fails_whole_when_one_branch_fails() -> None:
    response = build_client(FindFailsStore(rentals=rentals())).get("/v1/rentals/stats")
    body = response.json()

    assert response.status_code == 500
    assert body["success"] is False
    assert body["error"]["code"] == "STORE_ERROR"
    assert "data" not in body
