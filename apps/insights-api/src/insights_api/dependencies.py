from __future__ import annotations

from devkit.config import ServiceSettings, load_settings
from devkit.db import AsyncDatabaseManager

from insights_api.narrative import NarrativeMerger, build_narrative_generator
from insights_api.seed import DEMO_FACILITIES, DEMO_RENTALS
from insights_api.services.facility_service import FacilityService
from insights_api.services.rental_service import RentalService
from insights_api.store import DocumentStore, InMemoryDocumentStore, SqlDocumentStore, TimedDocumentStore


def build_document_store(settings: ServiceSettings) -> DocumentStore:
    facilities = DEMO_FACILITIES if settings.SEED_DEMO_DATA else ()
    rentals = DEMO_RENTALS if settings.SEED_DEMO_DATA else ()
    if settings.DATABASE_URL:
        inner: DocumentStore = SqlDocumentStore(
            AsyncDatabaseManager(settings.DATABASE_URL),
            seed_facilities=facilities,
            seed_rentals=rentals,
        )
    else:
        inner = InMemoryDocumentStore(facilities=facilities, rentals=rentals)
    return TimedDocumentStore(inner, timeout_seconds=settings.STORE_TIMEOUT_SECONDS)


_settings = load_settings("insights-api")
_document_store = build_document_store(_settings)
_narrative_merger = NarrativeMerger(build_narrative_generator(_settings))
_facility_service = FacilityService(_document_store)
_rental_service = RentalService(_document_store, _narrative_merger)


def get_document_store() -> DocumentStore:
    return _document_store


def get_facility_service() -> FacilityService:
    return _facility_service


def get_rental_service() -> RentalService:
    return _rental_service
