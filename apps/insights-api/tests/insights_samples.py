from insights_api.records import Facility, RentalListing
from insights_api.store import InMemoryDocumentStore


def hospitals_and_clinics() -> list[Facility]:
    """Three hospitals and five clinics around the City Bowl."""
    hospitals = [
        Facility(id=1, name="Groote Schuur Hospital", classification="Hospital", district="City of Cape Town",
                 province="Western Cape", town="Observatory", status="Active", lng=18.4628, lat=-33.9410),
        Facility(id=2, name="New Somerset Hospital", classification="Hospital", district="City of Cape Town",
                 province="Western Cape", town="Green Point", status="Active", lng=18.4156, lat=-33.9066),
        Facility(id=3, name="Tygerberg Hospital", classification="Hospital", district="City of Cape Town",
                 province="Western Cape", town="Bellville", status="Active", lng=18.6110, lat=-33.9106),
    ]
    clinics = [
        Facility(id=4, name="Woodstock Clinic", classification="Clinic", district="City of Cape Town",
                 province="Western Cape", town="Woodstock", status="Active", lng=18.4446, lat=-33.9274),
        Facility(id=5, name="Chapel Street Clinic", classification="Clinic", district="City of Cape Town",
                 province="Western Cape", town="Woodstock", status="Active", lng=18.4480, lat=-33.9290),
        Facility(id=6, name="Sea Point Clinic", classification="Clinic", district="City of Cape Town",
                 province="Western Cape", town="Sea Point", status="Active", lng=18.3837, lat=-33.9156),
        Facility(id=7, name="Stellenbosch Clinic", classification="Clinic", district="Cape Winelands",
                 province="Western Cape", town="Stellenbosch", status="Active", lng=18.8602, lat=-33.9321),
        Facility(id=8, name="Unplaced Clinic", classification="Clinic", district="Cape Winelands",
                 province="Western Cape", town="Paarl", status="Inactive"),
    ]
    return hospitals + clinics


def rentals() -> list[RentalListing]:
    return [
        RentalListing(id="r-1", title="Studio in Gardens", description="Compact studio", location="Gardens",
                      price=9500, bedrooms=0, bathrooms=1, property_type="Studio", category="Budget",
                      features=("Fibre", "Security"), floor_size=32, created_at="2025-01-01T09:00:00+02:00",
                      lng=18.4136, lat=-33.9310),
        RentalListing(id="r-2", title="Sea Point apartment", description="Ocean views", location="Sea Point",
                      price=28000, bedrooms=2, bathrooms=2, category="Luxury",
                      features=("Sea View", "Pool", "Parking"), parking=1, floor_size=95,
                      created_at="2025-01-02T09:00:00+02:00", lng=18.3830, lat=-33.9150),
        RentalListing(id="r-3", title="Rondebosch family house", description="Large garden", location="Rondebosch",
                      price=32000, bedrooms=3, bathrooms=2, property_type="House", category="Luxury",
                      features=("Garden", "Parking"), parking=2, floor_size=210,
                      created_at="2025-01-03T09:00:00+02:00"),
        RentalListing(id="r-4", title="Gardens garden flat", description="Shared garden", location="Gardens",
                      price=18000, bedrooms=2, bathrooms=1, features=("Garden",), parking=1, floor_size=80,
                      created_at="2025-01-04T09:00:00+02:00"),
        RentalListing(id="r-5", title="Let cottage", description="Currently let", location="Muizenberg",
                      price=14500, bedrooms=2, bathrooms=1, property_type="House", available=False,
                      features=("Sea View",), created_at="2025-01-05T09:00:00+02:00"),
    ]


def sample_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(facilities=hospitals_and_clinics(), rentals=rentals())
