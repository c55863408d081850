from insights_api.records import Facility, RentalListing

DEMO_FACILITIES = (
    Facility(
        id=1,
        name="Groote Schuur Hospital",
        classification="Hospital",
        province="Western Cape",
        district="City of Cape Town",
        town="Observatory",
        status="Active",
        contact="021 404 9111",
        email="gsh.info@westerncape.gov.za",
        open_days="Mon-Sun",
        open_time="00:00-24:00",
        lng=18.4628,
        lat=-33.9410,
    ),
    Facility(
        id=2,
        name="New Somerset Hospital",
        classification="Hospital",
        province="Western Cape",
        district="City of Cape Town",
        town="Green Point",
        status="Active",
        contact="021 402 6911",
        open_days="Mon-Sun",
        open_time="00:00-24:00",
        lng=18.4156,
        lat=-33.9066,
    ),
    Facility(
        id=3,
        name="Tygerberg Hospital",
        classification="Hospital",
        province="Western Cape",
        district="City of Cape Town",
        town="Bellville",
        status="Active",
        contact="021 938 4911",
        open_days="Mon-Sun",
        open_time="00:00-24:00",
        lng=18.6110,
        lat=-33.9106,
    ),
    Facility(
        id=4,
        name="Woodstock CDC",
        classification="CHC",
        province="Western Cape",
        district="City of Cape Town",
        town="Woodstock",
        status="Active",
        contact="021 447 1116",
        open_days="Mon-Fri",
        open_time="07:00-16:00",
        lng=18.4446,
        lat=-33.9274,
    ),
    Facility(
        id=5,
        name="Chapel Street Clinic",
        classification="Clinic",
        province="Western Cape",
        district="City of Cape Town",
        town="Woodstock",
        status="Active",
        open_days="Mon-Fri",
        open_time="07:30-16:00",
        lng=18.4480,
        lat=-33.9290,
    ),
    Facility(
        id=6,
        name="Sea Point Clinic",
        classification="Clinic",
        province="Western Cape",
        district="City of Cape Town",
        town="Sea Point",
        status="Active",
        contact="021 434 1155",
        open_days="Mon-Fri",
        open_time="08:00-16:30",
        lng=18.3837,
        lat=-33.9156,
    ),
    Facility(
        id=7,
        name="Khayelitsha Site B Clinic",
        classification="Clinic",
        province="Western Cape",
        district="City of Cape Town",
        town="Khayelitsha",
        status="Active",
        open_days="Mon-Fri",
        open_time="07:00-16:00",
        lng=18.6747,
        lat=-34.0298,
    ),
    Facility(
        id=8,
        name="Muizenberg Clinic",
        classification="Clinic",
        province="Western Cape",
        district="City of Cape Town",
        town="Muizenberg",
        status="Inactive",
        lng=18.4695,
        lat=-34.1083,
    ),
    Facility(
        id=9,
        name="Stellenbosch Clinic",
        classification="Clinic",
        province="Western Cape",
        district="Cape Winelands",
        town="Stellenbosch",
        status="Active",
        email="stellenbosch.clinic@westerncape.gov.za",
        open_days="Mon-Fri",
        open_time="08:00-16:00",
        lng=18.8602,
        lat=-33.9321,
    ),
)

DEMO_RENTALS = (
    RentalListing(
        id="r-1001",
        title="Modern studio near the Company's Garden",
        description="Compact studio in a secure block, walking distance to the CBD.",
        location="Gardens",
        price=9500,
        bedrooms=0,
        bathrooms=1,
        property_type="Studio",
        category="Budget",
        furnished="Fully furnished",
        features=("Fibre", "Security", "Gym"),
        floor_size=32,
        created_at="2025-01-06T09:00:00+02:00",
        lng=18.4136,
        lat=-33.9310,
    ),
    RentalListing(
        id="r-1002",
        title="Sea-facing apartment on Beach Road",
        description="Two bedroom apartment with ocean views and a balcony.",
        location="Sea Point",
        price=28000,
        bedrooms=2,
        bathrooms=2,
        property_type="Apartment",
        category="Luxury",
        furnished="Semi-furnished",
        features=("Sea View", "Balcony", "Pool", "Parking"),
        parking=1,
        floor_size=95,
        created_at="2025-01-10T10:30:00+02:00",
        lng=18.3830,
        lat=-33.9150,
    ),
    RentalListing(
        id="r-1003",
        title="Family house with garden",
        description="Three bedroom house with a large garden close to good schools.",
        location="Rondebosch",
        price=32000,
        bedrooms=3,
        bathrooms=2,
        property_type="House",
        category="Luxury",
        furnished="Unfurnished",
        features=("Garden", "Pet Friendly", "Parking"),
        parking=2,
        floor_size=210,
        created_at="2025-01-12T08:15:00+02:00",
        lng=18.4760,
        lat=-33.9600,
    ),
    RentalListing(
        id="r-1004",
        title="Warehouse loft in Woodstock",
        description="Converted industrial loft with high ceilings and exposed brick.",
        location="Woodstock",
        price=16500,
        bedrooms=1,
        bathrooms=1,
        property_type="Loft",
        category="Moderate",
        furnished="Semi-furnished",
        features=("Fibre", "Security"),
        floor_size=70,
        created_at="2025-01-15T14:00:00+02:00",
        lng=18.4460,
        lat=-33.9270,
    ),
    RentalListing(
        id="r-1005",
        title="Penthouse with Table Mountain views",
        description="Top floor penthouse with a private rooftop terrace.",
        location="Green Point",
        price=65000,
        bedrooms=3,
        bathrooms=3,
        property_type="Penthouse",
        category="Ultra-Luxury",
        furnished="Fully furnished",
        features=("Mountain View", "Pool", "Parking", "Concierge"),
        parking=2,
        floor_size=240,
        created_at="2025-01-18T11:45:00+02:00",
        lng=18.4100,
        lat=-33.9070,
    ),
    RentalListing(
        id="r-1006",
        title="Townhouse in a secure estate",
        description="Two bedroom townhouse with a small garden and double garage.",
        location="Observatory",
        price=19500,
        bedrooms=2,
        bathrooms=1,
        property_type="Townhouse",
        category="Moderate",
        furnished="Unfurnished",
        features=("Garden", "Security", "Parking"),
        parking=2,
        floor_size=110,
        created_at="2025-01-20T09:20:00+02:00",
        lng=18.4700,
        lat=-33.9380,
    ),
    RentalListing(
        id="r-1007",
        title="Student flat close to campus",
        description="One bedroom flat near the university shuttle route.",
        location="Rondebosch",
        price=8200,
        bedrooms=1,
        bathrooms=1,
        property_type="Apartment",
        category="Budget",
        furnished="Fully furnished",
        features=("Fibre",),
        floor_size=45,
        created_at="2025-01-22T16:10:00+02:00",
        lng=18.4720,
        lat=-33.9580,
    ),
    RentalListing(
        id="r-1008",
        title="Beach cottage in Muizenberg",
        description="Two bedroom cottage a short walk from the surf.",
        location="Muizenberg",
        price=14500,
        bedrooms=2,
        bathrooms=1,
        property_type="House",
        category="Moderate",
        furnished="Semi-furnished",
        features=("Sea View", "Pet Friendly"),
        parking=1,
        floor_size=85,
        available=False,
        created_at="2025-01-25T12:00:00+02:00",
        lng=18.4690,
        lat=-34.1075,
    ),
    RentalListing(
        id="r-1009",
        title="Clifton bungalow",
        description="Four bedroom bungalow above the beaches with panoramic views.",
        location="Clifton",
        price=120000,
        bedrooms=4,
        bathrooms=4,
        property_type="House",
        category="Ultra-Luxury",
        furnished="Fully furnished",
        features=("Sea View", "Pool", "Parking", "Concierge", "Garden"),
        parking=3,
        floor_size=380,
        created_at="2025-02-01T10:00:00+02:00",
        lng=18.3770,
        lat=-33.9380,
    ),
    RentalListing(
        id="r-1010",
        title="Garden apartment in Gardens",
        description="Ground floor apartment opening onto a shared garden.",
        location="Gardens",
        price=18000,
        bedrooms=2,
        bathrooms=1,
        property_type="Apartment",
        category="Moderate",
        furnished="Unfurnished",
        features=("Garden", "Parking"),
        parking=1,
        floor_size=80,
        created_at="2025-02-03T09:40:00+02:00",
        lng=18.4120,
        lat=-33.9330,
    ),
)
