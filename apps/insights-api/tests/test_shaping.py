import pytest

from insights_api.errors import ValidationError
from insights_api.records import Facility
from insights_api.shaping import (
    FACILITY_ICONS,
    OutputContract,
    facility_caption,
    resolve_contract,
    shape_facility,
    shape_many,
    shape_rental,
)

from insights_samples import hospitals_and_clinics, rentals


def test_resolve_contract_accepts_names_and_aliases() -> None:
    assert resolve_contract(None) is OutputContract.MAP_MARKER
    assert resolve_contract(None, default=OutputContract.FLAT) is OutputContract.FLAT
    assert resolve_contract("geojson") is OutputContract.GEO_FEATURE
    assert resolve_contract("google-maps") is OutputContract.MAP_MARKER
    assert resolve_contract("raw") is OutputContract.FLAT


def test_resolve_contract_rejects_unknown_format() -> None:
    with pytest.raises(ValidationError) as exc_info:
        resolve_contract("kml")
    assert exc_info.value.details[0]["field"] == "format"


def test_map_marker_contract() -> None:
    hospital = hospitals_and_clinics()[0]
    shaped = shape_facility(hospital, OutputContract.MAP_MARKER)
    assert shaped["position"] == {"lat": -33.9410, "lng": 18.4628}
    assert shaped["icon"] == FACILITY_ICONS["Hospital"]
    assert shaped["icon"]["url"].startswith("data:image/svg+xml;base64,")
    assert "Groote Schuur Hospital" in shaped["caption"]


def test_geo_feature_contract_uses_lng_lat_order() -> None:
    shaped = shape_facility(hospitals_and_clinics()[0], OutputContract.GEO_FEATURE)
    assert shaped["type"] == "Feature"
    assert shaped["geometry"] == {"type": "Point", "coordinates": [18.4628, -33.9410]}
    assert shaped["properties"]["name"] == "Groote Schuur Hospital"


def test_shared_fields_agree_across_contracts() -> None:
    facility = hospitals_and_clinics()[3]
    marker = shape_facility(facility, OutputContract.MAP_MARKER)
    feature = shape_facility(facility, OutputContract.GEO_FEATURE)
    flat = shape_facility(facility, OutputContract.FLAT)
    for key in ("id", "name", "classification", "district", "town", "status"):
        assert marker[key] == feature["properties"][key] == flat[key]
    assert flat["latitude"] == marker["position"]["lat"]
    assert flat["longitude"] == feature["geometry"]["coordinates"][0]


def test_unplaced_record_has_no_position() -> None:
    unplaced = hospitals_and_clinics()[-1]
    assert shape_facility(unplaced, OutputContract.MAP_MARKER)["position"] is None
    assert shape_facility(unplaced, OutputContract.GEO_FEATURE)["geometry"] is None


def test_unknown_classification_falls_back_to_clinic_icon() -> None:
    shaped = shape_facility(Facility(id=99, name="Mobile unit", classification="Mobile"), OutputContract.MAP_MARKER)
    assert shaped["icon"] == FACILITY_ICONS["Clinic"]


def test_caption_escapes_markup_and_fills_defaults() -> None:
    caption = facility_caption(Facility(id=1, name="<script>x</script>"))
    assert "&lt;script&gt;" in caption
    assert "<script>" not in caption
    assert "Unknown District" in caption
    assert "Contact" not in caption


def test_rental_flat_contract_uses_wire_names() -> None:
    shaped = shape_rental(rentals()[1])
    assert shaped["propertyType"] == "Apartment"
    assert shaped["pricePerSqm"] == 295
    assert shaped["bedroomCategory"] == "2 Bedrooms"
    assert shaped["features"] == ["Sea View", "Pool", "Parking"]


def test_shape_many_dispatches_on_record_type() -> None:
    shaped = shape_many([hospitals_and_clinics()[0], rentals()[0]], OutputContract.FLAT)
    assert shaped[0]["classification"] == "Hospital"
    assert shaped[1]["bedroomCategory"] == "Studio"
