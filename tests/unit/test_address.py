"""Unit tests for pickup/delivery city-state resolution."""
from ratecon.core.extraction_schema import ExtractedRecord, NormalizedAddress
from ratecon.extraction.address import (
    Location,
    build_full_address,
    join_city_state,
    parse_city_state,
    parse_full_address,
    resolve_location,
    resolve_locations,
)


def _city_state(record: ExtractedRecord, location: Location = Location.PICKUP) -> tuple[str, str]:
    resolved = resolve_location(record, location)
    return resolved.city, resolved.state


class TestParseCityState:
    def test_city_and_state(self):
        parsed = parse_city_state("Chicago, IL")
        assert (parsed.city, parsed.state) == ("Chicago", "IL")

    def test_state_with_zip_keeps_two_letters(self):
        parsed = parse_city_state("Chicago, IL 60607")
        assert (parsed.city, parsed.state) == ("Chicago", "IL")

    def test_city_only(self):
        parsed = parse_city_state("Chicago")
        assert (parsed.city, parsed.state) == ("Chicago", "")

    def test_empty(self):
        parsed = parse_city_state(None)
        assert (parsed.city, parsed.state) == ("", "")


class TestParseFullAddress:
    def test_company_street_city_state_zip(self):
        parsed = parse_full_address("ABC Foods, 100 Main St, Hollister, CA 95023")
        assert (parsed.city, parsed.state) == ("Hollister", "CA")

    def test_drops_trailing_country(self):
        parsed = parse_full_address("100 Main St, Hollister, CA 95023, USA")
        assert (parsed.city, parsed.state) == ("Hollister", "CA")

    def test_single_segment_yields_nothing(self):
        parsed = parse_full_address("ABC Foods Warehouse")
        assert (parsed.city, parsed.state) == ("", "")

    def test_no_state_token(self):
        parsed = parse_full_address("100 Main St, Hollister, 95023")
        assert (parsed.city, parsed.state) == ("Hollister", "")


class TestResolveLocation:
    def test_freeform_origin(self):
        assert _city_state(ExtractedRecord(origin="Chicago, IL")) == ("Chicago", "IL")

    def test_full_address_last_resort(self):
        record = ExtractedRecord(pickup_address_full="ABC Foods, 100 Main St, Hollister, CA 95023")
        assert _city_state(record) == ("Hollister", "CA")

    def test_absent_yields_blank(self):
        assert _city_state(ExtractedRecord()) == ("", "")

    def test_explicit_fields_win(self):
        record = ExtractedRecord(
            origin_city="Joliet", origin_state="IL",
            pickup_address=NormalizedAddress(city="Aurora", state="IL"),
            origin="Chicago, IL",
        )
        assert _city_state(record) == ("Joliet", "IL")

    def test_structured_address_beats_freeform(self):
        record = ExtractedRecord(
            pickup_address=NormalizedAddress(city="Aurora", state="IL"),
            origin="Chicago, IL",
        )
        assert _city_state(record) == ("Aurora", "IL")

    def test_components_resolve_independently(self):
        record = ExtractedRecord(origin_city="Joliet", origin="Chicago, IL")
        assert _city_state(record) == ("Joliet", "IL")

    def test_delivery_uses_destination_sources(self):
        record = ExtractedRecord(
            origin="Chicago, IL",
            destination="Dallas, TX",
            delivery_address_full="Big Box DC, 1 Dock Rd, Fort Worth, TX 76101",
        )
        assert _city_state(record, Location.DELIVERY) == ("Dallas", "TX")

    def test_full_address_prefers_extracted_text(self):
        record = ExtractedRecord(pickup_address_full="ABC Foods, 100 Main St, Hollister, CA 95023")
        assert resolve_location(record, Location.PICKUP).full_address == (
            "ABC Foods, 100 Main St, Hollister, CA 95023"
        )

    def test_full_address_built_from_parts(self):
        record = ExtractedRecord(pickup_address=NormalizedAddress(
            company_name="ABC Foods", address_line1="100 Main St",
            city="Hollister", state="CA", postal_code="95023",
        ))
        assert resolve_location(record, Location.PICKUP).full_address == (
            "ABC Foods, 100 Main St, Hollister, CA, 95023"
        )

    def test_resolve_locations_returns_both(self):
        locations = resolve_locations(ExtractedRecord(origin="Chicago, IL", destination="Dallas, TX"))
        assert locations[Location.PICKUP].city == "Chicago"
        assert locations[Location.DELIVERY].city == "Dallas"


class TestHelpers:
    def test_join_city_state_skips_blanks(self):
        assert join_city_state("Chicago", "IL") == "Chicago, IL"
        assert join_city_state("Chicago", "") == "Chicago"
        assert join_city_state("", "") == ""

    def test_build_full_address_without_address(self):
        assert build_full_address(None, "Chicago", "IL") == "Chicago, IL"
