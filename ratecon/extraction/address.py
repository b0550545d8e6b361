"""City/state resolution for the pickup and delivery locations.

Each component (city, state) takes the first non-empty value from an ordered
list of candidate extractors; nothing is ever made up. The lists live in
`LOCATION_SOURCES` so the policy can be read and tested on its own.
"""
import re
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

from ratecon.core.extraction_schema import ExtractedRecord, NormalizedAddress


class Location(str, Enum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class CityState(BaseModel):
    city: str = ""
    state: str = ""


class ResolvedLocation(CityState):
    full_address: str = ""


class LocationSources(BaseModel):
    """Record fields that describe one location."""
    explicit_city: str
    explicit_state: str
    address: str
    freeform: str
    full: str


LOCATION_SOURCES: dict[Location, LocationSources] = {
    Location.PICKUP: LocationSources(
        explicit_city="origin_city",
        explicit_state="origin_state",
        address="pickup_address",
        freeform="origin",
        full="pickup_address_full",
    ),
    Location.DELIVERY: LocationSources(
        explicit_city="destination_city",
        explicit_state="destination_state",
        address="delivery_address",
        freeform="destination",
        full="delivery_address_full",
    ),
}

_STATE_TOKEN = re.compile(r"\b[A-Z]{2}\b")
_COUNTRY_SEGMENTS = {"US", "USA", "U.S.", "U.S.A.", "UNITED STATES", "UNITED STATES OF AMERICA"}


def parse_city_state(value: str | None) -> CityState:
    """Parse "City, ST" -> (City, ST). State is the first two letters of segment two."""
    if not value:
        return CityState()
    parts = [p.strip() for p in str(value).split(",") if p.strip()]
    city = parts[0] if parts else ""
    state = parts[1][:2].upper() if len(parts) > 1 else ""
    return CityState(city=city, state=state)


def parse_full_address(value: str | None) -> CityState:
    """Last-resort parse of "Company, Street, City, ST 12345".

    The second-to-last comma segment is the city; the state is the first
    2-letter uppercase token of the last segment. A trailing country segment
    is ignored.
    """
    if not value:
        return CityState()
    parts = [p.strip() for p in str(value).split(",") if p.strip()]
    if parts and parts[-1].upper() in _COUNTRY_SEGMENTS:
        parts = parts[:-1]
    if len(parts) < 2:
        return CityState()
    match = _STATE_TOKEN.search(parts[-1])
    return CityState(city=parts[-2], state=match.group(0) if match else "")


Extractor = Callable[[ExtractedRecord], CityState]


def _address_of(record: ExtractedRecord, sources: LocationSources) -> NormalizedAddress:
    return getattr(record, sources.address) or NormalizedAddress()


def candidate_extractors(location: Location) -> list[Extractor]:
    """Ordered candidates for one location; earlier entries win."""
    sources = LOCATION_SOURCES[location]
    return [
        lambda r: CityState(
            city=getattr(r, sources.explicit_city) or "",
            state=getattr(r, sources.explicit_state) or "",
        ),
        lambda r: CityState(
            city=_address_of(r, sources).city or "",
            state=_address_of(r, sources).state or "",
        ),
        lambda r: parse_city_state(getattr(r, sources.freeform)),
        lambda r: parse_full_address(getattr(r, sources.full)),
    ]


def resolve_city_state(record: ExtractedRecord, location: Location) -> CityState:
    city = state = ""
    for extract in candidate_extractors(location):
        candidate = extract(record)
        city = city or candidate.city.strip()
        state = state or candidate.state.strip()
        if city and state:
            break
    return CityState(city=city, state=state)


def join_city_state(city: str, state: str) -> str:
    return ", ".join(part for part in (city, state) if part)


def build_full_address(address: NormalizedAddress | None, city: str, state: str) -> str:
    """Single-line address from the structured parts, skipping empty ones."""
    address = address or NormalizedAddress()
    parts = [
        address.company_name,
        address.address_line1,
        address.address_line2,
        join_city_state(city, state),
        address.postal_code,
    ]
    return ", ".join(p for p in parts if p)


def resolve_location(record: ExtractedRecord, location: Location) -> ResolvedLocation:
    sources = LOCATION_SOURCES[location]
    city_state = resolve_city_state(record, location)
    full_address = getattr(record, sources.full) or build_full_address(
        getattr(record, sources.address), city_state.city, city_state.state
    )
    return ResolvedLocation(city=city_state.city, state=city_state.state, full_address=full_address)


def resolve_locations(record: ExtractedRecord) -> dict[Location, ResolvedLocation]:
    return {location: resolve_location(record, location) for location in Location}
