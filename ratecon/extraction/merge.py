"""Field merge: extracted record + current form snapshot -> new form snapshot.

Override-if-present: a form field is replaced only when one of its candidates
yields a non-empty value; otherwise the current value is kept. Each field's
candidates are listed in `MERGE_RULES` in precedence order.
"""
import re
from collections.abc import Callable
from typing import Any

from ratecon.core.extraction_schema import ExtractedRecord, NormalizedAddress, StopEvent, StopType
from ratecon.core.form_state import FormState
from ratecon.extraction.address import Location, ResolvedLocation, resolve_locations
from ratecon.extraction.equipment import map_equipment

Locations = dict[Location, ResolvedLocation]
Candidate = Callable[[ExtractedRecord, Locations], Any]

_DATETIME = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ](\d{2}:\d{2}))?")


def _field(name: str) -> Candidate:
    return lambda record, locations: getattr(record, name)


def _address(which: str, attr: str) -> Candidate:
    return lambda record, locations: getattr(getattr(record, which) or NormalizedAddress(), attr)


def _location(location: Location, attr: str) -> Candidate:
    return lambda record, locations: getattr(locations[location], attr)


def _first_stop(stops: list[StopEvent], stop_type: StopType, last: bool = False) -> StopEvent | None:
    matching = [s for s in stops if s.type == stop_type]
    if not matching:
        return None
    return matching[-1] if last else matching[0]


def _pickup_stop(attr: str) -> Candidate:
    def candidate(record, locations):
        stop = _first_stop(record.stops, StopType.PICKUP)
        return getattr(stop, attr) if stop else None
    return candidate


def _delivery_stop(attr: str) -> Candidate:
    def candidate(record, locations):
        stop = _first_stop(record.stops, StopType.DELIVERY, last=True)
        return getattr(stop, attr) if stop else None
    return candidate


def _date_part(candidate: Candidate) -> Candidate:
    def part(record, locations):
        match = _DATETIME.match(candidate(record, locations) or "")
        return match.group(1) if match else None
    return part


def _time_part(candidate: Candidate) -> Candidate:
    def part(record, locations):
        match = _DATETIME.match(candidate(record, locations) or "")
        return match.group(2) if match else None
    return part


def _mapped(candidate: Candidate, transform: Callable[[str], str]) -> Candidate:
    def mapped(record, locations):
        value = candidate(record, locations)
        return transform(value) if value else None
    return mapped


MERGE_RULES: dict[str, list[Candidate]] = {
    # Identifiers
    "reference": [_field("reference_number"), _field("load_number"), _field("reference")],
    "bol_number": [_field("bol_number"), _field("bol")],
    "pro_number": [_field("pro_number"), _field("pro")],
    "po_number": [_field("po_number"), _field("purchase_order_number")],
    "customer_reference": [_field("customer_reference")],

    # Locations
    "origin": [_location(Location.PICKUP, "full_address")],
    "destination": [_location(Location.DELIVERY, "full_address")],
    "origin_city": [_location(Location.PICKUP, "city")],
    "origin_state": [_location(Location.PICKUP, "state")],
    "destination_city": [_location(Location.DELIVERY, "city")],
    "destination_state": [_location(Location.DELIVERY, "state")],

    # Schedule
    "pickup_date": [_field("pickup_date"), _date_part(_pickup_stop("scheduled_start"))],
    "pickup_time": [_field("pickup_time"), _time_part(_pickup_stop("scheduled_start"))],
    "delivery_date": [_field("delivery_date"), _date_part(_delivery_stop("scheduled_start"))],
    "delivery_time": [_field("delivery_time"), _time_part(_delivery_stop("scheduled_start"))],

    # Companies & contacts
    "shipper_company": [
        _field("shipper_company"), _field("shipper"),
        _address("pickup_address", "company_name"), _pickup_stop("company_name"),
    ],
    "broker_customer": [_field("broker_customer"), _field("broker_name"), _field("broker")],
    "shipper_contact": [_field("shipper_contact_name"), _pickup_stop("contact_name")],
    "shipper_phone": [_field("shipper_contact_phone"), _pickup_stop("contact_phone")],
    "shipper_email": [_field("shipper_contact_email")],
    "receiver_contact": [_field("receiver_contact_name"), _delivery_stop("contact_name")],
    "receiver_phone": [_field("receiver_contact_phone"), _delivery_stop("contact_phone")],
    "receiver_email": [_field("receiver_contact_email")],

    # Details
    "commodity": [_field("commodity")],
    "equipment_type": [_mapped(_field("equipment_type"), map_equipment)],
    "weight_lbs": [_field("weight_lbs"), _field("weight")],
    "pieces": [_field("pieces"), _field("pallets")],
    "temperature": [_field("temperature")],
    "special_instructions": [_field("special_instructions")],

    # Money & distance
    "miles": [_field("miles")],
    "rate": [_field("rate"), _field("total_rate"), _field("line_haul")],
    "rate_per_mile": [_field("rate_per_mile")],
    "detention_charges": [_field("detention_charges")],
    "accessorial_charges": [_field("accessorial_charges")],
}


def _present(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def first_present(candidates: list[Candidate], record: ExtractedRecord, locations: Locations) -> str | None:
    for candidate in candidates:
        value = _present(candidate(record, locations))
        if value is not None:
            return value
    return None


def merge_form_state(
    form: FormState,
    record: ExtractedRecord,
    locations: Locations | None = None,
) -> FormState:
    """Return a new FormState with every present extracted value applied.

    Neither `form` nor `record` is modified.
    """
    if locations is None:
        locations = resolve_locations(record)

    updates: dict[str, Any] = {}
    for target, candidates in MERGE_RULES.items():
        value = first_present(candidates, record, locations)
        if value is not None:
            updates[target] = value

    if record.stops:
        updates["stops"] = [stop.model_copy() for stop in record.stops]

    return form.model_copy(update=updates)
