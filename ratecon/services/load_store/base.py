import math
from abc import ABC, abstractmethod

from ratecon.core.form_state import FormState
from ratecon.extraction.address import join_city_state


def _text(value: str) -> str | None:
    value = (value or "").strip()
    return value or None


def _number(value: str) -> float | int | None:
    value = (value or "").strip()
    if not value:
        return None
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Not a finite number: {value!r}")
    return int(number) if number.is_integer() else number


def _lane(city: str, state: str) -> str | None:
    city, state = (city or "").strip(), (state or "").strip()
    return join_city_state(city, state) if city and state else None


def to_load_record(form: FormState) -> dict:
    """Map a form snapshot to the loads-table payload.

    Lane text falls back to "City, ST" when the form has no full address and
    both parts are known; otherwise it is None.
    Raises ValueError if a numeric field holds something that is not a number.
    """
    origin = _text(form.origin) or _lane(form.origin_city, form.origin_state)
    destination = _text(form.destination) or _lane(form.destination_city, form.destination_state)

    return {
        "status": _text(form.status) or "AVAILABLE",
        "reference": _text(form.reference),
        "origin": origin,
        "destination": destination,
        "origin_city": _text(form.origin_city),
        "origin_state": _text(form.origin_state),
        "dest_city": _text(form.destination_city),
        "dest_state": _text(form.destination_state),
        "pickup_date": _text(form.pickup_date),
        "pickup_time": _text(form.pickup_time),
        "delivery_date": _text(form.delivery_date),
        "delivery_time": _text(form.delivery_time),
        "shipper": _text(form.shipper_company),
        "broker": _text(form.broker_customer),
        "shipper_contact_name": _text(form.shipper_contact),
        "shipper_contact_phone": _text(form.shipper_phone),
        "shipper_contact_email": _text(form.shipper_email),
        "receiver_contact_name": _text(form.receiver_contact),
        "receiver_contact_phone": _text(form.receiver_phone),
        "receiver_contact_email": _text(form.receiver_email),
        "bol_number": _text(form.bol_number),
        "pro_number": _text(form.pro_number),
        "po_number": _text(form.po_number),
        "customer_reference": _text(form.customer_reference),
        "commodity": _text(form.commodity),
        "equipment_type": _text(form.equipment_type),
        "weight": _number(form.weight_lbs),
        "pieces": _number(form.pieces),
        "temperature": _text(form.temperature),
        "special_instructions": _text(form.special_instructions),
        "miles": _number(form.miles),
        "rate": _number(form.rate),
        "rate_per_mile": _number(form.rate_per_mile),
        "detention_charges": _number(form.detention_charges),
        "accessorial_charges": _number(form.accessorial_charges),
        "stops": [stop.model_dump(mode="json") for stop in form.stops],
    }


class LoadStore(ABC):
    @abstractmethod
    def save(self, form: FormState) -> dict:
        """Persist a load built from the form. Returns the stored record with its id."""
        ...

    @abstractmethod
    def get(self, load_id: str) -> dict | None:
        """Fetch a stored load record by id, or None."""
        ...
