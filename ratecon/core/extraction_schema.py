"""Extraction schema: the contract shared by the prompt and the validator.

`SCHEMA_FIELDS` is the ordered field list the model is asked for; the
descriptions on `ExtractedRecord` are what the prompt shows for each field.
Any change here changes both the instruction text and response validation.
"""
import json
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

SCHEMA_VERSION = "2"


def _to_text(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        # positional, so 1e16 stays a run of digits
        return format(Decimal(repr(value)), "f")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple)) and all(
        item is None or isinstance(item, (str, int, float)) for item in value
    ):
        # models sometimes answer a text field with a list of lines
        parts = [_to_text(item) for item in value]
        return ", ".join(p for p in parts if p) or None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


Text = Annotated[str | None, BeforeValidator(_to_text)]


class EquipmentType(str, Enum):
    DRY_VAN = "DRY_VAN"
    REEFER = "REEFER"
    FLATBED = "FLATBED"
    STEP_DECK = "STEP_DECK"
    LOWBOY = "LOWBOY"
    POWER_ONLY = "POWER_ONLY"
    BOX_TRUCK = "BOX_TRUCK"
    OTHER = "OTHER"


class StopType(str, Enum):
    PICKUP = "PICKUP"
    DELIVERY = "DELIVERY"
    STOP = "STOP"


class NormalizedAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    company_name: Text = Field(None, description="facility or company name at this location")
    address_line1: Text = Field(None, description="street address")
    address_line2: Text = Field(None, description="suite, unit or dock, if any")
    city: Text = Field(None, description="city")
    state: Text = Field(None, description="2-letter state code")
    postal_code: Text = Field(None, description="ZIP / postal code")
    country: Text = Field(None, description="country code, e.g. US")


class StopEvent(NormalizedAddress):
    sequence: int | None = Field(None, description="stop order starting at 1")
    type: StopType | None = Field(None, description="one of: PICKUP, DELIVERY, STOP")
    scheduled_start: Text = Field(None, description="appointment start as YYYY-MM-DDTHH:MM")
    scheduled_end: Text = Field(None, description="appointment end as YYYY-MM-DDTHH:MM")
    contact_name: Text = Field(None, description="on-site contact person")
    contact_phone: Text = Field(None, description="on-site contact phone")
    reference_number: Text = Field(None, description="pickup/delivery number for this stop")
    notes: Text = Field(None, description="stop-specific instructions")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            compact = value.strip().upper().replace(" ", "").replace("_", "").replace("-", "")
            if not compact:
                return None
            aliases = {"PICKUP": "PICKUP", "PU": "PICKUP", "DELIVERY": "DELIVERY", "DROP": "DELIVERY", "STOP": "STOP"}
            return aliases.get(compact, value)
        return value


class ExtractedRecord(BaseModel):
    """Candidate load record parsed from the extraction service output.

    Every field is optional. Besides the schema fields, the record keeps the
    synonym keys the merge engine consults (the model does not always use the
    exact requested names). Anything else is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    # --- Schema fields (prompted) ---
    reference: Text = Field(None, description="load number or confirmation number")
    shipper: Text = Field(None, description="shipper/pickup company name")
    origin: Text = Field(None, description="pickup location as City, ST format")
    destination: Text = Field(None, description="delivery location as City, ST format")
    broker_name: Text = Field(None, description="broker or customer company name")
    pickup_date: Text = Field(None, description="pickup date in YYYY-MM-DD format")
    pickup_time: Text = Field(None, description="pickup time in HH:MM 24-hour format")
    delivery_date: Text = Field(None, description="delivery date in YYYY-MM-DD format")
    delivery_time: Text = Field(None, description="delivery time in HH:MM 24-hour format")
    shipper_contact_name: Text = Field(None, description="shipper contact person")
    shipper_contact_phone: Text = Field(None, description="shipper phone number")
    shipper_contact_email: Text = Field(None, description="shipper email")
    receiver_contact_name: Text = Field(None, description="consignee/receiver contact person")
    receiver_contact_phone: Text = Field(None, description="receiver phone number")
    receiver_contact_email: Text = Field(None, description="receiver email")
    bol_number: Text = Field(None, description="BOL number if present")
    po_number: Text = Field(None, description="PO number if present")
    customer_reference: Text = Field(None, description="any other reference number")
    commodity: Text = Field(None, description="description of freight/cargo")
    weight: Text = Field(None, description="weight in pounds as number only")
    pieces: Text = Field(None, description="number of pallets/pieces as number only")
    equipment_type: Text = Field(
        None,
        description="must be exactly one of: " + ", ".join(e.value for e in EquipmentType),
    )
    temperature: Text = Field(None, description="temperature requirement for reefer loads")
    special_instructions: Text = Field(None, description="special requirements, handling instructions, or notes")
    miles: Text = Field(None, description="distance in miles as number only")
    rate: Text = Field(None, description="total rate/pay amount as number only (no $ symbol)")
    rate_per_mile: Text = Field(None, description="rate per mile as number only")
    detention_charges: Text = Field(None, description="detention charges as number only")
    accessorial_charges: Text = Field(None, description="other accessorial charges as number only")
    pickup_address_full: Text = Field(
        None, description="full single-line pickup address: company, street, City, ST ZIP"
    )
    delivery_address_full: Text = Field(
        None, description="full single-line delivery address: company, street, City, ST ZIP"
    )
    pickup_address: NormalizedAddress | None = Field(None, description="structured pickup facility address")
    delivery_address: NormalizedAddress | None = Field(None, description="structured delivery facility address")
    stops: list[StopEvent] = Field(default_factory=list, description="every pickup, delivery and intermediate stop in route order")

    # --- Synonyms (not prompted) ---
    reference_number: Text = None
    load_number: Text = None
    bol: Text = None
    pro_number: Text = None
    pro: Text = None
    purchase_order_number: Text = None
    shipper_company: Text = None
    broker: Text = None
    broker_customer: Text = None
    origin_city: Text = None
    origin_state: Text = None
    destination_city: Text = None
    destination_state: Text = None
    weight_lbs: Text = None
    pallets: Text = None
    total_rate: Text = None
    line_haul: Text = None

    @field_validator("stops", mode="before")
    @classmethod
    def _null_stops(cls, value: Any) -> Any:
        return [] if value is None else value


SCHEMA_FIELDS: tuple[str, ...] = (
    "reference", "shipper", "origin", "destination", "broker_name",
    "pickup_date", "pickup_time", "delivery_date", "delivery_time",
    "shipper_contact_name", "shipper_contact_phone", "shipper_contact_email",
    "receiver_contact_name", "receiver_contact_phone", "receiver_contact_email",
    "bol_number", "po_number", "customer_reference", "commodity", "weight",
    "pieces", "equipment_type", "temperature", "special_instructions", "miles",
    "rate", "rate_per_mile", "detention_charges", "accessorial_charges",
    "pickup_address_full", "delivery_address_full",
    "pickup_address", "delivery_address", "stops",
)

ADDRESS_FIELDS: tuple[str, ...] = tuple(NormalizedAddress.model_fields)

STOP_FIELDS: tuple[str, ...] = (
    "sequence", "type", *ADDRESS_FIELDS,
    "scheduled_start", "scheduled_end", "contact_name", "contact_phone",
    "reference_number", "notes",
)


def _describe(model: type[BaseModel], fields: tuple[str, ...]) -> dict:
    return {name: model.model_fields[name].description for name in fields}


def schema_field_guide() -> str:
    """Render the schema as the JSON skeleton shown to the model."""
    guide = {}
    for name in SCHEMA_FIELDS:
        if name in ("pickup_address", "delivery_address"):
            guide[name] = _describe(NormalizedAddress, ADDRESS_FIELDS)
        elif name == "stops":
            guide[name] = [_describe(StopEvent, STOP_FIELDS)]
        else:
            guide[name] = ExtractedRecord.model_fields[name].description
    return json.dumps(guide, indent=2)
