from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from ratecon.core.extraction_schema import StopEvent


def _to_form_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


FormText = Annotated[str, BeforeValidator(_to_form_text)]


class FormState(BaseModel):
    """Snapshot of the in-progress load form.

    Values are the raw form inputs (strings, "" when blank); type coercion is
    left to the persistence layer. Snapshots are immutable: the merge engine
    returns a new instance via `model_copy(update=...)`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # --- Basic ---
    reference: FormText = ""
    status: FormText = "AVAILABLE"

    # --- Lane text (full single-line addresses) ---
    origin: FormText = ""
    destination: FormText = ""

    # --- Locations & schedule ---
    origin_city: FormText = ""
    origin_state: FormText = ""
    destination_city: FormText = ""
    destination_state: FormText = ""
    pickup_date: FormText = ""
    pickup_time: FormText = ""
    delivery_date: FormText = ""
    delivery_time: FormText = ""

    # --- Companies & contacts ---
    shipper_company: FormText = ""
    broker_customer: FormText = ""
    shipper_contact: FormText = ""
    shipper_phone: FormText = ""
    shipper_email: FormText = ""
    receiver_contact: FormText = ""
    receiver_phone: FormText = ""
    receiver_email: FormText = ""

    # --- Identifiers ---
    bol_number: FormText = ""
    pro_number: FormText = ""
    po_number: FormText = ""
    customer_reference: FormText = ""

    # --- Details ---
    commodity: FormText = ""
    equipment_type: FormText = ""
    weight_lbs: FormText = ""
    pieces: FormText = ""
    temperature: FormText = ""
    special_instructions: FormText = ""

    # --- Money & distance ---
    miles: FormText = ""
    rate: FormText = ""
    rate_per_mile: FormText = ""
    detention_charges: FormText = ""
    accessorial_charges: FormText = ""

    stops: list[StopEvent] = Field(default_factory=list)
