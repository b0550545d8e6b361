import re

from pydantic import ValidationError as PydanticValidationError

from ratecon.core.errors import ValidationError
from ratecon.core.extraction_schema import ExtractedRecord, NormalizedAddress, StopEvent
from ratecon.extraction.equipment import equipment_code

_STATE_CODE = re.compile(r"[A-Z]{2}")


def validate_record(payload: dict) -> tuple[ExtractedRecord, list[str]]:
    """Type-check the parsed payload and apply the enum and ordering policies.

    Returns the typed record plus human-readable warnings for values that were
    dropped or reordered. Shape errors raise ValidationError.
    """
    try:
        record = ExtractedRecord.model_validate(payload)
    except PydanticValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise ValidationError(
            f"Extraction response does not match the schema ({len(errors)} error(s))",
            errors=errors,
        ) from e

    warnings: list[str] = []
    update: dict = {}

    if record.equipment_type:
        code = equipment_code(record.equipment_type)
        if code is None:
            warnings.append(f"Dropped unknown equipment_type '{record.equipment_type}'")
        update["equipment_type"] = code.value if code else None

    for field in ("origin_state", "destination_state"):
        value = getattr(record, field)
        if value:
            update[field] = _state_code(value, field, warnings)

    for field in ("pickup_address", "delivery_address"):
        address = getattr(record, field)
        if address is not None:
            update[field] = _clean_address(address, field, warnings)

    if record.stops:
        update["stops"] = _order_stops(record.stops, warnings)

    return record.model_copy(update=update), warnings


def _state_code(value: str, where: str, warnings: list[str]) -> str | None:
    code = value.replace(".", "").strip().upper()
    if _STATE_CODE.fullmatch(code):
        return code
    warnings.append(f"Dropped {where} '{value}': not a 2-letter state code")
    return None


def _clean_address(address: NormalizedAddress, where: str, warnings: list[str]):
    if not address.state:
        return address
    return address.model_copy(update={"state": _state_code(address.state, f"{where}.state", warnings)})


def _order_stops(stops: list[StopEvent], warnings: list[str]) -> list[StopEvent]:
    """Sort stops by declared sequence (position when missing) and renumber 1..n."""
    keyed = [
        (stop.sequence if stop.sequence is not None else position, position, stop)
        for position, stop in enumerate(stops, start=1)
    ]
    keyed.sort(key=lambda item: (item[0], item[1]))

    ordered = []
    for number, (_, _, stop) in enumerate(keyed, start=1):
        stop = _clean_address(stop, f"stops[{number}]", warnings)
        ordered.append(stop.model_copy(update={"sequence": number}))

    declared = [stop.sequence for stop in stops]
    if declared != list(range(1, len(stops) + 1)):
        warnings.append(f"Renumbered stops from sequence {declared} to 1..{len(stops)}")
    return ordered
