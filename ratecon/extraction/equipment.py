import re

from ratecon.core.extraction_schema import EquipmentType

# Checked in order; the first matching category wins ("REEFER VAN" is a reefer).
EQUIPMENT_PATTERNS: list[tuple[EquipmentType, re.Pattern]] = [
    (EquipmentType.REEFER, re.compile(r"\bREEFER\b|\bREFRIG|\bTEMP(ERATURE)? CONTROL")),
    (EquipmentType.FLATBED, re.compile(r"\bFLAT ?BED\b|\bFLAT\b")),
    (EquipmentType.STEP_DECK, re.compile(r"\bSTEP ?DECK\b|\bDROP ?DECK\b")),
    (EquipmentType.LOWBOY, re.compile(r"\bLOW ?BOY\b")),
    (EquipmentType.POWER_ONLY, re.compile(r"\bPOWER\b")),
    (EquipmentType.BOX_TRUCK, re.compile(r"\bBOX\b|\bSTRAIGHT TRUCK\b")),
    (EquipmentType.DRY_VAN, re.compile(r"\bDRY\b|\bVAN\b")),
    (EquipmentType.OTHER, re.compile(r"^OTHER$")),
]

EQUIPMENT_LABELS: dict[EquipmentType, str] = {
    EquipmentType.DRY_VAN: "Dry Van",
    EquipmentType.REEFER: "Reefer",
    EquipmentType.FLATBED: "Flatbed",
    EquipmentType.STEP_DECK: "Step Deck",
    EquipmentType.LOWBOY: "Lowboy",
    EquipmentType.POWER_ONLY: "Power Only",
    EquipmentType.BOX_TRUCK: "Box Truck",
    EquipmentType.OTHER: "Other",
}


def equipment_code(value: str | None) -> EquipmentType | None:
    """Match a code or free-text description against the known categories."""
    if not value:
        return None
    text = re.sub(r"[_\-]+", " ", str(value).upper()).strip()
    for code, pattern in EQUIPMENT_PATTERNS:
        if pattern.search(text):
            return code
    return None


def map_equipment(value: str | None) -> str:
    """Form label for an equipment code, or "" when it matches no category."""
    code = equipment_code(value)
    return EQUIPMENT_LABELS[code] if code else ""
