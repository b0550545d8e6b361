import re
from decimal import Decimal

from ratecon.core.extraction_schema import ExtractedRecord

NUMERIC_FIELDS = (
    "weight", "rate", "miles", "rate_per_mile", "detention_charges", "accessorial_charges",
    # synonyms the merge engine falls back to
    "weight_lbs", "total_rate", "line_haul", "pieces", "pallets",
)

_THOUSANDS = re.compile(r"(?<=\d)[,\s](?=\d{3}(?!\d))")
_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")
# A minus not preceded by a word character, so "20-22" stays a range.
_NEGATIVE = re.compile(r"(?<![\w.])-\s*[$€£]?\s*[\d.]")


def _as_text(value: str | int | float) -> str:
    if isinstance(value, float):
        # str(1e16) is "1e+16"; positional notation keeps every digit
        return format(Decimal(repr(value)), "f")
    return str(value)


def normalize_numeric(value: str | int | float | None) -> str | None:
    """Reduce a numeric-looking value to a plain decimal string.

    "$1,234.50" -> "1234.50", "45,000 lbs" -> "45000". Returns None when no
    number is present, more than one is (e.g. "1.234.50"), or the amount is
    negative ("-$150.00"), rather than guess.
    """
    if value is None:
        return None
    text = _THOUSANDS.sub("", _as_text(value))
    if _NEGATIVE.search(text):
        return None
    numbers = _NUMBER.findall(text)
    if len(numbers) != 1:
        return None
    return numbers[0]


def normalize_record(record: ExtractedRecord) -> ExtractedRecord:
    """Copy of `record` with every numeric field normalized."""
    return record.model_copy(update={
        field: normalize_numeric(getattr(record, field)) for field in NUMERIC_FIELDS
    })
