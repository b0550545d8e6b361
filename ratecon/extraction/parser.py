import json
import re

from ratecon.core.errors import ResponseParseError

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) fence, if any."""
    text = text.strip()
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def parse_response(raw: str) -> dict:
    """Parse the service output into one JSON object.

    Lenient about content: unknown keys are kept here and dropped by the
    validation stage; only the structure (a single object) is checked.
    """
    if not raw or not raw.strip():
        raise ResponseParseError("Extraction response is empty")

    text = strip_code_fences(raw)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Extraction response is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ResponseParseError(
            f"Extraction response must be a JSON object, got {type(payload).__name__}"
        )
    return payload
