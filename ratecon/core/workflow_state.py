from typing import TypedDict

from ratecon.core.document import RenderedDocument, UploadedDocument
from ratecon.core.extraction_schema import ExtractedRecord
from ratecon.core.form_state import FormState


class PipelineState(TypedDict, total=False):
    # --- Input ---
    document: UploadedDocument
    form_state: FormState                # caller's snapshot, never mutated

    # --- Render ---
    rendered: RenderedDocument | None    # released by the request node
    page_count: int

    # --- Request / parse ---
    raw_response: str
    payload: dict | None                 # parsed JSON object, unvalidated

    # --- Validate / normalize / resolve ---
    record: ExtractedRecord | None
    locations: dict | None               # "pickup" / "delivery" -> ResolvedLocation
    warnings: list[str]

    # --- Merge ---
    merged_form_state: FormState | None

    # --- Bookkeeping ---
    trajectory: list[str]                # node names visited
    error_stage: str | None
    error_kind: str | None
    error_message: str | None

    # --- Final ---
    final_status: str                    # "succeeded" | "failed"
