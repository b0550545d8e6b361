import logging
import threading
from enum import Enum

import opik
from pydantic import BaseModel, Field

from ratecon.core.document import UploadedDocument
from ratecon.core.errors import PipelineBusyError
from ratecon.core.form_state import FormState

logger = logging.getLogger("ratecon.pipeline")

USER_ERROR_MESSAGE = "Could not parse document. You can still enter fields manually."
USER_SUCCESS_MESSAGE = "Rate confirmation parsed. Fields auto-filled where possible."


class PipelineStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class PipelineResult(BaseModel):
    """Outcome of one run. On failure `form_state` is the caller's snapshot, untouched."""

    status: PipelineStatus
    form_state: FormState
    message: str
    stage: str | None = None
    error_kind: str | None = None
    error_detail: str | None = None
    warnings: list[str] = Field(default_factory=list)
    page_count: int = 0
    trajectory: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == PipelineStatus.SUCCEEDED


class ExtractionPipeline:
    """Runs one upload at a time through the compiled extraction graph.

    The status moves idle → processing → succeeded | failed on every run.
    Submitting while a run is in flight raises PipelineBusyError; callers
    serialize uploads.
    """

    def __init__(self, graph):
        self._graph = graph
        self._status = PipelineStatus.IDLE
        self._lock = threading.Lock()

    @property
    def status(self) -> PipelineStatus:
        return self._status

    @opik.track(name="rate_confirmation_pipeline")
    def run(self, document: UploadedDocument, form_state: FormState | None = None) -> PipelineResult:
        if not self._lock.acquire(blocking=False):
            raise PipelineBusyError("An extraction is already in progress for this upload")

        try:
            self._status = PipelineStatus.PROCESSING
            form_state = form_state or FormState()
            logger.info(
                f"Extraction started: media_type={document.media_type}, "
                f"size={document.size}, filename={document.filename}"
            )

            try:
                final = self._graph.invoke({
                    "document": document,
                    "form_state": form_state,
                    "warnings": [],
                    "trajectory": [],
                })
            except Exception:
                self._status = PipelineStatus.FAILED
                logger.exception("Extraction graph crashed")
                raise

            result = self._to_result(final, form_state)
            self._status = result.status
            return result
        finally:
            self._lock.release()

    def _to_result(self, final: dict, form_state: FormState) -> PipelineResult:
        warnings = final.get("warnings", [])
        for warning in warnings:
            logger.warning(f"Extraction warning: {warning}")

        common = {
            "warnings": warnings,
            "page_count": final.get("page_count", 0),
            "trajectory": final.get("trajectory", []),
        }

        if final.get("final_status") != "succeeded":
            logger.error(
                f"Extraction failed at stage={final.get('error_stage')}: "
                f"{final.get('error_kind')}: {final.get('error_message')}"
            )
            return PipelineResult(
                status=PipelineStatus.FAILED,
                form_state=form_state,
                message=USER_ERROR_MESSAGE,
                stage=final.get("error_stage"),
                error_kind=final.get("error_kind"),
                error_detail=final.get("error_message"),
                **common,
            )

        logger.info(f"Extraction succeeded: pages={common['page_count']}, warnings={len(warnings)}")
        return PipelineResult(
            status=PipelineStatus.SUCCEEDED,
            form_state=final["merged_form_state"],
            message=USER_SUCCESS_MESSAGE,
            **common,
        )
