import base64
import binascii
import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ratecon.builder import PipelineBuilder
from ratecon.config import AppConfig
from ratecon.core.document import UploadedDocument
from ratecon.core.form_state import FormState

logger = logging.getLogger("ratecon.api")


class DocumentPayload(BaseModel):
    media_type: str
    content_base64: str
    filename: str | None = None


class ExtractRequest(BaseModel):
    document: DocumentPayload
    form_state: FormState | None = None


def _decode(payload: DocumentPayload, max_bytes: int) -> UploadedDocument:
    """Decode the base64 body into an UploadedDocument. Raises HTTPException on bad input."""
    try:
        content = base64.b64decode(payload.content_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"content_base64 is not valid base64: {e}")

    if len(content) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Document is {len(content)} bytes; the limit is {max_bytes} bytes",
        )

    try:
        return UploadedDocument(
            content=content,
            media_type=payload.media_type,
            filename=payload.filename,
        )
    except PydanticValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Factory function for creating the FastAPI app with config.

    Serve with: uvicorn ratecon.api:create_app --factory
    """
    if config is None:
        config = AppConfig.from_yaml("config.yaml")

    builder = PipelineBuilder(config)
    load_store = builder.load_store
    max_bytes = config.max_upload_bytes

    app = FastAPI(title="Rate Confirmation Extraction")

    @app.post("/extract")
    def extract(request: ExtractRequest):
        """Run one upload through the pipeline. Blocking (render + LLM can take 30s+)."""
        document = _decode(request.document, max_bytes)
        form_state = request.form_state or FormState()

        logger.info(f"Extract request: filename={document.filename}, media_type={document.media_type}")
        # One pipeline per request: each request is its own upload control.
        result = builder.pipeline().run(document, form_state)

        body = result.model_dump(mode="json")
        if not result.succeeded:
            logger.warning(f"Extract failed: stage={result.stage}, kind={result.error_kind}")
            return JSONResponse(status_code=422, content=body)
        return body

    @app.post("/loads", status_code=201)
    def create_load(form_state: FormState):
        try:
            record = load_store.save(form_state)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        logger.info(f"Load saved: id={record['id']}, reference={record.get('reference')}")
        return record

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
