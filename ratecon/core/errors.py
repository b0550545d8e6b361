class PipelineError(Exception):
    """Base class for failures inside the extraction pipeline.

    `stage` names the pipeline step that raised, so the caller can report
    where a run stopped without inspecting the exception type.
    """

    stage: str = "pipeline"

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage


class DocumentRenderError(PipelineError):
    """The uploaded document could not be decoded or rendered to page images."""
    stage = "render"


class ExtractionServiceError(PipelineError):
    """The extraction service returned a non-success status or no usable content."""
    stage = "request"

    def __init__(self, message: str, transient: bool = False, status_code: int | None = None):
        super().__init__(message)
        self.transient = transient
        self.status_code = status_code


class ResponseParseError(PipelineError):
    """The service output could not be parsed as a single JSON object."""
    stage = "parse"


class ValidationError(PipelineError):
    """The parsed output does not conform to the extraction schema."""
    stage = "validate"

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class PipelineBusyError(RuntimeError):
    """A run was submitted while another run on the same pipeline was in flight."""
