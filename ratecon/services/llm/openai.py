import logging

import opik
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    InternalServerError,
    OpenAI,
    OpenAIError,
    RateLimitError,
)

from ratecon.core.errors import ExtractionServiceError
from ratecon.services.llm.base import VisionLLMService

logger = logging.getLogger("ratecon.llm")

TRANSIENT_ERRORS = (APITimeoutError, APIConnectionError, RateLimitError, InternalServerError)


class OpenAIVisionLLM(VisionLLMService):
    """OpenAI-compatible chat completions with image inputs.

    The SDK's built-in retries are disabled; transient failures (timeouts,
    connection errors, 429, 5xx) are retried here at most `max_retries` times.
    Everything else fails on the first attempt.
    """

    def __init__(
        self,
        model: str = "gpt-4o",
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = 60.0,
        max_retries: int = 1,
        max_tokens: int = 2500,
        temperature: float = 0.1,
    ):
        self._model = model
        self._max_retries = max_retries
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._client = OpenAI(base_url=base_url, api_key=api_key, timeout=timeout, max_retries=0)

    @opik.track(name="llm_generate_text")
    def generate_text(self, messages: list[dict]) -> str:
        attempts = self._max_retries + 1
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._complete(messages)
            except TRANSIENT_ERRORS as e:
                if attempt < attempts:
                    logger.warning(f"Transient extraction service error (attempt {attempt}/{attempts}): {e}")
                    continue
                raise ExtractionServiceError(
                    f"Extraction service unavailable: {_error_message(e)}",
                    transient=True,
                    status_code=getattr(e, "status_code", None),
                ) from e
            except APIStatusError as e:
                raise ExtractionServiceError(
                    f"Extraction service error: {_error_message(e)}",
                    status_code=e.status_code,
                ) from e
            except OpenAIError as e:
                raise ExtractionServiceError(f"Extraction service error: {e}") from e

    def _complete(self, messages: list[dict]) -> str:
        completion = self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        if not completion.choices:
            raise ExtractionServiceError("Extraction service returned no choices")
        content = completion.choices[0].message.content
        if not content or not content.strip():
            raise ExtractionServiceError("Extraction service returned empty content")
        return content


def _error_message(error: OpenAIError) -> str:
    """Prefer the service's own message from the error body when present."""
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        nested = body.get("error")
        if isinstance(nested, dict) and nested.get("message"):
            return nested["message"]
        if body.get("message"):
            return body["message"]
    return getattr(error, "message", None) or str(error)
