import base64

from pydantic import BaseModel, ConfigDict, field_validator

PDF_MEDIA_TYPE = "application/pdf"

IMAGE_MEDIA_TYPES = (
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/gif",
)

ACCEPTED_MEDIA_TYPES = (PDF_MEDIA_TYPE, *IMAGE_MEDIA_TYPES)


class UploadedDocument(BaseModel):
    """A freight document as received from the upload control."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    media_type: str
    filename: str | None = None

    @field_validator("media_type")
    @classmethod
    def _check_media_type(cls, value: str) -> str:
        media_type = value.strip().lower()
        if media_type not in ACCEPTED_MEDIA_TYPES:
            raise ValueError(
                f"Unsupported media type '{value}'. Provide a PDF or an image "
                f"({', '.join(IMAGE_MEDIA_TYPES)})"
            )
        return media_type

    @property
    def is_pdf(self) -> bool:
        return self.media_type == PDF_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.content)


class RenderedPage(BaseModel):
    """One page image, 1-based `page_number` in source order."""

    page_number: int
    image: bytes
    media_type: str = "image/png"

    def data_url(self) -> str:
        encoded = base64.b64encode(self.image).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


class RenderedDocument:
    """Ordered page images of one render, released when the `with` block exits.

    Usage:
        with renderer.render(document) as pages:
            messages = build_extraction_messages(pages, pages.page_count, store)
        # buffers are gone here; `pages` is empty and closed
    """

    def __init__(self, pages: list[RenderedPage]):
        self._pages = list(pages)
        self._page_count = len(self._pages)
        self._closed = False

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self):
        if self._closed:
            raise ValueError("RenderedDocument has been released")
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def close(self) -> None:
        self._pages.clear()
        self._closed = True

    def __enter__(self) -> "RenderedDocument":
        if self._closed:
            raise ValueError("RenderedDocument has been released")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
