import io
import logging

import opik
from pdf2image import convert_from_bytes, pdfinfo_from_bytes
from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError, PDFPopplerTimeoutError, PDFSyntaxError
from PIL import Image, UnidentifiedImageError

from ratecon.core.document import IMAGE_MEDIA_TYPES, RenderedDocument, RenderedPage, UploadedDocument
from ratecon.core.errors import DocumentRenderError
from ratecon.services.renderer.base import DocumentRenderer

logger = logging.getLogger("ratecon.renderer")

NOMINAL_DPI = 72

_PDF_ERRORS = (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
    UnidentifiedImageError,
    OSError,
    ValueError,
)


class Pdf2ImageRenderer(DocumentRenderer):
    """Renders PDFs page by page via pdf2image/poppler; passes images through.

    PDF pages are rasterized at `scale` x 72 DPI, one page at a time, and the
    Pillow image is closed as soon as its PNG bytes are taken so that at most
    one page of raster data is alive at once.
    """

    def __init__(self, scale: float = 2.0, max_pages: int = 10, max_bytes: int = 20 * 1024 * 1024):
        if scale < 2.0:
            raise ValueError(f"Render scale must be at least 2.0, got {scale}")
        self._scale = scale
        self._max_pages = max_pages
        self._max_bytes = max_bytes

    @property
    def dpi(self) -> int:
        return int(NOMINAL_DPI * self._scale)

    @opik.track(name="render_document")
    def render(self, document: UploadedDocument) -> RenderedDocument:
        if document.size == 0:
            raise DocumentRenderError("Uploaded document is empty")
        if document.size > self._max_bytes:
            raise DocumentRenderError(
                f"Document is {document.size} bytes, limit is {self._max_bytes} bytes"
            )

        if document.is_pdf:
            pages = self._render_pdf(document.content)
        else:
            pages = [self._check_image(document)]

        logger.info(f"Rendered {len(pages)} page(s) from {document.media_type}")
        return RenderedDocument(pages)

    def _check_image(self, document: UploadedDocument) -> RenderedPage:
        try:
            with Image.open(io.BytesIO(document.content)) as img:
                detected = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise DocumentRenderError(f"Unreadable image: {e}") from e

        # The data URL carries the decoded format, not the declared upload type.
        media_type = Image.MIME.get(detected or "")
        if media_type not in IMAGE_MEDIA_TYPES:
            raise DocumentRenderError(f"Unsupported image format: {detected}")
        if media_type != document.media_type:
            logger.warning(f"Declared {document.media_type} but decoded {media_type}")
        return RenderedPage(page_number=1, image=document.content, media_type=media_type)

    def _render_pdf(self, pdf_bytes: bytes) -> list[RenderedPage]:
        try:
            info = pdfinfo_from_bytes(pdf_bytes)
            page_count = int(info.get("Pages", 0))
        except _PDF_ERRORS as e:
            raise DocumentRenderError(f"Unreadable PDF: {e}") from e

        if page_count < 1:
            raise DocumentRenderError("PDF has no pages")
        if page_count > self._max_pages:
            raise DocumentRenderError(f"PDF has {page_count} pages, limit is {self._max_pages}")

        pages = []
        for page_number in range(1, page_count + 1):
            pages.append(self._render_page(pdf_bytes, page_number))
            logger.debug(f"Rendered page {page_number}/{page_count}")
        return pages

    def _render_page(self, pdf_bytes: bytes, page_number: int) -> RenderedPage:
        try:
            images = convert_from_bytes(
                pdf_bytes,
                dpi=self.dpi,
                first_page=page_number,
                last_page=page_number,
            )
        except _PDF_ERRORS as e:
            raise DocumentRenderError(f"Failed to render page {page_number}: {e}") from e

        if len(images) != 1:
            raise DocumentRenderError(f"Failed to render page {page_number}: got {len(images)} images")

        img = images[0]
        try:
            buffer = io.BytesIO()
            img.save(buffer, format="PNG")
        finally:
            img.close()
        return RenderedPage(page_number=page_number, image=buffer.getvalue(), media_type="image/png")
