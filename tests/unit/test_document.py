"""Unit tests for document and form models."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from ratecon.core.document import RenderedDocument, RenderedPage, UploadedDocument
from ratecon.core.form_state import FormState


class TestUploadedDocument:
    def test_accepts_pdf(self):
        doc = UploadedDocument(content=b"%PDF", media_type="application/pdf")
        assert doc.is_pdf
        assert doc.size == 4

    def test_normalizes_media_type(self):
        doc = UploadedDocument(content=b"x", media_type=" Image/PNG ")
        assert doc.media_type == "image/png"
        assert not doc.is_pdf

    def test_rejects_unsupported_type(self):
        with pytest.raises(PydanticValidationError, match="Unsupported media type"):
            UploadedDocument(content=b"x", media_type="text/plain")

    def test_is_frozen(self):
        doc = UploadedDocument(content=b"x", media_type="image/png")
        with pytest.raises(PydanticValidationError):
            doc.content = b"y"


class TestRenderedDocument:
    def _doc(self):
        return RenderedDocument([
            RenderedPage(page_number=1, image=b"one"),
            RenderedPage(page_number=2, image=b"two"),
        ])

    def test_iterates_pages_in_order(self):
        with self._doc() as pages:
            assert [p.image for p in pages] == [b"one", b"two"]
            assert pages.page_count == 2

    def test_exit_releases_buffers(self):
        doc = self._doc()
        with doc:
            pass
        assert doc.closed
        assert len(doc) == 0
        assert doc.page_count == 2

    def test_read_after_release_raises(self):
        doc = self._doc()
        with doc:
            pass
        with pytest.raises(ValueError, match="released"):
            list(doc)

    def test_reenter_after_release_raises(self):
        doc = self._doc()
        doc.close()
        with pytest.raises(ValueError):
            with doc:
                pass

    def test_data_url(self):
        page = RenderedPage(page_number=1, image=b"abc", media_type="image/jpeg")
        assert page.data_url() == "data:image/jpeg;base64,YWJj"


class TestFormState:
    def test_defaults(self):
        form = FormState()
        assert form.status == "AVAILABLE"
        assert form.reference == ""
        assert form.stops == []

    def test_coerces_numbers_and_none(self):
        form = FormState(rate=2450, miles=None)
        assert form.rate == "2450"
        assert form.miles == ""

    def test_ignores_unknown_keys(self):
        form = FormState.model_validate({"reference": "L-1", "driver": "Sam"})
        assert form.reference == "L-1"
        assert "driver" not in form.model_dump()

    def test_is_frozen(self):
        with pytest.raises(PydanticValidationError):
            FormState().reference = "L-1"
