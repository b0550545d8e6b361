"""Integration tests for the FastAPI endpoints."""
import base64
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from ratecon.api import create_app
from ratecon.config import AppConfig
from ratecon.core.form_state import FormState
from ratecon.pipeline import USER_ERROR_MESSAGE, PipelineResult, PipelineStatus
from ratecon.services.load_store.memory import InMemoryLoadStore


def _document(content: bytes = b"%PDF-1.4 fake", media_type: str = "application/pdf") -> dict:
    return {
        "media_type": media_type,
        "content_base64": base64.b64encode(content).decode(),
        "filename": "ratecon.pdf",
    }


@pytest.fixture
def load_store():
    return InMemoryLoadStore()


@pytest.fixture
def mock_pipeline():
    pipeline = MagicMock()
    pipeline.run.return_value = PipelineResult(
        status=PipelineStatus.SUCCEEDED,
        form_state=FormState(reference="L-1", origin_city="Chicago"),
        message="ok",
        page_count=1,
        trajectory=["render", "report"],
    )
    return pipeline


@pytest.fixture
def client(mock_pipeline, load_store):
    with patch("ratecon.api.PipelineBuilder") as mock_builder_cls:
        mock_builder = MagicMock()
        mock_builder_cls.return_value = mock_builder
        mock_builder.pipeline.return_value = mock_pipeline
        mock_builder.load_store = load_store
        app = create_app(AppConfig(max_upload_mb=1, _env_file=None))
    return TestClient(app)


class TestHealthEndpoint:
    def test_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestExtractEndpoint:
    def test_success_returns_merged_form(self, client, mock_pipeline):
        response = client.post("/extract", json={"document": _document(), "form_state": {"commodity": "Paper"}})
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "succeeded"
        assert body["form_state"]["reference"] == "L-1"

        document, form_state = mock_pipeline.run.call_args[0]
        assert document.content == b"%PDF-1.4 fake"
        assert document.media_type == "application/pdf"
        assert form_state.commodity == "Paper"

    def test_missing_form_state_defaults_to_blank(self, client, mock_pipeline):
        client.post("/extract", json={"document": _document()})
        _, form_state = mock_pipeline.run.call_args[0]
        assert form_state == FormState()

    def test_failure_returns_422_with_unchanged_form(self, client, mock_pipeline):
        form = FormState(reference="USER-TYPED")
        mock_pipeline.run.return_value = PipelineResult(
            status=PipelineStatus.FAILED,
            form_state=form,
            message=USER_ERROR_MESSAGE,
            stage="parse",
            error_kind="ResponseParseError",
        )
        response = client.post("/extract", json={"document": _document(), "form_state": {"reference": "USER-TYPED"}})
        assert response.status_code == 422
        body = response.json()
        assert body["message"] == USER_ERROR_MESSAGE
        assert body["stage"] == "parse"
        assert body["form_state"]["reference"] == "USER-TYPED"

    def test_oversize_returns_413(self, client, mock_pipeline):
        response = client.post("/extract", json={"document": _document(b"x" * (1024 * 1024 + 1))})
        assert response.status_code == 413
        mock_pipeline.run.assert_not_called()

    def test_unsupported_media_type_returns_422(self, client, mock_pipeline):
        response = client.post("/extract", json={"document": _document(media_type="text/plain")})
        assert response.status_code == 422
        mock_pipeline.run.assert_not_called()

    def test_bad_base64_returns_422(self, client):
        response = client.post("/extract", json={"document": {"media_type": "application/pdf", "content_base64": "***"}})
        assert response.status_code == 422

    def test_missing_document_returns_422(self, client):
        assert client.post("/extract", json={}).status_code == 422


class TestLoadsEndpoint:
    def test_saves_load(self, client, load_store):
        response = client.post("/loads", json={
            "reference": "L-1",
            "origin_city": "Chicago",
            "origin_state": "IL",
            "destination_city": "Dallas",
            "destination_state": "TX",
            "rate": "2450.00",
            "weight_lbs": "42000",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["origin"] == "Chicago, IL"
        assert body["dest_city"] == "Dallas"
        assert body["rate"] == 2450
        assert body["weight"] == 42000
        assert load_store.get(body["id"])["reference"] == "L-1"

    def test_non_numeric_rate_returns_422(self, client, load_store):
        response = client.post("/loads", json={"reference": "L-1", "rate": "call for rate"})
        assert response.status_code == 422
        assert load_store.records == []

    @pytest.mark.parametrize("value", ["nan", "inf", "1e999"])
    def test_non_finite_number_returns_422(self, client, load_store, value):
        response = client.post("/loads", json={"reference": "L-1", "weight_lbs": value})
        assert response.status_code == 422
        assert load_store.records == []
