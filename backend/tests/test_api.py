"""
Integration tests for the HTTP surface.
"""

import io
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from caliber.config import settings
from caliber.main import app
from caliber.models import ExtractedFields, ExtractionOutcome, ExtractionStatus, MANUAL_ENTRY_MESSAGE
from caliber.ocr import OCROrchestrator, get_ocr_orchestrator
from caliber.storage import get_entry_store


ENTRY_JSON = {
    "date": "2026-01-31",
    "weight": 72.8,
    "bodyFatPercent": 22.4,
    "bodyFatMass": 16.3,
    "muscleMass": 31.8,
    "visceralFat": 7,
    "bmi": 22.4,
    "inbodyScore": 71,
    "waistHipRatio": None,
}


def _png() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), "white").save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def orchestrator():
    mock = MagicMock(spec=OCROrchestrator)
    mock.extract = AsyncMock(return_value=ExtractionOutcome(
        status=ExtractionStatus.SUCCESS,
        fields=ExtractedFields(weight=74.2, inbody_score=68),
        extracted=["weight", "inbody_score"],
        score=2,
        angle=90,
        text="Weight 74.2\nInBody Score 68",
        message="Extracted 2 values from image. Please review and fill in any missing fields.",
    ))
    return mock


@pytest.fixture
def client(store, orchestrator):
    app.dependency_overrides[get_entry_store] = lambda: store
    app.dependency_overrides[get_ocr_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestEntriesAPI:
    """Tests for /entries."""

    def test_list_empty(self, client):
        response = client.get("/entries")
        assert response.status_code == 200
        assert response.json() == []

    def test_save_entry(self, client):
        response = client.post("/entries", json=ENTRY_JSON)
        assert response.status_code == 200
        assert response.json() == [ENTRY_JSON]

    def test_save_replaces_same_date(self, client):
        client.post("/entries", json=ENTRY_JSON)
        response = client.post("/entries", json={**ENTRY_JSON, "weight": 72.1})
        data = response.json()
        assert len(data) == 1
        assert data[0]["weight"] == 72.1

    def test_save_orders_by_date(self, client):
        client.post("/entries", json=ENTRY_JSON)
        response = client.post("/entries", json={**ENTRY_JSON, "date": "2025-12-30"})
        assert [e["date"] for e in response.json()] == ["2025-12-30", "2026-01-31"]

    def test_save_rejects_invalid_entry(self, client):
        response = client.post("/entries", json={**ENTRY_JSON, "bodyFatPercent": 120})
        assert response.status_code == 422

    def test_save_rejects_missing_field(self, client):
        payload = {k: v for k, v in ENTRY_JSON.items() if k != "weight"}
        assert client.post("/entries", json=payload).status_code == 422

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_save_rejects_non_finite_numbers(self, client, value):
        body = json.dumps({**ENTRY_JSON, "weight": value})
        response = client.post(
            "/entries", content=body, headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 422
        assert client.get("/entries").json() == []
        assert client.get("/dashboard").status_code == 200

    def test_delete_entry(self, client):
        client.post("/entries", json=ENTRY_JSON)
        response = client.delete("/entries/2026-01-31")
        assert response.status_code == 200
        assert response.json() == []

    def test_delete_unknown_date(self, client):
        client.post("/entries", json=ENTRY_JSON)
        response = client.delete("/entries/2020-01-01")
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_delete_invalid_date(self, client):
        assert client.delete("/entries/not-a-date").status_code == 422


class TestDashboardAPI:
    """Tests for /dashboard and /charts."""

    def test_dashboard_empty(self, client):
        data = client.get("/dashboard").json()
        assert data["current"]["lastUpdated"] == "No data yet - add your first entry!"
        assert data["deltas"] is None
        assert data["progress"] is None
        assert data["history"] == []

    def test_dashboard_with_entries(self, client):
        client.post("/entries", json={**ENTRY_JSON, "date": "2025-12-30", "visceralFat": 8})
        client.post("/entries", json=ENTRY_JSON)
        data = client.get("/dashboard").json()
        vf = next(d for d in data["deltas"] if d["metric"] == "visceral_fat")
        assert vf["trend"] == "favorable"
        assert data["current"]["comparedTo"] == "from Dec"
        assert data["progress"]["fat"]["direction"] == "lost"

    def test_charts(self, client):
        client.post("/entries", json=ENTRY_JSON)
        data = client.get("/charts").json()
        weight = next(s for s in data if s["name"] == "Weight")
        assert weight["points"] == [{"label": "Jan 2026", "value": 72.8}]


class TestOCRAPI:
    """Tests for /ocr/extract."""

    def test_extract(self, client, orchestrator):
        response = client.post(
            "/ocr/extract",
            files=[("image", ("scan.png", _png(), "image/png"))],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["fields"] == {"weight": 74.2, "inbodyScore": 68}
        assert data["angle"] == 90
        orchestrator.extract.assert_awaited_once()

    def test_extraction_failure_is_not_an_http_error(self, client, orchestrator):
        orchestrator.extract.return_value = ExtractionOutcome(
            status=ExtractionStatus.ERROR, message=MANUAL_ENTRY_MESSAGE
        )
        response = client.post(
            "/ocr/extract",
            files=[("image", ("scan.png", _png(), "image/png"))],
        )
        assert response.status_code == 200
        assert response.json()["message"] == MANUAL_ENTRY_MESSAGE

    def test_rejects_non_image(self, client):
        response = client.post(
            "/ocr/extract",
            files=[("image", ("notes.txt", b"hello", "text/plain"))],
        )
        assert response.status_code == 400

    def test_rejects_empty_upload(self, client):
        response = client.post(
            "/ocr/extract",
            files=[("image", ("scan.png", b"", "image/png"))],
        )
        assert response.status_code == 400

    def test_rejects_oversized_upload(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_upload_bytes", 10)
        response = client.post(
            "/ocr/extract",
            files=[("image", ("scan.png", _png(), "image/png"))],
        )
        assert response.status_code == 413


class TestAppLifespan:
    """Tests for startup behaviour."""

    def test_startup_seeds_history(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "local_storage_path", str(tmp_path / "data"))
        monkeypatch.setattr(settings, "log_file_enabled", False)
        with TestClient(app) as client:
            response = client.get("/entries")
            assert [e["date"] for e in response.json()] == ["2025-11-16", "2025-12-30"]
            assert client.get("/health").json()["status"] == "healthy"
