"""
Integration tests for the FastAPI application.

Runs the app in-process with TestClient; background generations execute on the
client's event loop, so tests poll the task status until the run finishes.
"""

import json
import time

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from synth_datagen.main import app

pytestmark = pytest.mark.integration

ID_AND_NAME = {
    "record_count": 3,
    "fields": [
        {"name": "ID", "type": "id", "config": {"start": 1, "step": 1}},
        {"name": "Name", "type": "enum", "config": {"values": ["A", "B"]}},
    ],
    "seed": 11,
}

INVALID = {"record_count": 0, "fields": []}


@pytest.fixture
def client():
    """Client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


def wait_for_task(client: TestClient, task_id: str, timeout: float = 10.0) -> dict:
    """Poll a task until it leaves the running state."""
    deadline = time.monotonic() + timeout
    while True:
        body = client.get(f"/api/tasks/{task_id}/status").json()
        if body["status"] != "running" or time.monotonic() > deadline:
            return body
        time.sleep(0.02)


def start_generation(client: TestClient, payload: dict) -> str:
    response = client.post("/api/generate", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["task_id"]


class TestCoreEndpoints:
    """Test health, version, metrics and the API root."""

    def test_health(self, client):
        """Health reports configuration and file system checks."""
        body = client.get("/health").json()

        assert body["status"] in ("healthy", "degraded")
        assert set(body["checks"]) == {"configuration", "file_system"}

    def test_version(self, client):
        """Version reports the package version."""
        assert client.get("/version").json()["version"] == "1.0.0"

    def test_metrics(self, client):
        """Prometheus metrics are exposed."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "datagen_runs_active" in response.text

    def test_root(self, client):
        """The API root links to the docs."""
        assert client.get("/api").json()["docs_url"] == "/docs"


class TestCatalogEndpoints:
    """Test field type and preset listings."""

    def test_field_types(self, client):
        """Every catalog type is listed."""
        body = client.get("/api/field-types").json()

        assert body["count"] == len(body["field_types"]) == 19
        assert "email" in {entry["name"] for entry in body["field_types"]}

    def test_presets(self, client):
        """Presets are listed with their sizes."""
        body = client.get("/api/presets").json()

        assert "default" in {preset["name"] for preset in body["presets"]}

    def test_preset_detail(self, client):
        """A preset expands to a request, with an optional record count."""
        body = client.get("/api/presets/log", params={"rows": 25}).json()

        assert body["request"]["record_count"] == 25

    def test_unknown_preset(self, client):
        """Unknown presets are 404 with the available names."""
        response = client.get("/api/presets/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "PRESET_NOT_FOUND"
        assert "default" in response.json()["details"]["available"]


class TestValidationAndPreview:
    """Test validate and preview endpoints."""

    def test_validate_valid(self, client):
        """Valid requests report no violations."""
        assert client.post("/api/validate", json=ID_AND_NAME).json() == {
            "valid": True,
            "violations": [],
        }

    def test_validate_invalid(self, client):
        """Invalid requests list every violation."""
        body = client.post("/api/validate", json=INVALID).json()

        assert body["valid"] is False
        assert len(body["violations"]) >= 2

    def test_preview(self, client):
        """Preview returns sample lines and estimates."""
        body = client.post("/api/preview", json=ID_AND_NAME).json()

        assert body["header_line"] == "ID,Name"
        assert body["sample_size"] == 3
        assert body["lines"][0].startswith("1,")
        assert body["estimated_bytes"] > 0

    def test_preview_invalid(self, client):
        """Invalid previews are rejected with violations."""
        response = client.post("/api/preview", json=INVALID)

        assert response.status_code == 400
        assert response.json()["error"] == "GENERATION_REJECTED"
        assert len(response.json()["violations"]) >= 2

    def test_malformed_body(self, client):
        """Bodies that do not parse are 422."""
        response = client.post("/api/validate", json={"record_count": "lots"})

        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestGenerationFlow:
    """Test starting, tracking and downloading generations."""

    def test_generate_and_download(self, client):
        """A finished run is downloadable as delimited text."""
        task_id = start_generation(client, ID_AND_NAME)

        status = wait_for_task(client, task_id)
        assert status["status"] == "completed"
        assert status["progress"] == 1.0
        assert status["result"]["record_count"] == 3
        assert status["download_url"] == f"/api/generate/{task_id}/download"

        response = client.get(status["download_url"])
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "csv_data_3x2_" in response.headers["content-disposition"]
        lines = response.text.split("\n")
        assert lines[0] == "ID,Name"
        assert [line.split(",")[0] for line in lines[1:]] == ["1", "2", "3"]

    def test_download_with_bom(self, client):
        """bom=true prefixes the UTF-8 byte-order mark."""
        task_id = start_generation(client, ID_AND_NAME)
        wait_for_task(client, task_id)

        response = client.get(f"/api/generate/{task_id}/download", params={"bom": True})

        assert response.content.startswith(b"\xef\xbb\xbf")

    def test_batched_generation_reports_progress(self, client):
        """Batched runs finish with full record counts."""
        client.put(
            "/api/config",
            json={"engine": {"sync_threshold": 10, "min_batch_size": 5, "max_batch_size": 10}},
        )
        payload = {**ID_AND_NAME, "record_count": 60}

        response = client.post("/api/generate", json=payload)
        assert response.json()["strategy"] == "batched"

        status = wait_for_task(client, response.json()["task_id"])
        assert status["status"] == "completed"
        assert status["records_processed"] == 60
        assert status["records_total"] == 60
        assert status["sequence"] >= 2

    def test_generate_invalid(self, client):
        """Invalid generation requests are rejected before a task starts."""
        response = client.post("/api/generate", json=INVALID)

        assert response.status_code == 400
        assert client.get("/api/tasks/active").json()["count"] == 0

    def test_export_parquet(self, client, tmp_path):
        """Finished results can be exported to the output directory."""
        client.put("/api/config", json={"output": {"output_dir": str(tmp_path)}})
        task_id = start_generation(client, ID_AND_NAME)
        wait_for_task(client, task_id)

        response = client.post(f"/api/generate/{task_id}/export", json={"format": "parquet"})

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["record_count"] == 3
        assert pd.read_parquet(body["path"])["ID"].tolist() == ["1", "2", "3"]

    def test_export_bad_filename(self, client):
        """Export file names may not contain directories."""
        task_id = start_generation(client, ID_AND_NAME)
        wait_for_task(client, task_id)

        response = client.post(
            f"/api/generate/{task_id}/export", json={"filename": "../escape.csv"}
        )

        assert response.status_code == 422

    def test_unknown_task(self, client):
        """Unknown task ids are 404 for status, cancel and download."""
        assert client.get("/api/tasks/nope/status").status_code == 404
        assert client.post("/api/generate/nope/cancel").status_code == 404
        assert client.get("/api/generate/nope/download").status_code == 404

    def test_cancel_finished_task(self, client):
        """Finished tasks cannot be cancelled."""
        task_id = start_generation(client, ID_AND_NAME)
        wait_for_task(client, task_id)

        assert client.post(f"/api/generate/{task_id}/cancel").status_code == 409

    def test_rate_limit(self, client):
        """Generation requests beyond the configured limit are 429."""
        client.put("/api/config", json={"api": {"generate_rate_limit": 2}})

        for _ in range(2):
            start_generation(client, ID_AND_NAME)
        response = client.post("/api/generate", json=ID_AND_NAME)

        assert response.status_code == 429
        assert response.json()["error"] == "HTTP_429"


class TestTokenEndpoints:
    """Test token generation endpoints."""

    def test_tokens(self, client):
        """Tokens are returned inline."""
        body = client.post(
            "/api/tokens", json={"count": 5, "length": 4, "pool_types": ["numbers"]}
        ).json()

        assert body["count"] == 5
        assert all(len(token) == 4 and token.isdigit() for token in body["tokens"])

    def test_token_preview(self, client):
        """Token previews are numbered."""
        body = client.post("/api/tokens/preview", json={"count": 3, "types": ["english"]}).json()

        assert body["preview"][0].startswith("1. ")
        assert body["pool_info"] == "english: 52 chars"

    def test_invalid_tokens(self, client):
        """Invalid token requests are rejected with violations."""
        response = client.post("/api/tokens", json={"count": 0})

        assert response.status_code == 400

    def test_token_export_json(self, client):
        """Tokens export as a JSON document attachment."""
        response = client.post(
            "/api/tokens/export", params={"format": "json"}, json={"count": 2, "length": 3}
        )

        assert response.status_code == 200
        assert "textgen_data_2_len3_" in response.headers["content-disposition"]
        assert len(json.loads(response.text)["data"]) == 2

    def test_export_formats(self, client):
        """Supported formats are listed."""
        body = client.get("/api/export/formats").json()

        assert {entry["name"] for entry in body["results"]} == {"csv", "parquet"}


class TestConfigEndpoints:
    """Test configuration management."""

    def test_get_config(self, client):
        """The current configuration is returned."""
        assert client.get("/api/config").json()["engine"]["sync_threshold"] == 5000

    def test_update_and_reset(self, client):
        """Updates apply immediately and reset restores defaults."""
        client.put("/api/config", json={"engine": {"preview_rows": 2}})
        assert client.get("/api/config").json()["engine"]["preview_rows"] == 2

        client.post("/api/config/reset")
        assert client.get("/api/config").json()["engine"]["preview_rows"] == 10

    def test_validate_config(self, client):
        """Invalid configurations are 422."""
        assert client.post("/api/config/validate", json={}).json()["valid"] is True
        response = client.post(
            "/api/config/validate", json={"engine": {"min_batch_size": 10, "max_batch_size": 5}}
        )
        assert response.status_code == 422
