"""Tests for the HTTP API."""

from __future__ import annotations

import importlib
import warnings

import pytest
from fastapi.testclient import TestClient

from server.main import app
from server.routers import convert


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    """Tests for the liveness endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestParseEndpoint:
    """Tests for POST /api/parse."""

    def test_returns_tree(self, client: TestClient, base_packet: str) -> None:
        response = client.post("/api/parse", json={"text": base_packet})

        assert response.status_code == 200
        body = response.json()
        assert body["node_count"] == 8
        assert body["tree"]["key"] == "ZW-BASE"
        assert [node["key"] for node in body["tree"]["value"]["nodes"]] == ["TYPE", "ATTRIBUTES", "NOTES"]
        assert body["tree"]["value"]["nodes"][2]["value"]["kind"] == "list"

    def test_invalid_root(self, client: TestClient) -> None:
        response = client.post("/api/parse", json={"text": "not-a-root-line"})

        assert response.status_code == 422
        assert "First line encountered" in response.json()["error"]

    def test_invalid_root_status_avoids_deprecated_constant(self) -> None:
        with warnings.catch_warnings():
            warnings.filterwarnings("error", message=".*UNPROCESSABLE.*")
            importlib.reload(convert)

        assert convert.INVALID_ROOT_STATUS == 422

    def test_missing_text_is_validation_error(self, client: TestClient) -> None:
        response = client.post("/api/parse", json={})

        assert response.status_code == 422
        assert "detail" in response.json()

    def test_empty_delimiter_is_validation_error(self, client: TestClient) -> None:
        response = client.post("/api/parse", json={"text": "ZW-A:", "delimiter": ""})

        assert response.status_code == 422


class TestToJsonEndpoint:
    """Tests for POST /api/to-json."""

    def test_converts(self, client: TestClient) -> None:
        text = "ZW-BASE:\n  base: Echo\n  defenses:\n    - ion cannon\n"

        response = client.post("/api/to-json", json={"text": text})

        assert response.status_code == 200
        assert response.json() == {"result": {"base": "Echo", "defenses": ["ion cannon"]}}

    def test_pairs_policy(self, client: TestClient) -> None:
        response = client.post(
            "/api/to-json",
            json={"text": "ZW-A:\n  K: 1\n  K: 2", "duplicate_keys": "pairs"},
        )

        assert response.json() == {"result": {"root_items": [{"K": 1}, {"K": 2}]}}

    def test_custom_tokens(self, client: TestClient) -> None:
        response = client.post(
            "/api/to-json",
            json={"text": "PACKET=\n  L=\n    * a", "delimiter": "=", "list_item_prefix": "*"},
        )

        assert response.json() == {"result": {"L": ["a"]}}

    def test_invalid_root(self, client: TestClient) -> None:
        response = client.post("/api/to-json", json={"text": ""})

        assert response.status_code == 422
        assert "Input is empty" in response.json()["error"]


class TestFromJsonEndpoint:
    """Tests for POST /api/from-json."""

    def test_converts(self, client: TestClient) -> None:
        response = client.post(
            "/api/from-json",
            json={"json_text": '{"name": "Ada"}', "root_type_name": "ZW-USER"},
        )

        assert response.status_code == 200
        assert response.json() == {"text": "ZW-USER:\n  name: Ada"}

    def test_invalid_json(self, client: TestClient) -> None:
        response = client.post("/api/from-json", json={"json_text": "{oops"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("# Error: Invalid JSON input.")


class TestTextEndpoints:
    """Tests for POST /api/to-gdscript and /api/format."""

    def test_to_gdscript(self, client: TestClient) -> None:
        response = client.post("/api/to-gdscript", json={"text": "ZW-NPC:\n  NAME: Bob"})

        assert response.status_code == 200
        assert response.json()["text"].splitlines()[1] == "var ZW_NPC = {"

    def test_format(self, client: TestClient) -> None:
        response = client.post("/api/format", json={"text": "ZW-A:\n      KEY: v"})

        assert response.status_code == 200
        assert response.json() == {"text": "ZW-A:\n  KEY: v\n"}

    def test_format_invalid_root(self, client: TestClient) -> None:
        response = client.post("/api/format", json={"text": "oops"})

        assert response.status_code == 422
