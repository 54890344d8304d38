from __future__ import annotations

import io
import json
import zipfile

from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.router import api_router


def _client() -> TestClient:
    app = FastAPI()
    app.include_router(api_router)
    return TestClient(app)


def test_parse_endpoint_returns_geometry_tree() -> None:
    response = _client().post("/api/wkt/parse", json={"wkt": "SRID=4326;POINT(1 2)"})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["geometry"] == {"type": "POINT", "value": [1, 2], "srid": 4326}
    assert body["metadata"]["point_count"] == 1


def test_parse_endpoint_passes_options() -> None:
    response = _client().post(
        "/api/wkt/parse",
        json={"wkt": "LINESTRING(0 0,1 1)", "options": {"default_srid": 3857}},
    )
    assert response.json()["geometry"]["srid"] == 3857


def test_parse_endpoint_syntax_error_is_400() -> None:
    response = _client().post("/api/wkt/parse", json={"wkt": "FOO(1 2)"})
    assert response.status_code == 400
    assert 'got "FOO"' in response.json()["detail"]


def test_parse_endpoint_requires_wkt() -> None:
    response = _client().post("/api/wkt/parse", json={})
    assert response.status_code == 422


def test_types_endpoint() -> None:
    response = _client().get("/api/wkt/types")
    assert response.status_code == 200
    body = response.json()
    assert "MULTIPOLYGON" in body["geometry_types"]
    assert body["dimension_markers"] == ["M", "Z", "ZM"]
    assert "default_srid" in body["options"]


def test_api_root_lists_wkt_endpoints() -> None:
    body = _client().get("/api").json()
    assert "parse" in body["endpoints"]


def test_recent_logs_endpoint() -> None:
    client = _client()
    client.post("/api/wkt/parse", json={"wkt": "POINT(1 2)"})
    response = client.get("/logs/recent", params={"limit": 10})
    assert response.status_code == 200
    assert isinstance(response.json()["logs"], list)


def test_parse_endpoint_invalid_default_srid_is_400() -> None:
    response = _client().post(
        "/api/wkt/parse",
        json={"wkt": "POINT(1 2)", "options": {"default_srid": "abc"}},
    )
    assert response.status_code == 400
    assert "default_srid" in response.json()["detail"]


def test_parse_endpoint_overflowing_coordinate_is_400() -> None:
    response = _client().post("/api/wkt/parse", json={"wkt": "POINT(9E308 0)"})
    assert response.status_code == 400
    assert "finite number" in response.json()["detail"]


def test_download_logs_bundle() -> None:
    response = _client().get("/logs/download")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/zip"
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        assert "recent_ring_buffer.json" in archive.namelist()
        payload = json.loads(archive.read("recent_ring_buffer.json"))
    assert isinstance(payload["logs"], list)


def test_download_logs_filters_by_logger_prefix() -> None:
    response = _client().get("/logs/download", params={"logger_prefix": "no.such.logger"})
    with zipfile.ZipFile(io.BytesIO(response.content)) as archive:
        payload = json.loads(archive.read("recent_ring_buffer.json"))
    assert payload["logs"] == []
