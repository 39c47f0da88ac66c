from __future__ import annotations

from fastapi.testclient import TestClient

from bitchess.protocol.http.app import create_app


def test_healthz_ok() -> None:
    client = TestClient(create_app())
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert "x-request-id" in r.headers


def test_incoming_request_id_is_echoed() -> None:
    client = TestClient(create_app())
    r = client.get("/healthz", headers={"x-request-id": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_unsafe_request_id_is_replaced() -> None:
    client = TestClient(create_app())
    for header in ("x" * 200, "bad id with spaces"):
        r = client.get("/healthz", headers={"x-request-id": header})
        assert r.headers["x-request-id"] != header
        assert len(r.headers["x-request-id"]) == 36
