from __future__ import annotations

from fastapi.testclient import TestClient

from bitchess.protocol.http.app import create_app


def _client() -> TestClient:
    return TestClient(create_app())


def test_undo_without_moves_returns_400() -> None:
    client = _client()
    r = client.post("/api/positions")
    position_id = r.json()["position_id"]

    r_undo = client.post(f"/api/positions/{position_id}/undo")
    assert r_undo.status_code == 400
    body = r_undo.json()
    assert body["error"]["code"] == "bad_request"
    assert "no moves" in body["error"]["message"].lower()


def test_undo_restores_prior_state() -> None:
    client = _client()
    r = client.post("/api/positions")
    position_id = r.json()["position_id"]
    start_fen = r.json()["fen"]

    r_move = client.post(f"/api/positions/{position_id}/apply", json={"move": "e2e4"})
    assert r_move.status_code == 200
    assert r_move.json()["side"] == "b"

    r_undo = client.post(f"/api/positions/{position_id}/undo")
    assert r_undo.status_code == 200
    state = r_undo.json()
    assert state["fen"] == start_fen
    assert state["side"] == "w"
    assert state["history"] == []


def test_undo_restores_a_capture() -> None:
    fen = "rnbqkb1r/pppp1ppp/5n2/4p3/4PP2/2N5/PPPP2PP/R1BQKBNR b KQkq f3 0 3"
    client = _client()
    position_id = client.post("/api/positions", json={"fen": fen}).json()["position_id"]

    r = client.post(f"/api/positions/{position_id}/apply", json={"move": "e5f4"})
    assert r.status_code == 200
    assert r.json()["fen"] == "rnbqkb1r/pppp1ppp/5n2/8/4Pp2/2N5/PPPP2PP/R1BQKBNR w KQkq f3 0 3"
    assert r.json()["history"] == ["e5f4"]

    r_undo = client.post(f"/api/positions/{position_id}/undo")
    assert r_undo.json()["fen"] == fen
