from __future__ import annotations

from fastapi.testclient import TestClient

from src.engine.board import STARTPOS_LAYOUT
from src.protocol.http.app import create_app


WON_BY_BLACK = "--------/--------/--------/---bb---/--------/--------/--------/w------w w"


def _client() -> TestClient:
    return TestClient(create_app())


def test_create_game_and_get_state() -> None:
    client = _client()
    r = client.post("/api/games")
    assert r.status_code == 200
    body = r.json()
    assert "game_id" in body and isinstance(body["game_id"], str) and body["game_id"]
    game_id = body["game_id"]
    assert body["layout"] == STARTPOS_LAYOUT

    r2 = client.get(f"/api/games/{game_id}/state")
    assert r2.status_code == 200
    state = r2.json()
    assert state["game_id"] == game_id
    assert state["layout"] == STARTPOS_LAYOUT
    assert state["turn"] == "black"
    assert len(state["legal_moves"]) == 36
    assert state["legal_moves"][0] == "b1-h1"
    assert state["game_over"] is False
    assert state["winner"] is None
    assert state["moves_made"] == 0
    assert state["move_limit"] == 60
    assert state["board"].startswith("===\n")


def test_list_and_delete_games() -> None:
    client = _client()
    a = client.post("/api/games").json()["game_id"]
    b = client.post("/api/games").json()["game_id"]
    assert set(client.get("/api/games").json()["game_ids"]) == {a, b}

    r = client.delete(f"/api/games/{a}")
    assert r.status_code == 200
    assert r.json() == {"deleted": a}
    assert client.get("/api/games").json()["game_ids"] == [b]
    assert client.get(f"/api/games/{a}/state").status_code == 404
    assert client.delete(f"/api/games/{a}").status_code == 404


def test_get_state_unknown_id_404() -> None:
    client = _client()
    r = client.get("/api/games/does-not-exist/state")
    assert r.status_code == 404
    body = r.json()
    assert "error" in body
    assert body["error"]["code"] == "not_found"


def test_set_position_validation_and_success() -> None:
    client = _client()
    game_id = client.post("/api/games").json()["game_id"]

    r_bad = client.post(f"/api/games/{game_id}/position", json={"layout": ""})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["code"] == "bad_request"
    assert r_bad.json()["error"]["message"].startswith("invalid layout")

    r_ok = client.post(f"/api/games/{game_id}/position", json={"layout": WON_BY_BLACK})
    assert r_ok.status_code == 200
    state = r_ok.json()
    assert state["layout"] == WON_BY_BLACK
    assert state["turn"] == "white"
    assert state["game_over"] is True
    assert state["winner"] == "black"


def test_set_position_unknown_game_404() -> None:
    client = _client()
    r = client.post("/api/games/nope/position", json={"layout": STARTPOS_LAYOUT})
    assert r.status_code == 404
