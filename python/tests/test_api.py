"""REST API routes via FastAPI's TestClient."""

from __future__ import annotations

import random
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from backend.api import build_service, create_app
from backend.config import Settings
from backend.engine.gamegenerator import GameGenerator
from backend.services import GameService
from backend.storage import JsonStore

EXAMPLE = [1, 2, 3, 4, 5, 6, 7, None, 8]


@pytest.fixture
def api_store() -> JsonStore:
    store = JsonStore()
    rand = random.Random(42)
    for _ in range(3):
        store.add_puzzle(4, 2, GameGenerator.generate(4, rand).cells)
    return store


@pytest.fixture
def client(api_store: JsonStore) -> TestClient:
    service = GameService(api_store, rng=random.Random(7))
    return TestClient(create_app(Settings(), service=service))


def _generate(client: TestClient, player: str = "alice") -> dict:
    response = client.post("/api/puzzle/generate", json={"player_id": player})
    assert response.status_code == 200
    return response.json()


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_lists_endpoints(client: TestClient) -> None:
    assert "hint" in client.get("/").json()["endpoints"]


# -- generate / end -------------------------------------------------------------


def test_generate(client: TestClient) -> None:
    data = _generate(client)
    assert data["size"] == 4
    assert data["difficulty"] == 2
    assert data["requested"] == {"size": 4, "difficulty": 2}
    assert data["fallback"] is False
    assert data["skill"] == 1.0
    assert len(data["board"]) == 16
    assert data["board"].count(None) == 1


def test_generate_requires_player(client: TestClient) -> None:
    response = client.post("/api/puzzle/generate", json={"player_id": ""})
    assert response.status_code == 400
    assert "error" in response.json()


def test_end_game_updates_skill(client: TestClient) -> None:
    session_id = _generate(client)["session_id"]
    response = client.post(
        "/api/game/end", json={"session_id": session_id, "moves": 80, "time": 120}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "completed"
    assert data["old_skill"] == 1.0
    assert data["new_skill"] == pytest.approx(1.048)


def test_end_game_abandoned(client: TestClient) -> None:
    session_id = _generate(client)["session_id"]
    response = client.post(
        "/api/game/end",
        json={"session_id": session_id, "moves": 5, "time": 9, "status": "abandoned"},
    )
    assert response.status_code == 200
    assert response.json()["new_skill"] == 1.0


def test_end_game_twice_conflicts(client: TestClient) -> None:
    session_id = _generate(client)["session_id"]
    body = {"session_id": session_id, "moves": 80, "time": 120}
    assert client.post("/api/game/end", json=body).status_code == 200

    response = client.post("/api/game/end", json=body)
    assert response.status_code == 409
    assert "error" in response.json()


def test_end_unknown_session(client: TestClient) -> None:
    response = client.post("/api/game/end", json={"session_id": "nope", "moves": 1, "time": 1})
    assert response.status_code == 404


def test_end_rejects_negative_moves(client: TestClient) -> None:
    session_id = _generate(client)["session_id"]
    response = client.post(
        "/api/game/end", json={"session_id": session_id, "moves": -3, "time": 1}
    )
    assert response.status_code == 400


# -- hint / check ---------------------------------------------------------------


def test_hint(client: TestClient) -> None:
    response = client.post("/api/magic/hint", json={"board": EXAMPLE, "size": 3})
    assert response.status_code == 200
    assert response.json() == {"next_tile": 8}


def test_hint_counts_against_session(client: TestClient, api_store: JsonStore) -> None:
    data = _generate(client)
    response = client.post(
        "/api/magic/hint",
        json={"board": data["board"], "size": data["size"], "session_id": data["session_id"]},
    )
    assert response.status_code == 200
    assert api_store.get_session(data["session_id"]).hints_used == 1


@pytest.mark.parametrize(
    "board,size",
    [
        ([1, 2, 3, 4, 5, 6, 7, 8], 3),
        ([1, 2, 3, 4, 5, 6, 7, 8, 9], 3),
        ([1, 2, 3, 4, 5, 6, 7, None, None], 3),
        ([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 99], 4),
    ],
)
def test_hint_rejects_invalid_board(client: TestClient, board: list, size: int) -> None:
    response = client.post("/api/magic/hint", json={"board": board, "size": size})
    assert response.status_code == 400
    assert "error" in response.json()


def test_hint_size_must_match_session(client: TestClient) -> None:
    data = _generate(client)
    response = client.post(
        "/api/magic/hint",
        json={"board": EXAMPLE, "size": 3, "session_id": data["session_id"]},
    )
    assert response.status_code == 400


def test_hint_unknown_session(client: TestClient) -> None:
    response = client.post(
        "/api/magic/hint", json={"board": EXAMPLE, "size": 3, "session_id": "nope"}
    )
    assert response.status_code == 404


def test_check(client: TestClient) -> None:
    response = client.post("/api/puzzle/check", json={"board": EXAMPLE, "size": 3})
    assert response.json() == {"solvable": True, "solved": False}

    unsolvable = [2, 1, 3, 4, 5, 6, 7, 8, None]
    response = client.post("/api/puzzle/check", json={"board": unsolvable, "size": 3})
    assert response.json() == {"solvable": False, "solved": False}


# -- players --------------------------------------------------------------------


def test_player_profile(client: TestClient) -> None:
    session_id = _generate(client)["session_id"]
    client.post("/api/game/end", json={"session_id": session_id, "moves": 80, "time": 120})

    response = client.get("/api/players/alice")
    assert response.status_code == 200
    data = response.json()
    assert data["skill"] == pytest.approx(1.048)
    assert data["tier"] == {"size": 4, "difficulty": 2}
    assert [s["session_id"] for s in data["sessions"]] == [session_id]
    assert data["sessions"][0]["status"] == "completed"
    assert data["stats"]["total_puzzles"] == 1
    assert data["stats"]["completion_rate"] == 100.0
    assert data["stats"]["average_moves"] == 80.0
    assert data["stats"]["favorite_size"] == 4


def test_unknown_player(client: TestClient) -> None:
    assert client.get("/api/players/ghost").status_code == 404


# -- wiring ---------------------------------------------------------------------


def test_build_service_seeds_empty_store(tmp_path: Path) -> None:
    settings = Settings(data_dir=tmp_path, seed_per_size=1)
    service = build_service(settings)
    assert service.store.count_puzzles() == 5
    assert settings.store_path.exists()
