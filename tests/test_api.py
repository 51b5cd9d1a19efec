import importlib
import logging

from sqlmodel import Session

from battlepack.models import Event, Game, Score
from tests.helpers import make_players


def _create_game(client, **overrides):
    body = {"players": make_players(3), "eventId": "event-1", "hostId": "host-1"}
    body.update(overrides)
    response = client.post("/api/games", json=body)
    assert response.status_code == 201
    return response.json()["data"]


def test_health(client):
    assert client.get("/health").json() == {"ok": True}

    body = client.get("/api/health").json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"


def test_create_game_envelope(client):
    response = client.post(
        "/api/games",
        json={"players": make_players(4), "eventId": "event-1", "hostId": "host-1", "name": "Table 1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Game created successfully"
    game = body["data"]
    assert game["status"] == "running"
    assert game["difficulty"] == "medium"
    assert game["startTime"] == "2024-03-14T18:00:00Z"
    assert len(game["players"]) == 4

    fetched = client.get(f"/api/games/{game['id']}").json()
    assert fetched["data"]["name"] == "Table 1"


def test_create_game_validation_errors(client):
    response = client.post("/api/games", json={"players": make_players(2), "eventId": "e", "hostId": "h"})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Players must be between 3 and 6"}

    response = client.post("/api/games", json={"players": make_players(3), "hostId": "h"})
    assert response.status_code == 400
    assert response.json()["error"] == "Event is required"

    response = client.post("/api/games", json=["not", "an", "object"])
    assert response.status_code == 400
    assert response.json()["success"] is False

    assert client.get("/api/games").json()["data"]["total"] == 0


def test_complete_game_once(client, clock):
    game = _create_game(client)
    winner = f"{make_players(1)[0]['name']}_{make_players(1)[0]['mobile']}"
    clock.advance(125.4)

    response = client.patch(f"/api/games/{game['id']}", json={"winner": winner})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Game completed successfully"
    assert body["data"]["status"] == "completed"
    assert body["data"]["winnerTime"] == 125
    assert body["data"]["winnerMobile"] == make_players(1)[0]["mobile"]

    again = client.patch(f"/api/games/{game['id']}", json={"winner": winner})
    assert again.status_code == 400
    assert again.json()["error"] == "Game is already completed"

    board = client.get("/api/leaderboard", params={"gameId": game["id"]}).json()["data"]
    assert board["total"] == 1
    assert board["leaderboard"][0]["rank"] == 1
    assert board["leaderboard"][0]["time"] == 125


def test_complete_unknown_game(client):
    response = client.patch("/api/games/missing", json={"winner": "Alice"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Game not found"}


def test_update_game_metadata(client):
    game = _create_game(client)

    response = client.patch(f"/api/games/{game['id']}", json={"name": "Renamed", "difficulty": "hard"})
    assert response.status_code == 200
    assert response.json()["message"] == "Game updated successfully"
    assert response.json()["data"]["name"] == "Renamed"
    assert response.json()["data"]["difficulty"] == "hard"

    response = client.patch(f"/api/games/{game['id']}", json={"difficulty": "brutal"})
    assert response.status_code == 400
    assert response.json()["error"] == "Difficulty must be one of: easy, medium, hard"


def test_delete_game_cascades_to_leaderboard(client, clock):
    game = _create_game(client)
    clock.advance(30)
    client.patch(f"/api/games/{game['id']}", json={"winner": "Player1_9876543201"})
    assert client.get("/api/leaderboard").json()["data"]["total"] == 1

    response = client.delete(f"/api/games/{game['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Game deleted successfully"

    assert client.get(f"/api/games/{game['id']}").status_code == 404
    assert client.get("/api/leaderboard").json()["data"]["total"] == 0
    assert client.delete(f"/api/games/{game['id']}").status_code == 404


def test_leaderboard_pagination(client):
    game = _create_game(client)
    for name, time in (("Cara", 30), ("Abe", 10), ("Bea", 20)):
        response = client.post("/api/scores", json={"playerName": name, "gameId": game["id"], "time": time})
        assert response.status_code == 201

    data = client.get("/api/leaderboard", params={"gameId": game["id"], "limit": 1, "offset": 1}).json()["data"]
    assert data["total"] == 3
    assert data["limit"] == 1
    assert data["offset"] == 1
    assert [(entry["rank"], entry["playerName"]) for entry in data["leaderboard"]] == [(2, "Bea")]


def test_leaderboard_status_requires_game(client):
    response = client.get("/api/leaderboard/status")
    assert response.status_code == 400
    assert response.json()["error"] == "Game ID is required"


def test_scores_endpoints(client):
    game = _create_game(client, name="Finals")

    response = client.post("/api/scores", json={"playerName": "Alice", "gameId": game["id"], "time": -5})
    assert response.status_code == 400
    assert response.json()["error"] == "Time must be at least 0"

    response = client.post("/api/scores", json={"playerName": "Alice", "gameId": "nope", "time": 5})
    assert response.status_code == 404

    response = client.post("/api/scores", json={"playerName": "Alice", "gameId": game["id"], "time": 5})
    assert response.status_code == 201
    score = response.json()["data"]
    assert score["game"] == {"id": game["id"], "name": "Finals"}

    listing = client.get("/api/scores", params={"gameId": game["id"]}).json()["data"]
    assert listing["total"] == 1

    assert client.get("/api/scores", params={"orderBy": "bogus"}).status_code == 400

    assert client.delete(f"/api/scores/{score['id']}").status_code == 200
    assert client.delete(f"/api/scores/{score['id']}").status_code == 404


def test_rankings_endpoint(client, api_app):
    with Session(api_app.state.engine) as session:
        session.add(Event(id="event-1", name="Spring Cup"))
        for index, time in enumerate((50, 10, 30)):
            game = Game(id=f"g{index}", players_json="[]", event_id="event-1", host_id="h")
            session.add(game)
            session.add(Score(player_name=f"P{index}", game_id=game.id, time=time))
        session.commit()

    data = client.get("/api/rankings", params={"eventId": "event-1", "pageSize": 2}).json()["data"]
    assert data["total"] == 3
    assert data["totalPages"] == 2
    assert data["event"]["name"] == "Spring Cup"
    assert [entry["time"] for entry in data["rankings"]] == [10, 30]

    data = client.get("/api/rankings", params={"eventId": "event-1", "pageSize": 2, "page": 2}).json()["data"]
    assert [(entry["rank"], entry["time"]) for entry in data["rankings"]] == [(3, 50)]

    data = client.get("/api/rankings", params={"eventId": "event-1", "pageSize": 500}).json()["data"]
    assert data["pageSize"] == 100

    response = client.get("/api/rankings")
    assert response.status_code == 400
    assert response.json()["error"] == "eventId is required"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_non_text_metadata_is_rejected(client):
    response = client.post(
        "/api/games",
        json={"players": make_players(3), "eventId": "e", "hostId": "h", "description": {"x": 1}},
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Description must be a string"}

    response = client.post(
        "/api/games",
        json={"players": make_players(3), "eventId": "e", "hostId": "h", "name": 123},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Name must be a string"
    assert client.get("/api/games").json()["data"]["total"] == 0

    game = _create_game(client)
    response = client.patch(f"/api/games/{game['id']}", json={"description": ["a"]})
    assert response.status_code == 400
    assert response.json()["error"] == "Description must be a string"


def test_completion_record_uses_completion_time(client, clock):
    game = _create_game(client)
    clock.advance(42)

    completed = client.patch(f"/api/games/{game['id']}", json={"winner": "Player1_9876543201"}).json()["data"]
    entry = client.get("/api/leaderboard", params={"gameId": game["id"]}).json()["data"]["leaderboard"][0]

    assert completed["completedAt"] == "2024-03-14T18:00:42Z"
    assert entry["createdAt"] == completed["completedAt"]


def test_importing_app_leaves_logging_alone(monkeypatch):
    import battlepack.app
    import battlepack.core

    sentinel = logging.NullHandler()
    root = logging.getLogger()
    root.addHandler(sentinel)
    monkeypatch.setattr(battlepack.core, "DATABASE_URL", "sqlite://")
    try:
        importlib.reload(battlepack.app)
        assert sentinel in root.handlers
    finally:
        root.removeHandler(sentinel)
