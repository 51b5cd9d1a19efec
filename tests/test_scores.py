import pytest

from battlepack.core import NotFoundError, ValidationError
from battlepack.models import Game, Score
from battlepack.services.scores import ScoreService, score_to_dict, validate_time


@pytest.fixture()
def scores(store):
    return ScoreService(store)


@pytest.mark.parametrize("value", [0, 12, 12.5, "42"])
def test_validate_time_accepts_non_negative_numbers(value):
    assert validate_time(value) == float(value)


@pytest.mark.parametrize(
    "value, message",
    [
        (-5, "Time must be at least 0"),
        (float("nan"), "Time must be a number"),
        (float("inf"), "Time must be a number"),
        ("fast", "Time must be a number"),
        (True, "Time must be a number"),
        (None, "Time is required"),
    ],
)
def test_invalid_times_are_never_persisted(scores, store, value, message):
    with pytest.raises(ValidationError) as exc_info:
        scores.record("Alice", "game-1", value)
    assert exc_info.value.message == message
    assert store.count(Score) == 0


def test_record_requires_player_and_game(scores):
    with pytest.raises(ValidationError, match="Player Name is required"):
        scores.record("", "game-1", 10)
    with pytest.raises(ValidationError, match="Game ID is required"):
        scores.record("Alice", None, 10)


def test_record_persists_completion(scores):
    score = scores.record("Alice", "game-1", 33, player_mobile="9876543210", player_id="Alice_9876543210")
    payload = score_to_dict(score)
    assert payload["playerName"] == "Alice"
    assert payload["playerId"] == "Alice_9876543210"
    assert payload["time"] == 33
    assert payload["createdAt"].endswith("Z")


def test_submit_requires_existing_game(scores, store):
    with pytest.raises(NotFoundError):
        scores.submit({"playerName": "Alice", "gameId": "missing", "time": 10})

    game = store.add(Game(players_json="[]", event_id="e", host_id="h", name="Opening"))
    score, found = scores.submit({"playerName": "Alice", "gameId": game.id, "time": 10})
    assert found.id == game.id
    assert score.game_id == game.id


def test_list_orders_and_paginates(scores):
    for name, time in (("Cara", 30), ("Abe", 10), ("Bea", 20)):
        scores.record(name, "game-1", time)
    scores.record("Dan", "game-2", 5)

    page, total = scores.list(game_id="game-1", limit=2, offset=0)
    assert total == 3
    assert [score.player_name for score in page] == ["Abe", "Bea"]

    page, _ = scores.list(order_by="playerName", order="desc")
    assert [score.player_name for score in page] == ["Dan", "Cara", "Bea", "Abe"]

    # player filter + time ordering has no composite index and is sorted in memory
    page, total = scores.list(player_name="Cara")
    assert total == 1
    assert page[0].time == 30


def test_list_rejects_unknown_ordering(scores):
    with pytest.raises(ValidationError):
        scores.list(order_by="score")
    with pytest.raises(ValidationError):
        scores.list(order="sideways")


def test_delete_score(scores, store):
    score = scores.record("Alice", "game-1", 10)
    scores.delete(score.id)
    assert store.count(Score) == 0
    with pytest.raises(NotFoundError):
        scores.delete(score.id)
