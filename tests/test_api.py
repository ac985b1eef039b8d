"""Tests for the FastAPI game server."""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from api import app, games, _get_default_depth
from cnchess import Board, Piece, Side, piece_side
from cnchess.constants import DEFAULT_SEARCH_DEPTH, MAX_SEARCH_DEPTH

# Not used as a context manager: the lifespan would shut down the shared
# search thread pool after the first test.
client = TestClient(app)


def new_game(game_id: str, **kwargs):
    payload = {"game_id": game_id, "depth": 1}
    payload.update(kwargs)
    response = client.post("/api/new-game", json=payload)
    assert response.status_code == 200
    return response.json()


class TestNewGame:
    """Test game creation."""

    def test_new_game(self):
        """Test the starting state of a new game."""
        data = new_game("new-1")

        assert data["game_id"] == "new-1"
        assert data["user_side"] == "DOWN"
        assert data["ai_side"] == "UP"
        assert data["depth"] == 1
        assert data["score"] == 0
        assert data["winner"] is None
        assert data["history_length"] == 0
        assert len(data["legal_moves"]) == 44
        assert data["board"][0] == "RNBAGABNR"
        assert data["board"][9] == "rnbagabnr"

    def test_generated_game_id(self):
        """Test a game id is generated when none is given."""
        response = client.post("/api/new-game", json={"depth": 1})

        assert response.status_code == 200
        assert len(response.json()["game_id"]) == 32

    def test_user_plays_up(self):
        """Test the AI opens as DOWN when the user takes the UP side."""
        data = new_game("new-up", user_side="UP")

        assert data["user_side"] == "UP"
        assert data["ai_side"] == "DOWN"
        assert data["history_length"] == 1
        assert data["board"] != Board().to_rows()
        assert "e6e5" in data["legal_moves"]

    def test_user_plays_up_move_order(self):
        """Test UP and DOWN keep alternating after the AI's opening."""
        new_game("new-up-2", user_side="UP")

        response = client.post("/api/move", json={"game_id": "new-up-2", "move": "e6e5"})

        assert response.status_code == 200
        assert response.json()["ai_move"] is not None
        history = games["new-up-2"].board.history
        assert len(history) == 3
        assert [piece_side(entry.begin_piece) for entry in history] == [
            Side.DOWN, Side.UP, Side.DOWN,
        ]

    def test_neither_side_rejected(self):
        """Test NEITHER is not a playable side."""
        response = client.post(
            "/api/new-game", json={"game_id": "bad", "user_side": "NEITHER"}
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("depth", [0, 9])
    def test_depth_out_of_range(self, depth):
        """Test depth validation."""
        response = client.post("/api/new-game", json={"depth": depth})

        assert response.status_code == 422

    def test_unknown_game(self):
        """Test unknown game ids give 404."""
        assert client.get("/api/board/missing").status_code == 404
        assert client.post("/api/undo/missing").status_code == 404
        assert client.post("/api/reset/missing").status_code == 404
        assert client.get("/api/advice/missing").status_code == 404
        response = client.post("/api/move", json={"game_id": "missing", "move": "e3e4"})
        assert response.status_code == 404


class TestMove:
    """Test user moves and engine replies."""

    def test_move_and_reply(self):
        """Test a legal move is answered by the engine."""
        new_game("move-1")

        response = client.post("/api/move", json={"game_id": "move-1", "move": "e3e4"})

        assert response.status_code == 200
        data = response.json()
        assert data["move"] == "e3e4"
        assert data["ai_move"] is not None
        assert data["nodes_searched"] > 0
        assert data["winner"] is None

        board = client.get("/api/board/move-1").json()
        assert board["history_length"] == 2
        assert board["board"][5][4] == "p"  # e4

    def test_not_own_piece(self):
        """Test moving an enemy piece is rejected."""
        new_game("move-2")

        response = client.post("/api/move", json={"game_id": "move-2", "move": "e6e5"})

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "This piece is not yours, please choose your piece"
        )

    def test_illegal_move(self):
        """Test a move outside the rules is rejected."""
        new_game("move-3")

        response = client.post("/api/move", json={"game_id": "move-3", "move": "e3e5"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Illegal move"

    def test_bad_notation(self):
        """Test unparseable moves are rejected."""
        new_game("move-4")

        response = client.post("/api/move", json={"game_id": "move-4", "move": "zz"})

        assert response.status_code == 400

    def test_user_wins(self):
        """Test capturing the general ends the game without a reply."""
        new_game("move-5")
        games["move-5"].board = Board(custom_setup={"e0": "g", "e9": "G"})

        response = client.post("/api/move", json={"game_id": "move-5", "move": "e0e9"})

        assert response.status_code == 200
        data = response.json()
        assert data["winner"] == "DOWN"
        assert data["ai_move"] is None

    def test_game_over(self):
        """Test no moves are accepted after the game ended."""
        new_game("move-6")
        games["move-6"].board.set(2, 6, Piece.EMPTY)

        assert client.get("/api/board/move-6").json()["winner"] == "DOWN"
        response = client.post("/api/move", json={"game_id": "move-6", "move": "e3e4"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Game is over"


class TestGameControl:
    """Test undo, reset, advice and difficulty."""

    def test_undo(self):
        """Test undo removes the user move and the reply."""
        start = new_game("ctl-1")
        client.post("/api/move", json={"game_id": "ctl-1", "move": "b2e2"})

        response = client.post("/api/undo/ctl-1")

        assert response.status_code == 200
        assert response.json()["history_length"] == 0
        assert response.json()["board"] == start["board"]

    def test_undo_without_history(self):
        """Test undo on a fresh game is rejected."""
        new_game("ctl-2")

        response = client.post("/api/undo/ctl-2")

        assert response.status_code == 400

    def test_undo_after_winning_move(self):
        """Test undo takes back only the user's move when the AI did not reply."""
        new_game("ctl-7")
        games["ctl-7"].board = Board(custom_setup={"e0": "g", "e9": "G"})
        client.post("/api/move", json={"game_id": "ctl-7", "move": "e0e9"})

        response = client.post("/api/undo/ctl-7")

        assert response.status_code == 200
        data = response.json()
        assert data["history_length"] == 0
        assert data["winner"] is None
        assert games["ctl-7"].board == Board(custom_setup={"e0": "g", "e9": "G"})

    def test_undo_keeps_ai_opening(self):
        """Test undo as UP stops at the user's move and keeps DOWN's opening."""
        new_game("ctl-8", user_side="UP")
        opening = games["ctl-8"].board.history[0]

        assert client.post("/api/undo/ctl-8").status_code == 400

        client.post("/api/move", json={"game_id": "ctl-8", "move": "e6e5"})
        response = client.post("/api/undo/ctl-8")

        assert response.status_code == 200
        assert response.json()["history_length"] == 1
        assert games["ctl-8"].board.history == (opening,)

    def test_reset_as_up(self):
        """Test reset replays the AI's opening when the AI is DOWN."""
        new_game("ctl-9", user_side="UP")
        client.post("/api/move", json={"game_id": "ctl-9", "move": "e6e5"})

        response = client.post("/api/reset/ctl-9")

        assert response.status_code == 200
        assert response.json()["history_length"] == 1
        history = games["ctl-9"].board.history
        assert piece_side(history[0].begin_piece) == Side.DOWN

    def test_reset(self):
        """Test reset returns to the start."""
        start = new_game("ctl-3")
        client.post("/api/move", json={"game_id": "ctl-3", "move": "h2e2"})

        response = client.post("/api/reset/ctl-3")

        assert response.status_code == 200
        assert response.json()["board"] == start["board"]
        assert response.json()["history_length"] == 0

    def test_advice(self):
        """Test advice suggests one of the user's moves."""
        start = new_game("ctl-4")

        response = client.get("/api/advice/ctl-4")

        assert response.status_code == 200
        data = response.json()
        assert data["move"] in start["legal_moves"]
        assert data["piece"].islower()
        assert client.get("/api/board/ctl-4").json()["history_length"] == 0

    def test_difficulty(self):
        """Test changing the search depth."""
        new_game("ctl-5")

        response = client.post("/api/difficulty/ctl-5", json={"depth": 3})

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "depth": 3}
        assert client.get("/api/board/ctl-5").json()["depth"] == 3

    def test_difficulty_out_of_range(self):
        """Test depth validation on difficulty changes."""
        new_game("ctl-6")

        response = client.post("/api/difficulty/ctl-6", json={"depth": 9})

        assert response.status_code == 422


class TestConfiguration:
    """Test the default depth setting."""

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("CNCHESS_SEARCH_DEPTH", raising=False)
        assert _get_default_depth() == DEFAULT_SEARCH_DEPTH

    def test_valid(self, monkeypatch):
        monkeypatch.setenv("CNCHESS_SEARCH_DEPTH", "2")
        assert _get_default_depth() == 2

    def test_clamped(self, monkeypatch):
        monkeypatch.setenv("CNCHESS_SEARCH_DEPTH", "9")
        assert _get_default_depth() == MAX_SEARCH_DEPTH
        monkeypatch.setenv("CNCHESS_SEARCH_DEPTH", "0")
        assert _get_default_depth() == 1

    def test_invalid(self, monkeypatch):
        monkeypatch.setenv("CNCHESS_SEARCH_DEPTH", "deep")
        assert _get_default_depth() == DEFAULT_SEARCH_DEPTH
