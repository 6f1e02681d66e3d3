"""
Integration test suite for CalmTac.

Tests components working together end-to-end:
- Full game simulations (engine vs engine, engine vs scripted/random human)
- Game orchestration (turns, undo, restart, status)
- CLI loop with scripted input
- FastAPI REST API integration
- Background search feeding the game
"""

import random

import pytest
from unittest.mock import patch

from calmtac.config import CONFIG
from calmtac.core.board import Board, Outcome, EMPTY, PLAYER_A, PLAYER_B
from calmtac.core.search import SearchEngine
from calmtac.main import Game
from calmtac.worker import SearchWorker


# ════════════════════════════════════════════════════════════════════════════
#  FULL GAME SIMULATIONS
# ════════════════════════════════════════════════════════════════════════════


class TestFullGame:
    """Tests that the engine can play complete games."""

    @pytest.mark.parametrize("depth", [1, 3, 5])
    def test_engine_vs_engine_completes(self, depth):
        """Two engines play a full game: must end with a valid outcome."""
        a = SearchEngine(depth=depth, player=PLAYER_A)
        b = SearchEngine(depth=depth, player=PLAYER_B)
        board = Board()
        moves = 0

        while not board.is_game_over():
            engine = a if board.side_to_move() == PLAYER_A else b
            move = engine.choose_move(board)
            assert move in board.empty_cells()
            assert board.apply(move, engine.player)
            moves += 1

        assert 5 <= moves <= 9
        assert board.outcome() != Outcome.IN_PROGRESS

    def test_full_depth_beats_random_player(self):
        """Depth 9 never loses to a random human over many games."""
        rng = random.Random(1234)
        engine = SearchEngine(depth=9)
        results = []
        for _ in range(25):
            board = Board()
            while not board.is_game_over():
                board.apply(rng.choice(board.empty_cells()), PLAYER_A)
                if board.is_game_over():
                    break
                board.apply(engine.choose_move(board), PLAYER_B)
            results.append(board.outcome())
        assert Outcome.A_WINS not in results

    def test_history_matches_moves_played(self):
        game = Game(depth=2)
        played = []
        for cell in (4, 0, 8, 2, 6, 1, 3, 5, 7):
            if game.board.is_game_over():
                break
            if game.human_move(cell):
                played.append(cell)
                reply = game.engine_move()
                if reply is not None:
                    played.append(reply)
        assert game.board.history == played


# ════════════════════════════════════════════════════════════════════════════
#  GAME ORCHESTRATION
# ════════════════════════════════════════════════════════════════════════════


class TestGame:
    def test_initial_state(self):
        game = Game(depth=3)
        assert game.player_turn is True
        assert game.difficulty == 3
        assert game.status() == "Your turn - X"
        assert game.outcome() == Outcome.IN_PROGRESS

    def test_human_then_engine(self):
        game = Game(depth=9)
        assert game.human_move(0) is True
        assert game.player_turn is False
        assert game.status() == "AI thinking..."
        move = game.engine_move()
        assert move == 4
        assert game.board.get(4) == PLAYER_B
        assert game.player_turn is True

    def test_human_cannot_move_twice(self):
        game = Game(depth=1)
        game.human_move(0)
        assert game.human_move(1) is False
        assert game.board.get(1) == EMPTY

    def test_human_invalid_move_keeps_turn(self):
        game = Game(depth=1)
        assert game.human_move(9) is False
        assert game.player_turn is True

    def test_engine_waits_for_human(self):
        game = Game(depth=1)
        assert game.engine_move() is None
        assert game.board.history == []

    def test_undo_one_ply_flips_turn(self):
        game = Game(depth=2)
        game.human_move(4)
        game.engine_move()
        assert game.undo() is True
        assert game.player_turn is False
        assert game.undo() is True
        assert game.player_turn is True
        assert game.undo() is False

    def test_take_back_returns_to_human(self):
        game = Game(depth=2)
        game.human_move(4)
        game.engine_move()
        assert game.take_back() is True
        assert game.board.history == []
        assert game.player_turn is True

    def test_take_back_after_human_only(self):
        game = Game(depth=2)
        game.human_move(4)
        assert game.take_back() is True
        assert game.board.history == []
        assert game.player_turn is True

    def test_take_back_empty(self):
        assert Game().take_back() is False

    def test_restart(self):
        game = Game(depth=2)
        game.human_move(4)
        game.engine_move()
        game.restart()
        assert game.board == Board()
        assert game.player_turn is True

    def test_set_difficulty_clamps(self):
        game = Game()
        game.set_difficulty(20)
        assert game.difficulty == 9
        game.set_difficulty(0)
        assert game.difficulty == 1

    def test_status_texts(self):
        game = Game(depth=9)
        for i, p in [(0, PLAYER_A), (3, PLAYER_B), (1, PLAYER_A), (4, PLAYER_B), (2, PLAYER_A)]:
            game.board.apply(i, p)
        assert game.status() == "You win!"
        game.restart()
        for i, p in [(0, PLAYER_A), (3, PLAYER_B), (1, PLAYER_A), (4, PLAYER_B), (8, PLAYER_A), (5, PLAYER_B)]:
            game.board.apply(i, p)
        assert game.status() == "AI wins - better luck next time."
        game.restart()
        for i, p in [(0, PLAYER_A), (1, PLAYER_B), (2, PLAYER_A), (4, PLAYER_B), (3, PLAYER_A),
                     (5, PLAYER_B), (7, PLAYER_A), (6, PLAYER_B), (8, PLAYER_A)]:
            game.board.apply(i, p)
        assert game.status() == "Draw - a calm stalemate."

    def test_no_moves_after_game_over(self):
        game = Game(depth=9)
        for i, p in [(0, PLAYER_A), (3, PLAYER_B), (1, PLAYER_A), (4, PLAYER_B), (2, PLAYER_A)]:
            game.board.apply(i, p)
        assert game.human_move(8) is False
        game.player_turn = False
        assert game.engine_move() is None

    def test_engine_blocks_in_game(self):
        game = Game(depth=9)
        game.human_move(0)
        assert game.engine_move() == 4
        game.human_move(1)
        assert game.engine_move() == 2

    def test_play_engine_move_from_worker(self):
        game = Game(depth=9)
        game.human_move(0)
        with SearchWorker(game.search) as worker:
            move = worker.submit(game.board).result(timeout=30)
        assert game.play_engine_move(move) is True
        assert game.board.get(4) == PLAYER_B
        assert game.player_turn is True

    def test_play_engine_move_rejected_on_human_turn(self):
        game = Game(depth=1)
        assert game.play_engine_move(4) is False
        assert game.board.get(4) == EMPTY


# ════════════════════════════════════════════════════════════════════════════
#  CLI
# ════════════════════════════════════════════════════════════════════════════


class TestCLI:
    def test_scripted_session(self, capsys):
        from interface.cli import run

        inputs = ["x", "4", "4", "u", "d 3", "q"]
        with patch("builtins.input", side_effect=inputs):
            run(Game(depth=2))
        out = capsys.readouterr().out
        assert "You played:   4" in out
        assert "Engine plays:" in out
        assert "Illegal move, try again." in out
        assert "Difficulty set to 3" in out
        assert "Game Over" in out

    def test_human_win_ends_game(self, capsys):
        from interface.cli import run

        game = Game(depth=2)
        for i, p in [(0, PLAYER_A), (3, PLAYER_B), (1, PLAYER_A), (4, PLAYER_B)]:
            game.board.apply(i, p)
        with patch("builtins.input", side_effect=["2", "q"]):
            run(game)
        out = capsys.readouterr().out
        assert "You win!" in out
        assert game.outcome() == Outcome.A_WINS

    def test_restart_after_game_over(self, capsys):
        from interface.cli import run

        game = Game(depth=2)
        for i, p in [(0, PLAYER_A), (3, PLAYER_B), (1, PLAYER_A), (4, PLAYER_B)]:
            game.board.apply(i, p)
        with patch("builtins.input", side_effect=["2", "r", "q"]):
            run(game)
        assert game.board.history == []

    def test_undo_with_nothing_to_undo(self, capsys):
        from interface.cli import run

        with patch("builtins.input", side_effect=["u", "q"]):
            run(Game(depth=1))
        assert "Nothing to undo." in capsys.readouterr().out


# ════════════════════════════════════════════════════════════════════════════
#  API
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI REST API endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import app, game

        self.client = TestClient(app)
        self.game = game
        # Reset state before each test
        game.restart()
        game.set_difficulty(CONFIG.search.depth)

    def test_get_board_initial(self):
        response = self.client.get("/board")
        assert response.status_code == 200
        data = response.json()
        assert data["cells"] == [0] * 9
        assert data["turn"] == "X"
        assert data["outcome"] == "in_progress"
        assert data["is_game_over"] is False
        assert len(data["empty_cells"]) == 9

    def test_post_move_valid(self):
        response = self.client.post("/move", json={"index": 4})
        assert response.status_code == 200
        data = response.json()
        assert data["move"] == 4
        assert data["cells"][4] == 1
        assert data["turn"] == "O"

    @pytest.mark.parametrize("index", [-1, 9])
    def test_post_move_out_of_range(self, index):
        response = self.client.post("/move", json={"index": index})
        assert response.status_code == 400
        assert self.client.get("/board").json()["cells"] == [0] * 9

    def test_post_move_bad_payload(self):
        response = self.client.post("/move", json={"index": "centre"})
        assert response.status_code == 422

    def test_post_move_not_your_turn(self):
        self.client.post("/move", json={"index": 4})
        response = self.client.post("/move", json={"index": 0})
        assert response.status_code == 400

    def test_search_on_human_turn(self):
        response = self.client.post("/search")
        assert response.status_code == 400

    def test_search_returns_move(self):
        self.client.post("/move", json={"index": 0})
        response = self.client.post("/search", json={"depth": 9})
        assert response.status_code == 200
        data = response.json()
        assert data["best_move"] == 4
        assert data["cells"][4] == -1
        assert data["turn"] == "X"
        assert data["depth"] == 9

    def test_search_default_depth(self):
        self.client.post("/move", json={"index": 4})
        response = self.client.post("/search")
        assert response.status_code == 200
        assert response.json()["best_move"] in [0, 1, 2, 3, 5, 6, 7, 8]

    def test_search_game_over_returns_400(self):
        for i, p in [(0, PLAYER_A), (3, PLAYER_B), (1, PLAYER_A), (4, PLAYER_B), (2, PLAYER_A)]:
            self.game.board.apply(i, p)
        self.game.player_turn = False
        assert self.client.post("/search").status_code == 400
        assert self.client.post("/move", json={"index": 8}).status_code == 400
        assert self.client.get("/board").json()["outcome"] == "a_wins"

    def test_undo(self):
        self.client.post("/move", json={"index": 4})
        self.client.post("/search", json={"depth": 1})
        response = self.client.post("/undo")
        assert response.status_code == 200
        assert response.json()["cells"] == [0] * 9
        assert response.json()["turn"] == "X"

    def test_undo_nothing(self):
        assert self.client.post("/undo").status_code == 400

    def test_difficulty(self):
        assert self.client.post("/difficulty", json={"depth": 12}).json()["difficulty"] == 9
        assert self.client.post("/difficulty", json={"depth": 0}).json()["difficulty"] == 1
        assert self.client.get("/board").json()["difficulty"] == 1

    def test_reset_board(self):
        self.client.post("/move", json={"index": 4})
        response = self.client.post("/reset")
        assert response.status_code == 200
        assert response.json()["cells"] == [0] * 9

    def test_full_api_game_flow(self):
        """Play a whole game via the API; the depth-9 engine must not lose."""
        for cell in (0, 8, 2, 6, 1, 3, 5, 7, 4):
            state = self.client.get("/board").json()
            if state["is_game_over"]:
                break
            if cell not in state["empty_cells"]:
                continue
            assert self.client.post("/move", json={"index": cell}).status_code == 200
            if self.client.get("/board").json()["is_game_over"]:
                break
            assert self.client.post("/search", json={"depth": 9}).status_code == 200
        final = self.client.get("/board").json()
        assert final["outcome"] in ("b_wins", "draw")
