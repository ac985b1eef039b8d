"""Unit tests for evaluation and the Engine class."""

import pytest
import time
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cnchess import (
    Board, Move, Piece, Side, Engine,
    best_move, evaluate, generate_moves, is_legal_move,
)
from cnchess.constants import DEFAULT_SEARCH_DEPTH, SCORE_MIN, SCORE_MAX


class TestEvaluation:
    """Test static evaluation."""

    def test_start_is_balanced(self):
        """Test the symmetric start scores zero."""
        assert evaluate(Board()) == 0

    def test_missing_rook(self):
        """Test removing an UP rook favours DOWN by its value and bonus."""
        board = Board()
        board.set(2, 2, Piece.EMPTY)  # a9 rook, bonus +6

        assert evaluate(board) == 94

    def test_single_piece(self):
        """Test material plus position for a lone general."""
        board = Board(custom_setup={"e0": "g"})

        assert evaluate(board) == 10000 + 5

    def test_up_is_negative(self):
        """Test UP pieces lower the score."""
        board = Board(custom_setup={"e5": "R"})

        # UP rook table, row 4 col 4
        assert evaluate(board) == -100 - 15

    def test_empty_board(self):
        """Test an empty board scores zero."""
        assert evaluate(Board(custom_setup={})) == 0


class TestEngineInitialization:
    """Test engine initialization."""

    def test_default_initialization(self):
        """Test default engine initialization."""
        engine = Engine()

        assert engine.depth == DEFAULT_SEARCH_DEPTH
        assert engine.nodes_searched == 0

    def test_custom_depth(self):
        """Test engine with custom depth."""
        assert Engine(depth=2).depth == 2

    def test_negative_depth(self):
        """Test a negative depth is rejected."""
        with pytest.raises(ValueError):
            Engine(depth=-1)


class TestEngineSearch:
    """Test engine search functionality."""

    def test_neither_side(self):
        """Test NEITHER returns the zero move without searching."""
        engine = Engine(depth=1)

        move = engine.search(Board(), Side.NEITHER)

        assert move == Move.null()
        assert engine.nodes_searched == 0

    def test_search_returns_legal_move(self):
        """Test search returns one of the generated moves."""
        board = Board()

        for side in (Side.DOWN, Side.UP):
            move = best_move(board, side, 1)
            assert move in generate_moves(board, side)
            assert is_legal_move(board, move)

    def test_search_restores_board(self):
        """Test the board is unchanged after a search."""
        board = Board()
        board.apply_move(Move.from_uci("b2e2"))
        snapshot = board.copy()

        best_move(board, Side.UP, 2)

        assert board == snapshot
        assert board.history == snapshot.history

    def test_search_updates_stats(self):
        """Test search updates node count."""
        engine = Engine(depth=1)

        engine.search(Board(), Side.DOWN)

        assert engine.nodes_searched > 44

    def test_search_no_moves(self):
        """Test a side without pieces gets the zero move."""
        board = Board(custom_setup={"e9": "G"})

        assert best_move(board, Side.DOWN, 2) == Move.null()

    def test_depth_zero_extremal(self):
        """Test depth 0 picks the best static score, last one on ties."""
        board = Board()
        board.apply_move(Move.from_uci("h2e2"))

        for side, pick in ((Side.DOWN, max), (Side.UP, min)):
            scores = []
            for move in generate_moves(board, side):
                board.apply_move(move)
                scores.append((move, evaluate(board)))
                board.undo_last()
            target = pick(score for _, score in scores)
            expected = [move for move, score in scores if score == target][-1]

            assert best_move(board, side, 0) == expected

    def test_ties_pick_last_move(self):
        """Test equal scores resolve to the last generated move."""
        down_board = Board(custom_setup={"e1": "a"})
        up_board = Board(custom_setup={"e8": "A"})

        assert best_move(down_board, Side.DOWN, 0) == Move.from_uci("e1d2")
        assert best_move(up_board, Side.UP, 0) == Move.from_uci("e8d9")

    def test_captures_hanging_rook(self):
        """Test an undefended rook is taken."""
        board = Board(custom_setup={"e0": "g", "d9": "G", "a0": "r", "a9": "R"})

        assert best_move(board, Side.DOWN, 1) == Move.from_uci("a0a9")

    def test_up_captures_hanging_rook(self):
        """Test UP takes an undefended rook as well."""
        board = Board(custom_setup={"d0": "g", "e9": "G", "a0": "r", "a9": "R"})

        assert best_move(board, Side.UP, 1) == Move.from_uci("a9a0")

    def test_takes_general(self):
        """Test a flying-general capture is found."""
        board = Board(custom_setup={"e0": "g", "e9": "G", "a3": "p"})

        assert best_move(board, Side.DOWN, 1) == Move.from_uci("e0e9")

    def test_search_is_deterministic(self):
        """Test identical positions give identical moves."""
        board = Board()

        assert best_move(board, Side.DOWN, 1) == best_move(Board(), Side.DOWN, 1)


def plain_minimax(board: Board, depth: int, side: Side) -> int:
    """Full-width minimax without pruning."""
    if depth == 0:
        return evaluate(board)
    opponent = side.reverse()
    best = SCORE_MAX if side == Side.UP else SCORE_MIN
    for move in generate_moves(board, side):
        board.apply_move(move)
        value = plain_minimax(board, depth - 1, opponent)
        board.undo_last()
        best = min(best, value) if side == Side.UP else max(best, value)
    return best


def plain_best_move(board: Board, side: Side, depth: int) -> Move:
    """Root loop with the same full-depth children and last-wins ties."""
    best = SCORE_MAX if side == Side.UP else SCORE_MIN
    chosen = Move.null()
    for move in generate_moves(board, side):
        board.apply_move(move)
        value = plain_minimax(board, depth, side.reverse())
        board.undo_last()
        if (side == Side.UP and value <= best) or (side == Side.DOWN and value >= best):
            best = value
            chosen = move
    return chosen


MIDDLEGAMES = [
    {"e0": "g", "d9": "G", "a0": "r", "a9": "R", "b2": "c", "h7": "C",
     "c3": "p", "g6": "P", "b0": "n", "h9": "N"},
    {"e0": "g", "e9": "G", "e1": "a", "d9": "A", "c0": "b", "g9": "B",
     "e5": "r", "e4": "R", "a3": "p", "i6": "P"},
    {"f1": "g", "d8": "G", "c4": "n", "f7": "N", "e2": "c", "e7": "C",
     "b6": "p", "h3": "P", "i0": "r"},
]


class TestPruning:
    """Test alpha-beta picks the same move as full-width minimax."""

    @pytest.mark.parametrize("setup", MIDDLEGAMES)
    @pytest.mark.parametrize("side", [Side.DOWN, Side.UP])
    def test_depth_two_matches_minimax(self, setup, side):
        board = Board(custom_setup=setup)

        assert best_move(board, side, 2) == plain_best_move(board, side, 2)
        assert board == Board(custom_setup=setup)

    def test_start_position_matches_minimax(self):
        board = Board()

        for side in (Side.DOWN, Side.UP):
            assert best_move(board, side, 1) == plain_best_move(board, side, 1)


class TestSearchTime:
    """Test the default depth stays interactive."""

    def test_default_depth_reply_time(self):
        board = Board()
        board.apply_move(Move.from_uci("h2e2"))

        start = time.perf_counter()
        move = best_move(board, Side.UP)
        elapsed = time.perf_counter() - start

        assert is_legal_move(board, move)
        assert elapsed < 30.0
