"""Xiangqi AI engine with minimax search."""

import logging
from time import time

from .board import Board
from .constants import DEFAULT_SEARCH_DEPTH, SCORE_MIN, SCORE_MAX
from .evaluation import evaluate
from .move import Move
from .moves import generate_moves
from .piece import Side

logger = logging.getLogger(__name__)


class Engine:
    """Minimax engine with alpha-beta pruning."""

    def __init__(self, depth: int = DEFAULT_SEARCH_DEPTH):
        """Initialize engine.

        Args:
            depth: Search depth below the root move (0 scores each root move
                by static evaluation alone)
        """
        if depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {depth}")
        self.depth = depth
        self.nodes_searched = 0

    def search(self, board: Board, side: Side) -> Move:
        """Search for the best move of side.

        The board is left exactly as it was found. Returns the zero move when
        side is NEITHER or has no moves. On equal scores the move generated
        last wins.
        """
        self.nodes_searched = 0
        if side == Side.NEITHER:
            return Move.null()

        start = time()
        alpha = SCORE_MIN
        beta = SCORE_MAX
        best_move = Move.null()
        opponent = side.reverse()

        if side == Side.UP:
            best_value = beta
            for move in generate_moves(board, side):
                board.apply_move(move)
                value = self._minimax(board, self.depth, alpha, beta, opponent)
                board.undo_last()
                if value <= best_value:
                    best_value = value
                    best_move = move
        else:
            best_value = alpha
            for move in generate_moves(board, side):
                board.apply_move(move)
                value = self._minimax(board, self.depth, alpha, beta, opponent)
                board.undo_last()
                if value >= best_value:
                    best_value = value
                    best_move = move

        logger.debug(
            "search side=%s depth=%d best=%s value=%d nodes=%d in %.3fs",
            side.value, self.depth, best_move, best_value,
            self.nodes_searched, time() - start,
        )
        return best_move

    def _minimax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        side: Side
    ) -> int:
        """Minimax with alpha-beta pruning. UP minimises, DOWN maximises."""
        self.nodes_searched += 1

        if depth == 0:
            return evaluate(board)

        if side == Side.UP:
            min_eval = SCORE_MAX
            for move in generate_moves(board, Side.UP):
                board.apply_move(move)
                eval_score = self._minimax(board, depth - 1, alpha, beta, Side.DOWN)
                board.undo_last()
                min_eval = min(min_eval, eval_score)
                beta = min(beta, min_eval)
                if alpha >= beta:
                    break
            return min_eval
        else:
            max_eval = SCORE_MIN
            for move in generate_moves(board, Side.DOWN):
                board.apply_move(move)
                eval_score = self._minimax(board, depth - 1, alpha, beta, Side.UP)
                board.undo_last()
                max_eval = max(max_eval, eval_score)
                alpha = max(alpha, max_eval)
                if alpha >= beta:
                    break
            return max_eval


def best_move(board: Board, side: Side, depth: int = DEFAULT_SEARCH_DEPTH) -> Move:
    """Best move for side at the given depth; see Engine.search."""
    return Engine(depth).search(board, side)
