"""FastAPI backend for Xiangqi games against the engine."""

import os
import asyncio
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from time import time

from cnchess import (
    Board, Move, Side, Engine,
    generate_moves, is_legal_move, is_own_piece, check_winner, evaluate,
    parse_move, move_to_string, piece_side,
)
from cnchess.constants import DEFAULT_SEARCH_DEPTH, MIN_SEARCH_DEPTH, MAX_SEARCH_DEPTH

logger = logging.getLogger("cnchess.api")

# Thread pool for CPU-intensive AI operations
executor = ThreadPoolExecutor(max_workers=4)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    yield
    # Cleanup: shutdown thread pool on app shutdown
    executor.shutdown(wait=True)


app = FastAPI(title="Xiangqi AI Engine", lifespan=lifespan)


def _get_default_depth() -> int:
    """Search depth for new games; CNCHESS_SEARCH_DEPTH overrides the default."""
    env_depth = os.environ.get("CNCHESS_SEARCH_DEPTH")
    if env_depth is None:
        return DEFAULT_SEARCH_DEPTH
    try:
        depth = int(env_depth)
    except ValueError:
        logger.warning("Ignoring invalid CNCHESS_SEARCH_DEPTH=%r", env_depth)
        return DEFAULT_SEARCH_DEPTH
    return min(max(depth, MIN_SEARCH_DEPTH), MAX_SEARCH_DEPTH)


DEFAULT_DEPTH = _get_default_depth()


class GameState:
    """One game: the board, the engine playing ai_side, and a lock."""

    def __init__(self, board: Board, engine: Engine, user_side: Side):
        self.board = board
        self.engine = engine
        self.user_side = user_side
        self.ai_side = user_side.reverse()
        self.lock = asyncio.Lock()
        self.last_access = time()


games: Dict[str, GameState] = {}
games_lock = asyncio.Lock()


async def get_game_state(game_id: str) -> GameState:
    """Get game state with proper error handling."""
    async with games_lock:
        if game_id not in games:
            raise HTTPException(status_code=404, detail="Game not found")
        game_state = games[game_id]
        game_state.last_access = time()
        return game_state


class NewGameRequest(BaseModel):
    """Request model for creating a new game."""

    game_id: Optional[str] = None
    depth: int = Field(default=DEFAULT_DEPTH, ge=MIN_SEARCH_DEPTH, le=MAX_SEARCH_DEPTH)
    user_side: Side = Side.DOWN


class MoveRequest(BaseModel):
    """Request model for making a move."""

    game_id: str
    move: str  # e.g., "b2e2"


class DifficultyRequest(BaseModel):
    """Request model for changing the search depth."""

    depth: int = Field(ge=MIN_SEARCH_DEPTH, le=MAX_SEARCH_DEPTH)


class BoardResponse(BaseModel):
    """Response model for board state."""

    game_id: str
    board: List[str]  # glyph rows, top row first
    text: str
    user_side: str
    ai_side: str
    depth: int
    score: int
    winner: Optional[str]
    legal_moves: List[str]
    history_length: int


class MoveResponse(BaseModel):
    """Response model for a user move and the AI reply."""

    move: str
    ai_move: Optional[str] = None
    nodes_searched: int = 0
    winner: Optional[str] = None


def _winner_name(board: Board) -> Optional[str]:
    winner = check_winner(board)
    return None if winner == Side.NEITHER else winner.value


def _board_response(game_id: str, game_state: GameState) -> BoardResponse:
    board = game_state.board
    return BoardResponse(
        game_id=game_id,
        board=board.to_rows(),
        text=board.to_text(),
        user_side=game_state.user_side.value,
        ai_side=game_state.ai_side.value,
        depth=game_state.engine.depth,
        score=evaluate(board),
        winner=_winner_name(board),
        legal_moves=[
            move_to_string(move) for move in generate_moves(board, game_state.user_side)
        ],
        history_length=len(board.history),
    )


def _run_ai_search(engine: Engine, board: Board, side: Side) -> Move:
    """CPU-bound search, run in the thread pool."""
    return engine.search(board, side)


async def _search(game_state: GameState, side: Side) -> Move:
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(
        executor, _run_ai_search, game_state.engine, game_state.board, side
    )


async def _play_ai_move(game_id: str, game_state: GameState) -> Move:
    """Search and apply the AI's move; the zero move if it has none."""
    ai_move = await _search(game_state, game_state.ai_side)
    if ai_move.is_null():
        logger.info("Game %s: AI has no moves", game_id)
        return ai_move

    game_state.board.apply_move(ai_move)
    logger.info(
        "Game %s: AI played %s (%d nodes)",
        game_id, ai_move, game_state.engine.nodes_searched,
    )
    return ai_move


async def _play_ai_opening(game_id: str, game_state: GameState) -> None:
    # DOWN moves first
    if game_state.ai_side == Side.DOWN:
        await _play_ai_move(game_id, game_state)


@app.post("/api/new-game")
async def new_game(request: NewGameRequest):
    """Create a new game in the starting position."""
    if request.user_side == Side.NEITHER:
        raise HTTPException(status_code=400, detail="user_side must be UP or DOWN")

    game_id = request.game_id or uuid.uuid4().hex
    game_state = GameState(Board(), Engine(depth=request.depth), request.user_side)

    async with games_lock:
        games[game_id] = game_state

    logger.info(
        "New game %s: user=%s depth=%d", game_id, request.user_side.value, request.depth
    )
    async with game_state.lock:
        await _play_ai_opening(game_id, game_state)
        return _board_response(game_id, game_state)


@app.get("/api/board/{game_id}")
async def get_board(game_id: str):
    """Get board state."""
    game_state = await get_game_state(game_id)
    async with game_state.lock:
        return _board_response(game_id, game_state)


@app.post("/api/move")
async def make_move(request: MoveRequest):
    """Play the user's move, then let the AI reply."""
    game_state = await get_game_state(request.game_id)

    try:
        move = parse_move(request.move)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid move notation: {e}")

    async with game_state.lock:
        board = game_state.board

        if check_winner(board) != Side.NEITHER:
            raise HTTPException(status_code=400, detail="Game is over")
        if not is_own_piece(board, move, game_state.user_side):
            raise HTTPException(
                status_code=400, detail="This piece is not yours, please choose your piece"
            )
        if not is_legal_move(board, move):
            raise HTTPException(status_code=400, detail="Illegal move")

        board.apply_move(move)
        logger.info("Game %s: user played %s", request.game_id, move)

        winner = check_winner(board)
        if winner == game_state.user_side:
            return MoveResponse(move=move_to_string(move), winner=winner.value)

        ai_move = await _play_ai_move(request.game_id, game_state)
        if ai_move.is_null():
            return MoveResponse(move=move_to_string(move), winner=_winner_name(board))

        return MoveResponse(
            move=move_to_string(move),
            ai_move=move_to_string(ai_move),
            nodes_searched=game_state.engine.nodes_searched,
            winner=_winner_name(board),
        )


@app.post("/api/undo/{game_id}")
async def undo_move(game_id: str):
    """Take back the user's last move and any AI reply played after it."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        board = game_state.board
        user_moves = [
            entry for entry in board.history
            if piece_side(entry.begin_piece) == game_state.user_side
        ]
        if not user_moves:
            raise HTTPException(status_code=400, detail="No moves to undo")

        while True:
            entry = board.history[-1]
            board.undo_last()
            if piece_side(entry.begin_piece) == game_state.user_side:
                break
        return _board_response(game_id, game_state)


@app.post("/api/reset/{game_id}")
async def reset_game(game_id: str):
    """Start the game over from the initial position."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        game_state.board.reset()
        logger.info("Game %s reset", game_id)
        await _play_ai_opening(game_id, game_state)
        return _board_response(game_id, game_state)


@app.get("/api/advice/{game_id}")
async def get_advice(game_id: str):
    """Suggest a move for the user."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        if check_winner(game_state.board) != Side.NEITHER:
            raise HTTPException(status_code=400, detail="Game is over")
        advice = await _search(game_state, game_state.user_side)
        if advice.is_null():
            raise HTTPException(status_code=400, detail="No legal moves available")
        piece = game_state.board.get(advice.begin_row, advice.begin_col)
        return {
            "move": move_to_string(advice),
            "piece": str(piece),
            "nodes_searched": game_state.engine.nodes_searched,
        }


@app.post("/api/difficulty/{game_id}")
async def set_difficulty(game_id: str, request: DifficultyRequest):
    """Change the search depth of a game."""
    game_state = await get_game_state(game_id)

    async with game_state.lock:
        game_state.engine.depth = request.depth
        logger.info("Game %s: depth set to %d", game_id, request.depth)
        return {"status": "ok", "depth": request.depth}
