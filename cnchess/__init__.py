"""Chinese chess (Xiangqi) engine."""

from .piece import (
    Side, PieceKind, Piece, PieceInfo, PIECE_INFO,
    piece_side, piece_kind, piece_char, piece_value, piece_pos_value,
    make_piece, piece_from_char,
)
from .move import Move, HistoryEntry
from .board import Board, new_board
from .moves import generate_moves, is_legal_move
from .evaluation import evaluate
from .engine import Engine, best_move
from .rules import is_own_piece, check_winner
from .notation import (
    square_to_coords, coords_to_square,
    is_move_string, parse_move, move_to_string,
)

__all__ = [
    # Pieces
    'Side', 'PieceKind', 'Piece', 'PieceInfo', 'PIECE_INFO',
    'piece_side', 'piece_kind', 'piece_char', 'piece_value', 'piece_pos_value',
    'make_piece', 'piece_from_char',
    # Board and moves
    'Move', 'HistoryEntry', 'Board', 'new_board',
    'generate_moves', 'is_legal_move',
    # Evaluation and search
    'evaluate', 'Engine', 'best_move',
    # Game rules
    'is_own_piece', 'check_winner',
    # Notation
    'square_to_coords', 'coords_to_square',
    'is_move_string', 'parse_move', 'move_to_string',
]
