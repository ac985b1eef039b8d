"""Xiangqi board representation with move/undo."""

from typing import Dict, Iterator, List, Optional, Tuple

from .constants import (
    BOARD_ROWS,
    BOARD_COLS,
    ROW_BEGIN,
    ROW_END,
    COL_BEGIN,
    COL_END,
    PLAY_ROWS,
)
from .move import Move, HistoryEntry
from .notation import FILES, RANKS, square_to_coords
from .piece import Piece, piece_char, piece_from_char

# Starting layout, one glyph per padded cell. UP at the top, DOWN at the bottom.
START_LAYOUT = (
    "#############",
    "#############",
    "##RNBAGABNR##",
    "##.........##",
    "##.C.....C.##",
    "##P.P.P.P.P##",
    "##.........##",
    "##.........##",
    "##p.p.p.p.p##",
    "##.c.....c.##",
    "##.........##",
    "##rnbagabnr##",
    "#############",
    "#############",
)


def _start_grid() -> List[List[Piece]]:
    return [[piece_from_char(char) for char in line] for line in START_LAYOUT]


def _empty_grid() -> List[List[Piece]]:
    grid = [[Piece.OUT for _ in range(BOARD_COLS)] for _ in range(BOARD_ROWS)]
    for row in range(ROW_BEGIN, ROW_END):
        for col in range(COL_BEGIN, COL_END):
            grid[row][col] = Piece.EMPTY
    return grid


class Board:
    """Xiangqi board in padded coordinates."""

    ROWS = BOARD_ROWS
    COLS = BOARD_COLS

    def __init__(self, custom_setup: Optional[Dict[str, str]] = None):
        """Initialize board.

        Args:
            custom_setup: Optional dictionary mapping squares (e.g., "e0") to
                piece glyphs (e.g., "g" for the DOWN general). When given, the
                board starts empty apart from these pieces.

        Raises:
            ValueError: if a square in custom_setup is malformed.
            KeyError: if a glyph in custom_setup is unknown.
        """
        self.grid: List[List[Piece]] = _start_grid()
        self._history: List[HistoryEntry] = []
        if custom_setup is not None:
            self._initialize_custom_position(custom_setup)

    def _initialize_custom_position(self, custom_setup: Dict[str, str]) -> None:
        self.grid = _empty_grid()
        for square, glyph in custom_setup.items():
            row, col = square_to_coords(square)
            self.grid[row][col] = piece_from_char(glyph)

    def get(self, row: int, col: int) -> Piece:
        return self.grid[row][col]

    def set(self, row: int, col: int, piece: Piece) -> None:
        self.grid[row][col] = piece

    def apply_move(self, move: Move) -> None:
        """Play a move, capturing whatever stands on the end cell.

        No legality check is done here; see moves.is_legal_move.
        """
        begin_piece = self.grid[move.begin_row][move.begin_col]
        end_piece = self.grid[move.end_row][move.end_col]
        self._history.append(HistoryEntry(move, begin_piece, end_piece))

        self.grid[move.begin_row][move.begin_col] = Piece.EMPTY
        self.grid[move.end_row][move.end_col] = begin_piece

    def undo_last(self) -> None:
        """Take back the last move. Does nothing if no move was played."""
        if not self._history:
            return
        entry = self._history.pop()
        move = entry.move
        self.grid[move.begin_row][move.begin_col] = entry.begin_piece
        self.grid[move.end_row][move.end_col] = entry.end_piece

    def reset(self) -> None:
        """Restore the starting position and forget the history."""
        self.grid = _start_grid()
        self._history.clear()

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    def copy(self) -> "Board":
        """Independent copy, including history."""
        clone = Board.__new__(Board)
        clone.grid = [list(row) for row in self.grid]
        clone._history = list(self._history)
        return clone

    def cells(self) -> Iterator[Tuple[int, int, Piece]]:
        """Yield (row, col, piece) over the playable region, top-left first."""
        for row in range(ROW_BEGIN, ROW_END):
            line = self.grid[row]
            for col in range(COL_BEGIN, COL_END):
                yield row, col, line[col]

    def to_rows(self) -> List[str]:
        """Glyph strings of the playable region, top row first."""
        return [
            "".join(piece_char(piece) for piece in self.grid[row][COL_BEGIN:COL_END])
            for row in range(ROW_BEGIN, ROW_END)
        ]

    def to_text(self) -> str:
        """Render the board for a console, ranks on the left, files below."""
        river_row = ROW_BEGIN + PLAY_ROWS // 2
        lines = ["", "    +-------------------+"]
        for index, glyphs in enumerate(self.to_rows()):
            if ROW_BEGIN + index == river_row:
                lines.append("    |===================|")
                lines.append("    |===================|")
            rank = RANKS[PLAY_ROWS - 1 - index]
            lines.append(f" {rank}  | {' '.join(glyphs)} |")
        lines.append("    +-------------------+")
        lines.append("")
        lines.append(f"      {' '.join(FILES)}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_text()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid


def new_board() -> Board:
    """Board in the standard starting position."""
    return Board()
