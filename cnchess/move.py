"""Move and history records."""

from dataclasses import dataclass

from .piece import Piece


@dataclass(frozen=True)
class Move:
    """A move in padded board coordinates."""

    begin_row: int
    begin_col: int
    end_row: int
    end_col: int

    @classmethod
    def null(cls) -> "Move":
        """The zero move, returned when there is nothing to play."""
        return cls(0, 0, 0, 0)

    def is_null(self) -> bool:
        return self == Move.null()

    def to_uci(self) -> str:
        """Convert to file/rank notation, e.g. "b2e2"."""
        from .notation import move_to_string

        return move_to_string(self)

    @classmethod
    def from_uci(cls, text: str) -> "Move":
        """Parse file/rank notation."""
        from .notation import parse_move

        return parse_move(text)

    def __str__(self) -> str:
        if self.is_null():
            return "0000"
        return self.to_uci()


@dataclass(frozen=True)
class HistoryEntry:
    """A played move and the two cells as they were before it."""

    move: Move
    begin_piece: Piece
    end_piece: Piece
