"""
The tagged move value passed between the codec, the selector, and the game
state manager.

python-chess represents castling differently depending on the board's
chess960 flag (e1g1 in standard mode, e1h1 in Chess960 mode). The agent needs
a single canonical form so that membership tests and notation rewriting do
not depend on the mode, so castling is always stored here as "king captures
own rook" and the codec rewrites the destination when standard notation is
requested.
"""

import enum
from dataclasses import dataclass

import chess


class MoveKind(enum.Enum):
    """Discriminator for the Move tagged value."""

    NORMAL = "normal"
    PROMOTION = "promotion"
    CASTLING = "castling"
    NULL = "null"
    NONE = "none"


@dataclass(frozen=True)
class Move:
    """
    A move in the agent's canonical representation.

    Attributes:
        from_square: python-chess square index of the moving piece (a1 == 0).
        to_square:   Destination square. For castling this is the square of
                     the rook being "captured", never the king's landing square.
        kind:        What sort of move this is.
        promotion:   python-chess piece type promoted to. Only valid (and
                     required) when kind is PROMOTION.
    """

    from_square: chess.Square = 0
    to_square: chess.Square = 0
    kind: MoveKind = MoveKind.NORMAL
    promotion: chess.PieceType | None = None

    def __post_init__(self) -> None:
        if self.kind is MoveKind.PROMOTION:
            if self.promotion not in chess.PIECE_TYPES:
                raise ValueError(f"promotion move needs a piece type, got {self.promotion!r}")
        elif self.promotion is not None:
            raise ValueError(f"{self.kind.value} move cannot carry a promotion piece")

    def __bool__(self) -> bool:
        # Mirrors chess.Move: sentinels are falsy.
        return self.kind not in (MoveKind.NONE, MoveKind.NULL)


MOVE_NONE = Move(kind=MoveKind.NONE)
MOVE_NULL = Move(kind=MoveKind.NULL)
