"""
python-chess adapter: the engine-core side of the agent.

Position wraps a chess.Board and exposes the handful of primitives the rest of
the agent relies on:

    - legal-move enumeration
    - capture-move enumeration (pseudo-legal, so it may contain captures that
      leave the mover's king attacked)
    - apply / undo of a single move
    - FEN get/set
    - the alternate (Chess960) castling notation flag

All moves crossing this boundary are converted to the agent's own Move type,
so nothing outside this module touches chess.Move directly.
"""

import chess

from agent.constants import START_FEN
from agent.move import MOVE_NULL, Move, MoveKind


def from_chess_move(board: chess.Board, move: chess.Move) -> Move:
    """
    Convert a python-chess move generated from `board` into a Move.

    Must be called before the move is pushed: castling detection looks at the
    pieces currently on the board.

    Args:
        board: The position the move was generated from.
        move:  A move produced by one of the board's generators.

    Returns:
        The canonical Move. Castling is normalised to king-captures-rook.
    """
    if not move:
        return MOVE_NULL

    if board.is_castling(move):
        rook_square = move.to_square
        if board.color_at(rook_square) != board.turn:
            # Standard-mode form (e1g1 / e1c1): recover the rook's corner.
            rank = chess.square_rank(move.from_square)
            file = 7 if move.to_square > move.from_square else 0
            rook_square = chess.square(file, rank)
        return Move(move.from_square, rook_square, MoveKind.CASTLING)

    if move.promotion:
        return Move(move.from_square, move.to_square, MoveKind.PROMOTION, move.promotion)

    return Move(move.from_square, move.to_square)


def to_chess_move(move: Move) -> chess.Move:
    """
    Convert a Move back to a python-chess move suitable for Board.push().

    Castling is returned in king-captures-rook form; Board.push() accepts that
    form regardless of the board's chess960 flag.

    Raises:
        ValueError: for the MOVE_NONE sentinel, which has no board meaning.
    """
    if move.kind is MoveKind.NONE:
        raise ValueError("the no-move sentinel cannot be played")
    if move.kind is MoveKind.NULL:
        return chess.Move.null()
    return chess.Move(move.from_square, move.to_square, promotion=move.promotion)


class Position:
    """
    A chess position plus its index into the owning snapshot arena.

    The Position never references a snapshot directly; `state_index` is an
    integer maintained by the game state manager, which owns the arena.

    Attributes:
        board:       The underlying python-chess board.
        state_index: Index of the active snapshot in the owner's arena.
    """

    def __init__(self, board: chess.Board | None = None) -> None:
        self.board: chess.Board = board if board is not None else chess.Board()
        self.state_index: int = 0

    @classmethod
    def from_fen(cls, fen: str = START_FEN, chess960: bool = False) -> "Position":
        """Build a position from FEN. Raises ValueError on malformed FEN."""
        return cls(chess.Board(fen, chess960=chess960))

    @property
    def chess960(self) -> bool:
        """True when castling is written in king-to-rook-square notation."""
        return self.board.chess960

    @property
    def turn(self) -> chess.Color:
        return self.board.turn

    def fen(self) -> str:
        return self.board.fen()

    def set_fen(self, fen: str) -> None:
        """Replace the position, discarding any move history."""
        self.board.set_fen(fen)
        self.state_index = 0

    def legal_moves(self) -> list[Move]:
        """All legal moves, in python-chess generation order."""
        return [from_chess_move(self.board, m) for m in self.board.generate_legal_moves()]

    def capture_moves(self) -> list[Move]:
        """
        All pseudo-legal captures, in python-chess generation order.

        Pseudo-legal means the mover's king may be left in check, so this list
        can contain moves that legal_moves() does not.
        """
        return [
            from_chess_move(self.board, m)
            for m in self.board.generate_pseudo_legal_captures()
        ]

    def apply(self, move: Move) -> None:
        """Play `move` on the board. Legality is the caller's concern."""
        self.board.push(to_chess_move(move))

    def undo(self) -> None:
        """Take back the last applied move."""
        self.board.pop()

    def copy(self) -> "Position":
        """A detached copy of the current board without its move history."""
        return Position(self.board.copy(stack=False))
