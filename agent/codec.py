"""
Coordinate-notation codec (g1f3, a7a8q, e1g1 / e1h1).

encode() is a pure function of the move and the castling convention.
decode() needs a position because a piece of text only means something
relative to the moves available in it: the text is matched against the
encodings of the position's own move enumerations rather than parsed into
squares, so anything that is not one of those moves decodes to MOVE_NONE.

Castling conventions:
    standard (alt_castling=False): the king's landing square, e1g1 / e1c1
    alternate (alt_castling=True): the rook's square, e1h1 / e1a1
"""

import chess

from agent.constants import (
    KINGSIDE_CASTLE_FILE,
    NONE_NOTATION,
    NULL_NOTATION,
    PROMOTION_LETTERS,
    PROMOTION_NOTATION_LENGTH,
    QUEENSIDE_CASTLE_FILE,
)
from agent.move import MOVE_NONE, Move, MoveKind
from agent.position import Position


def square_name(square: chess.Square) -> str:
    """Two-character name of a square: file letter then rank digit."""
    return chess.FILE_NAMES[chess.square_file(square)] + chess.RANK_NAMES[chess.square_rank(square)]


def parse_square(text: str) -> chess.Square:
    """
    Inverse of square_name().

    Raises:
        ValueError: if `text` is not exactly a file letter a-h and a rank 1-8.
    """
    if len(text) != 2 or text[0] not in chess.FILE_NAMES or text[1] not in chess.RANK_NAMES:
        raise ValueError(f"invalid square: {text!r}")
    return chess.square(chess.FILE_NAMES.index(text[0]), chess.RANK_NAMES.index(text[1]))


def encode(move: Move, alt_castling: bool) -> str:
    """
    Convert a move to coordinate notation.

    Args:
        move:         The move to encode. Sentinels encode to "(none)" / "0000".
        alt_castling: When False, castling is rewritten to the king's landing
                      square (g- or c-file); when True, the rook square is kept.

    Returns:
        Four characters, or five for a promotion.
    """
    if move.kind is MoveKind.NONE:
        return NONE_NOTATION
    if move.kind is MoveKind.NULL:
        return NULL_NOTATION

    from_square = move.from_square
    to_square = move.to_square

    if move.kind is MoveKind.CASTLING and not alt_castling:
        file = KINGSIDE_CASTLE_FILE if to_square > from_square else QUEENSIDE_CASTLE_FILE
        to_square = chess.square(file, chess.square_rank(from_square))

    text = square_name(from_square) + square_name(to_square)

    if move.kind is MoveKind.PROMOTION:
        text += PROMOTION_LETTERS[move.promotion]

    return text


def decode(text: str, position: Position) -> Move:
    """
    Find the move of `position` whose notation is `text`.

    The legal enumeration is searched before the (pseudo-legal) capture
    enumeration, first under the position's own castling convention and then
    under the other one, so both e1g1 and e1h1 are understood.

    Args:
        text:     A single whitespace-free token.
        position: The position the move is to be played in.

    Returns:
        The first matching move, or MOVE_NONE.
    """
    if len(text) == PROMOTION_NOTATION_LENGTH:
        text = text[:-1] + text[-1].lower()

    enumerations = (position.legal_moves(), position.capture_moves())

    for alt_castling in (position.chess960, not position.chess960):
        for moves in enumerations:
            for move in moves:
                if encode(move, alt_castling) == text:
                    return move

    return MOVE_NONE
