"""
Agent constants: starting position, notation sentinels, and protocol tokens.

Every literal that appears on the wire is defined here so that the codec and
the command loop never disagree about spelling. The promotion letter table is
indexed directly by python-chess piece type (PAWN == 1 ... KING == 6), which is
why index 0 is a blank placeholder.
"""

import chess

# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

START_FEN: str = chess.STARTING_FEN

# ---------------------------------------------------------------------------
# Move notation
# ---------------------------------------------------------------------------

NONE_NOTATION: str = "(none)"
NULL_NOTATION: str = "0000"

# " pnbrqk"[piece_type] gives the lowercase promotion suffix.
PROMOTION_LETTERS: str = " pnbrqk"

# Length of a coordinate move carrying a promotion suffix (e.g. "a7a8q").
PROMOTION_NOTATION_LENGTH: int = 5

# Files the king lands on when castling is written in standard notation.
KINGSIDE_CASTLE_FILE: int = chess.FILE_NAMES.index("g")
QUEENSIDE_CASTLE_FILE: int = chess.FILE_NAMES.index("c")

# ---------------------------------------------------------------------------
# Protocol tokens
# ---------------------------------------------------------------------------

SIDE_TOKENS: frozenset[str] = frozenset({"white", "black"})
SKIP_REPLY: str = "skip"
QUIT_TOKEN: str = "quit"
COMMENT_PREFIX: str = "#"
UNKNOWN_COMMAND_FORMAT: str = "Unknown command: '{line}'"
