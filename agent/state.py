"""
Game state manager: the single owner of the position and its snapshot arena.

Every ply the agent applies is recorded as a Snapshot appended to `states`,
and the Position only stores the integer index of the active snapshot. When
an opponent move arrives the whole arena is thrown away and rebuilt from a
copy of the current board, so the history never grows beyond the root plus
the two plies of the latest exchange.

Invariant: len(states) == plies_since_reset + 1.
"""

import logging
from dataclasses import dataclass

import chess

from agent import codec
from agent.config import AgentConfig
from agent.constants import START_FEN
from agent.move import MOVE_NONE, Move, MoveKind
from agent.position import Position
from agent.selector import MoveSelector

_log = logging.getLogger(__name__)


class GameStateError(RuntimeError):
    """A move or undo request that the current game state cannot honour."""


@dataclass(frozen=True)
class Snapshot:
    """
    Record of one applied ply.

    Attributes:
        move:            The move that produced this position (MOVE_NONE for
                         the root of the arena).
        turn:            Side to move after the move.
        castling_rights: python-chess castling bitboard after the move.
        ep_square:       En-passant target square, if any.
        halfmove_clock:  Plies since the last capture or pawn move.
        fullmove_number: Full move counter.
    """

    move: Move
    turn: chess.Color
    castling_rights: chess.Bitboard
    ep_square: chess.Square | None
    halfmove_clock: int
    fullmove_number: int

    @classmethod
    def capture(cls, board: chess.Board, move: Move = MOVE_NONE) -> "Snapshot":
        return cls(
            move=move,
            turn=board.turn,
            castling_rights=board.castling_rights,
            ep_square=board.ep_square,
            halfmove_clock=board.halfmove_clock,
            fullmove_number=board.fullmove_number,
        )


class GameState:
    """
    Authoritative game state for one agent.

    Attributes:
        config:   The configuration this game was built from.
        selector: Move selector used for the agent's own moves.
        position: The current position.
        states:   Snapshot arena; states[0] is the root of the current history.
    """

    def __init__(self, config: AgentConfig | None = None, selector: MoveSelector | None = None) -> None:
        self.config: AgentConfig = config if config is not None else AgentConfig()
        self.selector: MoveSelector = selector if selector is not None else MoveSelector(seed=self.config.seed)
        self.position: Position
        self.states: list[Snapshot]
        self.initialize(self.config.start_fen, self.config.chess960)

    # -----------------------------------------------------------------------
    # Setup
    # -----------------------------------------------------------------------

    def initialize(self, fen: str = START_FEN, chess960: bool = False) -> None:
        """Set the position from FEN and start a single-snapshot arena."""
        self._reset_to(Position.from_fen(fen, chess960))

    def reset(self) -> None:
        """
        Discard the history and start a fresh arena at the current position.

        The board is copied without its move stack, so no state from the old
        arena survives.
        """
        self._reset_to(self.position.copy())

    def _reset_to(self, position: Position) -> None:
        self.position = position
        self.states = [Snapshot.capture(position.board)]
        self.position.state_index = 0

    # -----------------------------------------------------------------------
    # Accessors
    # -----------------------------------------------------------------------

    @property
    def plies_since_reset(self) -> int:
        return len(self.states) - 1

    @property
    def current_snapshot(self) -> Snapshot:
        return self.states[self.position.state_index]

    def encode(self, move: Move) -> str:
        return codec.encode(move, self.position.chess960)

    def decode(self, text: str) -> Move:
        return codec.decode(text, self.position)

    # -----------------------------------------------------------------------
    # Moves
    # -----------------------------------------------------------------------

    def apply(self, move: Move) -> None:
        """
        Play `move` and record it in the arena.

        Raises:
            GameStateError: if `move` is the MOVE_NONE sentinel.
        """
        if move.kind is MoveKind.NONE:
            raise GameStateError("cannot apply the no-move sentinel")
        self.position.apply(move)
        self.states.append(Snapshot.capture(self.position.board, move))
        self.position.state_index = len(self.states) - 1

    def undo(self) -> Move:
        """
        Take back the last applied ply.

        Returns:
            The move that was taken back.

        Raises:
            GameStateError: if only the root snapshot remains.
        """
        if len(self.states) == 1:
            raise GameStateError("no ply to undo since the last reset")
        snapshot = self.states.pop()
        self.position.undo()
        self.position.state_index = len(self.states) - 1
        return snapshot.move

    def play_opening_move(self) -> str:
        """
        Select and apply the agent's move from the current position.

        Returns:
            The move's notation, or "(none)" if there is no move to play (in
            which case nothing is applied).
        """
        move = self.selector.choose(self.position)
        if move.kind is MoveKind.NONE:
            _log.info("no move available from %s", self.position.fen())
        else:
            self.apply(move)
            _log.debug("opening move %s", self.encode(move))
        return self.encode(move)

    def apply_opponent_then_counter(self, move: Move) -> str:
        """
        Apply the opponent's move, then select and apply a reply.

        The arena is reset first, so afterwards it holds exactly the root and
        the two plies of this exchange (or only the opponent's ply when the
        position after it is terminal).

        Args:
            move: A move decoded against the current position.

        Returns:
            The counter-move's notation, or "(none)" for a terminal position.
        """
        self.reset()
        self.apply(move)

        counter = self.selector.choose(self.position)
        if counter.kind is MoveKind.NONE:
            _log.info("game over after %s: no reply available", self.encode(move))
            return self.encode(counter)

        self.apply(counter)
        _log.debug("opponent %s, counter %s", self.encode(move), self.encode(counter))
        return self.encode(counter)
