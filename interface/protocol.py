"""
Line protocol handler for the antichess agent.

The controller drives the agent with one command per line on stdin. The agent
answers on stdout, one line per response, flushed immediately so that a
controller reading line-by-line never waits on a buffered reply.

Protocol overview:
    Controller → Agent: <move>, white, black, quit, blank lines, # comments
    Agent → Controller: <counter-move>, skip, (none), Unknown command: '<line>'

Dispatch is on the first whitespace-delimited token:
    white / black   acknowledged with "skip", no state change
    a move          opponent move applied, counter-move applied and printed
    quit            loop ends, nothing printed (end of input is the same)
    blank, #...     ignored
    anything else   "Unknown command: '<line>'", no state change

Threading model:
    None. The loop blocks on reading one line and finishes handling it
    (including the counter-move) before reading the next.

Critical rule: NEVER print to stdout except for protocol responses.
Diagnostics go through logging, which is configured onto stderr.
"""

import argparse
import logging
import os
import sys
from typing import Callable, Iterable

# ---------------------------------------------------------------------------
# Path setup: make 'agent' importable when this script is run directly
# (python interface/protocol.py) from a source checkout.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from pydantic import ValidationError

from agent.config import AgentConfig
from agent.constants import (
    COMMENT_PREFIX,
    QUIT_TOKEN,
    SIDE_TOKENS,
    SKIP_REPLY,
    START_FEN,
    UNKNOWN_COMMAND_FORMAT,
)
from agent.move import MoveKind
from agent.state import GameState, GameStateError

_log = logging.getLogger(__name__)


def _send(line: str) -> None:
    """Write a protocol line to stdout and flush immediately."""
    print(line, flush=True)


class CommandLoop:
    """
    The protocol state machine.

    Owns nothing but a reference to the game state; every state change goes
    through GameState. Responses are handed to `send`, which defaults to
    writing on stdout.

    Attributes:
        state:      The game state the commands act on.
        send:       Callable receiving each response line (no newline).
        terminated: True once "quit" or end of input has been seen.
    """

    def __init__(self, state: GameState, send: Callable[[str], None] = _send) -> None:
        self.state: GameState = state
        self.send: Callable[[str], None] = send
        self.terminated: bool = False

    def start(self) -> None:
        """Play the opening move if the agent is configured to move first."""
        if self.state.config.moves_first:
            self.send(self.state.play_opening_move())

    def dispatch(self, line: str) -> bool:
        """
        Handle one input line.

        Args:
            line: The raw line, with or without its line terminator.

        Returns:
            False once the loop should stop, True otherwise.
        """
        line = line.rstrip("\r\n")
        tokens = line.split()
        token = tokens[0] if tokens else ""

        if token == QUIT_TOKEN:
            self.terminated = True
            return False

        if token in SIDE_TOKENS:
            self.send(SKIP_REPLY)
            return True

        if not token or token.startswith(COMMENT_PREFIX):
            return True

        move = self.state.decode(token)
        if move.kind is not MoveKind.NONE:
            self.send(self.state.apply_opponent_then_counter(move))
            return True

        _log.debug("unknown command %r", line)
        self.send(UNKNOWN_COMMAND_FORMAT.format(line=line))
        return True

    def run(self, lines: Iterable[str]) -> None:
        """
        Dispatch lines until "quit" or until `lines` is exhausted.

        Broken game-state invariants are fatal: they are logged with their
        traceback and re-raised.
        """
        for line in lines:
            try:
                if not self.dispatch(line):
                    return
            except GameStateError:
                _log.exception("game state invariant violated on %r", line)
                raise
        self.terminated = True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="antichess-agent",
        description="Mandatory-capture random chess agent speaking a line protocol on stdin/stdout.",
    )
    parser.add_argument("side", type=str.lower, choices=sorted(SIDE_TOKENS), help="side the agent plays; white moves first")
    parser.add_argument("--seed", type=int, default=None, help="seed for the move selector (default: wall clock)")
    parser.add_argument("--chess960", action="store_true", help="write castling as king-to-rook-square (e1h1)")
    parser.add_argument("--fen", default=START_FEN, help="starting position")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="stderr log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Console entry point.

    Parses arguments, builds the configuration and game state, and runs the
    command loop over stdin.

    Returns:
        Process exit status (0 on quit or end of input).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = AgentConfig(side=args.side, chess960=args.chess960, seed=args.seed, start_fen=args.fen)
    except ValidationError as exc:
        parser.error(str(exc))

    _log.info("starting as %s (seed=%s, chess960=%s)", config.side, config.seed, config.chess960)

    loop = CommandLoop(GameState(config))
    loop.start()
    loop.run(sys.stdin)
    return 0


if __name__ == "__main__":
    sys.exit(main())
