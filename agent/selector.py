"""
Mandatory-capture random move selection.

In the target variant a capture must be played whenever a legal one exists.
The selector does not evaluate anything: it narrows the candidate set with the
capture rule and then picks uniformly at random.

Policy, in priority order:
    1. captures that are also legal      -> uniform random choice
    2. pseudo-legal captures, none legal -> the first one, deterministically
    3. legal moves, no captures          -> uniform random choice
    4. nothing                           -> MOVE_NONE (terminal position)

Branch 2 is kept on purpose. The capture enumeration is pseudo-legal, so it is
reachable whenever every available capture would leave the mover's king
attacked (for example a capture by a pinned piece while the king has quiet
evasions). The move it returns is not legal under standard rules, so every hit
is logged as a warning.
"""

import logging
import random
import time

from agent.move import MOVE_NONE, Move
from agent.position import Position

_log = logging.getLogger(__name__)


class MoveSelector:
    """
    Picks one move per call under the mandatory-capture policy.

    The random source belongs to the selector. Pass `rng` to share or mock a
    generator, or `seed` to get reproducible choices; with neither, the
    generator is seeded from the wall clock.

    Attributes:
        rng: The random.Random instance used for every choice.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None) -> None:
        if rng is None:
            rng = random.Random(seed if seed is not None else time.time_ns())
        self.rng: random.Random = rng

    def select(self, legal: list[Move], captures: list[Move]) -> Move:
        """
        Apply the policy to precomputed enumerations.

        Args:
            legal:    Legal moves of the position.
            captures: Pseudo-legal captures of the position, in generation order.

        Returns:
            The chosen move, or MOVE_NONE when both lists are empty.
        """
        legal_captures = [m for m in captures if m in legal]
        if legal_captures:
            return self.rng.choice(legal_captures)

        if captures:
            _log.warning(
                "no legal capture among %d pseudo-legal captures; playing the first one",
                len(captures),
            )
            return captures[0]

        if legal:
            return self.rng.choice(legal)

        return MOVE_NONE

    def choose(self, position: Position) -> Move:
        """Run the policy against `position`'s own enumerations."""
        return self.select(position.legal_moves(), position.capture_moves())
