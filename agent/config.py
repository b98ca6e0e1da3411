"""
Agent configuration.

One immutable AgentConfig is built at start-up (from the command line) and
passed into the game state manager. Nothing reads configuration from module
globals, so tests can run several differently configured agents side by side.
"""

from typing import Literal

import chess
from pydantic import BaseModel, ConfigDict, field_validator

from agent.constants import START_FEN


class AgentConfig(BaseModel):
    """
    Validated start-up settings for one agent.

    Fields:
        side:      "white" if the agent moves first, otherwise "black".
        chess960:  Use the alternate (king-to-rook-square) castling notation.
        seed:      Seed for the move selector's random source. None seeds
                   from the wall clock.
        start_fen: Position the game starts from.
    """

    model_config = ConfigDict(frozen=True)

    side: Literal["white", "black"] = "black"
    chess960: bool = False
    seed: int | None = None
    start_fen: str = START_FEN

    @field_validator("side", mode="before")
    @classmethod
    def normalise_side(cls, v: object) -> object:
        """Accept any capitalisation of the side name."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("start_fen")
    @classmethod
    def check_start_fen(cls, v: str) -> str:
        """Reject FEN strings python-chess cannot parse."""
        try:
            chess.Board(v)
        except ValueError as exc:
            raise ValueError(f"invalid FEN: {exc}") from exc
        return v

    @property
    def moves_first(self) -> bool:
        return self.side == "white"
