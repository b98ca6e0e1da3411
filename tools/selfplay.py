#!/usr/bin/env python3
"""
Self-play: pit two agents against each other through the line protocol.

Each agent keeps its own game state, so a finished game is also a consistency
check: if either side ever fails to decode the other's move it answers
"Unknown command", which means the two states have drifted apart.

By default each agent runs as a subprocess of interface/protocol.py, exactly
as a controller would drive it. --in-process drives CommandLoop objects
directly, which is much faster and is what the tests use.

Usage: python3 tools/selfplay.py [--games N] [--max-plies N] [--seed N] [--in-process]
"""
import argparse
import os
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Protocol

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

PYTHON = sys.executable
AGENT = os.path.join(REPO, "interface", "protocol.py")

from agent.config import AgentConfig
from agent.constants import NONE_NOTATION, QUIT_TOKEN, UNKNOWN_COMMAND_FORMAT
from agent.state import GameState
from interface.protocol import CommandLoop

UNKNOWN_PREFIX = UNKNOWN_COMMAND_FORMAT.split("{", 1)[0]


class Player(Protocol):
    def opening(self) -> str: ...

    def respond(self, move: str) -> str: ...

    def close(self) -> None: ...


class InProcessPlayer:
    """An agent driven directly through a CommandLoop, no process boundary."""

    def __init__(self, side: str, seed: int | None = None) -> None:
        self._replies: list[str] = []
        config = AgentConfig(side=side, seed=seed)
        self.loop = CommandLoop(GameState(config), send=self._replies.append)

    def opening(self) -> str:
        self.loop.start()
        return self._replies[-1]

    def respond(self, move: str) -> str:
        self.loop.dispatch(move)
        return self._replies[-1]

    def close(self) -> None:
        self.loop.dispatch(QUIT_TOKEN)


class SubprocessPlayer:
    """An agent process spoken to over pipes."""

    def __init__(self, side: str, seed: int | None = None) -> None:
        cmd = [PYTHON, AGENT, side]
        if seed is not None:
            cmd += ["--seed", str(seed)]
        self.proc = subprocess.Popen(
            cmd,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            env={**os.environ, "PYTHONPATH": REPO},
        )

    def _read(self) -> str:
        line = self.proc.stdout.readline()
        if not line:
            raise RuntimeError("agent process closed its output")
        return line.strip()

    def opening(self) -> str:
        return self._read()

    def respond(self, move: str) -> str:
        self.proc.stdin.write(move + "\n")
        self.proc.stdin.flush()
        return self._read()

    def close(self) -> None:
        self.proc.stdin.write(QUIT_TOKEN + "\n")
        self.proc.stdin.flush()
        self.proc.wait(timeout=5)


@dataclass
class GameRecord:
    """
    Outcome of one self-play game.

    Fields:
        moves:  Every move played, in order, in coordinate notation.
        reason: "no moves" when a side had no reply, "max plies" otherwise.
    """

    moves: list[str] = field(default_factory=list)
    reason: str = ""

    @property
    def plies(self) -> int:
        return len(self.moves)


def play_game(white: Player, black: Player, max_plies: int = 200) -> GameRecord:
    """
    Relay moves between two players until the game ends.

    Raises:
        RuntimeError: if a player rejects the other's move as an unknown command.
    """
    record = GameRecord()
    reply = white.opening()
    to_move, other = black, white

    while True:
        if reply == NONE_NOTATION:
            record.reason = "no moves"
            return record
        if reply.startswith(UNKNOWN_PREFIX):
            raise RuntimeError(f"players out of sync after {record.moves}: {reply}")

        record.moves.append(reply)
        if record.plies >= max_plies:
            record.reason = "max plies"
            return record

        reply = to_move.respond(reply)
        to_move, other = other, to_move


def main() -> None:
    """Play a series of games and print a summary table."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--games", type=int, default=5)
    parser.add_argument("--max-plies", type=int, default=200)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--in-process", action="store_true")
    args = parser.parse_args()

    player_cls = InProcessPlayer if args.in_process else SubprocessPlayer

    print(f"{'Game':<6} {'Plies':>6} {'Last':<7} {'Reason':<10}")
    print("-" * 32)

    for game in range(1, args.games + 1):
        seed = None if args.seed is None else args.seed + game
        white = player_cls("white", seed)
        black = player_cls("black", None if seed is None else seed + 1000)
        try:
            record = play_game(white, black, args.max_plies)
        finally:
            white.close()
            black.close()
        last = record.moves[-1] if record.moves else "-"
        print(f"{game:<6} {record.plies:>6} {last:<7} {record.reason:<10}")


if __name__ == "__main__":
    main()
