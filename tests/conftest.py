"""Shared pytest fixtures used across the test suite."""

from collections.abc import Callable

import pytest

from agent.config import AgentConfig
from agent.state import GameState
from interface.protocol import CommandLoop


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Build a GameState from AgentConfig keyword arguments (seeded by default)."""

    def _make(**kwargs: object) -> GameState:
        kwargs.setdefault("seed", 1234)
        return GameState(AgentConfig(**kwargs))

    return _make


@pytest.fixture
def make_loop() -> Callable[..., tuple[CommandLoop, list[str]]]:
    """Build a CommandLoop whose responses are collected in a list."""

    def _make(**kwargs: object) -> tuple[CommandLoop, list[str]]:
        kwargs.setdefault("seed", 1234)
        out: list[str] = []
        loop = CommandLoop(GameState(AgentConfig(**kwargs)), send=out.append)
        return loop, out

    return _make
