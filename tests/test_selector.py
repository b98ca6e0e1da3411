"""Tests for the mandatory-capture move selector."""

import logging
import random

import chess

from agent.move import MOVE_NONE, Move
from agent.position import Position
from agent.selector import MoveSelector
from positions import MATED_FEN, PINNED_CAPTURE_FEN, SINGLE_CAPTURE_FEN

A = Move(chess.A2, chess.A3)
B = Move(chess.B2, chess.B3)
C = Move(chess.C2, chess.C3)
X = Move(chess.D2, chess.D3)
Y = Move(chess.E2, chess.E3)


class _LastChoice(random.Random):
    def choice(self, seq):
        return seq[-1]


class TestSelectPolicy:
    def test_legal_captures_are_mandatory(self) -> None:
        selector = MoveSelector(seed=7)
        for _ in range(200):
            assert selector.select([A, B, C], [B, C, X]) in (B, C)

    def test_single_legal_capture_always_chosen(self) -> None:
        selector = MoveSelector()
        assert all(selector.select([A, B, C], [X, B]) == B for _ in range(100))

    def test_pseudo_capture_fallback_takes_first(self, caplog) -> None:
        selector = MoveSelector(seed=7)
        with caplog.at_level(logging.WARNING, logger="agent.selector"):
            assert selector.select([A, B], [X, Y]) == X
        assert "pseudo-legal" in caplog.text

    def test_quiet_moves_without_captures(self) -> None:
        selector = MoveSelector(seed=7)
        seen = {selector.select([A, B, C], []) for _ in range(200)}
        assert seen == {A, B, C}

    def test_nothing_to_play(self) -> None:
        assert MoveSelector(seed=7).select([], []) == MOVE_NONE

    def test_injected_rng_is_used(self) -> None:
        selector = MoveSelector(rng=_LastChoice())
        assert selector.select([A, B, C], []) == C
        assert selector.select([A, B, C], [A, B]) == B

    def test_same_seed_same_choices(self) -> None:
        first = MoveSelector(seed=99)
        second = MoveSelector(seed=99)
        moves = [A, B, C, X, Y]
        assert [first.select(moves, []) for _ in range(20)] == [second.select(moves, []) for _ in range(20)]


class TestChooseFromPosition:
    def test_only_capture_is_played(self) -> None:
        position = Position.from_fen(SINGLE_CAPTURE_FEN)
        selector = MoveSelector()
        assert all(selector.choose(position) == Move(chess.E4, chess.D5) for _ in range(20))

    def test_checkmated_side_has_no_move(self) -> None:
        assert MoveSelector(seed=1).choose(Position.from_fen(MATED_FEN)) == MOVE_NONE

    def test_pinned_capture_reaches_fallback(self) -> None:
        position = Position.from_fen(PINNED_CAPTURE_FEN)
        assert position.legal_moves()
        assert MoveSelector(seed=1).choose(position) == Move(chess.E2, chess.C3)

    def test_start_position_deterministic_under_seed(self) -> None:
        position = Position.from_fen()
        assert MoveSelector(seed=5).choose(position) == MoveSelector(seed=5).choose(position)

    def test_start_position_move_is_legal(self) -> None:
        position = Position.from_fen()
        assert MoveSelector(seed=5).choose(position) in position.legal_moves()
