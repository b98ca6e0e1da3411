"""Tests for the self-play relay, using in-process agents."""

import chess
import pytest

from tools.selfplay import GameRecord, InProcessPlayer, play_game


class _Scripted:
    def __init__(self, replies: list[str]) -> None:
        self.replies = list(replies)
        self.received: list[str] = []

    def opening(self) -> str:
        return self.replies.pop(0)

    def respond(self, move: str) -> str:
        self.received.append(move)
        return self.replies.pop(0)

    def close(self) -> None:
        pass


class TestPlayGame:
    def test_agents_stay_in_sync(self) -> None:
        white = InProcessPlayer("white", seed=1)
        black = InProcessPlayer("black", seed=2)
        record = play_game(white, black, max_plies=60)

        assert record.reason in ("max plies", "no moves")
        assert 0 < record.plies <= 60

        board = chess.Board()
        for text in record.moves:
            move = chess.Move.from_uci(text)
            assert move in board.pseudo_legal_moves
            legal_captures = [m for m in board.legal_moves if board.is_capture(m)]
            if legal_captures:
                assert move in legal_captures
            board.push(move)

    def test_stops_when_a_side_has_no_move(self) -> None:
        white = _Scripted(["f2f3", "g2g4", "(none)"])
        black = _Scripted(["e7e5", "d8h4"])
        record = play_game(white, black, max_plies=10)
        assert record == GameRecord(moves=["f2f3", "e7e5", "g2g4", "d8h4"], reason="no moves")
        assert black.received == ["f2f3", "g2g4"]
        assert white.received == ["e7e5", "d8h4"]

    def test_desync_raises(self) -> None:
        white = _Scripted(["e2e4"])
        black = _Scripted(["Unknown command: 'e2e4'"])
        with pytest.raises(RuntimeError, match="out of sync"):
            play_game(white, black)

    def test_max_plies(self) -> None:
        record = play_game(InProcessPlayer("white", seed=3), InProcessPlayer("black", seed=4), max_plies=3)
        assert record.plies == 3
        assert record.reason == "max plies"
