from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from tictactoe.core.board import Board, Player


class Outcome(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class GameStatus:
    """Derived from a board; never stored independently of it."""
    outcome: Outcome
    winner: Optional[Player] = None
    line: Optional[Tuple[int, int, int]] = None

    @staticmethod
    def in_progress() -> "GameStatus":
        return GameStatus(outcome=Outcome.IN_PROGRESS)

    @staticmethod
    def won(player: Player, line: Tuple[int, int, int]) -> "GameStatus":
        return GameStatus(outcome=Outcome.WON, winner=player, line=line)

    @staticmethod
    def draw() -> "GameStatus":
        return GameStatus(outcome=Outcome.DRAW)

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.outcome == Outcome.DRAW

    def describe(self) -> str:
        if self.outcome == Outcome.WON:
            return f"Winner: {self.winner.symbol()}"
        if self.outcome == Outcome.DRAW:
            return "It's a draw!"
        return "In progress"


def evaluate(board: Board) -> GameStatus:
    """
    Status of a board.

    A completed line wins even when the board is also full.
    """
    line = board.winning_line()
    if line is not None:
        return GameStatus.won(board.get(line[0]), line)
    if board.is_full():
        return GameStatus.draw()
    return GameStatus.in_progress()
