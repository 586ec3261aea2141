from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from tictactoe.core.board import Player, cell_label
from tictactoe.core.gamestate import GameStatus, Outcome


@dataclass(frozen=True)
class Move:
    """Represents a move on the board."""
    index: int
    player: Player

    def __str__(self) -> str:
        """String representation."""
        return f"{self.player.symbol()} at {cell_label(self.index)}"


@dataclass
class MoveResult:
    """Result of executing a move."""
    success: bool
    status: Optional[GameStatus] = None
    error_message: str = ""

    @property
    def is_winning_move(self) -> bool:
        return self.status is not None and self.status.outcome == Outcome.WON

    @staticmethod
    def ok(status: GameStatus) -> "MoveResult":
        return MoveResult(success=True, status=status, error_message="")

    @staticmethod
    def fail(msg: str) -> "MoveResult":
        return MoveResult(success=False, status=None, error_message=msg)
