# game.py
from __future__ import annotations

import logging
from typing import List, Optional

from tictactoe.core.board import Board, Player, STARTING_PLAYER
from tictactoe.core.errors import InvalidMove
from tictactoe.core.gamestate import GameStatus, evaluate
from tictactoe.core.move import Move, MoveResult

logger = logging.getLogger(__name__)


class Game:
    """
    Main game controller.

    Owns:
      - Board
      - Turn state (current_player), history, last_move
      - The status derived after each accepted move

    Note:
      - The board never tracks turns; alternation lives here.
      - Once the status is terminal no further moves are accepted.
    """

    def __init__(self) -> None:
        self.board = Board()
        self.current_player: Player = STARTING_PLAYER
        self.status: GameStatus = GameStatus.in_progress()
        self.move_history: List[Move] = []
        self.last_move: Optional[int] = None

    # -------------------------
    # State helpers
    # -------------------------

    @property
    def winner(self) -> Optional[Player]:
        return self.status.winner

    def is_game_over(self) -> bool:
        return self.status.is_over

    # -------------------------
    # Move / validation
    # -------------------------

    def can_move(self, index: int) -> bool:
        """Check if current player can make move at index."""
        if self.is_game_over():
            return False
        return self.board.in_bounds(index) and self.board.is_empty(index)

    def make_move(self, index: int) -> MoveResult:
        """
        Execute a move for the current player.

        Returns:
            MoveResult (success, status, error_message)
        """
        if self.is_game_over():
            return MoveResult.fail("Game is already over.")

        try:
            self.board.place(index, self.current_player)
        except InvalidMove as e:
            logger.debug("Rejected move: %s", e)
            return MoveResult.fail(f"Invalid move: {e.reason}.")

        move = Move(index=index, player=self.current_player)
        self.move_history.append(move)
        self.last_move = index
        self.status = evaluate(self.board)
        logger.debug("Applied %s -> %s", move, self.status.outcome.value)

        if not self.status.is_over:
            self.switch_player()
        return MoveResult.ok(self.status)

    def switch_player(self) -> None:
        """Switch to next player."""
        self.current_player = self.current_player.opponent()

    def get_valid_moves(self) -> List[int]:
        """Empty cells, or nothing once the game is over."""
        if self.is_game_over():
            return []
        return self.board.empty_indices()

    # -------------------------
    # Reset
    # -------------------------

    def reset(self) -> None:
        """Reset game to initial state."""
        self.board.clear()
        self.current_player = STARTING_PLAYER
        self.status = GameStatus.in_progress()
        self.move_history.clear()
        self.last_move = None
