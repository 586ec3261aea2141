"""Exhaustive minimax for the computer player, with memoized scores."""

import logging
from typing import Dict, Tuple

from tictactoe.core.board import Board
from tictactoe.core.errors import NoLegalMove
from tictactoe.core.gamestate import evaluate
from tictactoe.ai.config import (
    WIN_SCORE,
    DRAW_SCORE,
    ROOT_DEPTH,
    MAXIMIZER,
    MINIMIZER,
)

logger = logging.getLogger(__name__)


class MinimaxAI:
    """
    Plays the computer's side (O) perfectly.

    Every empty cell is tried in ascending order and scored by a full
    minimax search; the first cell with the highest score wins. Candidate
    markers are placed on the caller's board and always taken back, so the
    board looks untouched once a call returns.
    """

    def __init__(self) -> None:
        self.nodes_explored = 0
        # (board key, depth, maximizing) -> score
        self._cache: Dict[Tuple[bytes, int, bool], int] = {}

    def best_move(self, board: Board) -> int:
        """
        Index of the best cell for the computer.

        Raises:
            NoLegalMove if the game on `board` is already decided.
        """
        best_index = None
        best_score = None
        for index, score in self.score_moves(board).items():
            if best_score is None or score > best_score:
                best_index = index
                best_score = score

        logger.debug(
            "AI evaluated %d positions. Best move: %d (score: %d)",
            self.nodes_explored, best_index, best_score,
        )
        return best_index

    def score_moves(self, board: Board) -> Dict[int, int]:
        """Root score of every empty cell, keyed by index in ascending order."""
        status = evaluate(board)
        if status.is_over:
            raise NoLegalMove(f"No legal move: game is over ({status.describe()})")

        self.nodes_explored = 0
        scores: Dict[int, int] = {}
        for index in board.empty_indices():
            with board.tentative(index, MAXIMIZER):
                scores[index] = self.minimax(board, ROOT_DEPTH, False)
        return scores

    def minimax(self, board: Board, depth: int, maximizing: bool) -> int:
        """
        Score of `board` with the maximizer (computer) or minimizer (human)
        to play, `depth` plies below the root.
        """
        key = (board.key(), depth, maximizing)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        self.nodes_explored += 1

        # Check terminal states
        status = evaluate(board)
        if status.winner == MINIMIZER:
            score = -WIN_SCORE + depth
        elif status.winner == MAXIMIZER:
            score = WIN_SCORE - depth
        elif status.is_draw:
            score = DRAW_SCORE
        elif maximizing:
            score = max(self._child_scores(board, depth, MAXIMIZER, False))
        else:
            score = min(self._child_scores(board, depth, MINIMIZER, True))

        self._cache[key] = score
        return score

    def _child_scores(self, board: Board, depth: int, player, next_maximizing: bool):
        for index in board.empty_indices():
            with board.tentative(index, player):
                yield self.minimax(board, depth + 1, next_maximizing)

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)


_default_ai = MinimaxAI()


def best_move(board: Board) -> int:
    """Best computer move on `board` using the shared engine."""
    return _default_ai.best_move(board)


def minimax(board: Board, depth: int, maximizing: bool) -> int:
    return _default_ai.minimax(board, depth, maximizing)
