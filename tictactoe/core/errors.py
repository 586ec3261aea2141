from __future__ import annotations

from typing import Any


class TicTacToeError(Exception):
    """Base class for game errors."""


class InvalidMove(TicTacToeError, ValueError):
    """
    Raised when a marker cannot be placed.

    The board is left unchanged, so callers can simply reject the input.
    """

    def __init__(self, index: Any, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid move at {index!r}: {reason}")


class NoLegalMove(TicTacToeError, RuntimeError):
    """Raised when the engine is asked to move on a finished board."""
