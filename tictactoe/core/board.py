from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional, Tuple

import numpy as np

from tictactoe.core.errors import InvalidMove


class Player(Enum):
    """Cell values. EMPTY doubles as 'no player'."""
    EMPTY = 0
    X = 1
    O = 2

    def symbol(self) -> str:
        return {0: ".", 1: "X", 2: "O"}[self.value]

    def opponent(self) -> "Player":
        if self == Player.X:
            return Player.O
        if self == Player.O:
            return Player.X
        return Player.EMPTY

    def __str__(self) -> str:
        return self.symbol()


# Fixed roles: the human plays X and always moves first.
HUMAN = Player.X
COMPUTER = Player.O
STARTING_PLAYER = Player.X

SIZE = 3
CELLS = SIZE * SIZE

# Rows top-to-bottom, columns left-to-right, then the two diagonals.
# The order decides which line is reported first.
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)
_LINE_INDEX = np.array(WIN_LINES, dtype=np.intp)

_SYMBOLS = {".": Player.EMPTY, "_": Player.EMPTY, " ": Player.EMPTY, "X": Player.X, "O": Player.O}


def cell_label(index: int) -> str:
    """Human-readable name for a cell, e.g. 0 -> 'A1', 5 -> 'C2'."""
    row, col = divmod(index, SIZE)
    return f"{chr(ord('A') + col)}{row + 1}"


def parse_cell_label(text: str) -> Optional[int]:
    """Inverse of cell_label(); returns None if text is not a label."""
    raw = text.strip().upper()
    if len(raw) != 2 or not raw[0].isalpha() or not raw[1].isdecimal():
        return None
    col = ord(raw[0]) - ord("A")
    row = int(raw[1]) - 1
    if not (0 <= col < SIZE and 0 <= row < SIZE):
        return None
    return row * SIZE + col


class Board:
    """
    The 3x3 grid.

    - Cells are addressed by index 0..8 (row = index // 3, col = index % 3).
    - Internally stores a numpy int8 vector of Player values.
    - Knows nothing about whose turn it is.
    """

    def __init__(self) -> None:
        self._cells: np.ndarray = np.zeros(CELLS, dtype=np.int8)
        self._moves: int = 0  # number of placed markers (non-empty)

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from 9 symbols in reading order, e.g. "XX.OO....".
        '.', '_' and ' ' are empty cells; '|', '/', tabs and newlines are skipped.
        """
        chars = [ch for ch in text.upper() if ch not in "|/\n\t"]
        if len(chars) != CELLS:
            raise ValueError(f"Expected {CELLS} cells, got {len(chars)}: {text!r}")
        board = cls()
        for index, ch in enumerate(chars):
            if ch not in _SYMBOLS:
                raise ValueError(f"Unknown cell symbol {ch!r}")
            player = _SYMBOLS[ch]
            if player != Player.EMPTY:
                board.place(index, player)
        return board

    @property
    def moves(self) -> int:
        return self._moves

    def copy(self) -> "Board":
        """Create a deep copy of the board."""
        new_board = Board()
        new_board._cells = np.copy(self._cells)
        new_board._moves = self._moves
        return new_board

    # ---------- Bounds / cell access ----------

    @staticmethod
    def in_bounds(index: object) -> bool:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            return False
        return 0 <= index < CELLS

    def get(self, index: int) -> Player:
        if not self.in_bounds(index):
            raise IndexError(f"Out of bounds: {index!r}")
        return Player(int(self._cells[index]))

    def is_empty(self, index: int) -> bool:
        return self.get(index) == Player.EMPTY

    def cells(self) -> Tuple[Player, ...]:
        return tuple(Player(int(v)) for v in self._cells)

    def key(self) -> bytes:
        """Compact snapshot of the cells, usable as a dict key."""
        return self._cells.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.key() == other.key()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Board({''.join(p.symbol() for p in self.cells())!r})"

    # ---------- Mutation ----------

    def place(self, index: int, player: Player) -> None:
        """
        Put `player`'s marker on `index`.

        Raises:
            InvalidMove if out of bounds, occupied, or player is EMPTY.
        """
        if not self.in_bounds(index):
            raise InvalidMove(index, f"cell must be 0..{CELLS - 1}")
        if player == Player.EMPTY:
            raise InvalidMove(index, "cannot place EMPTY")
        if self._cells[index] != Player.EMPTY.value:
            raise InvalidMove(index, f"cell {cell_label(index)} is already occupied")
        self._cells[index] = player.value
        self._moves += 1

    def unplace(self, index: int) -> None:
        """
        Remove the marker at index (set to EMPTY).

        Raises:
            ValueError if the cell is already empty.
        """
        if self.is_empty(index):
            raise ValueError(f"Cell already empty at {index}")
        self._cells[index] = Player.EMPTY.value
        self._moves -= 1

    @contextmanager
    def tentative(self, index: int, player: Player) -> Iterator["Board"]:
        """Place a marker for the duration of the block, then take it back."""
        self.place(index, player)
        try:
            yield self
        finally:
            self.unplace(index)

    def clear(self) -> None:
        """Reset board to empty."""
        self._cells[:] = Player.EMPTY.value
        self._moves = 0

    # ---------- Queries ----------

    def empty_indices(self) -> List[int]:
        """Empty cells in ascending index order."""
        return np.flatnonzero(self._cells == Player.EMPTY.value).tolist()

    def is_full(self) -> bool:
        return self._moves == CELLS

    def count(self, player: Player) -> int:
        return int(np.count_nonzero(self._cells == player.value))

    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        """First line in WIN_LINES order holding three equal markers, or None."""
        lines = self._cells[_LINE_INDEX]
        hit = (
            (lines[:, 0] != Player.EMPTY.value)
            & (lines[:, 0] == lines[:, 1])
            & (lines[:, 1] == lines[:, 2])
        )
        found = np.flatnonzero(hit)
        if found.size == 0:
            return None
        return WIN_LINES[int(found[0])]

    # ---------- Rendering ----------

    def to_cli(self) -> str:
        letters = [chr(ord("A") + i) for i in range(SIZE)]
        lines = ["    " + " ".join(letters)]
        for row in range(SIZE):
            syms = [Player(int(self._cells[row * SIZE + col])).symbol() for col in range(SIZE)]
            lines.append(f"{str(row + 1).rjust(2)}  " + " ".join(syms))
        return "\n".join(lines)


def new_board() -> Board:
    """All cells empty."""
    return Board()


def place(board: Board, index: int, player: Player) -> Board:
    """Place in place and hand the same board back; raises InvalidMove."""
    board.place(index, player)
    return board


def is_full(board: Board) -> bool:
    return board.is_full()
