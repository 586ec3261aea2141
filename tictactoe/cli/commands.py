from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tictactoe.core.board import CELLS, SIZE, parse_cell_label


class CommandType(Enum):
    QUIT = "quit"
    RESTART = "restart"
    HELP = "help"


@dataclass(frozen=True)
class Command:
    """Parsed command from user input."""
    type: CommandType
    raw: str


@dataclass(frozen=True)
class ParseResult:
    """
    Result of parsing one line input.
    Exactly one of (command, index) should be set on success.
    """
    command: Optional[Command] = None
    index: Optional[int] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.error == "" and (self.command is not None or self.index is not None)


class CommandProcessor:
    """
    Parses user input line into:
      - Command (e.g. /restart)
      - Cell index 0..8 (from '5', '2 2' or 'B2')

    This class does NOT execute anything. Controllers decide what to do.
    """

    _COMMANDS = {
        "quit": CommandType.QUIT,
        "restart": CommandType.RESTART,
        "help": CommandType.HELP,
    }

    @property
    def help_cmds(self) -> str:
        return ", ".join(f"/{name}" for name in self._COMMANDS)

    def help_text(self) -> str:
        return (
            f"Input: cell number 1-{CELLS} (reading order), 'x y' (e.g. 2 2) "
            f"or 'B2' (A-C + 1-{SIZE}).\n"
            f"Commands: {self.help_cmds}"
        )

    # ---------- Public parse API ----------

    def parse(self, text: str) -> ParseResult:
        """
        Parse a raw input line.
        Returns ParseResult with either command or index on success.
        """
        raw = (text or "").strip()
        if not raw:
            return ParseResult(error="")  # treat as no-op line

        # slash commands
        if raw.startswith("/"):
            cmd = self._COMMANDS.get(raw[1:].strip().lower())
            if cmd is None:
                return ParseResult(error=f"Unknown command: {raw}")
            return ParseResult(command=Command(cmd, raw))

        # move: "5" (1..9, reading order)
        if raw.isdecimal():
            n = int(raw)
            if not 1 <= n <= CELLS:
                return ParseResult(error=f"Out of bounds: {n} (must be 1..{CELLS})")
            return ParseResult(index=n - 1)

        # move: "x y" (column, row; 1..3 each)
        parts = raw.split()
        if len(parts) == 2 and parts[0].isdecimal() and parts[1].isdecimal():
            x, y = int(parts[0]), int(parts[1])
            if not (1 <= x <= SIZE and 1 <= y <= SIZE):
                return ParseResult(error=f"Out of bounds: {x}, {y} (must be 1..{SIZE})")
            return ParseResult(index=(y - 1) * SIZE + (x - 1))

        # move: "B2"
        index = parse_cell_label(raw)
        if index is not None:
            return ParseResult(index=index)

        return ParseResult(error="Invalid input. Use '5', 'x y', 'B2' or /help")
