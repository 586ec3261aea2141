from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tictactoe.core.board import Player
from tictactoe.core.game import Game


# =========================
# Message types
# =========================

class MessageType(Enum):
    ERR = "ERR"
    INFO = "INFO"
    YOU_MOVE = "YOU MOVE"
    OPP_MOVE = "OPP MOVE"
    RESTART = "RESTART"
    QUIT = "QUIT"


@dataclass(frozen=True)
class Message:
    """
    A UI message shown between board and state.
    Examples:
      [ERR] Cell B2 is already occupied.
      [OPP MOVE] C3
    """
    type: MessageType
    text: str = ""

    def render(self) -> str:
        if self.text:
            return f"[{self.type.value}] {self.text}"
        return f"[{self.type.value}]"


# =========================
# Screen utils
# =========================

def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


# =========================
# View (board + message + state)
# =========================

class CliView:
    """
    Responsible ONLY for rendering:
      1) board
      2) message
      3) state line

    It does NOT parse input or execute game logic.
    """

    def __init__(
        self,
        *,
        you_color: Player,
        opp_name: str,
        opp_color: Player,
        prompt: str = "> ",
    ) -> None:
        self.you_color = you_color
        self.opp_name = opp_name
        self.opp_color = opp_color
        self.prompt = prompt

        self._message: Optional[Message] = None

    # ---------- Message API ----------

    @property
    def message(self) -> Optional[Message]:
        return self._message

    def set_message(self, msg: Optional[Message]) -> None:
        self._message = msg

    def set_error(self, text: str) -> None:
        self._message = Message(MessageType.ERR, text)

    def set_info(self, text: str = "") -> None:
        self._message = Message(MessageType.INFO, text) if text else None

    def set_move(self, text: str = "", is_you: bool = False) -> None:
        if text:
            t = MessageType.YOU_MOVE if is_you else MessageType.OPP_MOVE
            self._message = Message(t, text)
        else:
            self._message = None

    def set_restart(self, text: str = "") -> None:
        self._message = Message(MessageType.RESTART, text)

    # ---------- Render ----------

    def render(self, game: Game) -> None:
        clear_screen()

        print("Tic Tac Toe")
        print("")
        print(game.board.to_cli())
        print("")

        if self._message is None:
            print("")
        else:
            print(self._message.render())

        print(self.build_state_line(game))
        print(self.prompt, end="", flush=True)

    def build_state_line(self, game: Game) -> str:
        return f"{self._status_text(game)}   Opponent: {self.opp_name}"

    def _status_text(self, game: Game) -> str:
        if game.is_game_over():
            return game.status.describe()
        if game.current_player == self.you_color:
            return f"Your turn ({self.you_color.symbol()})"
        return f"Computer's turn ({self.opp_color.symbol()})"
