from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from tictactoe.app.controller_base import BaseController, ControllerEvent, EventType, InputPoller
from tictactoe.ai.minimax import MinimaxAI
from tictactoe.cli.commands import Command, CommandProcessor, CommandType
from tictactoe.cli.view import CliView, Message, MessageType
from tictactoe.core.board import COMPUTER, HUMAN, cell_label
from tictactoe.core.errors import NoLegalMove
from tictactoe.core.game import Game

logger = logging.getLogger(__name__)


@dataclass
class PvCConfig:
    # Pause before the computer answers, so its move is visible as a separate step.
    ai_delay_sec: float = 0.5
    tick_sec: float = 0.1


class PvCController(BaseController):
    """
    Player vs Computer controller.

    Rules:
      - You are X and always move first; the computer is O.
      - The computer replies ai_delay_sec after your move.
      - /restart starts a fresh game immediately.
      - Moves after the game is decided are rejected until /restart.
    """

    def __init__(
        self,
        *,
        config: Optional[PvCConfig] = None,
        input_poller: Optional[InputPoller] = None,
    ) -> None:
        self.cfg = config or PvCConfig()

        view = CliView(
            you_color=HUMAN,
            opp_name="Computer",
            opp_color=COMPUTER,
        )

        super().__init__(
            game=Game(),
            view=view,
            command_processor=CommandProcessor(),
            tick_sec=self.cfg.tick_sec,
            input_poller=input_poller,
        )

        self.ai = MinimaxAI()

        # Set when the computer's turn begins; the move is made once it passes.
        self._ai_due: Optional[float] = None
        # Avoid generating multiple AI events per tick
        self._ai_thinking: bool = False

    # ============================================================
    # Base hooks
    # ============================================================

    def on_start(self) -> None:
        self.view.set_message(Message(MessageType.RESTART, "New game. You are X."))
        self._dirty = True

    # ============================================================
    # External events (AI)
    # ============================================================

    def poll_external_events(self) -> None:
        """
        If it's the computer's turn and the delay has passed, compute its
        move and push it as an AI event.
        """
        if self.game.is_game_over() or self.game.current_player != COMPUTER:
            self._ai_due = None
            self._ai_thinking = False
            return

        if self._ai_thinking:
            return

        now = time.monotonic()
        if self._ai_due is None:
            self._ai_due = now + self.cfg.ai_delay_sec
        if now < self._ai_due:
            return

        self._ai_thinking = True
        try:
            index = self.ai.best_move(self.game.board)
        except NoLegalMove as e:
            self.view.set_error(str(e))
            self._ai_thinking = False
            self._dirty = True
            return

        self.push_event(ControllerEvent(EventType.AI, index))

    def handle_event(self, event: ControllerEvent) -> None:
        if event.type != EventType.AI:
            return

        index: int = event.payload  # type: ignore[assignment]
        self._ai_thinking = False
        self._ai_due = None

        # A /restart may have happened after the move was queued.
        if self.game.is_game_over() or self.game.current_player != COMPUTER:
            return

        result = self.game.make_move(index)
        if not result.success:
            self.view.set_error(f"AI invalid: {result.error_message}")
            self._dirty = True
            return

        logger.info("Computer plays %s", cell_label(index))
        self.view.set_move(cell_label(index), is_you=False)
        self._after_move()

    # ============================================================
    # User commands
    # ============================================================

    def handle_command(self, command: Command) -> None:
        if command.type == CommandType.RESTART:
            self._restart()
            return

        self.view.set_error("Unknown/unsupported command. Use /help")
        self._dirty = True

    # ============================================================
    # User move
    # ============================================================

    def handle_move(self, index: int) -> None:
        if self.game.is_game_over():
            self.view.set_error("Game is over. Use /restart")
            self._dirty = True
            return

        if self.game.current_player != HUMAN:
            self.view.set_error("Not your turn.")
            self._dirty = True
            return

        result = self.game.make_move(index)
        if not result.success:
            self.view.set_error(result.error_message)
            self._dirty = True
            return

        logger.info("Human plays %s", cell_label(index))
        self.view.set_move(cell_label(index), is_you=True)
        self._after_move()

    # ============================================================
    # Helpers
    # ============================================================

    def _after_move(self) -> None:
        if self.game.is_game_over():
            logger.info("Game over: %s", self.game.status.describe())
        self._dirty = True

    def _restart(self) -> None:
        self.game.reset()
        self._ai_due = None
        self._ai_thinking = False
        self.view.set_restart("Game restarted.")
        self._dirty = True
