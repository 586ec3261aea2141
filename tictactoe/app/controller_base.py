from __future__ import annotations

import os
import queue
import sys
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TextIO

from tictactoe.cli.commands import Command, CommandProcessor, CommandType
from tictactoe.cli.view import CliView, Message, MessageType
from tictactoe.core.game import Game


# =========================
# Non-blocking input (polling)
# =========================

class InputPoller:
    """
    Reads whole lines from the terminal without stalling the game loop.

    poll_line() gives None when nothing arrived within the timeout and
    raises EOFError once the input is closed (piped input ran out, Ctrl+D,
    Ctrl+Z on Windows).
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._pending: List[str] = []
        if os.name == "nt":
            import msvcrt  # type: ignore
            self._msvcrt = msvcrt
            self._poll = self._poll_console
        else:
            import select
            self._select = select.select
            self._poll = self._poll_stream

    def poll_line(self, timeout_sec: float = 1.0) -> Optional[str]:
        return self._poll(timeout_sec)

    def _poll_stream(self, timeout_sec: float) -> Optional[str]:
        ready, _, _ = self._select([self._stream], [], [], timeout_sec)
        if not ready:
            return None
        line = self._stream.readline()
        # A readable stream that yields nothing is at end-of-file.
        if line == "":
            raise EOFError("input closed")
        return line.strip()

    def _poll_console(self, timeout_sec: float) -> Optional[str]:
        deadline = time.monotonic() + timeout_sec
        while time.monotonic() < deadline:
            if not self._msvcrt.kbhit():
                time.sleep(0.02)
                continue

            ch = self._msvcrt.getwch()
            if ch in ("\r", "\n"):
                self._echo("\n")
                line = "".join(self._pending)
                self._pending.clear()
                return line.strip()
            if ch == "\x1a":
                raise EOFError("input closed")
            if ch == "\b":
                if self._pending:
                    self._pending.pop()
                    self._echo("\b \b")
                continue
            self._pending.append(ch)
            self._echo(ch)
        return None

    @staticmethod
    def _echo(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()


# =========================
# Events (controller internal)
# =========================

class EventType(Enum):
    AI = "ai"              # computer move


@dataclass(frozen=True)
class ControllerEvent:
    type: EventType
    payload: object


# =========================
# Base Controller
# =========================

class BaseController(ABC):
    """
    Common controller loop:
      - poll external events (computer moves)
      - poll user input (tick_sec)
      - parse input into Command/cell index
      - pump events + handle input
      - render(board + message + state)

    Concrete controllers implement:
      - poll_external_events()
      - handle_event()
      - handle_command()
      - handle_move()

    Controller orchestrates, Game handles gameplay, View renders only,
    CommandProcessor parses only.
    """

    def __init__(
        self,
        *,
        game: Game,
        view: CliView,
        command_processor: CommandProcessor,
        tick_sec: float = 1.0,
        input_poller: Optional[InputPoller] = None,
    ) -> None:
        self.game = game
        self.view = view
        self.cmd = command_processor
        self.tick_sec = tick_sec

        # Created lazily in run() so tests can drive handlers without a terminal.
        self._input = input_poller
        self._running = True

        self._events: "queue.Queue[ControllerEvent]" = queue.Queue()

        self._dirty = True

    @property
    def running(self) -> bool:
        return self._running

    # ---------- External event API (thread-safe) ----------

    def push_event(self, event: ControllerEvent) -> None:
        self._events.put(event)

    # ---------- Main loop ----------

    def run(self) -> None:
        """
        Main loop:
          1) pump external events
          2) render if dirty
          3) poll user input (tick_sec)
          4) handle parsed input

        Closed input ends the loop the same way /quit does.
        """
        if self._input is None:
            self._input = InputPoller()
        self.on_start()
        self._dirty = True
        self._render()

        while self._running:
            self.poll_external_events()
            self.pump_events()

            if self._dirty:
                self._render()

            try:
                line = self._input.poll_line(timeout_sec=self.tick_sec)
            except EOFError:
                self._handle_command(Command(CommandType.QUIT, ""))
                continue
            if line is None:
                continue
            self.handle_line(line)

        self.on_stop()

    def handle_line(self, line: str) -> None:
        """Parse one input line and dispatch it."""
        parsed = self.cmd.parse(line)
        if not parsed.ok:
            # empty input is ok-noop
            if parsed.error:
                self.view.set_error(parsed.error)
                self._dirty = True
            return

        if parsed.command is not None:
            self._handle_command(parsed.command)
        elif parsed.index is not None:
            self.handle_move(parsed.index)

    # ---------- Rendering ----------

    def _render(self) -> None:
        if not self._dirty:
            return
        self.view.render(self.game)
        self._dirty = False

    # ---------- Event pumping ----------

    def pump_events(self) -> None:
        while True:
            try:
                ev = self._events.get_nowait()
            except queue.Empty:
                return
            self.handle_event(ev)
            self._dirty = True

    # ---------- Input dispatch ----------

    def _handle_command(self, command: Command) -> None:
        if command.type == CommandType.HELP:
            self.view.set_info(self.cmd.help_text())
            self._dirty = True
            return

        if command.type == CommandType.QUIT:
            self.on_quit_requested()
            self._running = False
            return

        self.handle_command(command)

    # =========================
    # Hooks / Abstract methods
    # =========================

    def stop(self) -> None:
        self._running = False

    def on_start(self) -> None:
        """Optional hook before loop starts."""
        pass

    def on_stop(self) -> None:
        """Optional hook after loop ends."""
        pass

    def on_quit_requested(self) -> None:
        self.view.set_message(Message(MessageType.QUIT, "Exiting..."))
        self._dirty = True

    @abstractmethod
    def poll_external_events(self) -> None:
        """Pull external events and push them into self.push_event(...)."""
        raise NotImplementedError

    @abstractmethod
    def handle_event(self, event: ControllerEvent) -> None:
        """Handle one ControllerEvent."""
        raise NotImplementedError

    @abstractmethod
    def handle_command(self, command: Command) -> None:
        """Handle commands except /help and /quit (already processed)."""
        raise NotImplementedError

    @abstractmethod
    def handle_move(self, index: int) -> None:
        """Handle a user move input (cell index)."""
        raise NotImplementedError
