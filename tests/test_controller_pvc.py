import pytest

from tictactoe.app.controller_pvc import PvCConfig, PvCController
from tictactoe.cli.view import MessageType
from tictactoe.core.board import COMPUTER, HUMAN, Player


@pytest.fixture
def ctrl():
    return PvCController(config=PvCConfig(ai_delay_sec=0.0))


def _computer_turn(ctrl):
    ctrl.poll_external_events()
    ctrl.pump_events()


def test_computer_answers_after_human_move(ctrl):
    ctrl.handle_move(4)
    assert ctrl.game.current_player == COMPUTER
    assert ctrl.view.message.type == MessageType.YOU_MOVE

    _computer_turn(ctrl)

    # Against a center opening the first corner is the lowest drawing reply.
    assert ctrl.game.board.get(0) == Player.O
    assert ctrl.game.current_player == HUMAN
    assert ctrl.view.message.type == MessageType.OPP_MOVE
    assert ctrl.view.message.text == "A1"


def test_computer_waits_for_delay():
    ctrl = PvCController(config=PvCConfig(ai_delay_sec=60.0))
    ctrl.handle_move(0)
    _computer_turn(ctrl)
    assert ctrl.game.board.moves == 1
    assert ctrl.game.current_player == COMPUTER


def test_human_cannot_move_out_of_turn(ctrl):
    ctrl.handle_move(4)
    ctrl.handle_move(1)
    assert ctrl.view.message.type == MessageType.ERR
    assert ctrl.view.message.text == "Not your turn."
    assert ctrl.game.board.moves == 1


def test_occupied_cell_shows_error(ctrl):
    ctrl.handle_line("5")
    _computer_turn(ctrl)
    ctrl.handle_line("B2")
    assert ctrl.view.message.type == MessageType.ERR
    assert "occupied" in ctrl.view.message.text
    assert ctrl.game.board.moves == 2


def test_bad_input_shows_error(ctrl):
    ctrl.handle_line("zz")
    assert ctrl.view.message.type == MessageType.ERR
    assert ctrl.game.board.moves == 0


def test_help_and_quit(ctrl):
    ctrl.handle_line("/help")
    assert ctrl.view.message.type == MessageType.INFO
    assert ctrl.running

    ctrl.handle_line("/quit")
    assert ctrl.view.message.type == MessageType.QUIT
    assert not ctrl.running


def test_restart_discards_pending_computer_move(ctrl):
    ctrl.handle_move(0)
    ctrl.poll_external_events()
    ctrl.handle_line("/restart")
    ctrl.pump_events()

    assert ctrl.game.board.moves == 0
    assert ctrl.game.current_player == HUMAN
    assert ctrl.view.message.type == MessageType.RESTART


def test_full_game_never_lost(ctrl):
    for _ in range(20):
        if ctrl.game.is_game_over():
            break
        if ctrl.game.current_player == HUMAN:
            ctrl.handle_move(ctrl.game.get_valid_moves()[0])
        else:
            _computer_turn(ctrl)

    assert ctrl.game.is_game_over()
    assert ctrl.game.winner != HUMAN

    ctrl.handle_move(0)
    assert ctrl.view.message.type == MessageType.ERR
    assert ctrl.view.message.text == "Game is over. Use /restart"


def test_state_line_text(ctrl):
    assert ctrl.view.build_state_line(ctrl.game).startswith("Your turn (X)")
    ctrl.handle_move(4)
    assert ctrl.view.build_state_line(ctrl.game).startswith("Computer's turn (O)")


def test_unicode_digit_input_shows_error(ctrl):
    ctrl.handle_line("²")
    assert ctrl.view.message.type == MessageType.ERR
    assert ctrl.running
    assert ctrl.game.board.moves == 0


class _ScriptedInput:
    """Hands out the given lines, then behaves like closed input."""

    def __init__(self, lines):
        self._lines = list(lines)

    def poll_line(self, timeout_sec=1.0):
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)


def test_run_stops_when_input_closes(monkeypatch):
    ctrl = PvCController(
        config=PvCConfig(ai_delay_sec=0.0),
        input_poller=_ScriptedInput(["5"]),
    )
    monkeypatch.setattr(ctrl.view, "render", lambda game: None)

    ctrl.run()

    assert not ctrl.running
    assert ctrl.view.message.type == MessageType.QUIT
    assert ctrl.game.board.get(4) == Player.X
    assert ctrl.game.board.get(0) == Player.O
