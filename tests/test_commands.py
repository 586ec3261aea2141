import pytest

from tictactoe.cli.commands import CommandProcessor, CommandType


@pytest.fixture
def cmd():
    return CommandProcessor()


@pytest.mark.parametrize(
    "text, index",
    [
        ("1", 0),
        ("5", 4),
        ("9", 8),
        ("2 2", 4),
        ("3 1", 2),
        ("1 3", 6),
        ("B2", 4),
        ("c3", 8),
        ("  a1  ", 0),
    ],
)
def test_moves(cmd, text, index):
    parsed = cmd.parse(text)
    assert parsed.ok
    assert parsed.index == index
    assert parsed.command is None


@pytest.mark.parametrize(
    "text, kind",
    [
        ("/restart", CommandType.RESTART),
        ("/HELP", CommandType.HELP),
        ("/ quit", CommandType.QUIT),
    ],
)
def test_commands(cmd, text, kind):
    parsed = cmd.parse(text)
    assert parsed.ok
    assert parsed.command.type == kind
    assert parsed.command.raw == text.strip()


@pytest.mark.parametrize(
    "text", ["0", "10", "4 1", "0 2", "D1", "hello", "/undo", "²", "A²", "² 1", "1 ²"]
)
def test_errors(cmd, text):
    parsed = cmd.parse(text)
    assert not parsed.ok
    assert parsed.error


def test_empty_line_is_a_noop(cmd):
    parsed = cmd.parse("   ")
    assert not parsed.ok
    assert parsed.error == ""


def test_help_lists_commands(cmd):
    text = cmd.help_text()
    assert "/restart" in text
    assert "/quit" in text
    assert "B2" in text
