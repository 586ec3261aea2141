from tictactoe.core.board import Player
from tictactoe.core.game import Game
from tictactoe.core.gamestate import Outcome


def _play(game, moves):
    for index in moves:
        result = game.make_move(index)
        assert result.success, result.error_message
    return game


def test_new_game_starts_with_x():
    game = Game()
    assert game.current_player == Player.X
    assert not game.is_game_over()
    assert game.winner is None
    assert game.get_valid_moves() == list(range(9))


def test_moves_alternate_and_are_recorded():
    game = _play(Game(), [4, 0])
    assert game.board.get(4) == Player.X
    assert game.board.get(0) == Player.O
    assert game.current_player == Player.X
    assert [str(m) for m in game.move_history] == ["X at B2", "O at A1"]
    assert game.last_move == 0


def test_occupied_cell_is_rejected_without_side_effects():
    game = _play(Game(), [4])
    before = game.board.key()
    result = game.make_move(4)
    assert not result.success
    assert "occupied" in result.error_message
    assert game.board.key() == before
    assert game.current_player == Player.O
    assert len(game.move_history) == 1


def test_out_of_range_is_rejected():
    game = Game()
    result = game.make_move(9)
    assert not result.success
    assert result.status is None
    assert not game.can_move(9)
    assert game.board.moves == 0


def test_win_ends_the_game():
    game = _play(Game(), [0, 3, 1, 4])
    result = game.make_move(2)
    assert result.success
    assert result.is_winning_move
    assert game.status.outcome == Outcome.WON
    assert game.winner == Player.X
    assert game.status.line == (0, 1, 2)
    # Turn does not pass once the game is decided.
    assert game.current_player == Player.X

    after = game.make_move(8)
    assert not after.success
    assert after.error_message == "Game is already over."
    assert game.get_valid_moves() == []
    assert not game.can_move(8)


def test_draw_ends_the_game():
    game = _play(Game(), [0, 1, 2, 4, 3, 5, 7, 6])
    result = game.make_move(8)
    assert result.success
    assert not result.is_winning_move
    assert game.status.is_draw
    assert game.winner is None
    assert game.is_game_over()


def test_reset_restores_a_fresh_game():
    game = _play(Game(), [0, 3, 1, 4, 2])
    game.reset()
    assert game.board.moves == 0
    assert game.current_player == Player.X
    assert not game.is_game_over()
    assert game.move_history == []
    assert game.last_move is None
