"""Evaluation games."""

import pytest

from mnk import (
    GameConfig,
    LookaheadCache,
    O_MARKER,
    X_MARKER,
    eval_self_play,
    eval_vs_random,
    get_computer_move,
    play_game,
    random_move,
)


def test_config_defaults():
    board = GameConfig().new_board()
    assert (board.width, board.height, board.win_length) == (3, 3, 3)
    assert board.player_marker == X_MARKER
    assert board.computer_marker == O_MARKER
    assert not board.done


def test_play_game_reaches_terminal_state():
    cache = LookaheadCache()
    final = play_game(
        GameConfig().new_board(),
        player_agent=lambda b: random_move(b),
        computer_agent=lambda b: get_computer_move(b, cache),
    )
    assert final.done


def test_player_agent_sees_swapped_board():
    seen = []

    def player(board):
        seen.append(board.computer_marker)
        return random_move(board)

    play_game(GameConfig().new_board(), player, random_move, computer_first=True)
    assert seen
    assert set(seen) == {X_MARKER}


def test_computer_first():
    first = []

    def computer(board):
        if not first:
            first.append("".join(board.cells))
        return get_computer_move(board)

    final = play_game(GameConfig().new_board(), random_move, computer, computer_first=True)
    assert final.done
    assert first == [" " * 9]


def test_invalid_agent_move_raises():
    with pytest.raises(RuntimeError):
        play_game(GameConfig().new_board(), lambda b: (0, 0), lambda b: (0, 0))


def test_eval_vs_random_rates():
    result = eval_vs_random(GameConfig(), games=6, seed=0, progress=False)
    assert result["games"] == 6
    assert result["ai_w"] + result["ai_d"] + result["ai_l"] == pytest.approx(1.0)


def test_eval_vs_random_is_seeded():
    a = eval_vs_random(GameConfig(), games=4, seed=3, progress=False)
    b = eval_vs_random(GameConfig(), games=4, seed=3, progress=False)
    assert a == b


def test_self_play_is_deterministic():
    config = GameConfig()
    cache = LookaheadCache()
    a = eval_self_play(config, games=2, cache=cache, progress=False)
    b = eval_self_play(config, games=2, progress=False)
    assert a == b
    assert a["games"] == 2
    assert a["x_w"] + a["o_w"] + a["draw"] == pytest.approx(1.0)


def test_rectangular_board_games():
    config = GameConfig(width=3, height=2, win_length=3, player=O_MARKER, computer=X_MARKER)
    result = eval_vs_random(config, games=2, seed=0, progress=False)
    assert result["games"] == 2
