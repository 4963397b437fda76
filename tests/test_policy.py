"""Computer move selection: forced win, forced block and lookahead ranking."""

import random

import pytest

from mnk import (
    Board,
    LookaheadCache,
    O_MARKER,
    X_MARKER,
    computer_move,
    get_computer_move,
    rank_candidates,
    random_move,
)


def make(cells: str) -> Board:
    return Board(3, 3, 3, X_MARKER, O_MARKER, cells=cells)


def test_done_board_has_no_move():
    board = Board.from_string("3?3?3?O?X?O XOXXO  ")
    assert board.done
    assert get_computer_move(board) == (-1, -1)
    assert computer_move(board) is board
    assert rank_candidates(board) == []


def test_takes_winning_column():
    assert get_computer_move(make("OXX X OOX")) == (0, 1)


def test_win_beats_earlier_block():
    # (2, 1) blocks X's middle row but (2, 2) completes O's bottom row
    assert get_computer_move(make("OXXXX OO ")) == (2, 2)


def test_blocks_player():
    board = Board.from_string("3?3?3?X?O?OX  X    ")
    assert get_computer_move(board) == (1, 2)


def test_last_block_in_scan_order():
    # X threatens (0, 2) via column 0 and (2, 0) via row 0
    assert get_computer_move(make("XX X     ")) == (2, 0)


def test_blocks_as_x_computer():
    board = Board(3, 3, 3, O_MARKER, X_MARKER, cells="OO  X    ")
    assert get_computer_move(board) == (2, 0)


def test_opening_move_is_center():
    # Fewest losses: center 5616 vs corner 7896 vs edge 10176
    board = Board(3, 3, 3, X_MARKER, O_MARKER)
    assert get_computer_move(board) == (1, 1)


def test_lookahead_move_matches_top_rank():
    board = make("X        ")
    ranked = rank_candidates(board)
    assert len(ranked) == 8
    assert get_computer_move(board) == (ranked[0].x, ranked[0].y)


def test_ranking_order():
    ranked = rank_candidates(make("X        "))
    keys = [(s.losses, -s.wins) for s in ranked]
    assert keys == sorted(keys)
    for s in ranked:
        assert s.wins + s.losses + s.draws > 0


def test_exact_ties_resolve_in_scan_order():
    board = make("    X    ")
    ranked = rank_candidates(board)
    best = (ranked[0].losses, ranked[0].wins)
    tied = [(s.x, s.y) for s in ranked if (s.losses, s.wins) == best]
    assert len(tied) == 4
    assert tied == sorted(tied)
    assert get_computer_move(board) == tied[0]


def test_move_scores_from_computer_side():
    # Computer O moving first: O wins are the computer's wins
    ranked = rank_candidates(Board(3, 3, 3, X_MARKER, O_MARKER))
    center = next(s for s in ranked if (s.x, s.y) == (1, 1))
    assert (center.wins, center.losses, center.draws) == (15648, 5616, 4608)

    ranked = rank_candidates(Board(3, 3, 3, O_MARKER, X_MARKER))
    center = next(s for s in ranked if (s.x, s.y) == (1, 1))
    assert (center.wins, center.losses, center.draws) == (15648, 5616, 4608)


def test_computer_move_places_marker():
    board = Board.from_string("3?3?3?X?O?OX  X    ")
    after = computer_move(board)
    assert after.get_marker(1, 2) == O_MARKER
    assert sum(a != b for a, b in zip(after.cells, board.cells)) == 1


def test_shared_cache_is_consistent():
    cache = LookaheadCache()
    board = make("X        ")
    first = get_computer_move(board, cache)
    assert len(cache) > 0
    assert get_computer_move(board, cache) == first == get_computer_move(board)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_random_move(seed):
    board = make("OX  X    ")
    x, y = random_move(board, random.Random(seed))
    assert (x, y) in board.blank_cells()


def test_random_move_done():
    assert random_move(make("OOO X    ")) == (-1, -1)
