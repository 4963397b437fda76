"""Board symmetry maps."""

import numpy as np
import pytest

from mnk import Board, O_MARKER, X_MARKER, all_symmetries, apply_symmetry_cells, canonical_cells, symmetry_maps


@pytest.mark.parametrize("width,height,n_sym", [(3, 3, 8), (4, 4, 8), (3, 4, 4), (5, 2, 4)])
def test_maps_are_permutations(width, height, n_sym):
    maps = symmetry_maps(width, height)
    assert len(maps) == n_sym
    for mp in maps:
        assert sorted(mp.tolist()) == list(range(width * height))
    assert np.array_equal(maps[0], np.arange(width * height))


def test_identity_and_flips():
    cells = tuple("XO O     ")
    assert apply_symmetry_cells(cells, 3, 3, 0) == cells
    # Horizontal reflection mirrors each row
    assert "".join(apply_symmetry_cells(cells, 3, 3, 1)) == " OX  O   "
    # Vertical reflection reverses row order
    assert "".join(apply_symmetry_cells(cells, 3, 3, 2)) == "   O  XO "


@pytest.mark.parametrize("cells", ["XX  O  O ", "X   X   X", "  OX O  X"])
def test_symmetries_preserve_wins(cells):
    board = Board(3, 3, 3, X_MARKER, O_MARKER, cells=cells)
    for image in all_symmetries(board.cells, 3, 3):
        other = Board(3, 3, 3, X_MARKER, O_MARKER, cells=image)
        assert other.player_win == board.player_win
        assert other.computer_win == board.computer_win


def test_rectangular_symmetries_preserve_wins():
    board = Board(4, 3, 3, X_MARKER, O_MARKER, cells=" O    O    O")
    images = all_symmetries(board.cells, 4, 3)
    assert len(images) == 4
    for image in images:
        assert Board(4, 3, 3, X_MARKER, O_MARKER, cells=image).computer_win


def test_canonical_cells_shared_by_images():
    cells = "X    O   "
    canon = canonical_cells(cells, 3, 3)
    for image in all_symmetries(cells, 3, 3):
        assert canonical_cells(image, 3, 3) == canon
    assert canon == min("".join(c) for c in all_symmetries(cells, 3, 3))
