"""
Board symmetries for m,n,k grids.

Square boards have the 8 D4 transforms:
  rotations 0°, 90°, 180°, 270°; reflections horizontal, vertical,
  main diagonal, anti-diagonal
Rectangular boards keep only identity, both reflections and 180° rotation.

Every transform maps rows, columns and diagonals onto rows, columns and
diagonals, so win detection and lookahead counts are invariant under them.
"""

from functools import lru_cache
from typing import List, Sequence, Tuple

import numpy as np


@lru_cache(maxsize=None)
def symmetry_maps(width: int, height: int) -> Tuple[np.ndarray, ...]:
    """
    Build permutation maps for the symmetries of a width x height grid.

    Each map mp satisfies transformed[i] = cells[mp[i]].
    """
    square = width == height
    n_sym = 8 if square else 4
    w, h = width - 1, height - 1

    maps = []
    for k in range(n_sym):
        mp = np.zeros(width * height, dtype=np.int64)
        for y in range(height):
            for x in range(width):
                # Apply transform k
                if k == 0:   xt, yt = x, y                # identity
                elif k == 1: xt, yt = w - x, y            # reflect horizontal
                elif k == 2: xt, yt = x, h - y            # reflect vertical
                elif k == 3: xt, yt = w - x, h - y        # rotate 180
                elif k == 4: xt, yt = h - y, x            # rotate 90
                elif k == 5: xt, yt = y, w - x            # rotate 270
                elif k == 6: xt, yt = y, x                # reflect main diag
                else:        xt, yt = h - y, w - x        # reflect anti-diag
                mp[xt + yt * width] = x + y * width
        mp.setflags(write=False)
        maps.append(mp)
    return tuple(maps)


def apply_symmetry_cells(
    cells: Sequence[str], width: int, height: int, sym_id: int
) -> Tuple[str, ...]:
    """
    Apply symmetry transform to a row-major cell sequence.

    Args:
        cells: width * height markers
        sym_id: index into symmetry_maps(width, height)

    Returns:
        Transformed cells
    """
    mp = symmetry_maps(width, height)[sym_id]
    return tuple(cells[int(i)] for i in mp)


def all_symmetries(cells: Sequence[str], width: int, height: int) -> List[Tuple[str, ...]]:
    """Return every symmetric version of the cells (identity first)."""
    n_sym = len(symmetry_maps(width, height))
    return [apply_symmetry_cells(cells, width, height, k) for k in range(n_sym)]


def canonical_cells(cells: Sequence[str], width: int, height: int) -> str:
    """Lexicographically smallest symmetric image, joined into a string."""
    return min("".join(c) for c in all_symmetries(cells, width, height))
