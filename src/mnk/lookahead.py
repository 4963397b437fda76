"""
Exhaustive lookahead over the remaining game tree, with caching.

Counts every terminal position reachable under alternating play. Nothing is
pruned: each leaf of the full tree is counted once, so the counts grow
combinatorially with the number of open cells. Without a cache the same
positions are re-expanded along every move order that reaches them; keep
boards small (3x3x3 and similar).
"""

import logging
from typing import Dict, Optional, Tuple

import numpy as np

from .game import MARKERS, O_MARKER, X_MARKER, Board
from .symmetries import canonical_cells

logger = logging.getLogger(__name__)

# (o_wins, x_wins, draws)
Outcomes = Tuple[int, int, int]

O_WIN: Outcomes = (1, 0, 0)
X_WIN: Outcomes = (0, 1, 0)
DRAW: Outcomes = (0, 0, 1)


class LookaheadCache:
    """
    Memo table: (mover, cells) -> outcome counts.

    Entries never go stale since a position's outcome counts never change.
    Lifetime is up to the owner: one per decision, one per game session, or
    shared across sessions. Keys carry the grid shape and run length, so one
    cache may serve boards of different configurations.

    With canonical=True, positions are keyed by their smallest symmetric
    image so mirrored positions share one entry.
    """

    def __init__(self, canonical: bool = False):
        self.canonical = canonical
        self._table: Dict[tuple, Outcomes] = {}
        self.hits = 0
        self.misses = 0

    def key(self, mover: str, board: Board) -> tuple:
        if self.canonical:
            cells = canonical_cells(board.cells, board.width, board.height)
        else:
            cells = "".join(board.cells)
        return mover, board.width, board.height, board.win_length, cells

    def get(self, mover: str, board: Board) -> Optional[Outcomes]:
        value = self._table.get(self.key(mover, board))
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def put(self, mover: str, board: Board, value: Outcomes):
        self._table[self.key(mover, board)] = value

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, item) -> bool:
        mover, board = item
        return self.key(mover, board) in self._table

    def clear(self):
        self._table.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> Dict[str, int]:
        return {"entries": len(self._table), "hits": self.hits, "misses": self.misses}


def opposing(marker: str) -> str:
    """Return the other marker of the X/O pair."""
    if marker == X_MARKER:
        return O_MARKER
    if marker == O_MARKER:
        return X_MARKER
    raise ValueError(f"mover must be one of {MARKERS}, got {marker!r}.")


def _win_for(marker: str) -> Outcomes:
    return O_WIN if marker == O_MARKER else X_WIN


def lookahead(board: Board, mover: str, cache: Optional[LookaheadCache] = None) -> Outcomes:
    """
    Count terminal outcomes of every continuation of board.

    Args:
        board: Position to expand
        mover: Marker placed next; play alternates afterwards
        cache: Memo table to read and fill; a fresh one is used if None

    Returns:
        (o_wins, x_wins, draws) summed over all leaves of the game tree
    """
    next_mover = opposing(mover)
    if cache is None:
        cache = LookaheadCache()
    result = _lookahead(board, mover, next_mover, cache)
    logger.debug("lookahead %r mover=%s -> %s (%s)", board, mover, result, cache.stats())
    return result


def _lookahead(board: Board, mover: str, next_mover: str, cache: LookaheadCache) -> Outcomes:
    if board.player_win:
        return _win_for(board.player_marker)
    if board.computer_win:
        return _win_for(board.computer_marker)
    if board.done:
        return DRAW

    # At this point the board has an empty cell
    cached = cache.get(mover, board)
    if cached is not None:
        return cached

    o_total = x_total = draw_total = 0
    for x, y in board.blank_cells():
        child = board.place(x, y, mover)
        o, xw, d = _lookahead(child, next_mover, mover, cache)
        o_total += o
        x_total += xw
        draw_total += d

    result = (o_total, x_total, draw_total)
    cache.put(mover, board, result)
    return result


def outcome_grid(board: Board, cache: Optional[LookaheadCache] = None) -> np.ndarray:
    """
    Lookahead counts for the computer taking each empty cell.

    Returns:
        [height, width, 3] int64 array of (o_wins, x_wins, draws); occupied
        cells, and every cell of a finished board, hold zeros
    """
    grid = np.zeros((board.height, board.width, 3), dtype=np.int64)
    if board.done:
        return grid
    if cache is None:
        cache = LookaheadCache()
    for x, y in board.blank_cells():
        child = board.place(x, y, board.computer_marker)
        grid[y, x] = lookahead(child, board.player_marker, cache)
    return grid

