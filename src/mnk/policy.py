"""
Computer move selection.

Three tiers, evaluated over the empty cells in scan order (x ascending, then
y ascending):
  1. Forced win: the first cell where the computer wins immediately.
  2. Forced block: the last cell where the player would win immediately.
  3. Lookahead: fewest player wins, then most computer wins, then scan order.
"""

import logging
import random
from typing import List, NamedTuple, Optional, Tuple

from .game import O_MARKER, Board
from .lookahead import LookaheadCache, lookahead

logger = logging.getLogger(__name__)

NO_MOVE = (-1, -1)


class MoveScore(NamedTuple):
    """Lookahead counts for one candidate, from the computer's side."""
    x: int
    y: int
    wins: int
    losses: int
    draws: int


def _move_score(board: Board, x: int, y: int, computer_take: Board,
                cache: LookaheadCache) -> MoveScore:
    o_count, x_count, draw_count = lookahead(computer_take, board.player_marker, cache)
    if board.computer_marker == O_MARKER:
        return MoveScore(x, y, wins=o_count, losses=x_count, draws=draw_count)
    return MoveScore(x, y, wins=x_count, losses=o_count, draws=draw_count)


def _rank(scores: List[MoveScore]) -> List[MoveScore]:
    # Stable: exact ties keep scan order
    return sorted(scores, key=lambda s: (s.losses, -s.wins))


def get_computer_move(board: Board, cache: Optional[LookaheadCache] = None) -> Tuple[int, int]:
    """
    Choose the computer's move.

    Args:
        board: Current position, computer to move
        cache: Lookahead memo table; pass one per game session to reuse work

    Returns:
        (x, y) of the chosen cell, or (-1, -1) if the game is over
    """
    if board.done:
        return NO_MOVE
    if cache is None:
        cache = LookaheadCache()

    scores: List[MoveScore] = []
    block = None
    for x, y in board.blank_cells():
        computer_take = board.place(x, y, board.computer_marker)
        player_take = board.place(x, y, board.player_marker)
        if computer_take.computer_win:
            logger.debug("winning move at (%d, %d)", x, y)
            return x, y
        if player_take.player_win:
            # Keep scanning: a winning move found later takes priority
            block = (x, y)
        elif block is None:
            # Only look ahead while no block is pending
            scores.append(_move_score(board, x, y, computer_take, cache))

    if block is not None:
        logger.debug("blocking at %s", block)
        return block

    best = _rank(scores)[0]
    logger.debug("lookahead pick (%d, %d): %d wins / %d losses / %d draws (cache %s)",
                 best.x, best.y, best.wins, best.losses, best.draws, cache.stats())
    return best.x, best.y


def computer_move(board: Board, cache: Optional[LookaheadCache] = None) -> Board:
    """Return the board after the computer's move (unchanged if the game is over)."""
    x, y = get_computer_move(board, cache)
    if (x, y) == NO_MOVE:
        return board
    return board.place(x, y, board.computer_marker)


def rank_candidates(board: Board, cache: Optional[LookaheadCache] = None) -> List[MoveScore]:
    """Lookahead scores of every empty cell, best first."""
    if board.done:
        return []
    if cache is None:
        cache = LookaheadCache()
    scores = [
        _move_score(board, x, y, board.place(x, y, board.computer_marker), cache)
        for x, y in board.blank_cells()
    ]
    return _rank(scores)


def random_move(board: Board, rng: Optional[random.Random] = None) -> Tuple[int, int]:
    """Uniformly random empty cell, or (-1, -1) if the game is over."""
    if board.done:
        return NO_MOVE
    rng = rng or random
    return rng.choice(board.blank_cells())
