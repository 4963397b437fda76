"""
mnk - generalized N-in-a-row (m,n,k) games with an exhaustive-lookahead AI.

The AI counts every terminal outcome of the remaining game tree (no depth
cutoff) and combines those counts with forced-win and forced-block checks.
"""

from .game import Board, X_MARKER, O_MARKER, BLANK_MARKER, TEST_MARKER
from .lookahead import LookaheadCache, lookahead, opposing, outcome_grid
from .policy import MoveScore, get_computer_move, computer_move, rank_candidates, random_move
from .symmetries import symmetry_maps, apply_symmetry_cells, all_symmetries, canonical_cells
from .arena import GameConfig, play_game, eval_vs_random, eval_self_play

__version__ = "0.1.0"
__all__ = [
    "Board",
    "X_MARKER",
    "O_MARKER",
    "BLANK_MARKER",
    "TEST_MARKER",
    "LookaheadCache",
    "lookahead",
    "opposing",
    "outcome_grid",
    "MoveScore",
    "get_computer_move",
    "computer_move",
    "rank_candidates",
    "random_move",
    "symmetry_maps",
    "apply_symmetry_cells",
    "all_symmetries",
    "canonical_cells",
    "GameConfig",
    "play_game",
    "eval_vs_random",
    "eval_self_play",
]
