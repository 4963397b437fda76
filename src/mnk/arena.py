"""
Evaluation games.

Plays the lookahead AI against a random opponent or against itself and
reports outcome rates.
"""

import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from tqdm.auto import trange

from .game import O_MARKER, X_MARKER, Board
from .lookahead import LookaheadCache
from .policy import get_computer_move, random_move

# Chooses a move for board.computer_marker
Agent = Callable[[Board], Tuple[int, int]]


@dataclass
class GameConfig:
    """Board configuration."""

    width: int = 3
    height: int = 3
    win_length: int = 3

    # Markers
    player: str = X_MARKER
    computer: str = O_MARKER

    def new_board(self) -> Board:
        return Board(self.width, self.height, self.win_length, self.player, self.computer)


def play_game(
    board: Board,
    player_agent: Agent,
    computer_agent: Agent,
    computer_first: bool = False,
) -> Board:
    """
    Alternate moves until the game is over.

    The player agent sees board.swapped(), so both agents pick moves for
    the computer marker of the board they are handed.

    Returns:
        Final board
    """
    computer_turn = computer_first
    while not board.done:
        if computer_turn:
            x, y = computer_agent(board)
        else:
            x, y = player_agent(board.swapped())
        nxt = board.mark(x, y, computer_turn)
        if nxt is board:
            side = "computer" if computer_turn else "player"
            raise RuntimeError(f"{side} agent chose invalid move ({x}, {y})")
        board = nxt
        computer_turn = not computer_turn
    return board


def eval_vs_random(
    config: GameConfig,
    games: int = 100,
    seed: Optional[int] = None,
    cache: Optional[LookaheadCache] = None,
    progress: bool = True,
) -> Dict[str, float]:
    """
    Evaluate the AI (computer side) vs a uniformly random player.

    Starting side alternates between games.

    Returns:
        Dict with 'games', 'ai_w', 'ai_d', 'ai_l'
    """
    rng = random.Random(seed)
    cache = cache if cache is not None else LookaheadCache()
    wins = draws = losses = 0

    def ai(board: Board) -> Tuple[int, int]:
        return get_computer_move(board, cache)

    def opponent(board: Board) -> Tuple[int, int]:
        return random_move(board, rng)

    for g in trange(games, desc="vs random", disable=not progress, leave=False):
        final = play_game(config.new_board(), opponent, ai, computer_first=(g % 2 == 1))
        if final.computer_win:
            wins += 1
        elif final.player_win:
            losses += 1
        else:
            draws += 1

    total = max(1, wins + draws + losses)
    return {
        "games": wins + draws + losses,
        "ai_w": wins / total,
        "ai_d": draws / total,
        "ai_l": losses / total,
    }


def eval_self_play(
    config: GameConfig,
    games: int = 2,
    cache: Optional[LookaheadCache] = None,
    progress: bool = True,
) -> Dict[str, float]:
    """
    Evaluate the AI against itself.

    Starting side alternates between games.

    Returns:
        Dict with 'games', 'x_w', 'o_w', 'draw'
    """
    cache = cache if cache is not None else LookaheadCache()
    counts = {X_MARKER: 0, O_MARKER: 0, None: 0}

    def ai(board: Board) -> Tuple[int, int]:
        return get_computer_move(board, cache)

    for g in trange(games, desc="self-play", disable=not progress, leave=False):
        final = play_game(config.new_board(), ai, ai, computer_first=(g % 2 == 1))
        if final.computer_win:
            counts[final.computer_marker] += 1
        elif final.player_win:
            counts[final.player_marker] += 1
        else:
            counts[None] += 1

    total = max(1, games)
    return {
        "games": games,
        "x_w": counts[X_MARKER] / total,
        "o_w": counts[O_MARKER] / total,
        "draw": counts[None] / total,
    }
