#!/usr/bin/env python3
"""
Evaluate the lookahead AI, or play against it.

Usage:
    python eval.py                          # 3x3, run length 3
    python eval.py --games 500 --seed 1
    python eval.py --width 4 --height 3 --length 3 --games 20
    python eval.py --play
"""

import sys
import json
import time
import logging
import argparse
from dataclasses import asdict
from pathlib import Path

from tqdm.auto import tqdm

# Add src to path
sys.path = [str(Path(__file__).parent / "src")] + sys.path

from mnk import (
    Board,
    GameConfig,
    LookaheadCache,
    computer_move,
    eval_vs_random,
    eval_self_play,
)


def print_board(board: Board):
    """Pretty print board with column and row indices."""
    print("   " + " ".join(str(x) for x in range(board.width)))
    for y, row in enumerate(board.rows):
        print(f"{y:2d} " + "|".join(row))
        if y < board.height - 1:
            print("   " + "+".join("-" * board.width))


def play_interactive(config: GameConfig, computer_first: bool = False):
    """Play a game against the AI."""
    board = config.new_board()
    cache = LookaheadCache()

    print("\n=== Interactive Game ===")
    print(f"You are {board.player_marker}, {board.win_length} in a row wins")
    print("Enter moves as 'x y':")
    print()

    computer_turn = computer_first
    while not board.done:
        print_board(board)
        print()

        if computer_turn:
            board = computer_move(board, cache)
            print("Computer moved")
        else:
            try:
                x, y = (int(v) for v in input("Your move: ").split())
            except ValueError:
                print("Invalid move, try again")
                continue
            except (EOFError, KeyboardInterrupt):
                print("\nGame aborted")
                return
            nxt = board.mark(x, y, False)
            if nxt is board:
                print("Invalid move, try again")
                continue
            board = nxt

        computer_turn = not computer_turn
        print()

    print_board(board)
    if board.player_win:
        print("\nYou win!")
    elif board.computer_win:
        print("\nComputer wins!")
    else:
        print("\nDraw!")


def main():
    parser = argparse.ArgumentParser(description="Evaluate the m,n,k lookahead AI")
    parser.add_argument("--width", type=int, default=3, help="Board width")
    parser.add_argument("--height", type=int, default=3, help="Board height")
    parser.add_argument("--length", type=int, default=3, help="Run length needed to win")
    parser.add_argument("--player", type=str, default="X", choices=["X", "O"], help="Player marker")
    parser.add_argument("--games", type=int, default=100, help="Number of games vs random")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--canonical", action="store_true", help="Share cache entries between symmetric positions")
    parser.add_argument("--play", action="store_true", help="Play interactive game")
    parser.add_argument("--computer-first", action="store_true", help="Computer moves first in --play")
    parser.add_argument("--run-name", type=str, default=None, help="Save results under save-dir/run-name")
    parser.add_argument("--save-dir", type=str, default="runs", help="Save directory")
    parser.add_argument("--verbose", action="store_true", help="Log AI decisions")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = GameConfig(
        width=args.width,
        height=args.height,
        win_length=args.length,
        player=args.player,
        computer="O" if args.player == "X" else "X",
    )

    cells = config.width * config.height
    if cells > 12:
        print(f"Warning: {cells} cells; exhaustive lookahead may not finish")

    # Interactive play
    if args.play:
        play_interactive(config, computer_first=args.computer_first)
        return

    cache = LookaheadCache(canonical=args.canonical)

    print("\n=== Evaluation ===")
    print(f"Board: {config.width}x{config.height}, run length {config.win_length}")

    t0 = time.perf_counter()
    print(f"\nvs Random ({args.games} games)...")
    rnd = eval_vs_random(config, games=args.games, seed=args.seed, cache=cache)
    tqdm.write(f"  Wins:   {rnd['ai_w']:.2%}")
    tqdm.write(f"  Draws:  {rnd['ai_d']:.2%}")
    tqdm.write(f"  Losses: {rnd['ai_l']:.2%}")

    print("\nSelf-play (2 games)...")
    sp = eval_self_play(config, games=2, cache=cache)
    tqdm.write(f"  X wins: {sp['x_w']:.2%}")
    tqdm.write(f"  O wins: {sp['o_w']:.2%}")
    tqdm.write(f"  Draws:  {sp['draw']:.2%}")

    elapsed = time.perf_counter() - t0
    stats = cache.stats()
    print(f"\nCache: {stats['entries']:,} entries | {stats['hits']:,} hits | {stats['misses']:,} misses")
    print(f"Elapsed: {elapsed:.1f}s")

    if args.run_name:
        run_dir = Path(args.save_dir) / args.run_name
        run_dir.mkdir(parents=True, exist_ok=True)
        with open(run_dir / "config.json", "w") as f:
            json.dump(asdict(config), f, indent=2)
        with open(run_dir / "results.json", "w") as f:
            json.dump({"vs_random": rnd, "self_play": sp, "cache": stats, "elapsed_s": elapsed}, f, indent=2)
        print(f"✓ Results saved to {run_dir}")


if __name__ == "__main__":
    main()
