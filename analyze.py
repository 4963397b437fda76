#!/usr/bin/env python3
"""
Exhaustive outcome analysis of opening moves.

For every cell of an empty board, counts the wins, losses and draws of the
full game tree after the first move there, and writes a markdown report.

Usage:
    python analyze.py                              # 3x3, run length 3
    python analyze.py --width 4 --height 3 --length 3
    python analyze.py --reply-to 1 1 --plot        # AI replies to a center opening
"""

import sys
import json
import time
import logging
import argparse
from dataclasses import asdict
from pathlib import Path

import numpy as np
from tqdm.auto import tqdm

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from mnk import (
    GameConfig,
    LookaheadCache,
    outcome_grid,
    rank_candidates,
    get_computer_move,
)


def create_heatmaps(grid: np.ndarray, output_dir: Path):
    """Plot O-win, X-win and draw shares per cell."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    totals = grid.sum(axis=-1, keepdims=True)
    shares = np.divide(grid, totals, out=np.zeros(grid.shape, dtype=float), where=totals > 0)

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    for ax, k, title in zip(axes, range(3), ("O wins", "X wins", "Draws")):
        im = ax.imshow(shares[..., k], cmap="viridis", vmin=0.0, vmax=1.0)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_xlabel('x', fontsize=12)
        ax.set_ylabel('y', fontsize=12)
        for y in range(grid.shape[0]):
            for x in range(grid.shape[1]):
                if totals[y, x, 0] > 0:
                    ax.text(x, y, f"{shares[y, x, k]:.2f}", ha="center", va="center", color="w")
        fig.colorbar(im, ax=ax, fraction=0.046)
    plt.tight_layout()
    plt.savefig(output_dir / 'heatmap_outcomes.png', dpi=150, bbox_inches='tight')
    plt.close()


def generate_markdown_report(config: GameConfig, first_moves: list, replies: list,
                             reply_to, run_dir: Path, cache_stats: dict, elapsed: float):
    """Write REPORT.md for an analysis run."""
    md = []
    md.append(f"# Opening Analysis: {config.width}x{config.height}, run length {config.win_length}\n")
    md.append(f"Player: `{config.player}` | Computer: `{config.computer}`\n")

    md.append("\n## First Moves\n")
    md.append("Full game tree after the first marker is placed on each cell.\n")
    md.append("| Cell | O wins | X wins | Draws | Total |")
    md.append("|------|--------|--------|-------|-------|")
    for m in first_moves:
        total = m["o_wins"] + m["x_wins"] + m["draws"]
        md.append(f"| ({m['x']}, {m['y']}) | {m['o_wins']:,} | {m['x_wins']:,} | {m['draws']:,} | {total:,} |")

    if reply_to is not None:
        md.append(f"\n## Computer Replies to ({reply_to[0]}, {reply_to[1]})\n")
        md.append("| Rank | Cell | Wins | Losses | Draws |")
        md.append("|------|------|------|--------|-------|")
        for i, s in enumerate(replies, 1):
            md.append(f"| {i} | ({s['x']}, {s['y']}) | {s['wins']:,} | {s['losses']:,} | {s['draws']:,} |")

    md.append("\n## Run\n")
    md.append(f"- Cache entries: {cache_stats['entries']:,}")
    md.append(f"- Cache hits / misses: {cache_stats['hits']:,} / {cache_stats['misses']:,}")
    md.append(f"- Elapsed: {elapsed:.2f}s\n")

    report_path = run_dir / "REPORT.md"
    with open(report_path, 'w') as f:
        f.write('\n'.join(md))

    print(f"✓ Markdown report saved to {report_path}")


def main():
    parser = argparse.ArgumentParser(description="Analyze m,n,k openings by exhaustive lookahead")
    parser.add_argument("--width", type=int, default=3, help="Board width")
    parser.add_argument("--height", type=int, default=3, help="Board height")
    parser.add_argument("--length", type=int, default=3, help="Run length needed to win")
    parser.add_argument("--reply-to", type=int, nargs=2, default=None, metavar=("X", "Y"),
                        help="Rank computer replies to this player opening")
    parser.add_argument("--canonical", action="store_true", help="Share cache entries between symmetric positions")
    parser.add_argument("--plot", action="store_true", help="Save outcome heatmaps (needs matplotlib)")
    parser.add_argument("--run-name", type=str, default="analysis", help="Run name for saving")
    parser.add_argument("--save-dir", type=str, default="runs", help="Save directory")
    parser.add_argument("--verbose", action="store_true", help="Log lookahead calls")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = GameConfig(width=args.width, height=args.height, win_length=args.length)

    run_dir = Path(args.save_dir) / args.run_name
    run_dir.mkdir(parents=True, exist_ok=True)
    with open(run_dir / "config.json", "w") as f:
        json.dump(asdict(config), f, indent=2)

    cache = LookaheadCache(canonical=args.canonical)
    t0 = time.perf_counter()

    # The computer's first move, seen from the player's side
    print("\n=== First Moves ===")
    board = config.new_board().swapped()
    grid = outcome_grid(board, cache)
    first_moves = []
    for y in tqdm(range(config.height), desc="Rows", leave=False):
        for x in range(config.width):
            o, xw, d = (int(v) for v in grid[y, x])
            first_moves.append({"x": x, "y": y, "o_wins": o, "x_wins": xw, "draws": d})
            tqdm.write(f"  ({x}, {y}): O {o:,} | X {xw:,} | D {d:,}")

    replies = []
    if args.reply_to is not None:
        print(f"\n=== Replies to ({args.reply_to[0]}, {args.reply_to[1]}) ===")
        opened = config.new_board().mark(args.reply_to[0], args.reply_to[1], False)
        replies = [s._asdict() for s in rank_candidates(opened, cache)]
        for s in replies:
            print(f"  ({s['x']}, {s['y']}): W {s['wins']:,} | L {s['losses']:,} | D {s['draws']:,}")
        print(f"  AI plays: {get_computer_move(opened, cache)}")

    elapsed = time.perf_counter() - t0
    stats = cache.stats()

    with open(run_dir / "analysis.json", "w") as f:
        json.dump({"first_moves": first_moves, "replies": replies, "cache": stats, "elapsed_s": elapsed}, f, indent=2)
    print(f"\n✓ Analysis saved to {run_dir / 'analysis.json'}")

    if args.plot:
        create_heatmaps(grid, run_dir)
        print(f"✓ Heatmaps saved to {run_dir}")

    generate_markdown_report(config, first_moves, replies, args.reply_to, run_dir, stats, elapsed)


if __name__ == "__main__":
    main()
