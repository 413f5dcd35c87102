#!/usr/bin/env python3
"""
Benchmark: measure search depth, nodes, pruning, and time per decision.

Run before and after any change to ordering or depth selection to quantify
its effect. Fewer nodes at the same depth means more effective pruning.

Usage: python3 tools/bench.py [--depth N]
"""
import argparse
import os
import sys
import time

# Make 'tictactoe' importable when this script is run directly from the repo.
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from tictactoe.board import Board, Player
from tictactoe.search import find_best_move_with_metrics

# Fixed positions spanning opening, midgame, and endgame. Same set for every
# comparison run.
POSITIONS = [
    ("Empty",        ".........", Player.X),
    ("Center reply", "....X....", Player.O),
    ("Corner reply", "X........", Player.O),
    ("Opposite",     "X...O....", Player.X),
    ("Edge start",   ".X.......", Player.O),
    ("Midgame",      "X.O.X...O", Player.X),
    ("Win ready",    "XX.OO....", Player.X),
    ("Block",        "X..OO...X", Player.X),
    ("Endgame",      "XOXXOO.X.", Player.O),
    ("Last cell",    "XOXXOOOX.", Player.X),
]


def run_position(label: str, text: str, player: Player, depth: int | None) -> dict:
    """Run one decision and collect its metrics and wall time."""
    board = Board.parse(text)
    start = time.perf_counter()
    move, metrics = find_best_move_with_metrics(player, board, depth)
    time_ms = (time.perf_counter() - start) * 1000
    return {
        "label": label,
        "move": "(none)" if move is None else f"{move.row},{move.col}",
        "depth": metrics.search_depth,
        "nodes": metrics.nodes_searched,
        "pruned": metrics.pruning_effectiveness,
        "mode": "immediate" if metrics.immediate_move else ("iterative" if metrics.iterative_deepening else "direct"),
        "time_ms": time_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    parser = argparse.ArgumentParser(description="Tic-tac-toe engine benchmark")
    parser.add_argument("--depth", type=int, default=None, help="force a search depth (1-9)")
    args = parser.parse_args()

    print(f"Tic-tac-toe engine benchmark: {sys.executable}")
    print()
    print(
        f"{'Position':<14} {'Move':<6} {'Mode':<10} {'Depth':>5} "
        f"{'Nodes':>8} {'Pruned':>7} {'Time(ms)':>9}"
    )
    print("-" * 64)

    results = []
    for label, text, player in POSITIONS:
        r = run_position(label, text, player, args.depth)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<6} {r['mode']:<10} {r['depth']:>5} "
            f"{r['nodes']:>8,} {r['pruned']:>7.1%} {r['time_ms']:>9.1f}"
        )

    searched = [r for r in results if r["nodes"] > 0]
    if searched:
        avg_nodes = sum(r["nodes"] for r in searched) // len(searched)
        avg_time = sum(r["time_ms"] for r in searched) / len(searched)
        print("-" * 64)
        print(f"{'AVERAGE':<14} {'':<6} {'':<10} {'':>5} {avg_nodes:>8,} {'':>7} {avg_time:>9.1f}")


if __name__ == "__main__":
    main()
