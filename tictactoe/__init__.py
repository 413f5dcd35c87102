"""
Tic-tac-toe AI engine package.

This package implements a compact adversarial search for 3x3 tic-tac-toe:
negamax with alpha-beta pruning over an extended (infinity-aware) score,
tactical move ordering, an adaptive depth selector, and iterative deepening.

Modules:
    constants - Heuristic weights, priority classes, depth tables, bounds
    board     - Player, Position, immutable Board, move generation
    rules     - Win/draw detection (PlayerWon / Draw / Continues)
    score     - ExtendedScore with +/- infinity sentinels
    evaluate  - Static heuristic evaluation and terminal scoring
    ordering  - Win/block/heuristic move ordering
    negamax   - Game-agnostic negamax with alpha-beta pruning
    search    - Depth selection, iterative deepening, find_best_move
"""
