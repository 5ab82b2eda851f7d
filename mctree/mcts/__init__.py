"""
Monte Carlo Tree Search (MCTS) implementation for mctree.

This module provides the search side of the engine:
- MCTS: UCT search driving select/expand/simulate/backpropagate playouts
- determinized: Context manager pairing the game's hidden-information hooks

The MCTS implementation uses:
- UCT formula for exploration-exploitation balance
- Uniformly random expansion of untried moves
- Random rollouts to a terminal state, scored by the game's heuristic
- Determinization of hidden information around every rollout

Example:
    >>> from mctree.mcts import MCTS
    >>> from mctree.config import SearchConfig
    >>>
    >>> mcts = MCTS(engine, config=SearchConfig(seed=1))
    >>> ranked = mcts.search(player, num_playouts=1000)
    >>> best_move = ranked[0].value.current_move
"""

from mctree.mcts.search import MCTS
from mctree.mcts.determinization import determinized

__all__ = [
    "MCTS",
    "determinized",
]
