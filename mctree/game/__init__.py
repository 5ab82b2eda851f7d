"""
mctree game contract package.

Holds the abstract interface a game implements to be searched by the MCTS
engine, together with the package exception hierarchy.
"""

from mctree.game.core import (
    GameEngine,
    GameState,
    MCTreeException,
    SearchInvariantError,
    SearchStateError,
)

__all__ = [
    "GameEngine",
    "GameState",
    "MCTreeException",
    "SearchInvariantError",
    "SearchStateError",
]
