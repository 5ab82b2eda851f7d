"""
mctree: generic Monte Carlo Tree Search engine.

Searches any sequential-decision game, including games with hidden
information, that implements the contract in mctree.game.core.

Example:
    >>> import mctree
    >>> mctree.setup_logging("DEBUG")
    >>> mcts = mctree.MCTS(engine, config=mctree.SearchConfig(seed=3))
    >>> for _ in range(200):
    ...     mcts.playout(player)
    >>> mcts.best_move()
"""

import logging
import sys

from mctree.config import SearchConfig
from mctree.game.core import (
    GameEngine,
    GameState,
    MCTreeException,
    SearchInvariantError,
    SearchStateError,
)
from mctree.mcts.search import MCTS
from mctree.tree.node import Node

__version__ = "0.1.0"


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Setup console logging for mctree.

    Args:
        log_level: Logging level name (e.g. 'DEBUG', 'INFO')
    """
    logger = logging.getLogger("mctree")
    logger.setLevel(getattr(logging, log_level))

    # Already configured: only the level changes
    if logger.handlers:
        return

    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    logger.addHandler(handler)


__all__ = [
    "GameEngine",
    "GameState",
    "MCTS",
    "MCTreeException",
    "Node",
    "SearchConfig",
    "SearchInvariantError",
    "SearchStateError",
    "setup_logging",
]
