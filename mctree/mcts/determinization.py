"""
Determinization for imperfect information MCTS.

A rollout cannot be played against information the searching player does not
have. Before each simulation the game resolves its hidden state (opponent
hands, undrawn cards, ...) into one concrete guess consistent with what the
player can see, and after the simulation the guess is thrown away again.

Both halves of that exchange belong to the game contract:
    - randomize_hidden_info(state, player)
    - clear_randomized_hidden_info()

This module only guarantees that they are always called in matched pairs,
including when the rollout makes no moves at all or a contract call raises.
The randomized state lives on the game engine for the whole rollout, so a
single engine instance must not be shared by concurrent simulations.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from mctree.game.core import GameEngine, GameState

logger = logging.getLogger(__name__)


@contextmanager
def determinized(
    engine: GameEngine, state: GameState, player: Any
) -> Iterator[GameEngine]:
    """
    Randomize hidden information for the duration of a with-block.

    Args:
        engine: Game contract owning the hidden state
        state: State the rollout starts from
        player: Player whose knowledge the guess must respect

    Yields:
        The engine, with hidden information resolved

    Example:
        >>> with determinized(engine, node.value, player):
        ...     leaf = rollout(node)
        >>> # hidden information is cleared again here
    """
    engine.randomize_hidden_info(state, player)
    logger.debug(f"Randomized hidden info for player {player!r}")
    try:
        yield engine
    finally:
        engine.clear_randomized_hidden_info()
        logger.debug("Cleared randomized hidden info")
