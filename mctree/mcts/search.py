"""
Monte Carlo Tree Search engine.

This module implements UCT-based MCTS over any game that implements the
mctree.game.core contract. The engine grows its tree one playout at a time
and ranks the moves available from the root by accumulated score.

Main Components:
    - MCTS: Search class owning the tree and driving playouts
    - Four-phase loop: Selection, Expansion, Simulation, Backpropagation
    - Determinization of hidden information around every rollout
    - Lightweight module-level metrics (disabled by default)

Each playout:
    1. Selection: From the root, follow the child with the best UCT score
       until reaching a node that still has untried moves (or none at all)
    2. Expansion: Add one untried move, chosen uniformly at random
    3. Simulation: Randomize hidden information, expand randomly to a
       terminal state in a scratch tree, score it, discard the scratch tree
    4. Backpropagation: Add the score to every node from the new one up to
       the root

Example:
    >>> from mctree.mcts import MCTS
    >>> from mctree.config import SearchConfig
    >>>
    >>> mcts = MCTS(my_game_engine, config=SearchConfig(seed=7))
    >>> for _ in range(500):
    ...     mcts.playout(player)
    >>> ranked = mcts.get_best_moves()
    >>> best = ranked[0].value.current_move
"""

import logging
import math
import time
from typing import Any, List, Optional, Sequence

import numpy as np

from mctree.config import SearchConfig
from mctree.game.core import (
    GameEngine,
    GameState,
    SearchInvariantError,
    SearchStateError,
)
from mctree.mcts.determinization import determinized
from mctree.tree.node import Node

logger = logging.getLogger(__name__)


class MCTS:
    """
    Monte Carlo Tree Search over an abstract game.

    The root node is created lazily from the engine's current state on the
    first playout, unless one is supplied. The caller decides how many
    playouts to run; the engine has no time or iteration budget of its own.

    Attributes:
        engine: Game contract providing moves, transitions and scores
        config: Search configuration
        rng: Random generator used for move sampling

    Example:
        >>> mcts = MCTS(engine)
        >>> ranked = mcts.search(player, num_playouts=200)
        >>> ranked[0].score_sum >= ranked[-1].score_sum
        True
    """

    def __init__(
        self,
        engine: GameEngine,
        root: Optional[Node[GameState]] = None,
        config: Optional[SearchConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize MCTS search.

        Args:
            engine: Game contract to search
            root: Existing tree to continue searching (default: create
                  lazily from engine.current_state())
            config: Search configuration (default: SearchConfig())
            rng: Random generator for move sampling (default: seeded from
                 config.seed)
        """
        self.engine = engine
        self.config = config if config is not None else SearchConfig()
        self.config.validate()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        self._root: Optional[Node[GameState]] = root

    @property
    def root(self) -> Optional[Node[GameState]]:
        """Root of the search tree, or None before the first playout."""
        return self._root

    def reset_tree(self) -> None:
        """Drop the search tree; the next playout starts a fresh one."""
        self._root = None

    def playout(self, player: Any) -> float:
        """
        Run one full MCTS iteration (all 4 phases).

        Args:
            player: Player whose perspective rollouts are scored from

        Returns:
            Heuristic score of the rollout (for debugging)
        """
        if self._root is None:
            self._root = Node(self.engine.current_state())
            logger.debug(f"Created search root {self._root!r}")

        # PHASE 1: SELECTION
        leaf = self.select()

        # PHASE 2: EXPANSION
        expanded = self.expand(leaf)

        # PHASE 3: SIMULATION
        score = self.simulate(expanded, player)

        # PHASE 4: BACKPROPAGATION
        self.back_propagate(expanded, score)

        if _SEARCH_PROFILING_ENABLED:
            _SEARCH_METRICS['playouts'] += 1
        if self.config.log_playouts:
            logger.debug(
                f"Playout from {expanded.value!r}: score={score:.3f}, "
                f"root visits={self._root.visit_count}"
            )

        return score

    def search(self, player: Any, num_playouts: int) -> List[Node[GameState]]:
        """
        Run a fixed number of playouts and rank the root's children.

        Args:
            player: Player whose perspective rollouts are scored from
            num_playouts: Number of playouts to run

        Returns:
            Root children sorted by descending score_sum

        Raises:
            ValueError: If num_playouts is negative
        """
        if num_playouts < 0:
            raise ValueError(f"num_playouts must be non-negative, got {num_playouts}")

        start = time.perf_counter()
        for _ in range(num_playouts):
            self.playout(player)
        elapsed = time.perf_counter() - start

        ranked = self.get_best_moves()
        logger.info(
            f"Ran {num_playouts} playouts in {elapsed:.3f}s, "
            f"{len(ranked)} candidate moves"
        )
        return ranked

    def select(self) -> Node[GameState]:
        """
        Descend from the root to the node the next expansion starts from.

        At each node, stop if it is unexpanded, terminal, or still has fewer
        children than legal moves. Otherwise move to the child with the
        highest UCT score, counting an undefined score as -1.

        Returns:
            The selected node

        Raises:
            SearchStateError: If there is no root yet
            SearchInvariantError: If a node with children offers none to
                                  descend into
        """
        if self._root is None:
            raise SearchStateError("Cannot select: search tree has no root")

        node = self._root
        while True:
            children = node.children
            if not children:
                return node

            if len(children) < self.engine.legal_move_count(node.value):
                return node

            best_uct = -math.inf
            best_child = None
            for child in children:
                uct = self.uct_score(child)
                if uct is None:
                    uct = -1.0

                if best_child is None or uct > best_uct:
                    best_child = child
                    best_uct = uct

            if best_child is None:
                raise SearchInvariantError(node, "has no suitable child node(s)")

            node = best_child

    def expand(
        self, node: Node[GameState], simulation_mode: bool = False
    ) -> Node[GameState]:
        """
        Add one untried move below node.

        Args:
            node: Node to expand
            simulation_mode: Ask the game for rollout moves rather than
                             search moves

        Returns:
            The new child, or node itself when there are no legal moves
            (node is then marked terminal) or every legal move already has
            a child
        """
        state = node.value
        moves = self.engine.legal_moves(state, simulation_mode)

        if not moves:
            node.add_children()
            return node

        untried = self._untried_moves(node, moves)
        if not untried:
            return node

        move = untried[int(self.rng.integers(len(untried)))]
        child = Node(self.engine.next_state(state, move), parent=node)
        node.add_children(child)

        if _SEARCH_PROFILING_ENABLED:
            _SEARCH_METRICS['expansions'] += 1

        return child

    def simulate(self, node: Node[GameState], player: Any) -> float:
        """
        Play a random rollout from node to a terminal state and score it.

        The rollout is grown in a scratch tree rooted at a copy of node, so
        nothing it creates reaches the persistent tree. Hidden information is
        randomized for exactly the duration of the rollout.

        Args:
            node: Node to roll out from
            player: Player to determinize for and score from

        Returns:
            Heuristic score of the terminal rollout state
        """
        start = time.perf_counter() if _SEARCH_PROFILING_ENABLED else 0.0

        scratch = Node(node.value)
        if node.is_leaf_node():
            scratch.add_children()

        steps = 0
        with determinized(self.engine, node.value, player):
            current = scratch
            while not current.is_leaf_node():
                current = self.expand(current, simulation_mode=True)
                steps += 1

        score = self.engine.heuristic_score(current.value, player)

        # Don't add the rollout nodes to the main tree
        scratch.disown_children()

        if _SEARCH_PROFILING_ENABLED:
            _SEARCH_METRICS['simulations'] += 1
            _SEARCH_METRICS['rollout_steps'] += steps
            _SEARCH_METRICS['simulate_total_sec'] += time.perf_counter() - start

        return score

    def back_propagate(self, node: Node[GameState], score: float) -> None:
        """
        Add a rollout result to node and every ancestor up to the root.

        Each node on the path gets visit_count += 1, score_sum += score and
        win_flag = 1. The win flag is set unconditionally; an earlier variant
        incremented it only when score > 0.5, but no win threshold is applied.

        Args:
            node: Node the rollout started from
            score: Heuristic score of the rollout
        """
        current: Optional[Node[GameState]] = node
        while current is not None:
            current.visit_count += 1
            current.score_sum += score
            current.win_flag = 1
            current = current.parent

    def uct_score(self, node: Node[GameState]) -> Optional[float]:
        """
        Compute the UCT score of node.

        UCT = (score_sum * win_flag) / visits + c * sqrt(ln(T) / visits)

        Where T is the parent's win flag, or the node's own win flag when
        the parent is missing or is the tree root.

        Args:
            node: Node to score

        Returns:
            UCT score, or None if node has never been visited or T is not
            positive (ln(T) is then undefined)
        """
        visits = node.visit_count
        if visits == 0:
            return None

        parent = node.parent
        if parent is not None and parent is not self._root:
            reference_visits = parent.win_flag
        else:
            reference_visits = node.win_flag

        if reference_visits <= 0:
            return None

        exploitation = (node.score_sum * node.win_flag) / visits
        exploration = self.config.exploration_constant * math.sqrt(
            math.log(reference_visits) / visits
        )

        return exploitation + exploration

    def get_best_moves(self) -> List[Node[GameState]]:
        """
        Rank the root's children by accumulated score.

        Returns:
            Root children sorted by descending score_sum (empty if the root
            is missing, unexpanded or terminal)
        """
        if self._root is None or not self._root.children:
            return []
        return sorted(self._root.children, key=lambda n: n.score_sum, reverse=True)

    def best_move(self) -> Optional[Any]:
        """Return the move of the top-ranked root child, or None."""
        ranked = self.get_best_moves()
        if not ranked:
            return None
        return ranked[0].value.current_move

    @staticmethod
    def _untried_moves(node: Node[GameState], moves: Sequence[Any]) -> List[Any]:
        """Moves not yet represented by one of node's children."""
        children = node.children or ()
        tried = [child.value.current_move for child in children]
        return [move for move in moves if move not in tried]

    def __repr__(self) -> str:
        """String representation of search for debugging."""
        root_visits = self._root.visit_count if self._root is not None else 0
        return (
            f"MCTS(engine={type(self.engine).__name__}, "
            f"root_visits={root_visits}, "
            f"c={self.config.exploration_constant:.3f})"
        )


# -------------------
# Lightweight metrics
# -------------------
_SEARCH_PROFILING_ENABLED = False
_SEARCH_METRICS = {
    'playouts': 0,
    'expansions': 0,
    'simulations': 0,
    'rollout_steps': 0,
    'simulate_total_sec': 0.0,
}


def enable_metrics(enabled: bool = True) -> None:
    global _SEARCH_PROFILING_ENABLED
    _SEARCH_PROFILING_ENABLED = bool(enabled)


def reset_metrics() -> None:
    for k in list(_SEARCH_METRICS.keys()):
        _SEARCH_METRICS[k] = 0.0 if k.endswith('_sec') else 0


def get_metrics() -> dict:
    m = dict(_SEARCH_METRICS)
    sims = m.get('simulations', 0) or 0
    m['avg_rollout_steps'] = m.get('rollout_steps', 0) / (sims or 1)
    m['avg_simulate_ms'] = (m.get('simulate_total_sec', 0.0) / (sims or 1)) * 1000.0
    return m
