"""
Abstract game contract consumed by the MCTS engine.

The search engine never looks inside a game. Everything it needs (the start
position, move enumeration, state transitions, heuristic evaluation and the
hidden-information hooks) comes through the two abstract classes defined here.
A concrete game subclasses GameState and GameEngine and hands the engine to
mctree.mcts.MCTS.

Contract summary:
    GameState
        - current_player: whose turn it is in this state
        - current_move: move that produced this state (None for the start)
    GameEngine
        - current_state(): live position, used to seed the search root
        - next_state(state, move): state after applying move
        - next_player(state): whose turn it is
        - legal_move_count(state, simulation_mode)
        - legal_moves(state, simulation_mode)
        - heuristic_score(state, player, stop_state)
        - randomize_hidden_info(state, player)
        - clear_randomized_hidden_info()

Moves and players are opaque to the engine. Moves must support equality
comparison, since the engine uses it to tell tried moves from untried ones.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence


# ============================================================================
# Custom Exceptions
# ============================================================================


class MCTreeException(Exception):
    """Base exception for mctree errors."""

    pass


class SearchStateError(MCTreeException):
    """Raised when the engine is asked for something its state cannot give."""

    pass


class SearchInvariantError(MCTreeException):
    """
    Raised when the search tree is found in an impossible configuration.

    This is a defect, not a recoverable condition: selection reached a node
    that has children yet offered none to descend into.
    """

    def __init__(self, node: Any, reason: str):
        self.node = node
        self.reason = reason
        super().__init__(f"Node {node!r} {reason}")


# ============================================================================
# Game State
# ============================================================================


class GameState(ABC):
    """
    Immutable snapshot of a game position.

    Every state remembers the move that produced it, so the search tree can
    tell which moves have already been tried from a node by looking at the
    states of its children.
    """

    @property
    @abstractmethod
    def current_player(self) -> Any:
        """Player whose turn it is in this state."""
        raise NotImplementedError

    @property
    @abstractmethod
    def current_move(self) -> Any:
        """Move that led to this state, or None for the starting position."""
        raise NotImplementedError


# ============================================================================
# Game Engine
# ============================================================================


class GameEngine(ABC):
    """
    Rules, move generation and evaluation for one game.

    Subclasses implement the abstract methods below. `simulation_mode` lets a
    game enumerate moves differently for disposable rollouts than for the
    persistent search tree (for example sampling a few moves instead of
    listing all of them).
    """

    @abstractmethod
    def current_state(self) -> GameState:
        """Return the live game state the search should start from."""
        raise NotImplementedError

    @abstractmethod
    def next_state(self, state: GameState, move: Any) -> GameState:
        """Return the state resulting from applying move to state."""
        raise NotImplementedError

    @abstractmethod
    def next_player(self, state: Optional[GameState] = None) -> Any:
        """Return whose turn it is in state (the live state if omitted)."""
        raise NotImplementedError

    @abstractmethod
    def legal_move_count(
        self, state: GameState, simulation_mode: bool = False
    ) -> int:
        """Return the number of legal moves from state."""
        raise NotImplementedError

    @abstractmethod
    def legal_moves(
        self, state: GameState, simulation_mode: bool = False
    ) -> Sequence[Any]:
        """Return the legal moves from state. Empty means terminal."""
        raise NotImplementedError

    @abstractmethod
    def heuristic_score(
        self,
        state: GameState,
        player: Any,
        stop_state: Optional[GameState] = None,
    ) -> float:
        """
        Evaluate state from player's perspective.

        Args:
            state: State to evaluate (need not be terminal)
            player: Player whose perspective the score is for
            stop_state: Optional earlier state bounding the evaluation

        Returns:
            Numeric score, higher is better for player
        """
        raise NotImplementedError

    @abstractmethod
    def randomize_hidden_info(self, state: GameState, player: Any) -> None:
        """
        Resolve information hidden from player into one concrete guess.

        Stays in effect until clear_randomized_hidden_info() is called.
        Games without hidden information implement this as a no-op.
        """
        raise NotImplementedError

    @abstractmethod
    def clear_randomized_hidden_info(self) -> None:
        """Undo the most recent randomize_hidden_info() call."""
        raise NotImplementedError

    def peek_state(self, move: Any) -> GameState:
        """Return the state reached by playing move from the live state."""
        return self.next_state(self.current_state(), move)

    def move(self, move: Any) -> GameState:
        """
        Apply move to the live game and return the new live state.

        Only games that drive real play need to override this; the search
        itself never calls it.
        """
        raise NotImplementedError(
            f"{type(self).__name__} does not support applying moves"
        )
