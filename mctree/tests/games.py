"""
Small scripted games used by the mctree test suite.

Each game records every call into the contract so tests can check the order
and pairing of determinization hooks as well as search results.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from mctree.game.core import GameEngine, GameState


@dataclass(frozen=True)
class PathState(GameState):
    """State identified by the sequence of moves played from the start."""

    path: Tuple[Any, ...] = ()
    player: str = "P1"

    @property
    def current_player(self) -> str:
        return self.player

    @property
    def current_move(self) -> Any:
        return self.path[-1] if self.path else None

    @property
    def depth(self) -> int:
        return len(self.path)


class RecordingEngine(GameEngine):
    """
    Base fake game that logs contract calls.

    Subclasses only provide moves_for() and score_for().
    """

    def __init__(self):
        self.calls: List[str] = []
        self.hidden_active = False
        self.randomize_count = 0
        self.clear_count = 0
        self.moves_while_hidden = 0

    def moves_for(self, state: PathState, simulation_mode: bool) -> List[Any]:
        raise NotImplementedError

    def score_for(self, state: PathState, player: Any) -> float:
        raise NotImplementedError

    def current_state(self) -> PathState:
        self.calls.append("current_state")
        return PathState()

    def next_state(self, state: PathState, move: Any) -> PathState:
        self.calls.append("next_state")
        return PathState(state.path + (move,), self.next_player(state))

    def next_player(self, state: Optional[PathState] = None) -> str:
        if state is None:
            return "P1"
        return "P2" if state.player == "P1" else "P1"

    def legal_move_count(self, state: PathState, simulation_mode: bool = False) -> int:
        return len(self.moves_for(state, simulation_mode))

    def legal_moves(
        self, state: PathState, simulation_mode: bool = False
    ) -> Sequence[Any]:
        self.calls.append("legal_moves_sim" if simulation_mode else "legal_moves")
        if self.hidden_active:
            self.moves_while_hidden += 1
        return self.moves_for(state, simulation_mode)

    def heuristic_score(
        self, state: PathState, player: Any, stop_state: Optional[PathState] = None
    ) -> float:
        self.calls.append("heuristic_score")
        return self.score_for(state, player)

    def randomize_hidden_info(self, state: PathState, player: Any) -> None:
        assert not self.hidden_active, "randomize_hidden_info called twice"
        self.calls.append("randomize")
        self.hidden_active = True
        self.randomize_count += 1

    def clear_randomized_hidden_info(self) -> None:
        assert self.hidden_active, "clear called without randomize"
        self.calls.append("clear")
        self.hidden_active = False
        self.clear_count += 1


class ChainGame(RecordingEngine):
    """Exactly one legal move ("step") until `length` moves are played."""

    def __init__(self, length: int = 5, score: float = 0.25):
        super().__init__()
        self.length = length
        self.score = score

    def moves_for(self, state, simulation_mode):
        return ["step"] if state.depth < self.length else []

    def score_for(self, state, player):
        return self.score


class TwoMoveGame(RecordingEngine):
    """Move A scores 1.0, move B scores 0.0; the game ends after one move."""

    def moves_for(self, state, simulation_mode):
        return ["A", "B"] if state.depth == 0 else []

    def score_for(self, state, player):
        return 1.0 if state.path and state.path[0] == "A" else 0.0


class NoMoveGame(RecordingEngine):
    """The starting position is already terminal."""

    def moves_for(self, state, simulation_mode):
        return []

    def score_for(self, state, player):
        return 0.5


class BranchingGame(RecordingEngine):
    """
    `width` moves per turn for `depth` turns.

    Any line opening with the favourite move scores 1.0, every other line
    scores 0.0, so the favourite first move should rank highest.
    """

    def __init__(self, width: int = 3, depth: int = 3, favourite: int = 0):
        super().__init__()
        self.width = width
        self.depth = depth
        self.favourite = favourite

    def moves_for(self, state, simulation_mode):
        if state.depth >= self.depth:
            return []
        return list(range(self.width))

    def score_for(self, state, player):
        return 1.0 if state.path and state.path[0] == self.favourite else 0.0


class HiddenDrawGame(RecordingEngine):
    """
    Draw game whose rollout moves depend on a randomized hidden card.

    Search moves are always ["draw", "pass"]. In simulation mode the only
    rollout move is the hidden card, which exists only while hidden
    information is randomized.
    """

    def __init__(self):
        super().__init__()
        self.hidden_card: Optional[str] = None

    def randomize_hidden_info(self, state, player):
        super().randomize_hidden_info(state, player)
        self.hidden_card = f"card{self.randomize_count}"

    def clear_randomized_hidden_info(self):
        super().clear_randomized_hidden_info()
        self.hidden_card = None

    def moves_for(self, state, simulation_mode):
        if state.depth >= 2:
            return []
        if simulation_mode:
            if self.hidden_card is None:
                raise AssertionError("rollout moves requested outside determinization")
            return [self.hidden_card]
        return ["draw", "pass"]

    def score_for(self, state, player):
        return 1.0 if "draw" in state.path else 0.0


class FailingRolloutGame(ChainGame):
    """Chain game whose rollout move generation raises."""

    def moves_for(self, state, simulation_mode):
        if simulation_mode:
            raise RuntimeError("rollout failure")
        return super().moves_for(state, simulation_mode)
