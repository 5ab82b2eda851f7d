"""
Generic search tree node.

The node is pure bookkeeping: one opaque value, a parent link, an ordered
list of children and the running search statistics. All of the search logic
(UCT selection, expansion, rollouts) lives in mctree.mcts.search.

Children are tri-state, and callers rely on the distinction:
    - None: unexpanded, nobody has enumerated this node's moves yet
    - empty: terminal leaf, the game is over or no legal moves exist
    - non-empty: internal node
"""

from typing import Generic, List, Optional, Tuple, TypeVar

V = TypeVar("V")


class Node(Generic[V]):
    """
    Node in the search tree.

    Attributes:
        value: Opaque value held by the node (a game state for MCTS)
        parent: Node that created this one (None for root)
        children: Read-only tuple of children, or None when unexpanded
        visit_count: Number of backpropagations through this node
        score_sum: Sum of backpropagated heuristic scores
        win_flag: Set to 1 by every backpropagation
    """

    def __init__(self, value: V, parent: Optional["Node[V]"] = None):
        """
        Initialize node.

        Args:
            value: Value to hold; never replaced afterwards
            parent: Parent node (None for root); never reassigned

        Example:
            >>> root = Node("start")
            >>> root.is_root()
            True
            >>> root.children is None
            True
        """
        self._value = value
        self._parent = parent
        self._children: Optional[List["Node[V]"]] = None

        # Search statistics
        self.visit_count = 0
        self.score_sum = 0.0
        self.win_flag = 0

    @property
    def value(self) -> V:
        return self._value

    @property
    def parent(self) -> Optional["Node[V]"]:
        return self._parent

    @property
    def children(self) -> Optional[Tuple["Node[V]", ...]]:
        """Children as a read-only tuple, or None if never expanded."""
        if self._children is None:
            return None
        return tuple(self._children)

    @property
    def mean_score(self) -> float:
        """Average backpropagated score (0.0 before the first visit)."""
        if self.visit_count == 0:
            return 0.0
        return self.score_sum / self.visit_count

    def add_children(self, *nodes: "Node[V]") -> None:
        """
        Append children, creating the child list on first use.

        Called with no arguments on an unexpanded node, this still creates an
        empty child list, which turns the node into a terminal leaf.

        Args:
            *nodes: Children to append, in order

        Example:
            >>> node = Node("state")
            >>> node.add_children()
            >>> node.is_leaf_node()
            True
            >>> node.add_children(Node("next", parent=node))
            >>> len(node.children)
            1
        """
        if self._children is None:
            self._children = []
        self._children.extend(nodes)

    def disown_children(self) -> None:
        """
        Drop all children and return the node to the unexpanded state.

        Example:
            >>> node.disown_children()
            >>> node.children is None
            True
            >>> node.is_leaf_node()
            False
        """
        self._children = None

    def is_leaf_node(self) -> bool:
        """
        Check if node is a terminal leaf.

        Returns:
            True only if the child list exists and is empty. False for
            unexpanded nodes and for internal nodes.
        """
        return self._children is not None and len(self._children) == 0

    def is_root(self) -> bool:
        """Check if node has no parent."""
        return self._parent is None

    def __repr__(self) -> str:
        """String representation of node for debugging."""
        if self._children is None:
            children = "unexpanded"
        else:
            children = str(len(self._children))
        return (
            f"Node(value={self._value!r}, "
            f"visits={self.visit_count}, "
            f"score={self.score_sum:.3f}, "
            f"win={self.win_flag}, "
            f"children={children})"
        )
