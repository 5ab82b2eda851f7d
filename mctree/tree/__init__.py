"""Generic search tree structure used by the MCTS engine."""

from mctree.tree.node import Node

__all__ = ["Node"]
