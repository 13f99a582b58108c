"""Notebook cell classification and heading tree utilities."""

from .markdown import Cell, classify_cell
from .hierarchy import build_cell_tree, cell_tree_traversals

__all__ = ["Cell", "classify_cell", "build_cell_tree", "cell_tree_traversals"]
