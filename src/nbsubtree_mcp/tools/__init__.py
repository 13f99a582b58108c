"""MCP tool implementations."""

from .select_cells import select_subtree, select_siblings
from .goto_cell import (
    goto_parent_cell,
    goto_forward_and_up,
    goto_backward_and_up,
    goto_forward_and_over,
    goto_next_breadth_first,
    goto_next_depth_first,
)
from .get_outline import get_outline, get_cell_tree
from .edit_headings import increment_heading, insert_heading_below

__all__ = [
    "select_subtree",
    "select_siblings",
    "goto_parent_cell",
    "goto_forward_and_up",
    "goto_backward_and_up",
    "goto_forward_and_over",
    "goto_next_breadth_first",
    "goto_next_depth_first",
    "get_outline",
    "get_cell_tree",
    "increment_heading",
    "insert_heading_below",
]
