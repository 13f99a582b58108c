"""Tools that move the selection to one neighbouring cell in the tree."""

import logging
from itertools import islice
from typing import Callable, Iterator, Optional

from ..parser.hierarchy import CellNode, cell_tree_traversals
from ..parser.navigation import get_parent
from ..storage.notebook_store import NotebookDocument
from .common import cell_tree, load_notebook, make_selection, no_change_result, selection_result

logger = logging.getLogger(__name__)


def _goto_node(document: NotebookDocument, node: Optional[CellNode]) -> dict:
    """Select ``node``'s cell alone; the root and ``None`` leave the selection alone."""
    if node is None or node.is_root:
        return no_change_result(document)
    return selection_result(document, node.cell.index, node.cell.index)


def _goto(
    path: str,
    selection_start: Optional[int],
    selection_end: Optional[int],
    move: Callable[[CellNode], Optional[CellNode]],
) -> dict:
    document, err = load_notebook(path)
    if err:
        return err

    tree = cell_tree(document, make_selection(selection_start, selection_end))
    if tree is None:
        return no_change_result(document)

    target = move(tree)
    logger.debug(
        "Goto from cell %s to %s",
        tree.cell.index,
        target.cell.index if target is not None and not target.is_root else None,
    )
    return _goto_node(document, target)


def _first(traversal: Iterator[CellNode]) -> Optional[CellNode]:
    return next(traversal, None)


def _first_after_start(traversal: Iterator[CellNode]) -> Optional[CellNode]:
    # Depth- and breadth-first traversals yield their starting node first
    return next(islice(traversal, 1, None), None)


def goto_parent_cell(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """Select the headline cell enclosing the selected cell."""
    return _goto(path, selection_start, selection_end, get_parent)


def goto_forward_and_up(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """Select the next cell in document order."""
    return _goto(
        path, selection_start, selection_end,
        lambda t: _first(cell_tree_traversals.forward_and_up(t)),
    )


def goto_backward_and_up(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """Select the previous cell in document order."""
    return _goto(
        path, selection_start, selection_end,
        lambda t: _first(cell_tree_traversals.backward_and_up(t)),
    )


def goto_forward_and_over(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """Select the next sibling, skipping the selected cell's subtree."""
    return _goto(
        path, selection_start, selection_end,
        lambda t: _first(cell_tree_traversals.forward_and_over(t)),
    )


def goto_next_breadth_first(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """Select the next cell of a breadth-first walk of the selected subtree."""
    return _goto(
        path, selection_start, selection_end,
        lambda t: _first_after_start(cell_tree_traversals.breadth_first(t)),
    )


def goto_next_depth_first(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """Select the next cell of a depth-first walk of the selected subtree."""
    return _goto(
        path, selection_start, selection_end,
        lambda t: _first_after_start(cell_tree_traversals.depth_first(t)),
    )
