"""Queries over a cell tree: subtree membership, ancestry and selection ranges."""

import logging
from typing import Iterable, Optional, Sequence, Union

from .hierarchy import CellNode, Classifier, build_cell_tree, cell_tree_traversals
from .markdown import MARKDOWN_KIND, MAX_HEADING_LEVEL, Cell, classify_cell
from ..storage.notebook_store import CellRange

logger = logging.getLogger(__name__)


class InvalidRangeError(ValueError):
    """Raised when a range is requested for a node that has no parent."""


def get_cell(node: CellNode) -> Optional[Cell]:
    return node.cell


def get_parent(node: Optional[CellNode]) -> Optional[CellNode]:
    """Parent of ``node``; ``None`` for the root or for no node."""
    if node is None:
        return None
    return node.parent


def cell_tree_cells(node: CellNode) -> list[Cell]:
    """Every cell in the subtree of ``node``, in document order."""
    return [
        cell
        for cell in map(get_cell, cell_tree_traversals.depth_first(node))
        if cell is not None
    ]


def find_cell_tree(cell: Union[Cell, int], root: CellNode) -> Optional[CellNode]:
    """Find the node wrapping ``cell`` (a cell or a cell index) below ``root``."""
    index = cell if isinstance(cell, int) else cell.index
    for node in cell_tree_traversals.depth_first(root):
        if not node.is_root and node.cell.index == index:
            return node
    return None


def depth_of_tree_node(node: CellNode) -> int:
    """Number of parent hops to the root: -1 for the root, 0 for its children."""
    depth = -1
    current: Optional[CellNode] = node
    while current is not None:
        depth += 1
        current = get_parent(current)
    return depth


def enclosing_headline(node: CellNode) -> Optional[CellNode]:
    """Nearest enclosing headline node, or ``None`` directly under the root."""
    parent = get_parent(node)
    if parent is None or parent.is_root:
        return None
    return parent


def _require_parent(node: CellNode, what: str) -> CellNode:
    if node.parent is None:
        raise InvalidRangeError(f"The root has no {what}")
    return node.parent


def _last_index(node: CellNode) -> int:
    return cell_tree_traversals.last_descendant(node).cell.index


def subtree_range(node: CellNode) -> CellRange:
    """Inclusive range of cells covered by the subtree of ``node``."""
    _require_parent(node, "subtree range")
    return CellRange.inclusive(node.cell.index, _last_index(node))


def sibling_range(node: CellNode) -> CellRange:
    """From the first sibling of ``node`` through the end of its own subtree."""
    parent = _require_parent(node, "sibling range")
    return CellRange.inclusive(parent.children[0].cell.index, _last_index(node))


def all_siblings_range(node: CellNode) -> CellRange:
    """From the first sibling of ``node`` through the end of its last sibling's subtree."""
    parent = _require_parent(node, "sibling range")
    return CellRange.inclusive(parent.children[0].cell.index, _last_index(parent.children[-1]))


def headline_cells(cells: Iterable[Cell], classify: Classifier = classify_cell) -> list[Cell]:
    """Keep only the cells classified as headlines."""
    return [cell for cell in cells if classify(cell).is_headline]


def heading_level_for_insert(
    cells: Sequence[Cell],
    position: int,
    classify: Classifier = classify_cell,
) -> int:
    """
    Heading level for a new heading cell inserted at ``position``.

    An empty markdown cell at ``position`` would attach to the innermost
    open headline; the new heading goes one level below that headline, or
    at level 1 when nothing encloses it.
    """
    placeholder = Cell(index=position, kind=MARKDOWN_KIND, source="")
    shifted = [
        Cell(index=c.index + 1, kind=c.kind, source=c.source) if c.index >= position else c
        for c in cells
    ]
    shifted.insert(position, placeholder)
    root = build_cell_tree(shifted, classify)
    node = find_cell_tree(position, root)
    headline = enclosing_headline(node) if node is not None else None
    if headline is None:
        return 1
    level = min(classify(headline.cell).concluding_depth + 1, MAX_HEADING_LEVEL)
    logger.debug("Heading level for insert at %s: %s", position, level)
    return level
