"""Build the heading tree of a notebook from its flat list of cells."""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .markdown import Cell, CellClass, classify_cell
from .traversal import Traversals

Classifier = Callable[[Cell], CellClass]


@dataclass(eq=False)
class CellNode:
    """
    A node in the cell tree.

    The root has no cell and no parent. Every other node wraps exactly one
    cell. Only headline cells ever get children.
    """
    cell: Optional[Cell] = None
    parent: Optional["CellNode"] = field(default=None, repr=False)
    children: list["CellNode"] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.cell is None

    def add_child(self, child: "CellNode") -> "CellNode":
        """Attach ``child`` as the last child of this node."""
        child.parent = self
        self.children.append(child)
        return child


def _parent_of(node: CellNode) -> Optional[CellNode]:
    return node.parent


def _children_of(node: CellNode) -> list[CellNode]:
    return node.children


cell_tree_traversals: Traversals[CellNode] = Traversals(_parent_of, _children_of)


def _parse_branch(
    cells: Sequence[Cell],
    classes: Sequence[CellClass],
    i: int,
    parent: CellNode,
) -> int:
    """
    Attach ``cells[i]`` and everything it owns under ``parent``.

    A headline owns every following cell up to, but not including, the next
    headline whose concluding depth is less than or equal to its own.

    Returns the index of the first cell not consumed.
    """
    node = parent.add_child(CellNode(cell=cells[i]))
    is_headline, depth = classes[i]
    if not is_headline:
        return i + 1

    j = i + 1
    while j < len(cells):
        child_is_headline, child_depth = classes[j]
        if child_is_headline and child_depth <= depth:
            break
        j = _parse_branch(cells, classes, j, node)
    return j


def build_cell_tree(cells: Sequence[Cell], classify: Classifier = classify_cell) -> CellNode:
    """
    Build the cell tree for an ordered sequence of cells.

    Returns the root node; its children are the top-level cells.
    """
    # Each cell is classified once; markdown parsing dominates the cost
    classes = [classify(cell) for cell in cells]
    root = CellNode()
    i = 0
    while i < len(cells):
        i = _parse_branch(cells, classes, i, root)
    return root


def flatten_tree(node: CellNode, depth: int = 0) -> list[tuple[Cell, int]]:
    """
    Flatten a tree back to a list of cells with indent depth.

    The root itself contributes nothing; its children are at ``depth``.
    """
    result: list[tuple[Cell, int]] = []
    if node.is_root:
        for child in node.children:
            result.extend(flatten_tree(child, depth))
        return result
    result.append((node.cell, depth))
    for child in node.children:
        result.extend(flatten_tree(child, depth + 1))
    return result


def get_cell_path(node: CellNode) -> list[Cell]:
    """Get the cells from the outermost enclosing headline down to ``node``."""
    path: list[Cell] = []
    current: Optional[CellNode] = node
    while current is not None and not current.is_root:
        path.insert(0, current.cell)
        current = current.parent
    return path
