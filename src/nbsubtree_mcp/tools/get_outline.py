"""Tools to get the heading outline of a notebook."""

from typing import Optional

from ..parser.hierarchy import CellNode, build_cell_tree, get_cell_path
from ..parser.markdown import classify_cell, heading_title
from ..parser.navigation import depth_of_tree_node, find_cell_tree, get_parent, subtree_range
from .common import load_notebook


def _outline_children(node: CellNode, headlines_only: bool) -> list[CellNode]:
    if not headlines_only:
        return node.children
    return [child for child in node.children if classify_cell(child.cell).is_headline]


def _node_to_dict(node: CellNode, depth: int, max_depth: Optional[int], headlines_only: bool = False) -> dict:
    cell = node.cell
    cls = classify_cell(cell)
    entry = {
        "index": cell.index,
        "kind": cell.kind,
        "title": heading_title(cell.source),
        "depth": depth,
        "headline": cls.is_headline,
    }
    if cls.is_headline:
        entry["level"] = cls.concluding_depth
    children = _outline_children(node, headlines_only)
    if max_depth is None or depth < max_depth:
        entry["children"] = [
            _node_to_dict(child, depth + 1, max_depth, headlines_only) for child in children
        ]
    else:
        entry["children"] = []
        entry["hidden_children"] = len(children)
    return entry


def get_outline(
    path: str,
    max_depth: Optional[int] = None,
    headlines_only: bool = False,
) -> dict:
    """
    Get the heading outline of a notebook as a nested tree.

    Args:
        path: Path to the notebook
        max_depth: Only expand nodes with tree depth < this value
        headlines_only: Drop non-headline cells from the outline

    Returns:
        Dict with nested tree structure
    """
    document, err = load_notebook(path)
    if err:
        return err

    root = build_cell_tree(document.cells)
    outline = [
        _node_to_dict(child, 0, max_depth, headlines_only)
        for child in _outline_children(root, headlines_only)
    ]

    return {
        "path": str(document.path),
        "cell_count": document.cell_count,
        "outline": outline,
    }


def get_cell_tree(path: str, cell: int) -> dict:
    """
    Get where one cell sits in the notebook's heading tree.

    Args:
        path: Path to the notebook
        cell: Cell index

    Returns:
        Dict with the cell's depth, ancestors, parent and subtree range
    """
    document, err = load_notebook(path)
    if err:
        return err

    target = document.resolve_cell(cell)
    if target is None:
        return {"error": f"Cell not found: {cell}"}

    node = find_cell_tree(target, build_cell_tree(document.cells))
    if node is None:
        return {"error": f"Cell not found: {cell}"}

    parent = get_parent(node)
    selection = subtree_range(node)
    return {
        "path": str(document.path),
        "index": target.index,
        "title": heading_title(target.source),
        "headline": classify_cell(target).is_headline,
        "depth": depth_of_tree_node(node),
        "parent": None if parent is None or parent.is_root else parent.cell.index,
        "ancestors": [c.index for c in get_cell_path(node)[:-1]],
        "children": [child.cell.index for child in node.children],
        "subtree": selection.to_dict(),
    }
