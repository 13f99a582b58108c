"""Tools that widen the selection to a subtree or to a run of siblings."""

from typing import Optional

from ..parser.navigation import all_siblings_range, sibling_range, subtree_range
from .common import cell_tree, load_notebook, make_selection, no_change_result, selection_result


def select_subtree(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
) -> dict:
    """
    Select the selected cell together with every cell nested under it.

    Args:
        path: Path to the notebook
        selection_start: First selected cell index
        selection_end: End of the selection (exclusive)

    Returns:
        Dict with the new selection, or ``selection: None`` if nothing changed
    """
    document, err = load_notebook(path)
    if err:
        return err

    tree = cell_tree(document, make_selection(selection_start, selection_end))
    if tree is None:
        return no_change_result(document)

    selection = subtree_range(tree)
    return selection_result(document, selection.start, selection.end - 1)


def select_siblings(
    path: str,
    selection_start: Optional[int] = None,
    selection_end: Optional[int] = None,
    include_following: bool = False,
) -> dict:
    """
    Select the siblings of the selected cell.

    By default the selection runs from the first sibling through the end of
    the selected cell's own subtree. With ``include_following`` it runs on
    through the last sibling's subtree.

    Args:
        path: Path to the notebook
        selection_start: First selected cell index
        selection_end: End of the selection (exclusive)
        include_following: Also select the siblings after the selected cell

    Returns:
        Dict with the new selection, or ``selection: None`` if nothing changed
    """
    document, err = load_notebook(path)
    if err:
        return err

    tree = cell_tree(document, make_selection(selection_start, selection_end))
    if tree is None:
        return no_change_result(document)

    selection = all_siblings_range(tree) if include_following else sibling_range(tree)
    return selection_result(document, selection.start, selection.end - 1)
